"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Ledger backend requirements are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_ledger_and_storage (contract address and RPC URL when the
    web3 ledger backend is selected, storage root always).
    """

    # App
    app_name: str = "docledger"
    app_version: str = "1.0.0"
    debug: bool = False

    # Ledger: "memory" (in-process contract, dev/tests) or "web3" (EVM JSON-RPC node)
    ledger_backend: str = "memory"
    ledger_rpc_url: str = "http://127.0.0.1:7545"
    ledger_contract_address: str = ""
    # Account that signs registerDocument; empty = first account exposed by the node.
    ledger_sender_account: str = ""
    ledger_gas_limit: int = 500_000
    # Upper bound for every single ledger call (read or write incl. receipt wait).
    ledger_timeout_seconds: float = 30.0
    # Account recorded as uploader by the in-memory ledger.
    ledger_memory_account: str = "0x0000000000000000000000000000000000000001"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Encrypted artifact storage
    storage_backend: str = "local"
    storage_root: str = "/var/docledger/artifacts"

    # Upload policy
    max_upload_size: int = 10 * 1024 * 1024  # 10MB
    allowed_extensions: str = "pdf,jpg,jpeg,png,doc,docx"
    allowed_mime_types: str = (
        "application/pdf,image/jpeg,image/png,application/msword,"
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )

    # Public verification page (document_id is appended)
    verification_base_url: str = "http://localhost:3000/verify"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    # Rate limits per client address (SlowAPI syntax)
    upload_rate_limit: str = "30/minute"
    verify_rate_limit: str = "120/minute"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_ledger_and_storage(self) -> "Settings":
        """Validate ledger backend and storage configuration.

        - web3: LEDGER_RPC_URL and LEDGER_CONTRACT_ADDRESS required.
        - memory: nothing extra (state lives for the process lifetime only).
        - telemetry (when enabled): known exporter; otlp needs an endpoint.
        """
        if self.ledger_backend == "web3":
            if not self.ledger_rpc_url:
                raise ValueError(
                    "LEDGER_RPC_URL is required when ledger_backend is 'web3'."
                )
            if not self.ledger_contract_address:
                raise ValueError(
                    "LEDGER_CONTRACT_ADDRESS is required when ledger_backend is 'web3'. "
                    "Deploy the DocumentVerification contract and set its address."
                )
        elif self.ledger_backend != "memory":
            raise ValueError(
                f"ledger_backend must be 'memory' or 'web3', got: {self.ledger_backend!r}"
            )
        if self.ledger_timeout_seconds <= 0:
            raise ValueError("LEDGER_TIMEOUT_SECONDS must be positive")
        if self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. Must be: 'local'"
            )
        if not self.storage_root:
            raise ValueError("STORAGE_ROOT is required")
        if self.telemetry_enabled:
            if self.telemetry_exporter not in ("console", "otlp", "none"):
                raise ValueError(
                    "TELEMETRY_EXPORTER must be 'console', 'otlp' or 'none'"
                )
            if self.telemetry_exporter == "otlp" and not self.telemetry_otlp_endpoint:
                raise ValueError(
                    "TELEMETRY_OTLP_ENDPOINT is required when TELEMETRY_EXPORTER is 'otlp'"
                )
        return self

    @property
    def allowed_extension_set(self) -> frozenset[str]:
        """Lowercased extensions without the leading dot."""
        return frozenset(
            e.strip().lower().lstrip(".")
            for e in self.allowed_extensions.split(",")
            if e.strip()
        )

    @property
    def allowed_mime_type_set(self) -> frozenset[str]:
        return frozenset(
            m.strip().lower() for m in self.allowed_mime_types.split(",") if m.strip()
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
