"""Health check API schemas."""

from pydantic import BaseModel, Field


class LedgerStatus(BaseModel):
    """Ledger part of the health response."""

    connected: bool
    backend: str
    account: str | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    """Response for GET /health.

    status is "ok" when the ledger answers and "degraded" otherwise; the
    process itself is alive in both cases.
    """

    status: str = Field(default="ok", description="Service status")
    ledger: LedgerStatus
