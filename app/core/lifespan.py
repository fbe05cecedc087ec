"""Application lifespan: build shared resources at startup, release them at shutdown.

Shared per process, on app.state:
- ledger_client / ledger_gateway: the one connection to the ledger.
- artifact_store: where encrypted documents are written.
Request handlers reach them through app.api.v1.dependencies.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.ledger_gateway import LedgerGateway
from app.core.config import Settings, get_settings
from app.infrastructure.external.ledger import LedgerFactory
from app.infrastructure.external.storage import StorageFactory
from app.shared.telemetry.telemetry import TelemetryConfig, get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


def _start_telemetry(app: FastAPI, settings: Settings) -> None:
    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    telemetry.instrument_fastapi(app)
    set_telemetry(telemetry)


def _stop_telemetry() -> None:
    telemetry = get_telemetry()
    if telemetry is None:
        return
    telemetry.shutdown()
    set_telemetry(None)
    logger.info("Telemetry shut down")


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: ledger, artifact store, telemetry. Shutdown in reverse.

    An unreachable ledger does not stop startup; it is logged here and
    reported by /health, and each request fails with LEDGER_UNAVAILABLE.
    """
    settings = get_settings()

    client = LedgerFactory.create_ledger_client(settings)
    app.state.ledger_client = client
    app.state.ledger_gateway = LedgerGateway(
        client, timeout_seconds=settings.ledger_timeout_seconds
    )
    app.state.artifact_store = StorageFactory.create_artifact_store(settings)

    health = await app.state.ledger_gateway.health_check()
    if health.connected:
        logger.info("Ledger ready: backend=%s account=%s", health.backend, health.account)
    else:
        logger.warning("Ledger not ready (backend=%s): %s", health.backend, health.message)

    if settings.telemetry_enabled:
        _start_telemetry(app, settings)

    try:
        yield
    finally:
        _stop_telemetry()
        gateway = getattr(app.state, "ledger_gateway", None)
        if gateway is not None:
            await gateway.close()
            logger.info("Ledger client closed")
        app.state.ledger_gateway = None
        app.state.ledger_client = None
