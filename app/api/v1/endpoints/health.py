"""Health check endpoint: liveness plus ledger connectivity."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_ledger_gateway
from app.application.services.ledger_gateway import LedgerGateway
from app.schemas.health import HealthResponse, LedgerStatus

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check(
    ledger: Annotated[LedgerGateway, Depends(get_ledger_gateway)],
) -> HealthResponse:
    """Return ok when the ledger answers, degraded otherwise (always 200)."""
    health = await ledger.health_check()
    return HealthResponse(
        status="ok" if health.connected else "degraded",
        ledger=LedgerStatus(
            connected=health.connected,
            backend=health.backend,
            account=health.account,
            message=health.message,
        ),
    )
