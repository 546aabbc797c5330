"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from fastapi.responses import PlainTextResponse

from catalog_cron.interface.dependencies import get_use_case
from catalog_cron.interface.schemas import ErrorResponse
from catalog_cron.services.run_maintenance import RunMaintenanceUseCase

router = APIRouter()


@router.api_route(
    "/api/cron",
    methods=["GET", "POST"],
    response_class=PlainTextResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or wrong bearer token"},
        500: {"model": ErrorResponse, "description": "Catalog database error"},
        502: {"model": ErrorResponse, "description": "Cache, newsletter or search-index error"},
    },
)
async def run_cron(
    authorization: str | None = Header(default=None),
    use_case: RunMaintenanceUseCase = Depends(get_use_case),
) -> PlainTextResponse:
    """Run one maintenance pass; called by the scheduler."""
    await use_case.execute(authorization)
    return PlainTextResponse("OK")
