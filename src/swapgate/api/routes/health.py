"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from swapgate.api.responses import ok_response

router = APIRouter()


def _utc_now_iso() -> str:
    """UTC timestamp with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/", response_class=PlainTextResponse)
async def banner(request: Request) -> PlainTextResponse:
    """Plain text service banner."""
    return PlainTextResponse(f"{request.app.state.settings.app_name} is running")


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Basic health check endpoint."""
    return ok_response(service=request.app.state.settings.app_name, time=_utc_now_iso())
