"""
Elite Logistic Backend — Health & Diagnostic Routes
=====================================================

What:  Liveness endpoint and a diagnostic "is the API up" endpoint.
Why:   The web client shows a server status banner driven by /api/health;
       monitors and load balancers poll the same route.
How:   Pure in-process responses. Neither route touches the store, so they
       answer even while the database is unreachable.
"""

import platform
from datetime import datetime, timezone

from fastapi import APIRouter

from app import __version__
from app.config import settings
from app.schemas.shipment import DiagnosticResponse, HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="OK",
        server=settings.server_name,
        version=__version__,
        python_version=platform.python_version(),
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/test",
    response_model=DiagnosticResponse,
    summary="Diagnostic ping",
)
async def diagnostic() -> DiagnosticResponse:
    return DiagnosticResponse(
        message="Elite Logistic API is working!",
        version=__version__,
        python_version=platform.python_version(),
        timestamp=datetime.now(timezone.utc),
    )
