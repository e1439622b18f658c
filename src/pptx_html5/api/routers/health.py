from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from ... import __version__
from ..schemas import HealthStatus, ServiceInfo

router = APIRouter(tags=["health"])


@router.get("/", summary="Service information", response_model=ServiceInfo)
def service_info() -> ServiceInfo:
    return ServiceInfo(
        message="PPTX to HTML5 Converter Service",
        version=__version__,
        endpoints={
            "POST /convert": "Upload and convert PPTX file to HTML5",
            "GET /health": "Health check endpoint",
        },
    )


@router.get("/health", summary="Health check", response_model=HealthStatus)
def health() -> HealthStatus:
    return HealthStatus(status="healthy", timestamp=datetime.now(timezone.utc).isoformat())


__all__ = ["router"]
