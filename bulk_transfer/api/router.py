"""Root API router for REST endpoints."""
from fastapi import APIRouter, Depends

from bulk_transfer.api.endpoints import transfers
from bulk_transfer.core.settings import Settings, get_settings

router = APIRouter()


@router.get("/health", tags=["health"], summary="Health check")
def health_check(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Return basic service health information."""

    return {"service_name": settings.service_name, "health": "OK"}


router.include_router(transfers.router)
