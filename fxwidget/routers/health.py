from fastapi import APIRouter, Depends

from fxwidget.core.config import Settings
from fxwidget.services.rates.table_service import RateTableService
from .deps import get_app_settings, get_rate_table_service

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
async def health(
    settings: Settings = Depends(get_app_settings),
    svc: RateTableService = Depends(get_rate_table_service),
):
    # Does not trigger a fetch; only reports whether the table is loaded yet
    return {
        "status": "ok",
        "version": settings.version,
        "rate_provider": svc.provider_name,
        "rates_loaded": svc.loaded,
    }
