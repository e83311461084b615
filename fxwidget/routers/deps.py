from fastapi import Request

from fxwidget.core.config import Settings
from fxwidget.services.rates.table_service import RateTableService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_table_service(request: Request) -> RateTableService:
    return request.app.state.rate_table_service
