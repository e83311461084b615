import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import api, health, ui
from .services.rates.base import RatesUnavailableError
from .services.rates.table_service import RateTableService, build_rate_table_service


def create_app(
    settings_override: Settings | None = None,
    rate_table_service: RateTableService | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., static provider). Falls back to cached
    get_settings().
    rate_table_service: inject a prebuilt service (e.g., wrapping a stub
    provider); otherwise one is built from the settings.
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    # One rate table per application session; fetched lazily on first use
    app.state.settings = settings
    app.state.rate_table_service = rate_table_service or build_rate_table_service(
        settings
    )
    logging.getLogger("fxwidget").info(
        "app created",
        extra={
            "fields": {
                "rate_provider": app.state.rate_table_service.provider_name,
                "base_currency": settings.base_currency,
            }
        },
    )

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(RatesUnavailableError, errors.rates_unavailable_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(api.router)
    app.include_router(ui.router)

    return app


app = create_app()
