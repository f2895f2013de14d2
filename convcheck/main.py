from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import health, rates
from .services.rates.stub_store import RateStore


def create_app(
    settings_override: Settings | None = None, store: RateStore | None = None
) -> FastAPI:
    """Rate stub service factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    store: seed table; defaults to settings.stub_rates_file or the static snapshot.
    """
    settings = settings_override or get_settings()
    init_logging(debug=settings.debug)

    if store is None:
        if settings.stub_rates_file is not None:
            store = RateStore.from_file(
                settings.stub_rates_file, base=settings.stub_base_currency
            )
        else:
            store = RateStore.default()

    app = FastAPI(
        title=f"{settings.app_name} rate stub",
        debug=settings.debug,
        version=settings.version,
    )
    app.state.settings = settings
    app.state.rate_store = store

    # Middleware (scenario id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    app.include_router(health.router)
    app.include_router(rates.router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.version}

    return app
