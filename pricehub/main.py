"""
PriceHub - FastAPI Application

Main entry point for the API.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from pricehub.api import router as api_router
from pricehub.core.config import Settings, settings as default_settings
from pricehub.core.logging import configure_logging
from pricehub.services.base import ServiceError
from pricehub.services.container import ServiceContainer, build_services

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves the process as {ok: false, error}."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        logger.warning(f"{request.url.path} failed: {exc}")
        return _error(exc.http_status, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "invalid request") if errors else "invalid request"
        return _error(400, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return _error(500, str(exc) or exc.__class__.__name__)


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Build the application.

    Pass `services` to run against a pre-built container (tests); otherwise
    one is built at start-up from `settings`.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        configure_logging(settings.log_level)
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Environment: {settings.environment}")

        owns_services = services is None
        app.state.services = services or build_services(settings)

        yield

        # Shutdown
        logger.info("Shutting down...")
        if owns_services:
            await app.state.services.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    PriceHub Crypto Price & Analysis API

    ## Architecture
    - **Price Resolution**: Binance → CoinCap → CoinPaprika → CoinGecko fallback chain
    - **FX**: USD → any quote currency, cached
    - **Indicator Engine**: SMA, RSI, MACD, trend slope, volatility (NumPy)
    - **Signal Composer**: deterministic score → signal, confidence, 24h band
    - **Narrative**: optional LLM summary, never affects the numbers

    Educational use only. This is NOT financial advice.
    """,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials="*" not in settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Root endpoint."""
        return f"✅ {settings.app_name} running"

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"ok": True}

    return app


app = create_app()
