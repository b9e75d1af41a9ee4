"""Campus Coffee API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus_coffee import __version__
from campus_coffee.core.config import settings
from campus_coffee.core.exceptions import register_exception_handlers
from campus_coffee.db.base import engine, init_models
from campus_coffee.middleware.request_log import RequestLogMiddleware
from campus_coffee.routers.admin import router as admin_router
from campus_coffee.routers.pos import router as pos_router
from campus_coffee.schemas.common import HealthResponse

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.is_development else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    await init_models()
    logger.info("%s started (env=%s)", settings.app_name, settings.app_env)
    yield
    await engine.dispose()


def create_app(enable_admin: Optional[bool] = None) -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=_lifespan,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- POS routes (/api/pos/*) ---
    app.include_router(pos_router)

    # --- Admin routes, off by default ---
    if enable_admin is None:
        enable_admin = settings.admin_endpoints_enabled
    if enable_admin:
        logger.warning("Admin endpoints enabled: DELETE /api/admin/pos clears all data")
        app.include_router(admin_router)

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env, version=__version__)

    return app


app = create_app()
