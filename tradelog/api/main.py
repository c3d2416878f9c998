"""Entrypoint for the TradeLog FastAPI application."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradelog import __version__
from tradelog.api.dependencies import AccessGate
from tradelog.api.errors import register_error_handlers
from tradelog.api.routes import build_api_router
from tradelog.config import AppSettings, load_settings
from tradelog.core.logging import setup_logging
from tradelog.core.telemetry import setup_telemetry
from tradelog.db import Database
from tradelog.ports import CredentialIssuer
from tradelog.schemas import HealthResponse
from tradelog.security import JwtCredentialIssuer
from tradelog.services import AuthService, TradeService
from tradelog.stores import SqlLedgerStore, SqlUserStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI, db: Database):
    try:
        await db.create_all()
    except Exception:
        logger.exception("Failed to initialise database schema at %s", db.engine.url.render_as_string())
        raise
    logger.info("Database schema ready")
    yield
    await db.dispose()


def create_app(
    settings: AppSettings | None = None,
    *,
    database: Database | None = None,
    credentials: CredentialIssuer | None = None,
) -> FastAPI:
    """Wire settings, stores and services into a FastAPI application.

    Without explicit ``settings`` the environment is read here; missing JWT
    secrets raise :class:`ConfigurationError` before anything starts.
    """

    settings = settings or load_settings()
    setup_logging(settings.log_level)
    logger.info("TradeLog configuration: %s", settings.dict_for_logging())

    database_instance = database or Database(settings.db_url)
    credentials = credentials or JwtCredentialIssuer.from_settings(settings)

    auth_service = AuthService(
        SqlUserStore(database_instance),
        credentials,
        admin_secret=settings.admin_secret,
        timeout=settings.store_timeout_seconds,
    )
    trade_service = TradeService(
        SqlLedgerStore(database_instance),
        timeout=settings.store_timeout_seconds,
        serialize=settings.serialize_trades,
    )
    gate = AccessGate(auth_service)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lambda app: _lifespan(app, database_instance),
    )
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(build_api_router(settings, auth_service, trade_service, gate))

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        database_up = await database_instance.ping()
        return HealthResponse(status="ok" if database_up else "degraded", db="up" if database_up else "down")

    setup_telemetry(app, settings, engine=database_instance.engine)
    return app


__all__ = ["create_app"]
