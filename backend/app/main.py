"""FastAPI application factory and main entry point."""

import asyncio
import os
import subprocess
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, get_settings
from app.core.logging import get_logger, level_for, setup_logging
from app.solar_alerts.application.use_cases.kp_status import ViewerLatchRegistry
from app.solar_alerts.domain.entities.subscriber import AlertSettings
from app.solar_alerts.infrastructure.db.session import dispose_engine
from app.solar_alerts.infrastructure.external.noaa_kp_client import NoaaKpClient
from app.solar_alerts.infrastructure.repositories.memory_settings_store import (
    InMemorySettingsStore,
)
from app.solar_alerts.infrastructure.tasks.bootstrap import (
    run_alert_cycle,
    validate_alert_configuration,
)
from app.solar_alerts.presentation.api import alert_settings, health, kp

settings = get_settings()
logger = get_logger(__name__)


def run_migrations() -> None:
    """Apply Alembic migrations from the backend directory."""
    backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    alembic_ini_path = os.path.join(backend_dir, "alembic.ini")

    if not os.path.exists(alembic_ini_path):
        logger.warning(f"⚠️ alembic.ini not found at {alembic_ini_path}, skipping migrations")
        return

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
        timeout=60,
    )
    if result.returncode == 0:
        logger.info("✅ Database migrations completed")
        if result.stdout:
            logger.debug(f"Migration output: {result.stdout}")
    else:
        logger.error(f"⚠️ Migration failed: {result.stderr}")


async def alert_check_loop(app_settings: Settings) -> None:
    """Background task running an alert cycle now and then on every interval."""
    while True:
        try:
            report = await run_alert_cycle(app_settings)
            if report.aborted:
                logger.warning(f"Alert cycle aborted: {report.abort_reason}")
        except Exception as e:
            logger.error(f"Alert cycle error: {e}")
        await asyncio.sleep(app_settings.alert_check_interval_seconds)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    setup_logging(level=level_for(settings.debug))
    logger.info("Solar Dash alerts service starting up...")
    logger.info(f"Environment: {settings.app_env}")

    if settings.is_production:
        try:
            logger.info("Running database migrations...")
            await asyncio.to_thread(run_migrations)
        except Exception as e:
            logger.error(f"⚠️ Migration error (continuing anyway): {e}")

    alert_task = None
    if settings.run_embedded_scheduler:
        # Missing credentials abort startup here
        await validate_alert_configuration(settings)
        logger.info(
            f"Starting alert checker background task "
            f"(every {settings.alert_check_interval_seconds}s)..."
        )
        alert_task = asyncio.create_task(alert_check_loop(settings))

    yield

    # Shutdown
    logger.info("Solar Dash alerts service shutting down...")
    if alert_task is not None:
        alert_task.cancel()
        try:
            await alert_task
        except asyncio.CancelledError:
            logger.info("Alert checker task cancelled")
    await app.state.kp_source.close()
    await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Solar Dash Alerts",
        description="Geomagnetic (Kp index) alerting for the Solar Dash dashboard",
        version=health.VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.is_development else None,
        redoc_url="/api/redoc" if settings.is_development else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Process-local state shared by the viewer endpoints
    app.state.kp_source = NoaaKpClient(
        url=settings.kp_index_url, timeout=settings.io_timeout_seconds
    )
    app.state.demo_settings = InMemorySettingsStore()
    app.state.viewer_latches = ViewerLatchRegistry()
    app.state.default_alert_settings = AlertSettings(
        kp_threshold=settings.default_kp_threshold
    )

    # API routes
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(kp.router, prefix="/api", tags=["Kp"])
    app.include_router(alert_settings.router, prefix="/api", tags=["Alert Settings"])

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
