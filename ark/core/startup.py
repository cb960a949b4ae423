import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ark.core.config import settings
from ark.core.database import engine
from ark.core.logging import setup_logging

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ──────────────────────────────────────────────────────────
    setup_logging(settings.LOG_LEVEL)
    log.info(
        f"[Startup] {settings.PROJECT_NAME} v{settings.VERSION} "
        f"db={engine.url.render_as_string(hide_password=True)} jwt_alg={settings.JWT_ALGORITHM}"
    )

    yield  # Application runs here

    # ── Shutdown ─────────────────────────────────────────────────────────
    await engine.dispose()
    log.info("[Startup] connection pool closed, shutting down.")
