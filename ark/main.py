import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ark.api.v1.router import api_router
from ark.core.config import settings
from ark.core.database import get_db, ping_database
from ark.core.errors import register_exception_handlers
from ark.core.logging import RequestLoggingMiddleware
from ark.core.startup import lifespan
from ark.schemas.schemas import HealthOut

log = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Multi-tenant inventory of homelab assets and their maintenance logs.",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/health", response_model=HealthOut)
async def health(db: AsyncSession = Depends(get_db)):
    try:
        database = "ok" if await ping_database(db) else "unavailable"
    except SQLAlchemyError as e:
        log.warning(f"[Health] database ping failed: {e}")
        database = "unavailable"
    return HealthOut(status="ok", version=settings.VERSION, database=database)
