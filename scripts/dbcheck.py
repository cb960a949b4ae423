#!/usr/bin/env python
"""
scripts/dbcheck.py
──────────────────
Connectivity and schema check against DATABASE_URL.

Usage:
    python scripts/dbcheck.py

Reports whether the database answers, whether the assets / asset_logs
tables exist, and which Alembic revision is applied. Exits non-zero when
the database is unreachable or a table is missing.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# Allow running from repo root
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine

from ark.core.config import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
log = logging.getLogger(__name__)

REQUIRED_TABLES = ("assets", "asset_logs")


async def main() -> int:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            log.info("[DBCheck] connection ok")

            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            missing = [t for t in REQUIRED_TABLES if t not in tables]
            for t in REQUIRED_TABLES:
                log.info(f"[DBCheck] table {t}: {'present' if t not in missing else 'MISSING'}")

            if "alembic_version" in tables:
                revision = (await conn.execute(text("SELECT version_num FROM alembic_version"))).scalar()
                log.info(f"[DBCheck] alembic revision: {revision}")
            else:
                log.warning("[DBCheck] alembic_version table not found; run `alembic upgrade head`")
    except SQLAlchemyError as e:
        log.error(f"[DBCheck] database unreachable: {e}")
        return 1
    finally:
        await engine.dispose()

    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
