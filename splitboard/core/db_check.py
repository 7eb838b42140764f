import asyncio
import logging

from sqlalchemy import text

from splitboard.db.session import Base, engine

logger = logging.getLogger(__name__)


async def wait_for_db(retries=5, delay=2.0):
    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Splitboard : Database connected")
            return
        except Exception as e:
            logger.warning(
                "Splitboard : Database not ready | [ %s/%s ] %s → retrying...",
                i + 1, retries, e,
            )
            await asyncio.sleep(delay)

    raise RuntimeError("Database unreachable after retries")


async def create_tables():
    # models must be imported so their tables are registered on Base
    from splitboard.models import group, group_member, transaction, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
