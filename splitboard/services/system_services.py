import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from splitboard.models.user import User
from splitboard.models.group import Group
from splitboard.models.transaction import Transaction

logger = logging.getLogger(__name__)


async def check_db_service(db: AsyncSession):
    try:
        await db.execute(select(1))
        return {"db": True, "message": "Database is connected"}
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        return {"db": False, "error": str(e)}

async def system_health():
    return {
        "status": "ok"
    }

async def system_metrics(db: AsyncSession):
    users_q = select(func.count(User.id))
    groups_q = select(func.count(Group.id))
    transactions_q = select(func.count(Transaction.id))

    users_res = await db.execute(users_q)
    groups_res = await db.execute(groups_q)
    transactions_res = await db.execute(transactions_q)

    return {
        "users": users_res.scalar(),
        "groups": groups_res.scalar(),
        "transactions": transactions_res.scalar()
    }
