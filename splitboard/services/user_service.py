import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException

from splitboard.models.user import User
from splitboard.schemas.user import UserRegister
from splitboard.core.security import hash_password, verify_password
from splitboard.core.logging_config import log_db_change
from splitboard.services.user_queries import get_user_by_email

logger = logging.getLogger(__name__)


async def create_user(db: AsyncSession, email: str, password: str, nickname: str):
    user = User(
        email = email,
        nickname = nickname,
        password_hash = hash_password(password)
    )

    db.add(user)

    try:
        await db.commit()
    except IntegrityError:
        # concurrent registration of the same email
        await db.rollback()
        raise HTTPException(400, "User already exists. Please login.")

    await db.refresh(user)

    log_db_change("USER_REGISTERED", userId=user.id, email=user.email)
    return user

async def register_or_login(db: AsyncSession, data: UserRegister):
    """
    Single entry point for the sign-in form.

    ``mode`` pins the intent; when it is missing an existing email logs
    in and an unknown one registers.

    Returns:
        (user, created)
    """
    existing = await get_user_by_email(db, data.email)

    if existing:
        if data.mode == "register":
            raise HTTPException(400, "User already exists. Please login.")

        if not verify_password(data.password, existing.password_hash):
            raise HTTPException(401, "Invalid password")

        logger.info("User %s logged in", existing.id)
        return existing, False

    if data.mode == "login":
        raise HTTPException(400, "User not found. Please register.")

    nickname = (data.nickname or "").strip()
    if not nickname:
        raise HTTPException(400, "Nickname is required for registration")

    user = await create_user(db, data.email, data.password, nickname)
    return user, True
