import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from splitboard.db.session import get_db
from splitboard.core.jwt_config import decode_token, get_token_from_cookie, session_cookie_deletion_headers
from splitboard.services.user_queries import get_user_by_id
from splitboard.models.group import Group
from splitboard.models.group_member import GroupMember

logger = logging.getLogger(__name__)


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)):
    token = get_token_from_cookie(request=request)
    payload = decode_token(token)
    user_id = payload.get("sub")

    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid authentication credentials")

    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid authentication credentials")

    user = await get_user_by_id(db, user_id)

    if user is None:
        raise HTTPException(
            status_code=401,
            detail="User not found",
            headers=session_cookie_deletion_headers(),
        )

    return user

async def get_group_or_404(db: AsyncSession, group_id: int) -> Group:
    res = await db.execute(select(Group).where(Group.id == group_id))
    group = res.scalar_one_or_none()

    if not group:
        raise HTTPException(404, "Group not found")

    return group

async def is_group_member(db: AsyncSession, group_id: int, user_id: int) -> bool:
    q = select(GroupMember.id).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    )
    return (await db.scalar(q)) is not None

async def check_group_membership(db: AsyncSession, group_id: int, user_id: int) -> Group:
    """
    The creator always has access, even when legacy data never stored
    their membership row.
    """
    group = await get_group_or_404(db, group_id)

    if group.created_by == user_id:
        return group

    if not await is_group_member(db, group_id, user_id):
        logger.info("User %s denied access to group %s", user_id, group_id)
        raise HTTPException(403, "Not a member of this group")

    return group
