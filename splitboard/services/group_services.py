import logging
import secrets

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from splitboard.core.dependencies import check_group_membership, get_group_or_404, is_group_member
from splitboard.core.logging_config import log_db_change
from splitboard.models.group import Group
from splitboard.models.group_member import GroupMember
from splitboard.models.transaction import Transaction, TransactionShare
from splitboard.models.user import User
from splitboard.services.user_queries import get_user_by_id

logger = logging.getLogger(__name__)

INVITE_CODE_BYTES = 4  # 8 hex chars


def generate_invite_code() -> str:
    return secrets.token_hex(INVITE_CODE_BYTES)

async def create_group(db: AsyncSession, name: str, creator_id: int):
    group = Group(name=name, created_by=creator_id, invite_code=generate_invite_code())
    db.add(group)
    await db.flush()

    member = GroupMember(group_id=group.id, user_id=creator_id)
    db.add(member)

    await db.commit()
    await db.refresh(group)

    log_db_change("GROUP_CREATED", groupId=group.id, name=group.name, createdBy=creator_id)
    return group

async def join_group(db: AsyncSession, invite_code: str, user_id: int):
    q = select(Group).where(Group.invite_code == invite_code.strip())
    group = (await db.execute(q)).scalar_one_or_none()

    if not group:
        raise HTTPException(404, "Group not found")

    if await is_group_member(db, group.id, user_id):
        raise HTTPException(400, "Already a member of this group")

    db.add(GroupMember(group_id=group.id, user_id=user_id))

    try:
        await db.commit()
    except IntegrityError:
        # concurrent join of the same user
        await db.rollback()
        raise HTTPException(400, "Already a member of this group")

    log_db_change("GROUP_MEMBER_ADDED", groupId=group.id, userId=user_id, via="join_endpoint")
    logger.info("User %s joined group %s", user_id, group.id)
    return group

async def list_group_for_user(db: AsyncSession, user_id: int):
    q = (
        select(Group)
        .join(GroupMember)
        .where(GroupMember.user_id == user_id)
        .order_by(Group.created_at, Group.id)
    )
    result = await db.execute(q)
    return result.scalars().all()

async def get_group_members(db: AsyncSession, group: Group):
    """
    Returns:
        [(user, joined_at), ...] in join order, creator first when their
        membership row is missing.
    """
    q = (
        select(User, GroupMember.joined_at)
        .join(GroupMember, GroupMember.user_id == User.id)
        .where(GroupMember.group_id == group.id)
        .order_by(GroupMember.joined_at, GroupMember.id)
    )
    rows = [(user, joined_at) for user, joined_at in (await db.execute(q)).all()]

    if not any(user.id == group.created_by for user, _ in rows):
        creator = await get_user_by_id(db, group.created_by)
        if creator:
            rows.insert(0, (creator, group.created_at))

    return rows

async def list_members(db: AsyncSession, group_id: int, user_id: int):
    group = await check_group_membership(db, group_id, user_id)
    rows = await get_group_members(db, group)

    return [
        {
            "id": user.id,
            "email": user.email,
            "nickname": user.nickname or "Owner",
            "joined_at": joined_at,
        }
        for user, joined_at in rows
    ]

async def delete_group(db: AsyncSession, group_id: int, user_id: int):
    group = await get_group_or_404(db, group_id)

    if group.created_by != user_id:
        raise HTTPException(403, "Only the creator can delete the group")

    tx_ids = select(Transaction.id).where(Transaction.group_id == group_id)

    await db.execute(delete(TransactionShare).where(TransactionShare.transaction_id.in_(tx_ids)))
    await db.execute(delete(Transaction).where(Transaction.group_id == group_id))
    await db.execute(delete(GroupMember).where(GroupMember.group_id == group_id))
    await db.execute(delete(Group).where(Group.id == group_id))
    await db.commit()

    log_db_change("GROUP_DELETED", groupId=group_id, deletedBy=user_id)
    return {"message": "Group deleted"}

async def remove_member(db: AsyncSession, group_id: int, member_id: int, user_id: int):
    """
    A member may leave, the creator may remove anyone else. The creator
    has to delete the group instead of leaving it.
    """
    group = await get_group_or_404(db, group_id)

    is_creator = group.created_by == user_id
    is_self = member_id == user_id

    if not is_creator and not is_self:
        raise HTTPException(403, "Not authorized to remove this member")

    if group.created_by == member_id:
        if is_self:
            raise HTTPException(400, "Creator cannot leave. You must delete the group.")
        raise HTTPException(403, "Cannot remove the group creator")

    if not await is_group_member(db, group_id, member_id):
        raise HTTPException(404, "Member not found in this group")

    await db.execute(
        delete(GroupMember).where(
            GroupMember.group_id == group_id,
            GroupMember.user_id == member_id
        )
    )
    await db.commit()

    log_db_change(
        "GROUP_MEMBER_LEFT" if is_self else "GROUP_MEMBER_REMOVED",
        groupId=group_id,
        userId=member_id,
        actedBy=user_id,
    )
    return {"message": "Left group" if is_self else "Member removed"}
