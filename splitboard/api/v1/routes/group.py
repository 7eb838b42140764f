from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitboard.db.session import get_db
from splitboard.services.group_services import (
    create_group,
    join_group,
    list_group_for_user,
    list_members,
    delete_group,
    remove_member,
)
from splitboard.schemas.group import GroupCreate, GroupMemberOut, GroupOut, JoinGroupRequest
from splitboard.core.dependencies import get_current_user

router = APIRouter()

@router.post("/", response_model=GroupOut)
async def create_new_group(
    data: GroupCreate,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user)
):
    return await create_group(db, data.name, user.id)

@router.post("/join", response_model=GroupOut)
async def join(data: JoinGroupRequest, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await join_group(db, data.invite_code, user.id)

@router.get("/", response_model=list[GroupOut])
async def my_groups(db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await list_group_for_user(db, user.id)

@router.get("/{group_id}/members", response_model=list[GroupMemberOut])
async def members(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await list_members(db, group_id, user.id)

@router.delete("/{group_id}")
async def remove_group(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await delete_group(db, group_id, user.id)

@router.delete("/{group_id}/members/{member_id}")
async def remove_group_member(
    group_id: int,
    member_id: int,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user)
):
    return await remove_member(db, group_id, member_id, user.id)
