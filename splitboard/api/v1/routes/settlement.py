from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitboard.db.session import get_db
from splitboard.core.dependencies import get_current_user
from splitboard.schemas.balances import GroupBalanceOut, SettlementRecord
from splitboard.schemas.transaction import TransactionOut
from splitboard.services.settlement_service import compute_group_balances, record_settlement

router = APIRouter()


@router.get("/{group_id}/balances", response_model=GroupBalanceOut)
async def group_balances(
    group_id: int,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user),
):
    return await compute_group_balances(db, group_id, user.id)


@router.post("/{group_id}/settlements", response_model=TransactionOut)
async def settle(
    group_id: int,
    data: SettlementRecord,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user),
):
    return await record_settlement(db, group_id, user.id, data)
