from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitboard.db.session import get_db
from splitboard.schemas.transaction import TransactionCreate, TransactionOut
from splitboard.services.transaction_services import add_transaction, list_transactions
from splitboard.core.dependencies import get_current_user

router = APIRouter()

@router.get("/{group_id}/transactions", response_model=list[TransactionOut])
async def all_transactions(group_id: int, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await list_transactions(db, group_id, current_user.id)

@router.post("/{group_id}/transactions", response_model=TransactionOut)
async def new_transaction(
    group_id: int,
    data: TransactionCreate,
    db: AsyncSession = Depends(get_db),
    current_user = Depends(get_current_user),
):
    return await add_transaction(db, group_id, current_user.id, data)
