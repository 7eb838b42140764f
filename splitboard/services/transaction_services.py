import logging
from decimal import Decimal
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from splitboard.core.dependencies import check_group_membership
from splitboard.core.logging_config import log_db_change
from splitboard.core.utils import split_evenly
from splitboard.models.transaction import Transaction, TransactionShare
from splitboard.schemas.transaction import TransactionCreate
from splitboard.services.group_services import get_group_members

logger = logging.getLogger(__name__)


def serialize_transaction(tx: Transaction) -> dict:
    return {
        "id": tx.id,
        "description": tx.description,
        "amount": tx.amount,
        "created_at": tx.created_at,
        "user_id": tx.user_id,
        "user_nickname": tx.payer.nickname if tx.payer else None,
        "user_email": tx.payer.email if tx.payer else None,
        "shares": [
            {
                "user_id": s.user_id,
                "amount": s.share,
                "user_nickname": s.user.nickname if s.user else None,
                "user_email": s.user.email if s.user else None,
            }
            for s in tx.shares
        ],
    }

def normalize_beneficiaries(requested: List[int], member_ids: List[int]) -> List[int]:
    """
    Keep requested ids that are current members, in request order and
    without duplicates. Nothing left means everybody pays their part.
    """
    beneficiaries = []
    for uid in requested or []:
        if uid in member_ids and uid not in beneficiaries:
            beneficiaries.append(uid)

    if not beneficiaries:
        beneficiaries = list(member_ids)

    return beneficiaries

async def fetch_transaction(db: AsyncSession, transaction_id: int):
    q = (
        select(Transaction)
        .where(Transaction.id == transaction_id)
        .execution_options(populate_existing=True)
    )
    return (await db.execute(q)).scalar_one_or_none()

async def fetch_group_transactions(db: AsyncSession, group_id: int, newest_first: bool = True):
    if newest_first:
        order = (Transaction.created_at.desc(), Transaction.id.desc())
    else:
        order = (Transaction.created_at, Transaction.id)

    q = select(Transaction).where(Transaction.group_id == group_id).order_by(*order)
    return (await db.execute(q)).scalars().all()

async def insert_transaction(
    db: AsyncSession,
    group_id: int,
    payer_id: int,
    description: str,
    amount: Decimal,
    beneficiaries: List[int],
):
    if not beneficiaries:
        raise HTTPException(400, "No beneficiaries found for this transaction")

    share_amount = split_evenly(amount, len(beneficiaries))

    tx = Transaction(
        group_id=group_id,
        user_id=payer_id,
        description=description,
        amount=amount,
    )
    tx.shares = [
        TransactionShare(user_id=uid, share=share_amount)
        for uid in beneficiaries
    ]

    db.add(tx)
    await db.commit()

    log_db_change(
        "TRANSACTION_ADDED",
        transactionId=tx.id,
        groupId=group_id,
        createdBy=payer_id,
        amount=str(amount),
    )

    return await fetch_transaction(db, tx.id)

async def add_transaction(db: AsyncSession, group_id: int, user_id: int, data: TransactionCreate):
    group = await check_group_membership(db, group_id, user_id)

    member_ids = [user.id for user, _ in await get_group_members(db, group)]
    beneficiaries = normalize_beneficiaries(data.pay_for_user_ids, member_ids)
    logger.debug("Splitting %s across %s beneficiaries in group %s", data.amount, len(beneficiaries), group.id)

    tx = await insert_transaction(
        db,
        group_id=group.id,
        payer_id=user_id,
        description=data.description,
        amount=data.amount,
        beneficiaries=beneficiaries,
    )
    return serialize_transaction(tx)

async def list_transactions(db: AsyncSession, group_id: int, user_id: int):
    await check_group_membership(db, group_id, user_id)
    transactions = await fetch_group_transactions(db, group_id)
    return [serialize_transaction(tx) for tx in transactions]
