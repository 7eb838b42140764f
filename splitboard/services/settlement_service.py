import logging

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from splitboard.core.config import settings
from splitboard.core.dependencies import check_group_membership
from splitboard.core.settlement_engine import Member, Share, Transaction, summarize_group
from splitboard.core.utils import qround
from splitboard.schemas.balances import SettlementRecord
from splitboard.services.group_services import get_group_members
from splitboard.services.transaction_services import (
    fetch_group_transactions,
    insert_transaction,
    serialize_transaction,
)

logger = logging.getLogger(__name__)


def to_engine_transaction(tx) -> Transaction:
    return Transaction(
        id=tx.id,
        amount=tx.amount,
        payer_id=tx.user_id,
        shares=tuple(Share(member_id=s.user_id, amount=s.share) for s in tx.shares),
    )

def _known_names(transactions) -> dict:
    # nicknames of payers/beneficiaries who may no longer be members
    names = {}
    for tx in transactions:
        if tx.payer:
            names[tx.payer.id] = tx.payer.nickname
        for s in tx.shares:
            if s.user:
                names[s.user.id] = s.user.nickname
    return names

async def load_group_snapshot(db: AsyncSession, group):
    """
    Members in join order and transactions oldest first, the order the
    settlement walk depends on.
    """
    members = [
        Member(id=user.id, name=user.nickname)
        for user, _ in await get_group_members(db, group)
    ]
    rows = await fetch_group_transactions(db, group.id, newest_first=False)
    return members, rows

async def compute_group_balances(db: AsyncSession, group_id: int, user_id: int):
    group = await check_group_membership(db, group_id, user_id)

    members, rows = await load_group_snapshot(db, group)
    summary = summarize_group(
        members,
        [to_engine_transaction(tx) for tx in rows],
        tolerance=settings.SETTLEMENT_TOLERANCE,
    )

    member_ids = {m.id for m in members}
    names = {m.id: m.name for m in members}
    for uid, name in _known_names(rows).items():
        names.setdefault(uid, name)

    balances = []
    for uid, balance in summary.balances.items():
        balances.append({
            "member": {"id": uid, "nickname": names.get(uid, f"User {uid}")},
            "paid": qround(balance.paid),
            "owed": qround(balance.owed),
            "net": qround(balance.net),
            "is_member": uid in member_ids,
        })

    settlements = [
        {
            "from_member": {"id": s.from_member.id, "nickname": s.from_member.name},
            "to_member": {"id": s.to_member.id, "nickname": s.to_member.name},
            "amount": qround(s.amount),
        }
        for s in summary.settlements
    ]

    logger.debug(
        "Group %s: %s members, %s transactions, %s settlements",
        group_id, len(members), len(rows), len(settlements),
    )

    return {
        "group_id": group.id,
        "total_spent": qround(summary.total_spent),
        "balances": balances,
        "settlements": settlements,
    }

async def record_settlement(db: AsyncSession, group_id: int, user_id: int, data: SettlementRecord):
    """
    A settlement becomes real only as an ordinary transaction: the debtor
    pays, the creditor is the single beneficiary.
    """
    group = await check_group_membership(db, group_id, user_id)

    if data.from_user_id == data.to_user_id:
        raise HTTPException(400, "Cannot settle with yourself")

    if user_id not in (data.from_user_id, data.to_user_id):
        raise HTTPException(403, "Only the payer or the receiver can record this settlement")

    members = {user.id: user for user, _ in await get_group_members(db, group)}

    if data.from_user_id not in members:
        raise HTTPException(400, "Payer is not a member of this group")
    if data.to_user_id not in members:
        raise HTTPException(400, "Receiver is not a member of this group")

    payer = members[data.from_user_id]
    receiver = members[data.to_user_id]

    tx = await insert_transaction(
        db,
        group_id=group.id,
        payer_id=payer.id,
        description=f"Settlement: {payer.nickname} -> {receiver.nickname}",
        amount=data.amount,
        beneficiaries=[receiver.id],
    )

    logger.info(
        "Recorded settlement of %s from %s to %s in group %s",
        data.amount, payer.id, receiver.id, group.id,
    )
    return serialize_transaction(tx)
