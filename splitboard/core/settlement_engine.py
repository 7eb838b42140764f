from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

ZERO = Decimal("0")
SETTLED_TOLERANCE = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class Member:
    id: int
    name: str


@dataclass(frozen=True)
class Share:
    member_id: int
    amount: Decimal


@dataclass(frozen=True)
class Transaction:
    id: int
    amount: Decimal
    payer_id: int
    shares: Tuple[Share, ...] = ()


@dataclass
class Balance:
    paid: Decimal = ZERO
    owed: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.paid - self.owed


@dataclass(frozen=True)
class Settlement:
    from_member: Member
    to_member: Member
    amount: Decimal


@dataclass(frozen=True)
class GroupSummary:
    balances: Dict[int, Balance]
    settlements: List[Settlement]
    total_spent: Decimal = ZERO


@dataclass
class _Position:
    # working copy for the greedy walk, never the caller's balance
    member: Member
    remaining: Decimal


def aggregate_balances(
    members: Sequence[Member],
    transactions: Iterable[Transaction],
) -> Dict[int, Balance]:
    """
    Returns:
        {
            member_id: Balance(paid, owed)
        }

    Members without transactions stay at zero. Ids that are not in
    ``members`` (orphaned payers or beneficiaries) are still accumulated
    so they surface as unmatched balances.

    A transaction without shares is split evenly across the *current*
    member list, so adding or removing a member changes how such legacy
    transactions are attributed.
    """
    balances: Dict[int, Balance] = {m.id: Balance() for m in members}

    for tx in transactions:
        amount = to_decimal(tx.amount)

        payer = balances.setdefault(tx.payer_id, Balance())
        payer.paid += amount

        if tx.shares:
            for share in tx.shares:
                entry = balances.setdefault(share.member_id, Balance())
                entry.owed += to_decimal(share.amount)
        elif members:
            even = amount / len(members)
            for m in members:
                balances[m.id].owed += even

    return balances


def solve_settlements(
    net_balances: Iterable[Tuple[Member, Decimal]],
    tolerance: Decimal = SETTLED_TOLERANCE,
) -> List[Settlement]:
    """
    Greedy two-cursor matching of debtors against creditors.

    Order follows the input; nothing is sorted by magnitude, so the same
    input always yields the same list. Amounts are the exact residual
    minimum of the pair, display rounding is left to the caller.
    """
    tolerance = to_decimal(tolerance)

    creditors: List[_Position] = []
    debtors: List[_Position] = []

    for member, net in net_balances:
        net = to_decimal(net)
        if net > tolerance:
            creditors.append(_Position(member, net))
        elif net < -tolerance:
            debtors.append(_Position(member, -net))

    settlements: List[Settlement] = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(debtor.remaining, creditor.remaining)

        settlements.append(Settlement(
            from_member=debtor.member,
            to_member=creditor.member,
            amount=amount,
        ))

        debtor.remaining -= amount
        creditor.remaining -= amount

        if debtor.remaining <= tolerance:
            i += 1
        if creditor.remaining <= tolerance:
            j += 1

    return settlements


def summarize_group(
    members: Sequence[Member],
    transactions: Iterable[Transaction],
    tolerance: Decimal = SETTLED_TOLERANCE,
) -> GroupSummary:
    transactions = list(transactions)
    balances = aggregate_balances(members, transactions)

    # unknown ids stay in balances but only members take part in settling
    settlements = solve_settlements(
        ((m, balances[m.id].net) for m in members),
        tolerance=tolerance,
    )

    total = sum((to_decimal(tx.amount) for tx in transactions), ZERO)

    return GroupSummary(
        balances=balances,
        settlements=settlements,
        total_spent=total,
    )
