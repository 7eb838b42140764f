from pydantic import BaseModel, condecimal
from decimal import Decimal

class MemberRef(BaseModel):
    id: int
    nickname: str

class MemberBalance(BaseModel):
    member: MemberRef
    paid: Decimal
    owed: Decimal
    net: Decimal
    is_member: bool = True

class Settlement(BaseModel):
    from_member: MemberRef
    to_member: MemberRef
    amount: Decimal

class GroupBalanceOut(BaseModel):
    group_id: int
    total_spent: Decimal
    balances: list[MemberBalance]
    settlements: list[Settlement]

class SettlementRecord(BaseModel):
    from_user_id: int
    to_user_id: int
    amount: condecimal(gt=0, max_digits=12, decimal_places=2)
