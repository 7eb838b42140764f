from pydantic import BaseModel, condecimal, field_validator
from datetime import datetime
from decimal import Decimal
from typing import List

class TransactionCreate(BaseModel):
    description: str
    amount: condecimal(gt=0, max_digits=12, decimal_places=2)
    pay_for_user_ids: List[int] = []

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description is required")
        return v

class ShareOut(BaseModel):
    user_id: int
    amount: Decimal
    user_nickname: str | None = None
    user_email: str | None = None

class TransactionOut(BaseModel):
    id: int
    description: str
    amount: Decimal
    created_at: datetime | None = None
    user_id: int
    user_nickname: str | None = None
    user_email: str | None = None
    shares: List[ShareOut]
