from pydantic import BaseModel, field_validator
from datetime import datetime

class GroupCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Group name is required")
        return v

class JoinGroupRequest(BaseModel):
    invite_code: str

class GroupOut(BaseModel):
    id: int
    name: str
    created_by: int
    invite_code: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class GroupMemberOut(BaseModel):
    id: int
    email: str
    nickname: str
    joined_at: datetime | None = None
