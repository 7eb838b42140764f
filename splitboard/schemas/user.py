from pydantic import BaseModel, EmailStr
from datetime import datetime
from typing import Literal, Optional

class UserBase(BaseModel):
    email: EmailStr
    nickname: str

class UserRegister(BaseModel):
    email: EmailStr
    password: str
    nickname: Optional[str] = None
    mode: Optional[Literal["login", "register"]] = None

class UserOut(UserBase):
    id: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class AuthResponse(BaseModel):
    message: str
    user: UserOut
