from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from splitboard.db.session import get_db
from splitboard.services.user_service import register_or_login
from splitboard.core.dependencies import get_current_user
from splitboard.core.jwt_config import set_session_cookie, clear_session_cookie
from splitboard.schemas.user import AuthResponse, UserOut, UserRegister


router = APIRouter()


@router.post("/register", response_model=AuthResponse)
async def register(
    data: UserRegister,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    user, created = await register_or_login(db, data)
    set_session_cookie(response, user.id)

    message = "Registered successfully" if created else "Logged in successfully"
    return {"message": message, "user": UserOut.model_validate(user)}


@router.get("/me", response_model=UserOut)
async def get_user(user = Depends(get_current_user)):
    return user


@router.post("/logout")
async def logout(response: Response):
    clear_session_cookie(response)
    return {"message": "Logged out"}
