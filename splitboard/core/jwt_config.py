from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Request, Response
from jose import JWTError, jwt

from splitboard.core.config import settings


def create_access_token(data: dict) -> str:
    payload = data.copy()
    payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=settings.SESSION_MAX_AGE)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except jwt.ExpiredSignatureError:
        raise HTTPException(401, "Session expired")
    except JWTError:
        raise HTTPException(401, "Invalid session")


def get_token_from_cookie(request: Request) -> str:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return token


def set_session_cookie(response: Response, user_id: int) -> None:
    token = create_access_token({"sub": str(user_id)})
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        httponly=True,
        max_age=settings.SESSION_MAX_AGE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME)


def session_cookie_deletion_headers() -> dict:
    # for errors raised before a Response exists
    response = Response()
    clear_session_cookie(response)
    return {"set-cookie": response.headers["set-cookie"]}
