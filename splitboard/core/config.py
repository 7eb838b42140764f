from decimal import Decimal
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite+aiosqlite:///./splitboard.db"
    DB_CONNECT_RETRIES: int = 5

    JWT_SECRET: str = "change-me"
    JWT_ALGO: str = "HS256"
    SESSION_COOKIE_NAME: str = "splitboard_session"
    SESSION_MAX_AGE: int = 24 * 60 * 60  # seconds

    BCRYPT_ROUNDS: int = 12

    SETTLEMENT_TOLERANCE: Decimal = Decimal("0.01")

    LOG_LEVEL: str = "INFO"
    DB_CHANGE_LOG_PATH: Optional[str] = None


settings = Settings()
