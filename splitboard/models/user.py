from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from splitboard.db.session import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    nickname = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
