"""
➡️ But : Définir la structure des tables de la base (ORM).

Ici on représente la collection `users`.

username et email sont des index uniques : une collision lève une IntegrityError
que les repositories traduisent en ConstraintViolation.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB, utcnow


class User(BaseModelDB, table=True):
    __tablename__ = "users"

    username: str = Field(index=True, unique=True)
    email: str = Field(index=True, unique=True)
    hashed_password: str
    bio: Optional[str] = Field(default=None)
    avatar_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    last_login: Optional[datetime] = Field(default=None)
