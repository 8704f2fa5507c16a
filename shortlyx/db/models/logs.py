from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from sqlmodel import Field
from sqlalchemy import JSON, Column

from .base import BaseModelDB, utcnow


class LogType(str, Enum):
    LOGIN = "login"
    LOGOUT = "logout"
    SIGNUP = "signup"
    UPLOAD = "upload"
    DELETE = "delete"
    LIKE = "like"
    COMMENT = "comment"
    SEARCH = "search"
    VIEW = "view"


class Log(BaseModelDB, table=True):
    """Journal d'activité : append-only, jamais modifié, supprimable en bloc."""

    __tablename__ = "logs"

    type: str = Field(index=True, description="Valeur de LogType")
    message: str
    timestamp: datetime = Field(default_factory=utcnow, index=True)
    # `metadata` est réservé par SQLAlchemy côté attribut, pas côté colonne
    meta: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column("metadata", JSON, nullable=True))
