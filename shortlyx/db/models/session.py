from datetime import datetime

from sqlmodel import Field, SQLModel

from .base import utcnow


class SessionRecord(SQLModel, table=True):
    """Marqueur de l'utilisateur connecté : au plus une ligne."""

    __tablename__ = "session"

    user_id: str = Field(primary_key=True)
    timestamp: datetime = Field(default_factory=utcnow)
