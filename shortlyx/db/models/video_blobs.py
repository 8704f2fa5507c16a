from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, LargeBinary

from .base import utcnow


class VideoBlob(SQLModel, table=True):
    """Octets bruts d'une vidéo uploadée en mode local, clé = identifiant du local://."""

    __tablename__ = "video_blobs"

    id: str = Field(primary_key=True)
    data: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
    content_type: str = Field(default="video/mp4")
    size_bytes: int = Field(description="Taille en octets")
    sha256: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
