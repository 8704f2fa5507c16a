from datetime import datetime
from typing import Any, Dict, List

from sqlmodel import Field, SQLModel
from sqlalchemy import JSON, Column, Text

from .base import BaseModelDB, new_id, utcnow

# Schéma local : le média est stocké dans la table video_blobs, jamais envoyé sur le réseau
LOCAL_SCHEME = "local://"


class Comment(SQLModel):
    """Commentaire embarqué dans la vidéo (colonne JSON), append-only."""

    id: str = Field(default_factory=new_id)
    user_id: str
    username: str
    text: str
    timestamp: datetime = Field(default_factory=utcnow)


class Video(BaseModelDB, table=True):
    """Vidéos publiées. Le média est soit une URL distante, soit `local://<id>`."""

    __tablename__ = "videos"

    user_id: str = Field(foreign_key="users.id", index=True, description="Propriétaire (immuable)")
    username: str = Field(description="Nom du propriétaire (dénormalisé)")
    media_uri: str = Field(description="URL distante ou local://<blob id>")
    thumbnail_uri: str = Field(default="", sa_column=Column(Text, nullable=False))
    caption: str
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    duration: float = Field(default=0.0, description="Durée en secondes")
    resolution: str = Field(default="", description="Largeur x hauteur, ex: 1080x1920")
    likes: int = Field(default=0)
    views: int = Field(default=0)
    comments: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    uploaded_at: datetime = Field(default_factory=utcnow, index=True)

    @property
    def is_local(self) -> bool:
        return self.media_uri.startswith(LOCAL_SCHEME)

    @property
    def blob_id(self) -> str | None:
        if not self.is_local:
            return None
        return self.media_uri[len(LOCAL_SCHEME):]
