from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from shortlyx.db.models.videos import Video


class CommentOut(BaseModel):
    id: str
    user_id: str
    username: str
    text: str
    timestamp: datetime


class VideoOut(BaseModel):
    id: str
    user_id: str
    username: str
    media_uri: str
    thumbnail_uri: str
    caption: str
    tags: List[str]
    duration: float
    resolution: str
    likes: int
    views: int
    comments: List[CommentOut]
    uploaded_at: datetime

    @classmethod
    def from_model(cls, video: Video) -> "VideoOut":
        # Les commentaires sont stockés en JSON (dicts) : validés directement en CommentOut
        return cls.model_validate(video, from_attributes=True)


class VideoListOut(BaseModel):
    items: List[VideoOut]
    total: int


class CommentIn(BaseModel):
    text: str = Field(max_length=2000)


class LikeIn(BaseModel):
    # État du bouton côté client au moment du clic
    currently_liked: bool = False
