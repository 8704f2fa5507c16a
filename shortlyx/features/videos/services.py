"""
➡️ But : Logique métier des vidéos (fil, recherche, vues, likes, commentaires, suppression).

Chaque mutation est un read-modify-write séquentiel (pas de verrou optimiste) :
deux likes simultanés peuvent s'écraser, limite acceptée pour un acteur unique.
Chaque mutation ajoute une entrée au journal d'activité.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Sequence, Union

from sqlalchemy.exc import SQLAlchemyError

from shortlyx.core.context import UserCtx
from shortlyx.core.exceptions import NotFound, PermissionDenied, ShortlyXError, ValidationFailed
from shortlyx.db.models.base import utcnow
from shortlyx.db.models.logs import LogType
from shortlyx.db.models.videos import Comment, Video
from shortlyx.db.repositories.video_blobs import VideoBlobRepository
from shortlyx.db.repositories.videos import VideoRepository
from shortlyx.features.logs.services import LogService
from shortlyx.features.media.schemas import IngestResult

logger = logging.getLogger(__name__)

SEARCH_LOG_MIN_LENGTH = 3
RELATED_LIMIT = 6


def parse_tags(tags: Union[str, Iterable[str], None]) -> List[str]:
    """Découpe "a, b ,,c" en ["a", "b", "c"]."""
    if tags is None:
        return []
    raw = tags.split(",") if isinstance(tags, str) else tags
    return [t.strip() for t in raw if t and t.strip()]


def _matches(video: Video, needle: str) -> bool:
    """Sous-chaîne (déjà en minuscules) dans la légende, l'auteur ou un tag."""
    return (
        needle in video.caption.lower()
        or needle in video.username.lower()
        or any(needle in tag.lower() for tag in video.tags)
    )


class VideoService:
    def __init__(
        self,
        *,
        repo: VideoRepository,
        blob_repo: VideoBlobRepository,
        log_svc: LogService,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.repo = repo
        self.blobs = blob_repo
        self.logs = log_svc
        self.now_fn = now_fn

    # --------------- Helpers ---------------
    @staticmethod
    def require_caption(caption: str) -> str:
        caption = (caption or "").strip()
        if not caption:
            raise ValidationFailed("caption", "Please add a caption for your video")
        return caption

    def _ensure_owner(self, video: Video, user: UserCtx) -> None:
        if video.user_id != user.user_id:
            raise PermissionDenied("You can only delete your own videos")

    # --------------- Commands ---------------
    def create(self, user: UserCtx, media: IngestResult, *, caption: str, tags=None) -> Video:
        caption = self.require_caption(caption)
        video = self.repo.create(
            user_id=user.user_id,
            username=user.username,
            media_uri=media.media_uri,
            thumbnail_uri=media.thumbnail_uri,
            caption=caption,
            tags=parse_tags(tags),
            duration=media.duration_seconds,
            resolution=media.resolution,
            likes=0,
            views=0,
            comments=[],
            uploaded_at=self.now_fn(),
        )
        self.logs.append(
            LogType.UPLOAD,
            f"Uploaded video: {caption}",
            {"videoId": video.id, "duration": video.duration},
        )
        return video

    def record_view(self, video_id: str) -> Video:
        # Pas de dédoublonnage : chaque chargement de la page compte
        video = self.get(video_id)
        video = self.repo.update(video, views=video.views + 1)
        self.logs.append(LogType.VIEW, f"Watched video: {video.caption}", {"videoId": video.id})
        return video

    def toggle_like(self, video_id: str, *, currently_liked: bool, user: UserCtx) -> Video:
        # L'état "liké" est tenu par le client : aucun enregistrement par utilisateur
        video = self.get(video_id)
        delta = -1 if currently_liked else 1
        video = self.repo.update(video, likes=video.likes + delta)
        verb = "Unliked" if currently_liked else "Liked"
        self.logs.append(
            LogType.LIKE,
            f"{verb} video: {video.caption}",
            {"videoId": video.id, "userId": user.user_id},
        )
        return video

    def post_comment(self, video_id: str, user: UserCtx, text: str) -> Video:
        text = (text or "").strip()
        if not text:
            raise ValidationFailed("text", "Comment cannot be empty")

        video = self.get(video_id)
        comment = Comment(user_id=user.user_id, username=user.username, text=text, timestamp=self.now_fn())
        # Nouvelle liste (et non append) pour que la colonne JSON soit marquée modifiée
        video = self.repo.update(video, comments=[*video.comments, comment.model_dump(mode="json")])
        self.logs.append(LogType.COMMENT, f"Commented on video: {video.caption}", {"videoId": video.id})
        return video

    def delete(self, video_id: str, user: UserCtx) -> None:
        video = self.get(video_id)
        self._ensure_owner(video, user)

        blob_id = video.blob_id
        if blob_id:
            try:
                self.blobs.delete_by_id(blob_id)
            except (SQLAlchemyError, ShortlyXError):
                # On préfère retirer la vidéo visible quitte à laisser un blob orphelin
                logger.warning("Failed to delete local video blob %s", blob_id, exc_info=True)

        caption, vid = video.caption, video.id
        self.repo.delete(video)
        self.logs.append(LogType.DELETE, f"Deleted video: {caption}", {"videoId": vid})

    # --------------- Queries ---------------
    def get(self, video_id: str) -> Video:
        video = self.repo.get(video_id)
        if not video:
            raise NotFound("Video not found")
        return video

    def list_all(self) -> Sequence[Video]:
        """Ordre d'upload (plus anciennes d'abord)."""
        return self.repo.list_by_date()

    def feed(self) -> Sequence[Video]:
        """Plus récentes d'abord."""
        return self.repo.list_by_date(newest_first=True)

    def list_for_user(self, user_id: str) -> Sequence[Video]:
        """Plus récentes d'abord."""
        return self.repo.list_by_user(user_id, newest_first=True)

    def search(self, query: str) -> Sequence[Video]:
        query = (query or "").strip()
        videos = self.repo.list_by_date()
        if not query:
            return videos

        needle = query.lower()
        results = [v for v in videos if _matches(v, needle)]
        if len(query) >= SEARCH_LOG_MIN_LENGTH:
            self.logs.append(
                LogType.SEARCH,
                f"Searched for: {query}",
                {"query": query, "resultsCount": len(results)},
            )
        return results

    def related(self, video_id: str, *, limit: int = RELATED_LIMIT) -> List[Video]:
        return [v for v in self.repo.list_by_date() if v.id != video_id][:limit]
