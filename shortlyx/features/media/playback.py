"""
➡️ But : Résoudre l'URI média d'une vidéo au moment de la lecture.

- `local://<id>` : lecture du blob dans video_blobs, avec quelques tentatives espacées
  (l'écriture du blob peut arriver juste après celle des métadonnées)
- sinon : l'URI est directement jouable (URL distante)

Le MediaHandle garde les octets en mémoire : toujours le fermer (ou l'utiliser avec `with`).
"""

import io
import logging
import time
from typing import Callable, Optional

from shortlyx.core.exceptions import NotFound
from shortlyx.db.models.video_blobs import VideoBlob
from shortlyx.db.models.videos import Video
from shortlyx.db.repositories.video_blobs import VideoBlobRepository

logger = logging.getLogger(__name__)


class MediaHandle:
    """Poignée temporaire sur un média résolu (octets locaux ou URL distante)."""

    def __init__(self, *, url: Optional[str] = None, data: Optional[bytes] = None, content_type: Optional[str] = None):
        self.url = url
        self.content_type = content_type
        self._buffer: Optional[io.BytesIO] = io.BytesIO(data) if data is not None else None

    @property
    def is_local(self) -> bool:
        return self.url is None

    @property
    def closed(self) -> bool:
        return self.is_local and self._buffer is None

    @property
    def size(self) -> int:
        if self._buffer is None:
            return 0
        return self._buffer.getbuffer().nbytes

    def read(self) -> bytes:
        if self._buffer is None:
            raise ValueError("Media handle is closed or remote")
        return self._buffer.getvalue()

    def close(self) -> None:
        if self._buffer is not None:
            self._buffer.close()
            self._buffer = None

    def __enter__(self) -> "MediaHandle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class PlaybackResolver:
    def __init__(
        self,
        *,
        blob_repo: VideoBlobRepository,
        attempts: int = 3,
        backoff_seconds: float = 0.25,
        sleep_fn: Callable[[float], None] = time.sleep,
    ):
        self.blobs = blob_repo
        self.attempts = max(1, attempts)
        self.backoff_seconds = backoff_seconds
        self.sleep_fn = sleep_fn

    def _fetch_blob(self, blob_id: str) -> Optional[VideoBlob]:
        for attempt in range(1, self.attempts + 1):
            blob = self.blobs.get(blob_id)
            if blob is not None:
                return blob
            if attempt < self.attempts:
                self.sleep_fn(self.backoff_seconds * attempt)
        return None

    def open(self, video: Video) -> MediaHandle:
        if not video.is_local:
            return MediaHandle(url=video.media_uri)

        blob = self._fetch_blob(video.blob_id)
        if blob is None:
            logger.warning("Local blob %s missing after %d attempts", video.blob_id, self.attempts)
            raise NotFound("Video unavailable")
        return MediaHandle(data=blob.data, content_type=blob.content_type)
