import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from shortlyx.core.config import settings
from shortlyx.core.exceptions import ShortlyXError, ValidationFailed
from shortlyx.db.models.videos import LOCAL_SCHEME
from shortlyx.db.repositories.video_blobs import VideoBlobRepository
from shortlyx.features.media.local import VideoProbe, probe_video
from shortlyx.features.media.remote import CloudinaryUploader
from shortlyx.features.media.schemas import IngestResult, ProgressCallback
from shortlyx.utils.media_files import build_local_id, validate_video_bytes

logger = logging.getLogger(__name__)

LOCAL_PROGRESS_STEP = 10


def make_remote_uploader() -> Optional[CloudinaryUploader]:
    """Uploader distant si l'hébergeur est configuré, sinon None (mode local)."""
    if not settings.MEDIA_REMOTE_ENABLED:
        return None
    return CloudinaryUploader(
        upload_url=settings.cloudinary_upload_url,
        upload_preset=settings.CLOUDINARY_UPLOAD_PRESET,
        thumbnail_transform=settings.CLOUDINARY_THUMBNAIL_TRANSFORM,
        chunk_size=settings.UPLOAD_CHUNK_BYTES,
        timeout=settings.UPLOAD_TIMEOUT_SECONDS,
    )


class MediaIngestionService:
    """
    Service d'ingestion : un appel par upload, renvoie une URI jouable.

    - mode distant : l'hébergeur renvoie une URL sécurisée (+ miniature par réécriture d'URL)
    - mode local : octets stockés dans video_blobs, URI `local://<id>` résolue à la lecture
    """

    def __init__(
        self,
        *,
        blob_repo: VideoBlobRepository,
        remote: Optional[CloudinaryUploader] = None,
        probe_fn: Callable[..., VideoProbe] = probe_video,
        id_fn: Callable[[], str] = build_local_id,
    ):
        self.blobs = blob_repo
        self.remote = remote
        self.probe_fn = probe_fn
        self.id_fn = id_fn
        self.settings = settings

    @property
    def mode(self) -> str:
        return "remote" if self.remote else "local"

    def ingest(
        self,
        file_bytes: bytes,
        progress_cb: Optional[ProgressCallback] = None,
        *,
        filename: str = "upload",
        content_type: Optional[str] = None,
    ) -> IngestResult:
        try:
            mime, ext, size, sha = validate_video_bytes(file_bytes, max_mb=self.settings.MAX_UPLOAD_MB)
        except ValueError as e:
            raise ValidationFailed("file", str(e))

        if self.remote:
            return self.remote.upload(
                file_bytes,
                filename=filename,
                content_type=content_type or mime,
                progress_cb=progress_cb,
            )
        return self._ingest_local(file_bytes, progress_cb, mime=mime, ext=ext, size=size, sha=sha)

    # --------------- Mode local ---------------
    def _ingest_local(
        self,
        file_bytes: bytes,
        progress_cb: Optional[ProgressCallback],
        *,
        mime: str,
        ext: str,
        size: int,
        sha: str,
    ) -> IngestResult:
        # Progression simulée ; 100 % n'est émis qu'après décodage
        if progress_cb:
            for pct in range(LOCAL_PROGRESS_STEP, 100, LOCAL_PROGRESS_STEP):
                progress_cb(float(pct))

        probe = self.probe_fn(
            file_bytes,
            offset_seconds=self.settings.THUMBNAIL_OFFSET_SECONDS,
            jpeg_quality=self.settings.THUMBNAIL_JPEG_QUALITY,
        )
        if progress_cb:
            progress_cb(100.0)

        public_id = self.id_fn()
        try:
            self.blobs.put(public_id, file_bytes, content_type=mime, sha256=sha)
        except (SQLAlchemyError, ShortlyXError):
            # La lecture signalera "vidéo indisponible" si le blob manque vraiment
            logger.warning("Failed to save video blob %s", public_id, exc_info=True)

        logger.info("Stored video locally as %s (%d bytes)", public_id, size)
        return IngestResult(
            media_uri=f"{LOCAL_SCHEME}{public_id}",
            thumbnail_uri=probe.thumbnail_data_uri,
            public_id=public_id,
            format=ext,
            duration_seconds=probe.duration_seconds,
            width=probe.width,
            height=probe.height,
            size_bytes=size,
        )
