"""
➡️ But : Envoyer une vidéo à l'hébergeur média (API Cloudinary, upload non signé).

POST multipart : file + upload_preset + resource_type=video.
La progression est remontée au fil de l'envoi du corps de requête.
"""

import io
import logging
from typing import Callable, Iterable, Iterator, Optional

import httpx

from shortlyx.core.exceptions import UploadFailed
from shortlyx.features.media.schemas import IngestResult, ProgressCallback

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = (
    "Network error: Failed to connect to the media host. Please check your internet connection."
)


def _with_progress(
    stream: Iterable[bytes],
    *,
    total: int,
    chunk_size: int,
    progress_cb: Optional[ProgressCallback],
) -> Iterator[bytes]:
    sent = 0
    for chunk in stream:
        for start in range(0, len(chunk), chunk_size):
            piece = chunk[start:start + chunk_size]
            sent += len(piece)
            yield piece
            if progress_cb and total:
                progress_cb(min(100.0, sent * 100.0 / total))


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"Upload failed with status {response.status_code}: {response.text}"


class CloudinaryUploader:
    def __init__(
        self,
        *,
        upload_url: str,
        upload_preset: str,
        thumbnail_transform: str,
        chunk_size: int = 64 * 1024,
        timeout: Optional[float] = None,
        client_factory: Optional[Callable[[], httpx.Client]] = None,
    ):
        self.upload_url = upload_url
        self.upload_preset = upload_preset
        self.thumbnail_transform = thumbnail_transform
        self.chunk_size = chunk_size
        self._client_factory = client_factory or (lambda: httpx.Client(timeout=timeout))

    def thumbnail_for(self, secure_url: str) -> str:
        return secure_url.replace("/upload/", f"/upload/{self.thumbnail_transform}/", 1)

    def upload(
        self,
        file_bytes: bytes,
        *,
        filename: str,
        content_type: str,
        progress_cb: Optional[ProgressCallback] = None,
    ) -> IngestResult:
        # On laisse httpx encoder le multipart, puis on réémet le corps morceau par morceau
        encoded = httpx.Request(
            "POST",
            self.upload_url,
            data={"upload_preset": self.upload_preset, "resource_type": "video"},
            files={"file": (filename, io.BytesIO(file_bytes), content_type)},
        )
        headers = {"Content-Type": encoded.headers["Content-Type"]}
        total = int(encoded.headers.get("Content-Length", 0))
        if total:
            headers["Content-Length"] = str(total)
        body = _with_progress(encoded.stream, total=total, chunk_size=self.chunk_size, progress_cb=progress_cb)

        try:
            with self._client_factory() as client:
                response = client.post(self.upload_url, content=body, headers=headers)
        except httpx.TransportError as e:
            logger.warning("Media host unreachable: %s", e)
            raise UploadFailed(NETWORK_ERROR_MESSAGE, detail=str(e)) from e

        if response.status_code != 200:
            message = _error_message(response)
            logger.warning("Media host rejected upload (%s): %s", response.status_code, message)
            raise UploadFailed(message, detail=response.text or None)

        try:
            payload = response.json()
            secure_url = payload["secure_url"]
            return IngestResult(
                media_uri=secure_url,
                thumbnail_uri=self.thumbnail_for(secure_url),
                public_id=payload["public_id"],
                format=payload.get("format"),
                duration_seconds=float(payload.get("duration") or 0.0),
                width=int(payload.get("width") or 0),
                height=int(payload.get("height") or 0),
                size_bytes=int(payload.get("bytes") or len(file_bytes)),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise UploadFailed(f"Failed to parse response: {response.text}") from e
