"""
➡️ But : Lire les métadonnées d'une vidéo et capturer une miniature, sans réseau.

probe_video() : durée, largeur, hauteur + une image JPEG prise à un petit décalage (0.1 s par défaut).
Utilisé par le mode local (fallback) de l'ingestion.
"""

import base64
import io
from dataclasses import dataclass
from typing import Optional

import av
from av.error import FFmpegError
from PIL import Image

from shortlyx.core.exceptions import UploadFailed


@dataclass(frozen=True)
class VideoProbe:
    duration_seconds: float
    width: int
    height: int
    thumbnail_jpeg: bytes

    @property
    def thumbnail_data_uri(self) -> str:
        encoded = base64.b64encode(self.thumbnail_jpeg).decode("ascii")
        return f"data:image/jpeg;base64,{encoded}"


def _duration_seconds(container, stream) -> float:
    if container.duration:
        return container.duration / av.time_base
    if stream.duration is not None and stream.time_base is not None:
        return float(stream.duration * stream.time_base)
    return 0.0


def _encode_jpeg(image: Image.Image, *, quality: int) -> bytes:
    buf = io.BytesIO()
    image.convert("RGB").save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def probe_video(file_bytes: bytes, *, offset_seconds: float = 0.1, jpeg_quality: int = 70) -> VideoProbe:
    """Lève UploadFailed si le fichier ne peut pas être décodé."""
    try:
        with av.open(io.BytesIO(file_bytes)) as container:
            if not container.streams.video:
                raise UploadFailed("Unable to read video", detail="no video stream")
            stream = container.streams.video[0]
            duration = _duration_seconds(container, stream)

            # Décode jusqu'au décalage voulu ; on garde la dernière image vue (clip plus court)
            frame_image: Optional[Image.Image] = None
            for frame in container.decode(stream):
                frame_image = frame.to_image()
                if frame.time is not None and frame.time >= offset_seconds:
                    break

            if frame_image is None:
                raise UploadFailed("Unable to read video", detail="no decodable frame")

            width = stream.codec_context.width or frame_image.width
            height = stream.codec_context.height or frame_image.height
    except (FFmpegError, ValueError) as e:
        raise UploadFailed("Unable to read video", detail=str(e)) from e

    return VideoProbe(
        duration_seconds=duration,
        width=width,
        height=height,
        thumbnail_jpeg=_encode_jpeg(frame_image, quality=jpeg_quality),
    )
