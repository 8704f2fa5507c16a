import hashlib
import secrets
import time
from typing import Set, Tuple

import filetype


ALLOWED_VIDEO_MIME: Set[str] = {
    "video/mp4",
    "video/webm",
    "video/ogg",
    "video/quicktime",   # mov
    "video/x-matroska",  # mkv (selon filetype)
    "video/x-m4v",
    "video/x-msvideo",   # avi
}


def detect_mime_and_ext(file_bytes: bytes) -> Tuple[str, str]:
    """
    Détecte le type réel via 'filetype' (jamais le Content-Type annoncé par le client).
    Retourne (real_mime, ext_sans_point).
    """
    kind = filetype.guess(file_bytes)
    real_mime = kind.mime if kind else "application/octet-stream"
    ext = kind.extension if kind else "bin"
    return real_mime, ext


def validate_video_bytes(file_bytes: bytes, *, max_mb: int) -> Tuple[str, str, int, str]:
    """
    Retourne (real_mime, ext, size_bytes, sha256).
    Lève ValueError si invalide.
    """
    size = len(file_bytes)
    if size == 0:
        raise ValueError("Empty file")
    if size > max_mb * 1024 * 1024:
        raise ValueError(f"File too large (max {max_mb} MB)")

    real_mime, ext = detect_mime_and_ext(file_bytes)
    if real_mime not in ALLOWED_VIDEO_MIME:
        raise ValueError(f"Please select a video file (got {real_mime})")

    sha = hashlib.sha256(file_bytes).hexdigest()
    return real_mime, ext, size, sha


def build_local_id() -> str:
    """
    Identifiant opaque du blob local.
    Exemple : local_1734518400000_9f2c1a
    """
    return f"local_{int(time.time() * 1000)}_{secrets.token_hex(3)}"
