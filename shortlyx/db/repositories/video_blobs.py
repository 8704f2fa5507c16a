from typing import Optional

from shortlyx.db.repositories.base import BaseRepository
from shortlyx.db.models.video_blobs import VideoBlob


class VideoBlobRepository(BaseRepository[VideoBlob]):
    model = VideoBlob

    def put(self, blob_id: str, data: bytes, *, content_type: str, sha256: Optional[str] = None) -> VideoBlob:
        """Écrit (ou écrase) le blob sous cet identifiant : un blob par identifiant."""
        existing = self.get(blob_id)
        if existing:
            return self.update(existing, data=data, content_type=content_type, size_bytes=len(data), sha256=sha256)
        return self.create(id=blob_id, data=data, content_type=content_type, size_bytes=len(data), sha256=sha256)
