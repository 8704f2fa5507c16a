from typing import Sequence

from shortlyx.db.repositories.base import BaseRepository
from shortlyx.db.models.videos import Video


class VideoRepository(BaseRepository[Video]):
    """CRUD Vidéos + lectures par index (by-user, by-date)."""
    model = Video

    def list_by_date(self, *, newest_first: bool = False) -> Sequence[Video]:
        return self.list_by_index(self.model.uploaded_at, descending=newest_first)

    def list_by_user(self, user_id: str, *, newest_first: bool = False) -> Sequence[Video]:
        """Vidéos d'un utilisateur, dans l'ordre d'insertion (ou l'inverse)."""
        return self.list_by_index(self.model.user_id, user_id, descending=newest_first)
