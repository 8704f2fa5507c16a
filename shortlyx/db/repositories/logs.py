from typing import Sequence

from shortlyx.db.repositories.base import BaseRepository
from shortlyx.db.models.logs import Log


class LogRepository(BaseRepository[Log]):
    """Journal d'activité : pas d'update exposé côté service (append-only)."""
    model = Log

    def list_by_date(self, *, newest_first: bool = False) -> Sequence[Log]:
        return self.list_by_index(self.model.timestamp, descending=newest_first)

    def list_by_type(self, log_type: str) -> Sequence[Log]:
        return self.list_by_index(self.model.type, log_type)
