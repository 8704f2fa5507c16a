from typing import Optional
from sqlmodel import select

from shortlyx.db.repositories.base import BaseRepository
from shortlyx.db.models.session import SessionRecord


class SessionRepository(BaseRepository[SessionRecord]):
    """Au plus une session active : chaque écriture remplace la précédente."""
    model = SessionRecord

    def current(self) -> Optional[SessionRecord]:
        return self.session.exec(select(self.model)).first()

    def replace(self, user_id: str) -> SessionRecord:
        self.clear()
        return self.create(user_id=user_id)
