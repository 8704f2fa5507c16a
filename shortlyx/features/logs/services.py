"""
➡️ But : Journal d'activité (table `logs`).

LogService : ajout d'entrées, lectures chronologiques, filtre par type, purge,
et export d'un rapport texte téléchargeable.

Toutes les actions qui modifient l'état passent par `append`.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from shortlyx.core.config import settings
from shortlyx.db.models.base import utcnow
from shortlyx.db.models.logs import Log, LogType
from shortlyx.db.repositories.logs import LogRepository

logger = logging.getLogger(__name__)

REPORT_FILENAME = "shortlyx-logs.txt"
_REPORT_MESSAGE_WIDTH = 80


class LogService:
    def __init__(self, repo: LogRepository, *, now_fn: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.now_fn = now_fn

    # --------------- Commands ---------------
    def append(self, log_type: LogType, message: str, metadata: Optional[Dict[str, Any]] = None) -> Log:
        entry = self.repo.create(
            type=LogType(log_type).value,
            message=message,
            timestamp=self.now_fn(),
            meta=metadata,
        )
        logger.debug("activity %s: %s", entry.type, message)
        return entry

    def clear(self) -> int:
        deleted = self.repo.clear()
        logger.info("Cleared %d activity log entries", deleted)
        return deleted

    # --------------- Queries ---------------
    def list_all(self) -> Sequence[Log]:
        """Ordre chronologique."""
        return self.repo.list_by_date()

    def list_recent(self) -> Sequence[Log]:
        """Plus récents d'abord (page Logs)."""
        return self.repo.list_by_date(newest_first=True)

    def list_by_type(self, log_type: LogType) -> Sequence[Log]:
        return self.repo.list_by_type(LogType(log_type).value)

    def count_by_type(self) -> Dict[str, int]:
        counts = {t.value: 0 for t in LogType}
        for entry in self.repo.list_by_date():
            counts[entry.type] = counts.get(entry.type, 0) + 1
        return counts

    # --------------- Export ---------------
    def export_report(self, *, newest_first: bool = True) -> str:
        """Rapport texte : titre, date de génération, une ligne par entrée."""
        entries: List[Log] = list(self.repo.list_by_date(newest_first=newest_first))
        lines = [
            f"{settings.APP_NAME} Activity Logs",
            f"Generated: {self.now_fn():%Y-%m-%d %H:%M:%S} UTC",
            f"Entries: {len(entries)}",
            "",
        ]
        for entry in entries:
            message = entry.message[:_REPORT_MESSAGE_WIDTH]
            lines.append(f"[{entry.type.upper()}] {entry.timestamp:%Y-%m-%d %H:%M:%S} {message}")
        return "\n".join(lines) + "\n"
