from typing import Optional

from shortlyx.db.repositories.base import BaseRepository
from shortlyx.db.models.settings import DEFAULT_SETTINGS_ID, UserSettings


class SettingsRepository(BaseRepository[UserSettings]):
    model = UserSettings

    def get_current(self) -> Optional[UserSettings]:
        return self.get(DEFAULT_SETTINGS_ID)
