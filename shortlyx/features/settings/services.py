from shortlyx.db.models.settings import DEFAULT_SETTINGS_ID, UserSettings
from shortlyx.db.repositories.settings import SettingsRepository
from shortlyx.features.settings.schemas import SettingsUpdate


class SettingsService:
    """Préférences d'affichage : un seul enregistrement, valeurs par défaut si absent."""

    def __init__(self, repo: SettingsRepository):
        self.repo = repo

    def get(self) -> UserSettings:
        return self.repo.get_current() or UserSettings(id=DEFAULT_SETTINGS_ID)

    def save(self, payload: SettingsUpdate) -> UserSettings:
        current = self.get()
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in changes.items():
            setattr(current, key, value)
        return self.repo.save(current)
