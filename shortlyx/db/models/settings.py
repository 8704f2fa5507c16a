from sqlmodel import Field, SQLModel

DEFAULT_SETTINGS_ID = "default"


class UserSettings(SQLModel, table=True):
    """Préférences d'affichage (un seul enregistrement)."""

    __tablename__ = "settings"

    id: str = Field(default=DEFAULT_SETTINGS_ID, primary_key=True)
    theme: str = Field(default="dark", description="dark | light")
    autoplay: bool = Field(default=True)
    notifications: bool = Field(default=True)
