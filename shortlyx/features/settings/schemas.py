from typing import Literal, Optional

from pydantic import BaseModel


class SettingsOut(BaseModel):
    theme: Literal["dark", "light"]
    autoplay: bool
    notifications: bool

    model_config = {"from_attributes": True}


class SettingsUpdate(BaseModel):
    # Mise à jour partielle : seuls les champs fournis changent
    theme: Optional[Literal["dark", "light"]] = None
    autoplay: Optional[bool] = None
    notifications: Optional[bool] = None
