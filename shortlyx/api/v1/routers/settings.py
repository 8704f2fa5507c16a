from fastapi import APIRouter, Depends

from shortlyx.api.v1.dependencies import get_current_user, get_settings_service
from shortlyx.db.models.users import User
from shortlyx.features.settings.schemas import SettingsOut, SettingsUpdate
from shortlyx.features.settings.services import SettingsService

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
    responses={404: {"description": "Not Found"}},
)

@router.get("", summary="Lire les préférences", response_model=SettingsOut)
def get_settings(
    _user: User = Depends(get_current_user),
    svc: SettingsService = Depends(get_settings_service),
):
    return svc.get()

@router.put("", summary="Enregistrer les préférences", response_model=SettingsOut)
def save_settings(
    payload: SettingsUpdate,
    _user: User = Depends(get_current_user),
    svc: SettingsService = Depends(get_settings_service),
):
    return svc.save(payload)
