from fastapi import APIRouter, Depends

from shortlyx.api.v1.dependencies import get_current_user, get_user_service
from shortlyx.db.models.users import User
from shortlyx.features.users.schemas import ProfileOut
from shortlyx.features.users.services import UserService

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not Found"}},
)

@router.get(
    "/{user_id}/profile",
    summary="Profil d'un utilisateur (vidéos + totaux)",
    response_model=ProfileOut,
)
def get_profile(
    user_id: str,
    _user: User = Depends(get_current_user),
    svc: UserService = Depends(get_user_service),
):
    return svc.profile(user_id)
