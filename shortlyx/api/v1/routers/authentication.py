from fastapi import APIRouter, Depends, status

from shortlyx.api.v1.dependencies import get_auth_service, get_current_user
from shortlyx.db.models.users import User
from shortlyx.features.authentication.services import AuthService
from shortlyx.features.authentication.schemas import (
    SignUpIn,
    SignInIn,
    SessionOut,
    AuthStatusOut,
)
from shortlyx.features.users.schemas import UserOut

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Sign-up
# -----------------------------
@router.post(
    "/sign-up",
    summary="Créer un compte",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={409: {"description": "Nom d'utilisateur ou email déjà pris"}},
)
def sign_up(payload: SignUpIn, svc: AuthService = Depends(get_auth_service)):
    return svc.signup(payload.username, payload.email, payload.password)

# -----------------------------
# Sign-in
# -----------------------------
@router.post(
    "/sign-in",
    summary="Se connecter",
    description="Ouvre la session unique (remplace la précédente) et retourne un token de session.",
    response_model=SessionOut,
    responses={401: {"description": "Identifiants invalides"}},
)
def sign_in(payload: SignInIn, svc: AuthService = Depends(get_auth_service)):
    user, token = svc.login(payload.username, payload.password)
    return SessionOut(access_token=token, user=UserOut.model_validate(user))

# -----------------------------
# Logout
# -----------------------------
@router.post(
    "/logout",
    summary="Se déconnecter (fin de la session active)",
    status_code=status.HTTP_204_NO_CONTENT,
)
def logout(
    _user: User = Depends(get_current_user),
    svc: AuthService = Depends(get_auth_service),
):
    svc.logout()
    return None

# -----------------------------
# Me (profil courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'utilisateur courant",
    response_model=UserOut,
    responses={401: {"description": "Token invalide ou session terminée"}},
)
def me(user: User = Depends(get_current_user)):
    return user

# -----------------------------
# Statut (public)
# -----------------------------
@router.get(
    "/status",
    summary="Savoir si une session est active",
    response_model=AuthStatusOut,
)
def auth_status(svc: AuthService = Depends(get_auth_service)):
    user = svc.current_user()
    return AuthStatusOut(
        authenticated=user is not None,
        user=UserOut.model_validate(user) if user else None,
    )
