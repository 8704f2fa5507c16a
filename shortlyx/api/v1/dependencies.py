"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_video_service() : crée un VideoService à partir d’une session DB.

get_current_user_ctx() : résout le Bearer token en utilisateur qui agit (UserCtx).

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from shortlyx.core.config import session_token_settings, settings
from shortlyx.core.context import UserCtx
from shortlyx.core.exceptions import NotAuthenticated
from shortlyx.db.models.users import User
from shortlyx.db.session import get_session

from shortlyx.db.repositories.users import UserRepository
from shortlyx.db.repositories.session import SessionRepository
from shortlyx.db.repositories.videos import VideoRepository
from shortlyx.db.repositories.video_blobs import VideoBlobRepository
from shortlyx.db.repositories.logs import LogRepository
from shortlyx.db.repositories.settings import SettingsRepository

from shortlyx.features.logs.services import LogService
from shortlyx.features.authentication.services import AuthService
from shortlyx.features.users.services import UserService
from shortlyx.features.videos.services import VideoService
from shortlyx.features.media.services import MediaIngestionService, make_remote_uploader
from shortlyx.features.media.playback import PlaybackResolver
from shortlyx.features.analytics.services import AnalyticsService, RevenueService
from shortlyx.features.settings.services import SettingsService


# -----------------------------
# Repositories
# -----------------------------
def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)

def get_session_repository(session: Session = Depends(get_session)) -> SessionRepository:
    return SessionRepository(session)

def get_video_repository(session: Session = Depends(get_session)) -> VideoRepository:
    return VideoRepository(session)

def get_video_blob_repository(session: Session = Depends(get_session)) -> VideoBlobRepository:
    return VideoBlobRepository(session)

def get_log_repository(session: Session = Depends(get_session)) -> LogRepository:
    return LogRepository(session)

def get_settings_repository(session: Session = Depends(get_session)) -> SettingsRepository:
    return SettingsRepository(session)


# -----------------------------
# Logs
# -----------------------------
def get_log_service(log_repo: LogRepository = Depends(get_log_repository)) -> LogService:
    return LogService(log_repo)


# -----------------------------
# Auth / Users
# -----------------------------
def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    session_repo: SessionRepository = Depends(get_session_repository),
    log_svc: LogService = Depends(get_log_service),
) -> AuthService:
    return AuthService(
        user_repo=user_repo,
        session_repo=session_repo,
        log_svc=log_svc,
        token_settings=session_token_settings,
    )

def get_user_service(
    user_repo: UserRepository = Depends(get_user_repository),
    video_repo: VideoRepository = Depends(get_video_repository),
) -> UserService:
    return UserService(user_repo, video_repo)


# -----------------------------
# Videos / Media
# -----------------------------
def get_video_service(
    video_repo: VideoRepository = Depends(get_video_repository),
    blob_repo: VideoBlobRepository = Depends(get_video_blob_repository),
    log_svc: LogService = Depends(get_log_service),
) -> VideoService:
    return VideoService(repo=video_repo, blob_repo=blob_repo, log_svc=log_svc)

def get_media_ingestion_service(
    blob_repo: VideoBlobRepository = Depends(get_video_blob_repository),
) -> MediaIngestionService:
    # Mode distant seulement si l'hébergeur est configuré (sinon stockage local)
    return MediaIngestionService(blob_repo=blob_repo, remote=make_remote_uploader())

def get_playback_resolver(
    blob_repo: VideoBlobRepository = Depends(get_video_blob_repository),
) -> PlaybackResolver:
    return PlaybackResolver(
        blob_repo=blob_repo,
        attempts=settings.BLOB_READ_ATTEMPTS,
        backoff_seconds=settings.BLOB_READ_BACKOFF_SECONDS,
    )


# -----------------------------
# Analytics / Settings
# -----------------------------
def get_analytics_service(
    video_repo: VideoRepository = Depends(get_video_repository),
    log_svc: LogService = Depends(get_log_service),
) -> AnalyticsService:
    return AnalyticsService(video_repo=video_repo, log_svc=log_svc)

def get_revenue_service(
    video_repo: VideoRepository = Depends(get_video_repository),
) -> RevenueService:
    return RevenueService(video_repo=video_repo)

def get_settings_service(
    settings_repo: SettingsRepository = Depends(get_settings_repository),
) -> SettingsService:
    return SettingsService(settings_repo)


# -----------------------------
# Authentication data
# -----------------------------
# auto_error=False : on lève notre propre NotAuthenticated (format JSON homogène)
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token_from_bearer(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise NotAuthenticated("Missing or invalid bearer token")
    return credentials.credentials


def get_current_user(
    access_token: str = Depends(get_access_token_from_bearer),
    auth_svc: AuthService = Depends(get_auth_service),
) -> User:
    return auth_svc.resolve_token(access_token)


def get_current_user_ctx(user: User = Depends(get_current_user)) -> UserCtx:
    return UserCtx.from_user(user)
