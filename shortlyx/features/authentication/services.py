import logging
from datetime import datetime
from typing import Callable, Optional, Tuple

from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError

from shortlyx.core.exceptions import (
    ConstraintViolation,
    InvalidCredentials,
    NotAuthenticated,
    ShortlyXError,
)
from shortlyx.db.models.base import utcnow
from shortlyx.db.models.logs import LogType
from shortlyx.db.models.users import User
from shortlyx.db.repositories.session import SessionRepository
from shortlyx.db.repositories.users import UserRepository
from shortlyx.features.logs.services import LogService
from shortlyx.security.password import hash_password, verify_password
from shortlyx.security.tokens import (
    SessionTokenSettings,
    create_session_token,
    decode_session_token,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service d'authentification : orchestre les repositories + la session unique.
    Ne contient pas d'accès SQL direct et lève des erreurs métier (core.exceptions).
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        session_repo: SessionRepository,
        log_svc: LogService,
        token_settings: SessionTokenSettings,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.logs = log_svc
        self.tokens = token_settings
        self.now_fn = now_fn

    # ---------- Sign up ----------
    def signup(self, username: str, email: str, password: str) -> User:
        if self.user_repo.get_by_username(username):
            raise ConstraintViolation("Username already exists", field="username")
        if self.user_repo.get_by_email(email):
            raise ConstraintViolation("Email already exists", field="email")

        # L'index unique reste l'arbitre final : une collision lève aussi ConstraintViolation
        user = self.user_repo.create(
            username=username,
            email=email,
            hashed_password=hash_password(password),
            created_at=self.now_fn(),
        )
        self.logs.append(LogType.SIGNUP, f"User {username} signed up", {"userId": user.id})
        return user

    # ---------- Sign in ----------
    def login(self, username: str, password: str) -> Tuple[User, str]:
        user = self.user_repo.get_by_username(username)
        if not user or not verify_password(password, user.hashed_password):
            # Ne pas révéler si l'utilisateur existe
            raise InvalidCredentials()

        # Une seule session active : on écrase la précédente
        self.session_repo.replace(user.id)
        user = self.user_repo.update(user, last_login=self.now_fn())
        self.logs.append(LogType.LOGIN, f"User {username} logged in", {"userId": user.id})

        token = create_session_token(user_id=user.id, username=user.username, settings=self.tokens)
        return user, token

    # ---------- Logout ----------
    def logout(self) -> None:
        session = self.session_repo.current()
        if session is None:
            # Logout idempotent : rien à faire sans session
            return
        self.logs.append(LogType.LOGOUT, "User logged out", {"userId": session.user_id})
        self.session_repo.clear()

    # ---------- Session courante ----------
    def current_user(self) -> Optional[User]:
        """Utilisateur de la session active, ou None. Ne lève jamais."""
        try:
            session = self.session_repo.current()
            if session is None:
                return None
            return self.user_repo.get(session.user_id)
        except (SQLAlchemyError, ShortlyXError):
            logger.exception("Failed to resolve current user")
            return None

    def is_authenticated(self) -> bool:
        # Pas de TTL et pas de vérification de l'utilisateur : seule la présence compte
        return self.session_repo.current() is not None

    def resolve_token(self, token: str) -> User:
        """Token client -> utilisateur, seulement s'il désigne la session active."""
        try:
            decoded = decode_session_token(token, self.tokens)
        except JWTError:
            raise NotAuthenticated("Invalid token")

        session = self.session_repo.current()
        if session is None or session.user_id != decoded["sub"]:
            raise NotAuthenticated("Session ended, please log in again")

        user = self.user_repo.get(session.user_id)
        if not user:
            raise NotAuthenticated("Session ended, please log in again")
        return user
