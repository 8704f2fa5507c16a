import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypedDict

from jose import jwt, JWTError

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation des tokens de session
# ==========================================================

@dataclass(frozen=True)
class SessionTokenSettings:
    """
    Configuration des tokens de session.

    - `secret` : clé secrète pour signer/valider les tokens
    - `issuer` : émetteur (utilisé dans le payload)
    - `algorithm` : algo de signature (HS256 recommandé)

    Pas de TTL : une session reste valide jusqu'au logout explicite.
    """
    secret: str
    issuer: str = "shortlyx"
    algorithm: str = "HS256"


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedSessionToken(TypedDict, total=False):
    iss: str
    sub: str            # identifiant utilisateur
    username: str
    typ: str            # "session"
    jti: str
    iat: int


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique pour un token."""
    return str(uuid.uuid4())


# ==========================================================
# 🎟️ Génération
# ==========================================================

def create_session_token(*, user_id: str, username: str, settings: SessionTokenSettings) -> str:
    """
    Crée le token remis au client après un login réussi.
    Il ne fait que désigner la session active : la vérité reste la table `session`.
    """
    payload: DecodedSessionToken = {
        "iss": settings.issuer,
        "sub": user_id,
        "username": username,
        "typ": "session",
        "jti": new_jti(),
        "iat": int(_now().timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_session_token(token: str, settings: SessionTokenSettings) -> DecodedSessionToken:
    """
    Décode et valide un token de session (signature + type).
    Lève JWTError si la signature est invalide ou si ce n'est pas un token de session.
    """
    decoded = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        options={"verify_aud": False},
    )
    if decoded.get("typ") != "session" or not decoded.get("sub"):
        raise JWTError("Invalid token type")
    return decoded  # type: ignore[return-value]
