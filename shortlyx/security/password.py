import bcrypt

from shortlyx.core.config import settings

# bcrypt ignore tout au-delà de 72 octets : on tronque explicitement
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, *, rounds: int | None = None) -> str:
    """Hash salé bcrypt (coût réglé pour un login interactif, pas instantané)."""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Vérifie un mot de passe contre le hash stocké. Un hash illisible = échec."""
    try:
        return bcrypt.checkpw(_encode(password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
