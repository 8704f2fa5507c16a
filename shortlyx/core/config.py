"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, secrets, hébergeur média, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from shortlyx.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from typing import Optional

from pydantic_settings import BaseSettings

from shortlyx.security.tokens import SessionTokenSettings

# Valeurs "placeholder" : tant qu'elles sont présentes, on reste en mode local (démo)
PLACEHOLDER_CLOUD_NAME = "YOUR_CLOUD_NAME"
PLACEHOLDER_UPLOAD_PRESET = "YOUR_UPLOAD_PRESET"


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "ShortlyX"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "shortlyx.db"  # fichier SQLite
    # Si tu veux forcer une URL différente, définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # Auth / Session
    # -----------------------------
    SESSION_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    SESSION_ISSUER: str = "shortlyx"
    SESSION_ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 10                   # coût bcrypt (login interactif)

    # -----------------------------
    # Hébergeur média (Cloudinary, upload non signé)
    # -----------------------------
    CLOUDINARY_CLOUD_NAME: str = PLACEHOLDER_CLOUD_NAME
    CLOUDINARY_UPLOAD_PRESET: str = PLACEHOLDER_UPLOAD_PRESET
    CLOUDINARY_API_BASE: str = "https://api.cloudinary.com/v1_1"
    CLOUDINARY_THUMBNAIL_TRANSFORM: str = "w_400,h_720,c_fill,f_jpg"
    UPLOAD_TIMEOUT_SECONDS: Optional[float] = None
    UPLOAD_CHUNK_BYTES: int = 64 * 1024

    # -----------------------------
    # Média local (fallback)
    # -----------------------------
    MAX_UPLOAD_MB: int = 200
    THUMBNAIL_OFFSET_SECONDS: float = 0.1
    THUMBNAIL_JPEG_QUALITY: int = 70
    BLOB_READ_ATTEMPTS: int = 3
    BLOB_READ_BACKOFF_SECONDS: float = 0.25

    # Calculé dans model_post_init
    MEDIA_REMOTE_ENABLED: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Mode distant seulement si de vrais identifiants Cloudinary sont fournis
        remote = (
            bool(self.CLOUDINARY_CLOUD_NAME)
            and bool(self.CLOUDINARY_UPLOAD_PRESET)
            and self.CLOUDINARY_CLOUD_NAME != PLACEHOLDER_CLOUD_NAME
            and self.CLOUDINARY_UPLOAD_PRESET != PLACEHOLDER_UPLOAD_PRESET
        )
        object.__setattr__(self, "MEDIA_REMOTE_ENABLED", remote)

    @property
    def cloudinary_upload_url(self) -> str:
        return f"{self.CLOUDINARY_API_BASE.rstrip('/')}/{self.CLOUDINARY_CLOUD_NAME}/video/upload"


# Instance globale importable partout
settings = Settings()

# Objet de signature des tokens de session prêt à l'emploi pour les services
session_token_settings = SessionTokenSettings(
    secret=settings.SESSION_SECRET_KEY,
    issuer=settings.SESSION_ISSUER,
    algorithm=settings.SESSION_ALGORITHM,
)
