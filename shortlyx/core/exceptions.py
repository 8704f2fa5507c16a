"""
➡️ But : Définir la taxonomie d'erreurs métier de l'application.

Les services lèvent ces exceptions (jamais d'erreur SQL brute) ;
le gestionnaire d'erreurs de l'app les traduit en réponses JSON via `to_dict()`.

🔹 Avantages :

Les services restent indépendants du web.

Un seul endroit pour le mapping erreur -> statut HTTP.
"""

from typing import Any, Dict, Optional

from fastapi import status


class ShortlyXError(Exception):
    """Erreur de base : message + code stable + détails optionnels."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        error_code: str = "SHORTLYX_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Corps JSON renvoyé au client."""
        return {"error_code": self.error_code, "message": self.message, "details": self.details}


class ConstraintViolation(ShortlyXError):
    """Clé primaire ou index unique déjà pris (ex : username existant)."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "Already exists", *, field: Optional[str] = None):
        super().__init__(message, "ALREADY_EXISTS", {"field": field} if field else None)


class InvalidCredentials(ShortlyXError):
    """Même message que l'utilisateur existe ou non (pas d'énumération)."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, "INVALID_CREDENTIALS")


class NotAuthenticated(ShortlyXError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, "NOT_AUTHENTICATED")


class PermissionDenied(ShortlyXError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, "PERMISSION_DENIED")


class UploadFailed(ShortlyXError):
    """Échec transport ou réponse non-succès de l'hébergeur média."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str = "Upload failed", *, detail: Optional[str] = None):
        super().__init__(message, "UPLOAD_FAILED", {"detail": detail} if detail else None)


class NotFound(ShortlyXError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message, "NOT_FOUND")


class ValidationFailed(ShortlyXError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, reason: str):
        super().__init__(reason, "VALIDATION_ERROR", {"field": field})


class StorageFailure(ShortlyXError):
    """Erreur de stockage inattendue : message générique, détail dans les logs."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str):
        super().__init__(
            "Something went wrong, please try again",
            "STORAGE_ERROR",
            {"operation": operation},
        )
