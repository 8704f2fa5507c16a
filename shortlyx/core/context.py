from dataclasses import dataclass

from shortlyx.db.models.users import User


@dataclass(frozen=True)
class UserCtx:
    """
    Utilisateur qui agit, résolu une fois par requête (dépendance API)
    puis passé explicitement aux services.
    """
    user_id: str
    username: str

    @classmethod
    def from_user(cls, user: User) -> "UserCtx":
        return cls(user_id=user.id, username=user.username)
