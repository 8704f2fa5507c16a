"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

UserOut → réponse de l’API (jamais le hash du mot de passe)

ProfileOut → page profil : utilisateur + ses vidéos + totaux
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from shortlyx.features.videos.schemas import VideoOut


class UserOut(BaseModel):
    id: str
    username: str
    email: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    last_login: Optional[datetime] = None
    # hashed_password: jamais exposé

    model_config = {"from_attributes": True}


class ProfileOut(BaseModel):
    user: UserOut
    videos: List[VideoOut]
    total_videos: int
    total_likes: int
    total_views: int
