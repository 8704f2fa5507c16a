"""
➡️ But : Contenir la logique métier : orchestrer les repos, appliquer des règles, gérer les erreurs.

UserService : profil public d'un utilisateur (vidéos + totaux).

🔹 Avantages :

Code métier découplé du web.

Test unitaire possible sans passer par FastAPI.
"""

from shortlyx.core.exceptions import NotFound
from shortlyx.db.models.users import User
from shortlyx.db.repositories.users import UserRepository
from shortlyx.db.repositories.videos import VideoRepository
from shortlyx.features.users.schemas import ProfileOut, UserOut
from shortlyx.features.videos.schemas import VideoOut


class UserService:
    def __init__(self, repo: UserRepository, video_repo: VideoRepository):
        self.repo = repo
        self.videos = video_repo

    def get(self, user_id: str) -> User:
        user = self.repo.get(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def profile(self, user_id: str) -> ProfileOut:
        user = self.get(user_id)
        videos = self.videos.list_by_user(user.id, newest_first=True)
        return ProfileOut(
            user=UserOut.model_validate(user),
            videos=[VideoOut.from_model(v) for v in videos],
            total_videos=len(videos),
            total_likes=sum(v.likes for v in videos),
            total_views=sum(v.views for v in videos),
        )
