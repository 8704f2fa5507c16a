"""
➡️ But : Statistiques et revenus simulés, calculés à la volée sur les vidéos d'un utilisateur.

AnalyticsService : totaux, répartition de l'engagement, répartition de l'activité (journal),
top 5 des vidéos.

RevenueService : gains en roupies (INR) par vue / like / commentaire,
détail par vidéo + tendance simulée sur 6 mois.

Rien n'est persisté : tout est dérivé des tables videos et logs.
"""

from datetime import date, datetime
from typing import Callable, List, Sequence

from shortlyx.db.models.base import utcnow
from shortlyx.db.models.logs import LogType
from shortlyx.db.models.videos import Video
from shortlyx.db.repositories.videos import VideoRepository
from shortlyx.features.analytics.schemas import (
    ActivityItem,
    AnalyticsOut,
    BreakdownItem,
    MonthlyEarnings,
    RevenueOut,
    VideoPerformance,
    VideoRevenue,
)
from shortlyx.features.logs.services import LogService

TOP_VIDEOS_LIMIT = 5
CAPTION_PREVIEW_LENGTH = 15

# Types d'activité affichés (dans cet ordre)
ACTIVITY_TYPES = (LogType.LOGIN, LogType.UPLOAD, LogType.LIKE, LogType.COMMENT, LogType.SEARCH)

# Gains en INR
RATES = {
    "view": 0.05,
    "like": 0.10,
    "comment": 0.15,
}

# Part du total atteinte chaque mois (le dernier = mois courant)
MONTHLY_TREND = (0.6, 0.7, 0.75, 0.85, 0.95, 1.0)


def caption_preview(caption: str) -> str:
    return caption[:CAPTION_PREVIEW_LENGTH] + "..."


def last_month_labels(today: date, count: int = len(MONTHLY_TREND)) -> List[str]:
    """Abréviations des `count` derniers mois, du plus ancien au mois courant."""
    labels = []
    year, month = today.year, today.month
    for _ in range(count):
        labels.append(date(year, month, 1).strftime("%b"))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(labels))


class AnalyticsService:
    def __init__(self, *, video_repo: VideoRepository, log_svc: LogService):
        self.videos = video_repo
        self.logs = log_svc

    def _videos_for(self, user_id: str) -> Sequence[Video]:
        return self.videos.list_by_user(user_id)

    def summary(self, user_id: str) -> AnalyticsOut:
        videos = self._videos_for(user_id)
        total_views = sum(v.views for v in videos)
        total_likes = sum(v.likes for v in videos)
        total_comments = sum(len(v.comments) for v in videos)

        # Le journal est global (un seul acteur)
        counts = self.logs.count_by_type()

        return AnalyticsOut(
            total_videos=len(videos),
            total_views=total_views,
            total_likes=total_likes,
            total_comments=total_comments,
            engagement=[
                BreakdownItem(name="Views", value=total_views),
                BreakdownItem(name="Likes", value=total_likes),
                BreakdownItem(name="Comments", value=total_comments),
            ],
            activity=[
                ActivityItem(name=t.value.capitalize(), count=counts.get(t.value, 0))
                for t in ACTIVITY_TYPES
            ],
            top_videos=[
                VideoPerformance(
                    video_id=v.id,
                    name=caption_preview(v.caption),
                    views=v.views,
                    likes=v.likes,
                    comments=len(v.comments),
                )
                for v in videos[:TOP_VIDEOS_LIMIT]
            ],
        )


class RevenueService:
    def __init__(self, *, video_repo: VideoRepository, now_fn: Callable[[], datetime] = utcnow):
        self.videos = video_repo
        self.now_fn = now_fn

    @staticmethod
    def video_revenue(video: Video) -> VideoRevenue:
        comments = len(video.comments)
        view_earnings = video.views * RATES["view"]
        like_earnings = video.likes * RATES["like"]
        comment_earnings = comments * RATES["comment"]
        return VideoRevenue(
            video_id=video.id,
            caption=video.caption,
            views=video.views,
            likes=video.likes,
            comments=comments,
            view_earnings=view_earnings,
            like_earnings=like_earnings,
            comment_earnings=comment_earnings,
            total_earnings=view_earnings + like_earnings + comment_earnings,
        )

    def summary(self, user_id: str) -> RevenueOut:
        per_video = [self.video_revenue(v) for v in self.videos.list_by_user(user_id)]
        total_views = sum(r.view_earnings for r in per_video)
        total_likes = sum(r.like_earnings for r in per_video)
        total_comments = sum(r.comment_earnings for r in per_video)
        total = total_views + total_likes + total_comments

        months = last_month_labels(self.now_fn().date())
        return RevenueOut(
            rates=dict(RATES),
            videos=per_video,
            total_view_earnings=total_views,
            total_like_earnings=total_likes,
            total_comment_earnings=total_comments,
            total_earnings=total,
            breakdown=[
                BreakdownItem(name="Views", value=total_views),
                BreakdownItem(name="Likes", value=total_likes),
                BreakdownItem(name="Comments", value=total_comments),
            ],
            monthly=[
                MonthlyEarnings(month=label, earnings=total * factor)
                for label, factor in zip(months, MONTHLY_TREND)
            ],
        )
