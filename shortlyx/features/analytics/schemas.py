from typing import Dict, List

from pydantic import BaseModel


class BreakdownItem(BaseModel):
    name: str
    value: float


class ActivityItem(BaseModel):
    name: str
    count: int


class VideoPerformance(BaseModel):
    video_id: str
    name: str
    views: int
    likes: int
    comments: int


class AnalyticsOut(BaseModel):
    total_videos: int
    total_views: int
    total_likes: int
    total_comments: int
    engagement: List[BreakdownItem]
    activity: List[ActivityItem]
    top_videos: List[VideoPerformance]


# ---------- Revenue (INR) ----------

class VideoRevenue(BaseModel):
    video_id: str
    caption: str
    views: int
    likes: int
    comments: int
    view_earnings: float
    like_earnings: float
    comment_earnings: float
    total_earnings: float


class MonthlyEarnings(BaseModel):
    month: str
    earnings: float


class RevenueOut(BaseModel):
    currency: str = "INR"
    rates: Dict[str, float]
    videos: List[VideoRevenue]
    total_view_earnings: float
    total_like_earnings: float
    total_comment_earnings: float
    total_earnings: float
    breakdown: List[BreakdownItem]
    monthly: List[MonthlyEarnings]
