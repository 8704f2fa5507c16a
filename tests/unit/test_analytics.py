"""
Unit tests for AnalyticsService and RevenueService
"""
from datetime import datetime, timezone

import pytest

from shortlyx.core.context import UserCtx
from shortlyx.db.models.logs import LogType
from shortlyx.features.analytics.services import (
    MONTHLY_TREND,
    RATES,
    AnalyticsService,
    RevenueService,
    caption_preview,
    last_month_labels,
)
from shortlyx.features.media.schemas import IngestResult


def media(name: str) -> IngestResult:
    return IngestResult(media_uri=f"https://cdn.example.com/{name}.mp4", thumbnail_uri="", public_id=name)


@pytest.fixture
def alice_videos(video_svc, alice, bob):
    """Deux vidéos d'alice (avec interactions) + une vidéo de bob."""
    a, b = UserCtx.from_user(alice), UserCtx.from_user(bob)
    first = video_svc.create(a, media("one"), caption="A very long caption indeed")
    second = video_svc.create(a, media("two"), caption="Short")
    video_svc.create(b, media("three"), caption="Not alice")

    for _ in range(10):
        video_svc.record_view(first.id)
    video_svc.record_view(second.id)
    video_svc.toggle_like(first.id, currently_liked=False, user=b)
    video_svc.toggle_like(first.id, currently_liked=False, user=b)
    video_svc.post_comment(first.id, b, "nice")
    video_svc.post_comment(second.id, b, "cool")
    video_svc.post_comment(second.id, a, "thanks")
    return first, second


@pytest.mark.unit
class TestAnalytics:
    def test_totals_only_count_own_videos(self, video_repo, log_svc, alice, alice_videos):
        out = AnalyticsService(video_repo=video_repo, log_svc=log_svc).summary(alice.id)
        assert out.total_videos == 2
        assert out.total_views == 11
        assert out.total_likes == 2
        assert out.total_comments == 3
        assert [(e.name, e.value) for e in out.engagement] == [("Views", 11), ("Likes", 2), ("Comments", 3)]

    def test_activity_distribution(self, video_repo, log_svc, alice, alice_videos):
        log_svc.append(LogType.SEARCH, "Searched for: abc")
        out = AnalyticsService(video_repo=video_repo, log_svc=log_svc).summary(alice.id)
        activity = {a.name: a.count for a in out.activity}
        assert activity == {"Login": 0, "Upload": 3, "Like": 2, "Comment": 3, "Search": 1}

    def test_top_videos_captions_truncated(self, video_repo, log_svc, alice, alice_videos):
        out = AnalyticsService(video_repo=video_repo, log_svc=log_svc).summary(alice.id)
        assert [v.name for v in out.top_videos] == ["A very long cap...", "Short..."]
        assert out.top_videos[0].comments == 1

    def test_empty_user(self, video_repo, log_svc, alice):
        out = AnalyticsService(video_repo=video_repo, log_svc=log_svc).summary(alice.id)
        assert out.total_videos == 0
        assert out.top_videos == []

    def test_caption_preview(self):
        assert caption_preview("abc") == "abc..."
        assert caption_preview("x" * 20) == "x" * 15 + "..."


@pytest.mark.unit
class TestRevenue:
    def test_per_video_and_totals(self, video_repo, alice, alice_videos):
        now = lambda: datetime(2025, 3, 10, tzinfo=timezone.utc)
        out = RevenueService(video_repo=video_repo, now_fn=now).summary(alice.id)

        first, second = out.videos
        assert first.view_earnings == pytest.approx(10 * 0.05)
        assert first.like_earnings == pytest.approx(2 * 0.10)
        assert first.comment_earnings == pytest.approx(1 * 0.15)
        assert first.total_earnings == pytest.approx(0.85)
        assert second.total_earnings == pytest.approx(0.05 + 2 * 0.15)

        assert out.total_earnings == pytest.approx(0.85 + 0.35)
        assert out.currency == "INR"
        assert out.rates == RATES

    def test_monthly_trend(self, video_repo, alice, alice_videos):
        now = lambda: datetime(2025, 3, 10, tzinfo=timezone.utc)
        out = RevenueService(video_repo=video_repo, now_fn=now).summary(alice.id)

        assert [m.month for m in out.monthly] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]
        assert [m.earnings for m in out.monthly] == pytest.approx([out.total_earnings * f for f in MONTHLY_TREND])
        assert out.monthly[-1].earnings == pytest.approx(out.total_earnings)

    def test_month_labels_cross_year(self):
        assert last_month_labels(datetime(2024, 12, 31).date()) == ["Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
