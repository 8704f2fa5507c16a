import io
from fractions import Fraction
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from shortlyx.api.v1.dependencies import (
    get_media_ingestion_service,
    get_playback_resolver,
    get_video_blob_repository,
)
from shortlyx.core.config import settings, session_token_settings
from shortlyx.db.repositories.logs import LogRepository
from shortlyx.db.repositories.session import SessionRepository
from shortlyx.db.repositories.settings import SettingsRepository
from shortlyx.db.repositories.users import UserRepository
from shortlyx.db.repositories.video_blobs import VideoBlobRepository
from shortlyx.db.repositories.videos import VideoRepository
from shortlyx.db.session import Store
from shortlyx.features.authentication.services import AuthService
from shortlyx.features.logs.services import LogService
from shortlyx.features.media.local import VideoProbe
from shortlyx.features.media.playback import PlaybackResolver
from shortlyx.features.media.services import MediaIngestionService
from shortlyx.features.videos.services import VideoService
from shortlyx.main import create_app

# En-tête ISO-BMFF minimal : reconnu comme video/mp4 par filetype
FAKE_MP4 = b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00isomiso2" + b"\x00" * 1024

# Plus petit JPEG utile pour les miniatures simulées
FAKE_JPEG = b"\xff\xd8\xff\xe0fake-jpeg\xff\xd9"


class Clock:
    """Horloge déterministe : chaque appel avance d'une seconde."""

    def __init__(self, start: datetime = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


def fake_probe(file_bytes: bytes, *, offset_seconds: float = 0.1, jpeg_quality: int = 70) -> VideoProbe:
    return VideoProbe(duration_seconds=12.5, width=1080, height=1920, thumbnail_jpeg=FAKE_JPEG)


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    """bcrypt au coût minimal et mode local forcé pour tous les tests."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(settings, "MEDIA_REMOTE_ENABLED", False)


@pytest.fixture
def store(tmp_path) -> Generator[Store, None, None]:
    """Un Store SQLite par test, sur un fichier temporaire."""
    s = Store(f"sqlite:///{tmp_path / 'shortlyx-test.db'}").init()
    yield s
    s.close()


@pytest.fixture
def session(store):
    with store.session() as s:
        yield s


@pytest.fixture
def clock():
    return Clock()


# -----------------------------
# Repositories / services
# -----------------------------
@pytest.fixture
def user_repo(session):
    return UserRepository(session)


@pytest.fixture
def video_repo(session):
    return VideoRepository(session)


@pytest.fixture
def blob_repo(session):
    return VideoBlobRepository(session)


@pytest.fixture
def log_repo(session):
    return LogRepository(session)


@pytest.fixture
def settings_repo(session):
    return SettingsRepository(session)


@pytest.fixture
def log_svc(log_repo, clock):
    return LogService(log_repo, now_fn=clock)


@pytest.fixture
def auth_svc(user_repo, session, log_svc, clock):
    return AuthService(
        user_repo=user_repo,
        session_repo=SessionRepository(session),
        log_svc=log_svc,
        token_settings=session_token_settings,
        now_fn=clock,
    )


@pytest.fixture
def video_svc(video_repo, blob_repo, log_svc, clock):
    return VideoService(repo=video_repo, blob_repo=blob_repo, log_svc=log_svc, now_fn=clock)


@pytest.fixture
def ingest_svc(blob_repo):
    return MediaIngestionService(blob_repo=blob_repo, probe_fn=fake_probe)


@pytest.fixture
def alice(auth_svc):
    return auth_svc.signup("alice", "alice@example.com", "s3cret-pass")


@pytest.fixture
def bob(auth_svc):
    return auth_svc.signup("bob", "bob@example.com", "hunter22")


@pytest.fixture
def fake_mp4() -> bytes:
    return FAKE_MP4


@pytest.fixture
def sample_mp4() -> bytes:
    """Vraie vidéo MP4 (1 s, 10 images 64x48) encodée avec PyAV."""
    av = pytest.importorskip("av")
    from PIL import Image

    buf = io.BytesIO()
    with av.open(buf, mode="w", format="mp4") as container:
        stream = container.add_stream("mpeg4", rate=10)
        stream.width = 64
        stream.height = 48
        stream.pix_fmt = "yuv420p"
        for i in range(10):
            image = Image.new("RGB", (64, 48), (i * 20, 80, 160))
            frame = av.VideoFrame.from_image(image)
            frame.pts = i
            frame.time_base = Fraction(1, 10)
            for packet in stream.encode(frame):
                container.mux(packet)
        for packet in stream.encode():
            container.mux(packet)
    return buf.getvalue()


# -----------------------------
# API
# -----------------------------
@pytest.fixture
def app(store):
    application = create_app(store)

    def _ingestion_override(blob_repo: VideoBlobRepository = Depends(get_video_blob_repository)):
        return MediaIngestionService(blob_repo=blob_repo, probe_fn=fake_probe)

    def _playback_override(blob_repo: VideoBlobRepository = Depends(get_video_blob_repository)):
        return PlaybackResolver(blob_repo=blob_repo, sleep_fn=lambda _: None)

    application.dependency_overrides[get_media_ingestion_service] = _ingestion_override
    application.dependency_overrides[get_playback_resolver] = _playback_override
    return application


@pytest.fixture
def test_client(app) -> Generator[TestClient, None, None]:
    """Client HTTP de test (déclenche startup/shutdown)."""
    with TestClient(app) as client:
        yield client


def _sign_up_and_in(client: TestClient, username: str, password: str = "pass-1234") -> dict:
    """Crée un compte, se connecte et renvoie les en-têtes Authorization."""
    resp = client.post(
        "/api/v1/auth/sign-up",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert resp.status_code == 201, resp.text
    resp = client.post("/api/v1/auth/sign-in", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def login(test_client):
    """Fabrique : login("bob") -> en-têtes Authorization pour un nouveau compte."""
    return lambda username, password="pass-1234": _sign_up_and_in(test_client, username, password)


@pytest.fixture
def auth_headers(login) -> dict:
    return login("alice")
