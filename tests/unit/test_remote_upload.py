"""
Unit tests for CloudinaryUploader

The media host is replaced by an httpx.MockTransport.
"""
import json

import httpx
import pytest

from shortlyx.core.exceptions import UploadFailed, ValidationFailed
from shortlyx.features.media.remote import NETWORK_ERROR_MESSAGE, CloudinaryUploader
from shortlyx.features.media.services import MediaIngestionService

UPLOAD_URL = "https://api.cloudinary.com/v1_1/demo/video/upload"
SECURE_URL = "https://res.cloudinary.com/demo/video/upload/v1700000000/abc123.mp4"


def make_uploader(handler, chunk_size: int = 256) -> CloudinaryUploader:
    return CloudinaryUploader(
        upload_url=UPLOAD_URL,
        upload_preset="unsigned_demo",
        thumbnail_transform="w_400,h_720,c_fill,f_jpg",
        chunk_size=chunk_size,
        client_factory=lambda: httpx.Client(transport=httpx.MockTransport(handler)),
    )


def ok_handler(captured: dict):
    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        captured["body"] = request.read()
        return httpx.Response(
            200,
            json={
                "secure_url": SECURE_URL,
                "public_id": "abc123",
                "format": "mp4",
                "duration": 14.2,
                "width": 1080,
                "height": 1920,
                "bytes": 2048,
            },
        )
    return handler


@pytest.mark.unit
class TestCloudinaryUploader:
    """Test the multipart upload protocol"""

    def test_success_builds_result(self, fake_mp4):
        captured = {}
        result = make_uploader(ok_handler(captured)).upload(
            fake_mp4, filename="clip.mp4", content_type="video/mp4"
        )

        assert result.media_uri == SECURE_URL
        assert result.thumbnail_uri == (
            "https://res.cloudinary.com/demo/video/upload/w_400,h_720,c_fill,f_jpg/v1700000000/abc123.mp4"
        )
        assert result.public_id == "abc123"
        assert result.resolution == "1080x1920"
        assert result.duration_seconds == 14.2

    def test_request_is_multipart_with_preset(self, fake_mp4):
        captured = {}
        make_uploader(ok_handler(captured)).upload(fake_mp4, filename="clip.mp4", content_type="video/mp4")

        request = captured["request"]
        body = captured["body"]
        assert request.method == "POST"
        assert str(request.url) == UPLOAD_URL
        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert int(request.headers["Content-Length"]) == len(body)
        assert b'name="upload_preset"' in body
        assert b"unsigned_demo" in body
        assert b'name="resource_type"' in body
        assert b'filename="clip.mp4"' in body
        assert fake_mp4 in body

    def test_progress_is_monotonic_and_ends_at_100(self, fake_mp4):
        seen = []
        make_uploader(ok_handler({}), chunk_size=128).upload(
            fake_mp4, filename="clip.mp4", content_type="video/mp4", progress_cb=seen.append
        )
        assert len(seen) > 1
        assert seen == sorted(seen)
        assert seen[-1] == 100.0

    def test_error_message_from_host(self, fake_mp4):
        def handler(request):
            request.read()
            return httpx.Response(400, json={"error": {"message": "Upload preset not found"}})

        with pytest.raises(UploadFailed) as exc_info:
            make_uploader(handler).upload(fake_mp4, filename="clip.mp4", content_type="video/mp4")
        assert exc_info.value.message == "Upload preset not found"
        assert exc_info.value.status_code == 502

    def test_error_without_json_body(self, fake_mp4):
        def handler(request):
            request.read()
            return httpx.Response(500, text="Internal error")

        with pytest.raises(UploadFailed) as exc_info:
            make_uploader(handler).upload(fake_mp4, filename="clip.mp4", content_type="video/mp4")
        assert exc_info.value.message == "Upload failed with status 500: Internal error"
        assert exc_info.value.details == {"detail": "Internal error"}

    def test_network_error(self, fake_mp4):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UploadFailed) as exc_info:
            make_uploader(handler).upload(fake_mp4, filename="clip.mp4", content_type="video/mp4")
        assert exc_info.value.message == NETWORK_ERROR_MESSAGE

    def test_unparseable_success_response(self, fake_mp4):
        def handler(request):
            request.read()
            return httpx.Response(200, content=json.dumps({"unexpected": True}).encode())

        with pytest.raises(UploadFailed) as exc_info:
            make_uploader(handler).upload(fake_mp4, filename="clip.mp4", content_type="video/mp4")
        assert exc_info.value.message.startswith("Failed to parse response")


@pytest.mark.unit
class TestRemoteMode:
    def test_ingestion_delegates_to_uploader(self, blob_repo, fake_mp4):
        svc = MediaIngestionService(blob_repo=blob_repo, remote=make_uploader(ok_handler({})))
        assert svc.mode == "remote"

        result = svc.ingest(fake_mp4, filename="clip.mp4")
        assert result.media_uri == SECURE_URL
        # Rien n'est stocké localement en mode distant
        assert blob_repo.count() == 0

    def test_invalid_file_never_reaches_host(self, blob_repo):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={})

        svc = MediaIngestionService(blob_repo=blob_repo, remote=make_uploader(handler))
        with pytest.raises(ValidationFailed):
            svc.ingest(b"plain text")
        assert calls == []
