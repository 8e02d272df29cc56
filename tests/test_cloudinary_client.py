"""Tests for the Cloudinary upload client."""

import hashlib

import httpx
import pytest
from tenacity import wait_none

from cdn_responsive_images.mirror.cloudinary_client import (
    CloudinaryClient,
    parse_upload_response,
    sign_params,
)

UPLOAD_RESPONSE = {
    "public_id": "img_abc123",
    "width": 1200,
    "height": 800,
    "bytes": 240000,
    "url": "http://res.cloudinary.com/demo/image/upload/v1/img_abc123.jpg",
    "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/img_abc123.jpg",
    "responsive_breakpoints": [
        {
            "breakpoints": [
                {
                    "width": 1000,
                    "height": 667,
                    "bytes": 90000,
                    "url": "http://res.cloudinary.com/demo/image/upload/c_scale,w_1000/v1/img_abc123.jpg",
                    "secure_url": "https://res.cloudinary.com/demo/image/upload/c_scale,w_1000/v1/img_abc123.jpg",
                },
                {
                    "width": 200,
                    "height": 133,
                    "bytes": 8000,
                    "url": "http://res.cloudinary.com/demo/image/upload/c_scale,w_200/v1/img_abc123.jpg",
                    "secure_url": "https://res.cloudinary.com/demo/image/upload/c_scale,w_200/v1/img_abc123.jpg",
                },
            ]
        }
    ],
}


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "img.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0 fake jpeg")
    return path


def _client(handler) -> CloudinaryClient:
    return CloudinaryClient(
        cloud_name="demo",
        api_key="key",
        api_secret="secret",
        transport=httpx.MockTransport(handler),
    )


def test_sign_params_sorts_and_skips_unsigned():
    params = {"timestamp": "1700000000", "use_filename": "true", "api_key": "key", "file": "x"}
    expected = hashlib.sha1(b"timestamp=1700000000&use_filename=truesecret").hexdigest()
    assert sign_params(params, "secret") == expected


def test_client_requires_credentials(monkeypatch):
    import cdn_responsive_images.mirror.cloudinary_client as mod

    monkeypatch.setattr(mod, "CLOUDINARY_CLOUD_NAME", "")
    monkeypatch.setattr(mod, "CLOUDINARY_API_KEY", "")
    monkeypatch.setattr(mod, "CLOUDINARY_API_SECRET", "")
    with pytest.raises(ValueError):
        CloudinaryClient()


def test_parse_upload_response():
    result = parse_upload_response(UPLOAD_RESPONSE)
    assert result.public_id == "img_abc123"
    assert (result.width, result.height) == (1200, 800)
    assert [bp.width for bp in result.breakpoints] == [1000, 200]
    assert result.breakpoints[1].secure_url.endswith("c_scale,w_200/v1/img_abc123.jpg")


def test_parse_upload_response_without_breakpoints():
    data = {k: v for k, v in UPLOAD_RESPONSE.items() if k != "responsive_breakpoints"}
    assert parse_upload_response(data).breakpoints == []


def test_upload_posts_signed_request(image_file):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, json=UPLOAD_RESPONSE)

    result = _client(handler).upload(image_file)
    assert result is not None
    assert result.public_id == "img_abc123"
    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert b'name="signature"' in seen["body"]
    assert b'name="api_key"' in seen["body"]
    assert b'"min_width": 200' in seen["body"]


def test_upload_http_error_returns_none(image_file):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": "boom"}})

    assert _client(handler).upload(image_file) is None


def test_upload_without_public_id_returns_none(image_file):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": {"message": "Invalid signature"}})

    assert _client(handler).upload(image_file) is None


def test_upload_missing_file_returns_none(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=UPLOAD_RESPONSE)

    assert _client(handler).upload(tmp_path / "missing.jpg") is None


def test_upload_timeouts_return_none_after_retries(image_file, monkeypatch):
    monkeypatch.setattr(CloudinaryClient._post.retry, "wait", wait_none())
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    assert _client(handler).upload(image_file) is None
    assert len(attempts) == 3
