import pytest
from starlette.testclient import TestClient
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse

from auth import APIKeyMiddleware


async def protected(request):
    return PlainTextResponse("API Running")


def _client(monkeypatch, api_key):
    monkeypatch.setattr(APIKeyMiddleware, "API_KEY", api_key)
    app = Starlette()
    app.add_middleware(APIKeyMiddleware)
    app.add_route("/api/image-search", protected, methods=["GET", "OPTIONS"])
    app.add_route("/", protected)
    return TestClient(app)


@pytest.fixture
def client(monkeypatch):
    return _client(monkeypatch, "valid-key")


@pytest.mark.parametrize("header_name", ["X-API-Key", "x-api-key", "X-Api-Key"])
def test_api_key_middleware_accepts_case_insensitive_header(client, header_name):
    """Given a valid API key, when the header is provided with different casings, it should be accepted."""
    response = client.get("/api/image-search", headers={header_name: "valid-key"})
    assert response.status_code == 200
    assert response.text == "API Running"


def test_api_key_middleware_rejects_missing_header(client):
    """Given a missing API key header, when accessing a protected route, it should return 401 Unauthorized."""
    response = client.get("/api/image-search")
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing API key. Include 'X-API-Key' header in your request."
    assert response.json()["error"] == "unauthorized"


def test_api_key_middleware_rejects_invalid_key(client):
    """Given an invalid API key, when accessing a protected route, it should return 403 Forbidden."""
    response = client.get("/api/image-search", headers={"X-API-Key": "wrong-key"})
    assert response.status_code == 403
    assert response.json() == {"detail": "Invalid API key", "error": "forbidden"}


def test_api_key_middleware_lets_health_check_and_preflight_through(client):
    assert client.get("/").status_code == 200
    assert client.options("/api/image-search").status_code == 200


def test_api_key_middleware_is_open_when_no_key_configured(monkeypatch):
    """Without a configured API_KEY the service stays open."""
    client = _client(monkeypatch, "")
    assert client.get("/api/image-search").status_code == 200
