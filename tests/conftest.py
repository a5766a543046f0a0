# Shared fixtures: Spotify config, fake token endpoint, FastAPI test client.

import json

import pytest
from fastapi.testclient import TestClient

from vibes.config.settings import SpotifyConfig
from vibes.main import app
from vibes.services.spotify_auth_service import SpotifyAuthService, get_spotify_auth_service

LOCAL_URI = "http://localhost:3000/api/auth/callback/spotify"
PRODUCTION_URI = "https://app.example/callback"


class FakeResponse:
    def __init__(self, status_code, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload or {})

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return self._payload


class FakeTokenEndpoint:
    """In-memory stand-in for Spotify's /api/token.

    Authorization codes are accepted once; refresh tokens listed in
    ``revoked`` get a 400.
    """

    def __init__(self, codes=None, redirect_uri=PRODUCTION_URI):
        self.codes = dict(codes or {})
        self.redirect_uri = redirect_uri
        self.revoked = set()
        self.refresh_results = {}
        self.calls = []

    def post(self, url, data=None, auth=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": dict(data), "auth": auth, "timeout": timeout})

        if data["grant_type"] == "authorization_code":
            if data["redirect_uri"] != self.redirect_uri:
                return FakeResponse(400, {"error": "invalid_grant", "error_description": "Invalid redirect URI"})
            token = self.codes.pop(data["code"], None)
            if token is None:
                return FakeResponse(400, {"error": "invalid_grant", "error_description": "Invalid authorization code"})
            return FakeResponse(200, token)

        if data["grant_type"] == "refresh_token":
            if data["refresh_token"] in self.revoked:
                return FakeResponse(400, {"error": "invalid_grant", "error_description": "Refresh token revoked"})
            return FakeResponse(200, self.refresh_results[data["refresh_token"]])

        return FakeResponse(400, {"error": "unsupported_grant_type"})


@pytest.fixture
def config():
    return SpotifyConfig(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri_local=LOCAL_URI,
        redirect_uri_production=PRODUCTION_URI,
        timeout=5,
    )


@pytest.fixture
def endpoint():
    return FakeTokenEndpoint(
        codes={
            "CODE1": {
                "access_token": "AT1",
                "refresh_token": "RT1",
                "expires_in": 3600,
                "token_type": "Bearer",
            }
        }
    )


@pytest.fixture
def service(config, endpoint):
    return SpotifyAuthService(config, session=endpoint)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_spotify_auth_service] = lambda: service
    yield TestClient(app, base_url="https://testserver")
    app.dependency_overrides.clear()
