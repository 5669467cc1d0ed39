"""Shared fixtures for Text2Deck tests."""

from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from backend.session_manager import InMemoryKeyValueStore, SessionManager
from core.config import OAuthConfig
from core.schemas import Token
from utils.http_tools import HttpResponse


class FakeHttpClient:
    """Stands in for HttpClient: records requests, replays queued responses."""

    def __init__(self, responses: list[HttpResponse] | None = None):
        self.responses = list(responses or [])
        self.requests: list[dict[str, Any]] = []

    def queue(self, status_code: int, body: Any) -> None:
        text = body if isinstance(body, str) else json.dumps(body)
        self.responses.append(HttpResponse(status_code=status_code, text=text))

    def send(self, method, url, *, headers=None, data=None, json_body=None):
        self.requests.append(
            {
                "method": method,
                "url": url,
                "headers": headers or {},
                "data": data,
                "json": json_body,
            }
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self.responses.pop(0)


class UnreachableHttpClient(FakeHttpClient):
    """Records the request, then fails the way requests does when the host is down."""

    def send(self, method, url, *, headers=None, data=None, json_body=None):
        self.requests.append({"method": method, "url": url})
        raise requests.ConnectionError(f"Failed to establish a new connection to {url}")


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


TOKEN_RESPONSE = {
    "access_token": "ya29.test-access",
    "refresh_token": "1//test-refresh",
    "expires_in": 3599,
    "token_type": "Bearer",
    "scope": "https://www.googleapis.com/auth/presentations https://www.googleapis.com/auth/drive.file",
}


def created_presentation_body(presentation_id: str = "pres-123") -> dict[str, Any]:
    return {
        "presentationId": presentation_id,
        "slides": [
            {
                "objectId": "p",
                "pageElements": [
                    {
                        "objectId": "i0",
                        "shape": {"placeholder": {"type": "CENTERED_TITLE"}},
                    },
                    {
                        "objectId": "i1",
                        "shape": {"placeholder": {"type": "SUBTITLE"}},
                    },
                ],
            }
        ],
    }


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def manager(clock) -> SessionManager:
    return SessionManager(store=InMemoryKeyValueStore(clock=clock), ttl_seconds=1209600)


@pytest.fixture
def oauth_config() -> OAuthConfig:
    return OAuthConfig(
        client_id="client-123.apps.googleusercontent.com",
        client_secret="secret-456",
        redirect_uri="http://localhost:8000/oauth/callback",
    )


@pytest.fixture
def oauth_env(monkeypatch, oauth_config):
    monkeypatch.setenv("GOOGLE_CLIENT_ID", oauth_config.client_id)
    monkeypatch.setenv("GOOGLE_CLIENT_SECRET", oauth_config.client_secret)
    monkeypatch.setenv("GOOGLE_REDIRECT_URI", oauth_config.redirect_uri)
    return oauth_config


@pytest.fixture
def token() -> Token:
    return Token(**TOKEN_RESPONSE, created_at=1_700_000_000)
