from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from spaceapi.app import create_app
from spaceapi.config import Settings
from spaceapi.models.schemas import SpaceAPI
from spaceapi.utils.rate_limiter import RateLimiter

API_KEY = "test-api-key"


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_document() -> SpaceAPI:
    now = int(time.time())
    return SpaceAPI.model_validate(
        {
            "api_compatibility": ["15"],
            "space": "Test Space",
            "logo": "https://example.com/logo.png",
            "url": "https://example.com",
            "location": {
                "address": "123 Test Street, Test City",
                "lat": 40.7128,
                "lon": -74.006,
                "timezone": "America/New_York",
                "country_code": "US",
            },
            "state": {
                "open": True,
                "lastchange": now,
                "trigger_person": "Test User",
                "message": "Space is open for testing",
            },
            "events": [
                {"name": "Test Event", "type": "check-in", "timestamp": now - 3600, "extra": "Test event description"},
            ],
            "contact": {"email": "test@example.com", "irc": "#testspace", "twitter": "@testspace"},
            "sensors": {
                "people_now_present": [
                    {"value": 3, "location": "Main Space", "name": "People Counter", "lastchange": now - 300},
                ],
            },
            "feeds": {"blog": {"type": "rss", "url": "https://example.com/blog.rss"}},
            "projects": ["Test Project 1", "Test Project 2"],
            "links": [{"name": "Website", "url": "https://example.com"}],
        }
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def limiter(clock: FakeClock):
    instance = RateLimiter(clock=clock)
    yield instance
    instance.stop()


@pytest.fixture()
def document() -> SpaceAPI:
    return make_document()


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, auth_key=API_KEY, cleanup_enabled=False, trusted_proxies=[])


@pytest.fixture()
def app(settings: Settings, document: SpaceAPI, limiter: RateLimiter):
    return create_app(settings=settings, document=document, limiter=limiter)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    return {"X-API-Key": API_KEY}
