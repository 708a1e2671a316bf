import pytest

from planewar.app import create_app
from planewar.config.seed import default_announcements
from planewar.services import AnnouncementService, WeChatAuthService

# 2026-01-01T00:00:00Z
NOW = 1767225600000


class FakeClock:
    """Settable millisecond clock."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeResponse:
    def __init__(self, payload=None, status_code=200, exc=None):
        self._payload = payload
        self.status_code = status_code
        self._exc = exc

    def raise_for_status(self):
        if self._exc is not None:
            raise self._exc

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session``; records calls, returns a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse({"openid": "o-123", "session_key": "sk"})
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Fresh store seeded with the built-in announcements."""
    return AnnouncementService(default_announcements(clock()), clock=clock)


@pytest.fixture
def wechat_session():
    return FakeSession()


@pytest.fixture
def app(store, wechat_session):
    """Provide a Flask app with a fresh store and a fake WeChat session."""
    wechat = WeChatAuthService(
        appid="wx-test-appid-0001",
        secret="test-secret",
        api_url="https://wechat.invalid/sns/jscode2session",
        timeout=5,
        session=wechat_session,
    )
    flask_app = create_app("testing", announcement_service=store, wechat_service=wechat)
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()
