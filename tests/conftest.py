"""Pytest configuration - fake credentials and a stub Instagram API."""

from typing import Any, Optional

import httpx
import pytest

from instagram_basic_display import Configuration, InstagramBasicDisplay
from instagram_basic_display.auth import Auth
from instagram_basic_display.profile import Profile
from instagram_basic_display.transport import HttpTransport


@pytest.fixture(autouse=True)
def instagram_env(monkeypatch):
    """Credentials every Configuration picks up by default."""
    monkeypatch.setenv("INSTAGRAM_CLIENT_ID", "mock_client_id")
    monkeypatch.setenv("INSTAGRAM_CLIENT_SECRET", "mock_secret")
    monkeypatch.setenv("INSTAGRAM_REDIRECT_URI", "mock_redirect_uri")


class StubAPI:
    """
    Queue of canned replies served through httpx.MockTransport.

    Every request is recorded so tests can assert on call counts, query
    strings and form bodies.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._replies: list[dict[str, Any]] = []

    def reply(
        self,
        status_code: int = 200,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        reason: Optional[str] = None,
    ) -> "StubAPI":
        self._replies.append(
            {"status_code": status_code, "json": json, "content": content, "reason": reason}
        )
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        canned = self._replies.pop(0)
        extensions = {}
        if canned["reason"] is not None:
            extensions["reason_phrase"] = canned["reason"].encode("ascii")
        if canned["content"] is not None:
            return httpx.Response(canned["status_code"], content=canned["content"], extensions=extensions)
        return httpx.Response(canned["status_code"], json=canned["json"], extensions=extensions)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def api():
    return StubAPI()


@pytest.fixture
def configuration():
    return Configuration()


@pytest.fixture
def transport(api, configuration):
    with HttpTransport(configuration, client=api.client()) as transport:
        yield transport


@pytest.fixture
def auth(configuration, transport):
    return Auth(configuration, transport)


@pytest.fixture
def profile(configuration, transport):
    return Profile(configuration, transport)


@pytest.fixture
def ig(api):
    with InstagramBasicDisplay(auth_token="mock_token", http_client=api.client()) as client:
        yield client
