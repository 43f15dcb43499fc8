from urllib.parse import parse_qs

import pytest

from instagram_basic_display import FieldNotFound, Response

SHORT_LIVED = {"access_token": "mock_access_token", "user_id": 1234567}
LONG_LIVED = {"access_token": "mock_long_lived_token", "token_type": "bearer", "expires_in": 5183944}
INVALID_CODE = {"error_type": "OAuthException", "code": 400, "error_message": "Invalid authorization code"}
INVALID_TOKEN = {
    "error": {
        "message": "Invalid OAuth access token.",
        "type": "OAuthException",
        "code": 190,
        "fbtrace_id": "AbCdEf",
    }
}


def form(request):
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


class TestShortLivedToken:
    def test_exchanges_access_code(self, api, auth):
        api.reply(json=SHORT_LIVED)
        response = auth.exchange_code_for_short_lived_token("asdf")

        assert isinstance(response, Response)
        assert response.success is True
        assert response.payload.access_token == "mock_access_token"
        assert response.payload.user_id == 1234567
        assert response.error is None

        request = api.last_request
        assert request.method == "POST"
        assert str(request.url) == "https://api.instagram.com/oauth/access_token"
        assert form(request) == {
            "client_id": "mock_client_id",
            "client_secret": "mock_secret",
            "grant_type": "authorization_code",
            "redirect_uri": "mock_redirect_uri",
            "code": "asdf",
        }

    def test_returns_error_response(self, api, auth):
        api.reply(400, json=INVALID_CODE)
        response = auth.exchange_code_for_short_lived_token("already_used_access_code")

        assert response.success is False
        assert response.error.type == "OAuthException"
        assert response.error.message == "Invalid authorization code"
        assert response.error.code == 400


class TestLongLivedToken:
    def test_exchanges_short_lived_token(self, api, auth):
        api.reply(json=LONG_LIVED)
        response = auth.exchange_for_long_lived_token(short_lived_token="mock_short_lived_token")

        assert response.success is True
        assert response.payload.access_token == "mock_long_lived_token"
        assert response.payload.token_type == "bearer"
        assert response.payload.expires_in is not None

        request = api.last_request
        assert request.method == "GET"
        assert request.url.path == "/access_token"
        assert request.url.host == "graph.instagram.com"
        assert dict(request.url.params) == {
            "client_secret": "mock_secret",
            "grant_type": "ig_exchange_token",
            "access_token": "mock_short_lived_token",
        }

    def test_returns_error_response(self, api, auth):
        api.reply(400, json=INVALID_TOKEN)
        response = auth.exchange_for_long_lived_token(short_lived_token="mock_short_lived_token")

        assert response.success is False
        assert response.error.code == 190
        assert response.error.message == "Invalid OAuth access token."

    def test_chains_from_access_code(self, api, auth):
        api.reply(json=SHORT_LIVED).reply(json=LONG_LIVED)
        response = auth.exchange_for_long_lived_token(access_code="asdf")

        assert len(api.requests) == 2
        assert form(api.requests[0])["code"] == "asdf"
        assert api.requests[1].url.params["access_token"] == "mock_access_token"
        assert response.payload.access_token == "mock_long_lived_token"

    def test_failed_code_exchange_stops_chain(self, api, auth):
        api.reply(400, json=INVALID_CODE)
        response = auth.exchange_for_long_lived_token(access_code="already_used_access_code")

        assert len(api.requests) == 1
        assert response.success is False
        assert response.error.message == "Invalid authorization code"

    def test_code_exchange_without_token_raises(self, api, auth):
        api.reply(json={"user_id": 1234567})
        with pytest.raises(FieldNotFound) as exc_info:
            auth.exchange_for_long_lived_token(access_code="asdf")

        assert exc_info.value.field == "access_token"
        assert len(api.requests) == 1

    def test_requires_token_or_code(self, api, auth):
        with pytest.raises(ValueError):
            auth.exchange_for_long_lived_token()
        assert api.requests == []


class TestRefreshLongLivedToken:
    def test_refreshes_token(self, api, auth):
        api.reply(json=LONG_LIVED)
        response = auth.refresh_long_lived_token("mock_long_lived_token")

        assert response.success is True
        assert response.payload.access_token == "mock_long_lived_token"
        assert response.payload.token_type == "bearer"

        request = api.last_request
        assert request.url.path == "/refresh_access_token"
        assert dict(request.url.params) == {
            "grant_type": "ig_refresh_token",
            "access_token": "mock_long_lived_token",
        }

    def test_returns_error_response(self, api, auth):
        api.reply(400, json=INVALID_TOKEN)
        response = auth.refresh_long_lived_token("mock_short_lived_token")

        assert response.success is False
        assert response.error.code == 190
