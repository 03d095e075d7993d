"""Tests for authentication handlers."""

import httpx

from gql_testclient.core.auth import ApiKeyAuth, BearerAuth, HeaderAuth


def sent_headers(auth: httpx.Auth) -> httpx.Headers:
    """Send one request through ``auth`` and return the headers the server saw."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers)
        return httpx.Response(200, json={})

    with httpx.Client(auth=auth, transport=httpx.MockTransport(handler)) as client:
        client.post("http://test/graphql", json={})
    return seen[0]


class TestApiKeyAuth:
    """Tests for ApiKeyAuth."""

    def test_default_header_name(self):
        """Test default x-api-key header."""
        assert sent_headers(ApiKeyAuth("my-secret-key"))["x-api-key"] == "my-secret-key"

    def test_custom_header_name(self):
        """Test custom header name."""
        auth = ApiKeyAuth("token123", header_name="x-auth-token")
        assert auth.headers == {"x-auth-token": "token123"}
        assert sent_headers(auth)["x-auth-token"] == "token123"


class TestBearerAuth:
    """Tests for BearerAuth."""

    def test_bearer_token(self):
        """Test bearer token header."""
        auth = BearerAuth("eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9")
        assert sent_headers(auth)["Authorization"] == "Bearer eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"


class TestHeaderAuth:
    """Tests for HeaderAuth."""

    def test_multiple_headers(self):
        """Test multiple custom headers."""
        headers = sent_headers(HeaderAuth({"X-API-Key": "key123", "X-Tenant-ID": "tenant456"}))
        assert headers["X-API-Key"] == "key123"
        assert headers["X-Tenant-ID"] == "tenant456"

    def test_returns_copy(self):
        """Test that headers returns a copy."""
        original = {"X-Key": "value"}
        auth = HeaderAuth(original)
        auth.headers["X-New"] = "new"
        original["X-Other"] = "other"

        assert auth.headers == {"X-Key": "value"}

    def test_is_httpx_auth(self):
        assert isinstance(HeaderAuth({}), httpx.Auth)
        assert isinstance(BearerAuth("t"), httpx.Auth)
