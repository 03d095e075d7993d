"""Authentication handlers for the HTTP transport.

Handlers are ``httpx.Auth`` flows, so ``httpx.BasicAuth`` or any custom
flow can be passed wherever these are accepted.
"""

from typing import Dict, Generator

import httpx


class HeaderAuth(httpx.Auth):
    """Sets a fixed set of headers on every request.

    Example:
        auth = HeaderAuth({"X-Tenant-ID": "tenant456"})
    """

    def __init__(self, headers: Dict[str, str]):
        self._headers = dict(headers)

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers.update(self._headers)
        yield request


class BearerAuth(HeaderAuth):
    """Bearer token authentication.

    Example:
        auth = BearerAuth("eyJhbGciOiJIUzI1NiIs...")
    """

    def __init__(self, token: str):
        self.token = token
        super().__init__({"Authorization": f"Bearer {token}"})


class ApiKeyAuth(HeaderAuth):
    """API key authentication via a custom header (default: ``x-api-key``)."""

    def __init__(self, api_key: str, header_name: str = "x-api-key"):
        self.api_key = api_key
        self.header_name = header_name
        super().__init__({header_name: api_key})
