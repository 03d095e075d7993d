"""Transports that deliver GraphQL payloads to an endpoint.

A transport receives the fully assembled payload and returns the decoded
reply. ``HttpTransport`` posts it with httpx; tests can plug in any object
implementing the ``Transport`` protocol.
"""

import io
import json
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when the endpoint reply is not a JSON object."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


@runtime_checkable
class Transport(Protocol):
    """Protocol for transports.

    Example:
        class RecordingTransport:
            def __init__(self, reply):
                self.reply = reply
                self.calls = []

            def post_query(self, payload, is_multipart=False):
                self.calls.append((payload, is_multipart))
                return self.reply
    """

    def post_query(self, payload: dict[str, Any], is_multipart: bool = False) -> dict[str, Any]:
        """Send a payload and return the decoded reply."""
        ...


def _is_file(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray, io.IOBase)):
        return True
    return isinstance(value, tuple) and len(value) in (2, 3)


class HttpTransport:
    """Posts payloads to a GraphQL endpoint over HTTP.

    Examples:
        transport = HttpTransport("http://localhost:8000/graphql")
        transport = HttpTransport(url, auth=BearerAuth(token))
        transport = HttpTransport(url, auth=httpx.BasicAuth("user", "pass"))
    """

    def __init__(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | None = None,
        timeout: float = 30.0,
        http_transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the transport.

        Args:
            url: GraphQL endpoint URL
            headers: Extra headers sent with every request
            auth: Authentication flow (BearerAuth, ApiKeyAuth, httpx.BasicAuth, ...)
            timeout: Request timeout in seconds
            http_transport: Low-level httpx transport, e.g. httpx.MockTransport in tests
        """
        self.url = url
        self.headers = dict(headers or {})
        self.auth = auth
        self.timeout = timeout
        self._http_transport = http_transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout,
                headers=self.headers,
                auth=self.auth,
                transport=self._http_transport,
            )
        return self._client

    def close(self):
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def post_query(self, payload: dict[str, Any], is_multipart: bool = False) -> dict[str, Any]:
        """POST the payload as JSON, or as multipart form data.

        Raises:
            TransportError: If the reply body is not a JSON object
            httpx.HTTPError: On connection failures and non-JSON error replies
        """
        client = self._get_client()
        if is_multipart:
            data, files = self._split_multipart(payload)
            logger.debug("POST %s multipart fields=%s files=%s", self.url, list(data), list(files))
            response = client.post(self.url, data=data, files=files)
        else:
            logger.debug("POST %s json", self.url)
            response = client.post(self.url, json=payload)
        return self._decode(response)

    @staticmethod
    def _split_multipart(payload: dict[str, Any]) -> tuple[dict[str, str], dict[str, Any]]:
        """Split a multipart payload into form fields and file parts."""
        data: dict[str, str] = {}
        files: dict[str, Any] = {}
        for key, value in payload.items():
            if _is_file(value):
                files[key] = value
            elif isinstance(value, (dict, list)):
                data[key] = json.dumps(value)
            else:
                data[key] = str(value)
        return data, files

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        # GraphQL servers put error replies in 4xx bodies, so decode first
        try:
            result = response.json()
        except ValueError:
            result = None
        if isinstance(result, dict):
            return result

        response.raise_for_status()
        raise TransportError(
            f"Expected a JSON object from {response.request.url}, got: {response.text[:200]!r}",
            status_code=response.status_code,
            body=response.text,
        )
