"""Normalized results of GraphQL operations."""

from dataclasses import dataclass
from typing import Any


class GraphQLError(Exception):
    """Exception raised on demand for GraphQL errors in a response."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)


@dataclass
class ResponseData:
    """The result of one operation.

    ``errors`` is None when the reply had no ``errors`` key and a list
    (possibly empty) when it had one.
    """
    data: Any = None
    errors: list[dict[str, Any]] | None = None

    @classmethod
    def with_errors(cls, data: Any, errors: list[dict[str, Any]]) -> "ResponseData":
        """Build the error-carrying form."""
        return cls(data=data, errors=list(errors or []))

    @property
    def has_errors(self) -> bool:
        """True when the reply carried an ``errors`` key, even an empty one."""
        return self.errors is not None

    @property
    def error_messages(self) -> list[str]:
        return [
            e.get("message", str(e)) if isinstance(e, dict) else str(e)
            for e in self.errors or []
        ]

    def raise_for_errors(self):
        """Raise GraphQLError if the response carries any errors."""
        if self.errors:
            raise GraphQLError(f"GraphQL errors: {'; '.join(self.error_messages)}", self.errors)

    def to_dict(self) -> dict[str, Any]:
        result = {"data": self.data}
        if self.errors is not None:
            result["errors"] = self.errors
        return result


def compose_response(response: dict[str, Any], name: str) -> ResponseData:
    """Map a raw transport reply to the ResponseData of operation ``name``.

    A missing ``data`` key, ``data: null`` or a missing operation name all
    yield ``data=None``. The presence of ``errors``, not its contents,
    selects the error-carrying form.
    """
    payload = response.get("data")
    data = payload.get(name) if isinstance(payload, dict) else None
    if "errors" in response:
        return ResponseData.with_errors(data, response["errors"])
    return ResponseData(data)
