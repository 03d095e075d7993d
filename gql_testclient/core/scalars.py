"""Scalar serializers for argument literals and variable values.

Maps Python types to handlers that turn values into JSON-compatible data,
so ``datetime``, ``UUID`` and friends can be used directly in a field tree.

Example usage:
    from gql_testclient.core.scalars import ScalarRegistry

    class MoneyHandler:
        def serialize(self, value):
            return f"{value.amount} {value.currency}"

    registry = ScalarRegistry()
    registry.register(Money, MoneyHandler())
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from pydantic import BaseModel


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for scalar handlers.

    Implement this protocol to control how a Python type is sent to GraphQL.
    """

    def serialize(self, value: Any) -> Any:
        """Convert a Python value to a JSON-serializable value."""
        ...


class IsoFormatHandler:
    """Handler for ``datetime``, ``date`` and ``time`` using ISO 8601."""

    def serialize(self, value: datetime | date | time) -> str:
        return value.isoformat()


class StringHandler:
    """Handler for types whose ``str()`` is their wire form (UUID, Decimal)."""

    def serialize(self, value: Any) -> str:
        return str(value)


class EnumHandler:
    """Handler for ``Enum`` members, sent as their value."""

    def serialize(self, value: Enum) -> Any:
        return value.value


class ModelHandler:
    """Handler for Pydantic models, dumped by alias without ``None`` fields."""

    def serialize(self, value: BaseModel) -> dict[str, Any]:
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)


class ScalarRegistry:
    """Registry of scalar handlers keyed by Python type.

    Lookup walks the value's MRO, so a handler registered for a base class
    applies to its subclasses.

    Example:
        registry = ScalarRegistry()
        registry.serialize(UUID("12345678-1234-5678-1234-567812345678"))
        # '12345678-1234-5678-1234-567812345678'
    """

    def __init__(self):
        self._handlers: dict[type, ScalarHandler] = {}
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default handlers."""
        iso = IsoFormatHandler()
        self.register(datetime, iso)
        self.register(date, iso)
        self.register(time, iso)
        self.register(UUID, StringHandler())
        self.register(Decimal, StringHandler())
        self.register(Enum, EnumHandler())
        self.register(BaseModel, ModelHandler())

    def register(self, py_type: type, handler: ScalarHandler):
        """Register a handler for a Python type."""
        self._handlers[py_type] = handler

    def get(self, py_type: type) -> ScalarHandler | None:
        """Get the handler for a type (or its nearest base), or None."""
        for klass in py_type.__mro__:
            handler = self._handlers.get(klass)
            if handler is not None:
                return handler
        return None

    def has(self, py_type: type) -> bool:
        return self.get(py_type) is not None

    def serialize(self, value: Any) -> Any:
        """Serialize a value, recursing into lists, tuples and dicts."""
        if isinstance(value, dict):
            return {key: self.serialize(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.serialize(item) for item in value]
        handler = self.get(type(value))
        if handler is None:
            return value
        result = handler.serialize(value)
        # Handlers may return their own type (e.g. rounding a float)
        if isinstance(result, (dict, list, tuple)) or type(result) is not type(value):
            return self.serialize(result)
        return result


default_registry = ScalarRegistry()
