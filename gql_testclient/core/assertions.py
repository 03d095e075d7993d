"""Shape assertions for GraphQL responses.

Checks that a response contains at least the fields of an expected
``Field`` tree. Lists are looked through: an expected field is checked on
every element, so one tree matches both a single record and a list of them.
"""

from typing import Any, Iterable, Mapping

from .fields import Field
from .query_builder import has_string_keys


class ShapeMismatchError(AssertionError):
    """Raised when a response lacks an expected field."""

    def __init__(self, message: str, field_name: str, path: tuple[str, ...] = ()):
        self.field_name = field_name
        self.path = path
        super().__init__(message)


def _dotted(path: tuple[str, ...]) -> str:
    return ".".join(path) or "<root>"


def assert_field_present(field: Field, actual: Any, path: tuple[str, ...] = ()):
    """Assert ``field`` (and its children, recursively) exists in ``actual``.

    Args:
        field: The expected field
        actual: A response fragment: a mapping, or a list of fragments
        path: Field names leading to ``actual``, used in failure messages

    Raises:
        ShapeMismatchError: On the first missing field
    """
    if isinstance(actual, Mapping) and has_string_keys(actual):
        if field.name not in actual:
            raise ShapeMismatchError(
                f"Field '{field.name}' is missing at {_dotted(path)}; "
                f"got keys {sorted(map(str, actual.keys()))}",
                field.name,
                path,
            )
        value = actual[field.name]
        if value is not None:
            for child in field.children:
                assert_field_present(child, value, path + (field.name,))
        return

    if isinstance(actual, Mapping):
        elements = actual.values()
    elif isinstance(actual, (list, tuple)):
        elements = actual
    else:
        raise ShapeMismatchError(
            f"Expected an object or list containing '{field.name}' at {_dotted(path)}, "
            f"got {type(actual).__name__}: {actual!r}",
            field.name,
            path,
        )

    for element in elements:
        if element is not None:
            assert_field_present(field, element, path)


def assert_shape(expected_fields: Iterable[Field], actual: Any):
    """Assert every expected field is present in ``actual``."""
    for field in expected_fields:
        assert_field_present(field, actual)


def assert_graphql_fields(actual: Any, query_or_fields: Field | str | Iterable[Field | str]):
    """Assert a response matches the selection of a query.

    Accepts either an operation root (its children are the expected fields)
    or a sequence of expected fields. A bare string is a single leaf field.
    """
    if isinstance(query_or_fields, Field):
        expected = query_or_fields.children
    elif isinstance(query_or_fields, str):
        expected = [Field(query_or_fields)]
    else:
        expected = [f if isinstance(f, Field) else Field(f) for f in query_or_fields]
    assert_shape(expected, actual)
