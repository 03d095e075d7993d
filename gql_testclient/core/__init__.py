"""Core modules for building, sending and checking GraphQL operations."""

from .assertions import (
    ShapeMismatchError,
    assert_field_present,
    assert_graphql_fields,
    assert_shape,
)
from .auth import ApiKeyAuth, BearerAuth, HeaderAuth
from .client import GraphQLTestClient
from .fields import Field, Query, Variable
from .loader import FieldSpec, VariableSpec, load_field, load_field_file
from .query_builder import (
    QueryBuilder,
    RenderedField,
    VariableConflictError,
    has_string_keys,
    is_numeric_key,
)
from .response import GraphQLError, ResponseData, compose_response
from .scalars import ScalarHandler, ScalarRegistry, default_registry
from .transport import HttpTransport, Transport, TransportError

__all__ = [
    # Field tree
    "Field",
    "Query",
    "Variable",
    # Query Builder
    "QueryBuilder",
    "RenderedField",
    "VariableConflictError",
    "has_string_keys",
    "is_numeric_key",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "default_registry",
    # Responses
    "GraphQLError",
    "ResponseData",
    "compose_response",
    # Assertions
    "ShapeMismatchError",
    "assert_field_present",
    "assert_graphql_fields",
    "assert_shape",
    # Transport
    "ApiKeyAuth",
    "BearerAuth",
    "HeaderAuth",
    "HttpTransport",
    "Transport",
    "TransportError",
    # Client
    "GraphQLTestClient",
    # Loader
    "FieldSpec",
    "VariableSpec",
    "load_field",
    "load_field_file",
]
