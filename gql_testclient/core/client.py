"""GraphQL test client.

Builds documents from field trees, sends them through a transport and
normalizes the replies.
"""

import json
import logging
from typing import Any, Iterable

import httpx

from .assertions import assert_graphql_fields
from .fields import Field
from .query_builder import QueryBuilder
from .response import ResponseData, compose_response
from .scalars import ScalarRegistry
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


class GraphQLTestClient:
    """Runs queries and mutations built from ``Field`` trees.

    GraphQL errors are returned on ``ResponseData.errors``, never raised.

    Examples:
        client = GraphQLTestClient("http://localhost:8000/graphql")
        result = client.query(Query("user", ["id", "name"], {"id": 5}))
        client.assert_graphql_fields(result.data, Field("user", ["id", "name"]))

        # Custom transport (e.g. a framework test client)
        client = GraphQLTestClient("/graphql", transport=MyTransport())

        # Or subclass and override post_query
        class MyClient(GraphQLTestClient):
            def post_query(self, payload, is_multipart=False):
                ...
    """

    def __init__(
        self,
        base_url: str,
        transport: Transport | None = None,
        *,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | None = None,
        timeout: float = 30.0,
        scalars: ScalarRegistry | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: GraphQL endpoint URL
            transport: Transport to send payloads with (default: HttpTransport)
            headers: Extra headers for the default transport
            auth: Authentication flow for the default transport
            timeout: Request timeout in seconds for the default transport
            scalars: Serializers for custom argument and variable types
        """
        self._base_url = base_url
        if transport is None:
            transport = HttpTransport(base_url, headers=headers, auth=auth, timeout=timeout)
        self.transport = transport
        self._builder = QueryBuilder(scalars)

    @property
    def base_url(self) -> str:
        return self._base_url

    def query(self, query: Field) -> ResponseData:
        """Run a query and return the data found under the root's name."""
        response = self.execute_query(self._builder.build_query(query))
        return compose_response(response, query.name)

    def mutate(self, query: Field, multipart: dict[str, Any] | None = None) -> ResponseData:
        """Run a mutation, optionally as a multipart (file upload) request.

        Args:
            query: The mutation root
            multipart: Extra multipart parts, e.g. ``{"map": {...}, "0": file}``
        """
        response = self.execute_query(self._builder.build_mutation(query), multipart)
        return compose_response(response, query.name)

    def execute_query(self, data: dict[str, Any], multipart: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send an assembled payload.

        With ``multipart``, the payload is JSON-encoded into an ``operations``
        part and merged with the given parts.
        """
        is_multipart = multipart is not None
        if is_multipart:
            data = {"operations": json.dumps(data), **multipart}
            logger.debug("Sending multipart request with parts %s", list(multipart))
        return self.post_query(data, is_multipart)

    def post_query(self, data: dict[str, Any], is_multipart: bool = False) -> dict[str, Any]:
        return self.transport.post_query(data, is_multipart)

    def assert_graphql_fields(self, actual: Any, query_or_fields: Field | Iterable[Field]):
        """Assert ``actual`` contains the fields selected by a query."""
        assert_graphql_fields(actual, query_or_fields)

    def close(self):
        """Close the transport if it holds resources."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "GraphQLTestClient":
        return self

    def __exit__(self, *exc_info):
        self.close()
