"""Tests for GraphQLTestClient."""

import json

import pytest

from gql_testclient.core.assertions import ShapeMismatchError
from gql_testclient.core.client import GraphQLTestClient
from gql_testclient.core.fields import Field, Query, Variable
from gql_testclient.core.query_builder import VariableConflictError
from gql_testclient.core.transport import HttpTransport


@pytest.fixture
def client(transport):
    return GraphQLTestClient("http://test/graphql", transport=transport)


class TestQuery:
    """Tests for GraphQLTestClient.query."""

    def test_sends_query_payload(self, client, transport, user_query):
        client.query(user_query)

        payload, is_multipart = transport.calls[0]
        assert not is_multipart
        assert payload["query"].startswith("query { user(id : 5 ) {")
        assert payload["variables"] is None

    def test_returns_data_for_root_name(self, client, transport):
        transport.reply = {"data": {"user": {"id": 5}}}
        result = client.query(Query("user", ["id"]))
        assert result.data == {"id": 5}
        assert result.errors is None

    def test_graphql_errors_are_returned_not_raised(self, client, transport):
        transport.reply = {"data": None, "errors": [{"message": "denied"}]}
        result = client.query(Query("user", ["id"]))
        assert result.data is None
        assert result.error_messages == ["denied"]


class TestMutate:
    """Tests for GraphQLTestClient.mutate."""

    def test_sends_variables(self, client, transport, create_user_mutation):
        transport.reply = {"data": {"createUser": {"id": "abc"}}}
        result = client.mutate(create_user_mutation)

        payload, is_multipart = transport.calls[0]
        assert not is_multipart
        assert payload["query"].startswith("mutation ($id: ID!) {")
        assert payload["variables"] == {"id": "abc"}
        assert result.data == {"id": "abc"}

    def test_variables_do_not_leak_between_calls(self, client, transport, create_user_mutation):
        client.mutate(create_user_mutation)
        client.mutate(Query("logout", ["ok"]))

        payload, _ = transport.calls[1]
        assert payload["variables"] == {}
        assert "$id" not in payload["query"]

    def test_multipart_wraps_operations(self, client, transport):
        mutation = Query("upload", ["ok"], {"file": Variable("file", None, "Upload!")})
        file_part = ("a.txt", b"hello", "text/plain")
        client.mutate(mutation, {"map": {"0": ["variables.file"]}, "0": file_part})

        payload, is_multipart = transport.calls[0]
        assert is_multipart
        assert set(payload) == {"operations", "map", "0"}
        operations = json.loads(payload["operations"])
        assert operations["variables"] == {"file": None}
        assert operations["query"].startswith("mutation ($file: Upload!) {")
        assert payload["0"] == file_part

    def test_conflicting_variables_raise_before_sending(self, client, transport):
        mutation = Query("f", params={"a": Variable("x", 1), "b": Variable("x", 2)})
        with pytest.raises(VariableConflictError):
            client.mutate(mutation)
        assert transport.calls == []


class TestClientSurface:
    """Tests for configuration, overrides and assertions."""

    def test_base_url(self, client):
        assert client.base_url == "http://test/graphql"

    def test_default_transport_is_http(self):
        client = GraphQLTestClient("http://test/graphql", headers={"X-Test": "1"}, timeout=5)
        assert isinstance(client.transport, HttpTransport)
        assert client.transport.url == "http://test/graphql"
        assert client.transport.headers == {"X-Test": "1"}
        assert client.transport.timeout == 5

    def test_subclass_can_override_post_query(self):
        class StubClient(GraphQLTestClient):
            def __init__(self):
                super().__init__("/graphql", transport=object())
                self.sent = []

            def post_query(self, data, is_multipart=False):
                self.sent.append(data)
                return {"data": {"ping": "pong"}}

        client = StubClient()
        assert client.query(Query("ping")).data == "pong"
        assert client.sent[0]["query"] == "query { ping  }"

    def test_assert_graphql_fields(self, client):
        query = Query("user", ["id", "name"])
        client.assert_graphql_fields({"id": 1, "name": "Ada"}, query)
        with pytest.raises(ShapeMismatchError):
            client.assert_graphql_fields({"id": 1}, query)

    def test_context_manager_closes_transport(self, transport):
        with GraphQLTestClient("/graphql", transport=transport) as client:
            client.query(Query("ping"))
        assert transport.closed

    def test_close_without_transport_close(self):
        class Bare:
            def post_query(self, payload, is_multipart=False):
                return {}

        GraphQLTestClient("/graphql", transport=Bare()).close()

    def test_query_and_assert_round_trip(self, client, transport):
        query = Query("users", ["id", Field("roles", ["name"])], {"first": 2})
        transport.reply = {
            "data": {"users": [{"id": 1, "roles": [{"name": "admin"}]}, {"id": 2, "roles": []}]}
        }
        result = client.query(query)
        client.assert_graphql_fields(result.data, query)
