"""Shared fixtures for gql_testclient tests."""

import pytest

from gql_testclient.core.fields import Field, Query, Variable


class RecordingTransport:
    """Transport that records payloads and returns a canned reply."""

    def __init__(self, reply=None):
        self.reply = reply if reply is not None else {"data": {}}
        self.calls = []
        self.closed = False

    def post_query(self, payload, is_multipart=False):
        self.calls.append((payload, is_multipart))
        return self.reply

    def close(self):
        self.closed = True


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def user_query():
    """A query root with one argument and a nested selection."""
    return Query(
        "user",
        ["id", "name", Field("posts", ["title", Field("tags", ["label"])])],
        {"id": 5},
    )


@pytest.fixture
def create_user_mutation():
    """A mutation root whose variable sits deep inside an input object."""
    return Query(
        "createUser",
        ["id"],
        {"input": {"profile": {"id": Variable("id", "abc", "ID!")}}},
    )
