"""pytest plugin providing a ``graphql_client`` fixture.

The endpoint comes from ``--graphql-url``, the ``graphql_url`` ini option
or the ``GRAPHQL_TEST_URL`` environment variable, in that order.
"""

import os

import pytest

from .core.client import GraphQLTestClient

URL_ENV_VAR = "GRAPHQL_TEST_URL"


def pytest_addoption(parser):
    group = parser.getgroup("graphql", "GraphQL test client")
    group.addoption(
        "--graphql-url",
        action="store",
        default=None,
        help=f"GraphQL endpoint used by the graphql_client fixture (default: ${URL_ENV_VAR}).",
    )
    parser.addini("graphql_url", "GraphQL endpoint used by the graphql_client fixture.", default="")


def graphql_url_from_config(config) -> str | None:
    return config.getoption("--graphql-url") or config.getini("graphql_url") or os.environ.get(URL_ENV_VAR)


@pytest.fixture
def graphql_client(request):
    """A GraphQLTestClient for the configured endpoint; skips when none is set."""
    url = graphql_url_from_config(request.config)
    if not url:
        pytest.skip(f"no GraphQL endpoint configured (--graphql-url or ${URL_ENV_VAR})")
    with GraphQLTestClient(url) as client:
        yield client
