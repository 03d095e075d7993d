"""Command-line interface for gql-testclient."""

import json
import logging
import sys

import click
from pydantic import ValidationError

from .core.assertions import ShapeMismatchError, assert_graphql_fields
from .core.auth import BearerAuth
from .core.client import GraphQLTestClient
from .core.loader import load_field_file
from .core.query_builder import QueryBuilder, VariableConflictError


def _load_tree(path: str):
    try:
        return load_field_file(path)
    except (ValidationError, ValueError) as e:
        raise click.BadParameter(f"{path}: {e}") from e


def _parse_headers(values: tuple[str, ...]) -> dict[str, str]:
    headers = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME:VALUE, got {value!r}", param_hint="--header")
        headers[name.strip()] = content.strip()
    return headers


@click.group()
@click.version_option(package_name="gql-testclient")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging.",
)
def main(verbose: bool):
    """Build GraphQL operations from field trees and check response shapes.

    Field trees are JSON files; see gql_testclient.core.loader for the format.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@main.command()
@click.argument("tree", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--mutation",
    "-m",
    is_flag=True,
    help="Render as a mutation (declares variables).",
)
def render(tree: str, mutation: bool):
    """Print the document and variables built from a field tree.

    Examples:

        gql-testclient render ./user.json

        gql-testclient render -m ./create_user.json
    """
    root = _load_tree(tree)
    builder = QueryBuilder()
    try:
        payload = builder.build_mutation(root) if mutation else builder.build_query(root)
    except VariableConflictError as e:
        raise click.ClickException(str(e)) from e

    click.echo(payload["query"])
    click.echo(json.dumps(payload["variables"], indent=2))


@main.command()
@click.argument("tree", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--url",
    "-u",
    required=True,
    envvar="GRAPHQL_TEST_URL",
    help="GraphQL endpoint URL (default: $GRAPHQL_TEST_URL).",
)
@click.option(
    "--mutation",
    "-m",
    is_flag=True,
    help="Send as a mutation.",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra request header as NAME:VALUE (repeatable).",
)
@click.option(
    "--bearer",
    envvar="GRAPHQL_TEST_TOKEN",
    help="Bearer token for the Authorization header.",
)
@click.option(
    "--expect",
    "-e",
    type=click.Path(exists=True, dir_okay=False),
    help="Field tree the response data must contain (defaults to none).",
)
@click.option(
    "--timeout",
    type=float,
    default=30.0,
    show_default=True,
    help="Request timeout in seconds.",
)
def send(tree: str, url: str, mutation: bool, headers: tuple[str, ...], bearer: str | None,
         expect: str | None, timeout: float):
    """Send an operation built from a field tree and print the result.

    Exits with status 1 when --expect is given and the data does not match.

    Examples:

        gql-testclient send ./user.json --url http://localhost:8000/graphql

        gql-testclient send -m ./create_user.json -u $URL -e ./create_user.json
    """
    root = _load_tree(tree)
    expected = _load_tree(expect) if expect else None
    auth = BearerAuth(bearer) if bearer else None

    with GraphQLTestClient(url, headers=_parse_headers(headers), auth=auth, timeout=timeout) as client:
        try:
            result = client.mutate(root) if mutation else client.query(root)
        except VariableConflictError as e:
            raise click.ClickException(str(e)) from e

    click.echo(json.dumps(result.to_dict(), indent=2))

    if expected is not None:
        try:
            assert_graphql_fields(result.data, expected)
        except ShapeMismatchError as e:
            click.echo(f"Shape mismatch: {e}", err=True)
            sys.exit(1)
        click.echo("Shape OK", err=True)


if __name__ == "__main__":
    main()
