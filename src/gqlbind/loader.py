"""Load the introspection document that the generator consumes.

The live source is a single authenticated POST of the standard introspection
query. Saved introspection JSON and local SDL files are supported as offline
sources; SDL is converted to the same introspection shape with graphql-core.
"""

import json
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from ariadne import load_schema_from_path
from ariadne.exceptions import GraphQLFileSyntaxError
from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    build_schema,
    get_introspection_query,
    introspection_from_schema,
)

from gqlbind import log
from gqlbind.config import DEFAULT_API_HOST
from gqlbind.errors import SchemaLoadError
from gqlbind.models import Schema

INTROSPECTION_QUERY: str = get_introspection_query(descriptions=True)

DEFAULT_TIMEOUT: float = 60.0


def build_request(api_host: str, token: str) -> urllib.request.Request:
    """Build the introspection POST request for an API host."""
    body = json.dumps({"query": INTROSPECTION_QUERY}).encode("utf-8")
    return urllib.request.Request(
        f"https://{api_host}/query",
        data=body,
        method="POST",
        headers={
            "Authorization": f"bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Origin": f"https://{api_host}",
        },
    )


def fetch_introspection(
    token: str,
    api_host: str = DEFAULT_API_HOST,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """
    Fetch the raw introspection document from a live API.

    Args:
        token: Bearer credential sent in the Authorization header
        api_host: Host serving the GraphQL endpoint at ``/query``
        timeout: Socket timeout in seconds

    Returns:
        dict[str, Any]: The decoded response, ``{"data": {"__schema": ...}}``.

    Raises:
        SchemaLoadError: On transport errors, non-200 responses, undecodable
            JSON or GraphQL errors in the response.
    """
    request = build_request(api_host, token)
    log.info(f"Fetching GraphQL schema from {request.full_url}")

    try:
        with urllib.request.urlopen(request, timeout=timeout) as resp:  # nosec - fixed https endpoint
            status = resp.status
            payload = resp.read()
    except urllib.error.HTTPError as e:
        body = e.read().decode("utf-8", errors="replace") if e.fp else ""
        raise SchemaLoadError(f"non-200 OK status code: {e.code} {e.reason} body: {body!r}") from e
    except urllib.error.URLError as e:
        raise SchemaLoadError(f"Could not reach {api_host}: {e.reason}") from e
    except OSError as e:
        raise SchemaLoadError(f"Could not reach {api_host}: {e}") from e

    if status != 200:
        raise SchemaLoadError(f"non-200 OK status code: {status} body: {payload[:500]!r}")

    try:
        document = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SchemaLoadError(f"Could not decode introspection response: {e}") from e

    return check_introspection_document(document)


def check_introspection_document(document: Any) -> dict[str, Any]:
    """Ensure a decoded document is an introspection result without GraphQL errors."""
    if not isinstance(document, dict):
        raise SchemaLoadError(f"Introspection response must be a JSON object, got {type(document).__name__}")

    errors = document.get("errors")
    if errors:
        messages = "; ".join(
            str(error.get("message", error)) if isinstance(error, dict) else str(error) for error in errors
        )
        raise SchemaLoadError(f"Introspection query failed: {messages}")

    data = document.get("data", document)
    if not isinstance(data, dict) or "__schema" not in data:
        raise SchemaLoadError("Introspection response has no __schema object")

    return document


def load_introspection_file(path: Path) -> dict[str, Any]:
    """
    Load a saved introspection document.

    Raises:
        SchemaLoadError: If the file cannot be read or decoded.
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SchemaLoadError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Could not decode {path}: {e}") from e

    log.debug(f"Loaded introspection document from {path}")
    return check_introspection_document(document)


def resolve_graphql_files(paths: list[Path]) -> list[Path]:
    """Resolve files and directories into a flat, sorted list of unique GraphQL files."""
    resolved_files: set[Path] = set()

    for path in paths:
        if path.is_file():
            resolved_files.add(path)
        elif path.is_dir():
            for file in path.rglob("*.graphql"):
                resolved_files.add(file)

    return sorted(resolved_files)


def ensure_query(schema: GraphQLSchema) -> GraphQLSchema:
    """
    Ensure the schema has a Query type so it can be introspected.

    A generic Query type with a single ``ping`` field is added when missing.
    """
    if schema.query_type:
        return schema

    log.info("The provided schema has no Query type, adding a generic one.")
    query_type = GraphQLObjectType(name="Query", fields={"ping": GraphQLField(GraphQLString)})
    return GraphQLSchema(
        query=query_type,
        types=list(schema.type_map.values()),
        directives=schema.directives,
    )


def introspect_sdl(schema_str: str) -> dict[str, Any]:
    """
    Convert GraphQL SDL into an introspection document.

    Raises:
        SchemaLoadError: If the SDL cannot be built into a schema.
    """
    try:
        graphql_schema = ensure_query(build_schema(schema_str))
        introspection = introspection_from_schema(graphql_schema)
    except (GraphQLError, TypeError) as e:
        raise SchemaLoadError(f"Invalid GraphQL schema: {e}") from e

    return {"data": dict(introspection)}


def load_sdl_files(paths: list[Path]) -> dict[str, Any]:
    """Read GraphQL SDL files and directories and convert them into an introspection document."""
    graphql_files = resolve_graphql_files(paths)
    if not graphql_files:
        raise SchemaLoadError(f"No GraphQL files found in {', '.join(str(p) for p in paths)}")

    try:
        schema_str = "\n".join(load_schema_from_path(graphql_file) for graphql_file in graphql_files)
    except GraphQLFileSyntaxError as e:
        raise SchemaLoadError(str(e)) from e

    log.debug(f"Read {len(graphql_files)} GraphQL files")
    return introspect_sdl(schema_str)


def load_schema(
    *,
    introspection_file: Path | None = None,
    schema_paths: list[Path] | None = None,
    token: str | None = None,
    api_host: str = DEFAULT_API_HOST,
) -> Schema:
    """
    Load a Schema from exactly one source: a saved introspection file, SDL
    files, or the live API.

    Raises:
        SchemaLoadError: If the source cannot be loaded.
        SchemaShapeError: If the document cannot be parsed into a Schema.
    """
    if introspection_file is not None:
        document = load_introspection_file(introspection_file)
    elif schema_paths:
        document = load_sdl_files(schema_paths)
    elif token:
        document = fetch_introspection(token, api_host)
    else:
        raise SchemaLoadError("No schema source given: pass an introspection file, SDL files or an API token")

    schema = Schema.from_introspection(document)
    log.info(f"Loaded schema with {len(schema.types)} types")
    return schema
