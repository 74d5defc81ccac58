from pathlib import Path
from typing import Any

import pytest

from gqlbind.loader import introspect_sdl
from gqlbind.models import Schema


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    SCHEMA: Path = TESTS_DATA_DIR / "schema.graphql"


def introspection_from_sdl(sdl: str) -> dict[str, Any]:
    """Introspection document for an SDL string, in the shape a live API returns."""
    return introspect_sdl(sdl)


def schema_from_sdl(sdl: str) -> Schema:
    return Schema.from_introspection(introspection_from_sdl(sdl))


def no_format(source: str) -> str:
    """Formatter that leaves the rendered source untouched."""
    return source


@pytest.fixture(scope="module")
def sample_schema() -> Schema:
    assert TestSchemaData.SCHEMA.exists(), f"Missing test file: {TestSchemaData.SCHEMA}"
    return schema_from_sdl(TestSchemaData.SCHEMA.read_text())
