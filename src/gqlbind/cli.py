import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import rich_click as click
import yaml
from rich.traceback import install

from gqlbind import __version__, log
from gqlbind.config import GeneratorConfig, Region, load_generator_config
from gqlbind.emitter import GoFormatter, generate as generate_bindings
from gqlbind.errors import GqlbindError, InvariantViolationError
from gqlbind.loader import fetch_introspection, load_schema

TOKEN_ENVVAR = "GQLBIND_API_TOKEN"


token_option = click.option(
    "--token",
    "-t",
    type=str,
    envvar=TOKEN_ENVVAR,
    help=f"Bearer token for the GraphQL API (defaults to ${TOKEN_ENVVAR})",
)

api_host_option = click.option(
    "--api-host",
    type=str,
    help="GraphQL API host, queried at https://<host>/query",
)

region_option = click.option(
    "--region",
    type=click.Choice([region.value for region in Region], case_sensitive=False),
    help="Shortcut for the API host of a region",
)

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file containing generator configuration",
)


def build_config(config_path: Path | None, **overrides: Any) -> GeneratorConfig:
    try:
        return load_generator_config(config_path, **overrides)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


def resolve_api_host(api_host: str | None, region: str | None) -> str | None:
    if api_host:
        return api_host
    if region:
        return Region(region.lower()).api_host
    return None


def handle_errors(action: Callable[[], None]) -> None:
    """Run a command body, turning expected failures into a logged error and exit code 1."""
    try:
        action()
    except InvariantViolationError as e:
        log.critical(f"Internal generator error, no output can be trusted: {e}")
        raise
    except GqlbindError as e:
        log.error(str(e))
        sys.exit(1)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)


@click.group(context_settings={"auto_envvar_prefix": "gqlbind"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    """Generate Go bindings from a GraphQL API's type system."""
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory the generated files are written to",
    show_default=True,
)
@click.option(
    "--introspection",
    "-i",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Saved introspection JSON document to generate from",
)
@click.option(
    "--schema",
    "-s",
    "schemas",
    type=click.Path(exists=True, path_type=Path),
    multiple=True,
    help="GraphQL SDL file or directory to generate from. Can be specified multiple times.",
)
@token_option
@api_host_option
@region_option
@click.option(
    "--package",
    "-p",
    type=str,
    help="Go package name of the generated files",
)
@config_option
@click.option(
    "--no-format",
    is_flag=True,
    default=False,
    help="Write the rendered source without running gofmt",
)
def generate(
    output: Path,
    introspection: Path | None,
    schemas: tuple[Path, ...],
    token: str | None,
    api_host: str | None,
    region: str | None,
    package: str | None,
    config_path: Path | None,
    no_format: bool,
) -> None:
    """Generate enum.go and input.go from a GraphQL schema."""
    if introspection and schemas:
        raise click.UsageError("Use either --introspection or --schema, not both")
    if not introspection and not schemas and not token:
        raise click.UsageError(f"No schema source: pass --introspection, --schema or an API token (${TOKEN_ENVVAR})")

    config = build_config(config_path, package=package, api_host=resolve_api_host(api_host, region))

    def run() -> None:
        schema = load_schema(
            introspection_file=introspection,
            schema_paths=list(schemas),
            token=token,
            api_host=config.api_host,
        )
        written = generate_bindings(schema, output, config, None if no_format else GoFormatter())
        log.success(f"Generated {len(written)} files in {output}")

    handle_errors(run)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    required=True,
    help="Output file",
)
@token_option
@api_host_option
@region_option
@config_option
def introspect(
    output: Path,
    token: str | None,
    api_host: str | None,
    region: str | None,
    config_path: Path | None,
) -> None:
    """Fetch the introspection document of a GraphQL API and save it as JSON."""
    if not token:
        raise click.UsageError(f"An API token is required: pass --token or set ${TOKEN_ENVVAR}")

    config = build_config(config_path, api_host=resolve_api_host(api_host, region))

    def run() -> None:
        document = fetch_introspection(token, config.api_host)
        output.parent.mkdir(parents=True, exist_ok=True)
        _ = output.write_text(json.dumps(document, indent=2), encoding="utf-8")
        log.success(f"Saved introspection document to {output}")

    handle_errors(run)


if __name__ == "__main__":
    cli()
