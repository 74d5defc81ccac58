import json
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined

from gqlbind import log
from gqlbind.collector import collect
from gqlbind.config import GeneratorConfig
from gqlbind.declarations import Declarations, GeneratedFile
from gqlbind.errors import FormatError
from gqlbind.models import Schema

ENUM_FILENAME = "enum.go"
INPUT_FILENAME = "input.go"

TEMPLATES = {
    ENUM_FILENAME: "enum.go.j2",
    INPUT_FILENAME: "input.go.j2",
}

FORMAT_ERROR_PREFIX = "// gofmt error: "

Formatter = Callable[[str], str]


def comment(text: str) -> str:
    """Render text as a Go line comment, one ``//`` per line."""
    return "\n".join(f"// {line}" if line else "//" for line in (text.splitlines() or [""]))


def quote(text: str) -> str:
    """Render text as a double-quoted Go string literal."""
    return json.dumps(text, ensure_ascii=True)


class GoFormatter:
    """Canonicalize Go source by piping it through ``gofmt``."""

    def __init__(self, command: Sequence[str] = ("gofmt",), timeout: float | None = 30) -> None:
        self.command = list(command)
        self.timeout = timeout

    def __call__(self, source: str) -> str:
        log.debug(f"Running command: {' '.join(self.command)}")
        try:
            result = subprocess.run(
                self.command,
                input=source,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise FormatError(f"{self.command[0]} not found") from e
        except subprocess.TimeoutExpired as e:
            raise FormatError(f"{self.command[0]} timed out after {self.timeout}s") from e

        if result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else ""
            raise FormatError(stderr or f"{self.command[0]} failed with return code {result.returncode}")

        return result.stdout


DEFAULT_FORMATTER = GoFormatter()


class GoEmitter:
    """
    Render collected declarations into Go source files.

    One file is rendered per declaration category. Each file is passed through
    the formatter; when formatting fails the raw text is kept, prefixed with a
    comment carrying the formatter's error.
    """

    def __init__(self, config: GeneratorConfig | None = None, formatter: Formatter | None = DEFAULT_FORMATTER) -> None:
        self.config = config or GeneratorConfig()
        self.formatter = formatter

        self.env = Environment(
            loader=PackageLoader("gqlbind", "templates"),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["comment"] = comment
        self.env.filters["quote"] = quote

    def _build_template_vars(self, declarations: Declarations) -> dict[str, Any]:
        template_vars = declarations.model_dump()
        template_vars["input_names"] = declarations.input_names
        template_vars["header_lines"] = self.config.header_lines
        template_vars["package"] = self.config.package
        return template_vars

    def render(self, declarations: Declarations) -> list[GeneratedFile]:
        """Render every output file, in a fixed order."""
        template_vars = self._build_template_vars(declarations)

        files = []
        for filename, template_name in TEMPLATES.items():
            raw = self.env.get_template(template_name).render(template_vars)
            files.append(self.canonicalize(filename, raw))
        return files

    def canonicalize(self, filename: str, raw: str) -> GeneratedFile:
        """Format raw source, degrading to the annotated raw text when formatting fails."""
        if self.formatter is None:
            return GeneratedFile(name=filename, content=raw)

        try:
            content = self.formatter(raw)
        except FormatError as e:
            log.warning(f"Could not format {filename}: {e}")
            return GeneratedFile(name=filename, content=f"{FORMAT_ERROR_PREFIX}{e}\n\n{raw}", format_error=str(e))

        return GeneratedFile(name=filename, content=content)


def emit(
    declarations: Declarations,
    config: GeneratorConfig | None = None,
    formatter: Formatter | None = DEFAULT_FORMATTER,
) -> list[GeneratedFile]:
    """
    Render declarations into Go source files.

    Args:
        declarations: Collected, sorted declarations
        config: Package name and preamble settings
        formatter: Callable canonicalizing Go source, or None to keep the raw text

    Returns:
        list[GeneratedFile]: The enum file followed by the input file.
    """
    return GoEmitter(config, formatter).render(declarations)


def write_files(files: list[GeneratedFile], base_path: Path) -> list[Path]:
    """
    Write generated files into base_path, overwriting existing files.

    Raises:
        OSError: If the directory cannot be created or a file cannot be written.
    """
    base_path.mkdir(parents=True, exist_ok=True)

    written = []
    for generated in files:
        outfile = base_path / generated.name
        log.info(f"Writing {outfile}")
        _ = outfile.write_text(generated.content, encoding="utf-8")
        written.append(outfile)
    return written


def generate(
    schema: Schema,
    base_path: Path,
    config: GeneratorConfig | None = None,
    formatter: Formatter | None = DEFAULT_FORMATTER,
) -> list[Path]:
    """
    Generate the Go bindings package for a schema into base_path.

    Args:
        schema: The parsed introspection schema
        base_path: Destination directory
        config: Package name and preamble settings
        formatter: Callable canonicalizing Go source, or None to keep the raw text

    Returns:
        list[Path]: The written files.
    """
    log.info(f"Generating Go bindings from {len(schema.types)} types")

    declarations = collect(schema)
    files = emit(declarations, config, formatter)
    written = write_files(files, base_path)

    failed = [generated.name for generated in files if generated.format_error]
    if failed:
        log.warning(f"Wrote unformatted output for: {', '.join(failed)}")

    log.info(f"Successfully generated {len(written)} files in {base_path}")
    return written
