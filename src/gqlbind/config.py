import re
from enum import Enum
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from gqlbind import log

DEFAULT_GENERATOR_NAME = "gqlbind"
DEFAULT_PACKAGE = "mondoogql"
DEFAULT_LICENSE_HEADER = [
    "Copyright (c) Mondoo, Inc.",
    "SPDX-License-Identifier: MPL-2.0",
]

_GO_PACKAGE_RE = re.compile(r"^[a-z][a-z0-9]*$")


class Region(str, Enum):
    US = "us"
    EU = "eu"

    @property
    def api_host(self) -> str:
        return f"{self.value}.api.mondoo.com"


DEFAULT_API_HOST = Region.US.api_host


class GeneratorConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    package: str = DEFAULT_PACKAGE
    license_header: list[str] = Field(default_factory=lambda: list(DEFAULT_LICENSE_HEADER), alias="licenseHeader")
    generator_name: str = Field(DEFAULT_GENERATOR_NAME, alias="generatorName")
    api_host: str = Field(DEFAULT_API_HOST, alias="apiHost")

    @field_validator("package")
    @classmethod
    def validate_package(cls, package: str) -> str:
        if not _GO_PACKAGE_RE.match(package):
            raise ValueError(f"'{package}' is not a valid Go package name (lower-case letters and digits only)")
        return package

    @property
    def header_lines(self) -> list[str]:
        """License preamble followed by the generated-file marker."""
        lines = list(self.license_header)
        if lines:
            lines.append("")
        lines.append(f"Code generated by {self.generator_name}; DO NOT EDIT.")
        return lines


def load_generator_config(config_path: Path | None, **overrides: Any) -> GeneratorConfig:
    """
    Load and validate the generator configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults.
        **overrides: Values that take precedence over the file (``None`` values are ignored).

    Returns:
        A validated GeneratorConfig.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the file is not valid YAML.
        TypeError: If the YAML root is not a mapping.
        ValidationError: If validation against GeneratorConfig fails.
    """
    raw: Any = None
    if config_path is not None:
        with config_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
        log.debug("Loaded generator config from %s", config_path)
    else:
        log.debug("No generator config provided")

    # Treat empty file or explicit YAML null as "defaults"
    if raw is None:
        raw = {}

    if not isinstance(raw, dict):
        raise TypeError(f"Generator config root must be a mapping (YAML object), got {type(raw).__name__}")

    raw_dict = cast(dict[str, Any], raw)
    raw_dict.update({key: value for key, value in overrides.items() if value is not None})
    return GeneratorConfig.model_validate(raw_dict)
