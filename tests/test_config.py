from pathlib import Path

import pytest
from pydantic import ValidationError

from gqlbind.config import (
    DEFAULT_API_HOST,
    DEFAULT_LICENSE_HEADER,
    GeneratorConfig,
    Region,
    load_generator_config,
)


class TestGeneratorConfig:
    def test_defaults(self) -> None:
        config = GeneratorConfig()
        assert config.package == "mondoogql"
        assert config.api_host == DEFAULT_API_HOST == "us.api.mondoo.com"
        assert config.header_lines == [*DEFAULT_LICENSE_HEADER, "", "Code generated by gqlbind; DO NOT EDIT."]

    @pytest.mark.parametrize("package", ["Mondoo", "mondoo-gql", "mondoo_gql", "1gql", ""])
    def test_invalid_package_names(self, package: str) -> None:
        with pytest.raises(ValidationError, match="not a valid Go package name"):
            GeneratorConfig(package=package)

    def test_unknown_keys_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GeneratorConfig.model_validate({"namingConvention": "snake_case"})

    def test_region_hosts(self) -> None:
        assert Region.US.api_host == "us.api.mondoo.com"
        assert Region.EU.api_host == "eu.api.mondoo.com"


class TestLoadGeneratorConfig:
    def test_no_file(self) -> None:
        assert load_generator_config(None) == GeneratorConfig()

    def test_empty_file_means_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "gqlbind.yaml"
        path.write_text("")
        assert load_generator_config(path) == GeneratorConfig()

    def test_yaml_file_with_aliases(self, tmp_path: Path) -> None:
        path = tmp_path / "gqlbind.yaml"
        path.write_text(
            "package: bindings\n"
            "licenseHeader:\n"
            "  - Copyright (c) Example Corp.\n"
            "apiHost: eu.api.mondoo.com\n"
        )
        config = load_generator_config(path)

        assert config.package == "bindings"
        assert config.license_header == ["Copyright (c) Example Corp."]
        assert config.api_host == "eu.api.mondoo.com"

    def test_overrides_win_and_none_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "gqlbind.yaml"
        path.write_text("package: bindings\n")
        config = load_generator_config(path, package="other", api_host=None)

        assert config.package == "other"
        assert config.api_host == DEFAULT_API_HOST

    def test_root_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "gqlbind.yaml"
        path.write_text("- package\n")
        with pytest.raises(TypeError, match="must be a mapping"):
            load_generator_config(path)
