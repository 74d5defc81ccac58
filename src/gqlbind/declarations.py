"""Pydantic models for the Go declarations rendered into the generated files."""

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from gqlbind.text import end_sentence, full_sentence, normalize_whitespace


def _doc_comment(name: str, description: str | None) -> str:
    if not description or not normalize_whitespace(description):
        return name
    return f"{name} {end_sentence(description)}"


class EnumValueDeclaration(BaseModel):
    """A Go constant of an enum type."""

    name: str
    identifier: str
    description: str | None = None
    deprecation_reason: str | None = None
    is_deprecated: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def deprecation_comment(self) -> str | None:
        if not self.is_deprecated:
            return None
        reason = normalize_whitespace(self.deprecation_reason or "")
        return f"Deprecated: {full_sentence(reason)}" if reason else "Deprecated."


class EnumDeclaration(BaseModel):
    """A Go string type with one constant per GraphQL enum value."""

    name: str
    values: list[EnumValueDeclaration]
    description: str | None = None

    @field_validator("values")
    @classmethod
    def validate_unique_identifiers(cls, values: list[EnumValueDeclaration]) -> list[EnumValueDeclaration]:
        identifiers = [v.identifier for v in values]
        if len(identifiers) != len(set(identifiers)):
            raise ValueError("Enum values must map to unique identifiers")
        return values

    @computed_field  # type: ignore[prop-decorator]
    @property
    def doc_comment(self) -> str:
        return _doc_comment(self.name, self.description)


class InputFieldDeclaration(BaseModel):
    """A field of a Go input struct."""

    name: str
    identifier: str
    type: str
    required: bool
    description: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def comment(self) -> str:
        tier = "(Required.)" if self.required else "(Optional.)"
        if self.description and normalize_whitespace(self.description):
            return f"{full_sentence(normalize_whitespace(self.description))} {tier}"
        return tier

    @computed_field  # type: ignore[prop-decorator]
    @property
    def json_tag(self) -> str:
        return f'json:"{self.name}"' if self.required else f'json:"{self.name},omitempty"'


class InputObjectDeclaration(BaseModel):
    """A Go struct for a GraphQL input object, required fields first."""

    name: str
    required_fields: list[InputFieldDeclaration] = Field(default_factory=list)
    optional_fields: list[InputFieldDeclaration] = Field(default_factory=list)
    description: str | None = None

    @field_validator("required_fields")
    @classmethod
    def validate_required(cls, fields: list[InputFieldDeclaration]) -> list[InputFieldDeclaration]:
        if not all(f.required for f in fields):
            raise ValueError("Required field group contains an optional field")
        return fields

    @field_validator("optional_fields")
    @classmethod
    def validate_optional(cls, fields: list[InputFieldDeclaration]) -> list[InputFieldDeclaration]:
        if any(f.required for f in fields):
            raise ValueError("Optional field group contains a required field")
        return fields

    @model_validator(mode="after")
    def validate_field_identifiers(self) -> "InputObjectDeclaration":
        # Field identifiers must be exported and unique within the struct.
        seen: dict[str, str] = {}
        for f in self.fields:
            if not f.identifier[:1].isupper():
                raise ValueError(
                    f"Input field {self.name}.{f.name} maps to {f.identifier!r}, "
                    "which is not an exported Go identifier"
                )
            if f.identifier in seen:
                raise ValueError(
                    f"Input field {self.name}.{f.name} maps to Go identifier {f.identifier!r}, "
                    f"already used by {self.name}.{seen[f.identifier]}"
                )
            seen[f.identifier] = f.name
        return self

    @property
    def fields(self) -> list[InputFieldDeclaration]:
        return self.required_fields + self.optional_fields

    @computed_field  # type: ignore[prop-decorator]
    @property
    def doc_comment(self) -> str:
        return _doc_comment(self.name, self.description)


class Declarations(BaseModel):
    """Everything that gets emitted, each list sorted by name."""

    enums: list[EnumDeclaration] = Field(default_factory=list)
    inputs: list[InputObjectDeclaration] = Field(default_factory=list)

    @property
    def input_names(self) -> list[str]:
        return [input_object.name for input_object in self.inputs]


class GeneratedFile(BaseModel):
    """One rendered output artifact."""

    name: str
    content: str
    format_error: str | None = None
