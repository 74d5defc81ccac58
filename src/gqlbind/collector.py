from pydantic import ValidationError

from gqlbind import log
from gqlbind.declarations import (
    Declarations,
    EnumDeclaration,
    EnumValueDeclaration,
    InputFieldDeclaration,
    InputObjectDeclaration,
)
from gqlbind.errors import SchemaShapeError
from gqlbind.models import Schema, TypeDescriptor, TypeKind
from gqlbind.naming import enum_value_identifier, field_identifier
from gqlbind.resolver import is_required, resolve_input_field

EMITTED_KINDS = frozenset({TypeKind.ENUM, TypeKind.INPUT_OBJECT})


def sort_by_name(types: list[TypeDescriptor]) -> list[TypeDescriptor]:
    """Sort types by name so the output does not depend on the schema's type order."""
    return sorted(types, key=lambda type_def: type_def.name)


def get_emitted_types(schema: Schema, kind: TypeKind) -> list[TypeDescriptor]:
    """
    Return the non-introspection types of the given kind, sorted by name.

    Args:
        schema: The parsed schema
        kind: Either TypeKind.ENUM or TypeKind.INPUT_OBJECT

    Returns:
        list[TypeDescriptor]: Matching types in lexicographic name order.
    """
    if kind not in EMITTED_KINDS:
        raise ValueError(f"Only {sorted(k.value for k in EMITTED_KINDS)} types are emitted, got {kind.value}")
    return sort_by_name([type_def for type_def in schema.types if type_def.kind is kind and not type_def.is_internal])


def build_enum(enum_type: TypeDescriptor) -> EnumDeclaration:
    """Build the declaration of one enum type, values kept in schema order."""
    try:
        return EnumDeclaration(
            name=enum_type.name,
            description=enum_type.description,
            values=[
                EnumValueDeclaration(
                    name=value.name,
                    identifier=enum_value_identifier(enum_type.name, value.name),
                    description=value.description,
                    is_deprecated=value.is_deprecated,
                    deprecation_reason=value.deprecation_reason,
                )
                for value in enum_type.enum_values
            ],
        )
    except ValidationError as e:
        raise SchemaShapeError(f"Enum {enum_type.name!r} cannot be declared: {e}") from e


def build_input_object(input_type: TypeDescriptor) -> InputObjectDeclaration:
    """
    Build the declaration of one input object.

    Fields are split into a required group (top-level NON_NULL) and an optional
    group; each group keeps the schema's field order.
    """
    required_fields: list[InputFieldDeclaration] = []
    optional_fields: list[InputFieldDeclaration] = []

    for input_field in input_type.input_fields:
        resolved = resolve_input_field(input_type.name, input_field)
        required = is_required(input_field.type)
        declaration = InputFieldDeclaration(
            name=input_field.name,
            identifier=field_identifier(input_field.name),
            type=resolved.expression,
            required=required,
            description=input_field.description,
        )
        (required_fields if required else optional_fields).append(declaration)

    try:
        return InputObjectDeclaration(
            name=input_type.name,
            description=input_type.description,
            required_fields=required_fields,
            optional_fields=optional_fields,
        )
    except ValidationError as e:
        raise SchemaShapeError(f"Input object {input_type.name!r} cannot be declared: {e}") from e


def collect(schema: Schema) -> Declarations:
    """
    Collect the enum and input object declarations of a schema.

    Args:
        schema: The parsed schema

    Returns:
        Declarations: Enums and input objects, each sorted by name.

    Raises:
        SchemaShapeError: If a declaration cannot be built from the schema.
        InvariantViolationError: If type resolution hits an internal defect.
    """
    enum_types = get_emitted_types(schema, TypeKind.ENUM)
    input_types = get_emitted_types(schema, TypeKind.INPUT_OBJECT)
    log.debug(f"Found {len(enum_types)} enum types and {len(input_types)} input object types")

    declarations = Declarations(
        enums=[build_enum(enum_type) for enum_type in enum_types],
        inputs=[build_input_object(input_type) for input_type in input_types],
    )

    log.info(f"Collected {len(declarations.enums)} enums and {len(declarations.inputs)} input objects")
    return declarations
