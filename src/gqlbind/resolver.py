"""Translate introspection type references into Go type expressions.

Every GraphQL type is nullable unless wrapped in NON_NULL, so the resolver
starts from the pointer form of a named type and strips exactly one level of
pointer for each NON_NULL wrapper it meets on the way out.
"""

from typing import NamedTuple, assert_never

from gqlbind.errors import InvariantViolationError, UnsupportedTypeError
from gqlbind.errors import SchemaShapeErrorMessages as Messages
from gqlbind.models import (
    InputValue,
    ListTypeRef,
    NamedTypeRef,
    NonNullTypeRef,
    TypeKind,
    TypeRef,
    get_named_type_ref,
)

NULLABLE_MARKER = "*"
LIST_MARKER = "[]"

NON_INPUT_KINDS = frozenset({TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION})


class ResolvedType(NamedTuple):
    expression: str
    nullable: bool


def resolve_type(ref: TypeRef) -> ResolvedType:
    """
    Resolve a type reference to a Go type expression.

    ``String`` -> ``*String``, ``[String!]`` -> ``*[]String``,
    ``[String]!`` -> ``[]*String``.

    Args:
        ref: The type reference to resolve

    Returns:
        ResolvedType: The Go expression and whether it is nullable.

    Raises:
        InvariantViolationError: If a NON_NULL wraps an expression that is
            already non-nullable.
    """
    match ref:
        case NamedTypeRef(name=name):
            return ResolvedType(NULLABLE_MARKER + name, True)
        case ListTypeRef(of_type=of_type):
            inner = resolve_type(of_type)
            return ResolvedType(NULLABLE_MARKER + LIST_MARKER + inner.expression, True)
        case NonNullTypeRef(of_type=of_type):
            inner = resolve_type(of_type)
            if not inner.nullable or not inner.expression.startswith(NULLABLE_MARKER):
                raise InvariantViolationError(
                    f"nullable type {inner.expression!r} doesn't begin with {NULLABLE_MARKER!r}"
                )
            return ResolvedType(inner.expression[len(NULLABLE_MARKER) :], False)
        case _:
            assert_never(ref)


def is_required(ref: TypeRef) -> bool:
    """A field is required when its outermost wrapper is NON_NULL."""
    return isinstance(ref, NonNullTypeRef)


def resolve_input_field(owner: str, input_field: InputValue) -> ResolvedType:
    """
    Resolve the Go type of an input record field.

    Args:
        owner: Name of the input type declaring the field
        input_field: The field to resolve

    Returns:
        ResolvedType: The Go expression and nullability of the field.

    Raises:
        UnsupportedTypeError: If the field refers to an object, interface or union type.
    """
    leaf = get_named_type_ref(input_field.type)
    if leaf.kind in NON_INPUT_KINDS:
        raise UnsupportedTypeError(
            Messages.UNSUPPORTED_INPUT.format(where=f"{owner}.{input_field.name}", kind=leaf.kind.value, name=leaf.name)
        )
    return resolve_type(input_field.type)
