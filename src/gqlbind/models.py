"""Introspection data model.

The raw introspection JSON is parsed once into these immutable structures.
Type references form a closed union of three shapes so consumers can dispatch
on them exhaustively.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias, cast

from gqlbind.errors import SchemaShapeError
from gqlbind.errors import SchemaShapeErrorMessages as Messages

INTROSPECTION_PREFIX = "__"


class TypeKind(str, Enum):
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"


WRAPPER_KINDS = frozenset({TypeKind.LIST, TypeKind.NON_NULL})


@dataclass(frozen=True)
class NamedTypeRef:
    kind: TypeKind
    name: str


@dataclass(frozen=True)
class ListTypeRef:
    of_type: "TypeRef"

    @property
    def kind(self) -> TypeKind:
        return TypeKind.LIST


@dataclass(frozen=True)
class NonNullTypeRef:
    of_type: "TypeRef"

    @property
    def kind(self) -> TypeKind:
        return TypeKind.NON_NULL


TypeRef: TypeAlias = NamedTypeRef | ListTypeRef | NonNullTypeRef


@dataclass(frozen=True)
class InputValue:
    name: str
    type: TypeRef
    description: str | None = None
    default_value: str | None = None


@dataclass(frozen=True)
class EnumValue:
    name: str
    description: str | None = None
    is_deprecated: bool = False
    deprecation_reason: str | None = None


@dataclass(frozen=True)
class TypeDescriptor:
    kind: TypeKind
    name: str
    description: str | None = None
    fields: tuple[InputValue, ...] = ()
    input_fields: tuple[InputValue, ...] = ()
    enum_values: tuple[EnumValue, ...] = ()

    @property
    def is_internal(self) -> bool:
        return self.name.startswith(INTROSPECTION_PREFIX)


@dataclass(frozen=True)
class Schema:
    types: tuple[TypeDescriptor, ...] = ()
    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None
    _by_name: dict[str, TypeDescriptor] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for type_def in self.types:
            if type_def.name in self._by_name:
                raise SchemaShapeError(Messages.DUPLICATE_TYPE.format(name=type_def.name))
            self._by_name[type_def.name] = type_def

    def get_type(self, name: str) -> TypeDescriptor | None:
        return self._by_name.get(name)

    @classmethod
    def from_introspection(cls, document: Mapping[str, Any]) -> "Schema":
        """
        Build a Schema from an introspection result.

        Args:
            document: Either the full response ``{"data": {"__schema": ...}}``
                or the bare ``{"__schema": ...}`` object.

        Returns:
            Schema: The parsed schema, types kept in document order.

        Raises:
            SchemaShapeError: If the document is not a usable introspection result.
        """
        data = document.get("data", document)
        raw_schema = data.get("__schema") if isinstance(data, Mapping) else None
        if not isinstance(raw_schema, Mapping):
            raise SchemaShapeError(Messages.MISSING_SCHEMA)

        return cls(
            types=tuple(parse_type_descriptor(raw_type) for raw_type in raw_schema.get("types") or ()),
            query_type=_root_name(raw_schema.get("queryType")),
            mutation_type=_root_name(raw_schema.get("mutationType")),
            subscription_type=_root_name(raw_schema.get("subscriptionType")),
        )


def _root_name(raw: Mapping[str, Any] | None) -> str | None:
    return raw.get("name") if raw else None


def _parse_kind(raw_kind: Any, where: str) -> TypeKind:
    try:
        return TypeKind(raw_kind)
    except ValueError:
        raise SchemaShapeError(Messages.UNKNOWN_KIND.format(kind=raw_kind, where=where)) from None


def parse_type_ref(raw: Mapping[str, Any] | None, where: str) -> TypeRef:
    """
    Parse a (possibly wrapped) introspection type reference.

    Args:
        raw: The ``type`` object of a field or input value
        where: ``Type.field`` location used in error messages

    Returns:
        TypeRef: The parsed reference.

    Raises:
        SchemaShapeError: If the reference has an unknown kind, a wrapper
            without ``ofType`` or a leaf without a name.
    """
    if not raw:
        raise SchemaShapeError(Messages.MISSING_NAME.format(where=where))

    kind = _parse_kind(raw.get("kind"), where)
    if kind in WRAPPER_KINDS:
        of_type = raw.get("ofType")
        if not of_type:
            raise SchemaShapeError(Messages.MISSING_OF_TYPE.format(kind=kind.value, where=where))
        inner = parse_type_ref(of_type, where)
        return ListTypeRef(inner) if kind is TypeKind.LIST else NonNullTypeRef(inner)

    name = raw.get("name")
    if not name:
        raise SchemaShapeError(Messages.MISSING_NAME.format(where=where))
    return NamedTypeRef(kind, name)


def _parse_input_values(raw_values: Sequence[Mapping[str, Any]] | None, owner: str) -> tuple[InputValue, ...]:
    return tuple(
        InputValue(
            name=raw_value["name"],
            type=parse_type_ref(raw_value.get("type"), f"{owner}.{raw_value['name']}"),
            description=raw_value.get("description"),
            default_value=raw_value.get("defaultValue"),
        )
        for raw_value in raw_values or ()
    )


def parse_type_descriptor(raw: Mapping[str, Any]) -> TypeDescriptor:
    """Parse one entry of ``__schema.types``."""
    name = cast(str, raw.get("name") or "")
    kind = _parse_kind(raw.get("kind"), name or "<unnamed type>")
    if not name:
        raise SchemaShapeError(Messages.MISSING_NAME.format(where="__schema.types"))

    return TypeDescriptor(
        kind=kind,
        name=name,
        description=raw.get("description"),
        fields=_parse_input_values(raw.get("fields"), name),
        input_fields=_parse_input_values(raw.get("inputFields"), name),
        enum_values=tuple(
            EnumValue(
                name=raw_value["name"],
                description=raw_value.get("description"),
                is_deprecated=bool(raw_value.get("isDeprecated", False)),
                deprecation_reason=raw_value.get("deprecationReason"),
            )
            for raw_value in raw.get("enumValues") or ()
        ),
    )


def get_named_type_ref(ref: TypeRef) -> NamedTypeRef:
    """Unwrap all LIST and NON_NULL wrappers and return the leaf reference."""
    while not isinstance(ref, NamedTypeRef):
        ref = ref.of_type
    return ref
