import pytest

from gqlbind.errors import InvariantViolationError, SchemaShapeError, UnsupportedTypeError
from gqlbind.models import InputValue, ListTypeRef, NamedTypeRef, NonNullTypeRef, TypeKind, TypeRef
from gqlbind.resolver import ResolvedType, is_required, resolve_input_field, resolve_type

INT = NamedTypeRef(TypeKind.SCALAR, "Int")
STRING = NamedTypeRef(TypeKind.SCALAR, "String")


class TestResolveType:
    """Test resolution of wrapped type references into Go expressions."""

    def test_named_type_is_nullable_pointer(self) -> None:
        assert resolve_type(STRING) == ResolvedType("*String", True)

    def test_non_null_named_type(self) -> None:
        assert resolve_type(NonNullTypeRef(STRING)) == ResolvedType("String", False)

    @pytest.mark.parametrize(
        "ref,expected",
        [
            # [Int!]: nullable list of non-nullable ints
            (ListTypeRef(NonNullTypeRef(INT)), ResolvedType("*[]Int", True)),
            # [Int]!: non-nullable list of nullable ints
            (NonNullTypeRef(ListTypeRef(INT)), ResolvedType("[]*Int", False)),
            # [Int!]!: non-nullable list of non-nullable ints
            (NonNullTypeRef(ListTypeRef(NonNullTypeRef(INT))), ResolvedType("[]Int", False)),
            # [Int]: nullable list of nullable ints
            (ListTypeRef(INT), ResolvedType("*[]*Int", True)),
        ],
    )
    def test_list_nullability_composition(self, ref: TypeRef, expected: ResolvedType) -> None:
        assert resolve_type(ref) == expected

    def test_enum_and_input_leaves_use_their_names(self) -> None:
        assert resolve_type(NamedTypeRef(TypeKind.ENUM, "Severity")).expression == "*Severity"
        assert resolve_type(NonNullTypeRef(NamedTypeRef(TypeKind.INPUT_OBJECT, "AssetFilter"))).expression == (
            "AssetFilter"
        )

    def test_seven_levels_of_wrapping(self) -> None:
        # [[[Int!]!]]!
        ref: TypeRef = NonNullTypeRef(
            ListTypeRef(ListTypeRef(NonNullTypeRef(ListTypeRef(NonNullTypeRef(INT)))))
        )
        assert resolve_type(ref) == ResolvedType("[]*[][]Int", False)

        deep: TypeRef = INT
        for _ in range(7):
            deep = ListTypeRef(deep)
        assert resolve_type(deep) == ResolvedType("*[]" * 7 + "*Int", True)

    def test_double_non_null_is_an_invariant_violation(self) -> None:
        with pytest.raises(InvariantViolationError, match="doesn't begin with"):
            resolve_type(NonNullTypeRef(NonNullTypeRef(STRING)))

    def test_invariant_violation_is_not_an_input_error(self) -> None:
        assert not issubclass(InvariantViolationError, SchemaShapeError)
        assert issubclass(InvariantViolationError, RuntimeError)


class TestIsRequired:
    @pytest.mark.parametrize(
        "ref,expected",
        [
            (NonNullTypeRef(STRING), True),
            (STRING, False),
            (ListTypeRef(NonNullTypeRef(STRING)), False),
            (NonNullTypeRef(ListTypeRef(STRING)), True),
        ],
    )
    def test_only_outermost_non_null_counts(self, ref: TypeRef, expected: bool) -> None:
        assert is_required(ref) is expected


class TestResolveInputField:
    def test_scalar_field(self) -> None:
        field = InputValue(name="name", type=NonNullTypeRef(STRING))
        assert resolve_input_field("CreateSpaceInput", field) == ResolvedType("String", False)

    @pytest.mark.parametrize("kind", [TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION])
    def test_output_types_are_rejected(self, kind: TypeKind) -> None:
        field = InputValue(name="asset", type=ListTypeRef(NonNullTypeRef(NamedTypeRef(kind, "Asset"))))
        with pytest.raises(UnsupportedTypeError, match=r"AssetFilter\.asset"):
            resolve_input_field("AssetFilter", field)
