"""Exception types raised while loading a schema and generating bindings."""


class GqlbindError(Exception):
    """Base class for expected, reportable generation failures."""


class SchemaLoadError(GqlbindError):
    """Raised when the introspection document cannot be fetched or decoded.

    Covers transport failures, authentication failures (any non-200 response)
    and malformed JSON. No output is produced when this is raised.
    """


class SchemaShapeError(GqlbindError, ValueError):
    """Raised when the introspection document describes a type reference that
    cannot be turned into a declaration.

    The message always names the offending ``Type.field`` so the schema can be
    inspected.
    """


class UnsupportedTypeError(SchemaShapeError):
    """Raised when an input field refers to a type that has no input representation
    (object, interface or union types)."""


class FormatError(GqlbindError):
    """Raised when generated source text cannot be canonicalized."""


class InvariantViolationError(RuntimeError):
    """Raised when the generator's own assumptions do not hold.

    This is a defect in the generator, not bad input, and must abort the run.
    It intentionally does not derive from ``GqlbindError``.
    """


class SchemaShapeErrorMessages:
    """Standard error messages for SchemaShapeError exceptions."""

    UNKNOWN_KIND = "Unknown type kind {kind!r} in type reference of {where}"
    MISSING_OF_TYPE = "{kind} wrapper without ofType in type reference of {where}"
    MISSING_NAME = "Named type reference without a name in {where}"
    DUPLICATE_TYPE = "Type {name!r} is declared more than once"
    MISSING_SCHEMA = "Introspection document has no __schema object"
    UNSUPPORTED_INPUT = "Input field {where} refers to {kind} type {name!r}, which cannot be used as input"
