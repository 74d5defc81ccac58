"""Convert GraphQL wire names into Go identifiers.

Both helpers are pure: the same input always yields the same identifier, so
regenerating from an unchanged schema is byte-identical.
"""

import re

# Go's MixedCaps convention keeps well-known initialisms in a single case.
GO_INITIALISMS = frozenset(
    {
        "ACL",
        "API",
        "ASCII",
        "CPU",
        "CSS",
        "DNS",
        "EOF",
        "GUID",
        "HTML",
        "HTTP",
        "HTTPS",
        "ID",
        "IP",
        "JSON",
        "LHS",
        "QPS",
        "RAM",
        "RHS",
        "RPC",
        "SLA",
        "SMTP",
        "SQL",
        "SSH",
        "TCP",
        "TLS",
        "TTL",
        "UDP",
        "UI",
        "UID",
        "UUID",
        "URI",
        "URL",
        "UTF8",
        "VM",
        "XML",
        "XMPP",
        "XSRF",
        "XSS",
    }
)

# Names whose conventional Go spelling is neither all upper-case nor simply capitalised.
GO_SPELLINGS = {
    "IDS": "IDs",
    "GITHUB": "GitHub",
    "GRAPHQL": "GraphQL",
}

# An upper-case run directly followed by a capitalised word ("HTTPServer" -> "HTTP", "Server"),
# optional capitals followed by anything that is not a capital ("some_field", "sha256", "Mutation"),
# or a trailing upper-case run.
_CAMEL_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]*[^A-Z]+|[A-Z]+")


def split_lower_camel_case(name: str) -> list[str]:
    """Split a lowerCamelCase name into words: ``clientMutationId`` -> ``client``, ``Mutation``, ``Id``.

    Underscores and digits stay inside the word they appear in (``some_field`` is one word).
    """
    return _CAMEL_WORD_RE.findall(name)


def split_screaming_snake_case(name: str) -> list[str]:
    """Split a SCREAMING_SNAKE_CASE name into words: ``NOT_FOUND`` -> ``NOT``, ``FOUND``."""
    return [word for word in name.split("_") if word]


def to_mixed_caps(words: list[str]) -> str:
    """Join words into a Go exported identifier."""
    parts = []
    for word in words:
        upper = word.upper()
        if upper in GO_SPELLINGS:
            parts.append(GO_SPELLINGS[upper])
        elif upper in GO_INITIALISMS:
            parts.append(upper)
        else:
            parts.append(word[:1].upper() + word[1:].lower())
    return "".join(parts)


def field_identifier(name: str) -> str:
    """
    Convert a lowerCamelCase GraphQL field name to a Go field identifier.

    Args:
        name: The wire-level field name, e.g. ``spaceMrn``

    Returns:
        str: The exported Go identifier, e.g. ``SpaceMrn``
    """
    return to_mixed_caps(split_lower_camel_case(name))


def enum_value_identifier(enum_name: str, value_name: str) -> str:
    """
    Convert a SCREAMING_SNAKE_CASE enum value to a Go constant identifier.

    The enum name is used as a prefix so values shared between enums do not
    collide in the package namespace.

    Args:
        enum_name: Name of the owning enum, e.g. ``Color``
        value_name: The wire-level value, e.g. ``RED``

    Returns:
        str: The Go constant identifier, e.g. ``ColorRed``
    """
    return enum_name + to_mixed_caps(split_screaming_snake_case(value_name))
