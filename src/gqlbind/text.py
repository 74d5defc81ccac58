import re


def normalize_whitespace(text: str) -> str:
    """Normalize whitespace in text by collapsing multiple spaces/newlines."""
    return re.sub(r"\s+", " ", text).strip()


def full_sentence(text: str) -> str:
    """Terminate text with a period if it is not already."""
    return text if text.endswith(".") else text + "."


def end_sentence(text: str) -> str:
    """
    Turn a type description into the tail of a doc comment sentence that starts with the type name.

    "The state of an asset" -> "represents the state of an asset.",
    "Autogenerated input type of X" -> "is an autogenerated input type of X.",
    "Specifies the order" -> "specifies the order."
    """
    text = normalize_whitespace(text)
    text = text[:1].lower() + text[1:]
    if text.startswith("autogenerated "):
        text = "is an " + text
    elif not text.startswith("specifies "):
        text = "represents " + text
    return full_sentence(text)
