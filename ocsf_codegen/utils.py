"""
Utility functions for the OCSF code generator.
"""

import re

# Words are runs of lowercase letters or digits, optionally led by one capital,
# or acronyms (a capital run not followed by a lowercase letter).
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])[0-9]*|[A-Z]?[a-z0-9]+")


def _normalize_separators(text: str) -> str:
    """Replace anything that is not a letter or digit by a space."""
    return re.sub(r"[^A-Za-z0-9]+", " ", text)


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase and acronym boundaries."""
    return _WORD_PATTERN.findall(_normalize_separators(text))


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word[0].upper() + word[1:].lower() for word in words if word)


def to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "file_activity" -> "FileActivity"
        "HTTPRequest" -> "HttpRequest"
        "ipV4" -> "IpV4"
        "Windows NT" -> "WindowsNt"
        "SHA-256" -> "Sha256"

    Args:
        text: The text to convert

    Returns:
        PascalCase string, possibly empty if the text holds no letters or digits
    """
    if not text:
        return ""
    return _capitalize_and_join(_split_into_words(text))


def to_snake_case(text: str) -> str:
    """Convert any casing to snake_case.

    Examples:
        "activityId" -> "activity_id"
        "HTTPRequest" -> "http_request"
        "class_uid" -> "class_uid"
    """
    return "_".join(word.lower() for word in _split_into_words(text))


def to_screaming_snake_case(text: str) -> str:
    """Convert any casing to SCREAMING_SNAKE_CASE."""
    return to_snake_case(text).upper()
