"""
String case conversion utilities for Python client generation.

Converts OpenAPI names (camelCase properties, kebab-case parameters, dotted
operation ids) into Python identifiers and guards against keywords and names
that would shadow generated-model machinery.
"""

import keyword
import re
from collections.abc import Callable
from typing import Final

_DELIMITER_PATTERN: Final = re.compile(r"[\-\.\s/]+")
_ACRONYM_PATTERN: Final = re.compile(r"([A-Z])([A-Z][a-z])")
_LOWER_UPPER_PATTERN: Final = re.compile(r"([a-z0-9])([A-Z])")
_NON_IDENTIFIER_PATTERN: Final = re.compile(r"[^a-zA-Z0-9_]")
_REPEATED_UNDERSCORE_PATTERN: Final = re.compile(r"_{2,}")

# Attributes of runtime Model; a property with one of these names gets a trailing underscore
MODEL_RESERVED_NAMES: Final = frozenset(
    {
        "decode",
        "from_dict",
        "from_json",
        "get_ok",
        "has",
        "self",
        "set_null",
        "to_dict",
        "to_json",
        "unset",
    }
)

# Names that are legal but would shadow what generated modules import
GENERATED_RESERVED_NAMES: Final = frozenset(
    {
        "configuration",
        "executor",
        "params",
        "request",
        "self",
    }
)


def _convert_if_not_empty(string: str | None, conversion_func: Callable[[str], str]) -> str:
    """Safely convert a string, returning empty string if input is None or empty."""
    return conversion_func(string) if string else ""


def snakecase(string: str | None) -> str:
    """Convert string into snake_case.

    Examples:
        >>> snakecase("prevIterator")
        'prev_iterator'
        >>> snakecase("event-types")
        'event_types'
        >>> snakecase("v1.message.list")
        'v1_message_list'
        >>> snakecase("getHTTPResponse")
        'get_http_response'
    """

    def _snakecase(s: str) -> str:
        s = _DELIMITER_PATTERN.sub("_", s)
        s = _ACRONYM_PATTERN.sub(r"\1_\2", s)
        s = _LOWER_UPPER_PATTERN.sub(r"\1_\2", s)
        s = _REPEATED_UNDERSCORE_PATTERN.sub("_", s)
        return s.strip("_").lower()

    return _convert_if_not_empty(string, _snakecase)


def camelcase(string: str | None) -> str:
    """Convert string into camelCase.

    Examples:
        >>> camelcase("prev_iterator")
        'prevIterator'
    """

    def _camelcase(s: str) -> str:
        words = snakecase(s).split("_")
        return words[0] + "".join(word.capitalize() for word in words[1:])

    return _convert_if_not_empty(string, _camelcase)


def pascalcase(string: str | None) -> str:
    """Convert string into PascalCase.

    Examples:
        >>> pascalcase("list_response_message_attempt_endpoint_out")
        'ListResponseMessageAttemptEndpointOut'
        >>> pascalcase("v1.message.list")
        'V1MessageList'
    """

    def _pascalcase(s: str) -> str:
        return "".join(word.capitalize() for word in snakecase(s).split("_"))

    return _convert_if_not_empty(string, _pascalcase)


def constcase(string: str | None) -> str:
    """Convert string into CONSTANT_CASE.

    Examples:
        >>> constcase("ascending")
        'ASCENDING'
        >>> constcase("in-progress")
        'IN_PROGRESS'
    """
    return snakecase(string).upper()


def normalize_python_identifier(name: str | None) -> str:
    """Make a string a valid Python identifier.

    Examples:
        >>> normalize_python_identifier("123invalid")
        '_123invalid'
        >>> normalize_python_identifier("valid@name")
        'valid_name'
    """

    def _normalize(s: str) -> str:
        normalized = _NON_IDENTIFIER_PATTERN.sub("_", s)
        if normalized and normalized[0].isdigit():
            normalized = f"_{normalized}"
        return normalized

    return _convert_if_not_empty(name, _normalize)


def is_python_keyword(name: str) -> bool:
    return keyword.iskeyword(name) or keyword.issoftkeyword(name)


def escape_python_keyword(name: str) -> str:
    """Append an underscore to keywords.

    Examples:
        >>> escape_python_keyword("from")
        'from_'
        >>> escape_python_keyword("name")
        'name'
    """
    return f"{name}_" if is_python_keyword(name) else name


def python_snake_case(name: str | None) -> str:
    """Snake-case a name into a usable, non-keyword identifier."""
    return escape_python_keyword(normalize_python_identifier(snakecase(name)))


def python_pascal_case(name: str | None) -> str:
    """Pascal-case a name into a usable class name."""
    return normalize_python_identifier(pascalcase(name))


def python_field_name(name: str | None) -> str:
    """Identifier for a model property."""
    identifier = python_snake_case(name)
    if identifier in MODEL_RESERVED_NAMES:
        return f"{identifier}_"
    return identifier


def python_parameter_name(name: str | None) -> str:
    """Identifier for an operation parameter."""
    identifier = python_snake_case(name)
    if identifier in GENERATED_RESERVED_NAMES:
        return f"{identifier}_"
    return identifier


def python_enum_member(value: object) -> str:
    """Member name for a string enum value.

    Examples:
        >>> python_enum_member("ascending")
        'ASCENDING'
        >>> python_enum_member("")
        'EMPTY'
    """
    member = normalize_python_identifier(constcase(str(value)))
    if not member:
        return "EMPTY"
    return escape_python_keyword(member)
