"""
Jinja2 filters for Python code generation.

This module provides custom Jinja2 filters used by the templates to turn
OpenAPI text and metadata into valid Python source.
"""

from __future__ import annotations

import json
import keyword

from py_oas_generator.utils.string_case import python_pascal_case

# Semantic versioning constants
_MAX_SEMVER_PARTS = 3
_DEFAULT_VERSION = "0.1.0"

_API_TITLE_SUFFIXES = frozenset({"api", "rest", "service", "openapi"})


def _escape_docstring_line(line: str) -> str:
    return line.strip().replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


def python_docstring(text: str | None, indent: int = 0) -> str:
    """Convert text to a Python docstring literal.

    The first line of the literal is not indented (the template places it);
    continuation lines are indented by ``indent`` spaces.

    Args:
        text: The documentation text.
        indent: Indentation of the surrounding block.

    Returns:
        A triple-quoted string literal, or an empty string for empty text.
    """
    if not text or not text.strip():
        return ""

    lines = [_escape_docstring_line(line) for line in text.strip().split("\n")]
    if len(lines) == 1:
        closing = " " if lines[0].endswith('"') else ""
        return f'"""{lines[0]}{closing}"""'

    prefix = " " * indent
    body = "\n".join(f"{prefix}{line}" if line else "" for line in lines[1:])
    return f'"""{lines[0]}\n{body}\n{prefix}"""'


def python_string_literal(text: str | None) -> str:
    """Format text as a Python string literal."""
    return json.dumps(text or "")


def _parse_version_parts(version_str: str) -> list[str]:
    """Parse version string into numeric parts.

    Args:
        version_str: Version string to parse.

    Returns:
        List of numeric version parts as strings.
    """
    if not version_str:
        return []

    cleaned_version = version_str.lstrip("v")
    parts = [part.strip() for part in cleaned_version.split(".") if part.strip()]

    # Ensure all parts are numeric, replace invalid parts with "0"
    return [part if part.isdigit() else "0" for part in parts]


def ensure_semver(version_str: str) -> str:
    """Ensure version string is valid semantic versioning format.

    Args:
        version_str: Version string to validate and format.

    Returns:
        Valid semantic version string (e.g., "1.2.3").

    Examples:
        >>> ensure_semver("1")
        '1.0.0'
        >>> ensure_semver("1.2")
        '1.2.0'
        >>> ensure_semver("v1.2.3")
        '1.2.3'
    """
    if not version_str:
        return _DEFAULT_VERSION

    parts = _parse_version_parts(str(version_str))

    if not parts:
        return _DEFAULT_VERSION

    match len(parts):
        case 1:
            parts.extend(["0", "0"])
        case 2:
            parts.append("0")
        case n if n > _MAX_SEMVER_PARTS:
            parts = parts[:_MAX_SEMVER_PARTS]

    return ".".join(parts)


def is_valid_python_identifier(name: str) -> bool:
    """Check if a string is a valid, non-keyword Python identifier."""
    return name.isidentifier() and not keyword.iskeyword(name)


def http_method(method: str) -> str:
    """Normalize an HTTP method for the runtime request descriptor."""
    return method.upper()


def detect_client_type(spec_title: str) -> str:
    """Derive the client class prefix from the OpenAPI title.

    Args:
        spec_title: The title field from the OpenAPI spec info section.

    Returns:
        PascalCase name without generic API suffixes.

    Examples:
        >>> detect_client_type("Svix API")
        'Svix'
        >>> detect_client_type("Swagger Petstore - OpenAPI 3.0")
        'SwaggerPetstore'
        >>> detect_client_type("")
        'Api'
    """
    if not spec_title:
        return "Api"

    words = [word.strip(".,!?-") for word in spec_title.split()]
    kept: list[str] = []
    for word in words:
        if not word or word.lower() in _API_TITLE_SUFFIXES:
            continue
        if not word[0].isalpha():
            break
        kept.append(word)

    name = python_pascal_case(" ".join(kept))
    return name or "Api"


# Register filters that will be available in Jinja templates
FILTERS = {
    "python_docstring": python_docstring,
    "python_string_literal": python_string_literal,
    "ensure_semver": ensure_semver,
    "http_method": http_method,
}
