"""Tests for the Jinja2 filters used by the templates."""

import pytest

from py_oas_generator.generator.filters import (
    detect_client_type,
    ensure_semver,
    http_method,
    is_valid_python_identifier,
    python_docstring,
    python_string_literal,
)


class TestDocstrings:
    def test_single_line(self) -> None:
        assert python_docstring("List applications.") == '"""List applications."""'

    def test_trailing_quote_gets_a_space(self) -> None:
        assert python_docstring('Says "hi"') == '"""Says "hi" """'

    def test_multi_line_is_indented(self) -> None:
        text = "Summary.\n\nMore detail\nacross lines."

        assert python_docstring(text, 4) == '"""Summary.\n\n    More detail\n    across lines.\n    """'

    def test_escapes(self) -> None:
        assert python_docstring('a """ b \\ c') == '"""a \\"\\"\\" b \\\\ c"""'

    @pytest.mark.parametrize("text", [None, "", "   \n "])
    def test_empty(self, text: str | None) -> None:
        assert python_docstring(text) == ""


def test_string_literal() -> None:
    assert python_string_literal('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert python_string_literal(None) == '""'


@pytest.mark.parametrize(
    ("version", "expected"),
    [("1", "1.0.0"), ("1.4", "1.4.0"), ("v1.2.3", "1.2.3"), ("1.2.3.4", "1.2.3"), ("", "0.1.0"), ("1.x", "1.0.0")],
)
def test_ensure_semver(version: str, expected: str) -> None:
    assert ensure_semver(version) == expected


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Svix API", "Svix"),
        ("Swagger Petstore - OpenAPI 3.0", "SwaggerPetstore"),
        ("Algod REST API", "Algod"),
        ("", "Api"),
        ("API", "Api"),
    ],
)
def test_detect_client_type(title: str, expected: str) -> None:
    assert detect_client_type(title) == expected


def test_identifiers_and_methods() -> None:
    assert is_valid_python_identifier("app_id")
    assert not is_valid_python_identifier("class")
    assert not is_valid_python_identifier("app-id")
    assert http_method("get") == "GET"
