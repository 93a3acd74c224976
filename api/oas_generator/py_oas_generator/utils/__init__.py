"""
Utilities Module for Python Client Generation

File operations and identifier case conversions used by the parser and
the template engine.
"""

from .file_utils import clean_output_directory, get_relative_path, list_python_files, write_files_to_disk
from .string_case import (
    camelcase,
    constcase,
    escape_python_keyword,
    normalize_python_identifier,
    pascalcase,
    python_enum_member,
    python_field_name,
    python_parameter_name,
    python_pascal_case,
    python_snake_case,
    snakecase,
)

__all__ = [
    "camelcase",
    "clean_output_directory",
    "constcase",
    "escape_python_keyword",
    "get_relative_path",
    "list_python_files",
    "normalize_python_identifier",
    "pascalcase",
    "python_enum_member",
    "python_field_name",
    "python_parameter_name",
    "python_pascal_case",
    "python_snake_case",
    "snakecase",
    "write_files_to_disk",
]
