"""
OpenAPI Parser Module for Python Client Generation

This module provides parsing capabilities for OpenAPI specifications
to extract information needed for Python client generation.
"""

from py_oas_generator.utils.string_case import python_pascal_case as pascal_case
from py_oas_generator.utils.string_case import python_snake_case as snake_case

from .oas_parser import (
    OASParser,
    Operation,
    Parameter,
    ParsedSpec,
    Property,
    Response,
    Schema,
    SecurityScheme,
    TypeInfo,
    is_nullable_schema,
    load_spec_file,
    python_type_from_openapi,
    schema_kind,
    strip_null,
)

__all__ = [
    "OASParser",
    "Operation",
    "Parameter",
    "ParsedSpec",
    "Property",
    "Response",
    "Schema",
    "SecurityScheme",
    "TypeInfo",
    "is_nullable_schema",
    "load_spec_file",
    "pascal_case",
    "python_type_from_openapi",
    "schema_kind",
    "snake_case",
    "strip_null",
]
