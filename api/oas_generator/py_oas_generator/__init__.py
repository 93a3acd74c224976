"""
Python OpenAPI Client Generator

A Jinja2-based generator that produces typed Python API clients from OpenAPI
specifications, together with the runtime those clients import.
"""

from .generator import PythonCodeGenerator, PythonTemplateEngine
from .parser import OASParser, ParsedSpec

__version__ = "1.0.0"

__all__ = [
    "OASParser",
    "ParsedSpec",
    "PythonCodeGenerator",
    "PythonTemplateEngine",
]
