"""
Python Code Generator Module

This module provides Jinja2-based code generation for Python API clients
from OpenAPI specifications.
"""

from .template_engine import PythonCodeGenerator, PythonTemplateEngine

__all__ = [
    "PythonCodeGenerator",
    "PythonTemplateEngine",
]
