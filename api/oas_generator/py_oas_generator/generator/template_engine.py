"""
Python Template Engine for OpenAPI Client Generation

This module uses Jinja2 templates to generate a Python client package
from parsed OpenAPI specifications.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from py_oas_generator.generator.filters import FILTERS, detect_client_type
from py_oas_generator.parser.oas_parser import (
    Operation,
    ParsedSpec,
    Schema,
    SecurityScheme,
    enum_members,
)
from py_oas_generator.utils.string_case import (
    python_pascal_case,
    python_snake_case,
)

logger = logging.getLogger(__name__)

DEFAULT_TAG = "default"

# Attributes of the generated client class that a resource attribute must not shadow
_CLIENT_ATTRIBUTES = frozenset({"close", "configuration", "executor", "with_token"})


class ParameterEnumAnalyzer:
    """Analyzes parameters to collect enum definitions."""

    @staticmethod
    def collect_parameter_enums(operations: list[Operation]) -> dict[str, dict[str, Any]]:
        """Collect all unique parameter enums from operations."""
        enums = {}

        for operation in operations:
            for param in operation.parameters:
                if param.is_enum_parameter:
                    enum_name = param.python_enum_type
                    if enum_name and enum_name not in enums:
                        enums[enum_name] = {
                            "members": enum_members(param.enum_values),
                            "description": param.description,
                            "parameter_name": param.name,
                        }

        return enums

    @staticmethod
    def get_operation_enums(operations: list[Operation]) -> list[str]:
        """Parameter enum classes referenced by the given operations."""
        return sorted(
            {
                param.python_enum_type
                for operation in operations
                for param in operation.parameters
                if param.python_enum_type
            }
        )


class OperationAnalyzer:
    """Groups operations by tag and names the generated modules."""

    @staticmethod
    def group_operations_by_tag(operations: list[Operation]) -> dict[str, list[Operation]]:
        """Group operations by their first tag."""
        groups: dict[str, list[Operation]] = {}
        for operation in operations:
            tag = operation.tags[0] if operation.tags else DEFAULT_TAG
            groups.setdefault(tag, []).append(operation)
        return groups

    @staticmethod
    def module_name(tag: str) -> str:
        """Module under ``apis/`` holding a tag's operations."""
        return f"{python_snake_case(tag) or DEFAULT_TAG}_api"

    @staticmethod
    def resource_class(tag: str) -> str:
        return f"{python_pascal_case(tag) or 'Default'}Api"

    @staticmethod
    def resource_attribute(tag: str) -> str:
        """Attribute of the client class exposing a tag's resource object."""
        name = python_snake_case(tag) or DEFAULT_TAG
        return f"{name}_api" if name in _CLIENT_ATTRIBUTES else name

    @staticmethod
    def operation_docstring(operation: Operation) -> str:
        """Summary and description of an operation, joined as a docstring body."""
        parts = [part.strip() for part in (operation.summary, operation.description) if part and part.strip()]
        if parts[1:] and parts[0] == parts[1]:
            parts = parts[:1]
        if operation.deprecated:
            parts.append("Deprecated.")
        return "\n\n".join(parts)


class TypeAnalyzer:
    """Analyzes types for imports."""

    @staticmethod
    def get_operation_used_types(operation: Operation) -> set[str]:
        """Model and enum classes referenced by a single operation."""
        used_types: set[str] = set()
        for response in operation.responses.values():
            if response.type_info:
                used_types.update(response.type_info.refs)
        for param in operation.parameters:
            used_types.update(param.type_info.refs)
        return used_types

    @classmethod
    def get_all_used_types(cls, operations: list[Operation]) -> list[str]:
        """Get all unique model classes used across operations for imports."""
        used_types: set[str] = set()
        for operation in operations:
            used_types.update(cls.get_operation_used_types(operation))
        return sorted(used_types)

    @staticmethod
    def uses_datetime(annotations: list[str]) -> bool:
        return any("datetime." in annotation for annotation in annotations)

    @classmethod
    def operations_use_datetime(cls, operations: list[Operation]) -> bool:
        return cls.uses_datetime([p.signature_type for op in operations for p in op.parameters])

    @classmethod
    def schemas_use_datetime(cls, schemas: list[Schema]) -> bool:
        return cls.uses_datetime([p.annotation for schema in schemas for p in schema.properties])


class SecurityAnalyzer:
    """Resolves operation security requirements to generated auth constants."""

    @staticmethod
    def get_operation_auth(operation: Operation, spec: ParsedSpec) -> list[SecurityScheme]:
        """Supported schemes of an operation, in declaration order."""
        return [spec.security_schemes[name] for name in operation.security if name in spec.security_schemes]

    @classmethod
    def get_used_auth(cls, operations: list[Operation], spec: ParsedSpec) -> list[str]:
        names = {scheme.python_name for op in operations for scheme in cls.get_operation_auth(op, spec)}
        return sorted(names)


class PythonTemplateEngine:
    """Template engine for generating Python code."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize the template engine."""
        if template_dir is None:
            current_dir = Path(__file__).parent
            template_dir = current_dir.parent / "templates"

        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._register_filters()
        self._register_globals()

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters for Python code generation."""
        builtin_filters = {
            "module_name": OperationAnalyzer.module_name,
            "resource_class": OperationAnalyzer.resource_class,
            "resource_attribute": OperationAnalyzer.resource_attribute,
        }

        self.env.filters.update(builtin_filters)
        self.env.filters.update(FILTERS)

    def _register_globals(self) -> None:
        """Register global functions available in templates."""
        globals_map: dict[str, Any] = {
            "operation_docstring": OperationAnalyzer.operation_docstring,
            "get_operation_auth": SecurityAnalyzer.get_operation_auth,
        }

        self.env.globals.update(globals_map)

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template with the given context."""
        template = self.env.get_template(template_name)
        logger.debug("Rendering %s", template_name)
        return template.render(**context)


class PythonCodeGenerator:
    """Main code generator for Python clients."""

    def __init__(
        self,
        template_engine: PythonTemplateEngine | None = None,
        *,
        group_parameters: bool = False,
    ) -> None:
        """Initialize the code generator.

        Args:
            template_engine: Engine to render with; the bundled templates by default.
            group_parameters: Emit one ``<Operation>Params`` dataclass per operation
                and take it as a single ``params`` argument.
        """
        self.template_engine = template_engine or PythonTemplateEngine()
        self.group_parameters = group_parameters

    def generate_client(
        self,
        spec: ParsedSpec,
        output_dir: Path,
        package_name: str = "api_client",
        custom_description: str | None = None,
    ) -> dict[Path, str]:
        """Generate a complete Python client package from an OpenAPI spec.

        Returns:
            Rendered file contents keyed by their destination path.
        """
        output_dir = Path(output_dir)
        operation_groups = OperationAnalyzer.group_operations_by_tag(spec.operations)
        parameter_enums = ParameterEnumAnalyzer.collect_parameter_enums(spec.operations)
        context = {
            "spec": spec,
            "package_name": package_name,
            "title": spec.info.get("title", package_name),
            "version": spec.info.get("version", ""),
            "operations": spec.operations,
            "operation_groups": operation_groups,
            "schemas": spec.schemas,
            "custom_description": custom_description,
            "group_parameters": self.group_parameters,
            "has_parameter_enums": bool(parameter_enums),
            "client_type": detect_client_type(spec.info.get("title", "")),
        }

        package_dir = output_dir / package_name
        files = {}
        files.update(self._generate_base_files(context, package_dir))
        files.update(self._generate_model_files(spec.schemas, context, package_dir))
        files.update(self._generate_parameter_enums(parameter_enums, context, package_dir))
        files.update(self._generate_api_files(operation_groups, context, package_dir))
        files.update(self._generate_project_files(context, output_dir))

        logger.debug("Generated %d files for %s", len(files), package_name)
        return files

    def _generate_base_files(self, context: dict[str, Any], package_dir: Path) -> dict[Path, str]:
        """Generate the package ``__init__`` and the client facade."""
        operations: list[Operation] = context["operations"]
        client_context = {
            **context,
            "used_types": TypeAnalyzer.get_all_used_types(operations),
            "used_enums": ParameterEnumAnalyzer.get_operation_enums(operations),
            "uses_datetime": TypeAnalyzer.operations_use_datetime(operations),
        }
        return {
            package_dir / "__init__.py": self.template_engine.render_template("base/__init__.py.j2", context),
            package_dir / "client.py": self.template_engine.render_template("apis/client.py.j2", client_context),
        }

    def _generate_model_files(
        self,
        schemas: dict[str, Schema],
        context: dict[str, Any],
        package_dir: Path,
    ) -> dict[Path, str]:
        """Generate the models module; enums come first so field codecs can reference them."""
        enums = [schema for schema in schemas.values() if schema.is_string_enum]
        models = [schema for schema in schemas.values() if schema.is_model]
        models_context = {
            **context,
            "enums": enums,
            "models": models,
            "uses_datetime": TypeAnalyzer.schemas_use_datetime(models),
        }
        return {
            package_dir / "models.py": self.template_engine.render_template("models/models.py.j2", models_context),
        }

    def _generate_parameter_enums(
        self,
        parameter_enums: dict[str, dict[str, Any]],
        context: dict[str, Any],
        package_dir: Path,
    ) -> dict[Path, str]:
        """Generate parameter enum files."""
        files = {}

        if parameter_enums:
            enum_context = {**context, "parameter_enums": parameter_enums}
            content = self.template_engine.render_template("apis/parameter_enums.py.j2", enum_context)
            files[package_dir / "apis" / "parameter_enums.py"] = content

        return files

    def _generate_api_files(
        self,
        operation_groups: dict[str, list[Operation]],
        context: dict[str, Any],
        package_dir: Path,
    ) -> dict[Path, str]:
        """Generate one module per tag plus the shared security module."""
        files = {}
        apis_dir = package_dir / "apis"
        spec: ParsedSpec = context["spec"]

        for tag, operations in operation_groups.items():
            tag_context = {
                **context,
                "tag": tag,
                "operations": operations,
                "used_types": TypeAnalyzer.get_all_used_types(operations),
                "used_enums": ParameterEnumAnalyzer.get_operation_enums(operations),
                "used_auth": SecurityAnalyzer.get_used_auth(operations, spec),
                "uses_datetime": TypeAnalyzer.operations_use_datetime(operations),
            }
            content = self.template_engine.render_template("apis/api.py.j2", tag_context)
            files[apis_dir / f"{OperationAnalyzer.module_name(tag)}.py"] = content

        security_context = {**context, "security_schemes": list(spec.security_schemes.values())}
        files[apis_dir / "security.py"] = self.template_engine.render_template("apis/security.py.j2", security_context)
        files[apis_dir / "__init__.py"] = self.template_engine.render_template("apis/__init__.py.j2", context)

        return files

    def _generate_project_files(self, context: dict[str, Any], output_dir: Path) -> dict[Path, str]:
        """Generate project configuration files."""
        return {
            output_dir / "pyproject.toml": self.template_engine.render_template("base/pyproject.toml.j2", context),
            output_dir / "README.md": self.template_engine.render_template("base/README.md.j2", context),
        }
