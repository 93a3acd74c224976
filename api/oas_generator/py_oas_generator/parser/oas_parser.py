"""
OpenAPI Specification Parser for Python Client Generation.

This module parses OpenAPI 3.0 and 3.1 documents (JSON or YAML) and extracts
what the templates need to render typed models and operation functions:
Python annotations, codec expressions, nullability, parameter carriers,
security requirements and declared responses.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from ruamel.yaml import YAML

from py_oas_generator.utils.string_case import (
    constcase,
    python_enum_member,
    python_field_name,
    python_parameter_name,
    python_pascal_case,
    python_snake_case,
)

logger = logging.getLogger(__name__)

# (annotation, codec expression) per OpenAPI type and format
_OPENAPI_TYPE_MAPPING: Final = {
    "string": {
        None: ("str", "codecs.STRING"),
        "date": ("datetime.date", "codecs.DATE"),
        "date-time": ("datetime.datetime", "codecs.DATE_TIME"),
        "byte": ("bytes", "codecs.BYTES"),
        "binary": ("bytes", "codecs.BYTES"),
    },
    "integer": {
        None: ("int", "codecs.INTEGER"),
    },
    "number": {
        None: ("float", "codecs.NUMBER"),
    },
    "boolean": {
        None: ("bool", "codecs.BOOLEAN"),
    },
}

_ANY_TYPE: Final = ("Any", "codecs.ANY")

# HTTP methods supported by OpenAPI
_HTTP_METHODS: Final = frozenset({"get", "post", "put", "delete", "patch", "head", "options", "trace"})

_JSON_CONTENT_TYPES: Final = ("application/json", "application/problem+json", "text/json")
_FORM_CONTENT_TYPES: Final = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})

_SUPPORTED_PARAMETER_LOCATIONS: Final = frozenset({"path", "query", "header"})

_YAML_SUFFIXES: Final = frozenset({".yaml", ".yml"})


def _extract_ref_name(ref_string: str) -> str:
    """Extract the reference name from an OpenAPI $ref string.

    Args:
        ref_string: The $ref value (e.g., "#/components/schemas/Model").

    Returns:
        The extracted reference name (e.g., "Model").
    """
    return ref_string.split("/")[-1]


def is_nullable_schema(schema: dict[str, Any]) -> bool:
    """Check whether a schema admits ``null``.

    Covers the OpenAPI 3.0 ``nullable`` keyword, 3.1 type lists containing
    ``"null"`` and ``anyOf``/``oneOf`` unions with a ``{"type": "null"}`` member.
    """
    if schema.get("nullable") is True:
        return True
    schema_type = schema.get("type")
    if isinstance(schema_type, list) and "null" in schema_type:
        return True
    for key in ("anyOf", "oneOf"):
        variants = schema.get(key)
        if isinstance(variants, list) and any(v.get("type") == "null" for v in variants if isinstance(v, dict)):
            return True
    return False


def strip_null(schema: dict[str, Any]) -> dict[str, Any]:
    """Return the schema without its null alternative."""
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        remaining = [t for t in schema_type if t != "null"]
        stripped = {k: v for k, v in schema.items() if k != "type"}
        if len(remaining) == 1:
            stripped["type"] = remaining[0]
        elif remaining:
            stripped["type"] = remaining
        return stripped

    for key in ("anyOf", "oneOf"):
        variants = schema.get(key)
        if not isinstance(variants, list):
            continue
        non_null = [v for v in variants if not (isinstance(v, dict) and v.get("type") == "null")]
        if len(non_null) == 1:
            merged = {k: v for k, v in schema.items() if k not in (key, "nullable")}
            merged.update(non_null[0])
            return merged
        if len(non_null) != len(variants):
            stripped = {k: v for k, v in schema.items() if k != key}
            stripped[key] = non_null
            return stripped

    return {k: v for k, v in schema.items() if k != "nullable"}


@dataclass(frozen=True)
class TypeInfo:
    """Python annotation and wire codec for a schema fragment."""

    annotation: str
    codec: str
    refs: frozenset[str] = frozenset()
    is_array: bool = False


def _wrap_array(item: TypeInfo) -> TypeInfo:
    return TypeInfo(f"list[{item.annotation}]", f"codecs.array({item.codec})", item.refs, is_array=True)


def _wrap_map(value: TypeInfo) -> TypeInfo:
    return TypeInfo(f"dict[str, {value.annotation}]", f"codecs.mapping({value.codec})", value.refs)


def python_type_from_openapi(
    schema: dict[str, Any],
    schemas: dict[str, Any],
    visited: set[str] | None = None,
) -> TypeInfo:
    """Convert an OpenAPI schema into a Python annotation and codec.

    Component schemas that become classes (objects and string enums) are
    referenced by name; other components (arrays, primitive aliases) are
    inlined.

    Args:
        schema: The schema dictionary from the OpenAPI document.
        schemas: All component schemas for reference resolution.
        visited: Set of visited references to prevent cycles.

    Returns:
        The type information, without nullability.
    """
    if visited is None:
        visited = set()

    if is_nullable_schema(schema):
        schema = strip_null(schema)

    if "$ref" in schema:
        ref_name = _extract_ref_name(schema["$ref"])
        target = schemas.get(ref_name, {})
        class_name = python_pascal_case(ref_name)
        kind = schema_kind(target)
        if kind == "enum":
            return TypeInfo(class_name, f"codecs.enum_of({class_name})", frozenset({class_name}))
        if kind == "object" or ref_name in visited:
            return TypeInfo(class_name, f"codecs.model(lambda: {class_name})", frozenset({class_name}))
        visited.add(ref_name)
        return python_type_from_openapi(target, schemas, visited)

    all_of = schema.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1 and not schema.get("properties"):
        return python_type_from_openapi(all_of[0], schemas, visited)

    schema_type = schema.get("type")
    if isinstance(schema_type, list) or any(k in schema for k in ("oneOf", "anyOf", "allOf")):
        return TypeInfo(*_ANY_TYPE)

    if schema_type == "array":
        return _wrap_array(python_type_from_openapi(schema.get("items", {}), schemas, visited))

    if schema_type == "object" or (schema_type is None and ("properties" in schema or "additionalProperties" in schema)):
        additional = schema.get("additionalProperties")
        if isinstance(additional, dict) and additional and not schema.get("properties"):
            return _wrap_map(python_type_from_openapi(additional, schemas, visited))
        return TypeInfo("dict[str, Any]", "codecs.mapping(codecs.ANY)")

    if schema_type is None:
        return TypeInfo(*_ANY_TYPE)

    formats = _OPENAPI_TYPE_MAPPING.get(schema_type, {})
    annotation, codec = formats.get(schema.get("format"), formats.get(None, _ANY_TYPE))
    return TypeInfo(annotation, codec)


def schema_kind(schema: dict[str, Any]) -> str:
    """Classify a component schema as ``object``, ``enum`` or ``alias``."""
    base = strip_null(schema) if is_nullable_schema(schema) else schema
    schema_type = base.get("type")
    if schema_type == "string" and "enum" in base:
        return "enum"
    if "properties" in base or "allOf" in base:
        return "object"
    return "alias"


def enum_members(values: list[str]) -> list[tuple[str, str]]:
    """Unique ``(member name, value)`` pairs for a string enum."""
    members: list[tuple[str, str]] = []
    seen: set[str] = set()
    for value in values:
        member = python_enum_member(value)
        while member in seen:
            member = f"{member}_"
        seen.add(member)
        members.append((member, value))
    return members


def _nullable_annotation(annotation: str) -> str:
    return annotation if annotation.endswith("| None") or annotation == "Any" else f"{annotation} | None"


@dataclass
class Parameter:
    """Represents an operation parameter in any carrier."""

    name: str
    param_type: str
    type_info: TypeInfo
    required: bool
    nullable: bool = False
    description: str | None = None
    enum_values: list[str] = field(default_factory=list)
    is_file: bool = False
    python_name: str = field(init=False)
    # Set by the owning Operation: <Operation><Param> when the parameter has inline enum values
    python_enum_type: str | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.python_name = python_parameter_name(self.name)

    @property
    def is_enum_parameter(self) -> bool:
        return bool(self.enum_values)

    @property
    def is_array(self) -> bool:
        return self.type_info.is_array

    @property
    def carrier(self) -> str:
        """Name of the runtime ``Carrier`` member."""
        return self.param_type.upper()

    @property
    def effective_python_type(self) -> str:
        """Annotation of the parameter value, before optionality."""
        annotation = self.type_info.annotation
        if self.is_enum_parameter and self.python_enum_type:
            annotation = f"list[{self.python_enum_type} | str]" if self.is_array else f"{self.python_enum_type} | str"
        return _nullable_annotation(annotation) if self.nullable else annotation

    @property
    def signature_type(self) -> str:
        """Annotation used in function signatures and parameter holders."""
        if self.required:
            return self.effective_python_type
        return f"{self.effective_python_type} | Unset"


@dataclass
class Response:
    """Represents an OpenAPI response."""

    status_code: str
    description: str
    type_info: TypeInfo | None = None

    @property
    def python_type(self) -> str | None:
        return self.type_info.annotation if self.type_info else None

    @property
    def codec(self) -> str | None:
        return self.type_info.codec if self.type_info else None


@dataclass
class SecurityScheme:
    """A ``components.securitySchemes`` entry."""

    name: str
    scheme_type: str
    parameter_name: str | None = None
    location: str | None = None
    python_name: str = field(init=False)

    def __post_init__(self) -> None:
        self.python_name = f"AUTH_{constcase(self.name)}"

    @property
    def runtime_class(self) -> str | None:
        """Runtime auth carrier class, or None for unsupported schemes."""
        if self.scheme_type == "apiKey" and self.location in {"header", "query"}:
            return "ApiKeyAuth"
        if self.scheme_type == "http" and (self.location or "").lower() == "basic":
            return "HttpBasicAuth"
        if self.scheme_type in {"http", "oauth2", "openIdConnect"}:
            return "BearerAuth"
        return None


@dataclass
class Operation:
    """Represents an OpenAPI operation."""

    operation_id: str
    method: str
    path: str
    summary: str | None
    description: str | None
    parameters: list[Parameter]
    responses: dict[str, Response]
    tags: list[str]
    security: list[str] = field(default_factory=list)
    deprecated: bool = False
    python_function_name: str = field(init=False)
    python_params_class: str = field(init=False)
    python_responses_name: str = field(init=False)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for param in self.parameters:
            if param.python_name in seen:
                param.python_name = f"{param.python_name}_{param.param_type}"
            seen.add(param.python_name)
            if param.enum_values:
                param.python_enum_type = f"{python_pascal_case(self.operation_id)}{python_pascal_case(param.name)}"
        self.python_function_name = python_snake_case(self.operation_id)
        self.python_params_class = f"{python_pascal_case(self.operation_id)}Params"
        self.python_responses_name = f"{constcase(self.operation_id)}_RESPONSES"

    @property
    def required_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters if p.required]

    @property
    def optional_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters if not p.required]

    @property
    def ordered_parameters(self) -> list[Parameter]:
        """Required parameters first, in declaration order, then optional ones."""
        return self.required_parameters + self.optional_parameters


@dataclass
class Property:
    """Represents a schema property."""

    name: str
    type_info: TypeInfo
    required: bool
    nullable: bool = False
    description: str | None = None
    python_name: str = field(init=False)

    def __post_init__(self) -> None:
        self.python_name = python_field_name(self.name)

    @property
    def annotation(self) -> str:
        annotation = self.type_info.annotation
        return _nullable_annotation(annotation) if self.nullable else annotation

    @property
    def signature_type(self) -> str:
        if self.required:
            return self.annotation
        return f"{self.annotation} | Unset"

    @property
    def is_optional(self) -> bool:
        return not self.required


@dataclass
class Schema:
    """Represents an OpenAPI component schema."""

    name: str
    schema_type: str
    description: str | None
    properties: list[Property]
    enum_values: list[str] = field(default_factory=list)
    python_class_name: str = field(init=False)
    is_string_enum: bool = field(init=False)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for prop in self.properties:
            while prop.python_name in seen:
                prop.python_name = f"{prop.python_name}_"
            seen.add(prop.python_name)
        self.python_class_name = python_pascal_case(self.name)
        self.is_string_enum = self.schema_type == "enum"

    @property
    def is_model(self) -> bool:
        return self.schema_type == "object"

    @property
    def enum_members(self) -> list[tuple[str, str]]:
        return enum_members(self.enum_values)

    @property
    def required_properties(self) -> list[Property]:
        return [p for p in self.properties if p.required]

    @property
    def optional_properties(self) -> list[Property]:
        return [p for p in self.properties if not p.required]


@dataclass
class ParsedSpec:
    """Represents a parsed OpenAPI specification."""

    info: dict[str, Any]
    servers: list[dict[str, Any]]
    operations: list[Operation]
    schemas: dict[str, Schema]
    security_schemes: dict[str, SecurityScheme] = field(default_factory=dict)

    @property
    def default_server_url(self) -> str:
        if self.servers and self.servers[0].get("url"):
            return str(self.servers[0]["url"])
        return "http://localhost"


def load_spec_file(file_path: str | Path) -> dict[str, Any]:
    """Read an OpenAPI document from a JSON or YAML file."""
    path = Path(file_path)
    with path.open(encoding="utf-8") as f:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = YAML(typ="safe").load(f)
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        msg = f"{path} does not contain an OpenAPI document"
        raise ValueError(msg)
    return data


class OASParser:
    """Parser for OpenAPI 3.x specifications."""

    def __init__(self) -> None:
        self.spec_data: dict[str, Any] | None = None
        self.schemas: dict[str, Any] = {}

    def parse_file(self, file_path: str | Path) -> ParsedSpec:
        """Parse OpenAPI specification from a JSON or YAML file."""
        self.spec_data = load_spec_file(file_path)
        return self._parse_spec()

    def parse_dict(self, spec_dict: dict[str, Any]) -> ParsedSpec:
        """Parse OpenAPI specification from dictionary."""
        self.spec_data = spec_dict
        return self._parse_spec()

    def _parse_spec(self) -> ParsedSpec:
        """Parse the loaded specification."""
        if not self.spec_data:
            msg = "No specification data loaded"
            raise ValueError(msg)

        # copied: inline response models are added to it while parsing operations
        self.schemas = dict(self.spec_data.get("components", {}).get("schemas", {}))

        info = self.spec_data.get("info", {})
        servers = self.spec_data.get("servers", [])
        security_schemes = self._parse_security_schemes()
        operations = self._parse_operations()
        schemas = self._parse_schemas()

        logger.debug("Parsed %d operations and %d schemas", len(operations), len(schemas))

        return ParsedSpec(
            info=info,
            servers=servers,
            operations=operations,
            schemas=schemas,
            security_schemes=security_schemes,
        )

    def _resolve_reference(self, ref: str) -> dict[str, Any]:
        """Resolve a local JSON reference."""
        if not self.spec_data:
            return {}

        resolved: Any = self.spec_data
        for part in ref.split("/")[1:]:  # Skip '#'
            if not isinstance(resolved, dict):
                return {}
            resolved = resolved.get(part.replace("~1", "/").replace("~0", "~"))
        return resolved if isinstance(resolved, dict) else {}

    def _deref(self, data: dict[str, Any]) -> dict[str, Any]:
        """Follow a top-level ``$ref`` of a parameter, request body or response."""
        seen: set[str] = set()
        while "$ref" in data and data["$ref"] not in seen:
            seen.add(data["$ref"])
            data = self._resolve_reference(data["$ref"])
        return data

    def _type_info(self, schema: dict[str, Any]) -> TypeInfo:
        return python_type_from_openapi(schema, self.schemas, set())

    def _is_nullable(self, schema: dict[str, Any]) -> bool:
        if is_nullable_schema(schema):
            return True
        if "$ref" in schema:
            target = self.schemas.get(_extract_ref_name(schema["$ref"]), {})
            return is_nullable_schema(target)
        return False

    # Security

    def _parse_security_schemes(self) -> dict[str, SecurityScheme]:
        raw_schemes = (self.spec_data or {}).get("components", {}).get("securitySchemes", {})
        schemes: dict[str, SecurityScheme] = {}
        for name, data in raw_schemes.items():
            data = self._deref(data)
            scheme_type = data.get("type", "")
            if scheme_type == "apiKey":
                scheme = SecurityScheme(name, scheme_type, parameter_name=data.get("name"), location=data.get("in"))
            else:
                scheme = SecurityScheme(name, scheme_type, location=data.get("scheme"))
            if scheme.runtime_class is None:
                logger.warning("Security scheme %s (%s) is not supported, ignoring it", name, scheme_type)
                continue
            schemes[name] = scheme
        return schemes

    def _operation_security(self, operation_data: dict[str, Any]) -> list[str]:
        """Scheme names of an operation's security requirements, in declaration order."""
        requirements = operation_data.get("security")
        if requirements is None:
            requirements = (self.spec_data or {}).get("security", [])
        names: list[str] = []
        for requirement in requirements:
            for name in requirement:
                if name not in names:
                    names.append(name)
        return names

    # Operations

    def _parse_operations(self) -> list[Operation]:
        """Parse all operations from paths."""
        operations: list[Operation] = []
        if not self.spec_data:
            return operations
        paths = self.spec_data.get("paths", {})

        for path, path_item in paths.items():
            path_item = self._deref(path_item)
            shared_parameters = path_item.get("parameters", [])
            for method, operation_data in path_item.items():
                if method.lower() in _HTTP_METHODS:
                    operations.append(
                        self._parse_operation(path, method.upper(), operation_data, shared_parameters),
                    )

        return operations

    def _parse_operation(
        self,
        path: str,
        method: str,
        operation_data: dict[str, Any],
        shared_parameters: list[dict[str, Any]],
    ) -> Operation:
        """Parse a single operation."""
        operation_id = operation_data.get("operationId") or python_snake_case(f"{method.lower()} {path}")

        parameters = self._merge_parameters(shared_parameters, operation_data.get("parameters", []))
        parameters.extend(self._parse_request_body(operation_data))

        responses = {}
        for status_code, response_data in operation_data.get("responses", {}).items():
            responses[str(status_code)] = self._parse_response(str(status_code), response_data, operation_id)

        return Operation(
            operation_id=operation_id,
            method=method,
            path=path,
            summary=operation_data.get("summary"),
            description=operation_data.get("description"),
            parameters=parameters,
            responses=responses,
            tags=operation_data.get("tags", []),
            security=self._operation_security(operation_data),
            deprecated=bool(operation_data.get("deprecated", False)),
        )

    def _merge_parameters(
        self,
        shared: list[dict[str, Any]],
        own: list[dict[str, Any]],
    ) -> list[Parameter]:
        """Combine path-item and operation parameters; the operation wins on (name, in)."""
        merged: dict[tuple[str, str], Parameter] = {}
        for param_data in [*shared, *own]:
            param = self._parse_parameter(param_data)
            if param:
                merged[(param.name, param.param_type)] = param
        return list(merged.values())

    def _parse_parameter(self, param_data: dict[str, Any]) -> Parameter | None:
        """Parse a path, query or header parameter."""
        param_data = self._deref(param_data)

        name = param_data.get("name")
        if not name:
            return None

        location = param_data.get("in", "query")
        if location not in _SUPPORTED_PARAMETER_LOCATIONS:
            logger.warning("Parameter %s in %s is not supported, skipping it", name, location)
            return None

        schema = param_data.get("schema", {})
        base_schema = strip_null(schema) if is_nullable_schema(schema) else schema
        enum_source = base_schema.get("items", {}) if base_schema.get("type") == "array" else base_schema
        enum_values = list(enum_source.get("enum", [])) if enum_source.get("type") == "string" else []

        return Parameter(
            name=name,
            param_type=location,
            type_info=self._type_info(schema),
            # path parameters are always required
            required=bool(param_data.get("required", False)) or location == "path",
            nullable=self._is_nullable(schema),
            description=param_data.get("description"),
            enum_values=[str(v) for v in enum_values if v is not None],
        )

    def _parse_request_body(self, operation_data: dict[str, Any]) -> list[Parameter]:
        """Turn a request body into a body parameter, or into form parameters."""
        request_body = operation_data.get("requestBody")
        if not request_body:
            return []
        request_body = self._deref(request_body)
        content = request_body.get("content", {})
        if not content:
            return []

        required = bool(request_body.get("required", False))
        form_type = next((ct for ct in content if ct in _FORM_CONTENT_TYPES), None)
        if form_type and not any(ct in content for ct in _JSON_CONTENT_TYPES):
            return self._parse_form_parameters(content[form_type].get("schema", {}))

        content_type = next((ct for ct in _JSON_CONTENT_TYPES if ct in content), next(iter(content)))
        schema = content[content_type].get("schema", {})
        name = _extract_ref_name(schema["$ref"]) if "$ref" in schema else "body"

        return [
            Parameter(
                name=name,
                param_type="body",
                type_info=self._type_info(schema),
                required=required,
                nullable=self._is_nullable(schema),
                description=request_body.get("description"),
            )
        ]

    def _parse_form_parameters(self, schema: dict[str, Any]) -> list[Parameter]:
        if "$ref" in schema:
            schema = self.schemas.get(_extract_ref_name(schema["$ref"]), {})
        required_fields = schema.get("required", [])
        parameters = []
        for prop_name, prop_data in schema.get("properties", {}).items():
            parameters.append(
                Parameter(
                    name=prop_name,
                    param_type="form",
                    type_info=self._type_info(prop_data),
                    required=prop_name in required_fields,
                    nullable=self._is_nullable(prop_data),
                    description=prop_data.get("description"),
                    is_file=prop_data.get("format") == "binary",
                )
            )
        return parameters

    # Responses

    def _parse_response(
        self,
        status_code: str,
        response_data: dict[str, Any],
        operation_id: str,
    ) -> Response:
        """Parse a response."""
        response_data = self._deref(response_data)
        content = response_data.get("content", {})

        return Response(
            status_code=status_code,
            description=response_data.get("description", ""),
            type_info=self._determine_response_type(content, status_code, operation_id, response_data),
        )

    def _determine_response_type(
        self,
        content: dict[str, Any],
        status_code: str,
        operation_id: str,
        response_data: dict[str, Any],
    ) -> TypeInfo | None:
        """Determine the Python type for a response, or None when it has no body schema."""
        if not content:
            return None

        content_type = next((ct for ct in _JSON_CONTENT_TYPES if ct in content), next(iter(content)))
        schema = content[content_type].get("schema")
        if not schema:
            return None

        if self._should_create_response_model(schema, status_code):
            response_model_name = f"{python_pascal_case(operation_id)}Response"
            self.schemas[response_model_name] = self._create_response_schema(
                schema,
                response_data.get("description", ""),
            )
            return self._type_info({"$ref": f"#/components/schemas/{response_model_name}"})

        return self._type_info(schema)

    def _should_create_response_model(self, schema: dict[str, Any], status_code: str) -> bool:
        """Inline 2xx object schemas get a named response model."""
        if not status_code.startswith("2") or "$ref" in schema:
            return False
        return schema.get("type", "object") == "object" and "properties" in schema

    def _create_response_schema(self, schema: dict[str, Any], description: str) -> dict[str, Any]:
        """Create a response schema from an inline schema."""
        response_schema = schema.copy()
        if description and "description" not in response_schema:
            response_schema["description"] = description
        return response_schema

    # Schemas

    def _parse_schemas(self) -> dict[str, Schema]:
        """Parse all component schemas that become classes."""
        schemas = {}

        for schema_name, schema_data in self.schemas.items():
            schema = self._parse_schema(schema_name, schema_data)
            if schema:
                schemas[schema_name] = schema

        return schemas

    def _parse_schema(self, name: str, schema_data: dict[str, Any]) -> Schema | None:
        """Parse a single schema; aliases (arrays, primitives) are inlined and yield None."""
        kind = schema_kind(schema_data)
        if kind == "alias":
            return None

        base = strip_null(schema_data) if is_nullable_schema(schema_data) else schema_data

        if kind == "enum":
            return Schema(
                name=name,
                schema_type=kind,
                description=base.get("description"),
                properties=[],
                enum_values=[str(v) for v in base["enum"] if v is not None],
            )

        properties_data, required_fields = self._flatten_all_of(base, set())
        return Schema(
            name=name,
            schema_type=kind,
            description=base.get("description"),
            properties=self._parse_properties(properties_data, required_fields),
        )

    def _flatten_all_of(
        self,
        schema_data: dict[str, Any],
        visited: set[str],
    ) -> tuple[dict[str, Any], list[str]]:
        """Collect the properties and required names of a schema and its ``allOf`` parts."""
        if "$ref" in schema_data:
            ref_name = _extract_ref_name(schema_data["$ref"])
            if ref_name in visited:
                return {}, []
            visited.add(ref_name)
            return self._flatten_all_of(self.schemas.get(ref_name, {}), visited)

        properties: dict[str, Any] = {}
        required: list[str] = []
        for part in schema_data.get("allOf", []):
            part_properties, part_required = self._flatten_all_of(part, visited)
            properties.update(part_properties)
            required.extend(r for r in part_required if r not in required)

        properties.update(schema_data.get("properties", {}))
        required.extend(r for r in schema_data.get("required", []) if r not in required)
        return properties, required

    def _parse_properties(self, properties_data: dict[str, Any], required_fields: list[str]) -> list[Property]:
        """Parse properties from properties data."""
        return [
            Property(
                name=prop_name,
                type_info=self._type_info(prop_data),
                required=prop_name in required_fields,
                nullable=self._is_nullable(prop_data),
                description=prop_data.get("description"),
            )
            for prop_name, prop_data in properties_data.items()
        ]
