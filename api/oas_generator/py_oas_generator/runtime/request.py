"""
Request assembly for generated operations.

Operation functions create a :class:`RequestDescriptor`, feed it every
parameter together with its :class:`ParameterSpec`, attach authentication and
hand it to an executor. The same policy applies to every carrier:

* required, non-nullable: must be supplied, emitted stringified (arrays are
  comma-joined);
* required, nullable: an explicit null is emitted as an empty string under the
  wire name, it is not omitted;
* optional: emitted only when a value was supplied.
"""

from __future__ import annotations

import base64
import datetime
import enum
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from py_oas_generator.runtime.codecs import encode_value
from py_oas_generator.runtime.errors import MissingParameterError, RequestAssemblyError
from py_oas_generator.runtime.nullable import UNSET, Nullable

if TYPE_CHECKING:
    from py_oas_generator.runtime.auth import Auth
    from py_oas_generator.runtime.response import ResponseTable

_PATH_PLACEHOLDER = re.compile(r"\{([^}]+)\}")


class Carrier(str, enum.Enum):
    """Where a parameter travels."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    FORM = "form"
    BODY = "body"


@dataclass(frozen=True)
class ParameterSpec:
    """Static description of one operation parameter."""

    wire_name: str
    carrier: Carrier
    required: bool = False
    nullable: bool = False
    is_array: bool = False
    is_file: bool = False


def stringify(value: Any) -> str:  # noqa: ANN401
    """Render a parameter value the way it travels in a URL, header or form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return stringify(value.value)
    if isinstance(value, datetime.datetime | datetime.date):
        return value.isoformat()
    if isinstance(value, bytes | bytearray):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, list | tuple | set | frozenset):
        return ",".join(stringify(item) for item in value)
    return str(value)


def _unwrap(value: Any) -> Any:  # noqa: ANN401
    if isinstance(value, Nullable):
        if not value.is_set():
            return UNSET
        return value.get()
    return value


def wire_value(spec: ParameterSpec, value: Any) -> str | None:  # noqa: ANN401
    """Apply the assembly policy to one parameter.

    Args:
        spec: The parameter description.
        value: The caller's value. ``UNSET`` means "not supplied"; ``None`` or a
            null :class:`Nullable` means an explicit null.

    Returns:
        The string to emit under ``spec.wire_name``, or None to omit the parameter.

    Raises:
        MissingParameterError: A required, non-nullable parameter has no value.
    """
    value = _unwrap(value)
    if spec.required:
        if value is UNSET or (value is None and not spec.nullable):
            raise MissingParameterError(spec.wire_name)
        if value is None:
            return ""
        return stringify(value)
    if value is UNSET or value is None:
        return None
    return stringify(value)


@dataclass
class RequestDescriptor:
    """Everything needed to send one API request."""

    method: str
    path_template: str
    path_params: dict[str, str] = field(default_factory=dict)
    query: list[tuple[str, str]] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    form: dict[str, str] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)
    body: Any = UNSET
    auth: Auth | None = None
    responses: ResponseTable | None = None

    def add_parameter(self, spec: ParameterSpec, value: Any) -> None:  # noqa: ANN401
        """Add a path, query, header or form parameter."""
        if spec.carrier is Carrier.BODY:
            value = _unwrap(value)
            if value is UNSET or (value is None and not spec.nullable):
                if spec.required:
                    raise MissingParameterError(spec.wire_name)
                return
            self.set_body(value)
            return

        if spec.is_file:
            self._add_file(spec, value)
            return

        rendered = wire_value(spec, value)
        if rendered is None:
            return

        if spec.carrier is Carrier.PATH:
            self.path_params[spec.wire_name] = rendered
        elif spec.carrier is Carrier.QUERY:
            self.query.append((spec.wire_name, rendered))
        elif spec.carrier is Carrier.HEADER:
            self.headers[spec.wire_name] = rendered
        else:
            self.form[spec.wire_name] = rendered

    def _add_file(self, spec: ParameterSpec, value: Any) -> None:  # noqa: ANN401
        value = _unwrap(value)
        if value is UNSET or value is None:
            if spec.required:
                raise MissingParameterError(spec.wire_name)
            return
        self.files[spec.wire_name] = value

    def set_body(self, value: Any) -> None:  # noqa: ANN401
        """Attach the request body; an operation has at most one."""
        if self.body is not UNSET:
            msg = f"{self.method} {self.path_template} already has a body"
            raise RequestAssemblyError(msg)
        self.body = encode_value(_unwrap(value))

    def with_auth(self, auth: Auth) -> RequestDescriptor:
        """Attach the authentication descriptor, replacing any earlier one."""
        self.auth = auth
        return self

    def with_responses(self, responses: ResponseTable) -> RequestDescriptor:
        self.responses = responses
        return self

    @property
    def has_body(self) -> bool:
        return self.body is not UNSET

    def path(self) -> str:
        """Substitute path parameters into the template."""

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in self.path_params:
                raise MissingParameterError(name)
            return quote(self.path_params[name], safe="")

        return _PATH_PLACEHOLDER.sub(replace, self.path_template)

    def url(self, base_url: str) -> str:
        return base_url.rstrip("/") + self.path()


def merge_headers(*sources: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings; later sources win."""
    merged: dict[str, str] = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged
