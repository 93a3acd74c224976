"""
Base class for generated models.

Every schema object becomes a :class:`Model` subclass whose ``__fields__``
table lists its properties. Each property is one of

* required, plain: always present, never null;
* required, nullable: always present on the wire, value or ``null``;
* optional, plain: omitted from the wire unless set;
* optional, nullable: omitted, ``null`` or a value.

Nullable properties are held in :class:`~py_oas_generator.runtime.nullable.Nullable`
wrappers so the three states survive a full encode/decode cycle.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from py_oas_generator.runtime.codecs import ANY, Codec
from py_oas_generator.runtime.errors import (
    DecodeError,
    MissingFieldError,
    NullFieldError,
    UnknownFieldError,
)
from py_oas_generator.runtime.nullable import UNSET, Nullable, coerce_nullable


@dataclass(frozen=True)
class Field:
    """Describes one model property."""

    name: str
    wire_name: str
    codec: Codec = ANY
    required: bool = False
    nullable: bool = False

    @property
    def is_optional(self) -> bool:
        return not self.required


class Model:
    """Base class for generated models."""

    __fields__: ClassVar[tuple[Field, ...]] = ()
    _fields_by_name: ClassVar[dict[str, Field]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init_subclass__(**kwargs)
        cls._fields_by_name = {field.name: field for field in cls.__fields__}

    def __init__(self, **values: Any) -> None:  # noqa: ANN401
        object.__setattr__(self, "_values", {})
        unknown = sorted(set(values) - set(self._fields_by_name))
        if unknown:
            msg = f"{type(self).__name__}() got unexpected arguments: {', '.join(unknown)}"
            raise TypeError(msg)
        for field in self.__fields__:
            value = values.get(field.name, UNSET)
            if field.required and value is UNSET:
                msg = f"{type(self).__name__}() missing required argument {field.name!r}"
                raise TypeError(msg)
            self._assign(field, value)

    def _assign(self, field: Field, value: Any) -> None:  # noqa: ANN401
        if field.nullable:
            self._values[field.name] = coerce_nullable(value)
        elif field.required:
            if value is UNSET or value is None:
                msg = f"{type(self).__name__}.{field.name} is required and not nullable"
                raise TypeError(msg)
            self._values[field.name] = value
        else:
            self._values[field.name] = UNSET if value is None else value

    def _field(self, name: str) -> Field:
        try:
            return self._fields_by_name[name]
        except KeyError:
            msg = f"{type(self).__name__} has no field {name!r}"
            raise AttributeError(msg) from None

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        fields = type(self)._fields_by_name
        values = self.__dict__.get("_values")
        if values is None or name not in fields:
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg)
        value = values[name]
        if isinstance(value, Nullable):
            return value.get()
        return None if value is UNSET else value

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        if name in self._fields_by_name:
            self._assign(self._fields_by_name[name], value)
        else:
            object.__setattr__(self, name, value)

    def has(self, name: str) -> bool:
        """Whether a property has been set (explicit null counts as set)."""
        field = self._field(name)
        value = self._values[name]
        if field.nullable:
            return value.is_set()
        return value is not UNSET

    def get_ok(self, name: str) -> tuple[Any, bool]:
        """Return ``(value, is_set)`` for a property."""
        return getattr(self, name), self.has(name)

    def set_null(self, name: str) -> None:
        """Set a nullable property to an explicit null."""
        field = self._field(name)
        if not field.nullable:
            msg = f"{type(self).__name__}.{name} is not nullable"
            raise TypeError(msg)
        self._values[name].set_nil()

    def unset(self, name: str) -> None:
        """Return an optional or nullable property to the unset state."""
        field = self._field(name)
        if field.nullable:
            self._values[name].unset()
        elif field.required:
            msg = f"{type(self).__name__}.{name} is required"
            raise TypeError(msg)
        else:
            self._values[name] = UNSET

    def to_dict(self) -> dict[str, Any]:
        """Encode the model to a JSON-compatible dictionary."""
        payload: dict[str, Any] = {}
        for field in self.__fields__:
            value = self._values[field.name]
            if field.nullable:
                if field.required:
                    # required nullable keys are always written, unset or not
                    inner = value.get()
                    payload[field.wire_name] = None if inner is None else field.codec.encode(inner)
                else:
                    value.emit(payload, field.wire_name, field.codec.encode)
            elif value is not UNSET:
                payload[field.wire_name] = field.codec.encode(value)
        return payload

    @classmethod
    def decode(cls, raw: Any, path: str = "", *, strict: bool = True) -> Model:  # noqa: ANN401
        """Decode a raw JSON value into this model.

        Args:
            raw: The decoded JSON value.
            path: Location of ``raw`` inside the enclosing payload, for errors.
            strict: Reject properties the schema does not declare.

        Raises:
            MissingFieldError: A required key is absent.
            UnknownFieldError: ``strict`` and an undeclared key is present.
            NullFieldError: A required, non-nullable key is null.
            DecodeError: A value does not match its declared type.
        """
        if not isinstance(raw, Mapping):
            msg = f"expected object for {cls.__name__}, got {type(raw).__name__}"
            raise DecodeError(msg, path)

        for field in cls.__fields__:
            if field.required and field.wire_name not in raw:
                raise MissingFieldError(cls.__name__, field.wire_name, path)

        if strict:
            known = {field.wire_name for field in cls.__fields__}
            unknown = [key for key in raw if key not in known]
            if unknown:
                raise UnknownFieldError(cls.__name__, unknown, path)

        instance = cls.__new__(cls)
        object.__setattr__(instance, "_values", {})
        for field in cls.__fields__:
            field_path = f"{path}.{field.wire_name}" if path else field.wire_name
            if field.nullable:
                instance._values[field.name] = Nullable.from_payload(
                    raw,
                    field.wire_name,
                    lambda value, f=field, p=field_path: f.codec.decode(value, p, strict=strict),
                )
                continue
            value = raw.get(field.wire_name)
            if value is None:
                if field.required:
                    raise NullFieldError(cls.__name__, field.wire_name, path)
                instance._values[field.name] = UNSET
                continue
            instance._values[field.name] = field.codec.decode(value, field_path, strict=strict)
        return instance

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], *, strict: bool = True) -> Model:
        return cls.decode(payload, strict=strict)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str | bytes, *, strict: bool = True) -> Model:
        return cls.decode(json.loads(text), strict=strict)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values == other._values  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        parts = []
        for field in self.__fields__:
            value = self._values[field.name]
            if isinstance(value, Nullable):
                if value.is_set():
                    parts.append(f"{field.name}={value.get()!r}")
            elif value is not UNSET:
                parts.append(f"{field.name}={value!r}")
        return f"{type(self).__name__}({', '.join(parts)})"
