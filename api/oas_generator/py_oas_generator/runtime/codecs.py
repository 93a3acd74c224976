"""
Wire codecs for generated models.

Each codec converts one schema shape between its JSON representation and the
Python value stored on a model. Generated code builds codecs from the helpers
at the bottom of this module, e.g. ``array(model(lambda: Pet))``.
"""

from __future__ import annotations

import base64
import binascii
import datetime
import enum
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Final

from py_oas_generator.runtime.errors import DecodeError

if TYPE_CHECKING:
    from py_oas_generator.runtime.model import Model


def _type_name(raw: Any) -> str:  # noqa: ANN401
    return "null" if raw is None else type(raw).__name__


def _item_path(path: str, key: str | int) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


class Codec:
    """Base codec: passes values through unchanged."""

    name = "any"

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> Any:  # noqa: ANN401, ARG002
        return raw

    def encode(self, value: Any) -> Any:  # noqa: ANN401
        return encode_value(value)

    def __repr__(self) -> str:
        return f"<codec {self.name}>"


class PrimitiveCodec(Codec):
    """JSON scalar of one or more Python types."""

    def __init__(self, name: str, *types: type) -> None:
        self.name = name
        self.types = types

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> Any:  # noqa: ANN401, ARG002
        # bool is an int subclass; only accept it where it is declared
        if isinstance(raw, bool) and bool not in self.types:
            msg = f"expected {self.name}, got bool"
            raise DecodeError(msg, path)
        if not isinstance(raw, self.types):
            msg = f"expected {self.name}, got {_type_name(raw)}"
            raise DecodeError(msg, path)
        if float in self.types and isinstance(raw, int):
            return float(raw)
        return raw

    def encode(self, value: Any) -> Any:  # noqa: ANN401
        return value


class BytesCodec(Codec):
    """Binary data carried as a base64 string."""

    name = "bytes"

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> bytes:  # noqa: ANN401, ARG002
        if not isinstance(raw, str):
            msg = f"expected base64 string, got {_type_name(raw)}"
            raise DecodeError(msg, path)
        try:
            return base64.b64decode(raw, validate=True)
        except binascii.Error as e:
            msg = f"invalid base64: {e}"
            raise DecodeError(msg, path) from e

    def encode(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


class DateTimeCodec(Codec):
    """ISO 8601 timestamp."""

    name = "date-time"

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> datetime.datetime:  # noqa: ANN401, ARG002
        if not isinstance(raw, str):
            msg = f"expected date-time string, got {_type_name(raw)}"
            raise DecodeError(msg, path)
        text = raw[:-1] + "+00:00" if raw.endswith(("Z", "z")) else raw
        try:
            return datetime.datetime.fromisoformat(text)
        except ValueError as e:
            msg = f"invalid date-time {raw!r}"
            raise DecodeError(msg, path) from e

    def encode(self, value: datetime.datetime) -> str:
        return value.isoformat()


class DateCodec(Codec):
    """ISO 8601 calendar date."""

    name = "date"

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> datetime.date:  # noqa: ANN401, ARG002
        if not isinstance(raw, str):
            msg = f"expected date string, got {_type_name(raw)}"
            raise DecodeError(msg, path)
        try:
            return datetime.date.fromisoformat(raw)
        except ValueError as e:
            msg = f"invalid date {raw!r}"
            raise DecodeError(msg, path) from e

    def encode(self, value: datetime.date) -> str:
        return value.isoformat()


class EnumCodec(Codec):
    """Member of a generated ``enum.Enum``."""

    def __init__(self, enum_type: type[enum.Enum]) -> None:
        self.enum_type = enum_type
        self.name = enum_type.__name__

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> enum.Enum:  # noqa: ANN401, ARG002
        try:
            return self.enum_type(raw)
        except ValueError as e:
            msg = f"{raw!r} is not a valid {self.name}"
            raise DecodeError(msg, path) from e

    def encode(self, value: enum.Enum | str) -> Any:  # noqa: ANN401
        return value.value if isinstance(value, enum.Enum) else value


class ArrayCodec(Codec):
    """JSON array with homogeneous items."""

    def __init__(self, item: Codec) -> None:
        self.item = item

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"array[{self.item.name}]"

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> list[Any]:  # noqa: ANN401
        if not isinstance(raw, list):
            msg = f"expected array, got {_type_name(raw)}"
            raise DecodeError(msg, path)
        return [self.item.decode(item, _item_path(path, i), strict=strict) for i, item in enumerate(raw)]

    def encode(self, value: list[Any]) -> list[Any]:
        return [self.item.encode(item) for item in value]


class MapCodec(Codec):
    """JSON object used as a string-keyed dictionary."""

    def __init__(self, value: Codec) -> None:
        self.value = value

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"map[{self.value.name}]"

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> dict[str, Any]:  # noqa: ANN401
        if not isinstance(raw, Mapping):
            msg = f"expected object, got {_type_name(raw)}"
            raise DecodeError(msg, path)
        return {key: self.value.decode(item, _item_path(path, key), strict=strict) for key, item in raw.items()}

    def encode(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return {key: self.value.encode(item) for key, item in value.items()}


class ModelCodec(Codec):
    """Nested generated model.

    The model class is resolved lazily so that schemas may refer to models
    defined later in the module, or to themselves.
    """

    def __init__(self, resolver: Callable[[], type[Model]]) -> None:
        self._resolver = resolver

    @property
    def model_type(self) -> type[Model]:
        return self._resolver()

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.model_type.__name__

    def decode(self, raw: Any, path: str = "", *, strict: bool = True) -> Model:  # noqa: ANN401
        return self.model_type.decode(raw, path, strict=strict)

    def encode(self, value: Model) -> dict[str, Any]:
        return value.to_dict()


def encode_value(value: Any) -> Any:  # noqa: ANN401
    """Encode an arbitrary Python value to its JSON representation."""
    # Local import: model.py imports this module
    from py_oas_generator.runtime.model import Model

    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime.datetime | datetime.date):
        return value.isoformat()
    if isinstance(value, bytes | bytearray):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, list | tuple):
        return [encode_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: encode_value(item) for key, item in value.items()}
    return value


ANY: Final = Codec()
STRING: Final = PrimitiveCodec("string", str)
INTEGER: Final = PrimitiveCodec("integer", int)
NUMBER: Final = PrimitiveCodec("number", float, int)
BOOLEAN: Final = PrimitiveCodec("boolean", bool)
BYTES: Final = BytesCodec()
DATE: Final = DateCodec()
DATE_TIME: Final = DateTimeCodec()


def array(item: Codec) -> ArrayCodec:
    return ArrayCodec(item)


def mapping(value: Codec) -> MapCodec:
    return MapCodec(value)


def enum_of(enum_type: type[enum.Enum]) -> EnumCodec:
    return EnumCodec(enum_type)


def model(resolver: Callable[[], type[Model]]) -> ModelCodec:
    return ModelCodec(resolver)
