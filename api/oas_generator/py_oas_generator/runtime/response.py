"""
Typed response envelopes.

Each operation carries a :class:`ResponseTable` listing the status codes its
API description declares and the shape of each payload. Resolving a raw
``(status_code, payload)`` pair yields one of:

* :class:`Success` / :class:`ErrorResponse` for a declared variant with a schema,
* :class:`NoContent` for a declared variant without a schema,
* :class:`UnknownValue` when nothing declared matches, holding the raw payload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final

from py_oas_generator.runtime.codecs import Codec
from py_oas_generator.runtime.errors import DecodeError, exception_for_status

logger = logging.getLogger(__name__)

DEFAULT_STATUS: Final = "default"
_ERROR_STATUS_MIN: Final = 400


def is_error_status(status: str) -> bool:
    """Check whether a declared status key describes an error response."""
    return status == DEFAULT_STATUS or status[:1] in {"4", "5"}


@dataclass(frozen=True)
class TypedResponse:
    status_code: int

    @property
    def is_error(self) -> bool:
        return self.status_code >= _ERROR_STATUS_MIN

    def unwrap(self) -> Any:  # noqa: ANN401
        """Return the success payload or raise the matching ApiError."""
        raise NotImplementedError


@dataclass(frozen=True)
class Success(TypedResponse):
    data: Any

    def unwrap(self) -> Any:  # noqa: ANN401
        return self.data


@dataclass(frozen=True)
class ErrorResponse(TypedResponse):
    data: Any

    def unwrap(self) -> Any:  # noqa: ANN401
        exc_class = exception_for_status(self.status_code)
        msg = f"HTTP {self.status_code}: {self.data!r}"
        raise exc_class(msg, status_code=self.status_code, body=self.data)


@dataclass(frozen=True)
class NoContent(TypedResponse):
    """A declared response without a body schema."""

    def unwrap(self) -> None:
        if self.is_error:
            exc_class = exception_for_status(self.status_code)
            msg = f"HTTP {self.status_code}"
            raise exc_class(msg, status_code=self.status_code)


@dataclass(frozen=True)
class UnknownValue(TypedResponse):
    """A response that matches no declared variant."""

    raw: Any

    def unwrap(self) -> Any:  # noqa: ANN401
        if self.is_error:
            exc_class = exception_for_status(self.status_code)
            msg = f"HTTP {self.status_code}: {self.raw!r}"
            raise exc_class(msg, status_code=self.status_code, body=self.raw)
        return self.raw


@dataclass(frozen=True)
class ResponseVariant:
    """One declared response: an exact code, a range such as ``4XX``, or ``default``."""

    status: str
    codec: Codec | None = None

    @property
    def is_error(self) -> bool:
        return is_error_status(self.status)


class ResponseTable:
    """Per-operation mapping from status code to payload shape."""

    def __init__(self, variants: list[ResponseVariant] | tuple[ResponseVariant, ...]) -> None:
        self.variants = tuple(variants)
        self._exact = {v.status: v for v in self.variants if v.status.isdigit()}
        self._ranges = {v.status[0]: v for v in self.variants if v.status.upper().endswith("XX")}
        self._default = next((v for v in self.variants if v.status == DEFAULT_STATUS), None)

    def match(self, status_code: int) -> ResponseVariant | None:
        """Find the declared variant for a status code, if any."""
        code = str(status_code)
        if code in self._exact:
            return self._exact[code]
        if code[0] in self._ranges:
            return self._ranges[code[0]]
        if status_code >= _ERROR_STATUS_MIN:
            return self._default
        return None

    def resolve(self, status_code: int, payload: Any, *, strict: bool = True) -> TypedResponse:  # noqa: ANN401
        """Turn a raw status code and decoded payload into a typed response.

        Raises:
            DecodeError: A success payload does not match its declared schema.
        """
        variant = self.match(status_code)
        if variant is None:
            logger.debug("Status %s matches no declared response, keeping raw payload", status_code)
            return UnknownValue(status_code, payload)

        if variant.codec is None:
            return NoContent(status_code)

        is_error = status_code >= _ERROR_STATUS_MIN
        try:
            data = variant.codec.decode(payload, strict=strict)
        except DecodeError:
            if not is_error:
                raise
            logger.debug("Error payload for status %s does not match its schema", status_code)
            return UnknownValue(status_code, payload)

        if is_error:
            return ErrorResponse(status_code, data)
        return Success(status_code, data)
