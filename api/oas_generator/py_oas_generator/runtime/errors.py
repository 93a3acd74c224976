"""Exceptions raised by generated clients."""

from __future__ import annotations

from typing import Any


class OpenAPIClientError(Exception):
    """Base exception for everything raised by the client runtime."""


class DecodeError(OpenAPIClientError):
    """A payload does not match the declared schema."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class MissingFieldError(DecodeError):
    """A required property is missing from a payload."""

    def __init__(self, model: str, field: str, path: str = "") -> None:
        super().__init__(f"no value given for required property {field!r} of {model}", path)
        self.model = model
        self.field = field


class UnknownFieldError(DecodeError):
    """A payload carries properties the schema does not declare."""

    def __init__(self, model: str, fields: list[str], path: str = "") -> None:
        names = ", ".join(repr(name) for name in fields)
        super().__init__(f"unknown properties for {model}: {names}", path)
        self.model = model
        self.fields = fields


class NullFieldError(DecodeError):
    """A required, non-nullable property is null."""

    def __init__(self, model: str, field: str, path: str = "") -> None:
        super().__init__(f"property {field!r} of {model} must not be null", path)
        self.model = model
        self.field = field


class RequestAssemblyError(OpenAPIClientError):
    """A request could not be built from the supplied parameters."""


class MissingParameterError(RequestAssemblyError):
    """A required parameter was not supplied."""

    def __init__(self, wire_name: str) -> None:
        super().__init__(f"missing required parameter {wire_name!r}")
        self.wire_name = wire_name


class ApiError(OpenAPIClientError):
    """Base exception for error responses returned by the API."""

    def __init__(self, message: str, status_code: int | None = None, body: Any = None) -> None:  # noqa: ANN401
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ClientError(ApiError):
    """4xx client errors."""


class BadRequestError(ClientError):
    """400 Bad Request."""


class UnauthorizedError(ClientError):
    """401 Unauthorized."""


class ForbiddenError(ClientError):
    """403 Forbidden."""


class NotFoundError(ClientError):
    """404 Not Found."""


class ConflictError(ClientError):
    """409 Conflict."""


class ValidationError(ClientError):
    """422 Unprocessable Entity."""


class RateLimitError(ClientError):
    """429 Too Many Requests."""


class ServerError(ApiError):
    """5xx server errors."""


_STATUS_EXCEPTIONS: dict[int, type[ApiError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def exception_for_status(status_code: int) -> type[ApiError]:
    """Pick the exception class for an HTTP status code."""
    if status_code in _STATUS_EXCEPTIONS:
        return _STATUS_EXCEPTIONS[status_code]
    if 400 <= status_code < 500:  # noqa: PLR2004
        return ClientError
    if 500 <= status_code < 600:  # noqa: PLR2004
        return ServerError
    return ApiError
