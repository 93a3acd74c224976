"""
Runtime support imported by generated clients.

Models, request assembly, response typing, authentication carriers,
configuration and the default httpx executor.
"""

from py_oas_generator.runtime import codecs
from py_oas_generator.runtime.auth import ApiKeyAuth, ApiKeyLocation, Auth, BearerAuth, HttpBasicAuth
from py_oas_generator.runtime.configuration import DEFAULT_TIMEOUT, Configuration
from py_oas_generator.runtime.errors import (
    ApiError,
    BadRequestError,
    ClientError,
    ConflictError,
    DecodeError,
    ForbiddenError,
    MissingFieldError,
    MissingParameterError,
    NotFoundError,
    NullFieldError,
    OpenAPIClientError,
    RateLimitError,
    RequestAssemblyError,
    ServerError,
    UnauthorizedError,
    UnknownFieldError,
    ValidationError,
)
from py_oas_generator.runtime.executor import HttpExecutor, HttpxExecutor
from py_oas_generator.runtime.model import Field, Model
from py_oas_generator.runtime.nullable import UNSET, Nullable, NullableState, Unset, is_unset
from py_oas_generator.runtime.request import Carrier, ParameterSpec, RequestDescriptor, stringify, wire_value
from py_oas_generator.runtime.response import (
    ErrorResponse,
    NoContent,
    ResponseTable,
    ResponseVariant,
    Success,
    TypedResponse,
    UnknownValue,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "UNSET",
    "ApiError",
    "ApiKeyAuth",
    "ApiKeyLocation",
    "Auth",
    "BadRequestError",
    "BearerAuth",
    "Carrier",
    "ClientError",
    "Configuration",
    "ConflictError",
    "DecodeError",
    "ErrorResponse",
    "Field",
    "ForbiddenError",
    "HttpBasicAuth",
    "HttpExecutor",
    "HttpxExecutor",
    "MissingFieldError",
    "MissingParameterError",
    "Model",
    "NoContent",
    "NotFoundError",
    "NullFieldError",
    "Nullable",
    "NullableState",
    "OpenAPIClientError",
    "ParameterSpec",
    "RateLimitError",
    "RequestAssemblyError",
    "RequestDescriptor",
    "ResponseTable",
    "ResponseVariant",
    "ServerError",
    "Success",
    "TypedResponse",
    "UnauthorizedError",
    "UnknownFieldError",
    "UnknownValue",
    "Unset",
    "ValidationError",
    "codecs",
    "is_unset",
    "stringify",
    "wire_value",
]
