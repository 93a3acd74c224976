"""
Authentication carriers.

Operations declare which security schemes they accept; the request descriptor
keeps exactly one of them and the executor applies it at dispatch time using
credential material from the :class:`~py_oas_generator.runtime.configuration.Configuration`.
"""

from __future__ import annotations

import base64
import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_oas_generator.runtime.configuration import Configuration
    from py_oas_generator.runtime.request import RequestDescriptor

logger = logging.getLogger(__name__)


class ApiKeyLocation(str, enum.Enum):
    HEADER = "header"
    QUERY = "query"


@dataclass(frozen=True)
class Auth:
    """A security scheme, identified by its name in ``components.securitySchemes``."""

    name: str

    def apply(self, request: RequestDescriptor, configuration: Configuration) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class ApiKeyAuth(Auth):
    """API key sent in a header or query parameter."""

    parameter_name: str = "Authorization"
    location: ApiKeyLocation = ApiKeyLocation.HEADER

    def apply(self, request: RequestDescriptor, configuration: Configuration) -> None:
        key = configuration.api_key_for(self.name)
        if key is None:
            logger.debug("No API key configured for %s, sending request without it", self.name)
            return
        if self.location is ApiKeyLocation.QUERY:
            request.query.append((self.parameter_name, key))
        else:
            request.headers[self.parameter_name] = key


@dataclass(frozen=True)
class HttpBasicAuth(Auth):
    """HTTP Basic authentication."""

    def apply(self, request: RequestDescriptor, configuration: Configuration) -> None:
        if configuration.username is None:
            logger.debug("No username configured for %s, sending request without it", self.name)
            return
        credentials = f"{configuration.username}:{configuration.password or ''}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        request.headers["Authorization"] = f"Basic {encoded}"


@dataclass(frozen=True)
class BearerAuth(Auth):
    """Bearer token (HTTP bearer or OAuth2 access token)."""

    def apply(self, request: RequestDescriptor, configuration: Configuration) -> None:
        if configuration.access_token is None:
            logger.debug("No access token configured for %s, sending request without it", self.name)
            return
        request.headers["Authorization"] = f"Bearer {configuration.access_token}"
