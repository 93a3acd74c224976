"""Client configuration shared by every operation of a generated client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Final

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: Final = 15.0


@dataclass(frozen=True)
class Configuration:
    """Base URL, default headers and credential material.

    Attributes:
        base_url: Server URL that operation paths are appended to.
        default_headers: Headers sent with every request.
        user_agent: Value of the ``User-Agent`` header, if any.
        timeout: Seconds before a request times out; None waits forever.
        api_keys: API keys by security scheme name.
        api_key_prefixes: Optional prefixes (e.g. ``"Token"``) by security scheme name.
        username: HTTP Basic username.
        password: HTTP Basic password.
        access_token: Bearer / OAuth2 access token.
        debug: Log request and response details at DEBUG level.
    """

    base_url: str = "http://localhost"
    default_headers: dict[str, str] = field(default_factory=dict)
    user_agent: str | None = None
    timeout: float | None = DEFAULT_TIMEOUT
    api_keys: dict[str, str] = field(default_factory=dict)
    api_key_prefixes: dict[str, str] = field(default_factory=dict)
    username: str | None = None
    password: str | None = None
    access_token: str | None = None
    debug: bool = False

    def api_key_for(self, scheme_name: str) -> str | None:
        """Return the API key for a security scheme, with its prefix if configured."""
        key = self.api_keys.get(scheme_name)
        if key is None:
            return None
        prefix = self.api_key_prefixes.get(scheme_name)
        return f"{prefix} {key}" if prefix else key

    def with_token(self, token: str) -> Configuration:
        """Copy this configuration with a different access token."""
        return replace(self, access_token=token)

    @classmethod
    def from_env(cls, prefix: str, *, load_dotenv_file: bool = True, **overrides: object) -> Configuration:
        """Build a configuration from ``<PREFIX>_BASE_URL`` and ``<PREFIX>_TOKEN``.

        Explicit keyword arguments take precedence over the environment, which
        takes precedence over a ``.env`` file in the working directory.

        Args:
            prefix: Environment variable prefix, e.g. ``"PETSTORE"``.
            load_dotenv_file: Also read a ``.env`` file (never overriding the environment).
            **overrides: Configuration fields to set explicitly.
        """
        if load_dotenv_file:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        values: dict[str, object] = {}
        base_url = os.environ.get(f"{prefix}_BASE_URL")
        if base_url:
            values["base_url"] = base_url
        token = os.environ.get(f"{prefix}_TOKEN")
        if token:
            values["access_token"] = token
            logger.debug("Using access token from %s_TOKEN", prefix)
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
