"""
HTTP execution of assembled requests.

Generated operations only build :class:`~py_oas_generator.runtime.request.RequestDescriptor`
objects; an executor turns them into network calls. :class:`HttpxExecutor` is
the default, backed by a pooled ``httpx.Client``. Transport failures raised by
httpx propagate to the caller unchanged.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from types import TracebackType
from typing import Any, Protocol

import httpx

from py_oas_generator.runtime.configuration import Configuration
from py_oas_generator.runtime.errors import DecodeError
from py_oas_generator.runtime.request import RequestDescriptor, merge_headers
from py_oas_generator.runtime.response import TypedResponse, UnknownValue

logger = logging.getLogger(__name__)

_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


class HttpExecutor(Protocol):
    """Anything that can send a request descriptor and type its response."""

    def execute(self, request: RequestDescriptor, configuration: Configuration) -> TypedResponse: ...


def decode_payload(response: httpx.Response) -> Any:  # noqa: ANN401
    """Decode a response body: JSON when declared as such, text otherwise, None when empty.

    A malformed JSON body is kept as text for error statuses and raises
    :class:`DecodeError` for any other status.
    """
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" not in content_type:
        return response.text
    try:
        return response.json()
    except json.JSONDecodeError as e:
        if response.is_error:
            return response.text
        msg = f"invalid JSON in {response.status_code} response: {e}"
        raise DecodeError(msg) from e


def _redact(headers: dict[str, str]) -> dict[str, str]:
    return {key: "***" if key.lower() in _SENSITIVE_HEADERS else value for key, value in headers.items()}


class HttpxExecutor:
    """Executor backed by ``httpx.Client``.

    Args:
        client: Client to send requests with. When omitted the executor creates
            one and closes it in :meth:`close`.

    Example:
        ```python
        with HttpxExecutor() as executor:
            response = executor.execute(request, Configuration(base_url="https://api.example.com"))
        ```
    """

    def __init__(self, client: httpx.Client | None = None) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client()

    def __enter__(self) -> HttpxExecutor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def build_request(self, request: RequestDescriptor, configuration: Configuration) -> httpx.Request:
        """Translate a request descriptor into an ``httpx.Request``."""
        # auth is applied to a copy so the descriptor can be sent again
        prepared = replace(request, headers=dict(request.headers), query=list(request.query))
        if prepared.auth is not None:
            prepared.auth.apply(prepared, configuration)

        headers = merge_headers(
            {"Accept": "application/json"},
            configuration.default_headers,
            {"User-Agent": configuration.user_agent} if configuration.user_agent else None,
            prepared.headers,
        )

        content: bytes | None = None
        data: dict[str, str] | None = None
        files: dict[str, Any] | None = None
        if prepared.files:
            data = prepared.form or None
            files = prepared.files
        elif prepared.form:
            data = prepared.form
        elif prepared.has_body:
            content = json.dumps(prepared.body).encode("utf-8")
            headers.setdefault("Content-Type", "application/json")

        return self._client.build_request(
            prepared.method,
            prepared.url(configuration.base_url),
            params=prepared.query,
            headers=headers,
            content=content,
            data=data,
            files=files,
            timeout=httpx.Timeout(configuration.timeout),
        )

    def execute(self, request: RequestDescriptor, configuration: Configuration) -> TypedResponse:
        """Send a request and resolve its response through the request's response table."""
        http_request = self.build_request(request, configuration)
        if configuration.debug:
            logger.debug("Request headers: %s", _redact(dict(http_request.headers)))

        response = self._client.send(http_request)
        logger.debug("%s %s -> %s", http_request.method, http_request.url, response.status_code)

        payload = decode_payload(response)
        if configuration.debug:
            logger.debug("Response payload: %r", payload)

        if request.responses is None:
            return UnknownValue(response.status_code, payload)
        return request.responses.resolve(response.status_code, payload)
