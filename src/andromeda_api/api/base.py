"""
Shared HTTP transport for the Andromeda client.

:class:`BaseAPIClient` owns one pooled :class:`httpx.AsyncClient` and performs
exactly one exchange per call. It applies the client timeout as an
:func:`anyio.fail_after` scope, so an enclosing cancel scope set by the
caller still wins when it expires first, and classifies the provider's
status codes into the :mod:`~andromeda_api.api.errors` hierarchy.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from logging import LoggerAdapter
from typing import Any, MutableMapping, Optional

import anyio
import httpx

from ..core.logging import get_logger
from .errors import ProviderError, RequestFailedError, RequestTimeoutError, ResponseDecodeError, TransportError

DEFAULT_TIMEOUT = 5.0
API_KEY_HEADER = "apiKey"
JSON_CONTENT_TYPE = "application/json"


@dataclass(slots=True, frozen=True)
class RequestDescriptor:
    """
    Transport-agnostic description of a single call.

    Attributes
    ----------
    url:
        Absolute URL including the encoded query string.
    body:
        Raw request body; empty for query-string operations.
    api_key:
        Value of the ``apiKey`` header.
    content_type:
        ``Content-Type`` header, only set for JSON-body operations.
    """

    url: str
    body: bytes
    api_key: str = field(repr=False)
    content_type: Optional[str] = None

    def headers(self) -> MutableMapping[str, str]:
        headers: MutableMapping[str, str] = {API_KEY_HEADER: self.api_key}
        if self.content_type:
            headers["Content-Type"] = self.content_type
        return headers


@dataclass(slots=True)
class BaseAPIClient:
    """
    Base asynchronous HTTP client without retries.

    Parameters
    ----------
    timeout:
        Upper bound in seconds for the whole exchange (connect, send, read).
    transport:
        Optional httpx transport, e.g. :class:`httpx.MockTransport` in tests.
    default_headers:
        Headers attached to every request in addition to ``apiKey``.
    """

    timeout: float = DEFAULT_TIMEOUT
    transport: Optional[httpx.AsyncBaseTransport] = field(default=None, repr=False)
    default_headers: MutableMapping[str, str] = field(default_factory=dict)
    logger: LoggerAdapter = field(init=False, repr=False)
    _http: httpx.AsyncClient = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")
        self.logger = get_logger(
            f"{self.__class__.__module__}.{self.__class__.__name__}",
            extra={"timeout": self.timeout},
        )
        self._http = httpx.AsyncClient(
            timeout=self.timeout,
            headers=dict(self.default_headers),
            transport=self.transport,
        )

    async def __aenter__(self) -> "BaseAPIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release pooled connections."""
        await self._http.aclose()

    async def _execute(self, method: str, request: RequestDescriptor) -> bytes:
        """
        Perform one HTTP exchange and return the body of a 200 response.

        Raises
        ------
        RequestTimeoutError
            The client timeout elapsed first.
        TransportError
            Connection, protocol or body-read failure.
        ProviderError
            HTTP 400 with the provider's ``Message``/``SpResultCode`` body.
        RequestFailedError
            Any other non-200 status; the body is not inspected.
        """

        self.logger.debug("HTTP request", extra={"method": method, "url": request.url})
        started = time.monotonic()
        try:
            with anyio.fail_after(self.timeout):
                response = await self._http.request(
                    method,
                    request.url,
                    content=request.body or None,
                    headers=request.headers(),
                )
        except (TimeoutError, httpx.TimeoutException) as exc:
            self.logger.warning("HTTP request timed out", extra={"method": method, "url": request.url, "error": str(exc) or None})
            raise RequestTimeoutError(f"{method} {request.url} timed out after {self.timeout:g}s") from exc
        except httpx.HTTPError as exc:
            self.logger.warning("HTTP error during request", extra={"method": method, "url": request.url, "error": str(exc)})
            raise TransportError(f"HTTP error while calling {method} {request.url}: {exc}") from exc
        except anyio.get_cancelled_exc_class():
            self.logger.debug("HTTP request cancelled", extra={"method": method, "url": request.url})
            raise

        self.logger.debug(
            "HTTP response",
            extra={
                "status_code": response.status_code,
                "url": request.url,
                "duration": time.monotonic() - started,
            },
        )
        return self._classify(response)

    def _classify(self, response: httpx.Response) -> bytes:
        status = response.status_code
        if status == httpx.codes.OK:
            return response.content
        if status == httpx.codes.BAD_REQUEST:
            raise self._provider_error(response)
        self.logger.warning("Unexpected HTTP status", extra={"status_code": status, "url": str(response.request.url)})
        raise RequestFailedError(status)

    def _provider_error(self, response: httpx.Response) -> ProviderError:
        try:
            payload = json.loads(response.content)
        except ValueError as exc:
            raise ResponseDecodeError(f"Failed to decode error body from {response.request.url}: {exc}") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("Message"), str):
            raise ResponseDecodeError(f"Unexpected error body from {response.request.url}: {payload!r}")
        result_code = payload.get("SpResultCode")
        if isinstance(result_code, bool) or not isinstance(result_code, int):
            result_code = None
        self.logger.warning(
            "Provider rejected request",
            extra={"status_code": response.status_code, "result_code": result_code, "error": payload["Message"]},
        )
        return ProviderError(payload["Message"], result_code=result_code)
