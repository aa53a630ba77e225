"""
HTTP transports for Tencent Cloud API calls

The client depends on the ``HttpTransport`` / ``AsyncHttpTransport``
protocols only; any object with a matching ``send`` / ``send_async`` can be
injected. Two implementations are provided: ``RequestsTransport`` (blocking,
requests.Session) and ``HttpxTransport`` (httpx, blocking and async).

Transports report network failures as ``TransportError`` and return every
HTTP response, whatever its status, to the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, runtime_checkable

import httpx
import requests

from .config import ClientConfig
from .exceptions import TransportError, InvalidInputError

logger = logging.getLogger(__name__)


@dataclass
class TransportRequest:
    """Fully signed request, ready for the wire."""
    method: str
    url: str
    headers: Dict[str, str]
    body: bytes = b""


@dataclass
class TransportResponse:
    """Raw HTTP response."""
    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class HttpTransport(Protocol):
    """Blocking transport capability."""

    def send(self, request: TransportRequest) -> TransportResponse:
        ...


@runtime_checkable
class AsyncHttpTransport(Protocol):
    """Awaitable transport capability."""

    async def send_async(self, request: TransportRequest) -> TransportResponse:
        ...


class RequestsTransport:
    """
    Blocking transport backed by a requests.Session.

    No retry adapter is mounted; a failed call surfaces immediately.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 60.0,
        verify_ssl: bool = True
    ):
        """
        Initialize the transport.

        Args:
            session: Optional existing requests session to send through
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify TLS certificates
        """
        self.session = session or requests.Session()
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    def send(self, request: TransportRequest) -> TransportResponse:
        """
        Send a request and return the raw response.

        Raises:
            TransportError: On network errors and timeouts
        """
        try:
            logger.debug(f"Making {request.method} request to {request.url}")
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timeout after {self.timeout} seconds", "TIMEOUT") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {e}", "CONNECTION_ERROR") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
        logger.debug("HTTP session closed")


class HttpxTransport:
    """
    Transport backed by httpx, usable from blocking and async code.

    The async client is created on first use.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        verify_ssl: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._async_transport = async_transport
        self._client = httpx.Client(timeout=timeout, verify=verify_ssl, transport=transport)
        self._async_client: Optional[httpx.AsyncClient] = None

    def send(self, request: TransportRequest) -> TransportResponse:
        """
        Send a request and return the raw response.

        Raises:
            TransportError: On network errors and timeouts
        """
        try:
            logger.debug(f"Making {request.method} request to {request.url}")
            response = self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timeout after {self.timeout} seconds", "TIMEOUT") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    async def send_async(self, request: TransportRequest) -> TransportResponse:
        """
        Send a request from async code and return the raw response.

        Raises:
            TransportError: On network errors and timeouts
        """
        if self._async_client is None:
            self._async_client = httpx.AsyncClient(
                timeout=self.timeout,
                verify=self.verify_ssl,
                transport=self._async_transport,
            )

        try:
            logger.debug(f"Making async {request.method} request to {request.url}")
            response = await self._async_client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timeout after {self.timeout} seconds", "TIMEOUT") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self._client.close()

    async def aclose(self) -> None:
        if self._async_client is not None:
            await self._async_client.aclose()
            self._async_client = None


def create_transport(config: ClientConfig, kind: str = "requests"):
    """
    Create a transport from client configuration.

    Args:
        config: Client configuration supplying timeout and TLS verification
        kind: "requests" or "httpx"

    Returns:
        RequestsTransport or HttpxTransport
    """
    if kind == "requests":
        return RequestsTransport(timeout=config.timeout, verify_ssl=config.verify_ssl)
    if kind == "httpx":
        return HttpxTransport(timeout=config.timeout, verify_ssl=config.verify_ssl)

    raise InvalidInputError(
        f"Unknown transport kind: {kind}",
        "INVALID_TRANSPORT",
        {"available": ["requests", "httpx"]}
    )
