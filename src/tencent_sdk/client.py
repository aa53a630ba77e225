"""
Tencent Cloud API client

A ``TencentClient`` owns the credential, the client configuration, the
request signer and the HTTP transport. API families are reached through
method groups, e.g. ``client.translate().text_translate()``.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union, TYPE_CHECKING

from .config import ClientConfig
from .http_client import (
    HttpTransport,
    AsyncHttpTransport,
    TransportRequest,
    create_transport,
)
from .signing import (
    Credential,
    HttpMethod,
    SigningConfig,
    TC3Signer,
    create_signing_config,
)
from .signing.utils import redact

if TYPE_CHECKING:
    from .api.tmt import TranslateMethods

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MethodInfo:
    """Contains information about an API request."""
    id: str
    http_method: HttpMethod


class Delegate:
    """
    Hooks called around every API request.

    The default implementation does nothing. ``finished`` is always called
    once for every ``begin``, whether or not the request succeeded.
    """

    def begin(self, info: MethodInfo) -> None:
        """Called at the beginning of any API request."""

    def pre_request(self, request: TransportRequest) -> None:
        """
        Called with the signed request right before it is sent. A request
        will definitely be made after this call.
        """

    def finished(self, is_success: bool) -> None:
        """
        Called before the API request method returns, in every case.

        Args:
            is_success: True if the response bytes reached the callback and
                the callback returned normally
        """


class DefaultDelegate(Delegate):
    """Delegate used when a call does not set one."""


class LoggingDelegate(Delegate):
    """Delegate that logs call boundaries at DEBUG level."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger
        self._method_id: Optional[str] = None

    def begin(self, info: MethodInfo) -> None:
        self._method_id = info.id
        self.log.debug(f"Begin {info.id} ({info.http_method.value})")

    def pre_request(self, request: TransportRequest) -> None:
        self.log.debug(
            f"Sending {self._method_id}: {request.method} {request.url} "
            f"timestamp={request.headers.get('X-TC-Timestamp')}"
        )

    def finished(self, is_success: bool) -> None:
        self.log.debug(f"Finished {self._method_id}: success={is_success}")


class TencentClient:
    """
    Client for Tencent Cloud API 3.0 services.

    The credential is immutable and only read by the signer, so one client
    may serve calls from several threads as long as its transport does.
    """

    def __init__(
        self,
        credential: Credential,
        transport: Optional[Union[HttpTransport, AsyncHttpTransport]] = None,
        config: Optional[ClientConfig] = None,
        signing_config: Optional[SigningConfig] = None,
    ):
        """
        Initialize the client.

        Args:
            credential: Secret id/key pair
            transport: HTTP transport; a requests-based one is created if omitted
            config: Client configuration; defaults target the tmt endpoint
            signing_config: Signing configuration; derived from ``config`` if omitted

        Raises:
            SigningError: If the credential is empty
        """
        self.config = config or ClientConfig()
        self.credential = credential

        if signing_config is None:
            signing_config = (create_signing_config()
                              .service(self.config.service)
                              .log_canonical_strings(self.config.debug.log_canonical_strings)
                              .build())
        self.signer = TC3Signer(credential, signing_config)
        self.transport = transport or create_transport(self.config)
        self.user_agent = self.config.user_agent

        logger.info(
            f"Initialized Tencent client for {self.config.endpoint} "
            f"(secret id {redact(credential.secret_id)})"
        )

    @classmethod
    def native(cls, credential: Credential, config: Optional[ClientConfig] = None) -> 'TencentClient':
        """Client with a plain requests transport and no proxy."""
        config = config or ClientConfig()
        return cls(credential, create_transport(config, "requests"), config)

    def translate(self) -> 'TranslateMethods':
        """Tencent Machine Translate APIs"""
        from .api.tmt import TranslateMethods
        return TranslateMethods(self)

    def close(self) -> None:
        close = getattr(self.transport, 'close', None)
        if callable(close):
            close()

    def __enter__(self) -> 'TencentClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def create_client(
    secret_id: str,
    secret_key: str,
    region: Optional[str] = None,
    transport: Optional[Union[HttpTransport, AsyncHttpTransport]] = None,
) -> TencentClient:
    """
    Create a client with default configuration.

    Args:
        secret_id: Secret id of the credential
        secret_key: Secret key of the credential
        region: Default region for calls that do not set one
        transport: Optional HTTP transport

    Returns:
        TencentClient: Configured client
    """
    config = ClientConfig(default_region=region)
    return TencentClient(Credential(secret_id, secret_key), transport, config)
