"""
Call builder machinery shared by every API family

A call builder accumulates typed parameters through fluent setters.
``build()`` checks that every required parameter is present, serializes
the parameters into the JSON body and returns an ``ApiCall``. The call is
signed each time it is sent, with a fresh timestamp unless one was pinned,
so no signature outlives the request it was computed for.
"""

import inspect
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar, Union, TYPE_CHECKING

from ..client import Delegate, DefaultDelegate, MethodInfo
from ..exceptions import (
    EncodingError,
    HttpFailureError,
    InvalidInputError,
    MissingFieldError,
)
from ..http_client import TransportRequest, TransportResponse
from ..signing import (
    HttpMethod,
    SignableRequest,
    SigningError,
    SigningErrorCodes,
    to_base64,
    validate_timestamp,
)

if TYPE_CHECKING:
    from ..client import TencentClient

logger = logging.getLogger(__name__)

JSON_MIME = "application/json; charset=utf-8"

# The gateway rejects media payloads of 4 MiB and above
MAX_MEDIA_SIZE = 4 << 20

T = TypeVar('T')
B = TypeVar('B', bound='CallBuilder')


def serialize_payload(payload: Dict[str, Any]) -> bytes:
    """
    Serialize a payload as compact JSON, skipping unset fields.

    Non-ASCII text is written as UTF-8 rather than \\u escapes.

    Raises:
        EncodingError: If a value is not JSON serializable
    """
    body = {key: value for key, value in payload.items() if value is not None}
    try:
        return json.dumps(body, ensure_ascii=False, separators=(',', ':')).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise EncodingError(
            f"Failed to encode request payload: {e}",
            details={"fields": list(body)}
        ) from e


def read_media(path: Union[str, Path], kind: str) -> str:
    """
    Read a media file and return it base64 encoded.

    Args:
        path: File to read
        kind: "image" or "audio", used in error messages

    Raises:
        InvalidInputError: If the file is unreadable or 4 MiB or larger
    """
    media_path = Path(path)
    try:
        size = media_path.stat().st_size
        if size >= MAX_MEDIA_SIZE:
            raise InvalidInputError(
                f"{kind} size should be no more than 4M",
                "PAYLOAD_TOO_LARGE",
                {"path": str(media_path), "size": size, "limit": MAX_MEDIA_SIZE}
            )
        data = media_path.read_bytes()
    except OSError as e:
        raise InvalidInputError(
            f"Failed to read {kind} file {media_path}: {e}",
            "FILE_ERROR",
            {"path": str(media_path)}
        ) from e

    return to_base64(data)


def check_uint(name: str, value: Any, maximum: int = 0xFFFFFFFF) -> int:
    """Validate an unsigned integer parameter."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise InvalidInputError(
            f"Parameter '{name}' must be an integer between 0 and {maximum}, got {value!r}",
            "INVALID_PARAMETER",
            {"field": name, "value": value}
        )
    return value


class ApiCall:
    """
    A validated, serialized API call.

    The only operations are ``doit`` and ``doit_async``; both send the
    request and hand the raw response body to a callback.
    """

    def __init__(
        self,
        client: 'TencentClient',
        action: str,
        method_id: str,
        body: bytes,
        region: Optional[str] = None,
        delegate: Optional[Delegate] = None,
        timestamp: Optional[int] = None,
    ):
        self._client = client
        self._action = action
        self._method_id = method_id
        self._body = body
        self._region = region
        self._delegate = delegate
        self._timestamp = timestamp

    @property
    def action(self) -> str:
        return self._action

    @property
    def body(self) -> bytes:
        return self._body

    @property
    def region(self) -> Optional[str]:
        return self._region

    def prepare(self, timestamp: Optional[int] = None) -> TransportRequest:
        """
        Sign the call and assemble the request that goes on the wire.

        Args:
            timestamp: Timestamp to sign with; defaults to the pinned
                timestamp, then to the current time

        Returns:
            TransportRequest: Request carrying every required header
        """
        config = self._client.config
        signer = self._client.signer
        timestamp = signer.resolve_timestamp(timestamp if timestamp is not None else self._timestamp)

        # Every header sent on the wire is visible to the signer
        headers = {
            'Host': config.endpoint,
            'Content-Type': JSON_MIME,
            'User-Agent': self._client.user_agent,
            'X-TC-Language': config.language,
            'X-TC-RequestClient': config.request_client,
            'X-TC-Action': self._action,
            'X-TC-Timestamp': str(timestamp),
            'X-TC-Version': config.api_version,
        }
        if self._region:
            headers['X-TC-Region'] = self._region

        request = SignableRequest(
            method=HttpMethod.POST,
            host=config.endpoint,
            headers=dict(headers),
            body=self._body,
        )

        signed = signer.sign_request(
            request,
            timestamp,
            region=self._region,
            action=self._action,
            version=config.api_version,
        )
        headers.update(signed.headers)

        return TransportRequest(
            method=HttpMethod.POST.value,
            url=config.base_url,
            headers=headers,
            body=self._body,
        )

    def doit(self, callback: Callable[[bytes], T]) -> T:
        """
        Send the call and pass the raw response body to ``callback``.

        Args:
            callback: Receives the response bytes; its return value is returned

        Raises:
            TransportError: If the request could not be sent
            HttpFailureError: If the gateway answered with a non-2xx status
        """
        send = getattr(self._client.transport, 'send', None)
        if not callable(send):
            raise TypeError(f"{type(self._client.transport).__name__} does not support blocking sends; use doit_async")

        delegate = self._begin()
        success = False
        try:
            request = self._prepare_for_send(delegate)
            response = send(request)
            self._check_response(response)
            result = callback(response.content)
            success = True
            return result
        finally:
            delegate.finished(success)

    async def doit_async(self, callback: Callable[[bytes], Any]) -> Any:
        """
        Send the call through an async transport.

        ``callback`` may be a plain function or a coroutine function.
        """
        send_async = getattr(self._client.transport, 'send_async', None)
        if not callable(send_async):
            raise TypeError(f"{type(self._client.transport).__name__} does not support async sends; use doit")

        delegate = self._begin()
        success = False
        try:
            request = self._prepare_for_send(delegate)
            response = await send_async(request)
            self._check_response(response)
            result = callback(response.content)
            if inspect.isawaitable(result):
                result = await result
            success = True
            return result
        finally:
            delegate.finished(success)

    def _begin(self) -> Delegate:
        delegate = self._delegate or DefaultDelegate()
        delegate.begin(MethodInfo(id=self._method_id, http_method=HttpMethod.POST))
        return delegate

    def _prepare_for_send(self, delegate: Delegate) -> TransportRequest:
        request = self.prepare()
        logger.debug(
            f"Calling {self._action} on {self._client.config.endpoint} "
            f"(region={self._region}, timestamp={request.headers['X-TC-Timestamp']})"
        )
        if self._client.config.debug.log_request_headers:
            visible = {k: v for k, v in request.headers.items() if k != 'Authorization'}
            logger.debug(f"Request headers for {self._action}: {visible}")
        delegate.pre_request(request)
        return request

    def _check_response(self, response: TransportResponse) -> None:
        if not response.ok:
            logger.warning(f"{self._action} failed with HTTP {response.status_code}")
            raise HttpFailureError(
                response.status_code,
                response.headers,
                response.content,
                self._action
            )


class CallBuilder:
    """
    Base class for fluent call builders.

    Subclasses set ``ACTION``, ``METHOD_ID`` and ``REQUIRED`` (attribute
    names without the leading underscore, in the order they are checked)
    and implement ``_payload``.
    """

    ACTION = ""
    METHOD_ID = ""
    REQUIRED: Tuple[str, ...] = ()
    REGION_REQUIRED = True

    def __init__(self, client: 'TencentClient'):
        self._client = client
        self._region: Optional[str] = None
        self._delegate: Optional[Delegate] = None
        self._timestamp: Optional[int] = None

    def region(self: B, region: str) -> B:
        """Region to call, e.g. "ap-guangzhou"."""
        self._region = region
        return self

    def delegate(self: B, delegate: Delegate) -> B:
        """Hooks to call around the request."""
        self._delegate = delegate
        return self

    def timestamp(self: B, timestamp: int) -> B:
        """
        Pin the signing timestamp instead of using the current time.

        Raises:
            SigningError: If the timestamp cannot be represented
        """
        if not validate_timestamp(timestamp):
            raise SigningError(
                f"Invalid timestamp: {timestamp}",
                SigningErrorCodes.INVALID_TIMESTAMP,
                {"timestamp": timestamp}
            )
        self._timestamp = timestamp
        return self

    def _payload(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _check_required(self) -> None:
        for name in self.REQUIRED:
            value = getattr(self, f"_{name}")
            if value is None:
                raise MissingFieldError(name, self.ACTION)

    def build(self) -> ApiCall:
        """
        Validate parameters and finalize the call.

        Returns:
            ApiCall: Call ready to be sent

        Raises:
            MissingFieldError: If a required parameter was never set
            InvalidInputError: If a parameter value is invalid
        """
        self._check_required()

        region = self._region or self._client.config.default_region
        if self.REGION_REQUIRED and not region:
            raise MissingFieldError('region', self.ACTION)

        body = serialize_payload(self._payload())
        return ApiCall(
            client=self._client,
            action=self.ACTION,
            method_id=self.METHOD_ID,
            body=body,
            region=region,
            delegate=self._delegate,
            timestamp=self._timestamp,
        )
