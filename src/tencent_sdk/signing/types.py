"""
Type definitions for request signing functionality

This module provides type definitions and data classes for the Tencent Cloud
TC3-HMAC-SHA256 request signature scheme.
"""

from typing import Dict, Optional, Union, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import SigningError


class HttpMethod(str, Enum):
    """HTTP methods accepted by the API gateway"""
    GET = "GET"
    POST = "POST"


class SignatureAlgorithm(str, Enum):
    """Signature algorithm identifiers"""
    TC3_HMAC_SHA256 = "TC3-HMAC-SHA256"


# Terminator of the credential scope and of the signing key chain
TC3_REQUEST = "tc3_request"


@dataclass(frozen=True)
class Credential:
    """
    Secret id/key pair issued by the vendor console

    The key never leaves the process; only the id is written into the
    Authorization header.
    """
    secret_id: str
    secret_key: str = field(repr=False)

    def is_empty(self) -> bool:
        return not self.secret_id or not self.secret_key


@dataclass
class SignableRequest:
    """
    Request to be signed

    Attributes:
        method: HTTP method (GET or POST)
        host: Gateway host, e.g. tmt.tencentcloudapi.com
        headers: Request headers as key-value pairs
        path: Canonical URI, "/" for every Tencent Cloud API 3.0 endpoint
        query: Query parameters as a mapping or an already encoded string
        body: Optional request body (string or bytes)
    """
    method: HttpMethod
    host: str
    headers: Dict[str, str]
    path: str = "/"
    query: Union[Mapping[str, str], str, None] = None
    body: Optional[Union[str, bytes]] = None

    def __post_init__(self):
        """Validate request after initialization"""
        if not isinstance(self.headers, dict):
            raise ValueError("Headers must be a dictionary")

        # Normalize headers to lowercase for consistent processing
        self.headers = {k.lower().strip(): v for k, v in self.headers.items()}

        if 'host' not in self.headers and self.host:
            self.headers['host'] = self.host


@dataclass
class SignatureContext:
    """
    Values bound into a single signature

    Attributes:
        service: Service name, e.g. "tmt"
        timestamp: Unix timestamp in seconds
        region: Region the call targets; sent as X-TC-Region
        action: API action name; sent as X-TC-Action
        version: API version; sent as X-TC-Version
    """
    service: str
    timestamp: int
    region: Optional[str] = None
    action: Optional[str] = None
    version: Optional[str] = None


@dataclass
class SignedRequest:
    """
    Result of signing one request

    Attributes:
        timestamp: Unix timestamp the signature is bound to
        canonical_request: Canonical request that was hashed
        string_to_sign: String the derived key signed
        signature: Lowercase hex signature
        authorization: Complete Authorization header value
        headers: All headers that should be added to the request
    """
    timestamp: int
    canonical_request: str
    string_to_sign: str
    signature: str
    authorization: str
    headers: Dict[str, str]

    def __post_init__(self):
        """Validate signature result"""
        if not self.signature:
            raise ValueError("Signature cannot be empty")

        if not self.authorization:
            raise ValueError("Authorization cannot be empty")


# Common signing error codes
class SigningErrorCodes:
    """Standard error codes for signing operations"""

    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"

    # Request errors
    INVALID_METHOD = "INVALID_METHOD"
    MISSING_REQUIRED_HEADER = "MISSING_REQUIRED_HEADER"

    # Validation errors
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    INVALID_SERVICE = "INVALID_SERVICE"


# Type aliases for convenience
TimestampGenerator = Callable[[], int]
RequestBody = Union[str, bytes, None]
