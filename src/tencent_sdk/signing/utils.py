"""
Utility functions for request signing

This module provides the hashing primitives, timestamp handling, body
encoding and query canonicalization used by the TC3-HMAC-SHA256 signer.
"""

import time
import base64
import hashlib
from datetime import datetime, timezone
from typing import Mapping, Optional, Union
from urllib.parse import quote

from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import EncodingError
from .types import (
    SigningError,
    SigningErrorCodes,
    RequestBody,
)


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def validate_timestamp(timestamp: int) -> bool:
    """
    Validate timestamp (must be a positive integer with a UTC calendar date).

    Args:
        timestamp: Unix timestamp to validate

    Returns:
        bool: True if timestamp is valid
    """
    if not isinstance(timestamp, int) or isinstance(timestamp, bool):
        return False

    if timestamp <= 0:
        return False

    try:
        datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return False

    return True


def format_utc_date(timestamp: int) -> str:
    """
    Format the UTC calendar date of a timestamp as YYYY-MM-DD.

    Raises:
        SigningError: If the timestamp cannot be represented
    """
    if not validate_timestamp(timestamp):
        raise SigningError(
            f"Invalid timestamp: {timestamp}",
            SigningErrorCodes.INVALID_TIMESTAMP,
            {"timestamp": timestamp}
        )
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime('%Y-%m-%d')


def encode_body(content: RequestBody) -> bytes:
    """
    Convert a request body to the exact bytes that go on the wire.

    Args:
        content: Request body content (string, bytes, or None)

    Returns:
        bytes: UTF-8 encoded body

    Raises:
        EncodingError: If the body has an unsupported type or is not encodable
    """
    if content is None:
        return b""
    if isinstance(content, bytes):
        return content
    if isinstance(content, str):
        try:
            return content.encode('utf-8')
        except UnicodeEncodeError as e:
            raise EncodingError(
                f"Request body is not valid UTF-8: {e}",
                details={"original_error": str(e)}
            ) from e

    raise EncodingError(
        f"Content must be string, bytes, or None, got {type(content)}",
        details={"content_type": str(type(content))}
    )


def sha256_hex(payload: Union[str, bytes]) -> str:
    """
    Lowercase hex SHA-256 digest of a payload.

    Args:
        payload: String (UTF-8 encoded first) or bytes

    Returns:
        str: 64 character hex digest
    """
    if isinstance(payload, str):
        payload = payload.encode('utf-8')
    return hashlib.sha256(payload).hexdigest()


def hmac_sha256(key: Union[str, bytes], message: Union[str, bytes]) -> bytes:
    """
    Raw HMAC-SHA256 of ``message`` keyed with ``key``.

    Args:
        key: HMAC key; strings are UTF-8 encoded
        message: Message to authenticate; strings are UTF-8 encoded

    Returns:
        bytes: 32 byte MAC
    """
    if isinstance(key, str):
        key = key.encode('utf-8')
    if isinstance(message, str):
        message = message.encode('utf-8')

    mac = hmac.HMAC(key, hashes.SHA256())
    mac.update(message)
    return mac.finalize()


def normalize_header_name(name: str) -> str:
    """
    Normalize header name to lowercase for consistent processing.

    Args:
        name: Header name to normalize

    Returns:
        str: Lowercase header name
    """
    return name.lower().strip()


def normalize_header_value(value: Union[str, int]) -> str:
    """Header values are signed trimmed and lowercased, like header names."""
    return str(value).strip().lower()


def canonical_query_string(query: Union[Mapping[str, str], str, None]) -> str:
    """
    Build the canonical query string.

    Mappings are sorted by key and RFC 3986 percent-encoded. A string is
    taken as already canonical (without the leading "?").

    Args:
        query: Query parameters or pre-encoded query string

    Returns:
        str: Canonical query string, empty when there is no query
    """
    if not query:
        return ""

    if isinstance(query, str):
        return query[1:] if query.startswith('?') else query

    pairs = []
    for key in sorted(query):
        value = query[key]
        if isinstance(value, bool):
            value = str(value).lower()
        pairs.append(f"{quote(str(key), safe='-_.~')}={quote(str(value), safe='-_.~')}")
    return '&'.join(pairs)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hex string.

    Args:
        data: Bytes to convert

    Returns:
        str: Lowercase hex string
    """
    return data.hex()


def to_base64(data: bytes, padding: bool = False) -> str:
    """
    Standard-alphabet base64 encoding, unpadded by default.

    Args:
        data: Bytes to encode
        padding: Keep trailing "=" characters

    Returns:
        str: ASCII base64 text
    """
    encoded = base64.b64encode(data).decode('ascii')
    return encoded if padding else encoded.rstrip('=')


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000


def redact(value: Optional[str], keep: int = 4) -> str:
    """Mask all but the first ``keep`` characters of a secret for log output."""
    if not value:
        return ""
    return value[:keep] + "*" * max(len(value) - keep, 0)
