"""
Canonical request construction for TC3-HMAC-SHA256

This module builds the byte-exact strings the signature covers: the
canonical request, the credential scope and the string to sign. Any
deviation in ordering, case or whitespace yields a signature the gateway
rejects with AuthFailure.SignatureFailure, so every step here is fixed.
"""

from typing import Dict, List, Tuple

from .types import (
    SignableRequest,
    SignatureAlgorithm,
    SigningError,
    SigningErrorCodes,
    HttpMethod,
    TC3_REQUEST,
)
from .utils import (
    canonical_query_string,
    encode_body,
    normalize_header_name,
    normalize_header_value,
    sha256_hex,
)


class CanonicalRequestBuilder:
    """
    Canonical request builder for TC3 signatures
    """

    def __init__(self, request: SignableRequest, signed_headers: List[str]):
        """
        Initialize canonical request builder.

        Args:
            request: Request to canonicalize
            signed_headers: Header names covered by the signature
        """
        self.request = request
        self.signed_headers = sorted({normalize_header_name(h) for h in signed_headers})

    def build(self) -> str:
        """
        Build the canonical request.

        Returns:
            str: Newline-joined canonical request

        Raises:
            SigningError: If a signed header is missing or the method is invalid
        """
        canonical_headers, signed_header_names = self.build_headers()
        hashed_payload = sha256_hex(encode_body(self.request.body))

        return '\n'.join([
            self._method(),
            self.request.path or '/',
            canonical_query_string(self.request.query),
            canonical_headers,
            signed_header_names,
            hashed_payload,
        ])

    def build_headers(self) -> Tuple[str, str]:
        """
        Build the canonical headers block and the SignedHeaders value.

        Returns:
            tuple: (canonical headers ending in a newline, "a;b;c")
        """
        values: Dict[str, str] = {}
        for name, value in self.request.headers.items():
            values[normalize_header_name(name)] = normalize_header_value(value)

        missing = [h for h in self.signed_headers if h not in values]
        if missing:
            raise SigningError(
                f"Required headers missing: {', '.join(missing)}",
                SigningErrorCodes.MISSING_REQUIRED_HEADER,
                {
                    "missing_headers": missing,
                    "request_headers": list(self.request.headers.keys()),
                }
            )

        lines = ''.join(f"{name}:{values[name]}\n" for name in self.signed_headers)
        return lines, ';'.join(self.signed_headers)

    def _method(self) -> str:
        method = self.request.method
        if isinstance(method, HttpMethod):
            return method.value
        try:
            return HttpMethod(str(method).upper()).value
        except ValueError:
            raise SigningError(
                f"Unsupported HTTP method: {method}",
                SigningErrorCodes.INVALID_METHOD,
                {"method": str(method)}
            ) from None


def build_canonical_request(request: SignableRequest, signed_headers: List[str]) -> str:
    """
    Build canonical request for signing.

    Args:
        request: Request to canonicalize
        signed_headers: Header names covered by the signature

    Returns:
        str: Canonical request string
    """
    return CanonicalRequestBuilder(request, signed_headers).build()


def build_credential_scope(date: str, service: str) -> str:
    """Credential scope is "<YYYY-MM-DD>/<service>/tc3_request"."""
    return f"{date}/{service}/{TC3_REQUEST}"


def build_string_to_sign(
    timestamp: int,
    credential_scope: str,
    canonical_request: str,
    algorithm: SignatureAlgorithm = SignatureAlgorithm.TC3_HMAC_SHA256
) -> str:
    """
    Build the string to sign.

    Args:
        timestamp: Unix timestamp the request carries in X-TC-Timestamp
        credential_scope: Scope from build_credential_scope
        canonical_request: Canonical request from build_canonical_request
        algorithm: Signature algorithm identifier

    Returns:
        str: Algorithm, timestamp, scope and hashed canonical request
    """
    return '\n'.join([
        algorithm.value,
        str(timestamp),
        credential_scope,
        sha256_hex(canonical_request),
    ])


def build_authorization(
    secret_id: str,
    credential_scope: str,
    signed_header_names: str,
    signature: str,
    algorithm: SignatureAlgorithm = SignatureAlgorithm.TC3_HMAC_SHA256
) -> str:
    """
    Assemble the Authorization header value.

    Returns:
        str: "TC3-HMAC-SHA256 Credential=<id>/<scope>, SignedHeaders=<names>, Signature=<hex>"
    """
    return (
        f"{algorithm.value} "
        f"Credential={secret_id}/{credential_scope}, "
        f"SignedHeaders={signed_header_names}, "
        f"Signature={signature}"
    )
