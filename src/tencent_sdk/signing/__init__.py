"""
Tencent Cloud API SDK - Request Signing Module

TC3-HMAC-SHA256 implementation. This module derives the Authorization
header the Tencent Cloud API 3.0 gateway requires on every call.
"""

from .types import (
    Credential,
    SignableRequest,
    SignatureContext,
    SignedRequest,
    SigningError,
    SigningErrorCodes,
    HttpMethod,
    SignatureAlgorithm,
)

from .tc3_signer import (
    TC3Signer,
    create_signer,
    sign_request,
    derive_signing_key,
)

from .signing_config import (
    SigningConfig,
    SigningConfigBuilder,
    DEFAULT_SIGNED_HEADERS,
    REQUIRED_SIGNED_HEADERS,
    create_signing_config,
    validate_signing_config,
)

from .canonical_request import (
    CanonicalRequestBuilder,
    build_canonical_request,
    build_credential_scope,
    build_string_to_sign,
    build_authorization,
)

from .utils import (
    generate_timestamp,
    validate_timestamp,
    format_utc_date,
    encode_body,
    sha256_hex,
    hmac_sha256,
    canonical_query_string,
    normalize_header_name,
    to_base64,
    to_hex,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'TC3Signer',
    'create_signer',
    'sign_request',
    'derive_signing_key',
    # Types
    'Credential',
    'SignableRequest',
    'SignatureContext',
    'SignedRequest',
    'SigningError',
    'SigningErrorCodes',
    'HttpMethod',
    'SignatureAlgorithm',
    # Configuration
    'SigningConfig',
    'SigningConfigBuilder',
    'DEFAULT_SIGNED_HEADERS',
    'REQUIRED_SIGNED_HEADERS',
    'create_signing_config',
    'validate_signing_config',
    # Canonicalization
    'CanonicalRequestBuilder',
    'build_canonical_request',
    'build_credential_scope',
    'build_string_to_sign',
    'build_authorization',
    # Utilities
    'generate_timestamp',
    'validate_timestamp',
    'format_utc_date',
    'encode_body',
    'sha256_hex',
    'hmac_sha256',
    'canonical_query_string',
    'normalize_header_name',
    'to_base64',
    'to_hex',
]
