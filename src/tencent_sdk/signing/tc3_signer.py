"""
TC3-HMAC-SHA256 request signer

This module provides the signer for Tencent Cloud API 3.0 requests. The
signature is an HMAC-SHA256 over a string to sign, keyed with a per-day key
derived from the secret key, the UTC date and the service name.
"""

import logging
from typing import Optional

from .types import (
    Credential,
    SignableRequest,
    SignatureContext,
    SignedRequest,
    SigningError,
    SigningErrorCodes,
    TC3_REQUEST,
)
from .utils import (
    format_utc_date,
    generate_timestamp,
    hmac_sha256,
    redact,
    to_hex,
    validate_timestamp,
    PerformanceTimer,
)
from .canonical_request import (
    CanonicalRequestBuilder,
    build_authorization,
    build_credential_scope,
    build_string_to_sign,
)
from .signing_config import SigningConfig, validate_signing_config

logger = logging.getLogger(__name__)

# Signing is pure CPU work on small inputs
SIGNING_TIME_TARGET_MS = 10


def derive_signing_key(secret_key: str, date: str, service: str) -> bytes:
    """
    Derive the per-day signing key.

    Each HMAC output keys the next step:
    "TC3" + secret_key -> date -> service -> "tc3_request".

    Args:
        secret_key: Secret key of the credential
        date: UTC date as YYYY-MM-DD
        service: Service name

    Returns:
        bytes: 32 byte signing key
    """
    secret_date = hmac_sha256("TC3" + secret_key, date)
    secret_service = hmac_sha256(secret_date, service)
    return hmac_sha256(secret_service, TC3_REQUEST)


class TC3Signer:
    """
    TC3-HMAC-SHA256 request signer

    The signer only reads its credential and configuration, so a single
    instance can be shared between threads.
    """

    def __init__(self, credential: Credential, config: SigningConfig):
        """
        Initialize the signer.

        Args:
            credential: Secret id/key pair
            config: Signing configuration

        Raises:
            SigningError: If the credential or configuration is invalid
        """
        if not isinstance(credential, Credential) or credential.is_empty():
            raise SigningError(
                "Credential secret id and secret key must be non-empty",
                SigningErrorCodes.INVALID_CREDENTIAL
            )
        validate_signing_config(config)
        self.credential = credential
        self.config = config

    def resolve_timestamp(self, timestamp: Optional[int] = None) -> int:
        """
        Return ``timestamp``, or a new one from the configured generator.

        Raises:
            SigningError: If the timestamp cannot be represented
        """
        if timestamp is None:
            generator = self.config.timestamp_generator or generate_timestamp
            timestamp = generator()

        if not validate_timestamp(timestamp):
            raise SigningError(
                f"Invalid timestamp: {timestamp}",
                SigningErrorCodes.INVALID_TIMESTAMP,
                {"timestamp": timestamp}
            )
        return timestamp

    def sign_request(
        self,
        request: SignableRequest,
        timestamp: Optional[int] = None,
        region: Optional[str] = None,
        action: Optional[str] = None,
        version: Optional[str] = None,
    ) -> SignedRequest:
        """
        Sign an HTTP request.

        Args:
            request: Request to sign
            timestamp: Unix timestamp; generated when omitted
            region: Region to send as X-TC-Region
            action: Action to send as X-TC-Action
            version: API version to send as X-TC-Version

        Returns:
            SignedRequest: Signature, Authorization header and companion headers

        Raises:
            SigningError: If the request cannot be signed
            EncodingError: If the body cannot be digested
        """
        timestamp = self.resolve_timestamp(timestamp)

        context = SignatureContext(
            service=self.config.service,
            timestamp=timestamp,
            region=region,
            action=action,
            version=version,
        )
        return self.sign(request, context)

    def sign(self, request: SignableRequest, context: SignatureContext) -> SignedRequest:
        """
        Sign a request within an explicit signature context.

        Args:
            request: Request to sign
            context: Service, timestamp and companion header values

        Returns:
            SignedRequest: Signing result
        """
        timer = PerformanceTimer()

        builder = CanonicalRequestBuilder(request, self.config.signed_headers)
        canonical_request = builder.build()
        _, signed_header_names = builder.build_headers()

        date = format_utc_date(context.timestamp)
        credential_scope = build_credential_scope(date, context.service)
        string_to_sign = build_string_to_sign(
            context.timestamp,
            credential_scope,
            canonical_request,
            self.config.algorithm
        )

        signing_key = derive_signing_key(self.credential.secret_key, date, context.service)
        signature = to_hex(hmac_sha256(signing_key, string_to_sign))

        authorization = build_authorization(
            self.credential.secret_id,
            credential_scope,
            signed_header_names,
            signature,
            self.config.algorithm
        )

        headers = {
            'Authorization': authorization,
            'X-TC-Timestamp': str(context.timestamp),
        }
        if context.action:
            headers['X-TC-Action'] = context.action
        if context.version:
            headers['X-TC-Version'] = context.version
        if context.region:
            headers['X-TC-Region'] = context.region

        if self.config.log_canonical_strings:
            logger.debug(f"Canonical request for {redact(self.credential.secret_id)}:\n{canonical_request}")
            logger.debug(f"String to sign:\n{string_to_sign}")

        elapsed_ms = timer.elapsed_ms()
        if elapsed_ms > SIGNING_TIME_TARGET_MS:
            logger.warning(f"Signing operation took {elapsed_ms:.2f}ms (target: <{SIGNING_TIME_TARGET_MS}ms)")

        return SignedRequest(
            timestamp=context.timestamp,
            canonical_request=canonical_request,
            string_to_sign=string_to_sign,
            signature=signature,
            authorization=authorization,
            headers=headers
        )


def create_signer(credential: Credential, config: SigningConfig) -> TC3Signer:
    """
    Create a new TC3 signer.

    Args:
        credential: Secret id/key pair
        config: Signing configuration

    Returns:
        TC3Signer: Configured signer instance
    """
    return TC3Signer(credential, config)


def sign_request(
    request: SignableRequest,
    credential: Credential,
    config: SigningConfig,
    timestamp: Optional[int] = None,
    region: Optional[str] = None,
    action: Optional[str] = None,
    version: Optional[str] = None,
) -> SignedRequest:
    """
    Sign a request with the given credential and configuration.

    Returns:
        SignedRequest: Signing result
    """
    signer = create_signer(credential, config)
    return signer.sign_request(request, timestamp, region, action, version)
