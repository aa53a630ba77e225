"""
Configuration management for request signing

This module provides the signing configuration for TC3-HMAC-SHA256, a fluent
configuration builder, and validation.
"""

from typing import List, Optional
from dataclasses import dataclass, field

from .types import (
    SignatureAlgorithm,
    SigningError,
    SigningErrorCodes,
    TimestampGenerator,
)
from .utils import (
    generate_timestamp,
    normalize_header_name,
    validate_timestamp,
)


# Headers every TC3 signature must cover
REQUIRED_SIGNED_HEADERS = ['content-type', 'host']

# Headers signed by the official SDKs
DEFAULT_SIGNED_HEADERS = list(REQUIRED_SIGNED_HEADERS)


@dataclass
class SigningConfig:
    """
    Configuration for request signing

    Attributes:
        service: Service name bound into the credential scope, e.g. "tmt"
        signed_headers: Lowercase names of headers covered by the signature
        algorithm: Signature algorithm to use
        timestamp_generator: Optional custom timestamp generator function
        log_canonical_strings: Log canonical request and string to sign at DEBUG
    """
    service: str
    signed_headers: List[str] = field(default_factory=lambda: list(DEFAULT_SIGNED_HEADERS))
    algorithm: SignatureAlgorithm = SignatureAlgorithm.TC3_HMAC_SHA256
    timestamp_generator: Optional[TimestampGenerator] = None
    log_canonical_strings: bool = False

    def __post_init__(self):
        """Normalize and sort signed header names"""
        self.signed_headers = sorted({normalize_header_name(h) for h in self.signed_headers})


class SigningConfigBuilder:
    """
    Builder for creating signing configurations with fluent API
    """

    def __init__(self):
        self._service: Optional[str] = None
        self._signed_headers: List[str] = list(DEFAULT_SIGNED_HEADERS)
        self._timestamp_generator: Optional[TimestampGenerator] = None
        self._log_canonical_strings = False

    def service(self, service: str) -> 'SigningConfigBuilder':
        """
        Set the service name.

        Args:
            service: Service name bound into the credential scope

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._service = service
        return self

    def signed_headers(self, headers: List[str]) -> 'SigningConfigBuilder':
        """
        Replace the set of signed headers.

        content-type and host are always kept.

        Args:
            headers: List of header names to sign

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._signed_headers = list(REQUIRED_SIGNED_HEADERS) + [h.lower() for h in headers]
        return self

    def add_header(self, header: str) -> 'SigningConfigBuilder':
        """
        Add a header to the signed set.

        Args:
            header: Header name to add

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        header_lower = normalize_header_name(header)
        if header_lower not in self._signed_headers:
            self._signed_headers.append(header_lower)

        return self

    def timestamp_generator(self, generator: TimestampGenerator) -> 'SigningConfigBuilder':
        """
        Set custom timestamp generator.

        Args:
            generator: Function that returns Unix timestamps

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._timestamp_generator = generator
        return self

    def log_canonical_strings(self, enabled: bool = True) -> 'SigningConfigBuilder':
        self._log_canonical_strings = enabled
        return self

    def build(self) -> SigningConfig:
        """
        Build the signing configuration.

        Returns:
            SigningConfig: Complete signing configuration

        Raises:
            SigningError: If configuration is invalid
        """
        if not self._service:
            raise SigningError(
                "Service name is required",
                SigningErrorCodes.INVALID_CONFIG
            )

        config = SigningConfig(
            service=self._service,
            signed_headers=self._signed_headers,
            timestamp_generator=self._timestamp_generator or generate_timestamp,
            log_canonical_strings=self._log_canonical_strings
        )
        validate_signing_config(config)
        return config


def create_signing_config() -> SigningConfigBuilder:
    """
    Create a new signing configuration builder.

    Returns:
        SigningConfigBuilder: New configuration builder
    """
    return SigningConfigBuilder()


def validate_signing_config(config: SigningConfig) -> None:
    """
    Validate signing configuration.

    Args:
        config: Signing configuration to validate

    Raises:
        SigningError: If configuration is invalid
    """
    if not isinstance(config, SigningConfig):
        raise SigningError(
            "Configuration must be SigningConfig instance",
            SigningErrorCodes.INVALID_CONFIG
        )

    if config.algorithm != SignatureAlgorithm.TC3_HMAC_SHA256:
        raise SigningError(
            f"Unsupported algorithm: {config.algorithm}",
            SigningErrorCodes.INVALID_CONFIG
        )

    # Service names are lowercase identifiers such as "tmt" or "cvm"
    if not config.service or not isinstance(config.service, str) or '/' in config.service:
        raise SigningError(
            f"Invalid service name: {config.service!r}",
            SigningErrorCodes.INVALID_SERVICE,
            {"service": config.service}
        )

    missing = [h for h in REQUIRED_SIGNED_HEADERS if h not in config.signed_headers]
    if missing:
        raise SigningError(
            f"Signed headers must include: {', '.join(missing)}",
            SigningErrorCodes.INVALID_CONFIG,
            {"signed_headers": config.signed_headers}
        )

    if config.timestamp_generator:
        try:
            test_timestamp = config.timestamp_generator()
        except Exception as e:
            raise SigningError(
                f"Timestamp generator failed: {e}",
                SigningErrorCodes.INVALID_CONFIG,
                {"original_error": str(e)}
            ) from e

        if not validate_timestamp(test_timestamp):
            raise SigningError(
                "Timestamp generator must return valid Unix timestamp",
                SigningErrorCodes.INVALID_CONFIG
            )
