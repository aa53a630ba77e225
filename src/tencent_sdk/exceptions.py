"""
Exception classes for the Tencent Cloud API SDK
"""

from typing import Optional, Dict, Any, Mapping


class TencentSDKError(Exception):
    """Base exception for all Tencent SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class InvalidInputError(TencentSDKError):
    """Exception raised for malformed or missing call parameters"""

    def __init__(self, message: str, error_code: str = "INVALID_INPUT", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class MissingFieldError(InvalidInputError):
    """Exception raised when a call builder is finalized without a required field"""

    def __init__(self, field: str, action: Optional[str] = None):
        message = f"The parameter '{field}' is missing by the CallBuilder"
        if action:
            message += f" for action {action}"
        super().__init__(message, "MISSING_FIELD", {"field": field, "action": action})
        self.field = field
        self.action = action


class SigningError(InvalidInputError):
    """
    Exception raised when a request cannot be signed

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Optional additional error details
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)
        self.code = code

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.code}, details: {self.details})"
        return f"{self.message} (code: {self.code})"

    def __repr__(self) -> str:
        return f"SigningError(message='{self.message}', code='{self.code}', details={self.details})"


class EncodingError(TencentSDKError):
    """Exception raised when a request body cannot be encoded or digested"""

    def __init__(self, message: str, error_code: str = "ENCODING_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class ConfigError(TencentSDKError):
    """Exception raised for configuration loading and validation errors"""

    def __init__(self, message: str, error_code: str = "CONFIG_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class TransportError(TencentSDKError):
    """
    Exception raised when the HTTP exchange itself fails.

    A zero ``http_status`` means no response was received (DNS, TLS,
    connection reset, timeout). The underlying library exception is chained
    as ``__cause__``.
    """

    def __init__(self, message: str, error_code: str = "TRANSPORT_ERROR",
                 http_status: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status


class HttpFailureError(TransportError):
    """Exception raised when the gateway answers with a non-success status code"""

    def __init__(self, http_status: int, headers: Optional[Mapping[str, str]] = None,
                 body: bytes = b"", action: Optional[str] = None):
        super().__init__(
            f"Http status indicates failure: {http_status}",
            "HTTP_FAILURE",
            http_status,
            {"action": action} if action else None
        )
        self.headers = dict(headers or {})
        self.body = body
