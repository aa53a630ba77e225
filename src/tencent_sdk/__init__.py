"""
Tencent Cloud API SDK
Signed client binding for Tencent Machine Translation (tmt)
"""

from .version import __version__
from .exceptions import (
    TencentSDKError,
    InvalidInputError,
    MissingFieldError,
    SigningError,
    EncodingError,
    ConfigError,
    TransportError,
    HttpFailureError,
)
from .config import (
    ClientConfig,
    DebugConfig,
    load_client_config_from_json,
    load_client_config_from_file,
)
from .http_client import (
    HttpTransport,
    AsyncHttpTransport,
    TransportRequest,
    TransportResponse,
    RequestsTransport,
    HttpxTransport,
    create_transport,
)
from .client import (
    TencentClient,
    Delegate,
    DefaultDelegate,
    LoggingDelegate,
    MethodInfo,
    create_client,
)
from .api import (
    ApiCall,
    TranslateMethods,
    JSON_MIME,
)
from .signing import (
    Credential,
    TC3Signer,
    create_signer,
    sign_request,
    SignableRequest,
    SignedRequest,
    SigningConfig,
    HttpMethod,
    create_signing_config,
)

# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'TencentSDKError',
    'InvalidInputError',
    'MissingFieldError',
    'SigningError',
    'EncodingError',
    'ConfigError',
    'TransportError',
    'HttpFailureError',
    # Configuration
    'ClientConfig',
    'DebugConfig',
    'load_client_config_from_json',
    'load_client_config_from_file',
    # Transports
    'HttpTransport',
    'AsyncHttpTransport',
    'TransportRequest',
    'TransportResponse',
    'RequestsTransport',
    'HttpxTransport',
    'create_transport',
    # Client
    'TencentClient',
    'Delegate',
    'DefaultDelegate',
    'LoggingDelegate',
    'MethodInfo',
    'create_client',
    # Calls
    'ApiCall',
    'TranslateMethods',
    'JSON_MIME',
    # Request Signing
    'Credential',
    'TC3Signer',
    'create_signer',
    'sign_request',
    'SignableRequest',
    'SignedRequest',
    'SigningConfig',
    'HttpMethod',
    'create_signing_config',
]
