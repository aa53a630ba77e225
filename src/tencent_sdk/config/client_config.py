"""
Client configuration for the Tencent Cloud API SDK

Endpoint, API version and HTTP behaviour of a client. Credentials are not
part of the configuration; they are handed to the client directly.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

TMT_ENDPOINT = "tmt.tencentcloudapi.com"
TMT_SERVICE = "tmt"
TMT_API_VERSION = "2018-03-21"
DEFAULT_USER_AGENT = "Mozilla/5.0 Safari/537.36"
DEFAULT_REQUEST_CLIENT = "python-sdk"


@dataclass
class DebugConfig:
    """Debug configuration"""
    log_canonical_strings: bool = False
    log_request_headers: bool = False


@dataclass
class ClientConfig:
    """
    Configuration for a Tencent Cloud API client

    Attributes:
        endpoint: Gateway host, without scheme
        scheme: "https" or "http"
        service: Service name bound into the signature scope
        api_version: Value of X-TC-Version
        default_region: Region used when a call does not set one
        language: Value of X-TC-Language
        user_agent: Value of User-Agent
        request_client: Value of X-TC-RequestClient
        timeout: Transport timeout in seconds
        verify_ssl: Verify TLS certificates
        debug: Debug logging switches
    """
    endpoint: str = TMT_ENDPOINT
    scheme: str = "https"
    service: str = TMT_SERVICE
    api_version: str = TMT_API_VERSION
    default_region: Optional[str] = None
    language: str = "zh-CN"
    user_agent: str = DEFAULT_USER_AGENT
    request_client: str = DEFAULT_REQUEST_CLIENT
    timeout: float = 60.0
    verify_ssl: bool = True
    debug: DebugConfig = field(default_factory=DebugConfig)

    def __post_init__(self):
        """Validate client configuration."""
        if isinstance(self.debug, dict):
            try:
                self.debug = DebugConfig(**self.debug)
            except TypeError as e:
                raise ConfigError(f"Invalid debug configuration: {e}", "INVALID_FORMAT") from e

        if not isinstance(self.debug, DebugConfig):
            raise ConfigError(
                f"Debug configuration must be an object, got {type(self.debug).__name__}",
                "INVALID_FORMAT"
            )

        if not self.endpoint:
            raise ConfigError("Endpoint cannot be empty", "INVALID_ENDPOINT")

        if '://' in self.endpoint or '/' in self.endpoint:
            raise ConfigError(
                f"Endpoint must be a bare host name: {self.endpoint}",
                "INVALID_ENDPOINT"
            )

        if self.scheme not in ('http', 'https'):
            raise ConfigError(f"Unsupported scheme: {self.scheme}", "INVALID_SCHEME")

        if not self.service:
            raise ConfigError("Service cannot be empty", "INVALID_SERVICE")

        if not self.api_version:
            raise ConfigError("API version cannot be empty", "INVALID_VERSION")

        if self.timeout <= 0:
            raise ConfigError("Timeout must be positive", "INVALID_TIMEOUT")

    @property
    def base_url(self) -> str:
        """URL every action is posted to."""
        return f"{self.scheme}://{self.endpoint}/"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClientConfig':
        """Build configuration from a dictionary, rejecting unknown keys"""
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                "INVALID_FORMAT",
                {"unknown_keys": unknown}
            )
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration format: {e}", "INVALID_FORMAT") from e

    @classmethod
    def from_json(cls, json_string: str) -> 'ClientConfig':
        """Load configuration from JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR") from e

        if not isinstance(data, dict):
            raise ConfigError("Configuration JSON must be an object", "INVALID_FORMAT")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'ClientConfig':
        """Load configuration from file"""
        path = Path(file_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}", "FILE_ERROR") from e

        config = cls.from_json(json_string)
        logger.debug(f"Loaded client configuration from {path}")
        return config


def load_client_config_from_json(json_string: str) -> ClientConfig:
    """Load client configuration from JSON string"""
    return ClientConfig.from_json(json_string)


def load_client_config_from_file(file_path: Union[str, Path]) -> ClientConfig:
    """Load client configuration from file"""
    return ClientConfig.from_file(file_path)
