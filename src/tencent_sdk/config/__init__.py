"""
Configuration management for the Tencent Cloud API SDK
"""

from .client_config import (
    ClientConfig,
    DebugConfig,
    TMT_ENDPOINT,
    TMT_SERVICE,
    TMT_API_VERSION,
    load_client_config_from_json,
    load_client_config_from_file,
)

__all__ = [
    'ClientConfig',
    'DebugConfig',
    'TMT_ENDPOINT',
    'TMT_SERVICE',
    'TMT_API_VERSION',
    'load_client_config_from_json',
    'load_client_config_from_file',
]
