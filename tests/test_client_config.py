"""
Tests for client configuration loading and validation
"""

import json

import pytest

from tencent_sdk.config import (
    ClientConfig,
    DebugConfig,
    load_client_config_from_json,
    load_client_config_from_file,
    TMT_API_VERSION,
    TMT_ENDPOINT,
)
from tencent_sdk.exceptions import ConfigError


class TestClientConfig:
    """Test ClientConfig defaults and validation"""

    def test_defaults(self):
        """Defaults target the machine translation endpoint"""
        config = ClientConfig()

        assert config.endpoint == TMT_ENDPOINT == "tmt.tencentcloudapi.com"
        assert config.service == "tmt"
        assert config.api_version == TMT_API_VERSION == "2018-03-21"
        assert config.language == "zh-CN"
        assert config.request_client == "python-sdk"
        assert config.user_agent == "Mozilla/5.0 Safari/537.36"
        assert config.default_region is None
        assert config.base_url == "https://tmt.tencentcloudapi.com/"
        assert config.debug == DebugConfig()

    def test_http_scheme(self):
        config = ClientConfig(endpoint="localhost:8080", scheme="http")
        assert config.base_url == "http://localhost:8080/"

    @pytest.mark.parametrize("endpoint", ["", "https://tmt.tencentcloudapi.com", "tmt.tencentcloudapi.com/v1"])
    def test_invalid_endpoint(self, endpoint):
        with pytest.raises(ConfigError) as exc_info:
            ClientConfig(endpoint=endpoint)
        assert exc_info.value.error_code == "INVALID_ENDPOINT"

    def test_invalid_scheme(self):
        with pytest.raises(ConfigError, match="Unsupported scheme"):
            ClientConfig(scheme="ftp")

    def test_invalid_timeout(self):
        with pytest.raises(ConfigError, match="Timeout must be positive"):
            ClientConfig(timeout=0)

    def test_empty_service_and_version(self):
        with pytest.raises(ConfigError) as exc_info:
            ClientConfig(service="")
        assert exc_info.value.error_code == "INVALID_SERVICE"

        with pytest.raises(ConfigError) as exc_info:
            ClientConfig(api_version="")
        assert exc_info.value.error_code == "INVALID_VERSION"

    def test_debug_from_dict(self):
        """Nested debug dictionaries are converted"""
        config = ClientConfig(debug={"log_canonical_strings": True})
        assert isinstance(config.debug, DebugConfig)
        assert config.debug.log_canonical_strings is True
        assert config.debug.log_request_headers is False

    @pytest.mark.parametrize("debug", [None, True, "verbose", ["log_request_headers"]])
    def test_invalid_debug(self, debug):
        """Debug settings must be a DebugConfig or a mapping"""
        with pytest.raises(ConfigError) as exc_info:
            ClientConfig(debug=debug)
        assert exc_info.value.error_code == "INVALID_FORMAT"

    def test_unknown_debug_key(self):
        with pytest.raises(ConfigError, match="Invalid debug configuration"):
            ClientConfig(debug={"log_everything": True})

    def test_to_dict_round_trip(self):
        config = ClientConfig(default_region="ap-guangzhou", timeout=5.0)
        assert ClientConfig.from_dict(config.to_dict()) == config


class TestConfigLoading:
    """Test loading configuration from JSON and files"""

    def test_from_json(self):
        config = load_client_config_from_json(json.dumps({
            "default_region": "ap-shanghai",
            "timeout": 10,
            "debug": {"log_request_headers": True},
        }))

        assert config.default_region == "ap-shanghai"
        assert config.timeout == 10
        assert config.debug.log_request_headers is True
        assert config.endpoint == TMT_ENDPOINT

    def test_invalid_json(self):
        with pytest.raises(ConfigError) as exc_info:
            load_client_config_from_json("{not json")
        assert exc_info.value.error_code == "PARSE_ERROR"

    def test_null_debug(self):
        """A null debug entry is rejected at load time"""
        with pytest.raises(ConfigError) as exc_info:
            load_client_config_from_json('{"debug": null}')
        assert exc_info.value.error_code == "INVALID_FORMAT"

    def test_json_not_object(self):
        with pytest.raises(ConfigError, match="must be an object"):
            load_client_config_from_json("[1, 2]")

    def test_unknown_keys(self):
        with pytest.raises(ConfigError) as exc_info:
            ClientConfig.from_dict({"region": "ap-guangzhou", "endpont": "x"})

        assert exc_info.value.error_code == "INVALID_FORMAT"
        assert exc_info.value.details["unknown_keys"] == ["endpont", "region"]

    def test_from_file(self, tmp_path):
        path = tmp_path / "client.json"
        path.write_text(json.dumps({"default_region": "ap-beijing"}), encoding="utf-8")

        config = load_client_config_from_file(path)
        assert config.default_region == "ap-beijing"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_client_config_from_file(tmp_path / "missing.json")
        assert exc_info.value.error_code == "FILE_ERROR"
