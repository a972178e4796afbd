"""
Test suite for configuration loading
"""

import json
import logging
from unittest.mock import patch

import pytest

from upyun_sdk.config import (
    UpyunConfig,
    LoggingConfig,
    configure_logging,
    load_config_from_env,
    load_config_from_json,
    load_config_from_file,
)
from upyun_sdk.exceptions import ConfigError
from upyun_sdk.signing import UpyunCredentials


class TestLoggingConfig:
    """Test logging configuration"""

    def test_defaults(self):
        config = LoggingConfig()
        assert config.level == "WARNING"

    def test_level_is_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ConfigError) as exc_info:
            LoggingConfig(level="LOUD")
        assert exc_info.value.error_code == "INVALID_LOG_LEVEL"

    def test_configure_logging(self):
        with patch("upyun_sdk.config.upyun_config.logging.basicConfig") as basic_config:
            configure_logging(LoggingConfig(level="INFO"))
        assert basic_config.call_args.kwargs["level"] == logging.INFO


class TestUpyunConfig:
    """Test the configuration data class"""

    def test_defaults(self):
        config = UpyunConfig(operator="op", secret="sec")
        assert config.logging.level == "WARNING"

    @pytest.mark.parametrize("kwargs", [
        {"operator": 123, "secret": "sec"},
        {"operator": "op", "secret": ["sec"]},
        {"operator": "op", "secret": "sec", "logging": {"level": "DEBUG"}},
    ])
    def test_wrongly_typed_fields(self, kwargs):
        with pytest.raises(ConfigError) as exc_info:
            UpyunConfig(**kwargs)
        assert exc_info.value.error_code == "INVALID_FORMAT"

    def test_missing_credentials(self):
        with pytest.raises(ConfigError):
            UpyunConfig(operator="", secret="sec")
        with pytest.raises(ConfigError):
            UpyunConfig(operator="op", secret="")

    def test_to_credentials(self):
        credentials = UpyunConfig(operator="op", secret="sec").to_credentials()
        assert isinstance(credentials, UpyunCredentials)
        assert credentials.operator == "op"

    def test_to_dict_omits_secret(self):
        data = UpyunConfig(operator="op", secret="sec").to_dict()
        assert "secret" not in data
        assert data["operator"] == "op"
        assert data["logging"]["level"] == "WARNING"


class TestConfigLoaders:
    """Test environment, JSON and file loaders"""

    def test_from_env(self):
        environ = {
            "UPYUN_OPERATOR": "op",
            "UPYUN_SECRET": "sec",
            "UPYUN_LOG_LEVEL": "info",
        }
        config = UpyunConfig.from_env(environ=environ)
        assert config.operator == "op"
        assert config.logging.level == "INFO"

    def test_from_env_custom_prefix(self):
        config = UpyunConfig.from_env(prefix="MY_", environ={"MY_OPERATOR": "a", "MY_SECRET": "b"})
        assert config.operator == "a"

    def test_from_env_missing(self):
        with pytest.raises(ConfigError) as exc_info:
            UpyunConfig.from_env(environ={"UPYUN_OPERATOR": "op"})
        assert exc_info.value.error_code == "MISSING_CREDENTIALS"

    def test_load_config_from_env(self, monkeypatch):
        monkeypatch.setenv("UPYUN_OPERATOR", "env-op")
        monkeypatch.setenv("UPYUN_SECRET", "env-secret")
        assert load_config_from_env().operator == "env-op"

    def test_from_json(self):
        config = load_config_from_json(json.dumps({
            "operator": "op",
            "secret": "sec",
            "logging": {"level": "DEBUG"},
        }))
        assert config.operator == "op"
        assert config.logging.level == "DEBUG"

    def test_from_json_invalid(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json("{not json")
        assert exc_info.value.error_code == "PARSE_ERROR"

    def test_from_json_not_object(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json("[1, 2]")
        assert exc_info.value.error_code == "INVALID_FORMAT"

    def test_from_json_missing_field(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json('{"operator": "op"}')
        assert exc_info.value.error_code == "MISSING_FIELD"

    def test_from_json_unknown_logging_field(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json('{"operator": "op", "secret": "s", "logging": {"colour": true}}')
        assert exc_info.value.error_code == "INVALID_FORMAT"

    @pytest.mark.parametrize("document", [
        '{"operator": 123, "secret": "sec"}',
        '{"operator": "op", "secret": null}',
        '{"operator": "op", "secret": "sec", "logging": "DEBUG"}',
        '{"operator": "op", "secret": "sec", "logging": {"format": 5}}',
    ])
    def test_from_json_wrong_types(self, document):
        """Wrongly typed values are reported as ConfigError"""
        with pytest.raises(ConfigError):
            load_config_from_json(document)

    def test_from_file(self, tmp_path):
        path = tmp_path / "upyun.json"
        path.write_text(json.dumps({"operator": "op", "secret": "sec"}), encoding="utf-8")
        assert load_config_from_file(path).operator == "op"

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_file(tmp_path / "missing.json")
        assert exc_info.value.error_code == "FILE_ERROR"
