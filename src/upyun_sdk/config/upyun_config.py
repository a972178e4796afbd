"""
Configuration management for Upyun Python SDK

Loads operator credentials and logging preferences from environment
variables or JSON.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Dict, Mapping, Optional, Any, Union

from ..exceptions import ConfigError
from ..signing.credentials import UpyunCredentials

DEFAULT_ENV_PREFIX = "UPYUN_"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "WARNING"
    format: str = DEFAULT_LOG_FORMAT

    def __post_init__(self):
        if not isinstance(self.format, str):
            raise ConfigError("Log format must be a string", "INVALID_FORMAT", {"field": "format"})
        self.level = str(self.level).upper()
        if self.level not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level '{self.level}'",
                "INVALID_LOG_LEVEL",
                {"allowed": list(LOG_LEVELS)}
            )


@dataclass
class UpyunConfig:
    """
    Upyun client configuration

    Attributes:
        operator: Operator name
        secret: Operator secret (never serialized by to_dict)
        logging: Logging settings
    """
    operator: str
    secret: str
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        for name in ("operator", "secret"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(
                    f"{name} must be a string, got {type(value).__name__}",
                    "INVALID_FORMAT",
                    {"field": name}
                )
        if not self.operator:
            raise ConfigError("Operator is required", "MISSING_OPERATOR")
        if not self.secret:
            raise ConfigError("Secret is required", "MISSING_SECRET")
        if not isinstance(self.logging, LoggingConfig):
            raise ConfigError("logging must be a LoggingConfig", "INVALID_FORMAT", {"field": "logging"})

    def to_credentials(self) -> UpyunCredentials:
        """Build signing credentials from this configuration"""
        return UpyunCredentials(self.operator, self.secret)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration without the secret"""
        data = asdict(self)
        data.pop("secret")
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'UpyunConfig':
        """Build configuration from a parsed mapping"""
        try:
            logging_data = data.get("logging") or {}
            return cls(
                operator=data["operator"],
                secret=data["secret"],
                logging=LoggingConfig(**logging_data),
            )
        except KeyError as e:
            raise ConfigError(f"Missing configuration field: {e}", "MISSING_FIELD")
        except TypeError as e:
            raise ConfigError(f"Invalid configuration format: {e}", "INVALID_FORMAT")

    @classmethod
    def from_json(cls, json_string: str) -> 'UpyunConfig':
        """Load configuration from JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")

        if not isinstance(data, dict):
            raise ConfigError("Configuration JSON must be an object", "INVALID_FORMAT")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'UpyunConfig':
        """Load configuration from a JSON file"""
        try:
            with open(Path(file_path), 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}", "FILE_ERROR")
        return cls.from_json(json_string)

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None
    ) -> 'UpyunConfig':
        """
        Load configuration from environment variables.

        Reads ``<prefix>OPERATOR``, ``<prefix>SECRET`` and ``<prefix>LOG_LEVEL``.
        """
        env = os.environ if environ is None else environ
        operator = env.get(f"{prefix}OPERATOR")
        secret = env.get(f"{prefix}SECRET")
        if not operator or not secret:
            raise ConfigError(
                f"{prefix}OPERATOR and {prefix}SECRET must be set",
                "MISSING_CREDENTIALS"
            )

        return cls(
            operator=operator,
            secret=secret,
            logging=LoggingConfig(level=env.get(f"{prefix}LOG_LEVEL", "WARNING")),
        )


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Apply logging settings to the root logger"""
    config = config or LoggingConfig()
    logging.basicConfig(level=getattr(logging, config.level), format=config.format)


def load_config_from_env(prefix: str = DEFAULT_ENV_PREFIX) -> UpyunConfig:
    """Load configuration from environment variables"""
    return UpyunConfig.from_env(prefix)


def load_config_from_json(json_string: str) -> UpyunConfig:
    """Load configuration from JSON string"""
    return UpyunConfig.from_json(json_string)


def load_config_from_file(file_path: Union[str, Path]) -> UpyunConfig:
    """Load configuration from file"""
    return UpyunConfig.from_file(file_path)
