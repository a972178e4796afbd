"""
Configuration management for Upyun Python SDK
"""

from .upyun_config import (
    UpyunConfig,
    LoggingConfig,
    configure_logging,
    load_config_from_env,
    load_config_from_json,
    load_config_from_file,
)

__all__ = [
    'UpyunConfig',
    'LoggingConfig',
    'configure_logging',
    'load_config_from_env',
    'load_config_from_json',
    'load_config_from_file',
]
