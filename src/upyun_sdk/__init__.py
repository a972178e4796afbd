"""
Upyun Python SDK
Pure-Python digests and request signing for the Upyun storage REST API
"""

from .version import __version__
from .hashing import (
    encode_utf8,
    to_hex,
    from_hex,
    to_base64,
    from_base64,
    md5,
    md5_hex,
    sha1,
    sha1_hex,
    hmac_sha1,
    hmac_sha1_hex,
    check_platform_compatibility,
    is_compatible,
)
from .exceptions import (
    UpyunSDKError,
    EncodingError,
    LengthOverflowError,
    ValidationError,
    ConfigError,
    SigningError,
)
from .signing import (
    HttpMethod,
    SignaturePayload,
    UpyunCredentials,
    UpyunSignatureAuth,
    create_signing_session,
    content_md5,
    encode_uri,
    format_http_date,
)
from .config import (
    UpyunConfig,
    LoggingConfig,
    configure_logging,
    load_config_from_env,
    load_config_from_json,
    load_config_from_file,
)


# Public API exports
__all__ = [
    '__version__',
    # Digests and codecs
    'encode_utf8',
    'to_hex',
    'from_hex',
    'to_base64',
    'from_base64',
    'md5',
    'md5_hex',
    'sha1',
    'sha1_hex',
    'hmac_sha1',
    'hmac_sha1_hex',
    'check_platform_compatibility',
    'is_compatible',
    # Exceptions
    'UpyunSDKError',
    'EncodingError',
    'LengthOverflowError',
    'ValidationError',
    'ConfigError',
    'SigningError',
    # Request Signing
    'HttpMethod',
    'SignaturePayload',
    'UpyunCredentials',
    'UpyunSignatureAuth',
    'create_signing_session',
    'content_md5',
    'encode_uri',
    'format_http_date',
    # Configuration
    'UpyunConfig',
    'LoggingConfig',
    'configure_logging',
    'load_config_from_env',
    'load_config_from_json',
    'load_config_from_file',
]
