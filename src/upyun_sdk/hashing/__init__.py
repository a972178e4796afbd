"""
Digest and encoding primitives for Upyun Python SDK

Pure-Python MD5, SHA-1 and HMAC-SHA1 returning raw digest bytes, plus the
hex/Base64 codecs used to render them in HTTP headers.
"""

from .encoding import encode_utf8, to_bytes
from .codecs import to_hex, from_hex, to_base64, from_base64
from .md5_hasher import md5, md5_hex, MD5_DIGEST_SIZE
from .sha1_hasher import sha1, sha1_hex, SHA1_DIGEST_SIZE
from .hmac_engine import hmac_sha1, hmac_sha1_hex, normalize_key
from .compat import check_platform_compatibility, is_compatible

__all__ = [
    # Byte encoding
    'encode_utf8',
    'to_bytes',

    # Codecs
    'to_hex',
    'from_hex',
    'to_base64',
    'from_base64',

    # Digests
    'md5',
    'md5_hex',
    'MD5_DIGEST_SIZE',
    'sha1',
    'sha1_hex',
    'SHA1_DIGEST_SIZE',
    'hmac_sha1',
    'hmac_sha1_hex',
    'normalize_key',

    # Platform checks
    'check_platform_compatibility',
    'is_compatible',
]
