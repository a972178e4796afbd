"""
Platform compatibility check

Cross-checks the pure-Python digests against the OpenSSL-backed
implementations in the cryptography package.
"""

import logging
import platform
import sys
from typing import Any, Dict

import cryptography
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from .hmac_engine import hmac_sha1
from .md5_hasher import md5
from .sha1_hasher import sha1

logger = logging.getLogger(__name__)

# Samples straddle the padding boundaries and include multi-byte UTF-8
SAMPLE_MESSAGES = (
    b"",
    b"abc",
    b"a" * 55,
    b"a" * 56,
    b"a" * 64,
    b"a" * 120,
    "GET&/bucket/文件.txt&Mon, 19 Oct 2026 09:00:00 GMT".encode("utf-8"),
)

SAMPLE_KEYS = (b"key", b"k" * 64, b"k" * 65)


def reference_digest(algorithm: hashes.HashAlgorithm, message: bytes) -> bytes:
    """Compute a digest with the cryptography package."""
    digest = hashes.Hash(algorithm)
    digest.update(message)
    return digest.finalize()


def reference_hmac_sha1(message: bytes, key: bytes) -> bytes:
    """Compute HMAC-SHA1 with the cryptography package."""
    mac = crypto_hmac.HMAC(key, hashes.SHA1())
    mac.update(message)
    return mac.finalize()


def check_platform_compatibility() -> Dict[str, Any]:
    """
    Check that the pure digests agree with the platform implementations.

    Returns:
        dict: Compatibility information including cryptography version,
              per-algorithm agreement and platform details
    """
    compatibility = {
        'cryptography_version': cryptography.__version__,
        'md5_matches': False,
        'sha1_matches': False,
        'hmac_sha1_matches': False,
        'platform_info': {
            'system': platform.system(),
            'python_version': sys.version,
            'architecture': platform.architecture()[0],
        }
    }

    # FIPS builds of OpenSSL may refuse MD5/SHA-1
    try:
        compatibility['md5_matches'] = all(
            md5(m) == reference_digest(hashes.MD5(), m) for m in SAMPLE_MESSAGES
        )
        compatibility['sha1_matches'] = all(
            sha1(m) == reference_digest(hashes.SHA1(), m) for m in SAMPLE_MESSAGES
        )
        compatibility['hmac_sha1_matches'] = all(
            hmac_sha1(m, k) == reference_hmac_sha1(m, k)
            for m in SAMPLE_MESSAGES
            for k in SAMPLE_KEYS
        )
    except UnsupportedAlgorithm as e:
        logger.warning(f"Reference digest unavailable on this platform: {e}")

    return compatibility


def is_compatible() -> bool:
    """Quick check that every digest agrees with the reference."""
    result = check_platform_compatibility()
    return result['md5_matches'] and result['sha1_matches'] and result['hmac_sha1_matches']
