"""
HMAC-SHA1 (RFC 2104) built on the pure SHA-1 implementation

Digests travel between the inner and outer hash as raw bytes.
"""

from .codecs import to_hex
from .encoding import MessageInput, to_bytes
from .sha1_hasher import sha1
from .words import BLOCK_SIZE

INNER_PAD = 0x36
OUTER_PAD = 0x5C

_INNER_TABLE = bytes(x ^ INNER_PAD for x in range(256))
_OUTER_TABLE = bytes(x ^ OUTER_PAD for x in range(256))


def normalize_key(key: MessageInput) -> bytes:
    """
    Normalize an HMAC key to exactly one block.

    Keys longer than the block size are replaced by their SHA-1 digest; the
    result is then zero-padded to 64 bytes.
    """
    key_bytes = to_bytes(key)
    if len(key_bytes) > BLOCK_SIZE:
        key_bytes = sha1(key_bytes)
    return key_bytes + b'\x00' * (BLOCK_SIZE - len(key_bytes))


def hmac_sha1(message: MessageInput, key: MessageInput) -> bytes:
    """
    Compute HMAC-SHA1 of a message.

    Args:
        message: Message text or bytes
        key: Secret key text or bytes, any length

    Returns:
        bytes: 20-byte authentication code
    """
    block_key = normalize_key(key)

    inner = sha1(block_key.translate(_INNER_TABLE) + to_bytes(message))
    return sha1(block_key.translate(_OUTER_TABLE) + inner)


def hmac_sha1_hex(message: MessageInput, key: MessageInput) -> str:
    """Compute HMAC-SHA1 of a message as lowercase hex."""
    return to_hex(hmac_sha1(message, key))
