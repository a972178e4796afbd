"""
SHA-1 message digest (FIPS 180-1)

Pure-Python implementation returning raw digest bytes. Used as the
compression function underneath HMAC-SHA1 request signatures.
"""

import struct

from .codecs import to_hex
from .encoding import MessageInput, to_bytes
from .words import BLOCK_SIZE, WORD_MASK, pad_message, rotate_left

SHA1_DIGEST_SIZE = 20

INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

ROUND_CONSTANTS = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)


def _message_schedule(block: bytes):
    words = list(struct.unpack('>16I', block))
    for i in range(16, 80):
        words.append(rotate_left(words[i - 3] ^ words[i - 8] ^ words[i - 14] ^ words[i - 16], 1))
    return words


def _compress(state, block: bytes):
    w = _message_schedule(block)
    a, b, c, d, e = state

    for i in range(80):
        if i < 20:
            f = (b & c) | (~b & d)
        elif i < 40:
            f = b ^ c ^ d
        elif i < 60:
            f = (b & c) | (b & d) | (c & d)
        else:
            f = b ^ c ^ d

        temp = (rotate_left(a, 5) + f + e + ROUND_CONSTANTS[i // 20] + w[i]) & WORD_MASK
        a, b, c, d, e = temp, a, rotate_left(b, 30), c, d

    return tuple((x + y) & WORD_MASK for x, y in zip(state, (a, b, c, d, e)))


def sha1(message: MessageInput) -> bytes:
    """
    Compute the SHA-1 digest of a message.

    Args:
        message: Text (UTF-8 encoded first) or bytes

    Returns:
        bytes: 20-byte digest
    """
    padded = pad_message(to_bytes(message), 'big')

    state = INITIAL_STATE
    for offset in range(0, len(padded), BLOCK_SIZE):
        state = _compress(state, padded[offset:offset + BLOCK_SIZE])

    return struct.pack('>5I', *state)


def sha1_hex(message: MessageInput) -> str:
    """Compute the SHA-1 digest of a message as lowercase hex."""
    return to_hex(sha1(message))
