"""
32-bit word helpers shared by the MD5 and SHA-1 compression functions
"""

from ..exceptions import LengthOverflowError

WORD_MASK = 0xFFFFFFFF
BLOCK_SIZE = 64

# The padded length field is 64 bits wide.
MAX_MESSAGE_BITS = (1 << 64) - 1


def rotate_left(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & WORD_MASK


def pad_message(data: bytes, byteorder: str) -> bytes:
    """
    Apply Merkle-Damgard padding.

    Appends 0x80, zero-fills to 56 mod 64 and appends the original bit length
    as an 8-byte integer in the given byte order ('little' for MD5, 'big'
    for SHA-1).

    Raises:
        LengthOverflowError: If the bit length does not fit in 64 bits
    """
    bit_length = len(data) * 8
    if bit_length > MAX_MESSAGE_BITS:
        raise LengthOverflowError(
            "Message too long for 64-bit length field",
            "LENGTH_OVERFLOW",
            {"length": len(data)}
        )

    zeros = (55 - len(data)) % BLOCK_SIZE
    return data + b'\x80' + b'\x00' * zeros + bit_length.to_bytes(8, byteorder)
