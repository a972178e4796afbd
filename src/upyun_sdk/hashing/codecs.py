"""
Hex and Base64 codecs for rendering digests as text

Decoders are strict: malformed input raises EncodingError and no partial
output is returned.
"""

import base64
import binascii
import re
from typing import Union

from ..exceptions import EncodingError, ValidationError

_HEX_PATTERN = re.compile(r'[0-9a-fA-F]*')
_BASE64_PATTERN = re.compile(r'(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?')

BytesLike = Union[bytes, bytearray, memoryview]


def _require_bytes(data: BytesLike) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise ValidationError(
            f"Expected bytes-like data, got {type(data).__name__}",
            "INVALID_BYTES_INPUT"
        )
    return bytes(data)


def to_hex(data: BytesLike) -> str:
    """
    Render bytes as lowercase hex, two digits per byte.

    Args:
        data: Bytes to render

    Returns:
        str: Hex string, twice as long as the input
    """
    return _require_bytes(data).hex()


def from_hex(text: str) -> bytes:
    """
    Parse a hex string back into bytes.

    Args:
        text: Hex string with an even number of hex digits

    Returns:
        bytes: Decoded bytes

    Raises:
        EncodingError: If the string has odd length or non-hex characters
    """
    if not isinstance(text, str):
        raise ValidationError("Hex input must be a string", "INVALID_HEX_INPUT")

    if len(text) % 2:
        raise EncodingError(
            f"Hex string must have even length, got {len(text)}",
            "ODD_LENGTH_HEX",
            {"length": len(text)}
        )

    # bytes.fromhex tolerates whitespace, so check the alphabet first
    if not _HEX_PATTERN.fullmatch(text):
        raise EncodingError("Hex string contains non-hex characters", "INVALID_HEX")

    return bytes.fromhex(text)


def to_base64(data: BytesLike) -> str:
    """Render bytes as standard padded Base64 (RFC 4648 section 4)."""
    return base64.b64encode(_require_bytes(data)).decode('ascii')


def from_base64(text: str) -> bytes:
    """
    Parse standard padded Base64 back into bytes.

    Raises:
        EncodingError: If the string is not canonical padded Base64
    """
    if not isinstance(text, str):
        raise ValidationError("Base64 input must be a string", "INVALID_BASE64_INPUT")

    if not _BASE64_PATTERN.fullmatch(text):
        raise EncodingError("Invalid base64 string", "INVALID_BASE64", {"length": len(text)})

    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise EncodingError(f"Invalid base64 string: {e}", "INVALID_BASE64")
