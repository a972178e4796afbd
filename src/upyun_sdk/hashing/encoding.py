"""
UTF-8 byte encoder for the digest functions

Text handed to the hashers is converted to bytes here. Surrogate pairs that
arrive as two separate code units (for example from JSON decoded with
``surrogatepass``) are combined into a single code point before encoding.
"""

from typing import Union

from ..exceptions import EncodingError, ValidationError

HIGH_SURROGATE_START = 0xD800
LOW_SURROGATE_START = 0xDC00
SURROGATE_END = 0xDFFF

MessageInput = Union[str, bytes, bytearray, memoryview]


def _is_high_surrogate(code_point: int) -> bool:
    return HIGH_SURROGATE_START <= code_point < LOW_SURROGATE_START


def _is_low_surrogate(code_point: int) -> bool:
    return LOW_SURROGATE_START <= code_point <= SURROGATE_END


def encode_utf8(text: str) -> bytes:
    """
    Encode text as UTF-8 bytes.

    Args:
        text: Text to encode

    Returns:
        bytes: UTF-8 encoding of the text

    Raises:
        ValidationError: If text is not a string
        EncodingError: If text contains an unpaired surrogate
    """
    if not isinstance(text, str):
        raise ValidationError("Text must be a string", "INVALID_TEXT_TYPE")

    out = bytearray()
    i = 0
    length = len(text)
    while i < length:
        code_point = ord(text[i])

        if code_point < 0x80:
            out.append(code_point)
        elif code_point < 0x800:
            out.append(0xC0 | (code_point >> 6))
            out.append(0x80 | (code_point & 0x3F))
        elif code_point < HIGH_SURROGATE_START or SURROGATE_END < code_point <= 0xFFFF:
            out.append(0xE0 | (code_point >> 12))
            out.append(0x80 | ((code_point >> 6) & 0x3F))
            out.append(0x80 | (code_point & 0x3F))
        else:
            if _is_high_surrogate(code_point):
                low = ord(text[i + 1]) if i + 1 < length else None
                if low is None or not _is_low_surrogate(low):
                    raise EncodingError(
                        f"Unpaired high surrogate at index {i}",
                        "UNPAIRED_SURROGATE",
                        {"index": i, "code_point": code_point}
                    )
                code_point = 0x10000 + (((code_point & 0x3FF) << 10) | (low & 0x3FF))
                i += 1
            elif _is_low_surrogate(code_point):
                raise EncodingError(
                    f"Unpaired low surrogate at index {i}",
                    "UNPAIRED_SURROGATE",
                    {"index": i, "code_point": code_point}
                )

            out.append(0xF0 | (code_point >> 18))
            out.append(0x80 | ((code_point >> 12) & 0x3F))
            out.append(0x80 | ((code_point >> 6) & 0x3F))
            out.append(0x80 | (code_point & 0x3F))

        i += 1

    return bytes(out)


def to_bytes(message: MessageInput) -> bytes:
    """Coerce hasher input to bytes, UTF-8 encoding text."""
    if isinstance(message, str):
        return encode_utf8(message)
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    raise ValidationError(
        f"Message must be str or bytes-like, got {type(message).__name__}",
        "INVALID_MESSAGE_TYPE",
        {"message_type": type(message).__name__}
    )
