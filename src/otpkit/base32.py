"""
RFC 4648 Base32 codec.

``decode`` is lenient about padding and trailing bits, the way authenticator
apps are: it accepts secrets of any length and drops bits that do not complete
a byte. Pass ``strict=True`` to reject non-canonical input instead.
"""
from typing import Dict

from .errors import EncodingError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_VALUES: Dict[str, int] = {c: i for i, c in enumerate(ALPHABET)}

# Unpadded text lengths (mod 8) that RFC 4648 can actually produce.
_VALID_REMAINDERS = (0, 2, 4, 5, 7)


def encode(data: bytes, padding: bool = False) -> str:
    """
    Encodes bytes to uppercase Base32 text.

    :param data: bytes to encode
    :param padding: append ``=`` up to the next multiple of 8 characters
    :returns: Base32 text
    """
    result = []
    buffer = 0
    bits_left = 0

    for byte in bytearray(data):
        buffer = (buffer << 8) | byte
        bits_left += 8
        while bits_left >= 5:
            bits_left -= 5
            result.append(ALPHABET[(buffer >> bits_left) & 0x1F])
        buffer &= (1 << bits_left) - 1

    if bits_left:
        # zero-fill the last group on the right
        result.append(ALPHABET[(buffer << (5 - bits_left)) & 0x1F])

    if padding:
        result.append("=" * (-len(result) % 8))
    return "".join(result)


def decode(text: str, strict: bool = False) -> bytes:
    """
    Decodes Base32 text to bytes.

    Lowercase is accepted and trailing ``=`` is ignored. Leftover bits that do
    not make up a whole byte are discarded.

    :param text: Base32 text
    :param strict: also reject impossible lengths and non-zero leftover bits
    :returns: decoded bytes
    :raises EncodingError: on a character outside ``A-Z2-7``
    """
    text = text.upper().rstrip("=")

    if strict and len(text) % 8 not in _VALID_REMAINDERS:
        raise EncodingError("Base32 text has an invalid length: {}".format(len(text)))

    result = bytearray()
    buffer = 0
    bits_left = 0

    for position, char in enumerate(text):
        try:
            value = _VALUES[char]
        except KeyError:
            raise EncodingError("Invalid Base32 character {!r} at position {}".format(char, position)) from None
        buffer = (buffer << 5) | value
        bits_left += 5
        if bits_left >= 8:
            bits_left -= 8
            result.append((buffer >> bits_left) & 0xFF)
            buffer &= (1 << bits_left) - 1

    if strict and buffer != 0:
        raise EncodingError("Base32 text has non-zero trailing bits")

    return bytes(result)
