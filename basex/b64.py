"""Base64 codec (RFC 4648 alphabet with ``=`` padding).

Full 3-byte groups go through the bit-packing converter; a short final
group is written as 2 or 3 digits followed by ``==`` or ``=``.
"""

from basex import converter
from basex.alphabet import InvalidCharacterError
from basex.codec import Codec

STANDARD_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
)
PAD = "="

_PAD_BYTE = PAD.encode("ascii")


class Base64Codec(Codec):
    def __init__(self, alphabet=STANDARD_ALPHABET):
        super().__init__(alphabet)
        if self.alphabet.radix != 64:
            raise ValueError("Base64 needs a 64-digit alphabet")
        if PAD in self.alphabet:
            raise ValueError(f"Base64 alphabet must not contain the pad {PAD!r}")
        # Trailing garbage is handled by group truncation instead.
        self.garbage = b""

    def encode_window(self, window: bytes) -> str:
        text = converter.encode(window, self.alphabet)
        return text + PAD * (-len(text) % 4)

    def decode_window(self, window: bytes, final: bool = False, offset: int = 0) -> bytes:
        """Decode a window of whole 4-character groups.

        In the final window a remainder that cannot form a group is trailing
        garbage (a stray newline) and is dropped. Padding may only appear at
        the end of the last group of the final window.
        """
        if not final:
            if _PAD_BYTE in window:
                # more windows follow, so this one cannot end the data
                raise InvalidCharacterError(PAD, offset + window.index(_PAD_BYTE), 64)
            return converter.decode(window, self.alphabet, offset)

        window = window[: len(window) & ~3]
        if not window:
            return b""

        tail = window[-4:]
        if _PAD_BYTE in tail:
            used = tail.index(_PAD_BYTE)
            start = len(window) - len(tail)
            if tail[used:] != _PAD_BYTE * (len(tail) - used):
                # data after the pad
                raise InvalidCharacterError(PAD, offset + start + used, 64)
            window = window[: start + used]
        return converter.decode(window, self.alphabet, offset)


BASE64 = Base64Codec()


def b64encode(data: bytes) -> str:
    """Encode bytes to a padded base64 string."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Input must be bytes")
    return BASE64.encode(data)


def b64decode(encoded) -> bytes:
    """Decode a padded base64 string (or bytes) to bytes."""
    if not isinstance(encoded, (str, bytes, bytearray, memoryview)):
        raise TypeError("Input must be a string")
    return BASE64.decode(encoded)


def b64encode_str(text: str, encoding: str = "utf-8") -> str:
    """Encode a text string to base64."""
    return b64encode(text.encode(encoding))


def b64decode_str(encoded: str, encoding: str = "utf-8") -> str:
    """Decode a base64 string to text."""
    return b64decode(encoded).decode(encoding)
