"""Base58 codec (Bitcoin alphabet).

No padding. 58 is not a power of two, so both directions use repeated
accumulation; leading zero bytes map to leading ``1`` characters.
"""

from basex.codec import Codec

BITCOIN_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


class Base58Codec(Codec):
    def __init__(self, alphabet=BITCOIN_ALPHABET):
        super().__init__(alphabet)
        if self.alphabet.radix != 58:
            raise ValueError("Base58 needs a 58-digit alphabet")


BASE58 = Base58Codec()


def b58encode(data: bytes) -> str:
    """Encode bytes to a base58 string using the Bitcoin alphabet."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Input must be bytes")
    return BASE58.encode(data)


def b58decode(encoded) -> bytes:
    """Decode a base58 string (or its ASCII bytes) using the Bitcoin alphabet."""
    if not isinstance(encoded, (str, bytes, bytearray, memoryview)):
        raise TypeError("Input must be a string")
    return BASE58.decode(encoded)


def b58encode_str(text: str, encoding: str = "utf-8") -> str:
    """Encode a text string to base58."""
    return b58encode(text.encode(encoding))


def b58decode_str(encoded: str, encoding: str = "utf-8") -> str:
    """Decode a base58 string to text."""
    return b58decode(encoded).decode(encoding)
