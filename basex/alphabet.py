"""Digit alphabets and their byte-indexed decode tables.

An alphabet is the ordered set of characters used as digits for one radix.
Digits live in byte space: every character must have a code point below 256
so that decoding is a single lookup in a 256-entry table.
"""

from typing import Optional, Union

MIN_RADIX = 2
MAX_RADIX = 256
INVALID = -1


class BasexError(ValueError):
    """Base exception for basex codec operations."""


class InvalidAlphabetError(BasexError):
    """Raised when a digit alphabet cannot be used for conversion."""


class InvalidCharacterError(BasexError):
    """Raised when decode input contains a character outside the alphabet."""

    def __init__(self, char: str, position: int, radix: int):
        self.char = char
        self.position = position
        self.radix = radix
        super().__init__(
            f"Invalid base{radix} character: {char!r} at position {position}"
        )


def build_decode_table(digits: str) -> tuple[int, ...]:
    """Map every byte value to its digit value, or INVALID."""
    table = [INVALID] * 256
    for value, char in enumerate(digits):
        table[ord(char)] = value
    return tuple(table)


class Alphabet:
    """Immutable digit alphabet for radix 2-256."""

    __slots__ = ("digits", "radix", "bits", "table")

    def __init__(self, digits: str):
        if not isinstance(digits, str):
            raise TypeError("Alphabet digits must be a string")
        if not MIN_RADIX <= len(digits) <= MAX_RADIX:
            raise InvalidAlphabetError(
                f"Alphabet must have {MIN_RADIX} to {MAX_RADIX} digits, got {len(digits)}"
            )
        if len(set(digits)) != len(digits):
            raise InvalidAlphabetError("Alphabet contains duplicate digits")
        for char in digits:
            if ord(char) >= 256:
                raise InvalidAlphabetError(f"Digit {char!r} is outside the byte range")

        radix = len(digits)
        object.__setattr__(self, "digits", digits)
        object.__setattr__(self, "radix", radix)
        # k for radix == 2**k, None otherwise
        bits: Optional[int] = None
        if radix & (radix - 1) == 0:
            bits = radix.bit_length() - 1
        object.__setattr__(self, "bits", bits)
        object.__setattr__(self, "table", build_decode_table(digits))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def is_pow2(self) -> bool:
        return self.bits is not None

    def __len__(self) -> int:
        return self.radix

    def __contains__(self, char) -> bool:
        # one digit, never a substring of the alphabet
        return isinstance(char, str) and len(char) == 1 and char in self.digits

    def __eq__(self, other) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self.digits == other.digits

    def __hash__(self) -> int:
        return hash(self.digits)

    def __repr__(self) -> str:
        return f"Alphabet({self.digits!r})"


def text_to_bytes(
    text: Union[str, bytes, bytearray, memoryview], alphabet: Alphabet, offset: int = 0
) -> bytes:
    """Normalize decode input to bytes.

    A character outside the byte range can never be a digit, so it is
    reported as an invalid character rather than an encoding failure.
    """
    if isinstance(text, str):
        try:
            return text.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise InvalidCharacterError(
                text[exc.start], offset + exc.start, alphabet.radix
            ) from exc
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text)
    raise TypeError(f"Input must be str or bytes, not {type(text).__name__}")
