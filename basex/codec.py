"""Generic text codec over an arbitrary digit alphabet."""

import string
from typing import Union

from basex import converter
from basex.alphabet import Alphabet, text_to_bytes
from basex.streaming import StreamingCodec

_BUFFERS = (bytes, bytearray, memoryview)


class Codec:
    """Encode bytes as digits of ``alphabet`` and back, without padding.

    Buffers (``bytes``, ``bytearray``, ``memoryview``; ``str`` for decoding)
    are converted in one pass. Anything else is treated as a read-once
    source and converted through :class:`StreamingCodec`.
    """

    def __init__(self, alphabet: Union[Alphabet, str]):
        if not isinstance(alphabet, Alphabet):
            alphabet = Alphabet(alphabet)
        self.alphabet = alphabet
        if alphabet.is_pow2:
            self.group_bytes, self.group_chars = converter.group_sizes(alphabet)
        else:
            self.group_bytes = self.group_chars = 1
        # Whitespace outside the alphabet is ignored at the end of decode input.
        self.garbage = "".join(
            c for c in string.whitespace if c not in alphabet
        ).encode("ascii")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.alphabet.digits!r})"

    def encode(self, data) -> str:
        """Encode bytes, a binary file, or an iterable of byte values."""
        if isinstance(data, str):
            raise TypeError("Input must be bytes, not str")
        if isinstance(data, _BUFFERS):
            return self.encode_window(bytes(data))
        return "".join(StreamingCodec(self).encode(data))

    def decode(self, text) -> bytes:
        """Decode a string, bytes, a file, or an iterable of chunks."""
        if isinstance(text, (str,) + _BUFFERS):
            data = text_to_bytes(text, self.alphabet)
            if self.garbage:
                data = data.rstrip(self.garbage)
            return self.decode_window(data, final=True)
        return b"".join(StreamingCodec(self).decode(text))

    def encode_window(self, window: bytes) -> str:
        return converter.encode(window, self.alphabet)

    def decode_window(self, window: bytes, final: bool = False, offset: int = 0) -> bytes:
        return converter.decode(window, self.alphabet, offset)
