"""Window buffering so codecs can run over read-once sources.

A source is either a random-access buffer (``bytes``, ``bytearray``,
``memoryview``, or ``str`` when decoding), which is sliced directly, or a
read-once source: a file object (anything with ``read``) or an iterable of
byte values / bytes-like chunks. Read-once input is copied into windows of a
fixed size, a multiple of the codec's group size, so every window can be
converted on its own and the output can be produced incrementally.
"""

import logging
from itertools import chain
from typing import Iterable, Iterator, Optional

from basex import converter
from basex.alphabet import text_to_bytes

logger = logging.getLogger(__name__)

DEFAULT_GROUPS = 256

_BUFFERS = (bytes, bytearray, memoryview)


def _read_blocks(read, size: int) -> Iterator:
    while True:
        block = read(size)
        if not block:
            return
        yield block


def iter_blocks(source, size: int, text=None) -> Iterator[bytes]:
    """Yield the source as bytes blocks of at most ``size`` bytes.

    ``text`` converts ``str`` blocks to bytes; without it, ``str`` input is
    rejected.
    """
    if isinstance(source, str):
        if text is None:
            raise TypeError("Input must be bytes, not str")
        source = text(source, 0)
    if isinstance(source, _BUFFERS):
        view = memoryview(source).cast("B")
        for start in range(0, len(view), size):
            yield bytes(view[start : start + size])
        return

    read = getattr(source, "read", None)
    blocks = _read_blocks(read, size) if read is not None else iter(source)
    pending = bytearray()
    consumed = 0
    for block in blocks:
        if isinstance(block, int):
            pending.append(block)
            if len(pending) < size:
                continue
        elif isinstance(block, str):
            if text is None:
                raise TypeError("Input must be bytes, not str")
            pending += text(block, consumed + len(pending))
        else:
            pending += block
        consumed += len(pending)
        yield bytes(pending)
        pending.clear()
    if pending:
        yield bytes(pending)


def iter_windows(blocks: Iterable[bytes], size: int) -> Iterator[bytes]:
    """Re-cut bytes blocks into windows of exactly ``size`` bytes.

    Only the last window may be shorter.
    """
    buffer = bytearray()
    for block in blocks:
        buffer += block
        while len(buffer) >= size:
            yield bytes(buffer[:size])
            del buffer[:size]
    if buffer:
        yield bytes(buffer)


def drop_trailing(blocks: Iterable[bytes], garbage: bytes) -> Iterator[bytes]:
    """Hold back trailing ``garbage`` bytes until more data shows up.

    Garbage that is followed by data is passed on (and will fail to decode);
    garbage at the very end of the stream is dropped.
    """
    pending = b""
    for block in blocks:
        body = block.rstrip(garbage)
        if body:
            yield pending + body
            pending = block[len(body) :]
        else:
            pending += block


def mark_final(
    windows: Iterable[bytes], min_size: int = 1
) -> Iterator[tuple[bytes, bool]]:
    """Pair every window with a flag telling whether it is the last one.

    A last window shorter than ``min_size`` is joined to the window before
    it, so a stray tail never turns a complete window into a non-final one.
    """
    it = iter(windows)
    previous = next(it, None)
    if previous is None:
        return
    for window in it:
        if len(window) < min_size:
            # only the last window can be short
            previous += window
            continue
        yield previous, False
        previous = window
    yield previous, True


class StreamingCodec:
    """Chunked front-end for a :class:`basex.codec.Codec`.

    Args:
        codec: The codec converting each window.
        encode_size: Raw bytes per encode window, a multiple of
            ``codec.group_bytes``.
        decode_size: Encoded characters per decode window, a multiple of
            ``codec.group_chars``.
    """

    def __init__(
        self,
        codec,
        encode_size: Optional[int] = None,
        decode_size: Optional[int] = None,
    ):
        if encode_size is None:
            encode_size = codec.group_bytes * DEFAULT_GROUPS
        if decode_size is None:
            decode_size = codec.group_chars * DEFAULT_GROUPS
        if encode_size <= 0 or encode_size % codec.group_bytes:
            raise ValueError(
                f"encode_size must be a positive multiple of {codec.group_bytes}"
            )
        if decode_size <= 0 or decode_size % codec.group_chars:
            raise ValueError(
                f"decode_size must be a positive multiple of {codec.group_chars}"
            )
        self.codec = codec
        self.encode_size = encode_size
        self.decode_size = decode_size

    def _text(self, block: str, offset: int) -> bytes:
        return text_to_bytes(block, self.codec.alphabet, offset)

    def encode(self, source) -> Iterator[str]:
        """Encode ``source`` window by window."""
        windows = iter_windows(iter_blocks(source, self.encode_size), self.encode_size)
        alphabet = self.codec.alphabet

        if not alphabet.is_pow2:
            # Every digit depends on the whole input: feed one lazy stream.
            logger.debug("encoding base%d stream by accumulation", alphabet.radix)
            text = converter.encode(chain.from_iterable(windows), alphabet)
            if text:
                yield text
            return

        for index, window in enumerate(windows):
            logger.debug("encoding window %d (%d bytes)", index, len(window))
            yield self.codec.encode_window(window)

    def decode(self, source) -> Iterator[bytes]:
        """Decode ``source`` window by window."""
        blocks = iter_blocks(source, self.decode_size, text=self._text)
        if self.codec.garbage:
            blocks = drop_trailing(blocks, self.codec.garbage)
        windows = iter_windows(blocks, self.decode_size)
        alphabet = self.codec.alphabet

        if not alphabet.is_pow2:
            logger.debug("decoding base%d stream by accumulation", alphabet.radix)
            data = converter.decode(chain.from_iterable(windows), alphabet)
            if data:
                yield data
            return

        offset = 0
        marked = mark_final(windows, self.codec.group_chars)
        for index, (window, final) in enumerate(marked):
            logger.debug(
                "decoding window %d (%d chars%s)",
                index,
                len(window),
                ", final" if final else "",
            )
            yield self.codec.decode_window(window, final=final, offset=offset)
            offset += len(window)
