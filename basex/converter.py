"""Radix conversion between byte sequences and digit sequences.

Two strategies, picked by the alphabet's radix:

  - repeated accumulation for radices that are not a power of two: the
    number is kept as a little-endian digit buffer and every input symbol
    multiplies it by the source radix and adds itself, one carry
    propagation per symbol (quadratic in the input length);
  - bit packing for radix 2**k: input is cut into groups of lcm(k, 8) bits
    and each group is re-sliced with shifts (linear).

All functions take iterables of byte values, so a read-once iterator is as
good as an in-memory buffer.
"""

import math
from itertools import islice
from typing import Iterable, Iterator

from basex.alphabet import INVALID, Alphabet, InvalidCharacterError


def group_sizes(alphabet: Alphabet) -> tuple[int, int]:
    """Return (bytes, digits) per group for a power-of-two alphabet."""
    nbits = math.lcm(alphabet.bits, 8)
    return nbits // 8, nbits // alphabet.bits


def digit_values(
    data: Iterable[int], alphabet: Alphabet, offset: int = 0
) -> Iterator[int]:
    """Translate encoded bytes to digit values through the decode table."""
    table = alphabet.table
    for position, code in enumerate(data, offset):
        value = table[code]
        if value == INVALID:
            raise InvalidCharacterError(chr(code), position, alphabet.radix)
        yield value


# ---------------------------------------------------------------------------
# Repeated accumulation (any radix)
# ---------------------------------------------------------------------------


def encode_accumulate(data: Iterable[int], alphabet: Alphabet) -> str:
    """Encode bytes by repeated multiply-and-carry into radix digits."""
    radix = alphabet.radix
    zeros = 0
    # digits[i] is the coefficient of radix**i
    digits: list[int] = []
    for byte in data:
        if not digits and byte == 0:
            zeros += 1
            continue
        # digits = digits * 256 + byte
        carry = byte
        length = len(digits)
        i = 0
        while carry or i < length:
            if i < length:
                carry += digits[i] << 8
                digits[i] = carry % radix
            else:
                digits.append(carry % radix)
            carry //= radix
            i += 1

    symbols = alphabet.digits
    return symbols[0] * zeros + "".join(symbols[d] for d in reversed(digits))


def decode_accumulate(
    data: Iterable[int], alphabet: Alphabet, offset: int = 0
) -> bytes:
    """Decode radix digits by repeated multiply-and-carry into bytes."""
    radix = alphabet.radix
    zeros = 0
    # out[i] is the coefficient of 256**i
    out: list[int] = []
    for value in digit_values(data, alphabet, offset):
        if not out and value == 0:
            zeros += 1
            continue
        # out = out * radix + value
        carry = value
        length = len(out)
        i = 0
        while carry or i < length:
            if i < length:
                carry += out[i] * radix
                out[i] = carry & 0xFF
            else:
                out.append(carry & 0xFF)
            carry >>= 8
            i += 1

    return bytes(zeros) + bytes(reversed(out))


# ---------------------------------------------------------------------------
# Bit packing (radix 2**k)
# ---------------------------------------------------------------------------


def encode_pow2(data: Iterable[int], alphabet: Alphabet) -> str:
    """Encode bytes by slicing lcm(k, 8)-bit groups into k-bit digits."""
    k = alphabet.bits
    nbytes, ndigits = group_sizes(alphabet)
    mask = alphabet.radix - 1
    symbols = alphabet.digits

    out: list[str] = []
    it = iter(data)
    while True:
        group = bytes(islice(it, nbytes))
        if not group:
            break
        count = ndigits
        bits = int.from_bytes(group, "big")
        if len(group) < nbytes:
            # Short final group: left-align the bytes, unused low bits are zero.
            count = -(-len(group) * 8 // k)
            bits <<= count * k - len(group) * 8
        buffer = []
        for _ in range(count):
            buffer.append(symbols[bits & mask])
            bits >>= k
        out.extend(reversed(buffer))
    return "".join(out)


def decode_pow2(data: Iterable[int], alphabet: Alphabet, offset: int = 0) -> bytes:
    """Decode k-bit digits by packing them back into lcm(k, 8)-bit groups."""
    k = alphabet.bits
    nbytes, ndigits = group_sizes(alphabet)

    out = bytearray()
    values = digit_values(data, alphabet, offset)
    while True:
        group = list(islice(values, ndigits))
        if not group:
            break
        bits = 0
        for value in group:
            bits = bits << k | value
        count = nbytes
        if len(group) < ndigits:
            count = len(group) * k // 8
            bits >>= len(group) * k - count * 8
        out += bits.to_bytes(count, "big")
    return bytes(out)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def encode(data: Iterable[int], alphabet: Alphabet) -> str:
    """Encode byte values into digits of ``alphabet``."""
    if alphabet.is_pow2:
        return encode_pow2(data, alphabet)
    return encode_accumulate(data, alphabet)


def decode(data: Iterable[int], alphabet: Alphabet, offset: int = 0) -> bytes:
    """Decode encoded byte values back into raw bytes.

    ``offset`` is added to reported positions when ``data`` is a slice of a
    longer stream.
    """
    if alphabet.is_pow2:
        return decode_pow2(data, alphabet, offset)
    return decode_accumulate(data, alphabet, offset)
