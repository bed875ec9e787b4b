"""Tests for the base64 codec and its padding rules."""

import base64
import io
import random

import pytest

from basex.alphabet import InvalidCharacterError
from basex.b64 import (
    BASE64,
    PAD,
    STANDARD_ALPHABET,
    Base64Codec,
    b64decode,
    b64decode_str,
    b64encode,
    b64encode_str,
)


# ---------------------------------------------------------------------------
# Known-value tests (RFC 4648 section 10)
# ---------------------------------------------------------------------------


class TestBase64KnownValues:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (b"", ""),
            (b"f", "Zg=="),
            (b"fo", "Zm8="),
            (b"foo", "Zm9v"),
            (b"foob", "Zm9vYg=="),
            (b"fooba", "Zm9vYmE="),
            (b"foobar", "Zm9vYmFy"),
            (b"Man", "TWFu"),
            (b"\xff\xff\xff", "////"),
            (b"\x00", "AA=="),
        ],
    )
    def test_known_encode(self, raw, expected):
        assert b64encode(raw) == expected

    @pytest.mark.parametrize(
        "encoded, expected",
        [
            ("", b""),
            ("Zg==", b"f"),
            ("Zm8=", b"fo"),
            ("Zm9v", b"foo"),
            ("Zm9vYg==", b"foob"),
            ("Zm9vYmE=", b"fooba"),
            ("Zm9vYmFy", b"foobar"),
            ("TWFu", b"Man"),
        ],
    )
    def test_known_decode(self, encoded, expected):
        assert b64decode(encoded) == expected

    def test_text_helpers(self):
        assert b64encode_str("Man") == "TWFu"
        assert b64decode_str("TWFu") == "Man"


# ---------------------------------------------------------------------------
# Agreement with the standard library
# ---------------------------------------------------------------------------


class TestBase64Reference:
    def test_matches_stdlib_for_every_length(self):
        rng = random.Random(64)
        for length in range(0, 100):
            data = bytes(rng.randrange(256) for _ in range(length))
            expected = base64.b64encode(data).decode("ascii")
            assert b64encode(data) == expected
            assert b64decode(expected) == data

    def test_large_input_crosses_windows(self):
        data = bytes(range(256)) * 20
        expected = base64.b64encode(data).decode("ascii")
        assert b64encode(data) == expected
        assert b64decode(expected) == data


# ---------------------------------------------------------------------------
# Padding and trailing garbage
# ---------------------------------------------------------------------------


class TestBase64Padding:
    def test_padding_only_in_last_group(self):
        for length in range(1, 20):
            encoded = b64encode(b"x" * length)
            assert len(encoded) % 4 == 0
            assert PAD not in encoded[:-4]

    def test_partial_group_low_bits_are_zero(self):
        # 1 byte -> 12 bits of digits, the last 4 must be zero
        assert b64encode(b"\xff") == "/w=="
        # 2 bytes -> 18 bits of digits, the last 2 must be zero
        assert b64encode(b"\xff\xff") == "//8="

    def test_trailing_newline_ignored(self):
        assert b64decode("Zm9v\n") == b"foo"
        assert b64decode("Zg==\n") == b"f"
        assert b64decode("Zm8=\r\n") == b"fo"

    def test_only_garbage_decodes_to_nothing(self):
        assert b64decode("\n") == b""
        assert b64decode("Zm9") == b""

    def test_pad_in_middle_of_data_rejected(self):
        with pytest.raises(InvalidCharacterError):
            b64decode("Zg==Zm9v")

    def test_data_after_pad_rejected(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            b64decode("Zg=v")
        assert exc_info.value.position == 2

    def test_invalid_character(self):
        with pytest.raises(InvalidCharacterError, match="Invalid base64 character"):
            b64decode("Zm9*")


# ---------------------------------------------------------------------------
# Streaming
# ---------------------------------------------------------------------------


class TestBase64Streaming:
    def test_file_object_round_trip(self):
        data = bytes(range(256)) * 7 + b"tail"
        encoded = BASE64.encode(io.BytesIO(data))
        assert encoded == base64.b64encode(data).decode("ascii")
        assert BASE64.decode(io.BytesIO(encoded.encode("ascii"))) == data

    def test_stream_with_trailing_newline(self):
        data = bytes(range(200)) * 4
        encoded = base64.b64encode(data) + b"\n"
        assert BASE64.decode(io.BytesIO(encoded)) == data

    def test_text_stream(self):
        assert BASE64.decode(io.StringIO("Zm9vYmFy\n")) == b"foobar"


# ---------------------------------------------------------------------------
# Alphabet sanity
# ---------------------------------------------------------------------------


class TestAlphabet:
    def test_standard_alphabet(self):
        assert len(STANDARD_ALPHABET) == 64
        assert len(set(STANDARD_ALPHABET)) == 64
        assert PAD not in STANDARD_ALPHABET

    def test_group_sizes(self):
        assert BASE64.alphabet.bits == 6
        assert (BASE64.group_bytes, BASE64.group_chars) == (3, 4)

    def test_url_safe_variant(self):
        urlsafe = STANDARD_ALPHABET[:-2] + "-_"
        codec = Base64Codec(urlsafe)
        data = b"\xfb\xff\xfe"
        assert codec.encode(data) == base64.urlsafe_b64encode(data).decode("ascii")

    def test_rejects_wrong_radix(self):
        with pytest.raises(ValueError):
            Base64Codec(STANDARD_ALPHABET[:32])

    def test_rejects_pad_in_alphabet(self):
        with pytest.raises(ValueError):
            Base64Codec(STANDARD_ALPHABET[:-1] + PAD)
