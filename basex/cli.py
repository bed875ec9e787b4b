"""Command-line interface for basex.

Usage: basex [-a ALGO] [-d] [FILE]

Encode or decode FILE, or standard input, to standard output. ALGO is
``b64`` (RFC 4648, the default), ``b58`` (Bitcoin), or the digits of a
custom alphabet.

Exit codes:
    0 - Success
    1 - File not found or unreadable, invalid algorithm, malformed option,
        or input that cannot be decoded
"""

import argparse
import logging
import sys
from pathlib import Path

from basex.alphabet import MIN_RADIX, BasexError, InvalidAlphabetError
from basex.b58 import BASE58
from basex.b64 import BASE64
from basex.codec import Codec
from basex.streaming import StreamingCodec

logger = logging.getLogger(__name__)

PROG = "basex"
DEFAULT_ALGORITHM = "b64"
CODECS = {"b64": BASE64, "b58": BASE58}


def select_codec(algo: str) -> Codec:
    """Return the built-in codec named ``algo`` or a codec over its digits."""
    codec = CODECS.get(algo)
    if codec is not None:
        return codec
    if len(algo) < MIN_RADIX:
        raise InvalidAlphabetError(f"Alphabet must have at least {MIN_RADIX} digits")
    return Codec(algo)


def _resolve_codec(args) -> Codec:
    """Resolve the -a argument, exiting with code 1 on failure."""
    try:
        codec = select_codec(args.algorithm)
    except InvalidAlphabetError as exc:
        logger.debug("rejected algorithm %r: %s", args.algorithm, exc)
        print(f"{PROG}: {args.algorithm}: Invalid algorithm", file=sys.stderr)
        sys.exit(1)
    logger.debug("using %r", codec)
    return codec


def _open_input(path):
    """Open FILE in binary mode, or standard input for None and '-'."""
    if path is None or path == "-":
        return getattr(sys.stdin, "buffer", sys.stdin)

    if not Path(path).is_file():
        print(f"{PROG}: {path}: No such file", file=sys.stderr)
        sys.exit(1)
    try:
        return open(path, "rb")
    except PermissionError:
        print(f"{PROG}: {path}: Permission denied", file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(f"{PROG}: {path}: {exc.strerror or exc}", file=sys.stderr)
        sys.exit(1)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def cmd_encode(args) -> int:
    """Encode the input and stream the text to stdout."""
    codec = _resolve_codec(args)
    stream = _open_input(args.file)
    try:
        for chunk in StreamingCodec(codec).encode(stream):
            sys.stdout.write(chunk)
    finally:
        if args.file not in (None, "-"):
            stream.close()
    sys.stdout.flush()
    return 0


def cmd_decode(args) -> int:
    """Decode the input and stream the bytes to stdout."""
    codec = _resolve_codec(args)
    stream = _open_input(args.file)
    out = sys.stdout.buffer
    try:
        for chunk in StreamingCodec(codec).decode(stream):
            out.write(chunk)
    except BasexError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return 1
    finally:
        if args.file not in (None, "-"):
            stream.close()
    out.flush()
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with code 1 on malformed options."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(
            1,
            f"{self.prog}: {message}\n"
            f"Try '{self.prog} --help' for more information.\n",
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = _ArgumentParser(
        prog=PROG,
        description=(
            "Basex encode or decode FILE, or standard input, to standard output. "
            "With no FILE, or when FILE is -, read standard input."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__import__('basex').__version__}",
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        default=DEFAULT_ALGORITHM,
        help=(
            "algorithm: b64 (RFC 4648), b58 (Bitcoin), or codec digits for the "
            f"number base conversion (default: {DEFAULT_ALGORITHM})"
        ),
    )
    parser.add_argument(
        "-d", "--decode", action="store_true", help="decode data"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug output to stderr"
    )
    parser.add_argument("file", nargs="?", default=None, metavar="FILE")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            stream=sys.stderr,
        )
    if args.decode:
        return cmd_decode(args)
    return cmd_encode(args)
