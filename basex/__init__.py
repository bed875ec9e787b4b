"""basex - Encode bytes as text in any radix from 2 to 256, and back.

Ships base64 (RFC 4648, padded) and base58 (Bitcoin) codecs on top of one
generic converter: bit packing for power-of-two radices, repeated
accumulation for the rest. Every codec works on in-memory buffers as well
as on read-once streams of unknown length.
"""

__version__ = "0.1.0"

from basex.alphabet import (  # noqa: F401
    Alphabet,
    BasexError,
    InvalidAlphabetError,
    InvalidCharacterError,
    build_decode_table,
)
from basex.codec import Codec  # noqa: F401
from basex.streaming import StreamingCodec  # noqa: F401
from basex.b64 import (  # noqa: F401
    BASE64,
    Base64Codec,
    b64encode,
    b64decode,
    b64encode_str,
    b64decode_str,
)
from basex.b58 import (  # noqa: F401
    BASE58,
    Base58Codec,
    b58encode,
    b58decode,
    b58encode_str,
    b58decode_str,
)
from basex.cli import main  # noqa: F401
