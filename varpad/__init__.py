"""
Varpad — Self-Describing Padding
Padding that embeds its own length, readable from either end.

Varpad provides two layers:
1. VLQ — variable-length integers in forward and reversed byte order
2. Padding — blocks of N bytes that encode N, plus message envelopes

A reader can recover the padding length from the front of a block
(progressively, as bytes arrive) or from the back (once it is complete).

Usage:
    from varpad import padding_for, pad_trailing, strip_trailing
    envelope = pad_trailing(b"12345", 4)   # b"12345\\x03\\x03\\x03"
    strip_trailing(envelope)                # b"12345"
"""

from varpad.vlq import (
    InsufficientCapacityError,
    TruncatedPaddingError,
    InvalidPaddingError,
    DecodeState,
    ForwardDecodeResult,
    ReverseDecodeResult,
)
from varpad.padding import (
    padding_for,
    encode,
    encode_to,
    fill_with_padding,
    decode_from_start,
    decode_from_end,
)
from varpad.envelope import (
    pad_trailing,
    pad_leading,
    strip_trailing,
    strip_leading,
    seal,
    open_sealed,
    generate_key,
)

__version__ = "0.1.0"
__all__ = [
    "InsufficientCapacityError",
    "TruncatedPaddingError",
    "InvalidPaddingError",
    "DecodeState",
    "ForwardDecodeResult",
    "ReverseDecodeResult",
    "padding_for",
    "encode",
    "encode_to",
    "fill_with_padding",
    "decode_from_start",
    "decode_from_end",
    "pad_trailing",
    "pad_leading",
    "strip_trailing",
    "strip_leading",
    "seal",
    "open_sealed",
    "generate_key",
]
