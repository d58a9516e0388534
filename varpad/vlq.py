"""
Variable-Length Quantities
Encode non-negative integers as 7-bit digit groups, most significant first.

Every byte carries 7 bits of the value. The high bit is a continuation flag:
set on every byte except the last one of the number.

Two byte orders are supported:
- Forward:  digits in natural order, read from the front until a byte with
            the high bit clear.
- Reversed: the same bytes back to front, anchored at the tail of a buffer
            and read from the last byte toward the front.

    >>> encode_forward(0x200000).hex()
    '81808000'
    >>> encode_reversed(0x200000).hex()
    '00808081'
"""

from dataclasses import dataclass
from typing import NamedTuple


DIGIT_BITS = 7
DIGIT_MASK = 0x7F
CONTINUATION_BIT = 0x80


class InsufficientCapacityError(ValueError):
    """The destination buffer is too small for what is being written."""


class TruncatedPaddingError(ValueError):
    """The buffer ends before the encoded length could be read."""


class InvalidPaddingError(ValueError):
    """The encoded padding length can not belong to a padding block."""


@dataclass(frozen=True)
class DecodeState:
    """Digits accumulated by an incomplete forward decode."""
    value: int = 0


class ForwardDecodeResult(NamedTuple):
    value: int
    bytes_decoded: int
    is_complete: bool

    @property
    def state(self) -> DecodeState | None:
        """State to resume from with the next chunk, or None once complete."""
        if self.is_complete:
            return None
        return DecodeState(self.value)


class ReverseDecodeResult(NamedTuple):
    value: int
    bytes_decoded: int


def digit_count(value: int) -> int:
    """Number of 7-bit groups needed for value (at least 1)."""
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value}")
    return max(1, (value.bit_length() + DIGIT_BITS - 1) // DIGIT_BITS)


def encode_forward(value: int) -> bytes:
    """
    Encode value with the most significant digit group first.

    Args:
        value: A non-negative integer.

    Returns:
        digit_count(value) bytes. Only the last one has the high bit clear.
    """
    count = digit_count(value)
    encoded = bytearray(count)
    for i in range(count - 1, -1, -1):
        encoded[i] = (value & DIGIT_MASK) | CONTINUATION_BIT
        value >>= DIGIT_BITS
    encoded[-1] &= DIGIT_MASK
    return bytes(encoded)


def encode_reversed(value: int) -> bytes:
    """Encode value as the byte-reverse of its forward encoding."""
    return encode_forward(value)[::-1]


def encode_forward_to(value: int, buffer: bytearray | memoryview, offset: int = 0) -> int:
    """Write the forward encoding at buffer[offset:]. Returns bytes written."""
    encoded = encode_forward(value)
    end = offset + len(encoded)
    if end > len(buffer):
        raise InsufficientCapacityError(
            f"Need {len(encoded)} bytes at offset {offset} to encode {value} "
            f"(buffer size is {len(buffer)})"
        )
    buffer[offset:end] = encoded
    return len(encoded)


def encode_reversed_to(value: int, buffer: bytearray | memoryview) -> int:
    """Write the reversed encoding at the tail of buffer. Returns bytes written."""
    encoded = encode_reversed(value)
    if len(encoded) > len(buffer):
        raise InsufficientCapacityError(
            f"Need {len(encoded)} bytes to encode {value} "
            f"(buffer size is {len(buffer)})"
        )
    buffer[len(buffer) - len(encoded):] = encoded
    return len(encoded)


def decode_forward(
    buffer: bytes | bytearray | memoryview, state: DecodeState | None = None
) -> ForwardDecodeResult:
    """
    Decode a forward encoding from the start of buffer.

    Decoding can be spread over several chunks of the same stream: when the
    chunk ends before the terminating byte, the result is incomplete and
    its `state` resumes the decode on the next chunk.

    Args:
        buffer: Bytes from the start of the encoding, or the continuation
                of a previous incomplete decode.
        state: The `state` of the previous incomplete result, if any.

    Returns:
        ForwardDecodeResult(value, bytes_decoded, is_complete). bytes_decoded
        counts bytes read from this buffer only.
    """
    value = state.value if state is not None else 0
    for index, byte in enumerate(buffer):
        value = (value << DIGIT_BITS) | (byte & DIGIT_MASK)
        if not byte & CONTINUATION_BIT:
            return ForwardDecodeResult(value, index + 1, True)
    return ForwardDecodeResult(value, len(buffer), False)


def decode_reversed(buffer: bytes | bytearray | memoryview) -> ReverseDecodeResult:
    """
    Decode a reversed encoding that ends at the last byte of buffer.

    The whole encoding must already be present. Walking backward from the
    end meets the digit groups most significant first.

    Raises:
        TruncatedPaddingError: If the buffer runs out before a byte with
            the high bit clear is found.
    """
    value = 0
    for count, index in enumerate(range(len(buffer) - 1, -1, -1), start=1):
        byte = buffer[index]
        value = (value << DIGIT_BITS) | (byte & DIGIT_MASK)
        if not byte & CONTINUATION_BIT:
            return ReverseDecodeResult(value, count)
    raise TruncatedPaddingError(
        f"Reached the start of a {len(buffer)} byte buffer "
        "without finding the end of the encoded length"
    )
