"""
Self-Describing Padding
Padding blocks that carry their own length.

A block of N bytes encodes the number N, and can be read from either end:

    [ forward digits | filler ... filler | reversed digits minus the first ]

The filler is the last byte of the forward encoding. It both terminates
the forward digits and starts the reversed digits, so a reader walking
backward from the end sees the same digit run a reader at the front sees.

Blocks up to 127 bytes are simply N copies of the byte N.
"""

from varpad.vlq import (
    InsufficientCapacityError,
    ForwardDecodeResult,
    ReverseDecodeResult,
    DecodeState,
    encode_forward,
    decode_forward,
    decode_reversed,
)


def padding_for(length: int, modulus: int) -> int:
    """
    Calculate the padding that rounds length up to a multiple of modulus.

    A modulus below 2 disables padding and gives 0. An already aligned
    length gets a full extra modulus, so a padding block is always present.

    Args:
        length: Size of the content to be padded.
        modulus: The size boundary to align to.

    Returns:
        Number of padding bytes (always >= 1 when modulus >= 2).
    """
    if length < 0:
        raise ValueError(f"Length cannot be negative (got {length})")
    if modulus < 2:
        return 0
    return modulus - (length % modulus)


def encode_to(value: int, buffer: bytearray | memoryview) -> int:
    """
    Write a padding block of value bytes at the start of buffer.

    Only the first value bytes are touched. A value of 0 writes nothing,
    which leaves no length marker for a reader to find.

    Args:
        value: Padding size, which is also the number encoded.
        buffer: A writable buffer (bytearray or memoryview) of at least
                value bytes.

    Returns:
        Number of bytes written.

    Raises:
        InsufficientCapacityError: If buffer is shorter than value. Nothing
            is written in that case.
    """
    if value < 0:
        raise ValueError(f"Padding cannot be negative (got {value})")
    if len(buffer) < value:
        raise InsufficientCapacityError(
            f"Not enough bytes in buffer to store {value} padding bytes "
            f"(buffer size is {len(buffer)})"
        )
    if value == 0:
        return 0

    head = encode_forward(value)
    count = len(head)
    filler = head[-1]
    tail = head[-2::-1]  # reversed encoding without its first byte (== filler)
    middle = max(0, value - 2 * count + 1)

    buffer[:count] = head
    buffer[count:count + middle] = bytes([filler]) * middle
    buffer[value - len(tail):value] = tail
    return value


def encode(value: int) -> bytes:
    """Return a new padding block of value bytes."""
    block = bytearray(value)
    encode_to(value, block)
    return bytes(block)


def fill_with_padding(buffer: bytearray | memoryview) -> int:
    """Fill the whole buffer with a padding block of its own length."""
    return encode_to(len(buffer), buffer)


def decode_from_start(
    buffer: bytes | bytearray | memoryview, state: DecodeState | None = None
) -> ForwardDecodeResult:
    """
    Read the padding length from the front of a block.

    Only the leading digit run is needed, so a prefix of the block is
    enough. When the prefix ends inside the digit run the result is
    incomplete; pass its `state` along with the next bytes to continue.
    """
    return decode_forward(buffer, state)


def decode_from_end(buffer: bytes | bytearray | memoryview) -> ReverseDecodeResult:
    """
    Read the padding length from the back of a block.

    Unlike decode_from_start(), this needs the entire trailing digit run,
    ending at the last byte of buffer.

    Raises:
        TruncatedPaddingError: If buffer is shorter than the digit run.
    """
    return decode_reversed(buffer)
