"""
Tests for the variable-length integer codec.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from varpad.vlq import (
    digit_count,
    encode_forward,
    encode_reversed,
    encode_forward_to,
    encode_reversed_to,
    decode_forward,
    decode_reversed,
    DecodeState,
    InsufficientCapacityError,
    TruncatedPaddingError,
)


def test_digit_count():
    """Test digit group counts at the 7-bit boundaries."""
    print("Testing digit counts...", end=" ")
    assert digit_count(0) == 1
    assert digit_count(1) == 1
    assert digit_count(0x7F) == 1
    assert digit_count(0x80) == 2
    assert digit_count(0x3FFF) == 2
    assert digit_count(0x4000) == 3
    assert digit_count(0x200000) == 4
    assert digit_count(0xFFFFFFFF) == 5
    print("PASS")


def test_encode_forward():
    """Test forward encodings of known values."""
    print("Testing forward encoding...", end=" ")
    assert encode_forward(0) == b"\x00"
    assert encode_forward(1) == b"\x01"
    assert encode_forward(0x7F) == b"\x7f"
    assert encode_forward(0x80) == b"\x81\x00"
    assert encode_forward(0xFF) == b"\x81\x7f"
    assert encode_forward(0x3FFF) == b"\xff\x7f"
    assert encode_forward(0x4000) == b"\x81\x80\x00"
    assert encode_forward(0x200000) == b"\x81\x80\x80\x00"
    assert encode_forward(1234567890) == b"\x84\xcc\xd8\x85\x52"
    print("PASS")


def test_encode_reversed():
    """Test that the reversed encoding is the forward one back to front."""
    print("Testing reversed encoding...", end=" ")
    for value in [0, 1, 0x7F, 0x80, 0x4000, 0x200000, 0xFFFFFFFF]:
        assert encode_reversed(value) == encode_forward(value)[::-1]
    assert encode_reversed(0x80) == b"\x00\x81"
    print("PASS")


def test_negative_rejected():
    """Test that negative values can't be encoded."""
    print("Testing negative values rejected...", end=" ")
    try:
        encode_forward(-1)
        assert False, "Should have raised ValueError"
    except ValueError:
        pass
    print("PASS")


def test_encode_to_buffers():
    """Test writing encodings into caller-owned buffers."""
    print("Testing encode into buffers...", end=" ")
    buffer = bytearray(b"\xaa" * 8)
    assert encode_forward_to(0x4000, buffer, offset=1) == 3
    assert buffer == bytearray(b"\xaa\x81\x80\x00\xaa\xaa\xaa\xaa")

    assert encode_reversed_to(0x4000, buffer) == 3
    assert buffer == bytearray(b"\xaa\x81\x80\x00\xaa\x00\x80\x81")
    print("PASS")


def test_encode_to_capacity():
    """Test that a short buffer is rejected without being written."""
    print("Testing encode capacity guard...", end=" ")
    buffer = bytearray(b"\xaa\xaa")
    for encoder in [encode_forward_to, encode_reversed_to]:
        try:
            encoder(0x4000, buffer)
            assert False, "Should have raised InsufficientCapacityError"
        except InsufficientCapacityError:
            pass
        assert buffer == bytearray(b"\xaa\xaa")
    print("PASS")


def test_decode_forward():
    """Test forward decoding stops at the terminating byte."""
    print("Testing forward decoding...", end=" ")
    for value in [0, 1, 0x7F, 0x80, 0x3FFF, 0x4000, 0x200000, 0xFFFFFFFF]:
        encoded = encode_forward(value)
        result = decode_forward(encoded + b"\x99\x01\x02")
        assert result.value == value
        assert result.bytes_decoded == len(encoded)
        assert result.is_complete
        assert result.state is None
    print("PASS")


def test_decode_forward_incomplete():
    """Test that running out of input is incomplete, not an error."""
    print("Testing incomplete forward decoding...", end=" ")
    value, bytes_decoded, is_complete = decode_forward(b"\x81\x80")
    assert not is_complete
    assert bytes_decoded == 2

    value, bytes_decoded, is_complete = decode_forward(b"")
    assert (value, bytes_decoded, is_complete) == (0, 0, False)
    print("PASS")


def test_decode_forward_progressive():
    """Test resuming a forward decode one byte at a time."""
    print("Testing progressive forward decoding...", end=" ")
    encoded = encode_forward(1234567890)
    state = None
    for i, byte in enumerate(encoded):
        result = decode_forward(bytes([byte]), state)
        assert result.bytes_decoded == 1
        assert result.is_complete == (i == len(encoded) - 1)
        state = result.state
    assert result.value == 1234567890
    assert state is None

    resumed = decode_forward(b"\x00", DecodeState(1))
    assert resumed.value == 0x80
    print("PASS")


def test_decode_reversed():
    """Test reversed decoding from the end of a buffer."""
    print("Testing reversed decoding...", end=" ")
    for value in [0, 1, 0x7F, 0x80, 0x3FFF, 0x4000, 0x200000, 0xFFFFFFFF]:
        encoded = encode_reversed(value)
        value_out, bytes_decoded = decode_reversed(b"\x99\x81" + encoded)
        assert value_out == value
        assert bytes_decoded == len(encoded)
    print("PASS")


def test_decode_reversed_truncated():
    """Test that reversed decoding fails when the buffer runs out."""
    print("Testing truncated reversed decoding...", end=" ")
    for buffer in [b"", b"\x81", b"\x80\x81"]:
        try:
            decode_reversed(buffer)
            assert False, f"Should have raised for {buffer!r}"
        except TruncatedPaddingError:
            pass
    print("PASS")


def main():
    print("=" * 50)
    print("  Varpad — VLQ Tests")
    print("=" * 50)
    print()

    tests = [
        test_digit_count,
        test_encode_forward,
        test_encode_reversed,
        test_negative_rejected,
        test_encode_to_buffers,
        test_encode_to_capacity,
        test_decode_forward,
        test_decode_forward_incomplete,
        test_decode_forward_progressive,
        test_decode_reversed,
        test_decode_reversed_truncated,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
