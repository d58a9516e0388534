"""
Varpad — Basic Usage Example

Demonstrates padding a message to a size boundary with padding that
carries its own length, then reading that length back from either end.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from varpad import (
    padding_for,
    fill_with_padding,
    pad_leading,
    pad_trailing,
    decode_from_start,
    decode_from_end,
    strip_leading,
    seal,
    open_sealed,
    generate_key,
)


def hex_dump(data: bytes) -> str:
    return " ".join(f"{byte:02x}" for byte in data)


def main():
    print("=" * 50)
    print("  Varpad — Self-Describing Padding")
    print("=" * 50)

    # A buffer filled with padding describes its own length
    buffer = bytearray(10)
    fill_with_padding(buffer)
    print(f"\nPadding:  {hex_dump(buffer)}")

    message = bytes([0xAA, 0xBB, 0xCC, 0xDD, 0xEE])
    modulus = 4
    print(f"\nMessage of {len(message)} bytes, modulus {modulus}: "
          f"{padding_for(len(message), modulus)} bytes of padding")

    # Leading padding: the reader decodes from the front, even as bytes trickle in
    envelope = pad_leading(message, modulus)
    print(f"\nLeading envelope:  {hex_dump(envelope)}")
    padding, bytes_decoded, is_complete = decode_from_start(envelope)
    if is_complete:
        print(f"  Decoded padding amount {padding} "
              f"(length was encoded into {bytes_decoded} bytes)")
    print(f"  Message: {hex_dump(strip_leading(envelope))}")

    # Trailing padding: the reader decodes from the end of the complete envelope
    envelope = pad_trailing(message, modulus)
    print(f"\nTrailing envelope: {hex_dump(envelope)}")
    padding, bytes_decoded = decode_from_end(envelope)
    print(f"  Decoded padding amount {padding} "
          f"(length was encoded into {bytes_decoded} bytes)")

    # A large block needs several digit groups at each end
    envelope = pad_trailing(b"x" * 100, 300)
    print(f"\n200-byte block: head {hex_dump(envelope[100:103])} ... "
          f"tail {hex_dump(envelope[-3:])}")

    # Sealed: pad, then encrypt, so the ciphertext size hides the message size
    key = generate_key()
    for text in [b"hi", b"hello, world"]:
        sealed = seal(text, key)
        assert open_sealed(sealed, key) == text
        print(f"\nSealed {len(text):2d}-byte message -> {len(sealed)} bytes")


if __name__ == "__main__":
    main()
