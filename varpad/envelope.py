"""
Envelopes
Round a message up to a size boundary with a self-describing padding block.

    trailing:  [ message | padding ]   stripped by reading from the end
    leading:   [ padding | message ]   stripped by reading from the front

Sealed envelopes pad the message before AES-256-GCM encryption, so the
ciphertext size only reveals the padded size.
"""

import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from varpad.padding import padding_for, encode_to, decode_from_start, decode_from_end
from varpad.vlq import TruncatedPaddingError, InvalidPaddingError


DEFAULT_BLOCK_MODULUS = 16
NONCE_SIZE = 12  # AES-256-GCM standard
KEY_SIZE = 32    # 256 bits


def _envelope_padding(message_length: int, modulus: int) -> int:
    # A zero-length block has no marker, so envelopes must always pad
    if modulus < 2:
        raise ValueError(f"Envelope modulus must be at least 2 (got {modulus})")
    return padding_for(message_length, modulus)


def _check_padding(padding: int, bytes_decoded: int, envelope_size: int):
    # A block is never shorter than the digit run its length was read from
    if padding < bytes_decoded:
        raise InvalidPaddingError(
            f"Padding of {padding} bytes can not hold its {bytes_decoded} byte length"
        )
    if padding > envelope_size:
        raise TruncatedPaddingError(
            f"Padding of {padding} bytes exceeds envelope size {envelope_size}"
        )


def pad_trailing(message: bytes, modulus: int) -> bytes:
    """
    Append padding so the envelope length is a multiple of modulus.

    Args:
        message: The raw bytes to pad.
        modulus: The size boundary to align to (at least 2).

    Returns:
        message followed by its padding block.
    """
    padding = _envelope_padding(len(message), modulus)
    envelope = bytearray(len(message) + padding)
    envelope[:len(message)] = message
    encode_to(padding, memoryview(envelope)[len(message):])
    return bytes(envelope)


def pad_leading(message: bytes, modulus: int) -> bytes:
    """Prepend padding so the envelope length is a multiple of modulus."""
    padding = _envelope_padding(len(message), modulus)
    envelope = bytearray(padding + len(message))
    encode_to(padding, envelope)
    envelope[padding:] = message
    return bytes(envelope)


def strip_trailing(envelope: bytes) -> bytes:
    """
    Remove trailing padding and return the original message.

    Raises:
        TruncatedPaddingError: If the padding length can't be read or is
            longer than the envelope.
        InvalidPaddingError: If the padding is shorter than its own length
            field, which no padding block can be.
    """
    padding, bytes_decoded = decode_from_end(envelope)
    _check_padding(padding, bytes_decoded, len(envelope))
    return bytes(envelope[:len(envelope) - padding])


def strip_leading(envelope: bytes) -> bytes:
    """
    Remove leading padding and return the original message.

    Raises:
        TruncatedPaddingError: If the padding length is incomplete or is
            longer than the envelope.
        InvalidPaddingError: If the padding is shorter than its own length
            field.
    """
    padding, bytes_decoded, is_complete = decode_from_start(envelope)
    if not is_complete:
        raise TruncatedPaddingError(
            f"Envelope of {len(envelope)} bytes ends inside the padding length"
        )
    _check_padding(padding, bytes_decoded, len(envelope))
    return bytes(envelope[padding:])


def generate_key() -> bytes:
    """Generate a random 256-bit key for sealed envelopes."""
    return AESGCM.generate_key(bit_length=KEY_SIZE * 8)


def seal(message: bytes, key: bytes, modulus: int = DEFAULT_BLOCK_MODULUS) -> bytes:
    """
    Pad a message to the modulus, then encrypt it with AES-256-GCM.

    Args:
        message: The plaintext bytes.
        key: A 32-byte key (see generate_key()).
        modulus: The size boundary the plaintext is padded to.

    Returns:
        nonce + ciphertext (the ciphertext includes the GCM tag).
    """
    nonce = os.urandom(NONCE_SIZE)
    ciphertext = AESGCM(key).encrypt(nonce, pad_trailing(message, modulus), None)
    return nonce + ciphertext


def open_sealed(sealed: bytes, key: bytes) -> bytes:
    """
    Decrypt a sealed envelope and strip its padding.

    Raises:
        cryptography.exceptions.InvalidTag: If the key is wrong or the
            envelope was tampered with.
    """
    nonce = sealed[:NONCE_SIZE]
    ciphertext = sealed[NONCE_SIZE:]
    padded = AESGCM(key).decrypt(nonce, ciphertext, None)
    return strip_trailing(padded)
