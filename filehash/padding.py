"""
SHA-256 message padding.

Appends bit '1' (as a 0x80 byte), then zero bytes until the length is
56 mod 64, then the original message length in bits as a 64-bit
big-endian integer.
"""

from .constants import BLOCK_SIZE, LENGTH_OFFSET, MASK64


def padding_length(byte_count):
    """Number of 0x80/0x00 bytes needed before the 8-byte length field."""
    return (LENGTH_OFFSET - (byte_count + 1)) % BLOCK_SIZE + 1


def padding_for(byte_count):
    """Return the padding suffix for a message of byte_count bytes."""
    ml = (byte_count * 8) & MASK64  # Message length in bits

    padded = bytearray(padding_length(byte_count))
    padded[0] = 0x80
    padded.extend(ml.to_bytes(8, 'big'))
    return bytes(padded)


def pad_message(message):
    """Apply SHA-256 padding to a whole message. Returns padded bytes."""
    return bytes(message) + padding_for(len(message))
