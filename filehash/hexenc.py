"""Render digests as lowercase hex strings."""

from .constants import DIGEST_SIZE


def to_hex(digest):
    """Format a 32-byte digest as a 64-character lowercase hex string."""
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    return ''.join(f'{b:02x}' for b in digest)
