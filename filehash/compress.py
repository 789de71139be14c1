"""
SHA-256 compression function.

Transforms an 8-word state and one 64-byte block into the next state:
- Message schedule: 16 big-endian input words expanded to 64
- Compression: 64 rounds over the working variables a..h
- Feed-forward: working variables added back into the state (mod 2^32)

No I/O, no shared mutable state.
"""

import struct

from .constants import BLOCK_SIZE, K, MASK32

_BLOCK_WORDS = struct.Struct('>16I')


def rotr(x, n):
    """Right rotate 32-bit value by n bits."""
    return ((x >> n) | (x << (32 - n))) & MASK32


def shr(x, n):
    """Right shift 32-bit value by n bits."""
    return x >> n


def ch(x, y, z):
    """Ch(x,y,z) = (x AND y) XOR (NOT x AND z)."""
    return (x & y) ^ (~x & MASK32 & z)


def maj(x, y, z):
    """Maj(x,y,z) = (x AND y) XOR (x AND z) XOR (y AND z)."""
    return (x & y) ^ (x & z) ^ (y & z)


def big_sigma0(x):
    """Σ0(x) = ROTR(x,2) XOR ROTR(x,13) XOR ROTR(x,22)."""
    return rotr(x, 2) ^ rotr(x, 13) ^ rotr(x, 22)


def big_sigma1(x):
    """Σ1(x) = ROTR(x,6) XOR ROTR(x,11) XOR ROTR(x,25)."""
    return rotr(x, 6) ^ rotr(x, 11) ^ rotr(x, 25)


def small_sigma0(x):
    """σ0(x) = ROTR(x,7) XOR ROTR(x,18) XOR SHR(x,3)."""
    return rotr(x, 7) ^ rotr(x, 18) ^ shr(x, 3)


def small_sigma1(x):
    """σ1(x) = ROTR(x,17) XOR ROTR(x,19) XOR SHR(x,10)."""
    return rotr(x, 17) ^ rotr(x, 19) ^ shr(x, 10)


def message_schedule(block):
    """Expand one 64-byte block into the 64-word message schedule W[0..63]."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Block must be {BLOCK_SIZE} bytes, got {len(block)}")

    W = list(_BLOCK_WORDS.unpack(block))

    # W[16..63] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    for i in range(16, 64):
        s0 = small_sigma0(W[i-15])
        s1 = small_sigma1(W[i-2])
        W.append((W[i-16] + s0 + W[i-7] + s1) & MASK32)

    return W


def compress(state, block):
    """Run one block through the compression function and return the new state."""
    W = message_schedule(block)

    a, b, c, d, e, f, g, h = state

    for i in range(64):
        t1 = (h + big_sigma1(e) + ch(e, f, g) + K[i] + W[i]) & MASK32
        t2 = (big_sigma0(a) + maj(a, b, c)) & MASK32

        h = g
        g = f
        f = e
        e = (d + t1) & MASK32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK32

    return (
        (state[0] + a) & MASK32,
        (state[1] + b) & MASK32,
        (state[2] + c) & MASK32,
        (state[3] + d) & MASK32,
        (state[4] + e) & MASK32,
        (state[5] + f) & MASK32,
        (state[6] + g) & MASK32,
        (state[7] + h) & MASK32,
    )
