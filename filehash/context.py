"""
Incremental SHA-256 digest context.

Holds the running state, a partial-block buffer and the total input
length. Feed data with update() in any number of calls, then call
finalize() exactly once to get the 32-byte digest:

    ctx = Sha256Context()
    ctx.update(b"ab")
    ctx.update(b"c")
    digest = ctx.finalize()
"""

import enum
import struct

from .compress import compress
from .constants import BLOCK_SIZE, DIGEST_SIZE, H_INIT
from .errors import ContextFinalizedError
from .hexenc import to_hex
from .padding import padding_for

_STATE_WORDS = struct.Struct('>8I')


class ContextState(enum.Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


class Sha256Context:
    """Pure-software SHA-256 with the same update/finalize shape as hashlib."""

    name = "sha256"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data=None):
        self._h = H_INIT
        self._pending = bytearray()
        self._bit_count = 0
        self._state = ContextState.EMPTY
        if data is not None:
            self.update(data)

    @property
    def state(self):
        return self._state

    @property
    def bit_count(self):
        """Total number of input bits absorbed so far."""
        return self._bit_count

    @property
    def pending(self):
        """Bytes waiting for a full block (always fewer than 64)."""
        return bytes(self._pending)

    def _check_open(self, operation):
        if self._state is ContextState.FINALIZED:
            raise ContextFinalizedError(f"Cannot {operation}: context already finalized")

    def update(self, data):
        """Absorb data (bytes, bytearray or memoryview)."""
        self._check_open("update")
        self._absorb(memoryview(data).cast('B'))
        self._state = ContextState.ACCUMULATING

    def _absorb(self, view):
        length = len(view)
        self._bit_count += length * 8

        offset = 0
        h = self._h

        # Top up a partially filled block first
        if self._pending:
            need = BLOCK_SIZE - len(self._pending)
            if length < need:
                self._pending += view
                return
            self._pending += view[:need]
            h = compress(h, self._pending)
            self._pending.clear()
            offset = need

        # Whole blocks straight from the input
        while length - offset >= BLOCK_SIZE:
            h = compress(h, view[offset:offset + BLOCK_SIZE])
            offset += BLOCK_SIZE

        self._h = h
        self._pending += view[offset:]

    def finalize(self):
        """Pad, process the final block(s) and return the 32-byte digest."""
        self._check_open("finalize")
        self._absorb(memoryview(padding_for(self._bit_count // 8)))
        assert not self._pending, "padding must end on a block boundary"
        self._state = ContextState.FINALIZED
        return _STATE_WORDS.pack(*self._h)

    def hexdigest(self):
        """Finalize and return the digest as a lowercase hex string."""
        return to_hex(self.finalize())

    def __repr__(self):
        return (f"<{type(self).__name__} state={self._state.value} "
                f"bits={self._bit_count} pending={len(self._pending)}>")
