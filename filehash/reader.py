"""
Streaming SHA-256 of files and file-like sources.

Reads the source in fixed-size chunks into one reusable buffer and feeds
each chunk to a digest engine, so peak memory is one chunk no matter how
large the file is.

Usage:
    from filehash import hash_file
    hash_file("big.iso")                      # software engine, 64 KiB chunks
    hash_file("big.iso", engine="hashlib")
    hash_file("big.iso", chunk_size=1 << 20)
"""

import asyncio

from .constants import DEFAULT_CHUNK_SIZE
from .engines import DEFAULT_ENGINE, DigestEngine, create_engine
from .errors import AllocationFailure, HashError, ReadFailure, SourceUnavailable
from .hexenc import to_hex
from .logger import get_logger

logger = get_logger(__name__)


def _resolve_engine(engine):
    if isinstance(engine, DigestEngine):
        return engine
    return create_engine(engine if engine is not None else DEFAULT_ENGINE)


def _check_chunk_size(chunk_size):
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")


def _would_block(source):
    return ReadFailure("Source returned no data before end of input",
                       path=getattr(source, "name", None))


def iter_chunks(source, chunk_size=DEFAULT_CHUNK_SIZE):
    """
    Yield successive chunks of a binary source as memoryviews.

    The views share one buffer and are only valid until the next chunk
    is requested. Sources without readinto() fall back to read().
    A source that reports no data available (None) is a ReadFailure,
    only an empty read ends the stream.
    """
    _check_chunk_size(chunk_size)

    readinto = getattr(source, "readinto", None)
    if readinto is None:
        while True:
            chunk = source.read(chunk_size)
            if chunk is None:
                raise _would_block(source)
            if not chunk:
                return
            yield memoryview(chunk)

    try:
        buffer = bytearray(chunk_size)
    except (MemoryError, OverflowError) as exc:
        raise AllocationFailure(f"Cannot allocate {chunk_size} byte read buffer") from exc

    view = memoryview(buffer)
    while True:
        n = readinto(buffer)
        if n is None:
            raise _would_block(source)
        if n == 0:
            return
        yield view[:n]


def hash_source(source, engine=None, chunk_size=DEFAULT_CHUNK_SIZE):
    """Hash a binary file-like object chunk by chunk and return the 32-byte digest."""
    engine = _resolve_engine(engine)

    total = 0
    try:
        for chunk in iter_chunks(source, chunk_size):
            engine.update(chunk)
            total += len(chunk)
    except OSError as exc:
        raise ReadFailure(f"Read failed after {total} bytes: {exc}",
                          path=getattr(source, "name", None)) from exc

    logger.debug(f"Hashed {total} bytes")
    return engine.finalize()


def hash_file(path, engine=DEFAULT_ENGINE, chunk_size=DEFAULT_CHUNK_SIZE):
    """Return the SHA-256 of the file at path as a 64-character lowercase hex string."""
    _check_chunk_size(chunk_size)
    engine = _resolve_engine(engine)

    logger.debug(f"Opening {path}")
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise SourceUnavailable(f"Cannot open {path}: {exc.strerror or exc}", path=path) from exc

    with f:
        try:
            digest = hash_source(f, engine, chunk_size)
        except HashError as exc:
            exc.path = path
            raise

    return to_hex(digest)


def hash_bytes(data, engine=DEFAULT_ENGINE):
    """Return the SHA-256 of in-memory data as a hex string."""
    engine = _resolve_engine(engine)
    engine.update(data)
    return to_hex(engine.finalize())


async def hash_file_async(path, engine=DEFAULT_ENGINE, chunk_size=DEFAULT_CHUNK_SIZE):
    """Run hash_file on a worker thread so the event loop is not blocked."""
    return await asyncio.to_thread(hash_file, path, engine, chunk_size)
