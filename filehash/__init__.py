"""Streaming SHA-256 digests of files, with a pure-Python reference engine."""

__version__ = "0.1.0"

from .context import ContextState, Sha256Context
from .engines import DigestEngine, HashlibEngine, SoftwareEngine, available_engines, create_engine
from .errors import (
    AllocationFailure,
    ContextFinalizedError,
    HashError,
    ReadFailure,
    SourceUnavailable,
    UnknownEngineError,
)
from .hexenc import to_hex
from .reader import hash_bytes, hash_file, hash_file_async, hash_source, iter_chunks

__all__ = [
    "AllocationFailure",
    "ContextFinalizedError",
    "ContextState",
    "DigestEngine",
    "HashError",
    "HashlibEngine",
    "ReadFailure",
    "Sha256Context",
    "SoftwareEngine",
    "SourceUnavailable",
    "UnknownEngineError",
    "available_engines",
    "create_engine",
    "hash_bytes",
    "hash_file",
    "hash_file_async",
    "hash_source",
    "iter_chunks",
    "to_hex",
]
