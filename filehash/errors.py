"""
Error types raised while hashing.

Only the streaming reader classifies failures; the context and the
compression core never fail on well-formed input.
"""


class HashError(Exception):
    """Base class for failures that prevent a digest from being produced."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class SourceUnavailable(HashError):
    """The input could not be opened (missing file, permission denied, ...)."""


class ReadFailure(HashError):
    """An I/O error occurred after the source was opened."""


class AllocationFailure(HashError):
    """The working buffer could not be allocated."""


class ContextFinalizedError(RuntimeError):
    """A digest context was used after finalize()."""


class UnknownEngineError(ValueError):
    """No digest engine is registered under the requested name."""
