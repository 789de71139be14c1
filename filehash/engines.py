"""
Digest engines.

Every engine exposes the same two calls:

    engine.update(data)
    digest = engine.finalize()   # 32 bytes, once

Engines:
- software: the bundled pure-Python implementation (portable reference)
- hashlib:  OpenSSL-backed hashlib.sha256

Engines are picked by name (see create_engine), normally from HashConfig.
"""

import hashlib

from .context import Sha256Context
from .errors import ContextFinalizedError, UnknownEngineError
from .logger import get_logger

logger = get_logger(__name__)


class DigestEngine:
    """Interface shared by all SHA-256 engines."""

    name = None

    def update(self, data):
        raise NotImplementedError

    def finalize(self):
        raise NotImplementedError


class SoftwareEngine(DigestEngine):
    """Engine backed by the pure-Python Sha256Context."""

    name = "software"

    def __init__(self):
        self._ctx = Sha256Context()

    def update(self, data):
        self._ctx.update(data)

    def finalize(self):
        return self._ctx.finalize()


class HashlibEngine(DigestEngine):
    """Engine backed by hashlib (OpenSSL, hardware accelerated where available)."""

    name = "hashlib"

    def __init__(self):
        self._hasher = hashlib.sha256()
        self._finalized = False

    def update(self, data):
        if self._finalized:
            raise ContextFinalizedError("Cannot update: context already finalized")
        self._hasher.update(data)

    def finalize(self):
        if self._finalized:
            raise ContextFinalizedError("Cannot finalize: context already finalized")
        self._finalized = True
        return self._hasher.digest()


ENGINES = {
    SoftwareEngine.name: SoftwareEngine,
    HashlibEngine.name: HashlibEngine,
}

DEFAULT_ENGINE = SoftwareEngine.name


def available_engines():
    """Return the registered engine names, sorted."""
    return sorted(ENGINES)


def create_engine(name=DEFAULT_ENGINE):
    """Create a fresh engine by name."""
    try:
        engine_cls = ENGINES[name]
    except KeyError:
        raise UnknownEngineError(
            f"Unknown engine '{name}'. Available: {', '.join(available_engines())}"
        ) from None
    logger.debug(f"Using {engine_cls.name} engine")
    return engine_cls()
