"""
Runtime configuration for the filehash command line.

Values come from the environment (optionally a .env file). The hashing
functions themselves never read the environment; they take explicit
arguments and only the CLI consults this module.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_CHUNK_SIZE, MAX_CHUNK_SIZE
from .engines import DEFAULT_ENGINE, available_engines
from .logger import VALID_LOG_LEVELS


class HashConfig(BaseModel):
    """Engine, chunk size and log level used by the CLI."""

    ENGINE: str = Field(
        DEFAULT_ENGINE,
        description="Digest engine name (software or hashlib)",
    )

    CHUNK_SIZE: int = Field(
        DEFAULT_CHUNK_SIZE,
        description="Bytes read per chunk; bounds peak memory per file",
    )

    LOG_LEVEL: str = Field(
        "INFO",
        description="Logging level for the filehash logger",
    )

    @field_validator("ENGINE")
    @classmethod
    def validate_engine(cls, v: str) -> str:
        allowed = available_engines()
        if v not in allowed:
            raise ValueError(
                f"Unsupported ENGINE '{v}'. "
                f"Allowed values: {allowed}"
            )
        return v

    @field_validator("CHUNK_SIZE")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("CHUNK_SIZE must be positive")
        if v > MAX_CHUNK_SIZE:
            raise ValueError(f"CHUNK_SIZE must not exceed {MAX_CHUNK_SIZE} bytes")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Unsupported LOG_LEVEL '{v}'. "
                f"Allowed values: {VALID_LOG_LEVELS}"
            )
        return v

    @classmethod
    def from_env(cls, dotenv_path=None) -> "HashConfig":
        """
        Load configuration from FILEHASH_* environment variables.

        A .env file is read first; variables already set in the
        environment take precedence.
        """
        load_dotenv(dotenv_path)

        return cls(
            ENGINE=os.getenv("FILEHASH_ENGINE", DEFAULT_ENGINE),
            CHUNK_SIZE=os.getenv("FILEHASH_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE)),
            LOG_LEVEL=os.getenv("FILEHASH_LOG_LEVEL", "INFO"),
        )
