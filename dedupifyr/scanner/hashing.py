"""
Hashing module for the scanner package.

The digest of a LocalImage is a cheap pre-check, not the authoritative
similarity measure, so only a prefix of each file is hashed.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..config import DIGEST_PREFIX_DIVISOR


@runtime_checkable
class HashProvider(Protocol):
    """Deterministic digest of a byte string."""

    def digest(self, data: bytes) -> str:
        ...


class Sha256HashProvider:
    """HashProvider backed by hashlib (sha256 unless told otherwise)."""

    def __init__(self, algorithm: str = 'sha256'):
        hashlib.new(algorithm)  # fail fast on unknown algorithms
        self.algorithm = algorithm

    def digest(self, data: bytes) -> str:
        hasher = hashlib.new(self.algorithm)
        hasher.update(data)
        return hasher.hexdigest()


def prefix_length(file_size: int) -> int:
    """Number of leading bytes that feed the digest."""
    return file_size // DIGEST_PREFIX_DIVISOR


def calculate_prefix_digest(filepath: str | Path, provider: HashProvider) -> str:
    """
    Digest the first 1/16th of a file.

    Args:
        filepath: Path to the file
        provider: HashProvider used for the digest

    Returns:
        Digest string from the provider

    Raises:
        OSError: If the file cannot be read
    """
    size = os.path.getsize(filepath)
    with open(filepath, 'rb') as f:
        data = f.read(prefix_length(size))
    return provider.digest(data)


__all__ = [
    'HashProvider',
    'Sha256HashProvider',
    'prefix_length',
    'calculate_prefix_digest',
]
