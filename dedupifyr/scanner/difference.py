"""
Similarity calculators for the scanner package.

A DifferenceCalculator scores two images from 0.0 (nothing alike) to 1.0
(identical). Scores must be symmetric and an image compared with itself
must score 1.0.

Two calculators are provided:
- PixelDifferenceCalculator: fraction of matching pixels in a 16x16
  greyscale reduction (default)
- PerceptualHashDifferenceCalculator: Hamming similarity of pHashes
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from ..config import PHASH_SIZE, PIXEL_SAMPLE_SIZE, PIXEL_TOLERANCE
from .dependencies import Image, imagehash, np, _logger

T_contra = TypeVar('T_contra', contravariant=True)


@runtime_checkable
class DifferenceCalculator(Protocol[T_contra]):
    """Symmetric, reflexive similarity score in [0, 1]."""

    def similarity(self, a: T_contra, b: T_contra) -> float:
        ...


class _ReductionCache:
    """Thread-safe memo of per-path reductions for one calculator."""

    def __init__(self, reduce: Callable[[str], Any]):
        self._reduce = reduce
        self._values: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Any:
        with self._lock:
            if path in self._values:
                return self._values[path]
        # Decode outside the lock so workers don't serialize on I/O
        value = self._reduce(path)
        with self._lock:
            return self._values.setdefault(path, value)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()


def _open_for_reduction(path: str):
    img = Image.open(path)
    img.load()  # detect truncated/corrupt images here rather than mid-resize
    return img


class PixelDifferenceCalculator:
    """
    Compare images pixel by pixel after shrinking them.

    Both images are converted to greyscale and resized to
    ``sample_size`` x ``sample_size``. Similarity is the fraction of pixels
    whose brightness differs by no more than ``tolerance``.
    """

    def __init__(self, sample_size: int = PIXEL_SAMPLE_SIZE, tolerance: int = PIXEL_TOLERANCE):
        self.sample_size = sample_size
        self.tolerance = tolerance
        self._cache = _ReductionCache(self._reduce)

    def _reduce(self, path: str):
        with _open_for_reduction(path) as img:
            grey = img.convert('L').resize(
                (self.sample_size, self.sample_size),
                Image.BILINEAR,
            )
            return np.asarray(grey, dtype=np.int16)

    def similarity(self, a: str | Path, b: str | Path) -> float:
        a, b = str(a), str(b)
        if a == b:
            return 1.0
        pixels_a = self._cache.get(a)
        pixels_b = self._cache.get(b)
        matching = np.abs(pixels_a - pixels_b) <= self.tolerance
        return float(np.count_nonzero(matching)) / matching.size

    def clear(self) -> None:
        self._cache.clear()


class PerceptualHashDifferenceCalculator:
    """
    Compare images by perceptual hash.

    Similarity is ``1 - hamming_distance / hash_bits``, so identical hashes
    score 1.0.
    """

    def __init__(self, hash_size: int = PHASH_SIZE):
        self.hash_size = hash_size
        self._cache = _ReductionCache(self._reduce)

    def _reduce(self, path: str):
        with _open_for_reduction(path) as img:
            if img.mode not in ('RGB', 'L'):
                img = img.convert('RGB')
            return imagehash.phash(img, hash_size=self.hash_size)

    def similarity(self, a: str | Path, b: str | Path) -> float:
        a, b = str(a), str(b)
        if a == b:
            return 1.0
        hash_a = self._cache.get(a)
        hash_b = self._cache.get(b)
        distance = hash_a - hash_b
        return 1.0 - distance / hash_a.hash.size

    def clear(self) -> None:
        self._cache.clear()


CALCULATORS: dict[str, Callable[[], Any]] = {
    'pixel': PixelDifferenceCalculator,
    'phash': PerceptualHashDifferenceCalculator,
}


def create_calculator(name: str = 'pixel'):
    """Instantiate a calculator by name ('pixel' or 'phash')."""
    try:
        factory = CALCULATORS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown difference calculator {name!r}; choose from {', '.join(sorted(CALCULATORS))}"
        )
    _logger.debug(f"Using {factory.__name__}")
    return factory()


__all__ = [
    'DifferenceCalculator',
    'PixelDifferenceCalculator',
    'PerceptualHashDifferenceCalculator',
    'CALCULATORS',
    'create_calculator',
]
