"""
Scanner package for dedupifyr.

Provides image discovery, prefix hashing, parallel loading, similarity
calculation and the duplicate clustering engine.

Public API:
- find_image_files: Discover image files in a directory
- calculate_prefix_digest: Digest the first 1/16th of a file
- load_local_image / load_images_parallel: Build LocalImage descriptors
- PixelDifferenceCalculator / PerceptualHashDifferenceCalculator: Similarity scores
- find_duplicates: Cluster a collection into duplicate results
- find_duplicates_of: Compare one image against a collection
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .file_discovery import find_image_files, is_image_file, recognized_extensions
from .hashing import (
    HashProvider,
    Sha256HashProvider,
    calculate_prefix_digest,
)
from .difference import (
    DifferenceCalculator,
    PixelDifferenceCalculator,
    PerceptualHashDifferenceCalculator,
    create_calculator,
)
from .loading import load_local_image, load_images_parallel
from .engine import (
    is_byte_identical,
    score_pair,
    compare_against,
    find_duplicates,
    find_duplicates_of,
)

from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    # File discovery
    'find_image_files',
    'is_image_file',
    'recognized_extensions',
    # Hashing
    'HashProvider',
    'Sha256HashProvider',
    'calculate_prefix_digest',
    # Similarity
    'DifferenceCalculator',
    'PixelDifferenceCalculator',
    'PerceptualHashDifferenceCalculator',
    'create_calculator',
    # Loading
    'load_local_image',
    'load_images_parallel',
    # Duplicate detection
    'is_byte_identical',
    'score_pair',
    'compare_against',
    'find_duplicates',
    'find_duplicates_of',
    # Feature detection
    'has_heif_support',
]
