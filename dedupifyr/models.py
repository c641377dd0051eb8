"""
Data models for dedupifyr.

Contains dataclasses for comparison options, loaded images and the
duplicate results reported back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .config import DEFAULT_BIAS_PERCENT


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


class SearchDepth(Enum):
    """How deep directory enumeration goes."""
    TOP_ONLY = 'top'
    RECURSIVE = 'all'

    @property
    def recursive(self) -> bool:
        return self is SearchDepth.RECURSIVE


@dataclass(frozen=True)
class ComparisonOptions:
    """
    Settings a comparison runs with.

    Attributes:
        search_depth: Top directory only, or all sub directories too
        bias_percent: Fraction (0-1) a similarity must meet or exceed
    """
    search_depth: SearchDepth = SearchDepth.TOP_ONLY
    bias_percent: float = DEFAULT_BIAS_PERCENT

    @property
    def bias_factor(self) -> float:
        """Bias expressed as a percentage (0-100)."""
        return self.bias_percent * 100


@dataclass(frozen=True)
class LocalImage:
    """
    An image file loaded for one run.

    Attributes:
        name: File name portion of the path
        full_path: Absolute path to the file
        digest: Hash of the first 1/16th of the file's bytes
        file_size: Size in bytes
    """
    name: str
    full_path: str
    digest: str
    file_size: int = 0

    @property
    def identifier(self) -> str:
        """Key used for the visited set; names can repeat across sub directories."""
        return self.full_path

    @property
    def file_size_formatted(self) -> str:
        return format_size(self.file_size)


@dataclass(frozen=True)
class DuplicateMatch:
    """An image found to be a near-duplicate of a base image."""
    image: LocalImage
    similarity_percent: float


@dataclass
class DedupeResult:
    """
    A base image and the duplicates found for it.

    Attributes:
        base_image: Representative image of the duplicate cluster
        duplicates: Matches in the order they were discovered
    """
    base_image: LocalImage
    duplicates: list[DuplicateMatch] = field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)

    @property
    def duplicate_paths(self) -> frozenset[str]:
        return frozenset(match.image.full_path for match in self.duplicates)


@dataclass(frozen=True)
class LoadFailure:
    """A file that could not be turned into a LocalImage."""
    path: str
    error: str


@dataclass
class LoadReport:
    """Outcome of the load phase: successes and per-file failures."""
    images: list[LocalImage] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.images) + len(self.failures)
