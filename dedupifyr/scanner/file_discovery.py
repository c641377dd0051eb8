"""
File discovery module for the scanner package.

Enumerates image files in a directory, either the top level only or all
sub directories, keeping only recognized image extensions.
"""

from __future__ import annotations

from pathlib import Path

from ..config import HEIF_EXTENSIONS, IMAGE_EXTENSIONS
from ..models import SearchDepth
from .dependencies import HAS_HEIF_SUPPORT


def recognized_extensions() -> set[str]:
    """Extensions that can actually be read in this environment."""
    if HAS_HEIF_SUPPORT:
        return set(IMAGE_EXTENSIONS)
    return {ext for ext in IMAGE_EXTENSIONS if ext not in HEIF_EXTENSIONS}


def is_image_file(path: str | Path) -> bool:
    """True if the path has a recognized image extension."""
    return Path(path).suffix.lower() in recognized_extensions()


def find_image_files(
    root_path: str | Path,
    search_depth: SearchDepth = SearchDepth.TOP_ONLY,
) -> list[str]:
    """
    Find all image files in the given directory.

    Args:
        root_path: Directory path to search for images
        search_depth: TOP_ONLY for this directory, RECURSIVE for sub directories too

    Returns:
        Sorted list of absolute file paths as strings

    Notes:
        - Files with other extensions are silently ignored
        - Symlinks are resolved to canonical paths and de-duplicated
        - Sorting keeps results independent of filesystem enumeration order
    """
    root = Path(root_path)
    extensions_to_scan = recognized_extensions()

    images = []
    seen = set()

    iterator = root.rglob('*') if search_depth.recursive else root.glob('*')

    for filepath in iterator:
        if filepath.is_file() and filepath.suffix.lower() in extensions_to_scan:
            resolved = str(filepath.resolve())
            if resolved not in seen:
                seen.add(resolved)
                images.append(resolved)

    return sorted(images)


__all__ = ['find_image_files', 'is_image_file', 'recognized_extensions']
