"""
Report formatting and display.

Each comparer hands the caller a zero-argument callback that ends up in one
of the ``print_*_report`` functions below, so the engine itself never prints.
"""

from __future__ import annotations

from typing import Optional

from .models import DedupeResult, LoadFailure


def format_percent(fraction: float) -> str:
    """Format a 0-1 fraction as a percentage with two decimals."""
    return f"{fraction * 100:.2f}%"


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def _print_result(result_number: int, result: DedupeResult) -> None:
    print(f"\nResult #{result_number}: {result.base_image.name}")
    print(f"         {result.base_image.full_path} | {result.base_image.file_size_formatted}")
    for dupe_number, match in enumerate(result.duplicates, 1):
        print(
            f"  Dupe #{dupe_number}: {match.image.name} - "
            f"{format_percent(match.similarity_percent)}"
        )
        print(f"         {match.image.full_path}")


def _print_load_failures(failures: list[LoadFailure]) -> None:
    if not failures:
        return
    _print_section_header(f"SKIPPED FILES ({len(failures)})")
    for failure in failures:
        print(f"  {failure.path}: {failure.error}")


def print_directory_report(
    directory: str,
    results: list[DedupeResult],
    failures: Optional[list[LoadFailure]] = None,
) -> None:
    """
    Print the duplicates found within a directory.

    Args:
        directory: The directory that was searched
        results: Results from the engine
        failures: Files that could not be loaded
    """
    if not results:
        print(f"No images in '{directory}' are duplicates of each other.")
    else:
        _print_section_header(
            f"The following {len(results)} duplicate groups were found in '{directory}'"
        )
        for result_number, result in enumerate(results, 1):
            _print_result(result_number, result)
    _print_load_failures(failures or [])


def print_single_report(
    image_path: str,
    directory: str,
    results: list[DedupeResult],
    failures: Optional[list[LoadFailure]] = None,
) -> None:
    """Print the duplicates of one image found in a directory."""
    if not results or not results[0].duplicates:
        print(f"No duplicates of '{image_path}' were found in '{directory}'.")
    else:
        result = results[0]
        _print_section_header(
            f"{result.duplicate_count} duplicates of '{result.base_image.name}' "
            f"were found in '{directory}'"
        )
        for dupe_number, match in enumerate(result.duplicates, 1):
            print(
                f"  Dupe #{dupe_number}: {match.image.full_path} - "
                f"{format_percent(match.similarity_percent)}"
            )
    _print_load_failures(failures or [])


def print_pair_report(
    first_path: str,
    second_path: str,
    results: list[DedupeResult],
    similarity: Optional[float] = None,
) -> None:
    """Print whether two images are duplicates, with their similarity."""
    score = f" ({format_percent(similarity)} similar)" if similarity is not None else ""
    if results:
        print(f"'{first_path}' and '{second_path}' are duplicates{score}.")
    else:
        print(f"'{first_path}' and '{second_path}' are not duplicates{score}.")


__all__ = [
    'format_percent',
    'print_directory_report',
    'print_single_report',
    'print_pair_report',
]
