"""
Interactive prompts for the CLI interface.

Provides the console prompt, the help text and the option-change dialog.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..config import (
    BIAS_FACTOR_FLAG,
    PROMPT,
    REQUEST_SEPARATOR,
    SEARCH_DEPTH_FLAG,
)
from ..models import ComparisonOptions
from ..scanner import recognized_extensions


def read_request(input_fn: Callable[[str], str] = input) -> Optional[str]:
    """
    Read one line from the console.

    Returns:
        The line, or None at end of input
    """
    try:
        return input_fn(PROMPT)
    except EOFError:
        return None


def print_banner() -> None:
    print("\n" + "=" * 50)
    print("  DEDUPIFYR - DUPLICATE IMAGE FINDER")
    print("=" * 50)
    print("Type 'help' for usage, 'quit' to exit.")


def print_blank_input_hint() -> None:
    print(
        "You must enter either a directory ('/path/to/directory'), or a pair of "
        f"files separated by a comma ('/path/to/first.png{REQUEST_SEPARATOR} /path/to/second.jpg')."
    )


def print_help(options: ComparisonOptions) -> None:
    """Print usage, request formats and the current options."""
    extensions = ', '.join(sorted(recognized_extensions()))

    print("_____About_____")
    print("Discover duplicate images. Requests come in 3 types: Directory, Single and Pair.")
    print("Directory compares all images in a directory with every other one.")
    print("Single compares 1 image with all other images in a given directory.")
    print("Pair compares 2 different images with one another.")

    print("_____Request Formats_____")
    print("    (Directory)              '/path/to/some/directory'")
    print(f"    (Image with Directory)   '/path/to/image.[extension] {REQUEST_SEPARATOR} /directory/to/compare/against'")
    print(f"    (Image with Other Image) '/path/to/image1.[extension] {REQUEST_SEPARATOR} /path/to/image2.[extension]'")
    print("Valid extensions are " + extensions)
    print("Other extension types are ignored when searching directories.")

    print("_____Options_____")
    print("Directory Level: how deep in the directory to search.")
    print("    Values: all, [top]")
    print("Bias Factor: the percentage a comparison must equal, or exceed, to count as a duplicate.")
    print("    Values: 0 to 100, [90]")
    print(
        f"Current: directory level = {options.search_depth.value}, "
        f"bias factor = {options.bias_factor:g}"
    )
    print("Type 'options' to change the current option settings.")


def prompt_for_options(input_fn: Callable[[str], str] = input) -> dict[str, str]:
    """
    Ask for new option values, one at a time.

    Blank answers are left out so the current value is kept.

    Returns:
        Flag name -> raw value for the options builder
    """
    print("Enter New Option Values")
    print("Leave an option blank to keep its current value.")
    flags = {}

    directory_level = input_fn("Directory Level: ").strip()
    if directory_level:
        flags[SEARCH_DEPTH_FLAG] = directory_level

    bias_factor = input_fn("Bias Factor: ").strip()
    if bias_factor:
        flags[BIAS_FACTOR_FLAG] = bias_factor

    return flags


__all__ = [
    'read_request',
    'print_banner',
    'print_blank_input_hint',
    'print_help',
    'prompt_for_options',
]
