"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
dedupifyr console.
"""

from __future__ import annotations

import argparse

from ..config import REQUEST_SEPARATOR
from ..scanner.difference import CALCULATORS


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance

    Notes:
        - Option defaults are None so the user config can fill them in
        - Without a request the interactive console is started
    """
    parser = argparse.ArgumentParser(
        prog='dedupifyr',
        description='Find duplicate and near-duplicate images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Request formats:
  /path/to/directory
      Compare every image in a directory with every other one

  "/path/to/image.png{REQUEST_SEPARATOR} /path/to/directory"
      Compare one image with all images in a directory

  "/path/to/first.png{REQUEST_SEPARATOR} /path/to/second.jpg"
      Compare two images with one another

Examples:
  %(prog)s
      Start the interactive console

  %(prog)s /path/to/photos --depth all --bias 90
      Search all sub directories, 90%% similarity required
        """
    )

    parser.add_argument(
        'request',
        nargs='?',
        default=None,
        help='Run a single request and exit'
    )

    parser.add_argument(
        '-d', '--depth',
        default=None,
        help="Directory level: 'top' (this directory only) or 'all' (recursive)"
    )

    parser.add_argument(
        '-b', '--bias',
        default=None,
        help='Bias factor: percentage (0-100) a comparison must meet or exceed'
    )

    parser.add_argument(
        '-c', '--calculator',
        choices=sorted(CALCULATORS),
        default=None,
        help='Similarity calculator. Default: pixel'
    )

    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help='Number of parallel workers'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '--bias', '90'])
        >>> args.request
        '/path/to/photos'
        >>> args.bias
        '90'
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
