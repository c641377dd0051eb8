"""
Comparison requests.

A request describes what is being compared and is built from one line of
user input:

    /path/to/directory                       -> DirectoryRequest
    /path/to/image.png, /path/to/directory   -> SingleRequest
    /path/to/first.png, /path/to/second.jpg  -> PairRequest

Paths are resolved when the request is constructed. Input that fits none of
these shapes raises instead of producing a request.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .config import REQUEST_SEPARATOR
from .errors import InvalidRequestShapeError, PathNotFoundError


@dataclass(frozen=True)
class DirectoryRequest:
    """Compare every image in a directory with every other one."""
    directory_path: str
    raw: str = ''

    @property
    def kind(self) -> str:
        return 'directory'


@dataclass(frozen=True)
class SingleRequest:
    """Compare one image with all images in a directory."""
    image_path: str
    directory_path: str
    raw: str = ''

    @property
    def kind(self) -> str:
        return 'single'


@dataclass(frozen=True)
class PairRequest:
    """Compare two images with one another."""
    first_image_path: str
    second_image_path: str
    raw: str = ''

    @property
    def kind(self) -> str:
        return 'pair'


ComparisonRequest = Union[DirectoryRequest, SingleRequest, PairRequest]


def _clean_token(token: str) -> str:
    # Quotes are common when paths are copy-pasted
    return token.strip().strip('"\'').strip()


def _resolve(token: str) -> Path:
    path = Path(os.path.expanduser(token))
    if not path.exists():
        raise PathNotFoundError(token)
    return path.resolve()


def parse_request(raw: str) -> ComparisonRequest:
    """
    Build a ComparisonRequest from one line of input.

    Args:
        raw: The user's input

    Returns:
        DirectoryRequest, SingleRequest or PairRequest

    Raises:
        PathNotFoundError: If a named path does not exist
        InvalidRequestShapeError: For any other input shape
    """
    tokens = [_clean_token(t) for t in raw.split(REQUEST_SEPARATOR)]

    if any(not t for t in tokens):
        raise InvalidRequestShapeError(
            f"Empty path in request {raw.strip()!r}"
        )

    if len(tokens) == 1:
        path = _resolve(tokens[0])
        if not path.is_dir():
            raise InvalidRequestShapeError(
                f"A single path must be a directory: {tokens[0]}"
            )
        return DirectoryRequest(directory_path=str(path), raw=raw.strip())

    if len(tokens) == 2:
        first, second = (_resolve(t) for t in tokens)
        if not first.is_file():
            raise InvalidRequestShapeError(
                f"The first path must be an image file: {tokens[0]}"
            )
        if second.is_dir():
            return SingleRequest(
                image_path=str(first),
                directory_path=str(second),
                raw=raw.strip(),
            )
        if second.is_file():
            if first == second:
                raise InvalidRequestShapeError(
                    f"Cannot compare an image with itself: {tokens[0]}"
                )
            return PairRequest(
                first_image_path=str(first),
                second_image_path=str(second),
                raw=raw.strip(),
            )
        raise InvalidRequestShapeError(
            f"Not a file or directory: {tokens[1]}"
        )

    raise InvalidRequestShapeError(
        f"Expected at most 2 paths separated by '{REQUEST_SEPARATOR}', got {len(tokens)}"
    )


__all__ = [
    'DirectoryRequest',
    'SingleRequest',
    'PairRequest',
    'ComparisonRequest',
    'parse_request',
]
