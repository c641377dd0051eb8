"""
Comparers for each request type.

A comparer runs one request end to end (load, then compare) and offers a
presentation callback for its own kind of report:

- DirectoryComparison: every image in a directory against every other one
- SingleComparison: one image against the images in a directory
- PairComparison: two images against each other
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Optional

from .config import DEFAULT_WORKERS
from .errors import InvalidRequestShapeError
from .models import ComparisonOptions, DedupeResult, DuplicateMatch, LoadFailure, SearchDepth
from .reporting import print_directory_report, print_pair_report, print_single_report
from .request import ComparisonRequest, DirectoryRequest, PairRequest, SingleRequest
from .scanner import (
    DifferenceCalculator,
    HashProvider,
    PixelDifferenceCalculator,
    Sha256HashProvider,
    find_duplicates,
    find_duplicates_of,
    find_image_files,
    is_image_file,
    load_images_parallel,
    load_local_image,
    score_pair,
)

logger = logging.getLogger(__name__)


class ImageComparer:
    """
    Shared state and plumbing for the request-specific comparers.

    Attributes:
        options: Options the comparison runs with
        hash_provider: Digest provider for the load phase
        calculator: Similarity calculator for the compare phase
        results: Results of the last run
        load_failures: Files skipped during the last run
    """

    def __init__(
        self,
        options: ComparisonOptions,
        hash_provider: Optional[HashProvider] = None,
        calculator: Optional[DifferenceCalculator] = None,
        max_workers: int = DEFAULT_WORKERS,
        show_progress: bool = True,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.options = options
        self.hash_provider = hash_provider or Sha256HashProvider()
        self.calculator = calculator or PixelDifferenceCalculator()
        self.max_workers = max_workers
        self.show_progress = show_progress
        self.cancel_event = cancel_event or threading.Event()
        self.results: list[DedupeResult] = []
        self.load_failures: list[LoadFailure] = []

    def run(self, request: ComparisonRequest) -> list[DedupeResult]:
        raise NotImplementedError

    def print_instructions(self) -> Callable[[], None]:
        """Return a callback that prints the report of the last run."""
        raise NotImplementedError

    def _require_request(self, request, request_type) -> None:
        if not isinstance(request, request_type):
            raise InvalidRequestShapeError(
                f"{type(self).__name__} cannot run {type(request).__name__}"
            )

    def _require_image(self, path: str) -> None:
        # Explicitly named files are held to the extension list, unlike
        # files found by directory enumeration which are skipped quietly.
        if not is_image_file(path):
            raise InvalidRequestShapeError(
                f"Not a recognized image type: {Path(path).name}"
            )

    def _load_directory(self, directory: str, search_depth: SearchDepth):
        filepaths = find_image_files(directory, search_depth)
        logger.info(
            f"Found {len(filepaths):,} image files in {directory} "
            f"({'including' if search_depth.recursive else 'excluding'} sub directories)"
        )
        report = load_images_parallel(
            filepaths,
            self.hash_provider,
            max_workers=self.max_workers,
            show_progress=self.show_progress,
            cancel_event=self.cancel_event,
            logger=logger,
        )
        self.load_failures = report.failures
        return report.images


class DirectoryComparison(ImageComparer):
    """Compare each image in a directory with all others in it."""

    def run(self, request: ComparisonRequest) -> list[DedupeResult]:
        self._require_request(request, DirectoryRequest)
        self.request = request

        start = time.time()
        images = self._load_directory(request.directory_path, self.options.search_depth)
        logger.info(f"Loaded {len(images):,} images in {time.time() - start:.2f}s")

        start = time.time()
        self.results = find_duplicates(
            images,
            self.options,
            self.calculator,
            max_workers=self.max_workers,
            cancel_event=self.cancel_event,
            show_progress=self.show_progress,
            logger=logger,
        )
        logger.info(
            f"Checked {len(images):,} images in {time.time() - start:.2f}s, "
            f"{len(self.results):,} duplicate groups"
        )
        return self.results

    def print_instructions(self) -> Callable[[], None]:
        request, results, failures = self.request, list(self.results), list(self.load_failures)
        return lambda: print_directory_report(request.directory_path, results, failures)


class SingleComparison(ImageComparer):
    """Compare one image with every image in a directory."""

    def run(self, request: ComparisonRequest) -> list[DedupeResult]:
        self._require_request(request, SingleRequest)
        self.request = request

        self._require_image(request.image_path)
        base = load_local_image(request.image_path, self.hash_provider)
        images = self._load_directory(request.directory_path, self.options.search_depth)

        start = time.time()
        self.results = find_duplicates_of(
            base,
            images,
            self.options,
            self.calculator,
            max_workers=self.max_workers,
            cancel_event=self.cancel_event,
        )
        logger.info(f"Compared {base.name} with {len(images):,} images in {time.time() - start:.2f}s")
        return self.results

    def print_instructions(self) -> Callable[[], None]:
        request, results, failures = self.request, list(self.results), list(self.load_failures)
        return lambda: print_single_report(
            request.image_path, request.directory_path, results, failures
        )


class PairComparison(ImageComparer):
    """Compare two images with each other."""

    similarity: Optional[float] = None

    def run(self, request: ComparisonRequest) -> list[DedupeResult]:
        self._require_request(request, PairRequest)
        self.request = request

        self._require_image(request.first_image_path)
        self._require_image(request.second_image_path)
        first = load_local_image(request.first_image_path, self.hash_provider)
        second = load_local_image(request.second_image_path, self.hash_provider)

        self.similarity = score_pair(first, second, self.calculator)
        logger.debug(f"{first.name} vs {second.name}: {self.similarity:.4f}")

        self.results = []
        if self.similarity >= self.options.bias_percent:
            self.results.append(DedupeResult(
                base_image=first,
                duplicates=[DuplicateMatch(image=second, similarity_percent=self.similarity)],
            ))
        return self.results

    def print_instructions(self) -> Callable[[], None]:
        request, results, similarity = self.request, list(self.results), self.similarity
        return lambda: print_pair_report(
            request.first_image_path, request.second_image_path, results, similarity
        )


_COMPARERS = {
    DirectoryRequest: DirectoryComparison,
    SingleRequest: SingleComparison,
    PairRequest: PairComparison,
}


def comparer_for(request: ComparisonRequest, options: ComparisonOptions, **kwargs) -> ImageComparer:
    """
    Create the comparer matching a request.

    Args:
        request: The parsed request
        options: Options to run with
        **kwargs: Passed through to ImageComparer

    Returns:
        DirectoryComparison, SingleComparison or PairComparison
    """
    try:
        comparer_class = _COMPARERS[type(request)]
    except KeyError:
        raise InvalidRequestShapeError(f"Unsupported request: {request!r}")
    return comparer_class(options, **kwargs)


__all__ = [
    'ImageComparer',
    'DirectoryComparison',
    'SingleComparison',
    'PairComparison',
    'comparer_for',
]
