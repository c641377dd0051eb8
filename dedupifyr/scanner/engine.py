"""
Duplicate detection engine for the scanner package.

Images are clustered into stars: each result holds one base image and the
images found similar to it. The outer loop walks the images in order and is
the only place the ``visited`` set and the result list are mutated. Once an
image has been matched it is never promoted to a base image of its own, so a
chain of near-duplicates collapses into a single result instead of one per
member.

For a fixed base image the comparisons against the remaining candidates are
independent and run on a thread pool; workers only return scores.
"""

from __future__ import annotations

import filecmp
import logging
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Optional

from ..config import DEFAULT_WORKERS
from ..errors import ComparisonCancelled
from ..models import ComparisonOptions, DedupeResult, DuplicateMatch, LocalImage
from .dependencies import make_progress_bar, _logger
from .difference import DifferenceCalculator


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ComparisonCancelled()


def is_byte_identical(base: LocalImage, candidate: LocalImage) -> bool:
    """
    Cheap equality pre-check.

    Digests only cover a prefix, so a digest and size match is confirmed by
    comparing the full contents before the files count as identical.
    """
    if base.digest != candidate.digest or base.file_size != candidate.file_size:
        return False
    return filecmp.cmp(base.full_path, candidate.full_path, shallow=False)


def score_pair(
    base: LocalImage,
    candidate: LocalImage,
    calculator: DifferenceCalculator,
) -> float:
    """Similarity of two loaded images; byte-identical files skip decoding."""
    if is_byte_identical(base, candidate):
        return 1.0
    return calculator.similarity(base.full_path, candidate.full_path)


def compare_against(
    base: LocalImage,
    candidates: list[LocalImage],
    calculator: DifferenceCalculator,
    options: ComparisonOptions,
    executor: Optional[Executor] = None,
    cancel_event: Optional[threading.Event] = None,
) -> list[DuplicateMatch]:
    """
    Compare one base image against every candidate.

    Args:
        base: The image being checked
        candidates: Images to compare it with (base itself must not be included)
        calculator: Similarity calculator
        options: Supplies the bias a score must meet or exceed
        executor: Optional pool to run comparisons concurrently
        cancel_event: When set, outstanding comparisons are cancelled

    Returns:
        Matches at or above the bias, in candidate order
    """
    if not candidates:
        return []

    if executor is None:
        scores = []
        for candidate in candidates:
            _check_cancelled(cancel_event)
            scores.append(score_pair(base, candidate, calculator))
    else:
        futures = [
            executor.submit(score_pair, base, candidate, calculator)
            for candidate in candidates
        ]
        scores = []
        try:
            for future in futures:
                _check_cancelled(cancel_event)
                scores.append(future.result())
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    return [
        DuplicateMatch(image=candidate, similarity_percent=score)
        for candidate, score in zip(candidates, scores)
        if score >= options.bias_percent
    ]


def find_duplicates(
    images: list[LocalImage],
    options: ComparisonOptions,
    calculator: DifferenceCalculator,
    max_workers: int = DEFAULT_WORKERS,
    cancel_event: Optional[threading.Event] = None,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
) -> list[DedupeResult]:
    """
    Group images into duplicate clusters.

    Args:
        images: Loaded images, in the order they should be visited
        options: Comparison options (bias)
        calculator: Similarity calculator
        max_workers: Number of parallel comparison workers
        cancel_event: When set, the run stops with ComparisonCancelled
        show_progress: Whether to show tqdm progress bar
        logger: Optional logger for status messages

    Returns:
        One DedupeResult per base image with at least one match, in visiting order

    Notes:
        - An image is never both a base and a duplicate
        - A similar pair is reported at most once
        - Images already absorbed into a result are not compared again
    """
    logger = logger or _logger
    visited: set[str] = set()
    results: list[DedupeResult] = []
    comparisons = 0
    start = time.time()

    pbar = make_progress_bar(len(images), "Comparing images", "img", show_progress)
    executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        for image in images:
            _check_cancelled(cancel_event)

            if image.identifier not in visited:
                candidates = [
                    other for other in images
                    if other.identifier != image.identifier
                    and other.identifier not in visited
                ]
                matches = compare_against(
                    image, candidates, calculator, options, executor, cancel_event
                )
                comparisons += len(candidates)

                if matches:
                    results.append(DedupeResult(base_image=image, duplicates=matches))
                    visited.update(match.image.identifier for match in matches)

                visited.add(image.identifier)

            if pbar is not None:
                pbar.update(1)
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
        if pbar is not None:
            pbar.close()

    logger.debug(
        f"{comparisons:,} comparisons over {len(images):,} images "
        f"in {time.time() - start:.2f}s, {len(results):,} results"
    )
    return results


def find_duplicates_of(
    base: LocalImage,
    images: list[LocalImage],
    options: ComparisonOptions,
    calculator: DifferenceCalculator,
    max_workers: int = DEFAULT_WORKERS,
    cancel_event: Optional[threading.Event] = None,
) -> list[DedupeResult]:
    """
    Compare a single image against a collection.

    Only ``base`` may become a base image, so at most one result is returned.
    Images sharing the base's identifier are skipped, as are repeats.
    """
    seen = {base.identifier}
    candidates = []
    for image in images:
        if image.identifier not in seen:
            seen.add(image.identifier)
            candidates.append(image)

    _check_cancelled(cancel_event)
    if len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            matches = compare_against(
                base, candidates, calculator, options, executor, cancel_event
            )
    else:
        matches = compare_against(base, candidates, calculator, options, None, cancel_event)

    if not matches:
        return []
    return [DedupeResult(base_image=base, duplicates=matches)]


__all__ = [
    'is_byte_identical',
    'score_pair',
    'compare_against',
    'find_duplicates',
    'find_duplicates_of',
]
