"""
Parallel image loading for the scanner package.

Turns file paths into LocalImage descriptors, one worker task per file. A
file that fails to load is reported on its own and never stops the others.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Optional

from ..config import DEFAULT_WORKERS
from ..errors import ComparisonCancelled, LoadFailureError
from ..models import LoadFailure, LoadReport, LocalImage
from .dependencies import Image, make_progress_bar, _logger
from .hashing import HashProvider, calculate_prefix_digest


def load_local_image(filepath: str | Path, hash_provider: HashProvider) -> LocalImage:
    """
    Load a single image descriptor.

    Args:
        filepath: Path to the image file
        hash_provider: Provider used for the prefix digest

    Returns:
        LocalImage for the file

    Raises:
        LoadFailureError: If the file is missing, unreadable or not an image
    """
    filepath = str(filepath)

    if not os.path.exists(filepath):
        raise LoadFailureError(filepath, "File not found")

    if not os.access(filepath, os.R_OK):
        raise LoadFailureError(filepath, "File not readable (permission denied)")

    # Only the header is read here; pixels are decoded by the calculator
    try:
        with Image.open(filepath):
            pass
    except Image.UnidentifiedImageError as e:
        raise LoadFailureError(filepath, f"Not a valid image file: {e}")
    except OSError as e:
        raise LoadFailureError(filepath, f"Failed to open image: {e}")

    try:
        digest = calculate_prefix_digest(filepath, hash_provider)
        size = os.path.getsize(filepath)
    except OSError as e:
        raise LoadFailureError(filepath, str(e))

    return LocalImage(
        name=os.path.basename(filepath),
        full_path=filepath,
        digest=digest,
        file_size=size,
    )


def load_images_parallel(
    filepaths: list[str],
    hash_provider: HashProvider,
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    cancel_event: Optional[threading.Event] = None,
    logger: Optional[logging.Logger] = None,
) -> LoadReport:
    """
    Load many images concurrently and wait for all of them.

    Args:
        filepaths: Image paths to load
        hash_provider: Provider used for each prefix digest
        max_workers: Number of parallel workers
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show tqdm progress bar
        cancel_event: When set, pending loads are cancelled
        logger: Optional logger for status messages

    Returns:
        LoadReport with images in the order of ``filepaths`` and failures

    Raises:
        ComparisonCancelled: If cancel_event was set before all loads finished
    """
    logger = logger or _logger
    if not filepaths:
        return LoadReport()

    loaded: dict[int, LocalImage] = {}
    failures: list[LoadFailure] = []
    pbar = make_progress_bar(len(filepaths), "Loading images", "img", show_progress)
    start = time.time()

    executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        futures: dict[Future, int] = {
            executor.submit(load_local_image, path, hash_provider): index
            for index, path in enumerate(filepaths)
        }

        for done, future in enumerate(as_completed(futures), 1):
            if cancel_event is not None and cancel_event.is_set():
                raise ComparisonCancelled("Image loading cancelled")

            index = futures[future]
            try:
                loaded[index] = future.result()
            except LoadFailureError as e:
                failures.append(LoadFailure(path=e.path, error=e.reason))
                logger.debug(str(e))
            except Exception as e:
                failures.append(LoadFailure(path=filepaths[index], error=str(e)))
                logger.debug(f"Unexpected load error for {filepaths[index]}: {e}")

            if pbar is not None:
                pbar.update(1)
            if progress_callback:
                progress_callback(done, len(filepaths))
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
        if pbar is not None:
            pbar.close()

    if failures:
        logger.warning(f"Could not load {len(failures):,} of {len(filepaths):,} files")
    logger.debug(f"Loaded {len(loaded):,} images in {time.time() - start:.2f}s")

    images = [loaded[index] for index in sorted(loaded)]
    failures.sort(key=lambda failure: failure.path)
    return LoadReport(images=images, failures=failures)


__all__ = ['load_local_image', 'load_images_parallel']
