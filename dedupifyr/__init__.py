"""
dedupifyr
=========
Find duplicate and near-duplicate images.

Features:
- Directory, single-image and image-pair requests
- Cheap prefix digest to short-circuit identical files
- Fuzzy similarity score with a configurable bias
- Concurrent loading and comparison
- Interactive console and one-shot CLI
"""

__version__ = "1.0.0"

from .models import (
    SearchDepth,
    ComparisonOptions,
    LocalImage,
    DuplicateMatch,
    DedupeResult,
    LoadFailure,
    LoadReport,
)
from .option import Option, Some, NOTHING
from .options import ComparisonOptionsBuilder, default_options
from .request import (
    DirectoryRequest,
    SingleRequest,
    PairRequest,
    ComparisonRequest,
    parse_request,
)
from .errors import (
    ErrorKind,
    DedupifyrError,
    InvalidRequestShapeError,
    PathNotFoundError,
    BiasOutOfBoundsError,
    IncompleteOptionsError,
    LoadFailureError,
    ComparisonCancelled,
)
from .status import Success, OptionsUpdated, Terminated, NoOp, Faulted, ExecutionStatus
from .scanner import (
    find_image_files,
    load_images_parallel,
    find_duplicates,
    find_duplicates_of,
    Sha256HashProvider,
    PixelDifferenceCalculator,
    PerceptualHashDifferenceCalculator,
)
from .comparers import comparer_for
from .session import Session

__all__ = [
    "SearchDepth",
    "ComparisonOptions",
    "LocalImage",
    "DuplicateMatch",
    "DedupeResult",
    "LoadFailure",
    "LoadReport",
    "Option",
    "Some",
    "NOTHING",
    "ComparisonOptionsBuilder",
    "default_options",
    "DirectoryRequest",
    "SingleRequest",
    "PairRequest",
    "ComparisonRequest",
    "parse_request",
    "ErrorKind",
    "DedupifyrError",
    "InvalidRequestShapeError",
    "PathNotFoundError",
    "BiasOutOfBoundsError",
    "IncompleteOptionsError",
    "LoadFailureError",
    "ComparisonCancelled",
    "Success",
    "OptionsUpdated",
    "Terminated",
    "NoOp",
    "Faulted",
    "ExecutionStatus",
    "find_image_files",
    "load_images_parallel",
    "find_duplicates",
    "find_duplicates_of",
    "Sha256HashProvider",
    "PixelDifferenceCalculator",
    "PerceptualHashDifferenceCalculator",
    "comparer_for",
    "Session",
]
