"""
Execution outcomes.

Every top-level operation returns exactly one of these to its caller:

- Success: a comparison ran; ``present()`` prints its report
- OptionsUpdated: new options for subsequent comparisons
- Terminated: the caller should stop its loop
- NoOp: nothing to do (blank input)
- Faulted: the operation failed; distinct from a Success with no results
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from .errors import ErrorKind, error_kind
from .models import ComparisonOptions, DedupeResult
from .request import ComparisonRequest


def _nothing_to_present() -> None:
    pass


@dataclass(frozen=True)
class Success:
    request: ComparisonRequest
    results: list[DedupeResult] = field(default_factory=list)
    present: Callable[[], None] = _nothing_to_present

    @property
    def has_duplicates(self) -> bool:
        return bool(self.results)


@dataclass(frozen=True)
class OptionsUpdated:
    options: ComparisonOptions
    request: Optional[ComparisonRequest] = None


@dataclass(frozen=True)
class Terminated:
    pass


@dataclass(frozen=True)
class NoOp:
    pass


@dataclass(frozen=True)
class Faulted:
    error: BaseException

    @property
    def kind(self) -> ErrorKind:
        return error_kind(self.error)

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__


ExecutionStatus = Union[Success, OptionsUpdated, Terminated, NoOp, Faulted]


__all__ = [
    'Success',
    'OptionsUpdated',
    'Terminated',
    'NoOp',
    'Faulted',
    'ExecutionStatus',
]
