"""
A comparison session.

Holds the options in effect and turns each operation into exactly one
ExecutionStatus. Errors never escape ``execute`` or ``change_options``; they
come back as Faulted so the caller can report them and keep going.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Mapping, Optional

from .comparers import comparer_for
from .config import DEFAULT_WORKERS, TERMINATION_COMMANDS
from .errors import ComparisonCancelled, DedupifyrError
from .models import ComparisonOptions
from .option import Some
from .options import ComparisonOptionsBuilder, default_options
from .request import ComparisonRequest, parse_request
from .scanner import DifferenceCalculator, HashProvider, PixelDifferenceCalculator, Sha256HashProvider
from .status import ExecutionStatus, Faulted, NoOp, OptionsUpdated, Success, Terminated

logger = logging.getLogger(__name__)


def is_command(raw: str, commands) -> bool:
    """True if the trimmed, lower-cased input is one of the commands."""
    return raw.strip().lower() in commands


class Session:
    """
    Runs comparison requests with the current options.

    Attributes:
        options: Options used by the next comparison
        hash_provider: Digest provider shared by all runs
        calculator: Similarity calculator shared by all runs
    """

    def __init__(
        self,
        options: Optional[ComparisonOptions] = None,
        hash_provider: Optional[HashProvider] = None,
        calculator: Optional[DifferenceCalculator] = None,
        max_workers: int = DEFAULT_WORKERS,
        show_progress: bool = True,
    ):
        self.options = options or default_options()
        self.hash_provider = hash_provider or Sha256HashProvider()
        self.calculator = calculator or PixelDifferenceCalculator()
        self.max_workers = max_workers
        self.show_progress = show_progress
        self._cancel_event = threading.Event()
        self.last_request: Optional[ComparisonRequest] = None

    def cancel(self) -> None:
        """Ask in-flight loads and comparisons to stop."""
        self._cancel_event.set()

    def execute(self, raw: Optional[str]) -> ExecutionStatus:
        """
        Run one line of input.

        Returns:
            NoOp for blank input, Terminated for a termination command,
            Success for a completed comparison, Faulted otherwise
        """
        if raw is None or not raw.strip():
            return NoOp()

        if is_command(raw, TERMINATION_COMMANDS):
            return Terminated()

        self._cancel_event.clear()
        try:
            request = parse_request(raw)
            self.last_request = request
            comparer = comparer_for(
                request,
                self.options,
                hash_provider=self.hash_provider,
                calculator=self.calculator,
                max_workers=self.max_workers,
                show_progress=self.show_progress,
                cancel_event=self._cancel_event,
            )
            start = time.time()
            results = comparer.run(request)
            logger.info(f"Done in {(time.time() - start) * 1000:.0f} ms.")
        except KeyboardInterrupt:
            self._cancel_event.set()
            logger.debug(f"Request {raw.strip()!r} interrupted")
            return Faulted(ComparisonCancelled("Interrupted"))
        except DedupifyrError as e:
            logger.debug(f"Request {raw.strip()!r} failed: {e}")
            return Faulted(e)
        except Exception as e:
            logger.exception(f"Unexpected failure running {raw.strip()!r}")
            return Faulted(e)
        finally:
            # Files may change between requests
            if hasattr(self.calculator, 'clear'):
                self.calculator.clear()

        return Success(request=request, results=results, present=comparer.print_instructions())

    def change_options(self, flags: Mapping[str, str]) -> ExecutionStatus:
        """
        Apply raw option flags on top of the current options.

        Returns:
            OptionsUpdated with the new options and the last request run,
            or Faulted (options unchanged)
        """
        try:
            updated = ComparisonOptionsBuilder().build_from_flags(flags, Some(self.options))
        except DedupifyrError as e:
            return Faulted(e)

        self.options = updated
        logger.debug(f"Options updated: {updated}")
        return OptionsUpdated(options=updated, request=self.last_request)


__all__ = ['Session', 'is_command']
