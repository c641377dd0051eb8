"""
Builder for ComparisonOptions.

Options are assembled incrementally: defaults, then whatever a previous
session (or the user config) supplied, then the flags the user typed. Blank
or unrecognized flag values keep the value already in effect.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .config import (
    BIAS_FACTOR_FLAG,
    BIAS_FACTOR_MAX,
    BIAS_FACTOR_MIN,
    DEFAULT_BIAS_PERCENT,
    SEARCH_DEPTH_FLAG,
)
from .errors import BiasOutOfBoundsError, IncompleteOptionsError
from .models import ComparisonOptions, SearchDepth
from .option import NOTHING, Option, Some

logger = logging.getLogger(__name__)


def parse_search_depth(token: str) -> SearchDepth:
    """
    Interpret a search depth token.

    Exact enum names or values ('TOP_ONLY', 'top', 'all', ...) are honoured;
    otherwise anything mentioning 'top' means the top directory only and
    everything else means recursive.

    Examples:
        >>> parse_search_depth('top')
        <SearchDepth.TOP_ONLY: 'top'>
        >>> parse_search_depth('recursive')
        <SearchDepth.RECURSIVE: 'all'>
    """
    cleaned = token.strip().lower()
    for depth in SearchDepth:
        if cleaned in (depth.name.lower(), depth.value):
            return depth
    return SearchDepth.TOP_ONLY if 'top' in cleaned else SearchDepth.RECURSIVE


def parse_bias_factor(token: str) -> Optional[float]:
    """
    Convert a bias factor percentage (0-100) into a fraction (0-1).

    Returns:
        The fraction, or None when the token is not a number

    Raises:
        BiasOutOfBoundsError: If the number is outside 0-100
    """
    cleaned = token.strip().rstrip('%').strip()
    try:
        factor = float(cleaned)
    except ValueError:
        return None
    if not BIAS_FACTOR_MIN <= factor <= BIAS_FACTOR_MAX:
        raise BiasOutOfBoundsError(factor)
    return factor / 100


class ComparisonOptionsBuilder:
    """Fluent builder producing immutable ComparisonOptions."""

    def __init__(self):
        self._search_depth: Option[SearchDepth] = NOTHING
        self._bias_percent: Option[float] = NOTHING

    def with_search_depth(self, depth: SearchDepth) -> 'ComparisonOptionsBuilder':
        self._search_depth = Some(depth)
        return self

    def with_bias_percent(self, bias: float) -> 'ComparisonOptionsBuilder':
        """Set the bias as a fraction in [0, 1]."""
        if not 0.0 <= bias <= 1.0:
            raise BiasOutOfBoundsError(bias * 100)
        self._bias_percent = Some(bias)
        return self

    def build(self) -> ComparisonOptions:
        """Build the options, filling defaults for anything not set."""
        if self._search_depth.is_none:
            self._search_depth = Some(SearchDepth.TOP_ONLY)
        if self._bias_percent.is_none:
            self._bias_percent = Some(DEFAULT_BIAS_PERCENT)
        return self._construct()

    def build_from_flags(
        self,
        flags: Mapping[str, str],
        current: Option[ComparisonOptions] = NOTHING,
    ) -> ComparisonOptions:
        """
        Build options from raw flag values, on top of the current options.

        Args:
            flags: Flag name -> raw value ('search_depth', 'bias_factor')
            current: Options already in effect, if any

        Returns:
            The new ComparisonOptions

        Raises:
            BiasOutOfBoundsError: If the bias factor is outside 0-100. Nothing
                is modified in that case.
        """
        if current.is_some:
            self._search_depth = Some(current.value.search_depth)
            self._bias_percent = Some(current.value.bias_percent)

        depth_token = flags.get(SEARCH_DEPTH_FLAG) or ''
        if depth_token.strip():
            self._search_depth = Some(parse_search_depth(depth_token))

        bias_token = flags.get(BIAS_FACTOR_FLAG) or ''
        if bias_token.strip():
            bias = parse_bias_factor(bias_token)
            if bias is None:
                logger.warning(f"Ignoring unrecognized bias factor: {bias_token!r}")
            else:
                self._bias_percent = Some(bias)

        return self.build()

    def _construct(self) -> ComparisonOptions:
        if self._search_depth.is_none or self._bias_percent.is_none:
            raise IncompleteOptionsError("Comparison options are missing a value")
        return ComparisonOptions(
            search_depth=self._search_depth.value,
            bias_percent=self._bias_percent.value,
        )


def default_options() -> ComparisonOptions:
    """Options used when nothing has been configured."""
    return ComparisonOptionsBuilder().build()


__all__ = [
    'ComparisonOptionsBuilder',
    'parse_search_depth',
    'parse_bias_factor',
    'default_options',
]
