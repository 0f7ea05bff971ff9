"""Multi-URL comparison.

This module computes, for an ordered set of parsed URLs, which entries
differ from the baseline (always index 0) for every tracked structural
component and for the union of all query parameter names.

Comparison is literal string equality on the values the parser produced;
no URL-aware equivalence is applied. Failed entries contribute no values,
so a failed baseline flags every successful entry on every component.
"""

import logging
from typing import Any, Iterable, Sequence

from urlcompare.core.constants import COMPONENT_ORDER
from urlcompare.core.models import ABSENT, ComparisonResult, DiffMap, ParsedURL
from urlcompare.parser.url_parser import URLParser

logger = logging.getLogger(__name__)


class ComparisonEngine:
    """Compare parsed URLs against the first entry.

    Example:
        >>> engine = ComparisonEngine()
        >>> entries, result = engine.compare_urls([
        ...     "https://example.com/?x=1",
        ...     "https://example.com/?y=2",
        ... ])
        >>> result.params["y"]
        {0: False, 1: True}
    """

    BASELINE_INDEX = 0

    def __init__(self, *, parser: URLParser | None = None):
        """Initialize ComparisonEngine.

        Args:
            parser: URLParser used by compare_urls (creates default if None)
        """
        self.parser = parser or URLParser()

    def compare(self, entries: Sequence[ParsedURL]) -> ComparisonResult:
        """Compute structural and query parameter diff maps.

        Args:
            entries: Parsed URLs in input order; index 0 is the baseline

        Returns:
            ComparisonResult; empty maps when there are no entries
        """
        if not entries:
            return ComparisonResult()

        structural = {
            key: self._diff([entry.component(key) for entry in entries])
            for key in COMPONENT_ORDER
        }

        params: dict[str, DiffMap] = {}
        for name in self._param_union(entries):
            params[name] = self._diff([self._param_value(entry, name) for entry in entries])

        result = ComparisonResult(structural=structural, params=params, size=len(entries))
        failed = sum(1 for entry in entries if not entry.is_valid)
        logger.debug(
            f"Compared {len(entries)} entries ({failed} failed), "
            f"{len(params)} query parameters tracked"
        )
        return result

    def compare_urls(self, raws: Iterable[str]) -> tuple[list[ParsedURL], ComparisonResult]:
        """Parse raw URL strings and compare them.

        Args:
            raws: URL strings in input order

        Returns:
            Tuple of (parsed entries, comparison result)
        """
        entries = [self.parser.parse(raw) for raw in raws]
        return entries, self.compare(entries)

    def _diff(self, values: list[Any]) -> DiffMap:
        """Flag every value that differs from the baseline value."""
        baseline = values[self.BASELINE_INDEX]
        return {index: value != baseline for index, value in enumerate(values)}

    def _param_union(self, entries: Sequence[ParsedURL]) -> list[str]:
        """Union of query parameter names in first-seen order."""
        names: dict[str, None] = {}
        for entry in entries:
            if entry.is_valid and entry.search_params:
                for name in entry.search_params:
                    names.setdefault(name, None)
        return list(names)

    def _param_value(self, entry: ParsedURL, name: str) -> Any:
        """Value of a query parameter, or ABSENT when not present."""
        if not entry.is_valid or not entry.search_params:
            return ABSENT
        return entry.search_params.get(name, ABSENT)


_default_engine = ComparisonEngine()


def compare(entries: Sequence[ParsedURL]) -> ComparisonResult:
    """Compare parsed URLs against index 0. Never raises."""
    return _default_engine.compare(entries)


def compare_urls(raws: Iterable[str]) -> tuple[list[ParsedURL], ComparisonResult]:
    """Parse and compare raw URL strings."""
    return _default_engine.compare_urls(raws)
