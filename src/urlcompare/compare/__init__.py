"""Comparison of parsed URLs against a baseline.

- ComparisonEngine: Compute structural and query parameter diff maps
- compare / compare_urls: Module-level shortcuts
"""

from urlcompare.compare.engine import (
    ComparisonEngine,
    compare,
    compare_urls,
)

__all__ = [
    "ComparisonEngine",
    "compare",
    "compare_urls",
]
