"""urlcompare - URL decomposition and multi-URL comparison.

Public entry points:
- parse: Parse one URL string into a ParsedURL record
- compare: Compute per-component and per-parameter diff maps for parsed URLs
- compare_urls: Parse raw strings, then compare them
"""

from urlcompare.compare import ComparisonEngine, compare, compare_urls
from urlcompare.core.constants import ComponentKey
from urlcompare.core.models import ABSENT, ComparisonResult, ParsedURL
from urlcompare.parser import URLParser, parse

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "ComparisonEngine",
    "ComparisonResult",
    "ComponentKey",
    "ParsedURL",
    "URLParser",
    "compare",
    "compare_urls",
    "parse",
]
