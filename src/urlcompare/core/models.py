"""Core data models for urlcompare.

This module defines the structured URL record produced by the parser and
the difference matrix produced by the comparison engine. All models are
immutable; every input change re-derives them from scratch.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from urlcompare.core.constants import COMPONENT_ORDER, ComponentKey


# ============================================================================
# Sentinels
# ============================================================================

class _Absent:
    """Marker for a value that is not present at all.

    Distinct from every string, including the empty string, so that a query
    parameter given as ``?a=`` and one not given at all compare unequal.
    """

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


# Index -> differs from baseline
DiffMap = dict[int, bool]


# ============================================================================
# ParsedURL
# ============================================================================

# Field order of the serialized record
STRUCTURAL_FIELDS = (
    "href",
    "protocol",
    "username",
    "password",
    "host",
    "hostname",
    "port",
    "pathname",
    "search",
    "searchParams",
    "hash",
)


@dataclass(frozen=True)
class ParsedURL:
    """Structured components of a single URL string.

    A record is either a success (every structural field set, ``error`` is
    None) or a failure (``error`` set, every structural field None). Check
    ``is_valid`` before reading anything else.
    """
    href: Optional[str] = None
    protocol: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    hostname: Optional[str] = None
    port: Optional[str] = None
    pathname: Optional[str] = None
    search: Optional[str] = None
    search_params: Optional[Mapping[str, str]] = None
    hash: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.search_params is not None and not isinstance(self.search_params, MappingProxyType):
            object.__setattr__(self, "search_params", MappingProxyType(dict(self.search_params)))

    @classmethod
    def failure(cls, message: str) -> "ParsedURL":
        """Build a failure record carrying only an error message."""
        return cls(error=message or "Invalid URL")

    @property
    def is_valid(self) -> bool:
        """Check if this record is a successful parse."""
        return self.error is None

    @property
    def auth(self) -> str:
        """Combined credentials rendered as ``user[:pass]@``, or empty."""
        if not self.is_valid or not (self.username or self.password):
            return ""
        if self.password:
            return f"{self.username}:{self.password}@"
        return f"{self.username}@"

    def component(self, key: ComponentKey | str) -> Optional[str]:
        """Get the value of a tracked structural component.

        Returns None for failure records.
        """
        key = ComponentKey(key)
        if not self.is_valid:
            return None
        if key is ComponentKey.AUTH:
            return self.auth
        return getattr(self, key.value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the serialized record shape.

        Failure records serialize as ``{"error": ...}`` only.
        """
        if not self.is_valid:
            return {"error": self.error}
        data: dict[str, Any] = {}
        for name in STRUCTURAL_FIELDS:
            if name == "searchParams":
                data[name] = dict(self.search_params or {})
            else:
                data[name] = getattr(self, name)
        return data


# ============================================================================
# Comparison result
# ============================================================================

@dataclass(frozen=True)
class ComparisonResult:
    """Difference matrix for an ordered set of parsed URLs.

    ``structural`` maps each tracked component to a DiffMap and ``params``
    maps every query parameter name seen in any entry to a DiffMap. Index 0
    is the baseline and is never flagged.
    """
    structural: dict[ComponentKey, DiffMap] = field(default_factory=dict)
    params: dict[str, DiffMap] = field(default_factory=dict)
    size: int = 0

    @property
    def param_names(self) -> list[str]:
        """Tracked query parameter names in first-seen order."""
        return list(self.params)

    @property
    def has_differences(self) -> bool:
        """Check if any entry differs from the baseline anywhere."""
        maps = list(self.structural.values()) + list(self.params.values())
        return any(any(diff.values()) for diff in maps)

    def differing_components(self, index: int) -> list[ComponentKey]:
        """List structural components where the entry differs from baseline."""
        return [
            key for key in COMPONENT_ORDER
            if self.structural.get(key, {}).get(index, False)
        ]

    def differing_params(self, index: int) -> list[str]:
        """List query parameters where the entry differs from baseline."""
        return [name for name, diff in self.params.items() if diff.get(index, False)]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with string keys for JSON output."""
        return {
            "size": self.size,
            "structural": {
                key.value: {str(i): flag for i, flag in diff.items()}
                for key, diff in self.structural.items()
            },
            "params": {
                name: {str(i): flag for i, flag in diff.items()}
                for name, diff in self.params.items()
            },
        }
