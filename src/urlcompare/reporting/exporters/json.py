"""JSON exporter for urlcompare.

This module provides the raw JSON view of parsed URLs and comparison
results, with custom encoding for the package's models and enums.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Sequence

from urlcompare.core.exceptions import ExportError
from urlcompare.core.models import ABSENT, ComparisonResult, ParsedURL


class URLCompareJSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for urlcompare objects.

    Handles serialization of ParsedURL, ComparisonResult, Enum, Path and
    the ABSENT sentinel.
    """

    def default(self, o):
        """Encode special types to JSON-serializable formats.

        Args:
            o: Object to encode

        Returns:
            JSON-serializable representation
        """
        if isinstance(o, (ParsedURL, ComparisonResult)):
            return o.to_dict()

        if isinstance(o, Enum):
            return o.value

        if isinstance(o, Path):
            return str(o)

        if o is ABSENT:
            return None

        return super().default(o)


def comparison_payload(entries: Sequence[ParsedURL], result: ComparisonResult) -> dict[str, Any]:
    """Build the JSON structure for a comparison run."""
    return {
        "entries": [entry.to_dict() for entry in entries],
        "comparison": result.to_dict(),
    }


def to_json(obj: Any, *, indent: int | None = 2) -> str:
    """Serialize a ParsedURL, ComparisonResult or payload dict to JSON."""
    return json.dumps(obj, cls=URLCompareJSONEncoder, indent=indent, ensure_ascii=False)


class JSONExporter:
    """Export parsed URLs and comparison results to JSON files."""

    def export(self, obj: Any, output_path: Path) -> None:
        """Export object to JSON file.

        Args:
            obj: ParsedURL, ComparisonResult or payload dict to export
            output_path: Path where JSON file will be written

        Raises:
            ExportError: If export fails
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("w", encoding="utf-8") as f:
                json.dump(obj, f, cls=URLCompareJSONEncoder, indent=2, ensure_ascii=False)
                f.write("\n")
        except (OSError, TypeError, ValueError) as e:
            raise ExportError(f"Failed to export JSON to {output_path}: {e}") from e
