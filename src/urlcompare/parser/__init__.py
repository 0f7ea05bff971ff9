"""URL component parsing.

- URLParser: Parse absolute URLs into ParsedURL records
- parse: Module-level shortcut using a default URLParser
"""

from urlcompare.parser.url_parser import URLParser, parse, percent_encode

__all__ = [
    "URLParser",
    "parse",
    "percent_encode",
]
