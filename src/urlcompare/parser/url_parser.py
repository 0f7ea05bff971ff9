"""URL component parsing.

This module turns one raw URL string into a ParsedURL record. The split into
scheme, authority, path, query and fragment is done by ``urllib.parse``; the
components are then normalized the way a WHATWG URL parser does:
- Scheme lowercasing and required host for special schemes
- Host lowercasing, punycode mapping and IPv4/IPv6 canonicalization
- Default port removal
- Dot segment resolution in paths
- Percent-encoding of userinfo, path, query and fragment

Any failure is returned as a ParsedURL failure record, never raised.
"""

import ipaddress
import logging
from urllib.parse import parse_qsl, unquote, urlsplit

import idna

from urlcompare.core.constants import (
    FORBIDDEN_DOMAIN_CHARS,
    FORBIDDEN_HOST_CHARS,
    FRAGMENT_ENCODE_SET,
    MAX_PORT,
    PATH_ENCODE_SET,
    QUERY_ENCODE_SET,
    SPECIAL_QUERY_ENCODE_SET,
    SPECIAL_SCHEMES,
    USERINFO_ENCODE_SET,
)
from urlcompare.core.exceptions import UrlParseFailure
from urlcompare.core.models import ParsedURL

logger = logging.getLogger(__name__)

_C0_CONTROL_OR_SPACE = "".join(chr(c) for c in range(0x21))
_ASCII_TAB_OR_NEWLINE = str.maketrans("", "", "\t\n\r")
_IPV4_DIGITS = {
    8: frozenset("01234567"),
    10: frozenset("0123456789"),
    16: frozenset("0123456789abcdefABCDEF"),
}
_SINGLE_DOT = {".", "%2e"}
_DOUBLE_DOT = {"..", ".%2e", "%2e.", "%2e%2e"}


def percent_encode(value: str, encode_set: frozenset[str]) -> str:
    """Percent-encode characters in ``encode_set``, C0 controls and non-ASCII.

    Existing ``%XX`` escapes are left untouched, so encoding is idempotent.
    Lone surrogates are encoded as U+FFFD.
    """
    out = []
    for ch in value:
        if ch in encode_set or ord(ch) < 0x20 or ord(ch) >= 0x7F:
            if 0xD800 <= ord(ch) <= 0xDFFF:
                ch = "\ufffd"
            out.append("".join(f"%{b:02X}" for b in ch.encode("utf-8")))
        else:
            out.append(ch)
    return "".join(out)


class URLParser:
    """Parse absolute URLs into structured components.

    Example:
        >>> parser = URLParser()
        >>> parsed = parser.parse("HTTPS://Example.com:443/a/../b?x=1#top")
        >>> parsed.href
        'https://example.com/b?x=1#top'
    """

    def parse(self, raw: str) -> ParsedURL:
        """Parse a single URL string.

        Args:
            raw: URL string to parse

        Returns:
            Success record with every component, or a failure record with
            ``error`` set. Never raises.
        """
        if not isinstance(raw, str):
            return ParsedURL.failure(f"Invalid URL: expected a string, got {type(raw).__name__}")

        try:
            return self._parse(raw)
        except UrlParseFailure as e:
            logger.debug(f"Failed to parse {raw!r}: {e}")
            return ParsedURL.failure(str(e))

    def _parse(self, raw: str) -> ParsedURL:
        """Parse or raise UrlParseFailure."""
        cleaned = raw.strip(_C0_CONTROL_OR_SPACE).translate(_ASCII_TAB_OR_NEWLINE)
        if not cleaned:
            raise UrlParseFailure("Invalid URL: empty input")

        scheme = self._split(cleaned).scheme
        if not scheme:
            raise UrlParseFailure(f"Invalid URL '{cleaned}': missing scheme")

        special = scheme in SPECIAL_SCHEMES
        rest = cleaned[len(scheme) + 1:]
        if special:
            rest = self._special_rest(scheme, rest)
            has_authority = True
        else:
            has_authority = rest.startswith("//")

        parts = self._split(f"{scheme}:{rest}")
        before_fragment = rest.partition("#")[0]
        has_query = "?" in before_fragment
        has_fragment = "#" in rest

        username = password = hostname = port = ""
        if has_authority:
            username, password, hostname, port = self._parse_authority(
                parts.netloc, scheme, special, cleaned
            )

        if has_authority or parts.path.startswith("/"):
            pathname = self._normalize_path(parts.path)
        else:
            # Opaque path (mailto:, data:, urn: ...)
            pathname = percent_encode(parts.path, frozenset())

        query_set = SPECIAL_QUERY_ENCODE_SET if special else QUERY_ENCODE_SET
        query = percent_encode(parts.query, query_set)
        fragment = percent_encode(parts.fragment, FRAGMENT_ENCODE_SET)

        search_params: dict[str, str] = {}
        for key, value in parse_qsl(query, keep_blank_values=True):
            search_params[key] = value

        host = f"{hostname}:{port}" if port else hostname
        protocol = f"{scheme}:"

        href = protocol
        if has_authority:
            credentials = ""
            if username or password:
                credentials = username + (f":{password}" if password else "") + "@"
            href += f"//{credentials}{host}"
        elif pathname.startswith("//"):
            # Keeps the first path segment from being read as a host
            href += "/."
        href += pathname
        if has_query:
            href += f"?{query}"
        if has_fragment:
            href += f"#{fragment}"

        return ParsedURL(
            href=href,
            protocol=protocol,
            username=username,
            password=password,
            host=host,
            hostname=hostname,
            port=port,
            pathname=pathname,
            search=f"?{query}" if query else "",
            search_params=search_params,
            hash=f"#{fragment}" if fragment else "",
        )

    def _split(self, url: str):
        """Split URL with urlsplit, converting its errors."""
        try:
            return urlsplit(url)
        except ValueError as e:
            raise UrlParseFailure(f"Invalid URL '{url}': {e}") from e

    def _special_rest(self, scheme: str, rest: str) -> str:
        """Rewrite the part after ``scheme:`` for special schemes.

        Backslashes before the query count as slashes, and any number of
        leading slashes introduces the authority.
        """
        cut = len(rest)
        for marker in "?#":
            index = rest.find(marker)
            if index != -1:
                cut = min(cut, index)
        head = rest[:cut].replace("\\", "/")
        tail = rest[cut:]

        if scheme == "file":
            if head.startswith("//"):
                return head + tail
            return "//" + ("" if head.startswith("/") else "/") + head + tail
        return "//" + head.lstrip("/") + tail

    def _parse_authority(
        self,
        netloc: str,
        scheme: str,
        special: bool,
        url: str,
    ) -> tuple[str, str, str, str]:
        """Parse ``[userinfo@]host[:port]``.

        Returns:
            Tuple of (username, password, hostname, port)
        """
        userinfo, at, hostport = netloc.rpartition("@")
        if not at:
            userinfo = ""
        raw_username, _, raw_password = userinfo.partition(":")

        if hostport.startswith("["):
            end = hostport.find("]")
            if end == -1:
                raise UrlParseFailure(f"Invalid URL '{url}': unterminated IPv6 address")
            raw_host = hostport[:end + 1]
            remainder = hostport[end + 1:]
            if remainder and not remainder.startswith(":"):
                raise UrlParseFailure(f"Invalid URL '{url}': unexpected characters after IPv6 address")
            raw_port = remainder[1:]
        else:
            raw_host, _, raw_port = hostport.partition(":")

        if scheme == "file":
            if userinfo or raw_port:
                raise UrlParseFailure(f"Invalid URL '{url}': file URLs cannot have credentials or a port")
            hostname = self._parse_host(raw_host, special, url) if raw_host else ""
            if hostname == "localhost":
                hostname = ""
            return "", "", hostname, ""

        if not raw_host:
            if special:
                raise UrlParseFailure(f"Invalid URL '{url}': missing host")
            if userinfo or raw_port:
                raise UrlParseFailure(f"Invalid URL '{url}': credentials or port without a host")
            return "", "", "", ""

        return (
            percent_encode(raw_username, USERINFO_ENCODE_SET),
            percent_encode(raw_password, USERINFO_ENCODE_SET),
            self._parse_host(raw_host, special, url),
            self._parse_port(raw_port, scheme, url),
        )

    def _parse_port(self, raw_port: str, scheme: str, url: str) -> str:
        """Validate port and drop it when it is the scheme's default."""
        if not raw_port:
            return ""
        if not all(c in "0123456789" for c in raw_port):
            raise UrlParseFailure(f"Invalid URL '{url}': invalid port '{raw_port}'")
        port = int(raw_port)
        if port > MAX_PORT:
            raise UrlParseFailure(f"Invalid URL '{url}': port {port} out of range")
        if port == SPECIAL_SCHEMES.get(scheme):
            return ""
        return str(port)

    def _parse_host(self, raw_host: str, special: bool, url: str) -> str:
        """Parse and serialize a host.

        Args:
            raw_host: Host as written, possibly bracketed IPv6
            special: Whether the scheme is special
            url: URL for error messages

        Returns:
            Serialized host
        """
        if raw_host.startswith("["):
            if not raw_host.endswith("]"):
                raise UrlParseFailure(f"Invalid URL '{url}': unterminated IPv6 address")
            return f"[{self._parse_ipv6(raw_host[1:-1], url)}]"

        if not special:
            if any(c in FORBIDDEN_HOST_CHARS for c in raw_host):
                raise UrlParseFailure(f"Invalid URL '{url}': forbidden character in host")
            return percent_encode(raw_host, frozenset())

        domain = self._domain_to_ascii(unquote(raw_host), url)
        if self._ends_in_number(domain):
            return self._parse_ipv4(domain, url)
        return domain

    def _domain_to_ascii(self, domain: str, url: str) -> str:
        """Lowercase ASCII domains and map the rest through UTS #46.

        ASCII labels with the ``xn--`` prefix must be valid A-labels.
        """
        if not domain:
            raise UrlParseFailure(f"Invalid URL '{url}': empty host")

        if domain.isascii():
            result = domain.lower()
            for label in result.split("."):
                if not label.startswith("xn--"):
                    continue
                try:
                    idna.decode(label)
                except idna.IDNAError as e:
                    raise UrlParseFailure(f"Invalid URL '{url}': invalid domain: {e}") from e
        else:
            try:
                result = idna.encode(domain, uts46=True).decode("ascii")
            except idna.IDNAError as e:
                raise UrlParseFailure(f"Invalid URL '{url}': invalid domain: {e}") from e

        if any(c in FORBIDDEN_DOMAIN_CHARS for c in result):
            raise UrlParseFailure(f"Invalid URL '{url}': forbidden character in host")
        return result

    def _ends_in_number(self, domain: str) -> bool:
        """Check if the last label makes the host an IPv4 address."""
        labels = domain.split(".")
        if labels[-1] == "":
            if len(labels) == 1:
                return False
            labels.pop()
        last = labels[-1]
        if last and all(c in "0123456789" for c in last):
            return True
        return self._parse_ipv4_number(last) is not None

    def _parse_ipv4_number(self, part: str) -> int | None:
        """Parse one IPv4 part in decimal, octal (0 prefix) or hex (0x prefix)."""
        if not part:
            return None
        radix = 10
        if len(part) >= 2 and part[:2].lower() == "0x":
            part = part[2:]
            radix = 16
        elif len(part) >= 2 and part[0] == "0":
            part = part[1:]
            radix = 8
        if part == "":
            return 0
        if not all(c in _IPV4_DIGITS[radix] for c in part):
            return None
        return int(part, radix)

    def _parse_ipv4(self, domain: str, url: str) -> str:
        """Canonicalize an IPv4 host such as ``0x7f.1`` to dotted decimal."""
        parts = domain.split(".")
        if parts[-1] == "" and len(parts) > 1:
            parts.pop()
        if len(parts) > 4:
            raise UrlParseFailure(f"Invalid URL '{url}': invalid IPv4 address")

        numbers = []
        for part in parts:
            number = self._parse_ipv4_number(part)
            if number is None:
                raise UrlParseFailure(f"Invalid URL '{url}': invalid IPv4 address")
            numbers.append(number)

        if any(n > 255 for n in numbers[:-1]) or numbers[-1] >= 256 ** (5 - len(numbers)):
            raise UrlParseFailure(f"Invalid URL '{url}': IPv4 address out of range")

        address = numbers[-1]
        for i, number in enumerate(numbers[:-1]):
            address += number * 256 ** (3 - i)
        return str(ipaddress.IPv4Address(address))

    def _parse_ipv6(self, value: str, url: str) -> str:
        """Canonicalize an IPv6 address (compressed, lowercase)."""
        # Zone identifiers are not allowed in URLs
        if "%" in value:
            raise UrlParseFailure(f"Invalid URL '{url}': invalid IPv6 address")
        try:
            return ipaddress.IPv6Address(value).compressed
        except ValueError as e:
            raise UrlParseFailure(f"Invalid URL '{url}': invalid IPv6 address") from e

    def _normalize_path(self, path: str) -> str:
        """Resolve dot segments and percent-encode a hierarchical path.

        Returns:
            Path starting with ``/``; ``/`` when empty
        """
        segments = path.split("/")
        if segments and segments[0] == "":
            segments = segments[1:]

        output: list[str] = []
        for i, segment in enumerate(segments):
            last = i == len(segments) - 1
            lowered = segment.lower()
            if lowered in _DOUBLE_DOT:
                if output:
                    output.pop()
                if last:
                    output.append("")
            elif lowered in _SINGLE_DOT:
                if last:
                    output.append("")
            else:
                output.append(percent_encode(segment, PATH_ENCODE_SET))

        return "/" + "/".join(output)


_default_parser = URLParser()


def parse(raw: str) -> ParsedURL:
    """Parse one URL string into a ParsedURL record. Never raises."""
    return _default_parser.parse(raw)
