"""Constants used throughout urlcompare.

This module contains enums, scheme tables, percent-encode sets and display
defaults to ensure consistency across the parser, the comparison engine
and the presentation layer.
"""

from enum import Enum


class ComponentKey(str, Enum):
    """Structural URL components tracked by the comparison engine."""
    PROTOCOL = "protocol"
    AUTH = "auth"
    HOSTNAME = "hostname"
    PORT = "port"
    PATHNAME = "pathname"
    SEARCH = "search"
    HASH = "hash"


# Order used when rendering and iterating structural diff maps
COMPONENT_ORDER = tuple(ComponentKey)

COMPONENT_LABELS = {
    ComponentKey.PROTOCOL: "Protocol",
    ComponentKey.AUTH: "Auth",
    ComponentKey.HOSTNAME: "Hostname",
    ComponentKey.PORT: "Port",
    ComponentKey.PATHNAME: "Path",
    ComponentKey.SEARCH: "Query String",
    ComponentKey.HASH: "Fragment",
}


# Component groups for the single-URL view: (key, label, [(field, label)])
COMPONENT_GROUPS = (
    ("base", "Base", (("protocol", "Protocol"), ("hostname", "Hostname"), ("port", "Port"))),
    ("auth", "Authentication", (("username", "Username"), ("password", "Password"))),
    ("path", "Path", (("pathname", "Path"),)),
    ("query", "Query", (("search", "Query String"),)),
    ("fragment", "Fragment", (("hash", "Fragment"),)),
)


# ============================================================================
# URL Standard tables
# ============================================================================

# Schemes with special parsing rules and their default ports (None: no port)
SPECIAL_SCHEMES = {
    "ftp": 21,
    "file": None,
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}

# Characters that may never appear in a host
FORBIDDEN_HOST_CHARS = frozenset("\x00\t\n\r #/:<>?@[\\]^|")

# Domains additionally reject C0 controls, % and DEL
FORBIDDEN_DOMAIN_CHARS = FORBIDDEN_HOST_CHARS | frozenset(
    chr(c) for c in range(0x20)
) | frozenset("%\x7f")

# Percent-encode sets (C0 controls and non-ASCII are always encoded)
FRAGMENT_ENCODE_SET = frozenset(' "<>`')
QUERY_ENCODE_SET = frozenset(' "#<>')
SPECIAL_QUERY_ENCODE_SET = QUERY_ENCODE_SET | frozenset("'")
PATH_ENCODE_SET = QUERY_ENCODE_SET | frozenset("?`{}")
USERINFO_ENCODE_SET = PATH_ENCODE_SET | frozenset("/:;=@[\\]^|")

MAX_PORT = 65535


# ============================================================================
# Display defaults
# ============================================================================

# Rich styles mirroring the colour legend of the component view
COMPONENT_STYLES = {
    "protocol": "magenta",
    "username": "blue",
    "password": "blue",
    "hostname": "green",
    "port": "green",
    "pathname": "yellow",
    "search": "dark_orange",
    "hash": "red",
}

DEFAULTS = {
    "placeholder": "-",
    "mask_password": True,
    "password_mask": "••••••••",
    "diff_style": "bold red",
    "absent_marker": "(absent)",
}
