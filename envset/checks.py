"""
ABOUTME: Validation checks applied to raw variable text before parsing
ABOUTME: Covers non-empty strings, bind and dial addresses, and local paths
"""

import ipaddress
import re
from typing import Tuple

from .exceptions import InvalidValueError

_LABEL_RE = re.compile(r"[A-Za-z0-9_](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9_])?")


def is_non_empty(text: str) -> None:
    """Reject the empty string."""
    if len(text) == 0:
        raise InvalidValueError("empty value")


def is_path(text: str) -> None:
    """
    Reject strings that cannot name a local file.

    Any non-empty string without a NUL byte is a well-formed POSIX path, so
    that is all that is checked; existence is not.
    """
    if not text:
        raise InvalidValueError("empty path")
    if "\x00" in text:
        raise InvalidValueError("path contains NUL byte")


def is_hostname(host: str) -> bool:
    """Return True if host is a syntactically valid DNS name."""
    if host.endswith("."):
        host = host[:-1]
    if not host or len(host) > 253:
        return False
    labels = host.split(".")
    # An all-numeric last label would be a malformed IPv4 literal.
    if labels[-1].isdigit():
        return False
    return all(_LABEL_RE.fullmatch(label) for label in labels)


def split_host_port(addr: str) -> Tuple[str, str]:
    """
    Split ``host:port`` or ``[ipv6]:port`` into host and port.

    Raises:
        InvalidValueError: If addr has no port separator or misplaced brackets.
    """
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0:
            raise InvalidValueError(f"address {addr}: missing ']' in address")
        host, rest = addr[1:end], addr[end + 1 :]
        if not rest.startswith(":"):
            raise InvalidValueError(f"address {addr}: missing port in address")
        port = rest[1:]
        if ":" in port:
            raise InvalidValueError(f"address {addr}: too many colons in address")
        try:
            ipaddress.IPv6Address(host)
        except ValueError as e:
            raise InvalidValueError(f"address {addr}: invalid IPv6 host") from e
        return host, port

    i = addr.rfind(":")
    if i < 0:
        raise InvalidValueError(f"address {addr}: missing port in address")
    host, port = addr[:i], addr[i + 1 :]
    if ":" in host:
        raise InvalidValueError(f"address {addr}: too many colons in address")
    if "[" in host or "]" in host or "[" in port or "]" in port:
        raise InvalidValueError(f"address {addr}: unexpected bracket in address")
    if host and not _is_ipv4(host) and not is_hostname(host):
        raise InvalidValueError(f"address {addr}: invalid host {host!r}")
    return host, port


def _is_ipv4(host: str) -> bool:
    try:
        ipaddress.IPv4Address(host)
    except ValueError:
        return False
    return True


def _port_number(addr: str, port: str) -> int:
    if not port.isascii() or not port.isdigit():
        raise InvalidValueError(f"address {addr}: invalid port {port!r}")
    digits = port.lstrip("0") or "0"
    if len(digits) > 5:
        raise InvalidValueError(f"address {addr}: port out of range")
    n = int(digits)
    if n > 65535:
        raise InvalidValueError(f"address {addr}: port {port} out of range")
    return n


def is_bind_addr(text: str) -> None:
    """
    Accept an address to listen on, ``host:port``.

    The host may be empty (all interfaces) and the port may be empty or 0
    (any free port).
    """
    if not text:
        raise InvalidValueError("empty address")
    _, port = split_host_port(text)
    if port:
        _port_number(text, port)


def is_dial_addr(text: str) -> None:
    """Accept an address to connect to: non-empty host and a port in 1-65535."""
    if not text:
        raise InvalidValueError("empty address")
    host, port = split_host_port(text)
    if not host:
        raise InvalidValueError(f"address {text}: missing host in address")
    if not port:
        raise InvalidValueError(f"address {text}: missing port in address")
    if _port_number(text, port) == 0:
        raise InvalidValueError(f"address {text}: port 0 is not dialable")
