"""Bootstrap endpoint parsing and validation."""

import logging
import re
from ipaddress import IPv6Address
from typing import NoReturn

from bsr.config import ConfigError
from bsr.models import ParsedEndpoint

logger = logging.getLogger(__name__)

MAX_PORT = 65535

_HOST_RE = re.compile(r"[0-9A-Za-z._%-]+")
_PORT_RE = re.compile(r"[0-9]+")


def parse_endpoint(raw: str) -> ParsedEndpoint:
    """Split a ``host:port`` or ``[ipv6]:port`` string into its parts.

    Nothing is resolved here.  Whitespace is not trimmed; it makes the
    entry invalid.

    Args:
        raw: A single bootstrap entry, e.g. ``"localhost:9092"`` or
            ``"[::1]:9092"``.

    Returns:
        The parsed ``ParsedEndpoint``.

    Raises:
        ConfigError: If the entry has no port, a non-numeric or out-of-range
            port, an empty or invalid host, or malformed brackets.
    """
    if not isinstance(raw, str):
        raise ConfigError(f"Invalid url in bootstrap.servers: {raw!r}")

    if raw.startswith("["):
        host, port_str = _split_bracketed(raw)
    else:
        if "[" in raw or "]" in raw:
            _invalid(raw, "misplaced bracket")
        host, sep, port_str = raw.rpartition(":")
        if not sep:
            _invalid(raw, "missing port")
        if ":" in host:
            _invalid(raw, "IPv6 literals must be enclosed in brackets")
        if not host:
            _invalid(raw, "empty host")
        if not _HOST_RE.fullmatch(host):
            _invalid(raw, f"invalid host {host!r}")

    return ParsedEndpoint(host=host, port=_parse_port(raw, port_str))


def split_bootstrap_servers(value: str | list[str]) -> list[str]:
    """Turn a comma-separated string (or a list) into bootstrap entries.

    Empty entries are kept so that ``parse_endpoint`` can reject them.
    """
    if isinstance(value, str):
        return value.split(",")
    return list(value)


def format_address(host: str, port: int) -> str:
    """Render *host* and *port* as an endpoint string, bracketing IPv6 hosts."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------


def _split_bracketed(raw: str) -> tuple[str, str]:
    """Split ``[host]:port``, checking that the host is an IPv6 literal."""
    close = raw.find("]")
    if close < 0:
        _invalid(raw, "unclosed bracket")

    host = raw[1:close]
    rest = raw[close + 1 :]
    if "[" in host or "]" in rest or "[" in rest:
        _invalid(raw, "nested or repeated brackets")
    if not rest:
        _invalid(raw, "missing port")
    if not rest.startswith(":"):
        _invalid(raw, "expected ':' after closing bracket")
    if not host:
        _invalid(raw, "empty host")

    try:
        IPv6Address(host)
    except ValueError:
        _invalid(raw, f"{host!r} is not an IPv6 address")

    return host, rest[1:]


def _parse_port(raw: str, port_str: str) -> int:
    if not port_str:
        _invalid(raw, "missing port")
    if not _PORT_RE.fullmatch(port_str):
        _invalid(raw, f"port {port_str!r} is not a number")
    if len(port_str) > len(str(MAX_PORT)):
        _invalid(raw, f"port {port_str[:10]}... out of range [0, {MAX_PORT}]")
    port = int(port_str)
    if port > MAX_PORT:
        _invalid(raw, f"port {port} out of range [0, {MAX_PORT}]")
    return port


def _invalid(raw: str, reason: str) -> NoReturn:
    logger.debug("Rejecting bootstrap entry %r: %s", raw, reason)
    raise ConfigError(f"Invalid url in bootstrap.servers: {raw!r} ({reason})")
