"""Output renderer: rich table formatter, JSON formatter, format dispatch."""

import json
import logging
import sys
from collections.abc import Sequence
from io import StringIO

from rich.console import Console
from rich.table import Table

from bsr.lookup import ClientDnsLookup
from bsr.models import SocketEndpoint

logger = logging.getLogger(__name__)

FORMATS = ("table", "json")

_COLUMNS = [
    ("Host", "hostname"),
    ("IP", "ip"),
    ("Port", "port"),
    ("Family", "family"),
]


def render(
    endpoints: Sequence[SocketEndpoint],
    lookup: ClientDnsLookup,
    fmt: str,
    *,
    file: object | None = None,
    width: int | None = None,
) -> None:
    """Dispatch output to the appropriate formatter.

    Args:
        endpoints: Resolved bootstrap endpoints.
        lookup: Strategy that produced them.
        fmt: Output format, ``"table"`` or ``"json"``.
        file: Writable file object for output (default: ``sys.stdout``).
        width: Explicit console width (default: auto-detect).

    Raises:
        ValueError: If *fmt* is not ``"table"`` or ``"json"``.
    """
    if fmt == "table":
        render_table(endpoints, lookup, file=file, width=width)
    elif fmt == "json":
        render_json(endpoints, lookup, file=file)
    else:
        raise ValueError(f"Unknown output format: {fmt!r}")


def render_table(
    endpoints: Sequence[SocketEndpoint],
    lookup: ClientDnsLookup,
    *,
    file: object | None = None,
    width: int | None = None,
) -> None:
    """Render *endpoints* as a ``rich`` table followed by a summary line."""
    out = file or sys.stdout
    console = Console(file=out, highlight=False, width=width)

    table = Table(title=f"bootstrap servers ({lookup})")
    for header, _ in _COLUMNS:
        table.add_column(header)

    for endpoint in endpoints:
        table.add_row(*[_fmt(endpoint, attr) for _, attr in _COLUMNS])

    console.print(table)

    hosts = len({e.hostname for e in endpoints})
    console.print(f"  {len(endpoints)} address(es), {hosts} distinct host name(s)")


def render_json(
    endpoints: Sequence[SocketEndpoint],
    lookup: ClientDnsLookup,
    *,
    file: object | None = None,
) -> None:
    """Render *endpoints* as a JSON object with ``client_dns_lookup`` and ``endpoints``."""
    out = file or sys.stdout
    payload = {
        "client_dns_lookup": lookup.value,
        "endpoints": [e.to_dict() for e in endpoints],
    }
    json.dump(payload, out, indent=2)
    out.write("\n")  # type: ignore[union-attr]


def render_to_string(
    endpoints: Sequence[SocketEndpoint],
    lookup: ClientDnsLookup,
    fmt: str,
    *,
    width: int = 200,
) -> str:
    """Render to a string instead of stdout, for tests."""
    buf = StringIO()
    render(endpoints, lookup, fmt, file=buf, width=width)
    return buf.getvalue()


def _fmt(endpoint: SocketEndpoint, attr: str) -> str:
    """Format one table cell; the family column reads ``IPv4`` / ``IPv6``."""
    value = getattr(endpoint, attr)
    if attr == "family":
        return f"IPv{value}"
    return str(value)
