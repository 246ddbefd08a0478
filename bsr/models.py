"""Data models: ParsedEndpoint and SocketEndpoint dataclasses."""

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address

IPAddress = IPv4Address | IPv6Address


@dataclass(frozen=True)
class ParsedEndpoint:
    """A syntactically valid ``host:port`` bootstrap entry.

    Attributes:
        host: Hostname or IP literal.  Bracketed IPv6 literals are stored
            without their brackets (``"[::1]:8000"`` gives ``"::1"``).
        port: Port number in ``[0, 65535]``.
    """

    host: str
    port: int


@dataclass(frozen=True)
class SocketEndpoint:
    """A resolved, connectable bootstrap address.

    Attributes:
        hostname: The host as supplied, or its canonical name when the
            canonical-only lookup strategy produced it.
        ip: Resolved IPv4 or IPv6 address.
        port: Port carried over from the bootstrap entry.
    """

    hostname: str
    ip: IPAddress
    port: int

    @property
    def family(self) -> int:
        """IP version of the resolved address (4 or 6)."""
        return self.ip.version

    @property
    def address(self) -> str:
        """``ip:port`` text, with IPv6 addresses bracketed."""
        if self.ip.version == 6:
            return f"[{self.ip}]:{self.port}"
        return f"{self.ip}:{self.port}"

    def to_dict(self) -> dict:
        return {
            "hostname": self.hostname,
            "ip": str(self.ip),
            "port": self.port,
            "family": self.family,
        }
