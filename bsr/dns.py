"""Host resolution: pluggable resolvers and address-family filtering.

Every call goes straight to the resolver; nothing is cached, so records
that rotate between calls are picked up on the next resolution.  All
lookups block the caller.  No timeout is applied here: the platform
resolver's own timeout behaviour governs ``DefaultHostResolver``, and a
substituted resolver is responsible for its own.
"""

import logging
import socket
from collections.abc import Iterable, Mapping, Sequence
from ipaddress import ip_address
from typing import Protocol

from bsr.models import IPAddress

logger = logging.getLogger(__name__)


class HostNotFoundError(Exception):
    """Raised when a hostname cannot be resolved to any address."""

    def __init__(self, hostname: str, reason: str | None = None) -> None:
        self.hostname = hostname
        message = f"Unable to resolve host {hostname!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class HostResolver(Protocol):
    """Anything that maps a hostname to an ordered list of IP addresses."""

    def resolve(self, hostname: str) -> list[IPAddress]:
        """Return the addresses currently associated with *hostname*.

        Raises:
            HostNotFoundError: If the name cannot be resolved.
        """
        ...


class DefaultHostResolver:
    """Resolve names through the platform resolver (``socket.getaddrinfo``)."""

    def resolve(self, hostname: str) -> list[IPAddress]:
        """Resolve *hostname* to all of its A and AAAA records.

        Addresses come back in the order the platform returns them, with
        duplicates (one per socket type or protocol) collapsed.

        Raises:
            HostNotFoundError: If ``getaddrinfo`` fails or returns nothing.
        """
        logger.debug("Resolving %s", hostname)
        try:
            results = socket.getaddrinfo(
                hostname,
                None,
                family=socket.AF_UNSPEC,
                type=socket.SOCK_STREAM,
            )
        except (socket.gaierror, UnicodeError) as exc:
            # UnicodeError: the name cannot be IDNA-encoded (empty or >63-char label)
            raise HostNotFoundError(hostname, str(exc)) from exc

        seen: set[IPAddress] = set()
        out: list[IPAddress] = []
        for _family, _type, _proto, _canonname, sockaddr in results:
            # sockaddr is (ip, port) for AF_INET, (ip, port, flow, scope) for AF_INET6
            ip = ip_address(sockaddr[0])
            if ip not in seen:
                seen.add(ip)
                out.append(ip)

        if not out:
            raise HostNotFoundError(hostname, "no addresses returned")
        return out


class StaticHostResolver:
    """Answer from a fixed hostname -> addresses table.

    Useful for deployments with a static address list and for tests.
    Address strings are accepted and converted on construction.
    """

    def __init__(self, mapping: Mapping[str, Iterable[IPAddress | str]]) -> None:
        self._mapping = {
            host: [ip_address(a) for a in addresses]
            for host, addresses in mapping.items()
        }

    def resolve(self, hostname: str) -> list[IPAddress]:
        addresses = self._mapping.get(hostname)
        if not addresses:
            raise HostNotFoundError(hostname, "not in static address table")
        return list(addresses)


class AddressChangeHostResolver:
    """Return a different answer set on each successive call.

    Models DNS records rotating between resolutions.  The answer sets are
    handed out in order; once they run out the last one keeps being
    returned.  The call counter is not thread-safe.
    """

    def __init__(self, *answer_sets: Iterable[IPAddress | str]) -> None:
        if not answer_sets:
            raise ValueError("AddressChangeHostResolver needs at least one answer set")
        self._answer_sets = [[ip_address(a) for a in s] for s in answer_sets]
        self._next = 0
        self.resolution_count = 0

    def use_new_addresses(self) -> None:
        """Skip ahead so every later call returns the final answer set."""
        self._next = len(self._answer_sets) - 1

    def resolve(self, hostname: str) -> list[IPAddress]:
        self.resolution_count += 1
        answer = self._answer_sets[self._next]
        if self._next < len(self._answer_sets) - 1:
            self._next += 1
        if not answer:
            raise HostNotFoundError(hostname, "empty answer set")
        return list(answer)


def resolve(host: str, host_resolver: HostResolver) -> list[IPAddress]:
    """Resolve *host* through *host_resolver*.

    Args:
        host: Hostname or IP literal.
        host_resolver: Resolver to query.

    Returns:
        The resolver's addresses as a new list, in resolver order.

    Raises:
        HostNotFoundError: Propagated from the resolver.
    """
    addresses = list(host_resolver.resolve(host))
    logger.debug(
        "Resolved %s to %s",
        host,
        ", ".join(str(a) for a in addresses),
    )
    return addresses


def filter_preferred_addresses(addresses: Sequence[IPAddress]) -> list[IPAddress]:
    """Keep only addresses of the same family as the first one.

    Relative order is preserved and *addresses* is not modified.  An
    empty input gives an empty list.
    """
    if not addresses:
        return []
    preferred = addresses[0].version
    return [a for a in addresses if a.version == preferred]


def canonical_host_name(ip: IPAddress) -> str:
    """Reverse-resolve *ip* to its canonical hostname.

    Falls back to the textual IP when there is no reverse record.
    """
    try:
        hostname, _aliases, _addrs = socket.gethostbyaddr(str(ip))
    except (socket.herror, socket.gaierror) as exc:
        logger.debug("No reverse record for %s: %s", ip, exc)
        return str(ip)
    return hostname
