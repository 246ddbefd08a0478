"""Bootstrap address builder: raw entries -> resolved socket endpoints."""

import logging
from collections.abc import Callable, Iterable

from bsr.config import ConfigError
from bsr.dns import (
    DefaultHostResolver,
    HostNotFoundError,
    HostResolver,
    canonical_host_name,
    filter_preferred_addresses,
    resolve,
)
from bsr.lookup import ClientDnsLookup
from bsr.models import IPAddress, SocketEndpoint
from bsr.parsing import format_address, parse_endpoint, split_bootstrap_servers

logger = logging.getLogger(__name__)


def parse_and_validate_addresses(
    urls: str | Iterable[str],
    client_dns_lookup: str | ClientDnsLookup,
    host_resolver: HostResolver | None = None,
    canonical_namer: Callable[[IPAddress], str] | None = None,
) -> list[SocketEndpoint]:
    """Resolve bootstrap entries into connectable endpoints.

    The strategy is checked first and every entry is parsed before any
    lookup happens, so a bad strategy or a malformed entry fails the
    whole call without partial results.

    Hosts that do not resolve are logged and skipped as long as at least
    one other entry resolves.

    Args:
        urls: Raw ``host:port`` / ``[ipv6]:port`` entries, or a single
            comma-separated string of them.
        client_dns_lookup: Strategy name or ``ClientDnsLookup`` member.
        host_resolver: Resolver to use (default: ``DefaultHostResolver``).
        canonical_namer: Maps an IP to its canonical hostname in
            canonical-only mode (default: reverse DNS lookup).

    Returns:
        Endpoints in input order, each host's addresses in resolver order.

    Raises:
        ValueError: If *client_dns_lookup* is not a known strategy.
        ConfigError: If an entry is malformed, or no entry resolves.
    """
    lookup = ClientDnsLookup.for_config(client_dns_lookup)
    if isinstance(urls, str):
        urls = split_bootstrap_servers(urls)
    endpoints = [parse_endpoint(url) for url in urls]

    if host_resolver is None:
        host_resolver = DefaultHostResolver()
    if canonical_namer is None:
        canonical_namer = canonical_host_name

    addresses: list[SocketEndpoint] = []
    last_error: HostNotFoundError | None = None

    for endpoint in endpoints:
        try:
            resolved = resolve(endpoint.host, host_resolver)
        except HostNotFoundError as exc:
            logger.warning(
                "Couldn't resolve server %s as DNS resolution failed for %s",
                format_address(endpoint.host, endpoint.port),
                endpoint.host,
            )
            last_error = exc
            continue

        if lookup is ClientDnsLookup.RESOLVE_CANONICAL_BOOTSTRAP_SERVERS_ONLY:
            for ip in filter_preferred_addresses(resolved):
                addresses.append(
                    SocketEndpoint(hostname=canonical_namer(ip), ip=ip, port=endpoint.port)
                )
        else:
            for ip in resolved:
                addresses.append(
                    SocketEndpoint(hostname=endpoint.host, ip=ip, port=endpoint.port)
                )

    if not addresses:
        raise ConfigError(
            "No resolvable bootstrap urls given in bootstrap.servers"
        ) from last_error

    logger.debug("Resolved %d bootstrap address(es) using %s", len(addresses), lookup)
    return addresses
