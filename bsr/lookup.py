"""DNS lookup strategies for bootstrap servers."""

from enum import Enum


class ClientDnsLookup(Enum):
    """How bootstrap hostnames are turned into addresses.

    Values are the lower-case configuration tokens.

    * ``USE_ALL_DNS_IPS`` - every resolved IP becomes an endpoint.
    * ``RESOLVE_CANONICAL_BOOTSTRAP_SERVERS_ONLY`` - resolved IPs are
      narrowed to the first address's family and each is reported under
      its canonical hostname.
    """

    USE_ALL_DNS_IPS = "use_all_dns_ips"
    RESOLVE_CANONICAL_BOOTSTRAP_SERVERS_ONLY = "resolve_canonical_bootstrap_servers_only"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_config(cls, config: "str | ClientDnsLookup") -> "ClientDnsLookup":
        """Look up the strategy named by *config* (case-insensitive).

        Raises:
            ValueError: If *config* names no known strategy.
        """
        if isinstance(config, cls):
            return config
        if isinstance(config, str):
            try:
                return cls(config.lower())
            except ValueError:
                pass
        known = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown client.dns.lookup {config!r}. Known values: {known}")
