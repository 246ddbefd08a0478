"""YAML configuration file loading."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".bsr"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"
DEFAULT_DNS_LOOKUP = "use_all_dns_ips"


class ConfigError(Exception):
    """Raised when configuration is malformed or unusable.

    Covers bad config files, invalid bootstrap entries, and bootstrap
    lists in which no entry resolves.
    """


@dataclass
class BsrConfig:
    """Top-level configuration for the bsr tool.

    Attributes:
        bootstrap_servers: Raw ``host:port`` entries, unvalidated.
        client_dns_lookup: Name of the DNS lookup strategy.
    """

    bootstrap_servers: list[str] = field(default_factory=list)
    client_dns_lookup: str = DEFAULT_DNS_LOOKUP


# Keys in the YAML file that map to BsrConfig fields.  Both the dotted
# client property names and their underscore forms are accepted.
_YAML_KEY_TO_FIELD: dict[str, str] = {
    "bootstrap_servers": "bootstrap_servers",
    "bootstrap.servers": "bootstrap_servers",
    "client_dns_lookup": "client_dns_lookup",
    "client.dns.lookup": "client_dns_lookup",
}


def load_config(path: Path | str | None = None) -> BsrConfig:
    """Load configuration from a YAML file.

    Args:
        path: Explicit path to a YAML config file.  If ``None``, the
            default location (``~/.bsr/config.yaml``) is tried, and a
            default ``BsrConfig`` is returned when it does not exist.

    Returns:
        A populated ``BsrConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit *path* was given but doesn't exist.
        ConfigError: If the file contains invalid YAML, has an unexpected
            top-level structure, or a value of the wrong type.
    """
    resolved = _resolve_path(path)

    if resolved is None:
        logger.debug("No config file found; using defaults")
        return BsrConfig()

    logger.debug("Loading config from %s", resolved)
    text = resolved.read_text(encoding="utf-8")

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {resolved}: {exc}") from exc

    if raw is None:
        return BsrConfig()

    if not isinstance(raw, dict):
        raise ConfigError(
            f"Expected a YAML mapping at the top level in {resolved}, "
            f"got {type(raw).__name__}"
        )

    return _build_config(raw, source=resolved)


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------


def _resolve_path(path: Path | str | None) -> Path | None:
    """Return a concrete ``Path`` to read, or ``None`` if nothing to read.

    Raises:
        FileNotFoundError: If the caller supplied an explicit path that
            doesn't exist on disk.
    """
    if path is not None:
        p = Path(path).expanduser()
        if not p.is_file():
            raise FileNotFoundError(f"Config file not found: {p}")
        return p

    default = DEFAULT_CONFIG_PATH.expanduser()
    if default.is_file():
        return default
    return None


def _build_config(raw: dict, source: Path) -> BsrConfig:
    """Map raw YAML dict to a ``BsrConfig``, ignoring unknown keys."""
    # Deferred: bsr.parsing imports ConfigError from this module.
    from bsr.parsing import split_bootstrap_servers

    kwargs: dict[str, object] = {}

    for yaml_key, field_name in _YAML_KEY_TO_FIELD.items():
        if yaml_key in raw:
            kwargs[field_name] = raw[yaml_key]

    servers = kwargs.get("bootstrap_servers")
    if servers is not None:
        if isinstance(servers, str):
            servers = split_bootstrap_servers(servers)
        elif not isinstance(servers, list) or not all(
            isinstance(s, str) for s in servers
        ):
            raise ConfigError(
                f"bootstrap_servers in {source} must be a string or a list of strings"
            )
        kwargs["bootstrap_servers"] = servers

    lookup = kwargs.get("client_dns_lookup")
    if lookup is not None and not isinstance(lookup, str):
        raise ConfigError(f"client_dns_lookup in {source} must be a string")

    unknown = set(raw) - set(_YAML_KEY_TO_FIELD)
    if unknown:
        logger.warning(
            "Ignoring unknown config keys in %s: %s",
            source,
            ", ".join(sorted(str(k) for k in unknown)),
        )

    return BsrConfig(**kwargs)
