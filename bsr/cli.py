"""CLI entry point for the bsr tool."""

import logging
import sys

import click

from bsr.bootstrap import parse_and_validate_addresses
from bsr.config import ConfigError, load_config
from bsr.lookup import ClientDnsLookup
from bsr.output import FORMATS, render
from bsr.parsing import split_bootstrap_servers

logger = logging.getLogger(__name__)

DNS_LOOKUPS = tuple(m.value for m in ClientDnsLookup)


@click.command()
@click.option(
    "--bootstrap-servers",
    "-b",
    "bootstrap_servers",
    multiple=True,
    help="host:port entry or comma-separated list; may be repeated.",
)
@click.option(
    "--dns-lookup",
    "-d",
    "dns_lookup",
    default=None,
    type=click.Choice(DNS_LOOKUPS, case_sensitive=False),
    help="DNS lookup strategy (default: from config, else use_all_dns_ips).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    default="table",
    type=click.Choice(FORMATS, case_sensitive=False),
    show_default=True,
    help="Output format.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    type=click.Path(exists=False),
    help="Path to YAML config file (default: ~/.bsr/config.yaml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(
    bootstrap_servers: tuple[str, ...],
    dns_lookup: str | None,
    output_format: str,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Resolve bootstrap servers into connectable addresses."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        cfg = load_config(config_path)
    except (ConfigError, FileNotFoundError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    logger.debug("Config loaded: %s", cfg)

    servers = cfg.bootstrap_servers
    if bootstrap_servers:
        servers = [s for value in bootstrap_servers for s in split_bootstrap_servers(value)]

    try:
        lookup = ClientDnsLookup.for_config(dns_lookup or cfg.client_dns_lookup)
        endpoints = parse_and_validate_addresses(servers, lookup)
    except (ConfigError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    render(endpoints, lookup, output_format)
