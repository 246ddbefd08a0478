"""Tests for the output renderer."""

import json
from ipaddress import ip_address

import pytest

from bsr.lookup import ClientDnsLookup
from bsr.models import SocketEndpoint
from bsr.output import render, render_to_string

USE_ALL = ClientDnsLookup.USE_ALL_DNS_IPS


def _endpoints() -> list[SocketEndpoint]:
    return [
        SocketEndpoint("kafka.apache.org", ip_address("198.51.100.0"), 9092),
        SocketEndpoint("kafka.apache.org", ip_address("198.51.100.5"), 9092),
        SocketEndpoint("localhost", ip_address("::1"), 9093),
    ]


class TestRenderTable:
    def test_rows_present(self) -> None:
        output = render_to_string(_endpoints(), USE_ALL, "table")

        assert "kafka.apache.org" in output
        assert "198.51.100.0" in output
        assert "198.51.100.5" in output
        assert "::1" in output
        assert "9093" in output

    def test_family_column(self) -> None:
        output = render_to_string(_endpoints(), USE_ALL, "table")

        assert "IPv4" in output
        assert "IPv6" in output

    def test_title_names_strategy(self) -> None:
        output = render_to_string(_endpoints(), USE_ALL, "table")

        assert "use_all_dns_ips" in output

    def test_summary_line(self) -> None:
        output = render_to_string(_endpoints(), USE_ALL, "table")

        assert "3 address(es), 2 distinct host name(s)" in output


class TestRenderJson:
    def test_payload(self) -> None:
        output = render_to_string(_endpoints(), USE_ALL, "json")
        payload = json.loads(output)

        assert payload["client_dns_lookup"] == "use_all_dns_ips"
        assert payload["endpoints"][0] == {
            "hostname": "kafka.apache.org",
            "ip": "198.51.100.0",
            "port": 9092,
            "family": 4,
        }
        assert payload["endpoints"][2]["family"] == 6

    def test_empty(self) -> None:
        payload = json.loads(render_to_string([], USE_ALL, "json"))

        assert payload["endpoints"] == []


class TestRenderDispatch:
    def test_unknown_format_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown output format"):
            render(_endpoints(), USE_ALL, "xml")
