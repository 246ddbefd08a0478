"""Tests for bootstrap entry parsing and validation."""

import pytest

from bsr.config import ConfigError
from bsr.models import ParsedEndpoint
from bsr.parsing import format_address, parse_endpoint, split_bootstrap_servers


class TestParseEndpointValid:
    @pytest.mark.parametrize(
        ("raw", "host", "port"),
        [
            ("127.0.0.1:8000", "127.0.0.1", 8000),
            ("localhost:8080", "localhost", 8080),
            ("kafka-1.example.com:9092", "kafka-1.example.com", 9092),
            ("[::1]:8000", "::1", 8000),
            (
                "[2001:db8:85a3:8d3:1319:8a2e:370:7348]:1234",
                "2001:db8:85a3:8d3:1319:8a2e:370:7348",
                1234,
            ),
            ("[fe80::1%eth0]:9092", "fe80::1%eth0", 9092),
            ("localhost:0", "localhost", 0),
            ("localhost:65535", "localhost", 65535),
        ],
    )
    def test_recovers_host_and_port(self, raw: str, host: str, port: int) -> None:
        assert parse_endpoint(raw) == ParsedEndpoint(host=host, port=port)


class TestParseEndpointInvalid:
    @pytest.mark.parametrize(
        ("raw", "reason"),
        [
            ("127.0.0.1", "missing port"),
            ("localhost:", "missing port"),
            ("[::1]", "missing port"),
            ("[::1]:", "missing port"),
            ("", "missing port"),
            ("localhost:70000", "out of range"),
            ("localhost:65536", "out of range"),
            ("localhost:http", "not a number"),
            ("localhost:-1", "not a number"),
            ("localhost:+80", "not a number"),
            (":9092", "empty host"),
            ("[]:9092", "empty host"),
            ("::1:9092", "enclosed in brackets"),
            ("[::1:9092", "unclosed bracket"),
            ("[[::1]]:9092", "nested or repeated"),
            ("[::1]]:9092", "nested or repeated"),
            ("[::1]9092", "expected ':'"),
            ("local]host:9092", "misplaced bracket"),
            ("[localhost]:9092", "not an IPv6 address"),
            (" localhost:9092", "invalid host"),
            ("localhost :9092", "invalid host"),
            ("localhost: 9092", "not a number"),
        ],
    )
    def test_raises_config_error(self, raw: str, reason: str) -> None:
        with pytest.raises(ConfigError, match=reason):
            parse_endpoint(raw)

    def test_huge_port_is_out_of_range(self) -> None:
        with pytest.raises(ConfigError, match="out of range"):
            parse_endpoint("localhost:" + "9" * 5000)

    def test_leading_zeros_within_length(self) -> None:
        assert parse_endpoint("localhost:00080").port == 80

    def test_message_names_entry(self) -> None:
        with pytest.raises(ConfigError, match="'localhost:70000'"):
            parse_endpoint("localhost:70000")

    def test_config_error_is_not_value_error(self) -> None:
        assert not issubclass(ConfigError, ValueError)


class TestSplitBootstrapServers:
    def test_comma_string(self) -> None:
        assert split_bootstrap_servers("a:1,b:2") == ["a:1", "b:2"]

    def test_keeps_empty_entries(self) -> None:
        assert split_bootstrap_servers("a:1,,b:2") == ["a:1", "", "b:2"]

    def test_list_passthrough(self) -> None:
        servers = ["a:1", "b:2"]

        result = split_bootstrap_servers(servers)

        assert result == servers
        assert result is not servers


class TestFormatAddress:
    def test_hostname(self) -> None:
        assert format_address("localhost", 9092) == "localhost:9092"

    def test_ipv6_bracketed(self) -> None:
        assert format_address("::1", 9092) == "[::1]:9092"

    def test_round_trip_ipv6(self) -> None:
        parsed = parse_endpoint("[2001:db8::1]:1234")

        assert format_address(parsed.host, parsed.port) == "[2001:db8::1]:1234"
