"""Tests for tier0_core modules."""
from __future__ import annotations

import ipaddress

import pytest

from hostmap_sdk.tier0_core.address import (
    HostEntry,
    normalize_hostname,
    parse_address,
)
from hostmap_sdk.tier0_core.config import HostMapConfig, _reset_config, get_config
from hostmap_sdk.tier0_core.errors import (
    ConfigurationError,
    HostMapError,
    InvalidAddressError,
    InvalidHostnameError,
    ResolverAccessError,
)


# ── errors ─────────────────────────────────────────────────────────────────

class TestErrors:
    def test_base_error_has_code(self):
        e = HostMapError("hostmap_broken", user_message="Something broke")
        assert e.code == "hostmap_broken"
        assert "Something broke" in str(e)

    def test_invalid_address_carries_value(self):
        e = InvalidAddressError("1.2.3")
        assert isinstance(e, HostMapError)
        assert e.code == "invalid_address"
        assert e.address == "1.2.3"
        assert "1.2.3" in str(e)

    def test_resolver_access_error_detail(self):
        e = ResolverAccessError(user_message="No hooks", detail="socket lacks getaddrinfo")
        assert e.code == "resolver_access_error"
        assert str(e) == "socket lacks getaddrinfo"
        assert e.user_message == "No hooks"

    def test_to_dict(self):
        d = InvalidHostnameError(user_message="Hostname must be non-empty").to_dict()
        assert d == {
            "error": {"code": "invalid_hostname", "message": "Hostname must be non-empty"}
        }

    def test_configuration_error(self):
        e = ConfigurationError(user_message="Unknown backend")
        assert isinstance(e, HostMapError)
        assert e.code == "configuration_error"


# ── address ────────────────────────────────────────────────────────────────

class TestAddress:
    def test_parse_dotted_quad(self):
        assert str(parse_address("192.168.1.10")) == "192.168.1.10"

    def test_parse_strips_whitespace(self):
        assert str(parse_address(" 10.0.0.1 ")) == "10.0.0.1"

    def test_parse_bytes(self):
        assert str(parse_address(bytes([192, 168, 1, 12]))) == "192.168.1.12"

    def test_parse_int_sequence(self):
        assert str(parse_address([192, 168, 1, 20])) == "192.168.1.20"

    def test_parse_ipv4address_passthrough(self):
        addr = ipaddress.IPv4Address("1.2.3.4")
        assert parse_address(addr) is addr

    @pytest.mark.parametrize(
        "bad",
        ["1.2.3", "1.2.3.400", "1.2.3.4.5", "a.b.c.d", "", "1..2.3", "-1.2.3.4", "01.2.3.4"],
    )
    def test_malformed_strings_rejected(self, bad):
        with pytest.raises(InvalidAddressError):
            parse_address(bad)

    def test_wrong_byte_length_rejected(self):
        with pytest.raises(InvalidAddressError, match="exactly 4 bytes"):
            parse_address(b"\x01\x02\x03")

    def test_out_of_range_octet_sequence_rejected(self):
        with pytest.raises(InvalidAddressError):
            parse_address([192, 168, 1, 256])

    def test_unsupported_type_rejected(self):
        with pytest.raises(InvalidAddressError):
            parse_address(3232235786)  # type: ignore[arg-type]

    def test_normalize_hostname(self):
        assert normalize_hostname("  ZooKeeper1.BigData ") == "zookeeper1.bigdata"

    @pytest.mark.parametrize("bad", ["", "   ", None])
    def test_empty_hostname_rejected(self, bad):
        with pytest.raises(InvalidHostnameError):
            normalize_hostname(bad)  # type: ignore[arg-type]

    def test_host_entry(self):
        entry = HostEntry.create("DataNode2.bigdata", "192.168.1.23")
        assert entry.hostname == "datanode2.bigdata"
        assert entry.ip == "192.168.1.23"
        assert entry.packed == bytes([192, 168, 1, 23])


# ── config ─────────────────────────────────────────────────────────────────

class TestConfig:
    def test_defaults_from_env(self):
        config = get_config()
        assert config.resolver_backend == "socket"
        assert config.service_name == "test-service"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_unknown_backend_raises_configuration_error(self, monkeypatch):
        monkeypatch.setenv("HOSTMAP_RESOLVER_BACKEND", "reflection")
        _reset_config()
        with pytest.raises(ConfigurationError):
            get_config()

    def test_backend_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("HOSTMAP_RESOLVER_BACKEND", "EXPLICIT")
        _reset_config()
        assert get_config().resolver_backend == "explicit"

    def test_static_hosts_parsed_in_order(self):
        config = HostMapConfig(
            HOSTMAP_HOSTS="zookeeper1.bigdata=192.168.1.10, zookeeper2.bigdata = 192.168.1.11,"
        )
        assert config.static_hosts == [
            ("zookeeper1.bigdata", "192.168.1.10"),
            ("zookeeper2.bigdata", "192.168.1.11"),
        ]

    def test_static_hosts_empty(self):
        assert HostMapConfig(HOSTMAP_HOSTS="").static_hosts == []

    def test_static_hosts_entry_without_separator(self):
        config = HostMapConfig(HOSTMAP_HOSTS="zookeeper1.bigdata")
        with pytest.raises(ConfigurationError):
            config.static_hosts


# ── logging ────────────────────────────────────────────────────────────────

class TestLogging:
    def test_get_logger_returns_bound_logger(self):
        from hostmap_sdk.tier0_core.logging import get_logger
        log = get_logger("hostmap_sdk.tests")
        assert hasattr(log, "info")
        log.info("tests.logging_works", hostname="zookeeper1.bigdata")
