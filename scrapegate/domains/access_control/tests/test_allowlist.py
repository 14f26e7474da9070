"""Unit tests for the IP allow-list and remote address parsing."""

import pytest

from scrapegate.domains.access_control import (
    AllowList,
    join_host_port,
    resolve_client_ip,
    split_host_port,
)


class TestSplitHostPort:
    @pytest.mark.parametrize(
        "address, expected",
        [
            ("10.1.2.3:9100", ("10.1.2.3", "9100")),
            ("[::1]:80", ("::1", "80")),
            ("localhost:8080", ("localhost", "8080")),
            (":9100", ("", "9100")),
        ],
    )
    def test_valid(self, address, expected):
        assert split_host_port(address) == expected

    @pytest.mark.parametrize("address", ["10.1.2.3", "::1", "[::1]", "[::1", "weirdstring"])
    def test_invalid(self, address):
        with pytest.raises(ValueError):
            split_host_port(address)


class TestJoinHostPort:
    def test_ipv4(self):
        assert join_host_port("10.1.2.3", 9100) == "10.1.2.3:9100"

    def test_ipv6_is_bracketed_and_splits_back(self):
        joined = join_host_port("fd12::1", 80)
        assert joined == "[fd12::1]:80"
        assert split_host_port(joined) == ("fd12::1", "80")


class TestResolveClientIp:
    def test_strips_port(self):
        assert resolve_client_ip("10.1.2.3:51234") == "10.1.2.3"

    def test_falls_back_to_raw_string(self):
        assert resolve_client_ip("weirdstring") == "weirdstring"
        assert resolve_client_ip("10.1.2.3") == "10.1.2.3"
        assert resolve_client_ip("::1") == "::1"


class TestAllowList:
    def test_empty_allows_everyone(self):
        allowlist = AllowList([])
        assert not allowlist
        assert allowlist.allows("8.8.8.8")
        assert allowlist.allows("weirdstring")

    def test_cidr_range(self):
        allowlist = AllowList(["10.0.0.0/8"])
        assert allowlist.allows("10.1.2.3")
        assert not allowlist.allows("8.8.8.8")

    def test_cidr_with_host_bits_set(self):
        assert AllowList(["192.168.1.77/24"]).allows("192.168.1.5")

    def test_literal_entry(self):
        allowlist = AllowList(["192.168.1.5"])
        assert allowlist.allows("192.168.1.5")
        assert not allowlist.allows("192.168.1.6")

    def test_unparsable_remote_is_compared_literally(self):
        assert not AllowList(["192.168.1.5"]).allows("weirdstring")
        assert AllowList(["192.168.1.5", "weirdstring"]).allows("weirdstring")

    def test_invalid_cidr_entries_are_skipped(self):
        allowlist = AllowList(["300.0.0.0/8", "10.0.0.0/33", "172.16.0.0/12"])
        assert allowlist.allows("172.16.4.4")
        assert not allowlist.allows("10.0.0.1")
        assert len(allowlist) == 3

    def test_ipv6_range(self):
        allowlist = AllowList(["fd00::/8"])
        assert allowlist.allows("fd12::1")
        assert not allowlist.allows("10.1.2.3")

    def test_ipv4_mapped_client_matches_ipv4_range(self):
        assert AllowList(["10.0.0.0/8"]).allows("::ffff:10.1.2.3")

    def test_entries_keep_order(self):
        assert AllowList(["b", "a/1", "c"]).entries == ("b", "a/1", "c")
