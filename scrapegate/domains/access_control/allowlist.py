"""Static IP allow-list.

Entries are literal IP strings or CIDR ranges. Literal entries match by
exact string comparison, so an entry also matches a non-IP remote address
written the same way. Entries containing ``/`` are parsed as CIDR once, at
construction; entries that do not parse are kept but never match.
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv4Network, IPv6Address, IPv6Network, ip_address, ip_network
from typing import Iterable, Optional, Union

_Network = Union[IPv4Network, IPv6Network]
_Address = Union[IPv4Address, IPv6Address]


def split_host_port(address: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[host]:port`` into host and port.

    Raises:
        ValueError: If ``address`` is not in one of those forms.
    """
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in address: {address!r}")
        if address[end + 1 : end + 2] != ":":
            raise ValueError(f"missing port in address: {address!r}")
        return address[1:end], address[end + 2 :]

    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address: {address!r}")
    if ":" in host:
        raise ValueError(f"too many colons in address: {address!r}")
    return host, port


def join_host_port(host: str, port: Union[int, str]) -> str:
    """Inverse of ``split_host_port``; hosts containing ``:`` are bracketed."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def resolve_client_ip(remote: str) -> str:
    """Return the host part of ``remote``, or ``remote`` itself if it has no port."""
    try:
        host, _ = split_host_port(remote)
    except ValueError:
        return remote
    return host


def _parse_ip(value: str) -> Optional[_Address]:
    try:
        addr = ip_address(value)
    except ValueError:
        return None
    if isinstance(addr, IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


class AllowList:
    """Ordered, immutable set of allowed IPs and CIDR ranges."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: tuple[str, ...] = tuple(entries)
        self._networks: tuple[_Network, ...] = tuple(
            network
            for network in (self._parse_network(e) for e in self._entries if "/" in e)
            if network is not None
        )

    @staticmethod
    def _parse_network(entry: str) -> Optional[_Network]:
        try:
            return ip_network(entry, strict=False)
        except ValueError:
            return None

    @property
    def entries(self) -> tuple[str, ...]:
        return self._entries

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AllowList({list(self._entries)!r})"

    def allows(self, ip: str) -> bool:
        """Return True if ``ip`` is allowed.

        An empty allow-list allows everything.
        """
        if not self._entries:
            return True
        if ip in self._entries:
            return True

        addr = _parse_ip(ip)
        if addr is None:
            return False
        return any(
            addr.version == network.version and addr in network for network in self._networks
        )
