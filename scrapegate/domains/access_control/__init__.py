"""Access control domain - static IP allow-listing."""

from scrapegate.domains.access_control.allowlist import (
    AllowList,
    join_host_port,
    resolve_client_ip,
    split_host_port,
)

__all__ = ["AllowList", "join_host_port", "resolve_client_ip", "split_host_port"]
