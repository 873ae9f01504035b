"""IP literal parsing helpers."""
from __future__ import annotations

import ipaddress

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def split_host_port(value: str) -> tuple[str, str] | None:
    """Split ``host:port`` or ``[host]:port``; the port is returned unchecked."""
    colon = value.rfind(":")
    if colon < 0:
        return None
    if value.startswith("["):
        end = value.find("]")
        if end + 1 != colon:
            return None
        host = value[1:end]
        open_from, close_from = 1, end + 1
    else:
        host = value[:colon]
        if ":" in host:
            return None
        open_from, close_from = 0, 0
    if "[" in value[open_from:] or "]" in value[close_from:]:
        return None
    return host, value[colon + 1 :]


def parse_ip(value: str) -> IPAddress | None:
    # zone-scoped IPv6 ("fe80::1%eth0") is an interface reference, not a literal
    if "%" in value:
        return None
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return None
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def normalize_ip(value: str) -> str:
    """Return the canonical IP found in ``value`` or ``""``.

    ``value`` may be a bare IPv4/IPv6 literal or a ``host:port`` pair whose
    host is one. Only the address is validated, the port is never range
    checked.
    """
    parts = split_host_port(value)
    candidate = parts[0] if parts is not None else value
    address = parse_ip(candidate)
    if address is None:
        return ""
    return str(address)
