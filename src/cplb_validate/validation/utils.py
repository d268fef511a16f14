"""Shared address parsing helpers for validators."""

from ipaddress import IPv6Address, ip_address, ip_interface


def is_cidr(value: str) -> bool:
    """Check that a string is an address with a decimal prefix length.

    Host bits may be set ("10.0.0.5/24" is accepted). A bare address or a
    dotted netmask suffix is not CIDR notation.

    Args:
        value: Candidate CIDR string

    Returns:
        True if the value is valid IPv4 or IPv6 CIDR notation
    """
    address, sep, prefix = value.partition("/")
    if not sep or not prefix.isascii() or not prefix.isdigit():
        return False
    if "%" in address:
        return False
    try:
        ip_interface(value)
    except ValueError:
        return False
    return True


def is_ip_literal(value: str) -> bool:
    """Check that a string is a plain IPv4 or IPv6 address.

    CIDR notation and scoped IPv6 addresses (e.g., "fe80::1%eth0") are rejected.

    Args:
        value: Candidate address

    Returns:
        True if the value is a valid IP literal
    """
    try:
        addr = ip_address(value)
    except ValueError:
        return False
    if isinstance(addr, IPv6Address) and addr.scope_id:
        return False
    return True
