"""Default network interface discovery.

VRRP instances without an explicit interface are bound to the interface that
owns the IPv4 default route. Linux exposes the routing table in
``/proc/net/route``; no other platform is supported.
"""

import logging
import sys
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

PROC_NET_ROUTE = "/proc/net/route"

# Route flags from linux/route.h
RTF_UP = 0x0001
RTF_GATEWAY = 0x0002

DefaultNICResolver = Callable[[], str]
"""Zero-argument callable returning an interface name.

Implementations raise an exception when no name can be determined; the
validator reports any such exception as a lookup failure.
"""


class DefaultNICNotFound(LookupError):
    """Raised when the routing table has no usable default route."""


class UnsupportedPlatformError(OSError):
    """Raised when default route lookup is not implemented for this platform."""


def parse_default_route_interface(content: str) -> str:
    """Find the interface of the default route in ``/proc/net/route`` content.

    Args:
        content: Text of /proc/net/route (header line included)

    Returns:
        Name of the interface owning the first default route that is up and
        goes through a gateway

    Raises:
        DefaultNICNotFound: If no such route exists
    """
    for line in content.splitlines()[1:]:
        fields = line.split()
        if len(fields) < 4:
            continue
        iface, destination, _gateway, flags = fields[:4]
        if destination != "00000000":
            continue
        try:
            flag_bits = int(flags, 16)
        except ValueError:
            continue
        if flag_bits & RTF_UP and flag_bits & RTF_GATEWAY:
            return iface
    raise DefaultNICNotFound("no default route found")


def get_default_nic(route_table: str = PROC_NET_ROUTE) -> str:
    """Return the name of the interface owning the default route.

    Args:
        route_table: Path to the kernel routing table (for testing)

    Returns:
        Interface name (e.g., "eth0")

    Raises:
        UnsupportedPlatformError: If not running on Linux
        DefaultNICNotFound: If there is no default route
        OSError: If the routing table cannot be read
    """
    if not sys.platform.startswith("linux"):
        raise UnsupportedPlatformError(
            f"default NIC lookup is not supported on platform {sys.platform}"
        )

    iface = parse_default_route_interface(Path(route_table).read_text())
    logger.debug("Default route is owned by interface %s", iface)
    return iface
