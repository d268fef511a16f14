"""Keepalived configuration models (VRRP instances and virtual servers)."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# keepalived's own defaults
DEFAULT_VIRTUAL_ROUTER_ID = 51
DEFAULT_ADVERT_INTERVAL = 1
DEFAULT_PERSISTENCE_TIMEOUT = 360

MAX_AUTH_PASS_LENGTH = 8


class LBAlgo(str, Enum):
    """IPVS scheduling algorithm for a virtual server."""

    RR = "rr"
    """Round robin (default)."""

    WRR = "wrr"
    """Weighted round robin."""

    LC = "lc"
    """Least connection."""

    WLC = "wlc"
    """Weighted least connection."""

    LBLC = "lblc"
    """Locality-based least connection."""

    DH = "dh"
    """Destination hashing."""

    SH = "sh"
    """Source hashing."""

    SED = "sed"
    """Shortest expected delay."""

    NQ = "nq"
    """Never queue."""


class LBKind(str, Enum):
    """IPVS packet forwarding method for a virtual server."""

    NAT = "NAT"
    DR = "DR"
    """Direct routing (default)."""

    TUN = "TUN"


class VRRPInstance(BaseModel):
    """Configuration for a single VRRP instance (virtual router group).

    The virtual router ID must be identical on every control plane node, and
    two clusters sharing a broadcast domain must not use the same ID. The
    authentication password only protects against accidental collisions with
    unrelated VRRP groups; it is not a security feature.
    """

    model_config = ConfigDict(populate_by_name=True)

    virtual_ips: list[str] = Field(
        default_factory=list,
        alias="virtualIPs",
        description="Virtual IP addresses in CIDR notation (RFC 4632, RFC 4291)",
    )
    interface: Annotated[
        str,
        Field("", description="NIC used by the virtual router (default: default route owner)"),
    ]
    virtual_router_id: Annotated[
        int | None,
        Field(None, alias="virtualRouterID", description="VRRP router ID (1-255)"),
    ]
    advert_interval: Annotated[
        int | None,
        Field(None, alias="advertInterval", description="Advertisement interval in seconds"),
    ]
    auth_pass: Annotated[
        str, Field("", alias="authPass", description="VRRP password (8 characters or less)")
    ]


class RealServer(BaseModel):
    """A backend target of a virtual server."""

    model_config = ConfigDict(populate_by_name=True)

    ip_address: Annotated[
        str, Field("", alias="ipAddress", description="Real server IP address")
    ]
    weight: Annotated[int, Field(1, description="Relative weight of the real server")]


class VirtualServer(BaseModel):
    """Configuration for an IPVS virtual server.

    Virtual servers are keyed by IP address. Enum-like fields are kept as plain
    strings so that an unknown value reaches validation and is reported there
    instead of being rejected while loading.
    """

    model_config = ConfigDict(populate_by_name=True)

    ip_address: Annotated[
        str, Field("", alias="ipAddress", description="Virtual IP address of the server")
    ]
    delay_loop: Annotated[
        int, Field(0, alias="delayLoop", description="Delay timer for check polling (seconds)")
    ]
    lb_algo: Annotated[
        str, Field("", alias="lbAlgo", description="Load balancing algorithm (default: rr)")
    ]
    lb_kind: Annotated[
        str, Field("", alias="lbKind", description="Load balancing kind (default: DR)")
    ]
    persistence_timeout_seconds: Annotated[
        int,
        Field(
            0,
            alias="persistenceTimeoutSeconds",
            description="Timeout for persistent connections (default: 360)",
        ),
    ]
    real_servers: list[RealServer] = Field(
        default_factory=list, alias="realServers", description="Backend real servers"
    )


class KeepalivedSpec(BaseModel):
    """Keepalived load balancing configuration.

    Holds any number of VRRP instances (virtual IP failover) and virtual
    servers (IPVS load balancing).
    """

    model_config = ConfigDict(populate_by_name=True)

    vrrp_instances: list[VRRPInstance] = Field(
        default_factory=list, alias="vrrpInstances", description="VRRP instances"
    )
    virtual_servers: list[VirtualServer] = Field(
        default_factory=list, alias="virtualServers", description="IPVS virtual servers"
    )
