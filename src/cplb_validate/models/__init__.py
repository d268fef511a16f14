"""Pydantic models for control plane load balancing configuration.

Field names follow Python conventions; every field serializes to (and accepts)
the JSON name used in k0s cluster configuration.
"""

from cplb_validate.models.cplb import CPLBType, LoadBalancingSpec
from cplb_validate.models.keepalived import (
    DEFAULT_ADVERT_INTERVAL,
    DEFAULT_PERSISTENCE_TIMEOUT,
    DEFAULT_VIRTUAL_ROUTER_ID,
    MAX_AUTH_PASS_LENGTH,
    KeepalivedSpec,
    LBAlgo,
    LBKind,
    RealServer,
    VirtualServer,
    VRRPInstance,
)

__all__ = [
    # cplb
    "CPLBType",
    "LoadBalancingSpec",
    # keepalived
    "DEFAULT_ADVERT_INTERVAL",
    "DEFAULT_PERSISTENCE_TIMEOUT",
    "DEFAULT_VIRTUAL_ROUTER_ID",
    "MAX_AUTH_PASS_LENGTH",
    "KeepalivedSpec",
    "LBAlgo",
    "LBKind",
    "RealServer",
    "VirtualServer",
    "VRRPInstance",
]
