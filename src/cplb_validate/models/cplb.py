"""Top-level control plane load balancing model."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from cplb_validate.models.keepalived import KeepalivedSpec


class CPLBType(str, Enum):
    """Backing implementation of control plane load balancing."""

    KEEPALIVED = "Keepalived"
    """keepalived, providing VRRP failover and IPVS virtual servers."""


class LoadBalancingSpec(BaseModel):
    """Control plane load balancing configuration.

    ``type`` is a plain string rather than ``CPLBType`` so that an unsupported
    value is reported by validation together with every other problem.
    """

    model_config = ConfigDict(populate_by_name=True)

    enabled: Annotated[
        bool, Field(False, description="Enable control plane load balancing")
    ]
    type: Annotated[str, Field("", description="Load balancer type (default: Keepalived)")]
    keepalived: Annotated[
        KeepalivedSpec | None,
        Field(None, description="Keepalived-specific configuration"),
    ]
