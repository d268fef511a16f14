"""Validation and defaulting of control plane load balancing configuration.

``validate`` is the entry point. It fills in defaults in place and returns
every problem found; an empty list means the configuration is valid.
"""

import logging

from cplb_validate.errors import ConflictError, EnumError, SpecError
from cplb_validate.models import CPLBType, KeepalivedSpec, LoadBalancingSpec
from cplb_validate.nic import DefaultNICResolver
from cplb_validate.validation.virtual_server import validate_virtual_servers
from cplb_validate.validation.vrrp import validate_vrrp_instances

logger = logging.getLogger(__name__)


def validate(
    spec: LoadBalancingSpec | None,
    external_address: str = "",
    get_default_nic_fn: DefaultNICResolver | None = None,
) -> list[SpecError]:
    """Default and validate a load balancing spec.

    The spec is updated in place even when errors are found. Nested sections
    are validated regardless of earlier errors.

    Args:
        spec: Spec to validate, or None when the section is absent
        external_address: The cluster API external address (``spec.api.externalAddress``)
        get_default_nic_fn: Resolver for the default interface of VRRP instances

    Returns:
        All errors found, in the order they were detected
    """
    if spec is None:
        return []

    errors: list[SpecError] = []

    if spec.type == "":
        spec.type = CPLBType.KEEPALIVED.value
        logger.debug("defaulted type to %s", spec.type)
    elif spec.type != CPLBType.KEEPALIVED.value:
        errors.append(
            EnumError(
                f"unsupported CPLB type: {spec.type}. "
                f"Only allowed value: {CPLBType.KEEPALIVED.value}",
                "type",
            )
        )

    # An absent keepalived section has nothing to default
    keepalived = spec.keepalived if spec.keepalived is not None else KeepalivedSpec()

    errors.extend(validate_vrrp_instances(keepalived, get_default_nic_fn))
    errors.extend(validate_virtual_servers(keepalived))

    # The CPLB reconciler watches the kubernetes API endpoints, which is
    # incompatible with an external address in front of the API servers
    if external_address and keepalived.virtual_servers:
        errors.append(
            ConflictError(
                ".spec.api.externalAddress and virtualServers cannot be used together",
                "api.externalAddress",
            )
        )

    return errors


__all__ = [
    "validate",
    "validate_virtual_servers",
    "validate_vrrp_instances",
]
