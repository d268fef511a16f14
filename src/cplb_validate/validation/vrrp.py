"""VRRP instance defaulting and validation."""

import logging

from cplb_validate.errors import (
    FormatError,
    LengthError,
    NICLookupError,
    RangeError,
    RequiredFieldError,
    SpecError,
)
from cplb_validate.models import (
    DEFAULT_ADVERT_INTERVAL,
    DEFAULT_VIRTUAL_ROUTER_ID,
    MAX_AUTH_PASS_LENGTH,
    KeepalivedSpec,
    VRRPInstance,
)
from cplb_validate.nic import DefaultNICResolver, get_default_nic
from cplb_validate.validation.utils import is_cidr

logger = logging.getLogger(__name__)


def _path(index: int, field: str) -> str:
    return f"keepalived.vrrpInstances[{index}].{field}"


def apply_vrrp_defaults(
    instance: VRRPInstance, index: int, resolver: DefaultNICResolver
) -> list[SpecError]:
    """Fill in unset fields of a VRRP instance.

    The router ID defaults to 51 plus the instance position, so instances in
    the same spec never share an ID. If the default NIC cannot be resolved the
    interface is left empty and the failure is returned as an error.

    Args:
        instance: VRRP instance to update in place
        index: Position of the instance in the spec
        resolver: Callable returning the default interface name

    Returns:
        Errors raised while resolving the default interface
    """
    errors: list[SpecError] = []

    if not instance.interface:
        nic = ""
        try:
            nic = resolver()
        except Exception as e:
            # Any resolver failure is reported; defaulting continues
            error = NICLookupError(f"failed to get default NIC: {e}", _path(index, "interface"))
            error.__cause__ = e
            errors.append(error)
        instance.interface = nic
        logger.debug("vrrpInstances[%d]: defaulted interface to %r", index, nic)

    if instance.virtual_router_id is None:
        instance.virtual_router_id = DEFAULT_VIRTUAL_ROUTER_ID + index
        logger.debug(
            "vrrpInstances[%d]: defaulted virtualRouterID to %d",
            index,
            instance.virtual_router_id,
        )

    if instance.advert_interval is None:
        instance.advert_interval = DEFAULT_ADVERT_INTERVAL
        logger.debug(
            "vrrpInstances[%d]: defaulted advertInterval to %d", index, DEFAULT_ADVERT_INTERVAL
        )

    return errors


def check_vrrp_instance(instance: VRRPInstance, index: int) -> list[SpecError]:
    """Check the constraints of a single VRRP instance.

    Args:
        instance: VRRP instance to check
        index: Position of the instance in the spec

    Returns:
        Errors found, in field order
    """
    errors: list[SpecError] = []

    # 0 is let through; only negative IDs are caught on the lower bound
    vrid = instance.virtual_router_id
    if vrid is not None and (vrid < 0 or vrid > 255):
        errors.append(
            RangeError(
                "VirtualRouterID must be in the range of 1-255",
                _path(index, "virtualRouterID"),
            )
        )

    if instance.auth_pass == "":
        errors.append(RequiredFieldError("AuthPass must be defined", _path(index, "authPass")))
    # keepalived limits the password to 8 bytes, not characters
    if len(instance.auth_pass.encode()) > MAX_AUTH_PASS_LENGTH:
        errors.append(
            LengthError(
                f"AuthPass must be {MAX_AUTH_PASS_LENGTH} characters or less",
                _path(index, "authPass"),
            )
        )

    if not instance.virtual_ips:
        errors.append(
            RequiredFieldError("VirtualIPs must be defined", _path(index, "virtualIPs"))
        )
    for vip in instance.virtual_ips:
        if not is_cidr(vip):
            errors.append(
                FormatError(f"VirtualIPs must be a CIDR. Got: {vip}", _path(index, "virtualIPs"))
            )

    return errors


def validate_vrrp_instances(
    keepalived: KeepalivedSpec, get_default_nic_fn: DefaultNICResolver | None = None
) -> list[SpecError]:
    """Default and validate every VRRP instance of a keepalived spec.

    Instances are processed in order and the spec is updated in place. Nothing
    stops the loop early: every instance is defaulted and every problem is
    reported.

    Args:
        keepalived: Keepalived spec to update
        get_default_nic_fn: Resolver for the default interface. None selects
            the routing-table lookup from ``cplb_validate.nic``.

    Returns:
        All errors found, ordered by instance
    """
    resolver = get_default_nic_fn or get_default_nic
    errors: list[SpecError] = []
    for index, instance in enumerate(keepalived.vrrp_instances):
        errors.extend(apply_vrrp_defaults(instance, index, resolver))
        errors.extend(check_vrrp_instance(instance, index))
    return errors
