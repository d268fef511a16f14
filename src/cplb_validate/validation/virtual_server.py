"""Virtual server defaulting and validation."""

import logging

from cplb_validate.errors import (
    EnumError,
    FormatError,
    RangeError,
    RequiredFieldError,
    SpecError,
)
from cplb_validate.models import (
    DEFAULT_PERSISTENCE_TIMEOUT,
    KeepalivedSpec,
    LBAlgo,
    LBKind,
    VirtualServer,
)
from cplb_validate.validation.utils import is_ip_literal

logger = logging.getLogger(__name__)

VALID_LB_ALGOS = frozenset(algo.value for algo in LBAlgo)
VALID_LB_KINDS = frozenset(kind.value for kind in LBKind)


def _path(index: int, field: str) -> str:
    return f"keepalived.virtualServers[{index}].{field}"


def apply_virtual_server_defaults(server: VirtualServer, index: int) -> None:
    """Fill in unset fields of a virtual server.

    A persistence timeout of 0 counts as unset and becomes 360. Fields that
    hold an invalid value are left alone.

    Args:
        server: Virtual server to update in place
        index: Position of the server in the spec
    """
    if not server.lb_algo:
        server.lb_algo = LBAlgo.RR.value
        logger.debug("virtualServers[%d]: defaulted lbAlgo to %s", index, server.lb_algo)

    if not server.lb_kind:
        server.lb_kind = LBKind.DR.value
        logger.debug("virtualServers[%d]: defaulted lbKind to %s", index, server.lb_kind)

    if server.persistence_timeout_seconds == 0:
        server.persistence_timeout_seconds = DEFAULT_PERSISTENCE_TIMEOUT
        logger.debug(
            "virtualServers[%d]: defaulted persistenceTimeoutSeconds to %d",
            index,
            DEFAULT_PERSISTENCE_TIMEOUT,
        )


def check_virtual_server(server: VirtualServer, index: int) -> list[SpecError]:
    """Check the constraints of a single virtual server.

    An empty IP address yields two errors: one for the missing value and one
    because the empty string is not an IP literal.

    Args:
        server: Virtual server to check
        index: Position of the server in the spec

    Returns:
        Errors found, in field order
    """
    errors: list[SpecError] = []

    if server.ip_address == "":
        errors.append(RequiredFieldError("IPAddress must be defined", _path(index, "ipAddress")))
    if not is_ip_literal(server.ip_address):
        errors.append(
            FormatError(f"invalid IP address: {server.ip_address}", _path(index, "ipAddress"))
        )

    if server.lb_algo and server.lb_algo not in VALID_LB_ALGOS:
        errors.append(EnumError(f"invalid LBAlgo: {server.lb_algo}", _path(index, "lbAlgo")))

    if server.lb_kind and server.lb_kind not in VALID_LB_KINDS:
        errors.append(EnumError(f"invalid LBKind: {server.lb_kind}", _path(index, "lbKind")))

    if server.persistence_timeout_seconds < 0:
        errors.append(
            RangeError(
                "PersistenceTimeout must be a positive integer",
                _path(index, "persistenceTimeoutSeconds"),
            )
        )

    if server.delay_loop < 0:
        errors.append(
            RangeError("DelayLoop must be a positive integer", _path(index, "delayLoop"))
        )

    return errors


def validate_virtual_servers(keepalived: KeepalivedSpec) -> list[SpecError]:
    """Default and validate every virtual server of a keepalived spec.

    IP address uniqueness across servers is not checked here.

    Args:
        keepalived: Keepalived spec to update in place

    Returns:
        All errors found, ordered by server
    """
    errors: list[SpecError] = []
    for index, server in enumerate(keepalived.virtual_servers):
        apply_virtual_server_defaults(server, index)
        errors.extend(check_virtual_server(server, index))
    return errors
