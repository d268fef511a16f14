"""Pytest configuration and fixtures for cplb-validate tests."""

from collections.abc import Callable

import pytest

from cplb_validate.models import KeepalivedSpec, LoadBalancingSpec, VirtualServer, VRRPInstance


@pytest.fixture
def fake_nic() -> Callable[[], str]:
    """Default NIC resolver that always answers "eth0" without touching the host."""

    def resolve() -> str:
        return "eth0"

    return resolve


@pytest.fixture
def failing_nic() -> Callable[[], str]:
    """Default NIC resolver that always fails."""

    def resolve() -> str:
        raise LookupError("no default route found")

    return resolve


@pytest.fixture
def vrrp_instance() -> VRRPInstance:
    """Minimal valid VRRP instance (interface, router ID and interval unset)."""
    return VRRPInstance(virtual_ips=["192.168.1.100/24"], auth_pass="secret")


@pytest.fixture
def virtual_server() -> VirtualServer:
    """Minimal valid virtual server."""
    return VirtualServer(ip_address="192.168.1.100")


@pytest.fixture
def full_spec() -> LoadBalancingSpec:
    """Fully defaulted, valid spec with one VRRP instance and one virtual server."""
    return LoadBalancingSpec(
        enabled=True,
        type="Keepalived",
        keepalived=KeepalivedSpec(
            vrrp_instances=[
                VRRPInstance(
                    virtual_ips=["192.168.1.100/24"],
                    interface="eth0",
                    virtual_router_id=51,
                    advert_interval=1,
                    auth_pass="secret",
                )
            ],
            virtual_servers=[
                VirtualServer(
                    ip_address="192.168.1.100",
                    delay_loop=5,
                    lb_algo="rr",
                    lb_kind="DR",
                    persistence_timeout_seconds=360,
                )
            ],
        ),
    )


@pytest.fixture
def sample_document() -> str:
    """Bare load balancing block as YAML."""
    return """\
enabled: true
keepalived:
  vrrpInstances:
    - virtualIPs: ["192.168.1.100/24"]
      interface: eth0
      authPass: secret
  virtualServers:
    - ipAddress: 192.168.1.100
      delayLoop: 5
"""


@pytest.fixture
def cluster_config_document(sample_document: str) -> str:
    """k0s ClusterConfig embedding the sample block and an external address."""
    indented = "".join(f"      {line}\n" for line in sample_document.splitlines())
    return (
        "apiVersion: k0s.k0sproject.io/v1beta1\n"
        "kind: ClusterConfig\n"
        "metadata:\n"
        "  name: k0s\n"
        "spec:\n"
        "  api:\n"
        "    externalAddress: 10.0.0.10\n"
        "  network:\n"
        "    controlPlaneLoadBalancing:\n"
        f"{indented}"
    )
