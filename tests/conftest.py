"""Shared test fixtures for vsphere_vms tests."""

from types import SimpleNamespace
from typing import Any, Dict
from unittest import mock

import pytest

from vsphere_vms.models import NetworkCfg, VmData, VsphereCfg
from vsphere_vms.resolver import LookupData


@pytest.fixture
def vsphere_cfg() -> VsphereCfg:
    """vSphere placement config for testing."""
    return VsphereCfg(
        datacenter="dc-01",
        datastore="datastore-01",
        cluster="cluster-01",
        network_name="VM Network",
        template_name="ubuntu-template",
        template_folder="templates",
        vms_folder="k8s",
        enable_logging=True,
        enable_disk_uuid=True,
    )


@pytest.fixture
def network_cfg() -> NetworkCfg:
    """Guest network config for testing."""
    return NetworkCfg(
        gateway="10.0.0.1",
        dns_servers=["8.8.8.8"],
        dns_suffixes=["example.com"],
        domain="example.com",
        mask=24,
    )


@pytest.fixture
def vms():
    """Three VMs in a fixed order."""
    return [
        VmData(name="vm1", host_name="vm1-host", ipv4_address="10.0.0.5", num_cpus=2, memory=4096),
        VmData(name="vm2", host_name="vm2-host", ipv4_address="10.0.0.6", num_cpus=4, memory=8192),
        VmData(name="vm3", host_name="vm3-host", ipv4_address="10.0.0.7", num_cpus=1, memory=2048),
    ]


@pytest.fixture
def template_vm():
    """Template VM lookup result with two disks and two adapters."""
    return SimpleNamespace(
        id="4217a3b1-5c2e-4d7f-9a1b-000000000001",
        disks=[
            SimpleNamespace(eagerly_scrub=False, size=40, thin_provisioned=True, label="Hard disk 1"),
            SimpleNamespace(eagerly_scrub=True, size=100, thin_provisioned=False, label="Hard disk 2"),
        ],
        network_interfaces=[
            SimpleNamespace(adapter_type="vmxnet3", network_id="network-1"),
            SimpleNamespace(adapter_type="e1000e", network_id="network-2"),
        ],
        firmware="efi",
        efi_secure_boot_enabled=True,
    )


@pytest.fixture
def mock_platform(template_vm):
    """Mock vSphere platform where every lookup succeeds."""
    platform = mock.MagicMock()
    platform.get_datacenter.return_value = SimpleNamespace(id="datacenter-3")
    platform.get_compute_cluster.return_value = SimpleNamespace(id="domain-c8", resource_pool_id="resgroup-9")
    platform.get_datastore.return_value = SimpleNamespace(id="datastore-11")
    platform.get_virtual_machine.return_value = template_vm
    platform.get_network.return_value = SimpleNamespace(id="network-13")
    platform.create_virtual_machine.side_effect = lambda name, vm_args, opts=None: SimpleNamespace(
        id=f"{name}-id", args=vm_args
    )
    return platform


@pytest.fixture
def lookup_data(template_vm) -> LookupData:
    """Resolved lookups matching mock_platform."""
    return LookupData(
        datacenter=SimpleNamespace(id="datacenter-3"),
        cluster=SimpleNamespace(id="domain-c8", resource_pool_id="resgroup-9"),
        datastore=SimpleNamespace(id="datastore-11"),
        template_vm=template_vm,
        network=SimpleNamespace(id="network-13"),
    )


@pytest.fixture
def raw_config() -> Dict[str, Any]:
    """The three config objects as they appear in stack config."""
    return {
        "vms": [
            {"name": "vm1", "hostName": "vm1-host", "ipv4address": "10.0.0.5", "numCpus": 2, "memory": 4096},
            {"name": "vm2", "hostName": "vm2-host", "ipv4address": "10.0.0.6", "numCpus": 4, "memory": 8192},
        ],
        "vsphereCfg": {
            "datacenter": "dc-01",
            "datastore": "datastore-01",
            "cluster": "cluster-01",
            "networkName": "VM Network",
            "templateName": "ubuntu-template",
            "templateFolder": "templates",
            "vmsFolder": "k8s",
            "enableLogging": True,
            "enableDiskUuid": False,
        },
        "networkCfg": {
            "gateway": "10.0.0.1",
            "dnsServers": ["8.8.8.8", "1.1.1.1"],
            "dnsSuffixes": ["example.com"],
            "domain": "example.com",
            "mask": 24,
        },
    }
