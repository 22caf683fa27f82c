#!/usr/bin/env python3
"""
src/vsphere_vms/provisioner.py

Clone one vSphere VM per VmData from the resolved template, with static
IPv4 guest customization.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pulumi
import pulumi_vsphere as vsphere

from vsphere_vms.config import Config
from vsphere_vms.models import CreateError, NetworkCfg, VmData, VsphereCfg
from vsphere_vms.platform import VspherePlatform
from vsphere_vms.resolver import LookupData

logger = logging.getLogger(__name__)


def to_string_list(items: Iterable[Any]) -> List[str]:
    """Convert a list of plain values into the list of string inputs the clone API takes."""
    return [str(item) for item in items]


def get_disk_args(template_vm: Any) -> List[vsphere.VirtualMachineDiskArgs]:
    """Single disk shaped like the template's first disk."""
    disk = template_vm.disks[0]
    return [
        vsphere.VirtualMachineDiskArgs(
            label="disk0",
            eagerly_scrub=disk.eagerly_scrub,
            size=disk.size,
            thin_provisioned=disk.thin_provisioned,
        )
    ]


def get_network_interface_args(template_vm: Any, network: Any) -> List[vsphere.VirtualMachineNetworkInterfaceArgs]:
    """Single NIC with the template's first adapter type, bound to the resolved network."""
    return [
        vsphere.VirtualMachineNetworkInterfaceArgs(
            adapter_type=template_vm.network_interfaces[0].adapter_type,
            network_id=network.id,
        )
    ]


def get_clone_args(lookup_data: LookupData, network_cfg: NetworkCfg, vm: VmData) -> vsphere.VirtualMachineCloneArgs:
    """
    Build the clone block: template uuid plus Linux guest customization.

    DNS servers are set both at clone level and on the interface; vSphere
    needs both for the guest resolver config to come out consistent.
    """
    return vsphere.VirtualMachineCloneArgs(
        template_uuid=lookup_data.template_vm.id,
        customize=vsphere.VirtualMachineCloneCustomizeArgs(
            dns_server_lists=to_string_list(network_cfg.dns_servers),
            dns_suffix_lists=to_string_list(network_cfg.dns_suffixes),
            ipv4_gateway=network_cfg.gateway,
            linux_options=vsphere.VirtualMachineCloneCustomizeLinuxOptionsArgs(
                domain=network_cfg.domain,
                host_name=vm.host_name,
            ),
            network_interfaces=[
                vsphere.VirtualMachineCloneCustomizeNetworkInterfaceArgs(
                    dns_domain=network_cfg.domain,
                    dns_server_lists=to_string_list(network_cfg.dns_servers),
                    ipv4_address=vm.ipv4_address,
                    ipv4_netmask=network_cfg.mask,
                )
            ],
        ),
    )


def build_vm_args(
    lookup_data: LookupData, vm: VmData, vsphere_cfg: VsphereCfg, network_cfg: NetworkCfg
) -> Dict[str, Any]:
    """Keyword arguments for vsphere.VirtualMachine for a single VM."""
    template_vm = lookup_data.template_vm
    return {
        "name": vm.name,
        "resource_pool_id": lookup_data.cluster.resource_pool_id,
        "datastore_id": lookup_data.datastore.id,
        "num_cpus": vm.num_cpus,
        "memory": vm.memory,
        "clone": get_clone_args(lookup_data, network_cfg, vm),
        "disks": get_disk_args(template_vm),
        "network_interfaces": get_network_interface_args(template_vm, lookup_data.network),
        "efi_secure_boot_enabled": template_vm.efi_secure_boot_enabled,
        "enable_logging": vsphere_cfg.enable_logging,
        "enable_disk_uuid": vsphere_cfg.enable_disk_uuid,
        "firmware": template_vm.firmware,
        "folder": vsphere_cfg.vms_folder,
        "guest_id": Config.GUEST_ID,
        "wait_for_guest_ip_timeout": Config.NET_TIMEOUT,
        "wait_for_guest_net_timeout": Config.NET_TIMEOUT,
    }


def provision(
    lookup_data: LookupData,
    vms: Sequence[VmData],
    vsphere_cfg: VsphereCfg,
    network_cfg: NetworkCfg,
    platform: VspherePlatform,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> List[Any]:
    """
    Create every VM in order, stopping at the first failure.

    VMs created before a failure are left in place; re-running converges.

    Args:
        lookup_data: Resolved vSphere resources
        vms: VMs to create, in order
        vsphere_cfg: Shared vSphere placement
        network_cfg: Shared guest network settings
        platform: vSphere platform wrapper
        opts: Resource options for every VM (e.g. parent)

    Returns:
        Created VM resources, in input order

    Raises:
        CreateError: On the first VM that cannot be created
    """
    virtual_machines = []
    for vm in vms:
        logger.info(
            f"🆕 Creating VM {vm.name!r}: {vm.num_cpus} CPUs, {vm.memory}MB RAM, "
            f"{vm.host_name}.{network_cfg.domain} at {vm.ipv4_address}/{network_cfg.mask}"
        )
        try:
            vm_args = build_vm_args(lookup_data, vm, vsphere_cfg, network_cfg)
            new_vm = platform.create_virtual_machine(vm.name, vm_args, opts)
        except Exception as e:
            logger.error(f"❌ VM {vm.name!r} failed after {len(virtual_machines)} created: {e}")
            raise CreateError(vm.name, str(e)) from e
        virtual_machines.append(new_vm)

    logger.info(f"✅ Submitted {len(virtual_machines)} VM(s)")
    return virtual_machines
