"""
src/vsphere_vms/resolver.py

Resolve the datacenter, cluster, datastore, template and network named in
vsphereCfg into vSphere ids, once per run, before any VM is cloned.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from vsphere_vms.models import LookupKind, ResourceLookupError, VsphereCfg
from vsphere_vms.platform import VspherePlatform

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LookupData:
    """Results of the vSphere lookups shared by every VM of a run."""

    datacenter: Any
    cluster: Any
    datastore: Any
    template_vm: Any
    network: Any


def _lookup(kind: LookupKind, name: str, fetch: Callable[[], T]) -> T:
    logger.debug(f"Looking up {kind.value} {name!r}")
    try:
        result = fetch()
    except Exception as e:
        logger.error(f"❌ {kind.value} {name!r} lookup failed: {e}")
        raise ResourceLookupError(kind, name, str(e)) from e
    if result is None or not getattr(result, "id", None):
        raise ResourceLookupError(kind, name, "no id returned")
    return result


def resolve(vsphere_cfg: VsphereCfg, platform: VspherePlatform) -> LookupData:
    """
    Look up every vSphere resource needed to clone VMs.

    Lookups run in order: datacenter, cluster, datastore, template, network.
    The first failure stops the sequence.

    Args:
        vsphere_cfg: Names of the resources to resolve
        platform: vSphere platform wrapper

    Returns:
        LookupData with all five results

    Raises:
        ResourceLookupError: If any resource cannot be resolved
    """
    datacenter = _lookup(
        LookupKind.DATACENTER, vsphere_cfg.datacenter, lambda: platform.get_datacenter(vsphere_cfg.datacenter)
    )
    datacenter_id = datacenter.id

    cluster = _lookup(
        LookupKind.CLUSTER,
        vsphere_cfg.cluster,
        lambda: platform.get_compute_cluster(datacenter_id, vsphere_cfg.cluster),
    )
    # VMs are placed by resource pool, not by cluster id
    if not getattr(cluster, "resource_pool_id", None):
        raise ResourceLookupError(LookupKind.CLUSTER, vsphere_cfg.cluster, "no resource pool id returned")

    datastore = _lookup(
        LookupKind.DATASTORE,
        vsphere_cfg.datastore,
        lambda: platform.get_datastore(datacenter_id, vsphere_cfg.datastore),
    )
    template_vm = _lookup(
        LookupKind.TEMPLATE,
        vsphere_cfg.template_name,
        lambda: platform.get_virtual_machine(datacenter_id, vsphere_cfg.template_name, vsphere_cfg.template_folder),
    )
    # Only the first disk and first adapter are cloned
    if not template_vm.disks:
        raise ResourceLookupError(LookupKind.TEMPLATE, vsphere_cfg.template_name, "template has no disks")
    if not template_vm.network_interfaces:
        raise ResourceLookupError(
            LookupKind.TEMPLATE, vsphere_cfg.template_name, "template has no network interfaces"
        )

    network = _lookup(
        LookupKind.NETWORK,
        vsphere_cfg.network_name,
        lambda: platform.get_network(datacenter_id, vsphere_cfg.network_name),
    )

    logger.info(
        f"✅ Resolved datacenter={datacenter_id} resource_pool={cluster.resource_pool_id} "
        f"datastore={datastore.id} template={template_vm.id} network={network.id}"
    )
    return LookupData(
        datacenter=datacenter,
        cluster=cluster,
        datastore=datastore,
        template_vm=template_vm,
        network=network,
    )
