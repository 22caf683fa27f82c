"""Pulumi component that clones a group of vSphere VMs from one template."""

import logging
from typing import List, Optional

import pulumi
import pulumi_vsphere as vsphere

from vsphere_vms.config import load_args
from vsphere_vms.models import VsphereVmsArgs
from vsphere_vms.platform import VspherePlatform
from vsphere_vms.provisioner import provision
from vsphere_vms.resolver import resolve

logger = logging.getLogger(__name__)

COMPONENT_TYPE = "pkg:index:VsphereVms"


class VsphereVms(pulumi.ComponentResource):
    """Group of vSphere VMs sharing placement and network config."""

    virtual_machines: List[vsphere.VirtualMachine]

    def __init__(
        self,
        name: str,
        args: VsphereVmsArgs,
        opts: Optional[pulumi.ResourceOptions] = None,
        platform: Optional[VspherePlatform] = None,
    ) -> None:
        """
        Register the component, resolve vSphere resources and create the VMs.

        Args:
            name: Component resource name
            args: VMs plus vsphereCfg and networkCfg
            opts: Resource options for the component
            platform: vSphere platform wrapper (default provider if omitted)

        Raises:
            ResourceLookupError: If a named resource cannot be resolved
            CreateError: On the first VM that cannot be created
        """
        super().__init__(COMPONENT_TYPE, name, None, opts)
        platform = platform or VspherePlatform()

        logger.info(f"🚀 {name}: provisioning {len(args.vms)} VM(s) from template {args.vsphere_cfg.template_name!r}")
        lookup_data = resolve(args.vsphere_cfg, platform)
        self.virtual_machines = provision(
            lookup_data,
            args.vms,
            args.vsphere_cfg,
            args.network_cfg,
            platform,
            pulumi.ResourceOptions(parent=self),
        )

        self.register_outputs({})

    @classmethod
    def from_config(
        cls,
        name: str,
        opts: Optional[pulumi.ResourceOptions] = None,
        platform: Optional[VspherePlatform] = None,
    ) -> "VsphereVms":
        """Create the component from the vms, vsphereCfg and networkCfg stack config objects."""
        return cls(name, load_args(pulumi.Config()), opts, platform)
