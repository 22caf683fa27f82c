"""Clone and customize vSphere VMs from a template with Pulumi."""

from vsphere_vms.component import VsphereVms
from vsphere_vms.models import (
    ConfigurationError,
    CreateError,
    LookupKind,
    NetworkCfg,
    ResourceLookupError,
    VmData,
    VsphereCfg,
    VsphereVmsArgs,
    VsphereVmsError,
)

__all__ = [
    "ConfigurationError",
    "CreateError",
    "LookupKind",
    "NetworkCfg",
    "ResourceLookupError",
    "VmData",
    "VsphereCfg",
    "VsphereVms",
    "VsphereVmsArgs",
    "VsphereVmsError",
]
