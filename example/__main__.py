"""Pulumi program: clone the VMs listed in stack config and export their ids."""

import pulumi

from vsphere_vms import VsphereVms

vsphere_vms = VsphereVms.from_config("test-vms")

pulumi.export("vmIds", [vm.id for vm in vsphere_vms.virtual_machines])
