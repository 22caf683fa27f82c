from typing import Any, Dict, Optional

import pulumi
import pulumi_vsphere as vsphere


class VspherePlatform:
    """Wrapper around the pulumi_vsphere lookups and VM resource used for cloning."""

    def __init__(self, provider: Optional[pulumi.ProviderResource] = None) -> None:
        # None means the default provider configured through vsphere:* stack config
        self.provider = provider

    def _invoke_opts(self) -> Optional[pulumi.InvokeOptions]:
        if self.provider is None:
            return None
        return pulumi.InvokeOptions(provider=self.provider)

    def get_datacenter(self, name: str) -> vsphere.GetDatacenterResult:
        return vsphere.get_datacenter(name=name, opts=self._invoke_opts())

    def get_compute_cluster(self, datacenter_id: str, name: str) -> vsphere.GetComputeClusterResult:
        return vsphere.get_compute_cluster(datacenter_id=datacenter_id, name=name, opts=self._invoke_opts())

    def get_datastore(self, datacenter_id: str, name: str) -> vsphere.GetDatastoreResult:
        return vsphere.get_datastore(datacenter_id=datacenter_id, name=name, opts=self._invoke_opts())

    def get_virtual_machine(self, datacenter_id: str, name: str, folder: str) -> vsphere.GetVirtualMachineResult:
        return vsphere.get_virtual_machine(
            datacenter_id=datacenter_id, name=name, folder=folder, opts=self._invoke_opts()
        )

    def get_network(self, datacenter_id: str, name: str) -> vsphere.GetNetworkResult:
        return vsphere.get_network(datacenter_id=datacenter_id, name=name, opts=self._invoke_opts())

    def create_virtual_machine(
        self, resource_name: str, vm_args: Dict[str, Any], opts: Optional[pulumi.ResourceOptions] = None
    ) -> vsphere.VirtualMachine:
        """Register a vsphere.VirtualMachine built from keyword arguments."""
        if self.provider is not None:
            opts = pulumi.ResourceOptions.merge(opts, pulumi.ResourceOptions(provider=self.provider))
        return vsphere.VirtualMachine(resource_name, opts=opts, **vm_args)
