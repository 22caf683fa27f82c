"""Data models and exceptions for vSphere VM provisioning."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple


class LookupKind(Enum):
    """vSphere resources resolved by name before cloning."""

    DATACENTER = "datacenter"
    CLUSTER = "cluster"
    DATASTORE = "datastore"
    TEMPLATE = "template"
    NETWORK = "network"


def _require(record: str, data: Mapping[str, Any], key: str, kind: type) -> Any:
    """Fetch a required key and check its type."""
    if key not in data:
        raise ConfigurationError(f"{record}: missing required key {key!r}")
    value = data[key]
    # bool is an int subclass, but "numCpus: true" is never what was meant
    if kind is int and isinstance(value, bool):
        raise ConfigurationError(f"{record}: {key!r} must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise ConfigurationError(f"{record}: {key!r} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _optional_bool(record: str, data: Mapping[str, Any], key: str) -> bool:
    if key not in data or data[key] is None:
        return False
    return _require(record, data, key, bool)


def _string_list(record: str, data: Mapping[str, Any], key: str, required: bool = True) -> Tuple[str, ...]:
    if not required and data.get(key) is None:
        return ()
    items = _require(record, data, key, list)
    for item in items:
        if not isinstance(item, str):
            raise ConfigurationError(f"{record}: {key!r} must be a list of strings, got item {item!r}")
    return tuple(items)


@dataclass(frozen=True)
class VmData:
    """One virtual machine to clone from the template."""

    name: str
    host_name: str
    ipv4_address: str
    num_cpus: int
    memory: int  # MB

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VmData":
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"vms: each entry must be a mapping, got {type(data).__name__}")
        record = f"vms[{data.get('name', '?')}]"
        return cls(
            name=_require(record, data, "name", str),
            host_name=_require(record, data, "hostName", str),
            ipv4_address=_require(record, data, "ipv4address", str),
            num_cpus=_require(record, data, "numCpus", int),
            memory=_require(record, data, "memory", int),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "hostName": self.host_name,
            "ipv4address": self.ipv4_address,
            "numCpus": self.num_cpus,
            "memory": self.memory,
        }


@dataclass(frozen=True)
class VsphereCfg:
    """vSphere placement shared by every VM of a run."""

    datacenter: str
    datastore: str
    cluster: str
    network_name: str
    template_name: str
    template_folder: str
    vms_folder: str
    enable_logging: bool = False
    enable_disk_uuid: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VsphereCfg":
        record = "vsphereCfg"
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"{record}: must be a mapping, got {type(data).__name__}")
        return cls(
            datacenter=_require(record, data, "datacenter", str),
            datastore=_require(record, data, "datastore", str),
            cluster=_require(record, data, "cluster", str),
            network_name=_require(record, data, "networkName", str),
            template_name=_require(record, data, "templateName", str),
            template_folder=_require(record, data, "templateFolder", str),
            vms_folder=_require(record, data, "vmsFolder", str),
            enable_logging=_optional_bool(record, data, "enableLogging"),
            enable_disk_uuid=_optional_bool(record, data, "enableDiskUuid"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "datacenter": self.datacenter,
            "datastore": self.datastore,
            "cluster": self.cluster,
            "networkName": self.network_name,
            "templateName": self.template_name,
            "templateFolder": self.template_folder,
            "vmsFolder": self.vms_folder,
            "enableLogging": self.enable_logging,
            "enableDiskUuid": self.enable_disk_uuid,
        }


@dataclass(frozen=True)
class NetworkCfg:
    """Guest network settings applied to every cloned VM."""

    gateway: str
    dns_servers: Tuple[str, ...]
    domain: str
    mask: int  # prefix length, e.g. 24
    dns_suffixes: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dns_servers", tuple(self.dns_servers))
        object.__setattr__(self, "dns_suffixes", tuple(self.dns_suffixes))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NetworkCfg":
        record = "networkCfg"
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"{record}: must be a mapping, got {type(data).__name__}")
        return cls(
            gateway=_require(record, data, "gateway", str),
            dns_servers=_string_list(record, data, "dnsServers"),
            domain=_require(record, data, "domain", str),
            mask=_require(record, data, "mask", int),
            dns_suffixes=_string_list(record, data, "dnsSuffixes", required=False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gateway": self.gateway,
            "dnsServers": list(self.dns_servers),
            "dnsSuffixes": list(self.dns_suffixes),
            "domain": self.domain,
            "mask": self.mask,
        }


@dataclass(frozen=True)
class VsphereVmsArgs:
    """Everything a VsphereVms component needs: the VM list plus shared config."""

    vms: Tuple[VmData, ...]
    vsphere_cfg: VsphereCfg
    network_cfg: NetworkCfg

    def __post_init__(self) -> None:
        object.__setattr__(self, "vms", tuple(self.vms))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VsphereVmsArgs":
        """
        Build args from the three top-level config objects.

        Args:
            data: Mapping with "vms", "vsphereCfg" and "networkCfg" keys

        Raises:
            ConfigurationError: If a key is missing or a record is invalid
        """
        for key in ("vms", "vsphereCfg", "networkCfg"):
            if key not in data:
                raise ConfigurationError(f"missing required config object {key!r}")
        vms = data["vms"]
        if not isinstance(vms, list):
            raise ConfigurationError(f"vms: must be a list, got {type(vms).__name__}")
        return cls(
            vms=tuple(VmData.from_dict(vm) for vm in vms),
            vsphere_cfg=VsphereCfg.from_dict(data["vsphereCfg"]),
            network_cfg=NetworkCfg.from_dict(data["networkCfg"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vms": [vm.to_dict() for vm in self.vms],
            "vsphereCfg": self.vsphere_cfg.to_dict(),
            "networkCfg": self.network_cfg.to_dict(),
        }


class VsphereVmsError(Exception):
    """Base exception for vSphere VM provisioning errors."""

    pass


class ConfigurationError(VsphereVmsError):
    """Raised when the vms/vsphereCfg/networkCfg config is invalid."""

    pass


class ResourceLookupError(VsphereVmsError):
    """Raised when a named vSphere resource cannot be resolved."""

    def __init__(self, kind: LookupKind, name: str, reason: str = "") -> None:
        self.kind = kind
        self.name = name
        message = f"{kind.value} {name!r} could not be resolved"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CreateError(VsphereVmsError):
    """Raised when vSphere rejects the clone request for a VM."""

    def __init__(self, vm_name: str, reason: str = "") -> None:
        self.vm_name = vm_name
        message = f"failed to create VM {vm_name!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
