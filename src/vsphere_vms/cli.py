#!/usr/bin/env python3
"""
Offline inspection CLI for vsphere-vms config.

Reads the same vms/vsphereCfg/networkCfg objects the Pulumi program uses
and checks them without talking to vCenter:
    vsphere-vms validate Pulumi.dev.yaml
    vsphere-vms show Pulumi.dev.yaml

Provisioning itself is done by `pulumi up`.
"""

import ipaddress
import logging
from collections import Counter
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from vsphere_vms.config import Config, load_args_from_file
from vsphere_vms.models import ConfigurationError, VsphereVmsArgs

app = typer.Typer(
    name="vsphere-vms",
    help="Inspect vSphere VM provisioning config",
    add_completion=False,
)
console = Console()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_log_level(name: str) -> int:
    """Map a level name to a logging level; anything unknown falls back to INFO."""
    name = name.strip().upper()
    if name in LOG_LEVELS:
        return getattr(logging, name)
    return logging.INFO


logging.basicConfig(
    level=get_log_level(Config.LOG_LEVEL),
    format="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def check_args(args: VsphereVmsArgs) -> List[str]:
    """
    Find problems vSphere would only report mid-run.

    Returns:
        List of human-readable problems (empty if config looks sane)
    """
    problems = []
    network = args.network_cfg

    if not 0 <= network.mask <= 32:
        problems.append(f"networkCfg.mask must be between 0 and 32, got {network.mask}")

    try:
        ipaddress.IPv4Address(network.gateway)
    except ValueError:
        problems.append(f"networkCfg.gateway: {network.gateway!r} is not a valid IPv4 address")

    # Resolvers may be IPv6 even though guest addressing is IPv4
    for address in network.dns_servers:
        try:
            ipaddress.ip_address(address)
        except ValueError:
            problems.append(f"networkCfg.dnsServers: {address!r} is not a valid IP address")

    for vm in args.vms:
        try:
            ipaddress.IPv4Address(vm.ipv4_address)
        except ValueError:
            problems.append(f"vms[{vm.name}].ipv4address: {vm.ipv4_address!r} is not a valid IPv4 address")
        if vm.num_cpus < 1:
            problems.append(f"vms[{vm.name}].numCpus must be at least 1, got {vm.num_cpus}")
        if vm.memory < 1:
            problems.append(f"vms[{vm.name}].memory must be at least 1 MB, got {vm.memory}")

    for name, count in Counter(vm.name for vm in args.vms).items():
        if count > 1:
            problems.append(f"VM name {name!r} is used {count} times")
    for address, count in Counter(vm.ipv4_address for vm in args.vms).items():
        if count > 1:
            problems.append(f"IPv4 address {address} is assigned to {count} VMs")

    return problems


def _load(config_file: Path) -> VsphereVmsArgs:
    try:
        return load_args_from_file(config_file)
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """Inspect vSphere VM provisioning config."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@app.command("validate")
def validate(
    config_file: Optional[Path] = typer.Argument(None, help="Stack or plain YAML config file"),
) -> None:
    """Parse the config and report anything that would fail provisioning."""
    config_file = config_file or Path(Config.CONFIG_FILE)
    console.print(f"🔍 Validating {config_file}")

    args = _load(config_file)
    problems = check_args(args)
    if problems:
        for problem in problems:
            console.print(f"❌ {problem}")
        raise typer.Exit(1)

    cfg = args.vsphere_cfg
    console.print(
        f"✅ {len(args.vms)} VM(s) from template {cfg.template_folder}/{cfg.template_name} "
        f"into {cfg.datacenter}/{cfg.cluster} on {cfg.datastore}"
    )


@app.command("show")
def show(
    config_file: Optional[Path] = typer.Argument(None, help="Stack or plain YAML config file"),
) -> None:
    """Show the VMs and the guest network identity each one will get."""
    config_file = config_file or Path(Config.CONFIG_FILE)
    args = _load(config_file)
    network = args.network_cfg

    table = Table(title=f"VMs in {args.vsphere_cfg.vms_folder}")
    table.add_column("Name", style="cyan")
    table.add_column("FQDN", style="blue")
    table.add_column("Address", style="green")
    table.add_column("Gateway")
    table.add_column("DNS")
    table.add_column("CPUs", justify="right")
    table.add_column("Memory (MB)", justify="right")

    for vm in args.vms:
        table.add_row(
            vm.name,
            f"{vm.host_name}.{network.domain}",
            f"{vm.ipv4_address}/{network.mask}",
            network.gateway,
            ", ".join(network.dns_servers),
            str(vm.num_cpus),
            str(vm.memory),
        )

    console.print(table)


if __name__ == "__main__":
    app()
