"""Tests for the offline inspection CLI."""

import logging

import pytest
import yaml
from rich.console import Console
from typer.testing import CliRunner

from vsphere_vms.cli import app, check_args, get_log_level
from vsphere_vms.models import VsphereVmsArgs

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich from wrapping output lines the tests match on."""
    monkeypatch.setattr("vsphere_vms.cli.console", Console(width=200))


def _write(tmp_path, data):
    config_file = tmp_path / "vms.yaml"
    config_file.write_text(yaml.safe_dump(data))
    return config_file


def test_check_args_valid(raw_config):
    """Test a sane config has no problems."""
    assert check_args(VsphereVmsArgs.from_dict(raw_config)) == []


def test_check_args_duplicates(raw_config):
    """Test duplicate VM names and addresses are reported."""
    raw_config["vms"][1]["name"] = "vm1"
    raw_config["vms"][1]["ipv4address"] = "10.0.0.5"

    problems = check_args(VsphereVmsArgs.from_dict(raw_config))

    assert "VM name 'vm1' is used 2 times" in problems
    assert "IPv4 address 10.0.0.5 is assigned to 2 VMs" in problems


def test_check_args_invalid_addresses(raw_config):
    """Test bad IPv4 addresses and masks are reported."""
    raw_config["vms"][0]["ipv4address"] = "10.0.0.300"
    raw_config["networkCfg"]["gateway"] = "gateway"
    raw_config["networkCfg"]["mask"] = 33

    problems = check_args(VsphereVmsArgs.from_dict(raw_config))

    assert len(problems) == 3
    assert any("vms[vm1].ipv4address" in p for p in problems)
    assert any("networkCfg.gateway" in p for p in problems)
    assert any("networkCfg.mask" in p for p in problems)


def test_check_args_accepts_ipv6_dns_server(raw_config):
    """Test an IPv6 resolver is valid; guest addressing stays IPv4-only."""
    raw_config["networkCfg"]["dnsServers"] = ["2001:4860:4860::8888", "8.8.8.8"]

    assert check_args(VsphereVmsArgs.from_dict(raw_config)) == []


def test_check_args_rejects_bad_dns_server(raw_config):
    """Test a DNS entry that is not an IP address is reported."""
    raw_config["networkCfg"]["dnsServers"] = ["dns.example.com"]

    problems = check_args(VsphereVmsArgs.from_dict(raw_config))

    assert problems == ["networkCfg.dnsServers: 'dns.example.com' is not a valid IP address"]


def test_check_args_rejects_ipv6_gateway(raw_config):
    """Test the gateway must be IPv4."""
    raw_config["networkCfg"]["gateway"] = "fe80::1"

    problems = check_args(VsphereVmsArgs.from_dict(raw_config))

    assert problems == ["networkCfg.gateway: 'fe80::1' is not a valid IPv4 address"]


@pytest.mark.parametrize(
    "name, level",
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        (" error ", logging.ERROR),
        ("basic_format", logging.INFO),
        ("Logger", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_get_log_level(name, level):
    """Test only real level names are honoured; anything else means INFO."""
    assert get_log_level(name) == level


def test_check_args_sizing(raw_config):
    """Test zero CPUs or memory are reported."""
    raw_config["vms"][0]["numCpus"] = 0
    raw_config["vms"][1]["memory"] = 0

    problems = check_args(VsphereVmsArgs.from_dict(raw_config))

    assert any("vms[vm1].numCpus" in p for p in problems)
    assert any("vms[vm2].memory" in p for p in problems)


def test_validate_ok(tmp_path, raw_config):
    """Test validate exits 0 and summarizes a good config."""
    result = runner.invoke(app, ["validate", str(_write(tmp_path, raw_config))])

    assert result.exit_code == 0
    assert "2 VM(s) from template templates/ubuntu-template" in result.output


def test_validate_reports_problems(tmp_path, raw_config):
    """Test validate exits 1 when check_args finds problems."""
    raw_config["vms"][1]["ipv4address"] = "10.0.0.5"

    result = runner.invoke(app, ["validate", str(_write(tmp_path, raw_config))])

    assert result.exit_code == 1
    assert "assigned to 2 VMs" in result.output


def test_validate_bad_config(tmp_path, raw_config):
    """Test validate exits 1 on a config parsing error."""
    del raw_config["vsphereCfg"]["datacenter"]

    result = runner.invoke(app, ["validate", str(_write(tmp_path, raw_config))])

    assert result.exit_code == 1
    assert "datacenter" in result.output


def test_validate_missing_file(tmp_path):
    """Test validate exits 1 when the file doesn't exist."""
    result = runner.invoke(app, ["validate", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_show_lists_vms(tmp_path, raw_config):
    """Test show prints one row per VM."""
    result = runner.invoke(app, ["show", str(_write(tmp_path, raw_config))])

    assert result.exit_code == 0
    assert "vm1" in result.output
    assert "vm2" in result.output
    assert "10.0.0.5/24" in result.output
