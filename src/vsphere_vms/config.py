import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml
from dotenv import load_dotenv

from vsphere_vms.models import ConfigurationError, VsphereVmsArgs

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("vms", "vsphereCfg", "networkCfg")


class Config:
    """Loads tool settings from environment variables."""

    load_dotenv()

    CONFIG_FILE = os.getenv("VSPHERE_VMS_CONFIG", "Pulumi.dev.yaml")
    LOG_LEVEL = os.getenv("VSPHERE_VMS_LOG_LEVEL", "INFO").upper()

    # Fixed for every cloned VM; not overridable from the environment
    GUEST_ID = "ubuntu64Guest"
    NET_TIMEOUT = 300


def load_args(cfg: Any) -> VsphereVmsArgs:
    """
    Read the vms, vsphereCfg and networkCfg objects from Pulumi config.

    Args:
        cfg: pulumi.Config (anything with require_object)

    Returns:
        VsphereVmsArgs built from the three objects
    """
    data = {key: cfg.require_object(key) for key in CONFIG_KEYS}
    return VsphereVmsArgs.from_dict(data)


def _find_config_objects(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Locate the three config objects in a loaded YAML document.

    Plain files carry them at the top level. Pulumi stack files carry them
    under "config:" namespaced by project, e.g. "vsphere-vms:vms".
    """
    if all(key in data for key in CONFIG_KEYS):
        return {key: data[key] for key in CONFIG_KEYS}

    stack_config = data.get("config")
    if not isinstance(stack_config, Mapping):
        return dict(data)

    found: Dict[str, Any] = {}
    for full_key, value in stack_config.items():
        key = str(full_key).split(":", 1)[-1]
        if key in CONFIG_KEYS:
            if key in found:
                raise ConfigurationError(f"config object {key!r} is defined under more than one namespace")
            found[key] = value
    return found


def load_args_from_file(path: Union[str, Path]) -> VsphereVmsArgs:
    """
    Load VM provisioning args from a YAML file.

    Args:
        path: Plain YAML file or Pulumi stack file (Pulumi.<stack>.yaml)

    Returns:
        VsphereVmsArgs parsed from the file

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is not valid YAML or the config is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.debug(f"Loading VM config from {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"{path}: expected a mapping at the top level")

    return VsphereVmsArgs.from_dict(_find_config_objects(data))
