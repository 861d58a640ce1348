"""
Configuration loading.

A configuration file is YAML, either flat or nested under a `lifx:` key:

    lifx:
      subnet: 192.168.1.0/24
      port: 56700
      timeout: 3.0
      source: 321
      sequence: 156
      print_traffic: false
      devices:
        - host: 192.168.1.42
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional, Self

import yaml

from .api.types import Const
from .exceptions import LifxConfigurationError
from .io import ClientConst


@dataclass
class LifxConfig:
    subnet: str = "255.255.255.255"
    port: int = ClientConst.PORT
    timeout: float = ClientConst.DEFAULT_TIMEOUT
    source: int = Const.DEFAULT_SOURCE
    sequence: int = Const.DEFAULT_SEQUENCE
    print_traffic: bool = False
    devices: list[dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.subnet, str) or not self.subnet:
            raise LifxConfigurationError(f"subnet must be a non-empty string, got {self.subnet!r}")
        if not isinstance(self.port, int) or not 0 < self.port <= 65535:
            raise LifxConfigurationError(f"port must be 1-65535, got {self.port!r}")
        if not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise LifxConfigurationError(f"timeout must be a positive number, got {self.timeout!r}")
        if not isinstance(self.source, int) or not 0 <= self.source <= 0xFFFFFFFF:
            raise LifxConfigurationError(f"source must be a 32-bit unsigned integer, got {self.source!r}")
        if not isinstance(self.sequence, int) or not 0 <= self.sequence <= 0xFF:
            raise LifxConfigurationError(f"sequence must be 0-255, got {self.sequence!r}")
        if not isinstance(self.devices, list):
            raise LifxConfigurationError("devices must be a list")
        for device in self.devices:
            if not isinstance(device, dict) or "host" not in device:
                raise LifxConfigurationError(f"Each device needs a host, got {device!r}")

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Self:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise LifxConfigurationError("Configuration must be a mapping")
        if "lifx" in data:
            data = data["lifx"] or {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise LifxConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)


def load_config(path: str) -> LifxConfig:
    """Read a LifxConfig from a YAML file"""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise LifxConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise LifxConfigurationError(f"Invalid YAML in {path}: {e}") from e
    return LifxConfig.from_dict(data)
