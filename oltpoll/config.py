"""
oltpoll - Poller Configuration.

YAML inventory of OLTs with shared SNMP defaults, validated by pydantic.

Example file:

    defaults:
      community: public
      version: 2c
      timeout: 10
      retries: 2

    olts:
      - name: olt-core-1
        host: 10.20.0.2
        vendor: huawei
      - name: olt-edge-7
        host: 10.20.7.2
        vendor: zte
        community: edge-ro
        version: 1

Environment:
    OLTPOLL_COMMUNITY   replaces defaults.community when set
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigError
from .models import DeviceEndpoint, SnmpVersion, Vendor, parse_snmp_version
from .oids import parse_vendor


log = logging.getLogger("oltpoll.config")

COMMUNITY_ENV = "OLTPOLL_COMMUNITY"


def _version(value):
    if value is None or isinstance(value, SnmpVersion):
        return value
    return parse_snmp_version(value)


# =============================================================================
# Models
# =============================================================================

class SnmpDefaults(BaseModel):
    """SNMP settings shared by every OLT unless overridden"""
    community: str = Field(default="public", description="SNMP community string")
    version: SnmpVersion = Field(default=SnmpVersion.V2C, description="SNMP version: 1 or 2c")
    port: int = Field(default=161, ge=1, le=65535, description="SNMP port")
    timeout: float = Field(default=10.0, gt=0, le=300, description="Seconds per exchange")
    retries: int = Field(default=2, ge=0, le=10, description="Retries per exchange")

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value):
        return _version(value)


class OltEntry(BaseModel):
    """One OLT in the inventory"""
    name: str = Field(..., min_length=1, description="Unique OLT name")
    host: str = Field(..., min_length=1, description="IP address or hostname")
    vendor: Vendor = Field(..., description="huawei or zte")

    # Per-OLT overrides
    community: Optional[str] = None
    version: Optional[SnmpVersion] = None
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    timeout: Optional[float] = Field(default=None, gt=0, le=300)
    retries: Optional[int] = Field(default=None, ge=0, le=10)

    @field_validator("vendor", mode="before")
    @classmethod
    def _parse_vendor(cls, value):
        return parse_vendor(value)

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value):
        return _version(value)

    def endpoint(self, defaults: SnmpDefaults) -> DeviceEndpoint:
        """Merge overrides onto defaults."""
        def pick(name):
            value = getattr(self, name)
            return value if value is not None else getattr(defaults, name)

        return DeviceEndpoint(
            host=self.host,
            port=pick("port"),
            community=pick("community"),
            version=pick("version"),
            timeout=pick("timeout"),
            retries=pick("retries"),
        )


class PollerConfig(BaseModel):
    """Parsed configuration file"""
    defaults: SnmpDefaults = Field(default_factory=SnmpDefaults)
    olts: List[OltEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self):
        seen = set()
        for olt in self.olts:
            if olt.name in seen:
                raise ValueError(f"Duplicate OLT name: {olt.name}")
            seen.add(olt.name)
        return self

    def names(self) -> List[str]:
        return [olt.name for olt in self.olts]

    def get(self, name: str) -> OltEntry:
        for olt in self.olts:
            if olt.name == name:
                return olt
        raise ConfigError(f"No OLT named {name!r} (known: {', '.join(self.names()) or 'none'})")

    def endpoint(self, name: str) -> Tuple[DeviceEndpoint, Vendor]:
        """Resolve an OLT name to its endpoint and vendor."""
        olt = self.get(name)
        return olt.endpoint(self.defaults), olt.vendor

    def targets(self) -> List[Tuple[str, DeviceEndpoint, Vendor]]:
        """Every OLT as (name, endpoint, vendor), in file order."""
        return [(olt.name, olt.endpoint(self.defaults), olt.vendor) for olt in self.olts]


# =============================================================================
# Loading
# =============================================================================

def parse_config(data: Optional[Dict], env: Optional[Mapping[str, str]] = None) -> PollerConfig:
    """
    Validate an already-parsed mapping.

    Raises:
        ConfigError: structure or values are invalid
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")

    try:
        config = PollerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {e}") from e

    env = os.environ if env is None else env
    community = env.get(COMMUNITY_ENV)
    if community:
        log.debug(f"Default community taken from {COMMUNITY_ENV}")
        config.defaults.community = community

    return config


def load_config(path: Union[str, Path], env: Optional[Mapping[str, str]] = None) -> PollerConfig:
    """
    Load and validate a YAML configuration file.

    Raises:
        ConfigError: file missing, unreadable, not YAML, or invalid
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse config {path}: {e}") from e

    config = parse_config(data, env)
    log.info(f"Loaded {len(config.olts)} OLT(s) from {path}")
    return config
