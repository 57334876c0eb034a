"""
oltpoll - Data Models.

Vendor-agnostic dataclasses for OLT polling results.
These models normalize Huawei-style and ZTE-style table layouts
into a consistent format for the polling/persistence collaborator.

Design Principles:
- All metric fields optional (absent means unknown, never zero)
- Records are created fresh per call, nothing is cached
- Serializable to JSON for export
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, List, Dict, Any, Generic, TypeVar
import json


T = TypeVar("T")


class Vendor(str, Enum):
    """Supported OLT vendors."""
    HUAWEI = "huawei"    # vendor A, SmartAX MA5600/MA5683 style
    ZTE = "zte"          # vendor B, C300/C600 style


class SnmpVersion(str, Enum):
    """SNMP protocol versions this engine speaks."""
    V1 = "1"
    V2C = "2c"


class OnuStatus(str, Enum):
    """ONU operational status."""
    ONLINE = "online"
    OFFLINE = "offline"
    LOS = "los"


class BoardStatus(str, Enum):
    """Line card operational status."""
    NORMAL = "normal"
    FAULT = "fault"
    UNKNOWN = "unknown"


class PortStatus(str, Enum):
    """Uplink / PON port operational status."""
    UP = "up"
    DOWN = "down"


# =============================================================================
# Connection
# =============================================================================

@dataclass(frozen=True)
class DeviceEndpoint:
    """
    Where and how to reach one OLT.

    Supplied by the caller on every operation; never persisted.
    """
    host: str
    port: int = 161
    community: str = "public"
    version: SnmpVersion = SnmpVersion.V2C
    timeout: float = 10.0                        # seconds per exchange
    retries: int = 2

    def __post_init__(self):
        if not isinstance(self.version, SnmpVersion):
            object.__setattr__(self, "version", parse_snmp_version(self.version))

    def __repr__(self) -> str:
        return f"DeviceEndpoint(host={self.host!r}, port={self.port}, version={self.version.value!r})"


def parse_snmp_version(value: Any) -> SnmpVersion:
    """Accept "1", "v1", "2c", "v2c", 1 or 2 and return the enum."""
    text = str(value).strip().lower()
    if text.startswith("v"):
        text = text[1:]
    if text == "1":
        return SnmpVersion.V1
    if text in ("2", "2c"):
        return SnmpVersion.V2C
    raise ValueError(f"Unsupported SNMP version: {value!r}")


# =============================================================================
# ONU Records
# =============================================================================

@dataclass(frozen=True)
class CompositeIndex:
    """
    Canonical (ponPort, onuId) pair decoded from a vendor OID suffix.

    Only produced by oltpoll.snmp.index; values are already clamped.
    """
    pon_port: int                                # [0, 255]
    onu_id: int                                  # [1, 255]

    @property
    def key(self) -> str:
        return f"{self.pon_port}.{self.onu_id}"


@dataclass
class DiscoveredOnu:
    """ONU found in the serial-number table."""
    serial_number: str                           # text, or hex if binary
    pon_port: int
    onu_id: int
    status: OnuStatus = OnuStatus.OFFLINE
    description: Optional[str] = None            # trimmed, empty -> None
    raw_index: Optional[str] = None              # OID suffix for debugging

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['status'] = self.status.value
        return d


@dataclass
class OpticalSample:
    """
    Optical telemetry for a single ONU.

    Every measurement is independently optional. A missing field means
    it was not retrieved or failed validation.
    """
    pon_port: int
    onu_id: int
    rx_power_dbm: Optional[float] = None
    tx_power_dbm: Optional[float] = None
    distance_m: Optional[int] = None
    status: Optional[OnuStatus] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting fields that were not retrieved."""
        d = {'pon_port': self.pon_port, 'onu_id': self.onu_id}
        if self.rx_power_dbm is not None:
            d['rx_power_dbm'] = self.rx_power_dbm
        if self.tx_power_dbm is not None:
            d['tx_power_dbm'] = self.tx_power_dbm
        if self.distance_m is not None:
            d['distance_m'] = self.distance_m
        if self.status is not None:
            d['status'] = self.status.value
        return d


# =============================================================================
# OLT Records
# =============================================================================

@dataclass
class BoardRecord:
    """Line card ("board") in a frame/slot."""
    frame: int
    slot: int
    board_type: Optional[str] = None
    oper_status: BoardStatus = BoardStatus.UNKNOWN
    cpu_pct: Optional[int] = None
    mem_pct: Optional[int] = None
    temp_c: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['oper_status'] = self.oper_status.value
        return d


@dataclass
class UplinkRecord:
    """Physical uplink (GE/10GE) interface."""
    port_label: str
    alias: Optional[str] = None
    oper_status: PortStatus = PortStatus.DOWN
    speed_mbps: Optional[int] = None
    if_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['oper_status'] = self.oper_status.value
        return d


@dataclass
class VlanRecord:
    vlan_id: int
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PonPortRecord:
    port: int
    onu_count: int = 0
    oper_status: PortStatus = PortStatus.DOWN

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['oper_status'] = self.oper_status.value
        return d


@dataclass
class OltSystemInfo:
    """System identity and health of one OLT."""
    sys_name: Optional[str] = None               # sysName.0
    sys_descr: Optional[str] = None              # sysDescr.0
    sys_uptime_seconds: Optional[int] = None     # sysUpTime.0 / 100
    firmware_version: Optional[str] = None       # "Version x.y.z" from sysDescr
    cpu_pct: Optional[int] = None
    mem_pct: Optional[int] = None
    temp_c: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OltDetailedInfo:
    """
    Full OLT snapshot.

    Always best-effort: each section may be empty when its tables
    could not be walked, and `warnings` says why.
    """
    system: OltSystemInfo = field(default_factory=OltSystemInfo)
    boards: List[BoardRecord] = field(default_factory=list)
    uplinks: List[UplinkRecord] = field(default_factory=list)
    vlans: List[VlanRecord] = field(default_factory=list)
    pon_ports: List[PonPortRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def total_onus(self) -> int:
        return sum(p.onu_count for p in self.pon_ports)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'system': self.system.to_dict(),
            'boards': [b.to_dict() for b in self.boards],
            'uplinks': [u.to_dict() for u in self.uplinks],
            'vlans': [v.to_dict() for v in self.vlans],
            'pon_ports': [p.to_dict() for p in self.pon_ports],
            'total_onus': self.total_onus,
            'warnings': list(self.warnings),
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


# =============================================================================
# Partial Results
# =============================================================================

@dataclass
class PollResult(Generic[T]):
    """
    A collector's value together with the sub-queries that failed.

    Aggregates never raise on partial failure; callers that care
    inspect `warnings` instead of scraping logs.
    """
    value: T
    warnings: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.warnings

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def absorb(self, other: "PollResult[Any]") -> Any:
        """Take over another result's warnings and return its value."""
        self.warnings.extend(other.warnings)
        return other.value
