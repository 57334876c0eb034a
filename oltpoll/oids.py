"""
oltpoll - SNMP OID Constants.

Centralized OID definitions for OLT polling.

Organization:
- SNMPv2-MIB: System group (sysDescr, sysName, sysUpTime)
- IF-MIB: Interface table (ifDescr, ifOperStatus, ifSpeed, ifAlias)
- Q-BRIDGE-MIB: Static VLAN names
- Vendor OID tables: one immutable OidTable per supported OLT vendor

Usage:
    from oltpoll.oids import SYSTEM, get_oid_table
    from oltpoll.models import Vendor

    table = get_oid_table(Vendor.HUAWEI)
    results = await transport.walk(table.onu_serial_number)

Notes:
- Numeric OIDs only; MIB resolution is never used
- Table bases have no trailing index; rows append a vendor-specific suffix
- Vendor enterprise OIDs vary by firmware family, validate on new hardware
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .exceptions import UnsupportedVendorError
from .models import BoardStatus, OnuStatus, PortStatus, Vendor


# =============================================================================
# SNMPv2-MIB - System Group
# =============================================================================

class SYSTEM:
    """
    SNMPv2-MIB System Group OIDs.

    Base: 1.3.6.1.2.1.1 (iso.org.dod.internet.mgmt.mib-2.system)
    """
    BASE = "1.3.6.1.2.1.1"

    # Scalar objects (already carry the .0 instance)
    SYS_DESCR = "1.3.6.1.2.1.1.1.0"           # System description string
    SYS_UPTIME = "1.3.6.1.2.1.1.3.0"          # Time since re-init (hundredths)
    SYS_NAME = "1.3.6.1.2.1.1.5.0"            # Administratively assigned name


# =============================================================================
# IF-MIB - Interface Table
# =============================================================================

class INTERFACES:
    """
    IF-MIB Interface Table OIDs.

    Index: ifIndex (integer)
    """
    IF_DESCR = "1.3.6.1.2.1.2.2.1.2"          # ifDescr (DisplayString)
    IF_SPEED = "1.3.6.1.2.1.2.2.1.5"          # ifSpeed (Gauge32, bps)
    IF_OPER_STATUS = "1.3.6.1.2.1.2.2.1.8"    # ifOperStatus (1=up,2=down,etc.)
    IF_HIGH_SPEED = "1.3.6.1.2.1.31.1.1.1.15" # ifHighSpeed (Mbps, for >4Gbps)
    IF_ALIAS = "1.3.6.1.2.1.31.1.1.1.18"      # ifAlias (user description)

    OPER_STATUS_UP = 1
    OPER_STATUS_DOWN = 2


# =============================================================================
# Q-BRIDGE-MIB - VLANs
# =============================================================================

class VLANS:
    """
    Q-BRIDGE-MIB static VLAN table.

    Index: dot1qVlanIndex (VLAN id)
    """
    STATIC_NAME = "1.3.6.1.2.1.17.7.1.4.3.1.1"  # dot1qVlanStaticName


# =============================================================================
# Vendor OID Tables
# =============================================================================

def _frozen(mapping: Dict[int, object]) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class OidTable:
    """
    Semantic field name -> base OID for one vendor.

    Besides addresses the table carries the small amount of vendor
    behaviour that is pure data (status code maps, where CPU/memory
    live), so adding a vendor needs a new table and one index codec
    branch and nothing else.
    """
    vendor: Vendor

    # System-wide scalar metrics (vendors without per-board metrics)
    sys_metrics_cpu: Optional[str]
    sys_metrics_mem: Optional[str]
    sys_metrics_temp: Optional[str]

    # Board table, index .<frame>.<slot>
    board_cpu: str
    board_mem: str
    board_temp: str
    board_type: str
    board_status: str

    # PON port table
    pon_port_status: str
    pon_onu_count: str

    # ONU tables
    onu_serial_number: str
    onu_description: Optional[str]
    onu_status: str
    onu_rx_power: str
    onu_tx_power: str
    onu_distance: str

    # Standard tables (same on every vendor so far)
    if_descr: str = INTERFACES.IF_DESCR
    if_oper_status: str = INTERFACES.IF_OPER_STATUS
    if_speed: str = INTERFACES.IF_SPEED
    if_high_speed: Optional[str] = INTERFACES.IF_HIGH_SPEED
    if_alias: str = INTERFACES.IF_ALIAS
    vlan_name: str = VLANS.STATIC_NAME

    # Behaviour
    per_board_metrics: bool = False
    onu_status_map: Mapping = field(default_factory=lambda: _frozen({1: OnuStatus.ONLINE}))
    board_status_map: Mapping = field(
        default_factory=lambda: _frozen({1: BoardStatus.NORMAL, 2: BoardStatus.FAULT})
    )
    port_status_map: Mapping = field(default_factory=lambda: _frozen({1: PortStatus.UP}))

    def map_onu_status(self, code: Optional[int]) -> OnuStatus:
        """Map a raw ONU run-state code; anything unknown is offline."""
        return self.onu_status_map.get(code, OnuStatus.OFFLINE)

    def map_board_status(self, code: Optional[int]) -> BoardStatus:
        return self.board_status_map.get(code, BoardStatus.UNKNOWN)

    def map_port_status(self, code: Optional[int]) -> PortStatus:
        return self.port_status_map.get(code, PortStatus.DOWN)


# Huawei SmartAX MA5600/MA5683 series.
# CPU, memory and temperature are per board (hwMusaBoardEntry), so the
# system-level scalars are kept only for reference and never queried.
HUAWEI_OIDS = OidTable(
    vendor=Vendor.HUAWEI,
    sys_metrics_cpu="1.3.6.1.4.1.2011.6.3.4.1.2.0",
    sys_metrics_mem="1.3.6.1.4.1.2011.6.3.4.1.3.0",
    sys_metrics_temp="1.3.6.1.4.1.2011.6.3.4.1.4.0",
    board_type="1.3.6.1.4.1.2011.6.3.3.2.1.4",       # hwMusaBoardType
    board_status="1.3.6.1.4.1.2011.6.3.3.2.1.5",     # hwMusaBoardOperStatus
    board_cpu="1.3.6.1.4.1.2011.6.3.3.2.1.6",        # hwBoardCpuRate
    board_mem="1.3.6.1.4.1.2011.6.3.3.2.1.8",        # hwBoardRamUseRate
    board_temp="1.3.6.1.4.1.2011.6.3.3.2.1.10",      # hwBoardTemperature
    pon_port_status="1.3.6.1.4.1.2011.6.128.1.1.2.21.1.10",
    pon_onu_count="1.3.6.1.4.1.2011.6.128.1.1.2.21.1.9",
    onu_serial_number="1.3.6.1.4.1.2011.6.128.1.1.2.43.1.3",
    onu_description="1.3.6.1.4.1.2011.6.128.1.1.2.43.1.9",
    onu_status="1.3.6.1.4.1.2011.6.128.1.1.2.46.1.15",
    onu_rx_power="1.3.6.1.4.1.2011.6.128.1.1.2.51.1.4",
    onu_tx_power="1.3.6.1.4.1.2011.6.128.1.1.2.51.1.6",
    onu_distance="1.3.6.1.4.1.2011.6.128.1.1.2.46.1.20",
    per_board_metrics=True,
    onu_status_map=_frozen({
        1: OnuStatus.ONLINE,
        2: OnuStatus.OFFLINE,
        3: OnuStatus.LOS,
    }),
)

# ZTE C300/C600 series.
ZTE_OIDS = OidTable(
    vendor=Vendor.ZTE,
    sys_metrics_cpu="1.3.6.1.4.1.3902.1082.500.10.2.2.1.1.8.1",
    sys_metrics_mem="1.3.6.1.4.1.3902.1082.500.10.2.2.1.1.9.1",
    sys_metrics_temp="1.3.6.1.4.1.3902.1082.500.10.2.2.1.1.10.1",
    board_type="1.3.6.1.4.1.3902.1082.10.1.2.4.1.4",
    board_status="1.3.6.1.4.1.3902.1082.10.1.2.4.1.5",
    board_cpu="1.3.6.1.4.1.3902.1082.10.1.2.4.1.9",
    board_mem="1.3.6.1.4.1.3902.1082.10.1.2.4.1.11",
    board_temp="1.3.6.1.4.1.3902.1082.10.1.2.4.1.13",
    pon_port_status="1.3.6.1.4.1.3902.1082.500.20.2.2.1.7",
    pon_onu_count="1.3.6.1.4.1.3902.1082.500.20.2.2.1.8",
    onu_serial_number="1.3.6.1.4.1.3902.1082.500.20.2.3.1.3",
    onu_description="1.3.6.1.4.1.3902.1082.500.20.2.3.1.2",
    onu_status="1.3.6.1.4.1.3902.1082.500.20.2.3.1.5",
    onu_rx_power="1.3.6.1.4.1.3902.1082.500.20.2.4.1.3",
    onu_tx_power="1.3.6.1.4.1.3902.1082.500.20.2.4.1.4",
    onu_distance="1.3.6.1.4.1.3902.1082.500.20.2.3.1.12",
    onu_status_map=_frozen({
        1: OnuStatus.ONLINE,
        2: OnuStatus.LOS,
    }),
)


OID_TABLES: Mapping = MappingProxyType({
    Vendor.HUAWEI: HUAWEI_OIDS,
    Vendor.ZTE: ZTE_OIDS,
})


def parse_vendor(vendor: Union[Vendor, str]) -> Vendor:
    """Accept a Vendor or its string tag (case-insensitive)."""
    if isinstance(vendor, Vendor):
        return vendor
    try:
        return Vendor(str(vendor).strip().lower())
    except ValueError:
        raise UnsupportedVendorError(f"Unsupported OLT vendor: {vendor!r}") from None


def get_oid_table(vendor: Union[Vendor, str]) -> OidTable:
    """Return the OID table for a vendor tag."""
    vendor = parse_vendor(vendor)
    try:
        return OID_TABLES[vendor]
    except KeyError:
        raise UnsupportedVendorError(f"No OID table for vendor: {vendor.value}") from None
