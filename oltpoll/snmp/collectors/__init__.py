"""
oltpoll - SNMP Collectors.

Table-level collectors, each taking (OidTable, Transport) and
returning a PollResult:
- system: SNMPv2-MIB system group plus CPU/memory/temperature
- boards: line card table
- interfaces: IF-MIB uplinks
- vlans: Q-BRIDGE-MIB static VLANs
- pon: PON port status and ONU counts
- onus: ONU discovery and optical telemetry
"""

from .system import (
    collect_system_info,
    board_maxima,
    test_connection,
    parse_firmware,
)

from .boards import (
    collect_boards,
)

from .interfaces import (
    collect_uplinks,
    is_uplink,
)

from .vlans import (
    collect_vlans,
)

from .pon import (
    collect_onu_count,
    collect_pon_ports,
)

from .onus import (
    discover_onus,
    bulk_poll_optical_power,
    get_onu_optical_power,
)


__all__ = [
    # System
    'collect_system_info',
    'board_maxima',
    'test_connection',
    'parse_firmware',
    # Boards
    'collect_boards',
    # Interfaces
    'collect_uplinks',
    'is_uplink',
    # VLANs
    'collect_vlans',
    # PON
    'collect_onu_count',
    'collect_pon_ports',
    # ONUs
    'discover_onus',
    'bulk_poll_optical_power',
    'get_onu_optical_power',
]
