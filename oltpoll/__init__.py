"""
oltpoll - Multi-vendor OLT SNMP Poller.

Read-only telemetry and discovery for fiber-access OLTs over SNMP
v1/v2c. Vendor table layouts (Huawei-style, ZTE-style) are normalized
into one data model.

Architecture:
    oltpoll/
    ├── models.py      # Endpoint, ONU, board, port dataclasses
    ├── oids.py        # Standard OIDs and per-vendor OID tables
    ├── exceptions.py  # Error taxonomy
    ├── config.py      # YAML inventory
    ├── engine.py      # Public operations
    ├── cli.py         # Command line interface
    └── snmp/
        ├── transport.py  # Async get/walk over pysnmp
        ├── parsers.py    # Value decoding
        ├── index.py      # OID suffix <-> (ponPort, onuId)
        ├── validity.py   # Range and sentinel filters
        └── collectors/   # Per-table collection

Quick Start:
    import asyncio
    from oltpoll import DeviceEndpoint, Vendor, discover_onus

    endpoint = DeviceEndpoint("10.20.0.2", community="public")
    for onu in asyncio.run(discover_onus(endpoint, Vendor.HUAWEI)):
        print(onu.serial_number, onu.pon_port, onu.onu_id, onu.status.value)
"""

__version__ = "0.1.0"

from .models import (
    Vendor,
    SnmpVersion,
    OnuStatus,
    BoardStatus,
    PortStatus,
    DeviceEndpoint,
    CompositeIndex,
    DiscoveredOnu,
    OpticalSample,
    BoardRecord,
    UplinkRecord,
    VlanRecord,
    PonPortRecord,
    OltSystemInfo,
    OltDetailedInfo,
    PollResult,
)

from .exceptions import (
    OltPollError,
    TransportError,
    ProtocolError,
    DecodeError,
    IndexDecodeError,
    UnsupportedVendorError,
    ConfigError,
)

from .oids import (
    OidTable,
    HUAWEI_OIDS,
    ZTE_OIDS,
    get_oid_table,
)

from .engine import (
    test_connection,
    get_system_info,
    get_onu_count,
    discover_onus,
    bulk_poll_optical_power,
    get_onu_optical_power,
    get_detailed_info,
    poll_many,
)

from .config import (
    PollerConfig,
    load_config,
)


__all__ = [
    '__version__',
    # Engine
    'test_connection',
    'get_system_info',
    'get_onu_count',
    'discover_onus',
    'bulk_poll_optical_power',
    'get_onu_optical_power',
    'get_detailed_info',
    'poll_many',
    # Models
    'Vendor',
    'SnmpVersion',
    'OnuStatus',
    'BoardStatus',
    'PortStatus',
    'DeviceEndpoint',
    'CompositeIndex',
    'DiscoveredOnu',
    'OpticalSample',
    'BoardRecord',
    'UplinkRecord',
    'VlanRecord',
    'PonPortRecord',
    'OltSystemInfo',
    'OltDetailedInfo',
    'PollResult',
    # Exceptions
    'OltPollError',
    'TransportError',
    'ProtocolError',
    'DecodeError',
    'IndexDecodeError',
    'UnsupportedVendorError',
    'ConfigError',
    # OIDs
    'OidTable',
    'HUAWEI_OIDS',
    'ZTE_OIDS',
    'get_oid_table',
    # Config
    'PollerConfig',
    'load_config',
]
