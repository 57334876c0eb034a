"""
oltpoll - SNMP Layer.

Components:
- transport: async get/walk over pysnmp
- parsers: raw value decoding (text vs hex, integers)
- index: vendor OID suffix <-> (ponPort, onuId)
- validity: range and sentinel filters
- collectors: per-table collection returning PollResult

Usage:
    from oltpoll.models import DeviceEndpoint
    from oltpoll.oids import get_oid_table
    from oltpoll.snmp import SnmpTransport
    from oltpoll.snmp.collectors import discover_onus

    transport = SnmpTransport(DeviceEndpoint("10.0.0.2", community="public"))
    result = await discover_onus(get_oid_table("zte"), transport)
"""

from .transport import SnmpTransport, Transport, VarBinds, build_credentials
from .parsers import (
    decode_value,
    decode_int,
    decode_text,
)
from .index import (
    decode_index,
    decode_port_index,
    encode_index,
    oid_suffix,
)
from .validity import (
    valid_optical_power,
    valid_distance,
    valid_percentage,
    valid_temperature,
    valid_vlan_id,
    optical_dbm,
)


__all__ = [
    # Transport
    'SnmpTransport',
    'Transport',
    'VarBinds',
    'build_credentials',
    # Parsers
    'decode_value',
    'decode_int',
    'decode_text',
    # Index
    'decode_index',
    'decode_port_index',
    'encode_index',
    'oid_suffix',
    # Validity
    'valid_optical_power',
    'valid_distance',
    'valid_percentage',
    'valid_temperature',
    'valid_vlan_id',
    'optical_dbm',
]
