"""
oltpoll - VLAN Collector.

Reads dot1qVlanStaticName; IDs outside 1-4094 are discarded.
"""

from typing import List

from ...models import PollResult, VlanRecord
from ...oids import OidTable
from ..parsers import decode_text
from ..transport import Transport
from ..validity import valid_vlan_id
from .common import by_last, walk_table


async def collect_vlans(table: OidTable, transport: Transport) -> PollResult[List[VlanRecord]]:
    result: PollResult[List[VlanRecord]] = PollResult([])
    rows = await walk_table(transport, table.vlan_name, "vlan_name", result)

    names = by_last(rows, table.vlan_name)
    result.value = [
        VlanRecord(vlan_id=vlan_id, name=decode_text(names[vlan_id]) or "")
        for vlan_id in sorted(names)
        if valid_vlan_id(vlan_id)
    ]
    return result
