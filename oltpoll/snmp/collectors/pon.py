"""
oltpoll - PON Port Collector.

PON port status and per-port ONU occupancy.
"""

import asyncio
from typing import Dict, List

from ...models import PollResult, PonPortRecord
from ...oids import OidTable
from ..index import decode_port_index
from ..parsers import decode_int
from ..transport import Transport
from .common import iter_rows, walk_table


def _count(value) -> int:
    count = decode_int(value)
    return count if count is not None and count > 0 else 0


async def collect_onu_count(table: OidTable, transport: Transport) -> PollResult[int]:
    """
    Sum the per-port ONU counters.

    Rows that do not decode to an integer count as zero; a failed walk
    gives 0 plus a warning.
    """
    result = PollResult(0)
    rows = await walk_table(transport, table.pon_onu_count, "pon_onu_count", result)
    result.value = sum(_count(value) for value in rows.values())
    return result


async def collect_pon_ports(table: OidTable, transport: Transport) -> PollResult[List[PonPortRecord]]:
    """Get PON ports sorted by port number."""
    result: PollResult[List[PonPortRecord]] = PollResult([])

    status_rows, count_rows = await asyncio.gather(
        walk_table(transport, table.pon_port_status, "pon_port_status", result),
        walk_table(transport, table.pon_onu_count, "pon_onu_count", result),
    )

    ports: Dict[int, PonPortRecord] = {}

    def port(suffix) -> PonPortRecord:
        number = decode_port_index(suffix, table.vendor)
        if number not in ports:
            ports[number] = PonPortRecord(port=number)
        return ports[number]

    for suffix, value in iter_rows(status_rows, table.pon_port_status):
        port(suffix).oper_status = table.map_port_status(decode_int(value))

    for suffix, value in iter_rows(count_rows, table.pon_onu_count):
        port(suffix).onu_count = _count(value)

    result.value = [ports[number] for number in sorted(ports)]
    return result
