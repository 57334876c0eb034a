"""
oltpoll - Uplink Interface Collector.

Collects IF-MIB rows (ifDescr, ifOperStatus, ifSpeed, ifHighSpeed,
ifAlias) and keeps only physical uplinks, recognised by ifDescr.
PON and virtual interfaces are dropped.
"""

import asyncio
import re
from typing import Dict, List, Optional

from ...models import PollResult, UplinkRecord
from ...oids import OidTable
from ..parsers import DecodedValue, decode_int, decode_text
from ..transport import Transport
from .common import by_last, walk_table


# GigabitEthernet0/9/0, XGigabitEthernet0/9/1, 10GE0/1, GE0/2,
# gei_1/19/1, xgei_1/3/1, xgei-1/3/1, ethernet0/9/0
UPLINK_PATTERN = re.compile(
    r'\b(?:x?gigabitethernet|tengigabitethernet|10ge|ge|x?gei[_-]|ethernet)\s*\d',
    re.IGNORECASE,
)


def is_uplink(descr: Optional[str]) -> bool:
    return bool(descr) and UPLINK_PATTERN.search(descr) is not None


def speed_mbps(high_speed: Optional[DecodedValue], speed: Optional[DecodedValue]) -> Optional[int]:
    """
    Interface speed in Mbps.

    ifHighSpeed (already Mbps) wins when non-zero; otherwise ifSpeed
    in bps is scaled down. Zero means unknown.
    """
    mbps = decode_int(high_speed)
    if mbps:
        return mbps
    bps = decode_int(speed)
    if bps:
        return bps // 1_000_000 or None
    return None


async def collect_uplinks(table: OidTable, transport: Transport) -> PollResult[List[UplinkRecord]]:
    """Get uplink interfaces ordered by ifIndex."""
    result: PollResult[List[UplinkRecord]] = PollResult([])

    descr_rows, status_rows, speed_rows, high_rows, alias_rows = await asyncio.gather(
        walk_table(transport, table.if_descr, "if_descr", result),
        walk_table(transport, table.if_oper_status, "if_oper_status", result),
        walk_table(transport, table.if_speed, "if_speed", result),
        walk_table(transport, table.if_high_speed, "if_high_speed", result),
        walk_table(transport, table.if_alias, "if_alias", result),
    )

    descrs = by_last(descr_rows, table.if_descr)
    status = by_last(status_rows, table.if_oper_status)
    speeds = by_last(speed_rows, table.if_speed)
    high_speeds: Dict[int, DecodedValue] = (
        by_last(high_rows, table.if_high_speed) if table.if_high_speed else {}
    )
    aliases = by_last(alias_rows, table.if_alias)

    uplinks = []
    for if_index in sorted(descrs):
        label = decode_text(descrs[if_index])
        if not is_uplink(label):
            continue
        uplinks.append(UplinkRecord(
            port_label=label,
            alias=decode_text(aliases.get(if_index)),
            oper_status=table.map_port_status(decode_int(status.get(if_index))),
            speed_mbps=speed_mbps(high_speeds.get(if_index), speeds.get(if_index)),
            if_index=if_index,
        ))

    result.value = uplinks
    return result
