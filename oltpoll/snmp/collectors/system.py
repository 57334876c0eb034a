"""
oltpoll - System Info Collector.

Collects the SNMPv2-MIB system group plus CPU, memory and temperature.

Vendors with per-board metrics (Huawei) expose load per line card;
the reported figure is the highest valid reading across all boards.
Other vendors expose system-wide scalars fetched with a single GET.
"""

import asyncio
import logging
import re
from typing import Iterable, Optional

from ...models import BoardRecord, OltSystemInfo, PollResult
from ...oids import SYSTEM, OidTable
from ..parsers import decode_int, decode_text
from ..transport import Transport
from ..validity import (
    max_valid, percentage, temperature_c,
    valid_percentage, valid_temperature,
)
from .common import get_values, walk_table


log = logging.getLogger("oltpoll.collectors.system")

FIRMWARE_PATTERN = re.compile(r'Version\s+([\d.]+)', re.IGNORECASE)


def parse_firmware(sys_descr: Optional[str]) -> Optional[str]:
    """
    Extract the firmware version from sysDescr.

    Example:
        >>> parse_firmware("Huawei Integrated Access Software Version 5.2.1")
        '5.2.1'
    """
    if not sys_descr:
        return None
    match = FIRMWARE_PATTERN.search(sys_descr)
    return match.group(1) if match else None


async def test_connection(transport: Transport) -> bool:
    """
    True if the agent answers a sysDescr GET.

    Transport failures propagate; the engine maps them to False.
    """
    values = await transport.get([SYSTEM.SYS_DESCR])
    return len(values) > 0


async def collect_system_info(
    table: OidTable,
    transport: Transport,
    metrics: bool = True,
) -> PollResult[OltSystemInfo]:
    """
    Get system identity and health.

    With metrics=False only the standard scalars are fetched; callers
    that already hold the board table fill metrics via board_maxima().

    Raises:
        TransportError: the standard system scalars could not be fetched

    Metric failures never raise; the affected field stays None and the
    failure is recorded in the result's warnings.
    """
    values = await transport.get([SYSTEM.SYS_DESCR, SYSTEM.SYS_NAME, SYSTEM.SYS_UPTIME])

    info = OltSystemInfo()
    result = PollResult(info)

    info.sys_descr = decode_text(values.get(SYSTEM.SYS_DESCR))
    info.sys_name = decode_text(values.get(SYSTEM.SYS_NAME))
    info.firmware_version = parse_firmware(info.sys_descr)

    ticks = decode_int(values.get(SYSTEM.SYS_UPTIME))
    if ticks is not None:
        info.sys_uptime_seconds = ticks // 100

    if metrics and table.per_board_metrics:
        await _board_metrics(table, transport, result)
    elif metrics:
        await _scalar_metrics(table, transport, result)

    log.debug(f"System info: {info}")
    return result


async def _board_metrics(table: OidTable, transport: Transport, result: PollResult[OltSystemInfo]) -> None:
    cpu_rows, mem_rows, temp_rows = await asyncio.gather(
        walk_table(transport, table.board_cpu, "board_cpu", result),
        walk_table(transport, table.board_mem, "board_mem", result),
        walk_table(transport, table.board_temp, "board_temp", result),
    )

    info = result.value
    info.cpu_pct = max_valid(cpu_rows.values(), valid_percentage)
    info.mem_pct = max_valid(mem_rows.values(), valid_percentage)
    info.temp_c = max_valid(temp_rows.values(), valid_temperature)


async def _scalar_metrics(table: OidTable, transport: Transport, result: PollResult[OltSystemInfo]) -> None:
    addresses = [
        oid for oid in (table.sys_metrics_cpu, table.sys_metrics_mem, table.sys_metrics_temp)
        if oid
    ]
    if not addresses:
        return

    values = await get_values(transport, addresses, "sys_metrics", result)

    info = result.value
    if table.sys_metrics_cpu:
        info.cpu_pct = percentage(values.get(table.sys_metrics_cpu))
    if table.sys_metrics_mem:
        info.mem_pct = percentage(values.get(table.sys_metrics_mem))
    if table.sys_metrics_temp:
        info.temp_c = temperature_c(values.get(table.sys_metrics_temp))


def board_maxima(info: OltSystemInfo, boards: Iterable[BoardRecord]) -> None:
    """Set CPU, memory and temperature to the highest reading across boards."""
    boards = list(boards)
    info.cpu_pct = max_valid((b.cpu_pct for b in boards), valid_percentage)
    info.mem_pct = max_valid((b.mem_pct for b in boards), valid_percentage)
    info.temp_c = max_valid((b.temp_c for b in boards), valid_temperature)
