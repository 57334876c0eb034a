"""
oltpoll - Board Table Collector.

Line cards are indexed .<frame>.<slot>; the five board tables are
walked concurrently and merged on that pair.
"""

import asyncio
from typing import Dict, List, Sequence, Tuple

from ...models import BoardRecord, PollResult
from ...oids import OidTable
from ..parsers import decode_int, decode_text
from ..transport import Transport
from ..validity import percentage, temperature_c
from .common import iter_rows, walk_table


BoardKey = Tuple[int, int]


def board_key(suffix: Sequence[int]) -> BoardKey:
    """(frame, slot) from the last two suffix elements; frame 0 if only one."""
    if len(suffix) == 1:
        return (0, suffix[0])
    return (suffix[-2], suffix[-1])


async def collect_boards(table: OidTable, transport: Transport) -> PollResult[List[BoardRecord]]:
    """Get all boards sorted by (frame, slot)."""
    result: PollResult[List[BoardRecord]] = PollResult([])

    type_rows, status_rows, cpu_rows, mem_rows, temp_rows = await asyncio.gather(
        walk_table(transport, table.board_type, "board_type", result),
        walk_table(transport, table.board_status, "board_status", result),
        walk_table(transport, table.board_cpu, "board_cpu", result),
        walk_table(transport, table.board_mem, "board_mem", result),
        walk_table(transport, table.board_temp, "board_temp", result),
    )

    boards: Dict[BoardKey, BoardRecord] = {}

    def board(suffix: Sequence[int]) -> BoardRecord:
        key = board_key(suffix)
        if key not in boards:
            boards[key] = BoardRecord(frame=key[0], slot=key[1])
        return boards[key]

    for suffix, value in iter_rows(type_rows, table.board_type):
        board(suffix).board_type = decode_text(value)

    for suffix, value in iter_rows(status_rows, table.board_status):
        board(suffix).oper_status = table.map_board_status(decode_int(value))

    for suffix, value in iter_rows(cpu_rows, table.board_cpu):
        board(suffix).cpu_pct = percentage(value)

    for suffix, value in iter_rows(mem_rows, table.board_mem):
        board(suffix).mem_pct = percentage(value)

    for suffix, value in iter_rows(temp_rows, table.board_temp):
        board(suffix).temp_c = temperature_c(value)

    result.value = [boards[key] for key in sorted(boards)]
    return result
