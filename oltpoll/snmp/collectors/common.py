"""
oltpoll - Collector Helpers.

Fault-tolerant table access shared by every collector. A failed
sub-walk becomes an empty table plus a warning on the PollResult.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ...exceptions import IndexDecodeError, TransportError
from ...models import PollResult
from ..index import oid_suffix
from ..parsers import DecodedValue
from ..transport import Transport, VarBinds


log = logging.getLogger("oltpoll.collectors")


async def walk_table(
    transport: Transport,
    base: Optional[str],
    label: str,
    result: PollResult,
) -> VarBinds:
    """
    Walk one table, recording a failure as a warning instead of raising.

    Args:
        transport: Anything implementing get/walk
        base: Table base OID; None means the vendor has no such table
        label: Short table name used in the warning ("onu_rx_power")
        result: PollResult that collects the warning

    Returns:
        OID -> value map, empty on failure
    """
    if not base:
        return {}
    try:
        rows = await transport.walk(base)
    except TransportError as e:
        log.warning(f"{label} walk failed: {e}")
        result.warn(f"{label}: {e}")
        return {}
    log.debug(f"{label}: {len(rows)} rows")
    return rows


async def get_values(
    transport: Transport,
    addresses: Sequence[str],
    label: str,
    result: PollResult,
) -> VarBinds:
    """GET counterpart of walk_table."""
    try:
        return await transport.get(list(addresses))
    except TransportError as e:
        log.warning(f"{label} query failed: {e}")
        result.warn(f"{label}: {e}")
        return {}


def iter_rows(rows: VarBinds, base: str) -> Iterator[Tuple[List[int], DecodedValue]]:
    """
    Yield (suffix, value) for each row in walk order.

    Rows whose OID does not decode to a numeric suffix are skipped.
    """
    for oid, value in rows.items():
        try:
            suffix = oid_suffix(oid, base)
        except IndexDecodeError as e:
            log.debug(f"Skipping row: {e}")
            continue
        if suffix:
            yield suffix, value


def by_last(rows: VarBinds, base: str) -> Dict[int, DecodedValue]:
    """Key a single-index table (ifIndex, VLAN id) by its last suffix element."""
    return {suffix[-1]: value for suffix, value in iter_rows(rows, base)}
