"""
oltpoll - ONU Collector.

Discovery and optical telemetry for subscriber terminals.

Every ONU table shares the vendor's composite index, so a row in one
table is joined to its siblings by appending the same suffix to the
other table's base OID. Decoding the suffix into (ponPort, onuId) is
left to oltpoll.snmp.index.

Usage:
    table = get_oid_table("huawei")
    found = await discover_onus(table, transport)
    for onu in found.value:
        print(onu.serial_number, onu.pon_port, onu.onu_id, onu.status.value)
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ...exceptions import IndexDecodeError
from ...models import CompositeIndex, DiscoveredOnu, OpticalSample, PollResult
from ...oids import OidTable
from ..index import decode_index, encode_index, suffix_str
from ..parsers import DecodedValue, decode_int, decode_text
from ..transport import Transport, VarBinds
from ..validity import distance_m, optical_dbm
from .common import get_values, iter_rows, walk_table


log = logging.getLogger("oltpoll.collectors.onus")


def _sibling(rows: VarBinds, base: Optional[str], suffix: str) -> Optional[DecodedValue]:
    if not base:
        return None
    return rows.get(f"{base}.{suffix}")


# =============================================================================
# Discovery
# =============================================================================

async def discover_onus(table: OidTable, transport: Transport) -> PollResult[List[DiscoveredOnu]]:
    """
    Enumerate ONUs from the serial-number table.

    Status and description are joined by suffix; a missing status is
    offline and an empty description is None. A failed serial walk
    gives an empty list plus a warning.
    """
    result: PollResult[List[DiscoveredOnu]] = PollResult([])

    serial_rows, status_rows, descr_rows = await asyncio.gather(
        walk_table(transport, table.onu_serial_number, "onu_serial_number", result),
        walk_table(transport, table.onu_status, "onu_status", result),
        walk_table(transport, table.onu_description, "onu_description", result),
    )

    onus = []
    for suffix, serial in iter_rows(serial_rows, table.onu_serial_number):
        index = decode_index(suffix, table.vendor)
        raw_index = suffix_str(suffix)

        status_code = decode_int(_sibling(status_rows, table.onu_status, raw_index))
        onus.append(DiscoveredOnu(
            serial_number=str(serial),
            pon_port=index.pon_port,
            onu_id=index.onu_id,
            status=table.map_onu_status(status_code),
            description=decode_text(_sibling(descr_rows, table.onu_description, raw_index)),
            raw_index=raw_index,
        ))

    log.info(f"Discovered {len(onus)} ONUs ({table.vendor.value})")
    result.value = onus
    return result


# =============================================================================
# Optical Telemetry
# =============================================================================

async def bulk_poll_optical_power(table: OidTable, transport: Transport) -> PollResult[Dict[str, OpticalSample]]:
    """
    Walk status, rx, tx and distance tables and merge them per ONU.

    Returns samples keyed "ponPort.onuId". A sample exists only if at
    least one of its fields was retrieved and valid; each table that
    fails to walk just leaves its field unset on every sample.
    """
    result: PollResult[Dict[str, OpticalSample]] = PollResult({})

    status_rows, rx_rows, tx_rows, dist_rows = await asyncio.gather(
        walk_table(transport, table.onu_status, "onu_status", result),
        walk_table(transport, table.onu_rx_power, "onu_rx_power", result),
        walk_table(transport, table.onu_tx_power, "onu_tx_power", result),
        walk_table(transport, table.onu_distance, "onu_distance", result),
    )

    samples: Dict[str, OpticalSample] = {}

    def sample(index: CompositeIndex) -> OpticalSample:
        if index.key not in samples:
            samples[index.key] = OpticalSample(pon_port=index.pon_port, onu_id=index.onu_id)
        return samples[index.key]

    def indexed(rows: VarBinds, base: str):
        for suffix, value in iter_rows(rows, base):
            try:
                yield decode_index(suffix, table.vendor), value
            except IndexDecodeError as e:
                log.debug(f"Skipping row: {e}")

    for index, value in indexed(status_rows, table.onu_status):
        sample(index).status = table.map_onu_status(decode_int(value))

    for index, value in indexed(rx_rows, table.onu_rx_power):
        dbm = optical_dbm(value)
        if dbm is not None:
            sample(index).rx_power_dbm = dbm

    for index, value in indexed(tx_rows, table.onu_tx_power):
        dbm = optical_dbm(value)
        if dbm is not None:
            sample(index).tx_power_dbm = dbm

    for index, value in indexed(dist_rows, table.onu_distance):
        meters = distance_m(value)
        if meters is not None:
            sample(index).distance_m = meters

    log.info(f"Optical poll: {len(samples)} ONUs ({table.vendor.value})")
    result.value = samples
    return result


async def get_onu_optical_power(
    table: OidTable,
    transport: Transport,
    pon_port: int,
    onu_id: int,
) -> PollResult[OpticalSample]:
    """
    Query one ONU's optical readings with a single GET.

    Never raises; on transport failure the sample is empty and the
    failure is in the warnings.
    """
    result = PollResult(OpticalSample(pon_port=pon_port, onu_id=onu_id))
    suffix = suffix_str(encode_index(pon_port, onu_id, table.vendor))

    addresses = {
        'status': f"{table.onu_status}.{suffix}",
        'rx': f"{table.onu_rx_power}.{suffix}",
        'tx': f"{table.onu_tx_power}.{suffix}",
        'distance': f"{table.onu_distance}.{suffix}",
    }
    values = await get_values(transport, list(addresses.values()), "onu_optical", result)

    sample = result.value
    if addresses['status'] in values:
        sample.status = table.map_onu_status(decode_int(values[addresses['status']]))
    sample.rx_power_dbm = optical_dbm(values.get(addresses['rx']))
    sample.tx_power_dbm = optical_dbm(values.get(addresses['tx']))
    sample.distance_m = distance_m(values.get(addresses['distance']))
    return result
