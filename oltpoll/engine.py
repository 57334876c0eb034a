"""
oltpoll - Polling Engine.

Public operations over one OLT, plus a bounded fan-out over many.

Features:
- Six read-only operations: connection test, system info, ONU count,
  ONU discovery, bulk optical poll, detailed snapshot
- Single-ONU optical query by (ponPort, onuId)
- Sub-walks inside one operation run concurrently
- Aggregates return best-effort partial results; only
  get_system_info raises when the device is unreachable
- poll_many: same operation across several OLTs with a concurrency cap

Usage:
    from oltpoll import DeviceEndpoint, Vendor, discover_onus

    endpoint = DeviceEndpoint("10.0.0.2", community="public")
    onus = await discover_onus(endpoint, Vendor.HUAWEI)

Every operation accepts an optional `transport`; when omitted an
SnmpTransport is built from the endpoint.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .exceptions import TransportError
from .models import (
    DeviceEndpoint, DiscoveredOnu, OltDetailedInfo, OltSystemInfo,
    OpticalSample, PollResult, Vendor,
)
from .oids import get_oid_table, parse_vendor
from .snmp.transport import SnmpTransport, Transport
from .snmp import collectors


log = logging.getLogger("oltpoll.engine")

VendorArg = Union[Vendor, str]


def _transport(endpoint: DeviceEndpoint, transport: Optional[Transport]) -> Transport:
    return transport if transport is not None else SnmpTransport(endpoint)


def _report(endpoint: DeviceEndpoint, operation: str, result: PollResult) -> None:
    for warning in result.warnings:
        log.debug(f"{endpoint.host} {operation}: {warning}")
    if result.warnings:
        log.info(f"{endpoint.host} {operation}: partial result, {len(result.warnings)} table(s) failed")


# =============================================================================
# Single-OLT Operations
# =============================================================================

async def test_connection(endpoint: DeviceEndpoint, transport: Optional[Transport] = None) -> bool:
    """True iff the agent answers a sysDescr GET. Never raises."""
    try:
        ok = await collectors.test_connection(_transport(endpoint, transport))
    except TransportError as e:
        log.info(f"{endpoint.host}: connection test failed: {e}")
        return False
    log.info(f"{endpoint.host}: connection test {'ok' if ok else 'returned no data'}")
    return ok


async def get_system_info(
    endpoint: DeviceEndpoint,
    vendor: VendorArg,
    transport: Optional[Transport] = None,
) -> OltSystemInfo:
    """
    System identity and health.

    Raises:
        TransportError: sysDescr/sysName/sysUpTime could not be fetched
        UnsupportedVendorError: unknown vendor tag
    """
    table = get_oid_table(vendor)
    result = await collectors.collect_system_info(table, _transport(endpoint, transport))
    _report(endpoint, "system", result)
    return result.value


async def get_onu_count(
    endpoint: DeviceEndpoint,
    vendor: VendorArg,
    transport: Optional[Transport] = None,
) -> int:
    """Total ONUs across all PON ports; 0 if the table cannot be walked."""
    table = get_oid_table(vendor)
    result = await collectors.collect_onu_count(table, _transport(endpoint, transport))
    _report(endpoint, "onu count", result)
    return result.value


async def discover_onus(
    endpoint: DeviceEndpoint,
    vendor: VendorArg,
    transport: Optional[Transport] = None,
) -> List[DiscoveredOnu]:
    """Every ONU in the serial-number table, in walk order."""
    table = get_oid_table(vendor)
    result = await collectors.discover_onus(table, _transport(endpoint, transport))
    _report(endpoint, "discovery", result)
    return result.value


async def bulk_poll_optical_power(
    endpoint: DeviceEndpoint,
    vendor: VendorArg,
    transport: Optional[Transport] = None,
) -> Dict[str, OpticalSample]:
    """Optical samples for every ONU, keyed "ponPort.onuId"."""
    table = get_oid_table(vendor)
    result = await collectors.bulk_poll_optical_power(table, _transport(endpoint, transport))
    _report(endpoint, "optical poll", result)
    return result.value


async def get_onu_optical_power(
    endpoint: DeviceEndpoint,
    vendor: VendorArg,
    pon_port: int,
    onu_id: int,
    transport: Optional[Transport] = None,
) -> OpticalSample:
    """Optical sample for one ONU; empty sample if the device is unreachable."""
    table = get_oid_table(vendor)
    result = await collectors.get_onu_optical_power(
        table, _transport(endpoint, transport), pon_port, onu_id,
    )
    _report(endpoint, f"onu {pon_port}.{onu_id}", result)
    return result.value


async def get_detailed_info(
    endpoint: DeviceEndpoint,
    vendor: VendorArg,
    transport: Optional[Transport] = None,
) -> OltDetailedInfo:
    """
    Full snapshot: system, boards, uplinks, VLANs and PON ports.

    Never raises for device errors. Sections whose tables could not be
    walked are empty and listed in `warnings`; if even the system
    scalars fail, `system` is an empty OltSystemInfo.
    """
    table = get_oid_table(vendor)
    transport = _transport(endpoint, transport)

    detail = OltDetailedInfo()
    result = PollResult(detail)
    system_ok = False

    # Per-board vendors take system metrics from the board table below
    async def system() -> PollResult[OltSystemInfo]:
        nonlocal system_ok
        try:
            sys_result = await collectors.collect_system_info(
                table, transport, metrics=not table.per_board_metrics,
            )
        except TransportError as e:
            log.warning(f"{endpoint.host}: system info failed: {e}")
            return PollResult(OltSystemInfo(), [f"system: {e}"])
        system_ok = True
        return sys_result

    sys_result, boards, uplinks, vlans, pon_ports = await asyncio.gather(
        system(),
        collectors.collect_boards(table, transport),
        collectors.collect_uplinks(table, transport),
        collectors.collect_vlans(table, transport),
        collectors.collect_pon_ports(table, transport),
    )

    detail.system = result.absorb(sys_result)
    detail.boards = result.absorb(boards)
    detail.uplinks = result.absorb(uplinks)
    detail.vlans = result.absorb(vlans)
    detail.pon_ports = result.absorb(pon_ports)

    if system_ok and table.per_board_metrics:
        collectors.board_maxima(detail.system, detail.boards)
    detail.warnings = result.warnings

    _report(endpoint, "detail", result)
    return detail


# =============================================================================
# Multi-OLT
# =============================================================================

Operation = Callable[[DeviceEndpoint, Vendor], Awaitable[Any]]


async def poll_many(
    targets: Sequence[Tuple[DeviceEndpoint, Vendor]],
    operation: Operation,
    concurrency: int = 10,
) -> List[Any]:
    """
    Run one operation against several OLTs.

    Args:
        targets: (endpoint, vendor) pairs
        operation: Coroutine function called as operation(endpoint, vendor)
        concurrency: Max OLTs polled at once

    Returns:
        Results in target order; an operation that raised contributes
        its exception instead of a result.
    """
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def run(endpoint: DeviceEndpoint, vendor: VendorArg) -> Any:
        vendor = parse_vendor(vendor)
        async with semaphore:
            log.debug(f"Polling {endpoint.host} ({vendor.value})")
            return await operation(endpoint, vendor)

    results = await asyncio.gather(
        *(run(endpoint, vendor) for endpoint, vendor in targets),
        return_exceptions=True,
    )
    for (endpoint, _vendor), outcome in zip(targets, results):
        if isinstance(outcome, Exception):
            log.warning(f"{endpoint.host}: {type(outcome).__name__}: {outcome}")
    return list(results)
