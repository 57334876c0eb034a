"""Tests for ONU discovery and optical telemetry."""

import asyncio

from oltpoll import engine
from oltpoll.models import DiscoveredOnu, OnuStatus, Vendor
from oltpoll.oids import HUAWEI_OIDS as HW, ZTE_OIDS as ZTE
from oltpoll.snmp import collectors

from .conftest import FakeTransport, table


ONU_1_5 = "4194304256.5"
ONU_1_6 = "4194304256.6"


def _huawei_onus() -> dict:
    data = {}
    data.update(table(HW.onu_serial_number, {ONU_1_5: "SN123", ONU_1_6: "48575443A1B2C3D4"}))
    data.update(table(HW.onu_status, {ONU_1_5: 1, ONU_1_6: 3}))
    data.update(table(HW.onu_description, {ONU_1_5: "  cust-A  ", ONU_1_6: ""}))
    return data


def _huawei_optics() -> dict:
    data = {}
    data.update(table(HW.onu_status, {ONU_1_5: 1, ONU_1_6: 2}))
    data.update(table(HW.onu_rx_power, {ONU_1_5: -2600, ONU_1_6: 2000}))
    data.update(table(HW.onu_tx_power, {ONU_1_5: 250, ONU_1_6: 212}))
    data.update(table(HW.onu_distance, {ONU_1_5: 1500, ONU_1_6: 0}))
    return data


# =============================================================================
# Discovery
# =============================================================================

def test_discovery_scenario(endpoint) -> None:
    transport = FakeTransport(_huawei_onus())

    onus = asyncio.run(engine.discover_onus(endpoint, Vendor.HUAWEI, transport=transport))

    assert onus[0] == DiscoveredOnu(
        serial_number="SN123",
        pon_port=1,
        onu_id=5,
        status=OnuStatus.ONLINE,
        description="cust-A",
        raw_index=ONU_1_5,
    )
    assert onus[1].serial_number == "48575443A1B2C3D4"
    assert onus[1].status == OnuStatus.LOS
    assert onus[1].description is None


def test_discovery_missing_status_is_offline(endpoint) -> None:
    transport = FakeTransport(table(ZTE.onu_serial_number, {"3.17": "ZTEGC0FFEE01"}))

    onus = asyncio.run(engine.discover_onus(endpoint, "zte", transport=transport))

    assert len(onus) == 1
    assert (onus[0].pon_port, onus[0].onu_id) == (3, 17)
    assert onus[0].status == OnuStatus.OFFLINE


def test_discovery_serial_walk_failure() -> None:
    transport = FakeTransport(_huawei_onus(), fail=[HW.onu_serial_number])

    result = asyncio.run(collectors.discover_onus(HW, transport))

    assert result.value == []
    assert result.warnings[0].startswith("onu_serial_number:")


def test_discovery_survives_description_failure() -> None:
    transport = FakeTransport(_huawei_onus(), fail=[HW.onu_description])

    result = asyncio.run(collectors.discover_onus(HW, transport))

    assert [onu.serial_number for onu in result.value] == ["SN123", "48575443A1B2C3D4"]
    assert result.value[0].status == OnuStatus.ONLINE
    assert result.value[0].description is None
    assert len(result.warnings) == 1


def test_discovery_keeps_walk_order() -> None:
    data = table(ZTE.onu_serial_number, {"2.1": "B", "1.9": "A", "1.10": "C"})

    result = asyncio.run(collectors.discover_onus(ZTE, FakeTransport(data)))

    assert [onu.serial_number for onu in result.value] == ["A", "C", "B"]


# =============================================================================
# Bulk optical poll
# =============================================================================

def test_bulk_optical_merge(endpoint) -> None:
    transport = FakeTransport(_huawei_optics())

    samples = asyncio.run(engine.bulk_poll_optical_power(endpoint, Vendor.HUAWEI, transport=transport))

    good = samples["1.5"]
    assert good.rx_power_dbm == -26.0
    assert good.tx_power_dbm == 2.5
    assert good.distance_m == 1500
    assert good.status == OnuStatus.ONLINE

    bad = samples["1.6"]
    assert bad.rx_power_dbm is None
    assert bad.distance_m is None
    assert bad.tx_power_dbm == 2.12
    assert bad.status == OnuStatus.OFFLINE
    assert "rx_power_dbm" not in bad.to_dict()


def test_bulk_optical_partial_failure() -> None:
    transport = FakeTransport(_huawei_optics(), fail=[HW.onu_rx_power, HW.onu_tx_power, HW.onu_distance])

    result = asyncio.run(collectors.bulk_poll_optical_power(HW, transport))

    assert set(result.value) == {"1.5", "1.6"}
    for sample in result.value.values():
        assert sample.rx_power_dbm is None
        assert sample.tx_power_dbm is None
        assert sample.distance_m is None
        assert sample.status is not None
    assert len(result.warnings) == 3


def test_bulk_optical_everything_fails(endpoint) -> None:
    transport = FakeTransport({}, fail=[HW.onu_status, HW.onu_rx_power, HW.onu_tx_power, HW.onu_distance])

    samples = asyncio.run(engine.bulk_poll_optical_power(endpoint, Vendor.HUAWEI, transport=transport))

    assert samples == {}


def test_bulk_optical_zte_keys() -> None:
    data = {}
    data.update(table(ZTE.onu_rx_power, {"3.17": -1999}))
    data.update(table(ZTE.onu_status, {"3.17": 2}))

    result = asyncio.run(collectors.bulk_poll_optical_power(ZTE, FakeTransport(data)))

    assert result.value["3.17"].rx_power_dbm == -19.99
    assert result.value["3.17"].status == OnuStatus.LOS


# =============================================================================
# Single ONU
# =============================================================================

def test_single_onu_uses_encoded_index(endpoint) -> None:
    transport = FakeTransport(_huawei_optics())

    sample = asyncio.run(engine.get_onu_optical_power(endpoint, Vendor.HUAWEI, 1, 5, transport=transport))

    assert transport.got == [[
        f"{HW.onu_status}.{ONU_1_5}",
        f"{HW.onu_rx_power}.{ONU_1_5}",
        f"{HW.onu_tx_power}.{ONU_1_5}",
        f"{HW.onu_distance}.{ONU_1_5}",
    ]]
    assert sample.rx_power_dbm == -26.0
    assert sample.status == OnuStatus.ONLINE


def test_single_onu_unreachable() -> None:
    result = asyncio.run(collectors.get_onu_optical_power(ZTE, FakeTransport(fail_get=True), 3, 17))

    assert result.value.to_dict() == {'pon_port': 3, 'onu_id': 17}
    assert result.warnings[0].startswith("onu_optical:")
