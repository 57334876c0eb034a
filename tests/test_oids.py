"""Tests for the vendor OID registry."""

import dataclasses
import re

import pytest

from oltpoll.exceptions import UnsupportedVendorError
from oltpoll.models import BoardStatus, OnuStatus, PortStatus, Vendor
from oltpoll.oids import HUAWEI_OIDS, OID_TABLES, SYSTEM, ZTE_OIDS, get_oid_table, parse_vendor

NUMERIC_OID = re.compile(r'^\d+(\.\d+)+$')


def test_lookup_by_tag() -> None:
    assert get_oid_table(Vendor.HUAWEI) is HUAWEI_OIDS
    assert get_oid_table("zte") is ZTE_OIDS
    assert get_oid_table(" HUAWEI ") is HUAWEI_OIDS


def test_unknown_vendor() -> None:
    with pytest.raises(UnsupportedVendorError):
        get_oid_table("nokia")
    with pytest.raises(ValueError):
        parse_vendor("")


def test_huawei_status_map() -> None:
    assert HUAWEI_OIDS.map_onu_status(1) == OnuStatus.ONLINE
    assert HUAWEI_OIDS.map_onu_status(2) == OnuStatus.OFFLINE
    assert HUAWEI_OIDS.map_onu_status(3) == OnuStatus.LOS


def test_zte_status_map() -> None:
    assert ZTE_OIDS.map_onu_status(1) == OnuStatus.ONLINE
    assert ZTE_OIDS.map_onu_status(2) == OnuStatus.LOS
    assert ZTE_OIDS.map_onu_status(3) == OnuStatus.OFFLINE
    assert ZTE_OIDS.map_onu_status(None) == OnuStatus.OFFLINE


def test_board_and_port_maps() -> None:
    assert HUAWEI_OIDS.map_board_status(1) == BoardStatus.NORMAL
    assert HUAWEI_OIDS.map_board_status(2) == BoardStatus.FAULT
    assert HUAWEI_OIDS.map_board_status(9) == BoardStatus.UNKNOWN
    assert ZTE_OIDS.map_port_status(1) == PortStatus.UP
    assert ZTE_OIDS.map_port_status(2) == PortStatus.DOWN


def test_metric_source() -> None:
    assert HUAWEI_OIDS.per_board_metrics
    assert not ZTE_OIDS.per_board_metrics


def test_tables_are_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        HUAWEI_OIDS.onu_rx_power = "1.2.3"
    with pytest.raises(TypeError):
        OID_TABLES[Vendor.ZTE] = HUAWEI_OIDS


@pytest.mark.parametrize("table", [HUAWEI_OIDS, ZTE_OIDS])
def test_all_oids_numeric(table) -> None:
    for f in dataclasses.fields(table):
        value = getattr(table, f.name)
        if isinstance(value, str) and f.name != "vendor":
            assert NUMERIC_OID.match(value), f"{f.name}={value}"


def test_system_scalars() -> None:
    assert SYSTEM.SYS_DESCR.endswith(".0")
    assert SYSTEM.SYS_NAME.endswith(".0")
    assert SYSTEM.SYS_UPTIME.endswith(".0")
