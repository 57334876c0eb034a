"""Tests for reading range filters."""

import pytest

from oltpoll.snmp.validity import (
    distance_m,
    max_valid,
    optical_dbm,
    percentage,
    temperature_c,
    valid_optical_power,
    valid_percentage,
    valid_temperature,
    valid_vlan_id,
)


def test_optical_power_in_hundredths() -> None:
    assert optical_dbm(-2600) == -26.0
    assert optical_dbm(999) == 9.99
    assert optical_dbm("-1850") == -18.5


@pytest.mark.parametrize("raw", [2000, 1000, -5000, -6553, None, "n/a"])
def test_optical_power_rejected(raw) -> None:
    assert optical_dbm(raw) is None


def test_optical_power_bounds_are_exclusive() -> None:
    assert not valid_optical_power(-50.0)
    assert not valid_optical_power(10.0)
    assert valid_optical_power(-49.99)


@pytest.mark.parametrize("raw,expected", [(1500, 1500), (1, 1), (0, None), (100000, None), (-3, None)])
def test_distance(raw, expected) -> None:
    assert distance_m(raw) == expected


@pytest.mark.parametrize("raw,expected", [(0, 0), (55, 55), (100, 100), (101, None), (-1, None)])
def test_percentage(raw, expected) -> None:
    assert percentage(raw) == expected


@pytest.mark.parametrize("raw,expected", [(42, 42), (11, 11), (99, 99), (10, None), (100, None), (255, None)])
def test_temperature(raw, expected) -> None:
    assert temperature_c(raw) == expected


def test_vlan_id_range() -> None:
    assert not valid_vlan_id(0)
    assert valid_vlan_id(1)
    assert valid_vlan_id(4094)
    assert not valid_vlan_id(4095)


def test_max_valid_filters_before_max() -> None:
    assert max_valid([20, 250, 55], valid_percentage) == 55
    assert max_valid([255, 42, 9], valid_temperature) == 42


def test_max_valid_nothing_valid() -> None:
    assert max_valid([255, 300], valid_percentage) is None
    assert max_valid([], valid_percentage) is None
