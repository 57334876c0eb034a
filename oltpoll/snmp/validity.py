"""
oltpoll - Validity Filters.

Range and sentinel rules applied to raw readings before they reach
callers. A rejected reading is reported as None (absent), never as 0.

Accepted ranges:
    optical power   -50 < dBm < 10        (raw unit: hundredths of dBm)
    distance        0 < meters < 100000
    percentage      0 <= pct <= 100
    temperature     10 < degC < 100       (255 = not applicable)
    VLAN id         1 <= id <= 4094
"""

from typing import Any, Optional

from .parsers import decode_int


OPTICAL_MIN_DBM = -50.0
OPTICAL_MAX_DBM = 10.0
DISTANCE_MAX_M = 100000
TEMPERATURE_MIN_C = 10
TEMPERATURE_MAX_C = 100
TEMPERATURE_NA = 255
VLAN_MIN, VLAN_MAX = 1, 4094


# =============================================================================
# Predicates
# =============================================================================

def valid_optical_power(dbm: Optional[float]) -> bool:
    return dbm is not None and OPTICAL_MIN_DBM < dbm < OPTICAL_MAX_DBM


def valid_distance(meters: Optional[int]) -> bool:
    return meters is not None and 0 < meters < DISTANCE_MAX_M


def valid_percentage(pct: Optional[int]) -> bool:
    return pct is not None and 0 <= pct <= 100


def valid_temperature(celsius: Optional[int]) -> bool:
    if celsius is None or celsius == TEMPERATURE_NA:
        return False
    return TEMPERATURE_MIN_C < celsius < TEMPERATURE_MAX_C


def valid_vlan_id(vlan_id: Optional[int]) -> bool:
    return vlan_id is not None and VLAN_MIN <= vlan_id <= VLAN_MAX


# =============================================================================
# Filters (raw value in, Optional out)
# =============================================================================

def optical_dbm(raw: Any) -> Optional[float]:
    """Convert hundredths of a dBm to dBm, or None if out of range."""
    value = decode_int(raw)
    if value is None:
        return None
    dbm = value / 100
    return dbm if valid_optical_power(dbm) else None


def distance_m(raw: Any) -> Optional[int]:
    value = decode_int(raw)
    return value if valid_distance(value) else None


def percentage(raw: Any) -> Optional[int]:
    value = decode_int(raw)
    return value if valid_percentage(value) else None


def temperature_c(raw: Any) -> Optional[int]:
    value = decode_int(raw)
    return value if valid_temperature(value) else None


def max_valid(values, check) -> Optional[int]:
    """
    Largest value passing `check`, or None.

    Used for Huawei board tables where the control board reports the
    highest load; invalid readings are dropped before comparison.
    """
    best: Optional[int] = None
    for raw in values:
        value = decode_int(raw)
        if not check(value):
            continue
        if best is None or value > best:
            best = value
    return best
