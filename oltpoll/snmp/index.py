"""
oltpoll - Composite Index Codec.

Pure functions translating vendor OID suffixes into canonical
(ponPort, onuId) pairs and back.

Huawei-style (vendor A) suffixes:
    [ifIndex, onuId]              GPON ifIndex = 4194304000 + slot*65536 + port*256
    [frame, slot, port, onuId]    explicit location
    [slot, port, onuId]           explicit location without frame
    [idx]                         degenerate, ONU on port 1

ZTE-style (vendor B) suffixes:
    [ponPort, onuId]              used as-is

ponPort is slot*8 + port for Huawei. The ifIndex layout is inferred
from MA5600/MA5683 firmware and is not a documented contract; other
firmware families may need their own branch.

Every decode clamps ponPort to [0, 255] and onuId to [1, 255].
"""

from typing import Iterable, List, Sequence, Tuple, Union

from ..exceptions import IndexDecodeError
from ..models import CompositeIndex, Vendor


HUAWEI_GPON_IFINDEX_BASE = 4194304000
HUAWEI_PORTS_PER_SLOT = 8

PON_PORT_MIN, PON_PORT_MAX = 0, 255
ONU_ID_MIN, ONU_ID_MAX = 1, 255


# =============================================================================
# OID Helpers
# =============================================================================

def oid_suffix(oid: str, base: str) -> List[int]:
    """
    Strip `base` from a full row OID and return the index components.

    Examples:
        >>> oid_suffix("1.3.6.1.4.1.2011.6.128.1.1.2.43.1.3.4194304256.5",
        ...            "1.3.6.1.4.1.2011.6.128.1.1.2.43.1.3")
        [4194304256, 5]
    """
    oid = oid.lstrip('.')
    base = base.lstrip('.').rstrip('.')
    prefix = base + '.'
    if not oid.startswith(prefix):
        raise IndexDecodeError(f"{oid} is not inside {base}")
    rest = oid[len(prefix):]
    try:
        return [int(part) for part in rest.split('.')]
    except ValueError:
        raise IndexDecodeError(f"Non-numeric index in {oid}") from None


def suffix_str(suffix: Iterable[int]) -> str:
    return '.'.join(str(part) for part in suffix)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _index(pon_port: int, onu_id: int) -> CompositeIndex:
    return CompositeIndex(
        pon_port=_clamp(pon_port, PON_PORT_MIN, PON_PORT_MAX),
        onu_id=_clamp(onu_id, ONU_ID_MIN, ONU_ID_MAX),
    )


# =============================================================================
# Huawei
# =============================================================================

def huawei_pon_port(if_index: int) -> int:
    """
    Decode a Huawei GPON ifIndex into a flat PON port number.

    Modern firmware: ifIndex = BASE + slot*65536 + port*256.
    Older firmware puts the port in the second byte of a small ifIndex.
    """
    if if_index >= HUAWEI_GPON_IFINDEX_BASE:
        offset = if_index - HUAWEI_GPON_IFINDEX_BASE
        slot = (offset // 65536) % 256
        port = ((offset % 65536) // 256) % 256
        return slot * HUAWEI_PORTS_PER_SLOT + port
    return (if_index // 256) % 256


def _decode_huawei(suffix: Sequence[int]) -> CompositeIndex:
    if len(suffix) > 4:
        suffix = suffix[-4:]

    if len(suffix) == 4:
        _frame, slot, port, onu_id = suffix
        return _index(slot * HUAWEI_PORTS_PER_SLOT + port, onu_id)

    if len(suffix) == 3:
        slot, port, onu_id = suffix
        return _index(slot * HUAWEI_PORTS_PER_SLOT + port, onu_id)

    if len(suffix) == 2:
        if_index, onu_id = suffix
        return _index(huawei_pon_port(if_index), onu_id)

    return _index(1, suffix[0] % 256)


def _encode_huawei(pon_port: int, onu_id: int) -> Tuple[int, ...]:
    slot, port = divmod(pon_port, HUAWEI_PORTS_PER_SLOT)
    return (HUAWEI_GPON_IFINDEX_BASE + slot * 65536 + port * 256, onu_id)


# =============================================================================
# ZTE
# =============================================================================

def _decode_zte(suffix: Sequence[int]) -> CompositeIndex:
    if len(suffix) == 1:
        return _index(1, suffix[0] % 256)
    pon_port, onu_id = suffix[-2], suffix[-1]
    return _index(pon_port, onu_id)


def _encode_zte(pon_port: int, onu_id: int) -> Tuple[int, ...]:
    return (pon_port, onu_id)


# =============================================================================
# Public API
# =============================================================================

def _normalize(suffix: Union[str, Sequence[int]]) -> List[int]:
    if isinstance(suffix, str):
        parts = [p for p in suffix.strip('.').split('.') if p]
        try:
            return [int(p) for p in parts]
        except ValueError:
            raise IndexDecodeError(f"Non-numeric index: {suffix!r}") from None
    return [int(p) for p in suffix]


def decode_index(suffix: Union[str, Sequence[int]], vendor: Vendor) -> CompositeIndex:
    """
    Decode an OID suffix into a clamped CompositeIndex.

    Args:
        suffix: Index components (list of ints or "a.b.c" string)
        vendor: Vendor whose index scheme applies

    Raises:
        IndexDecodeError: empty or non-numeric suffix

    Examples:
        >>> decode_index([4194304256, 5], Vendor.HUAWEI)
        CompositeIndex(pon_port=1, onu_id=5)
        >>> decode_index([3, 17], Vendor.ZTE)
        CompositeIndex(pon_port=3, onu_id=17)
    """
    parts = _normalize(suffix)
    if not parts:
        raise IndexDecodeError("Empty index suffix")

    if vendor == Vendor.HUAWEI:
        return _decode_huawei(parts)
    if vendor == Vendor.ZTE:
        return _decode_zte(parts)
    raise IndexDecodeError(f"No index scheme for vendor {vendor!r}")


def decode_port_index(suffix: Union[str, Sequence[int]], vendor: Vendor) -> int:
    """
    Decode a PON-port table suffix (no ONU component) into a port number.

    Huawei PON port tables are indexed by the GPON ifIndex; ZTE by the
    port number itself.
    """
    parts = _normalize(suffix)
    if not parts:
        raise IndexDecodeError("Empty index suffix")

    if vendor == Vendor.HUAWEI:
        if len(parts) >= 3:
            slot, port = parts[-2], parts[-1]
            return _clamp(slot * HUAWEI_PORTS_PER_SLOT + port, PON_PORT_MIN, PON_PORT_MAX)
        return _clamp(huawei_pon_port(parts[0]), PON_PORT_MIN, PON_PORT_MAX)
    if vendor == Vendor.ZTE:
        return _clamp(parts[-1], PON_PORT_MIN, PON_PORT_MAX)
    raise IndexDecodeError(f"No index scheme for vendor {vendor!r}")


def encode_index(pon_port: int, onu_id: int, vendor: Vendor) -> Tuple[int, ...]:
    """
    Inverse of decode_index for the vendor's preferred row layout.

    Used to address a single ONU with GET instead of walking.
    """
    if vendor == Vendor.HUAWEI:
        return _encode_huawei(pon_port, onu_id)
    if vendor == Vendor.ZTE:
        return _encode_zte(pon_port, onu_id)
    raise IndexDecodeError(f"No index scheme for vendor {vendor!r}")
