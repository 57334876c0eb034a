"""
oltpoll - SNMP Value Parsers.

Functions for turning raw pysnmp values into plain Python values.

Handles:
- OctetString: printable text, or uppercase hex for binary (ONU serials)
- Integer32 / Counter / Gauge / TimeTicks: int
- ObjectIdentifier: dotted string
- IpAddress: dotted quad

All functions are defensive - they return safe fallback values
on decode errors rather than raising exceptions.
"""

import binascii
import string
from typing import Any, Optional, Union

from pyasn1.type import univ


DecodedValue = Union[str, int, float]

# Bytes accepted as "text": printable ASCII plus whitespace
_TEXT_BYTES = frozenset(string.printable.encode('ascii'))


# =============================================================================
# Generic Decoding
# =============================================================================

def decode_value(value: Any) -> DecodedValue:
    """
    Interpret a raw SNMP value losslessly.

    Byte payloads whose every byte is printable ASCII or whitespace
    become trimmed text. Anything else becomes the uppercase hex of
    the raw bytes, so no byte is ever silently dropped.

    Examples:
        >>> decode_value(b'  MA5683T  ')
        'MA5683T'
        >>> decode_value(b'HWTC\\x12\\x34\\x56\\x78')
        '4857544312345678'
        >>> decode_value(42)
        42
    """
    try:
        if isinstance(value, bool):
            return int(value)

        if isinstance(value, (int, float)):
            return value

        if isinstance(value, (bytes, bytearray)):
            return _decode_octets(bytes(value))

        if isinstance(value, str):
            return value.strip()

        # pysnmp IpAddress is an OctetString subclass; render it dotted
        if type(value).__name__ == 'IpAddress' and hasattr(value, 'asNumbers'):
            return '.'.join(str(b) for b in value.asNumbers())

        if hasattr(value, 'asOctets'):
            return _decode_octets(value.asOctets())

        if isinstance(value, univ.ObjectIdentifier):
            return str(value)

        if isinstance(value, univ.Integer):
            return int(value)

        return str(value)

    except Exception:
        return str(value)


def _decode_octets(octets: bytes) -> str:
    """Printable -> trimmed text, otherwise uppercase hex."""
    if all(b in _TEXT_BYTES for b in octets):
        return octets.decode('ascii').strip()
    return binascii.hexlify(octets).decode('ascii').upper()


# =============================================================================
# Typed Helpers
# =============================================================================

def decode_int(value: Any) -> Optional[int]:
    """
    Safely convert a decoded or raw SNMP value to integer.

    Accepts ints, numeric text ("-2600", " 42 ") and pysnmp integer
    types. Returns None for anything else.
    """
    if value is None:
        return None
    try:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value)
        if isinstance(value, univ.Integer):
            return int(value)
        if hasattr(value, 'asOctets'):
            value = value.asOctets().decode('ascii', errors='replace')
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode('ascii', errors='replace')
        return int(str(value).strip())
    except (ValueError, TypeError):
        return None


def decode_text(value: Any) -> Optional[str]:
    """
    Decode to a string; empty strings become None.

    Used for descriptions and names where "" and missing mean the same.
    """
    if value is None:
        return None
    text = str(decode_value(value)).replace('\x00', '').strip()
    return text or None
