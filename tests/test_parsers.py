"""Tests for raw value decoding."""

from pyasn1.type import univ
from pysnmp.proto import rfc1902

from oltpoll.snmp.parsers import decode_int, decode_text, decode_value


def test_printable_bytes_become_trimmed_text() -> None:
    assert decode_value(b'  MA5683T  ') == 'MA5683T'
    assert decode_value(b'line one\tline two\n') == 'line one\tline two'


def test_binary_bytes_become_uppercase_hex() -> None:
    raw = b'HWTC\x12\x34\x56\xab'

    text = decode_value(raw)

    assert text == '48575443123456AB'
    assert bytes.fromhex(text) == raw


def test_octet_string_payloads() -> None:
    assert decode_value(rfc1902.OctetString(b'ZTEGC0FFEE01')) == 'ZTEGC0FFEE01'
    assert decode_value(univ.OctetString(b'\x00\x01\xff')) == '0001FF'


def test_integer_types() -> None:
    assert decode_value(rfc1902.Integer32(-2600)) == -2600
    assert decode_value(rfc1902.Counter32(7)) == 7
    assert decode_value(rfc1902.Gauge32(1000)) == 1000
    assert decode_value(rfc1902.TimeTicks(123456)) == 123456
    assert decode_value(42) == 42


def test_oid_and_ip_address() -> None:
    assert decode_value(univ.ObjectIdentifier('1.3.6.1.4.1.2011')) == '1.3.6.1.4.1.2011'
    assert decode_value(rfc1902.IpAddress('10.20.0.2')) == '10.20.0.2'


def test_unknown_objects_fall_back_to_str() -> None:
    class Odd:
        def __str__(self) -> str:
            return "odd"

    assert decode_value(Odd()) == "odd"


def test_decode_int() -> None:
    assert decode_int(-2600) == -2600
    assert decode_int(" 42 ") == 42
    assert decode_int(b"17") == 17
    assert decode_int(rfc1902.Integer32(3)) == 3
    assert decode_int("SN123") is None
    assert decode_int(None) is None


def test_decode_text() -> None:
    assert decode_text("  cust-A  ") == "cust-A"
    assert decode_text("   ") is None
    assert decode_text("") is None
    assert decode_text(None) is None


def test_printable_hex_digits_stay_text() -> None:
    # Printable payloads are never hex-encoded, even when they look like hex
    assert decode_value(b"ABC") == "ABC"
    assert decode_value(b"48575443") == "48575443"
