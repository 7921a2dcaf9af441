# tests/test_accessors.py
"""Typed value accessors and the conversions each stored type allows."""

from __future__ import annotations

import datetime
import math
import struct
import uuid

import pytest
import tnefdata
from tnefdata import (
    APP_TIME,
    BINARY,
    BOOLEAN,
    CLASS_ID,
    CURRENCY,
    DOUBLE,
    I2,
    I8,
    LONG,
    R4,
    STRING8,
    SYS_TIME,
    UNICODE,
)

from winmail.tnef import (
    AttributeLevel,
    AttributeTag,
    ComplianceMode,
    ComplianceStatus,
    PropertyReader,
    TnefComplianceError,
    TnefStateError,
)

_GUID = uuid.UUID("6ed8da90-450b-101b-98da-00aa003f1305")


def _property(type_: int, value: bytes, **kwargs) -> PropertyReader:
    reader = tnefdata.mapi_reader(tnefdata.prop(type_, 0x6001, value), **kwargs)
    assert reader.property_reader.read_next_property()
    return reader.property_reader


def _attribute(tag: int, value: bytes) -> PropertyReader:
    data = tnefdata.tnef(tnefdata.attribute(AttributeLevel.MESSAGE, tag, value))
    return tnefdata.open_attribute(data).property_reader


@pytest.mark.parametrize(
    ("type_", "value", "method", "expected"),
    [
        (I2, tnefdata.short(-2), "read_value", -2),
        (I2, tnefdata.short(-2), "read_value_as_int16", -2),
        (I2, tnefdata.short(-2), "read_value_as_int32", 0xFFFE),
        (I2, tnefdata.short(-2), "read_value_as_int64", 0xFFFE),
        (I2, tnefdata.short(-2), "read_value_as_double", 65534.0),
        (I2, tnefdata.short(0), "read_value_as_boolean", False),
        (BOOLEAN, tnefdata.long(0x100), "read_value_as_boolean", False),
        (BOOLEAN, tnefdata.long(0x101), "read_value", True),
        (BOOLEAN, tnefdata.long(0x101), "read_value_as_int32", 1),
        (LONG, tnefdata.long(-5), "read_value_as_int16", -5),
        (LONG, tnefdata.long(0x12345678), "read_value_as_int16", 0x5678),
        (LONG, tnefdata.long(-5), "read_value_as_int64", -5),
        (LONG, tnefdata.long(-5), "read_value_as_double", -5.0),
        (LONG, tnefdata.long(-5), "read_value_as_float", -5.0),
        (LONG, tnefdata.long(-5), "read_value_as_boolean", True),
        (I8, tnefdata.int64(2**40 + 3), "read_value", 2**40 + 3),
        (I8, tnefdata.int64(2**40 + 3), "read_value_as_int32", 3),
        (I8, tnefdata.int64(2**40 + 3), "read_value_as_int16", 3),
        (CURRENCY, tnefdata.int64(-10), "read_value_as_int64", -10),
        (DOUBLE, tnefdata.double(3.9), "read_value", 3.9),
        (DOUBLE, tnefdata.double(3.9), "read_value_as_int32", 3),
        (DOUBLE, tnefdata.double(-3.9), "read_value_as_int64", -3),
        (DOUBLE, tnefdata.double(math.nan), "read_value_as_int32", -(2**31)),
        (DOUBLE, tnefdata.double(0.1), "read_value_as_float", struct.unpack("<f", struct.pack("<f", 0.1))[0]),
        (R4, tnefdata.single(1.5), "read_value", 1.5),
        (R4, tnefdata.single(1.5), "read_value_as_double", 1.5),
        (R4, tnefdata.single(1.5), "read_value_as_int16", 1),
        (APP_TIME, tnefdata.double(1.5), "read_value_as_datetime", datetime.datetime(1899, 12, 31, 12)),
        (
            SYS_TIME,
            tnefdata.int64(116_444_736_000_000_000),
            "read_value",
            datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc),
        ),
        (CLASS_ID, tnefdata.guid(_GUID), "read_value", _GUID),
        (CLASS_ID, tnefdata.guid(_GUID), "read_value_as_guid", _GUID),
        (CLASS_ID, tnefdata.guid(_GUID), "read_value_as_bytes", _GUID.bytes_le),
        (UNICODE, tnefdata.unicode("hi"), "read_value_as_string", "hi"),
        (UNICODE, tnefdata.unicode("hi"), "read_value_as_bytes", b"h\0i\0\0\0"),
        (STRING8, tnefdata.string8("plain"), "read_value_as_string", "plain"),
        (BINARY, tnefdata.binary(b"hello"), "read_value_as_string", "hello"),
        (BINARY, tnefdata.binary(b"\x00\xff"), "read_value", b"\x00\xff"),
    ],
)
def test_property_conversions(type_: int, value: bytes, method: str, expected: object):
    prop = _property(type_, value)
    result = getattr(prop, method)()
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize(
    ("type_", "value", "method"),
    [
        (DOUBLE, tnefdata.double(1.0), "read_value_as_boolean"),
        (DOUBLE, tnefdata.double(1.0), "read_value_as_datetime"),
        (LONG, tnefdata.long(1), "read_value_as_string"),
        (LONG, tnefdata.long(1), "read_value_as_bytes"),
        (LONG, tnefdata.long(1), "read_value_as_guid"),
        (APP_TIME, tnefdata.double(1.0), "read_value_as_int32"),
        (UNICODE, tnefdata.unicode("x"), "read_value_as_int64"),
        (BINARY, tnefdata.binary(b"x"), "read_value_as_guid"),
        (CLASS_ID, tnefdata.guid(_GUID), "read_value_as_double"),
    ],
)
def test_invalid_property_conversions(type_: int, value: bytes, method: str):
    prop = _property(type_, value)
    with pytest.raises(TnefStateError, match="cannot read"):
        getattr(prop, method)()
    # a refused conversion leaves the value unread
    assert prop.read_value() is not None


def test_invalid_app_time_is_flagged():
    prop = _property(APP_TIME, tnefdata.double(math.nan))
    assert prop.read_value_as_datetime() == datetime.datetime.min
    assert prop._reader.compliance_status == ComplianceStatus.INVALID_DATE


def test_invalid_sys_time_is_flagged():
    prop = _property(SYS_TIME, tnefdata.int64(-1))
    assert prop.read_value() == datetime.datetime.min
    assert prop._reader.compliance_status == ComplianceStatus.INVALID_DATE


def test_invalid_date_raises_in_strict_mode():
    prop = _property(APP_TIME, tnefdata.double(math.inf), compliance_mode=ComplianceMode.STRICT)
    with pytest.raises(TnefComplianceError) as excinfo:
        prop.read_value()
    assert excinfo.value.status == ComplianceStatus.INVALID_DATE
    assert isinstance(excinfo.value.cause, ValueError)


@pytest.mark.parametrize(
    ("text", "scheme", "netloc", "path"),
    [
        ("https://example.com/x", "https", "example.com", "/x"),
        ("relative/path", "", "", "relative/path"),
    ],
)
def test_read_value_as_uri(text: str, scheme: str, netloc: str, path: str):
    uri = _property(STRING8, tnefdata.string8(text)).read_value_as_uri()
    assert uri is not None
    assert (uri.scheme, uri.netloc, uri.path) == (scheme, netloc, path)


@pytest.mark.parametrize("text", ["", "https://example.com/a b", "http://[::1"])
def test_read_value_as_uri_rejects(text: str):
    assert _property(STRING8, tnefdata.string8(text)).read_value_as_uri() is None


# -- attribute values --------------------------------------------------


def test_string_attribute():
    prop = _attribute(AttributeTag.SUBJECT, b"Caf\xe9 menu\0")
    assert prop.value_count == 1
    assert prop.read_value_as_string() == "Café menu"


def test_string_attribute_as_bytes():
    assert _attribute(AttributeTag.SUBJECT, b"abc\0").read_value_as_bytes() == b"abc\0"


def test_short_attribute():
    prop = _attribute(AttributeTag.PRIORITY, struct.pack("<h", 2))
    assert prop.read_value_as_int32() == 2


def test_short_attribute_as_boolean():
    assert _attribute(AttributeTag.PRIORITY, struct.pack("<h", 0)).read_value_as_boolean() is False


def test_dword_attribute():
    prop = _attribute(AttributeTag.TNEF_VERSION, struct.pack("<i", 0x00010000))
    assert prop.read_value_as_int64() == 0x00010000


def test_date_attribute():
    value = struct.pack("<7h", 2024, 3, 15, 10, 30, 0, 5)
    prop = _attribute(AttributeTag.DATE_SENT, value)
    assert prop.value_type is datetime.datetime
    assert prop.read_value() == datetime.datetime(2024, 3, 15, 10, 30, 0)


def test_invalid_date_attribute():
    value = struct.pack("<7h", 2024, 13, 15, 10, 30, 0, 5)
    prop = _attribute(AttributeTag.DATE_SENT, value)
    assert prop.read_value_as_datetime() == datetime.datetime.min
    assert prop._reader.compliance_status == ComplianceStatus.INVALID_DATE


def test_invalid_attribute_conversions():
    prop = _attribute(AttributeTag.PRIORITY, struct.pack("<h", 2))
    with pytest.raises(TnefStateError):
        prop.read_value_as_string()
    with pytest.raises(TnefStateError):
        prop.read_value_as_guid()
    with pytest.raises(TnefStateError):
        prop.read_value_as_datetime()
    assert prop.read_value() == 2


def test_no_pending_value():
    prop = _attribute(AttributeTag.PRIORITY, struct.pack("<h", 2))
    assert prop.read_value() == 2
    with pytest.raises(TnefStateError, match="no unread value"):
        prop.read_value()
