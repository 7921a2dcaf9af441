# tests/tnefdata.py
"""Builders for synthetic TNEF streams used throughout the test suite."""

from __future__ import annotations

import struct
import uuid

from winmail.tnef import (
    AttributeLevel,
    AttributeTag,
    ComplianceMode,
    PropertyType,
    TnefReader,
)
from winmail.tnef.reader import TNEF_SIGNATURE, TNEF_VERSION

I2 = PropertyType.I2
LONG = PropertyType.LONG
R4 = PropertyType.R4
DOUBLE = PropertyType.DOUBLE
CURRENCY = PropertyType.CURRENCY
APP_TIME = PropertyType.APP_TIME
ERROR = PropertyType.ERROR
BOOLEAN = PropertyType.BOOLEAN
OBJECT = PropertyType.OBJECT
I8 = PropertyType.I8
STRING8 = PropertyType.STRING8
UNICODE = PropertyType.UNICODE
SYS_TIME = PropertyType.SYS_TIME
CLASS_ID = PropertyType.CLASS_ID
BINARY = PropertyType.BINARY
MV = PropertyType.MULTI_VALUED

PS_PUBLIC_STRINGS = uuid.UUID("00020329-0000-0000-c000-000000000046")


def checksum(value: bytes) -> int:
    return sum(value) & 0xFFFF


def attribute(
    level: int, tag: int, value: bytes, length: int | None = None, check: int | None = None
) -> bytes:
    """Encode one attribute; *length* and *check* override the computed fields."""
    if length is None:
        length = len(value)
    if check is None:
        check = checksum(value)
    return struct.pack("<BIi", level, tag, length) + value + struct.pack("<H", check)


def tnef(*attributes: bytes, key: int = 0x0001, signature: int = TNEF_SIGNATURE) -> bytes:
    return struct.pack("<IH", signature, key) + b"".join(attributes)


def version_attribute(version: int = TNEF_VERSION) -> bytes:
    return attribute(
        AttributeLevel.MESSAGE, AttributeTag.TNEF_VERSION, struct.pack("<i", version)
    )


def codepage_attribute(codepage: int) -> bytes:
    return attribute(
        AttributeLevel.MESSAGE,
        AttributeTag.OEM_CODEPAGE,
        struct.pack("<ii", codepage, 0),
    )


def padded(data: bytes) -> bytes:
    return data + b"\0" * (-len(data) % 4)


# -- property values ---------------------------------------------------


def long(value: int) -> bytes:
    return struct.pack("<i", value)


def boolean(value: bool) -> bytes:
    return struct.pack("<i", 1 if value else 0)


def short(value: int) -> bytes:
    return struct.pack("<hxx", value)


def int64(value: int) -> bytes:
    return struct.pack("<q", value)


def double(value: float) -> bytes:
    return struct.pack("<d", value)


def single(value: float) -> bytes:
    return struct.pack("<f", value)


def guid(value: uuid.UUID) -> bytes:
    return value.bytes_le


def variable(data: bytes, declared: int | None = None) -> bytes:
    """A length-prefixed, padded value; *declared* overrides the prefix."""
    if declared is None:
        declared = len(data)
    return struct.pack("<i", declared) + padded(data)


def unicode(text: str) -> bytes:
    return variable(text.encode("utf-16-le") + b"\0\0")


def string8(text: str, codec: str = "cp1252") -> bytes:
    return variable(text.encode(codec) + b"\0")


def binary(data: bytes) -> bytes:
    return variable(data)


# -- property records --------------------------------------------------


def named_by_name(name: str, guid_: uuid.UUID = PS_PUBLIC_STRINGS) -> bytes:
    return guid_.bytes_le + struct.pack("<i", 1) + unicode(name)


def named_by_id(id_: int, guid_: uuid.UUID = PS_PUBLIC_STRINGS) -> bytes:
    return guid_.bytes_le + struct.pack("<ii", 0, id_)


def prop(
    type_: int,
    id_: int,
    *values: bytes,
    name: bytes = b"",
    count: int | None = None,
) -> bytes:
    """Encode a property record.

    The value count is written for multi-valued and variable-length types,
    taken from the number of *values* unless *count* is given.
    """
    header = struct.pack("<HH", type_, id_) + name
    base = type_ & ~MV
    if type_ & MV or base in (UNICODE, STRING8, BINARY, OBJECT):
        header += struct.pack("<i", len(values) if count is None else count)
    return header + b"".join(values)


def property_list(*props: bytes, count: int | None = None) -> bytes:
    return struct.pack("<i", len(props) if count is None else count) + b"".join(props)


def row_table(*rows: tuple[bytes, ...], count: int | None = None) -> bytes:
    body = b"".join(property_list(*row) for row in rows)
    return struct.pack("<i", len(rows) if count is None else count) + body


# -- readers -----------------------------------------------------------


def mapi_stream(*props: bytes, tag: int = AttributeTag.MAPI_PROPERTIES) -> bytes:
    level = AttributeLevel.ATTACHMENT if tag == AttributeTag.ATTACHMENT else AttributeLevel.MESSAGE
    return tnef(attribute(level, tag, property_list(*props)))


def open_attribute(
    data: bytes,
    message_codepage: int = 0,
    compliance_mode: ComplianceMode = ComplianceMode.LOOSE,
) -> TnefReader:
    """Return a reader positioned on the first attribute of *data*."""
    reader = TnefReader(data, message_codepage=message_codepage, compliance_mode=compliance_mode)
    assert reader.read_next_attribute()
    return reader


def mapi_reader(*props: bytes, **kwargs) -> TnefReader:
    """Return a reader positioned on a property-list attribute holding *props*."""
    return open_attribute(mapi_stream(*props), **kwargs)
