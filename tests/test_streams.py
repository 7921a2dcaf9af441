# tests/test_streams.py
from __future__ import annotations

import pytest
import tnefdata
from tnefdata import BINARY, LONG, STRING8, UNICODE

from winmail.tnef import AttributeLevel, AttributeTag, TnefStateError, ValueStream


def test_raw_stream_excludes_prefix_and_padding():
    reader = tnefdata.mapi_reader(
        tnefdata.prop(BINARY, 0x1009, tnefdata.binary(b"abcde")),
        tnefdata.prop(LONG, 0x0E08, tnefdata.long(9)),
    )
    prop = reader.property_reader
    assert prop.read_next_property()
    stream = prop.get_raw_value_read_stream()
    assert isinstance(stream, ValueStream)
    assert stream.readable()
    assert stream.read() == b"abcde"
    assert stream.read() == b""
    # the stream consumed the value
    with pytest.raises(TnefStateError):
        prop.read_value()
    assert prop.read_next_property()
    assert prop.read_value() == 9


def test_raw_stream_over_fixed_value():
    prop = tnefdata.mapi_reader(tnefdata.prop(LONG, 0x0E08, tnefdata.long(258))).property_reader
    assert prop.read_next_property()
    assert prop.get_raw_value_read_stream().read() == b"\x02\x01\x00\x00"


def test_raw_stream_over_attribute():
    data = tnefdata.tnef(
        tnefdata.attribute(AttributeLevel.MESSAGE, AttributeTag.SUBJECT, b"Hi\0")
    )
    prop = tnefdata.open_attribute(data).property_reader
    assert prop.get_raw_value_read_stream().read() == b"Hi\0"


def test_raw_stream_without_pending_value():
    prop = tnefdata.mapi_reader(tnefdata.prop(LONG, 0x0E08, tnefdata.long(1))).property_reader
    with pytest.raises(TnefStateError, match="no value is pending"):
        prop.get_raw_value_read_stream()


def test_read_raw_value_in_chunks():
    reader = tnefdata.mapi_reader(
        tnefdata.prop(BINARY, 0x1009, tnefdata.binary(b"hello world")),
        tnefdata.prop(LONG, 0x0E08, tnefdata.long(9)),
    )
    prop = reader.property_reader
    assert prop.read_next_property()
    assert prop.read_raw_value(4) == b"hell"
    assert prop.read_raw_value(4) == b"o wo"
    assert prop.read_raw_value(100) == b"rld"
    assert prop.read_raw_value(1) == b""
    assert not prop.state.value_consumed
    assert prop.read_next_property()
    assert prop.read_value() == 9


def test_read_raw_value_rejects_negative_size():
    prop = tnefdata.mapi_reader(tnefdata.prop(LONG, 0x0E08, tnefdata.long(1))).property_reader
    assert prop.read_next_property()
    with pytest.raises(ValueError, match="non-negative"):
        prop.read_raw_value(-1)


def test_read_text_value_joins_split_characters():
    text = "héllo €"
    prop = tnefdata.mapi_reader(
        tnefdata.prop(UNICODE, 0x0037, tnefdata.variable(text.encode("utf-16-le")))
    ).property_reader
    assert prop.read_next_property()
    chunks = []
    while chunk := prop.read_text_value(3):
        chunks.append(chunk)
    assert "".join(chunks) == text
    assert len(chunks) > 1


def test_read_text_value_uses_message_codepage():
    text = "naïve ☃"
    reader = tnefdata.mapi_reader(
        tnefdata.prop(STRING8, 0x0037, tnefdata.variable(text.encode("utf-8"))),
        message_codepage=65001,
    )
    prop = reader.property_reader
    assert prop.read_next_property()
    decoded = ""
    for _ in range(len(text.encode("utf-8"))):
        decoded += prop.read_text_value(1)
    assert decoded == text
    assert prop.read_text_value(1) == ""


def test_read_text_value_over_attribute():
    data = tnefdata.tnef(
        tnefdata.attribute(AttributeLevel.MESSAGE, AttributeTag.SUBJECT, b"Caf\xe9")
    )
    prop = tnefdata.open_attribute(data).property_reader
    assert prop.read_text_value(100) == "Café"


def test_read_text_value_rejects_fixed_types():
    prop = tnefdata.mapi_reader(tnefdata.prop(LONG, 0x0E08, tnefdata.long(1))).property_reader
    assert prop.read_next_property()
    with pytest.raises(TnefStateError, match="as text"):
        prop.read_text_value(4)


def test_read_text_value_after_raw_read():
    prop = tnefdata.mapi_reader(
        tnefdata.prop(BINARY, 0x1009, tnefdata.binary(b"hello"))
    ).property_reader
    assert prop.read_next_property()
    assert prop.read_raw_value(2) == b"he"
    with pytest.raises(TnefStateError, match="beginning of the value"):
        prop.read_text_value(2)
