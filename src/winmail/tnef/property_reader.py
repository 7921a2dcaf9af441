"""PropertyReader: a cursor over the rows, properties and values of an attribute.

Attributes that carry MAPI data (``attMAPIProps``, ``attAttachment`` and
``attRecipTable``) hold a property list or a table of property lists.  Each
property record is a 2-byte type, a 2-byte identifier, an optional
named-property header, an optional value count and the values themselves.
Variable-length values are a 4-byte length followed by the payload padded
to a multiple of four bytes.

The reader never materializes a value until one of the ``read_value*``
methods asks for it, so the raw byte cursor of the owning
:class:`~winmail.tnef.reader.TnefReader` and the logical cursor kept in
:class:`CursorState` have to move in lockstep.
"""

from __future__ import annotations

import codecs
import dataclasses
import datetime
import io
import logging
import urllib.parse
import uuid
from typing import TYPE_CHECKING

from winmail._utils import message_codec_name
from winmail.tnef._convert import (
    attribute_date,
    filetime_to_datetime,
    ole_date_to_datetime,
    to_int16,
    to_int32,
    to_single,
    truncate_float,
)
from winmail.tnef.enums import (
    AttachMethod,
    AttributeTag,
    AttributeType,
    ComplianceStatus,
    NameIdKind,
    PropertyId,
    PropertyType,
)
from winmail.tnef.exceptions import TnefStateError, TnefTruncatedError
from winmail.tnef.tags import NameId, PropertyTag, _known

if TYPE_CHECKING:
    from winmail.tnef.reader import TnefReader

_FIXED_LENGTHS: dict[int, int] = {
    PropertyType.UNSPECIFIED: 0,
    PropertyType.NULL: 0,
    PropertyType.BOOLEAN: 4,
    PropertyType.ERROR: 4,
    PropertyType.LONG: 4,
    PropertyType.R4: 4,
    PropertyType.I2: 4,
    PropertyType.CURRENCY: 8,
    PropertyType.DOUBLE: 8,
    PropertyType.I8: 8,
    PropertyType.APP_TIME: 8,
    PropertyType.SYS_TIME: 8,
    PropertyType.CLASS_ID: 16,
}

_VARIABLE_TYPES = frozenset(
    {
        PropertyType.UNICODE,
        PropertyType.STRING8,
        PropertyType.BINARY,
        PropertyType.OBJECT,
    }
)

_INT32_TYPES = frozenset({PropertyType.ERROR, PropertyType.LONG})
_INT64_TYPES = frozenset({PropertyType.CURRENCY, PropertyType.I8})
_SHORT_ATTRIBUTES = frozenset({AttributeType.SHORT, AttributeType.WORD})
_LONG_ATTRIBUTES = frozenset({AttributeType.LONG, AttributeType.DWORD})
_STRING_ATTRIBUTES = frozenset(
    {AttributeType.STRING, AttributeType.TEXT, AttributeType.BYTE}
)

_PROPERTY_VALUE_TYPES: dict[int, type] = {
    PropertyType.I2: int,
    PropertyType.BOOLEAN: bool,
    PropertyType.CURRENCY: int,
    PropertyType.I8: int,
    PropertyType.ERROR: int,
    PropertyType.LONG: int,
    PropertyType.DOUBLE: float,
    PropertyType.R4: float,
    PropertyType.APP_TIME: datetime.datetime,
    PropertyType.SYS_TIME: datetime.datetime,
    PropertyType.UNICODE: str,
    PropertyType.STRING8: str,
    PropertyType.BINARY: bytes,
    PropertyType.CLASS_ID: uuid.UUID,
    PropertyType.OBJECT: bytes,
}

_ATTRIBUTE_VALUE_TYPES: dict[int, type] = {
    AttributeType.TRIPLES: bytes,
    AttributeType.STRING: str,
    AttributeType.TEXT: str,
    AttributeType.DATE: datetime.datetime,
    AttributeType.SHORT: int,
    AttributeType.LONG: int,
    AttributeType.BYTE: bytes,
    AttributeType.WORD: int,
    AttributeType.DWORD: int,
}


def _padded_length(length: int) -> int:
    return (length + 3) & ~3


@dataclasses.dataclass(slots=True)
class CursorState:
    """The logical position of a :class:`PropertyReader`.

    Indices count what has been consumed at each level, so a level is
    exhausted once its index reaches its count.  ``value_consumed`` records
    whether the value window ``[raw_value_offset, raw_value_offset +
    raw_value_length)`` has already been read.  ``decoder`` belongs to that
    window and is discarded whenever a new one begins.
    """

    property_tag: PropertyTag = PropertyTag.NULL
    property_name: NameId = NameId()
    raw_value_offset: int = 0
    raw_value_length: int = 0
    payload_end: int = 0
    property_index: int = 0
    property_count: int = 0
    value_index: int = 0
    value_count: int = 0
    row_index: int = 0
    row_count: int = 0
    value_consumed: bool = False
    decoder: codecs.IncrementalDecoder | None = None

    def begin_attribute(self) -> None:
        """Forget everything; a new attribute is being entered."""
        self.property_tag = PropertyTag.NULL
        self.property_name = NameId()
        self.raw_value_offset = 0
        self.raw_value_length = 0
        self.payload_end = 0
        self.property_index = 0
        self.property_count = 0
        self.value_index = 0
        self.value_count = 0
        self.row_index = 0
        self.row_count = 0
        self.value_consumed = False
        self.decoder = None

    def begin_row(self, property_count: int) -> None:
        self.property_index = 0
        self.property_count = property_count
        self.value_index = 0
        self.value_count = 0
        self.value_consumed = False
        self.decoder = None

    def begin_property(self, tag: PropertyTag, name: NameId, value_count: int) -> None:
        self.property_tag = tag
        self.property_name = name
        self.property_index += 1
        self.value_index = 0
        self.value_count = value_count
        self.value_consumed = False
        self.decoder = None

    def begin_value(self, offset: int, length: int) -> None:
        self.raw_value_offset = offset
        self.raw_value_length = length
        self.payload_end = offset + length
        self.value_consumed = False
        self.decoder = None

    def consume(self) -> None:
        self.value_index += 1
        self.value_consumed = True

    @property
    def value_end(self) -> int:
        return self.raw_value_offset + self.raw_value_length


class ValueStream(io.RawIOBase):
    """A read-only stream over the payload of one value.

    The stream reads straight from the owning reader's cursor, so it is only
    meaningful until the reader is advanced.
    """

    def __init__(self, reader: TnefReader, end: int) -> None:
        super().__init__()
        self._reader = reader
        self._end = end

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int:
        count = min(len(buffer), self._end - self._reader.stream_offset)
        if count <= 0:
            return 0
        chunk = self._reader.read_attribute_raw_value(count)
        buffer[: len(chunk)] = chunk
        return len(chunk)


class PropertyReader:
    """Cursor over the MAPI rows, properties and values of the current attribute.

    The owning :class:`~winmail.tnef.reader.TnefReader` calls :meth:`load`
    each time it enters an attribute.  Callers then walk the attribute with
    :meth:`read_next_row`, :meth:`read_next_property` and
    :meth:`read_next_value`, and read the current value with one of the
    ``read_value*`` methods or as raw bytes.  Reading a value consumes it;
    advancing past a value that was never read skips it.
    """

    def __init__(self, reader: TnefReader) -> None:
        self.logger = logging.getLogger(__name__)
        self._reader = reader
        self._state = CursorState()
        self.attach_method: AttachMethod | int = AttachMethod.NO_ATTACHMENT

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._state!r})"

    # -- metadata --------------------------------------------------------

    @property
    def state(self) -> CursorState:
        """A snapshot of the cursor state."""
        return dataclasses.replace(self._state)

    @property
    def property_tag(self) -> PropertyTag:
        return self._state.property_tag

    @property
    def property_name_id(self) -> NameId:
        return self._state.property_name

    @property
    def property_count(self) -> int:
        return self._state.property_count

    @property
    def value_count(self) -> int:
        return self._state.value_count

    @property
    def row_count(self) -> int:
        return self._state.row_count

    @property
    def raw_value_length(self) -> int:
        return self._state.raw_value_length

    @property
    def raw_value_stream_offset(self) -> int:
        return self._state.raw_value_offset

    @property
    def is_multi_valued_property(self) -> bool:
        return self._state.property_tag.is_multi_valued

    @property
    def is_named_property(self) -> bool:
        return self._state.property_tag.is_named

    @property
    def is_object_property(self) -> bool:
        return self._value_tnef_type == PropertyType.OBJECT

    @property
    def is_embedded_message(self) -> bool:
        """Whether the current property holds a nested TNEF message."""
        return (
            self._state.property_tag.id == PropertyId.ATTACH_DATA
            and self.attach_method == AttachMethod.EMBEDDED_MESSAGE
        )

    @property
    def value_type(self) -> type:
        """The Python type :meth:`read_value` returns for the current value."""
        if self._state.property_count > 0:
            return _PROPERTY_VALUE_TYPES.get(self._value_tnef_type, object)
        return _ATTRIBUTE_VALUE_TYPES.get(self._reader.attribute_type, object)

    @property
    def _value_tnef_type(self) -> PropertyType | int:
        return self._state.property_tag.value_tnef_type

    # -- loading and advancement -----------------------------------------

    def load(self) -> None:
        """Reset the cursor for the attribute the owning reader just entered.

        Property-list attributes start with a property count and table
        attributes with a row count.  Every other attribute is a single raw
        value spanning the whole attribute.
        """
        state = self._state
        state.begin_attribute()
        tag = self._reader.attribute_tag
        try:
            if tag in (AttributeTag.MAPI_PROPERTIES, AttributeTag.ATTACHMENT):
                self._load_property_count()
            elif tag == AttributeTag.RECIPIENT_TABLE:
                self._load_row_count()
            else:
                state.begin_value(
                    self._reader.stream_offset, self._reader.attribute_raw_value_length
                )
                state.value_count = 1
        except TnefTruncatedError as exc:
            state.begin_attribute()
            self._reader.set_compliance_error(ComplianceStatus.STREAM_TRUNCATED, exc)

    def _load_property_count(self) -> None:
        count = self._reader.read_int32()
        if count < 0:
            self._state.begin_row(0)
            self._reader.set_compliance_error(ComplianceStatus.INVALID_PROPERTY_LENGTH)
            return
        self._state.begin_row(count)

    def _load_row_count(self) -> None:
        count = self._reader.read_int32()
        if count < 0:
            self._state.row_count = 0
            self._reader.set_compliance_error(ComplianceStatus.INVALID_ROW_COUNT)
            return
        self._state.row_count = count

    def _read_value_count(self) -> int:
        count = self._reader.read_int32()
        if count < 0:
            self._reader.set_compliance_error(ComplianceStatus.INVALID_ATTRIBUTE_VALUE)
            return 0
        return count

    def _load_value_count(self, tag: PropertyTag) -> int:
        if tag.is_multi_valued or tag.value_tnef_type in _VARIABLE_TYPES:
            return self._read_value_count()
        return 1

    def _load_property_name(self) -> NameId:
        guid = uuid.UUID(bytes_le=self._read_bytes(16))
        kind = self._reader.read_int32()
        if kind == NameIdKind.NAME:
            return NameId.from_name(guid, self._read_unicode_string())
        if kind == NameIdKind.ID:
            return NameId.from_id(guid, self._reader.read_int32())
        self._reader.set_compliance_error(ComplianceStatus.INVALID_ATTRIBUTE_VALUE)
        return NameId.from_id(guid, 0)

    def _try_get_property_value_length(self) -> int | None:
        """Return the encoded length of the value at the cursor.

        Fixed-size types need no look-ahead.  Variable-size types peek their
        4-byte length prefix and add the prefix and the padding; a negative
        prefix covers only the prefix itself.

        :returns: The length in bytes, or ``None`` if the property type is
            not one this reader understands.
        """
        value_type = self._value_tnef_type
        length = _FIXED_LENGTHS.get(value_type)
        if length is not None:
            return length
        if value_type in _VARIABLE_TYPES:
            size = self._reader.peek_int32()
            return 4 + _padded_length(size) if size >= 0 else 4
        return None

    def _begin_value(self, length: int) -> None:
        self._state.begin_value(self._reader.stream_offset, length)
        if self._value_tnef_type in _VARIABLE_TYPES and self._reader.peek_int32() < 0:
            self._reader.set_compliance_error(ComplianceStatus.INVALID_PROPERTY_LENGTH)

    def _check_raw_value_length(self) -> bool:
        reader = self._reader
        attribute_end = (
            reader.attribute_raw_value_stream_offset + reader.attribute_raw_value_length
        )
        if self._state.value_end > attribute_end:
            reader.set_compliance_error(ComplianceStatus.INVALID_ATTRIBUTE_VALUE)
            return False
        return True

    def _seek_past_value(self) -> None:
        end = self._state.value_end
        if self._reader.stream_offset < end:
            self._reader.seek(end)

    def read_next_value(self) -> bool:
        """Advance to the next value of the current property.

        A value that was not read is skipped.

        :returns: ``True`` if another value is available, ``False`` once the
            property's values are exhausted or the stream ends.
        """
        state = self._state
        if state.value_index >= state.value_count or state.property_count == 0:
            return False

        if not state.value_consumed:
            state.value_index += 1
        if state.value_index >= state.value_count:
            self._seek_past_value()
            return False

        offset = state.value_end
        if self._reader.stream_offset < offset and not self._reader.seek(offset):
            state.value_index = state.value_count
            return False

        try:
            length = self._try_get_property_value_length()
        except TnefTruncatedError:
            state.value_index = state.value_count
            return False
        if length is None:
            state.value_index = state.value_count
            return False

        self._begin_value(length)
        return True

    def read_next_property(self) -> bool:
        """Advance to the next property of the current row.

        Remaining values of the current property are skipped first.  When a
        property's header names an unsupported value type the rest of the
        row is abandoned, since its length cannot be known.

        :returns: ``True`` if a property header was read and its first value
            lies inside the attribute, ``False`` otherwise.
        """
        state = self._state
        while self.read_next_value():
            pass

        if state.property_index >= state.property_count:
            return False
        self._seek_past_value()

        try:
            value_type = self._reader.read_int16() & 0xFFFF
            property_id = self._reader.read_int16() & 0xFFFF
            tag = PropertyTag.from_int((property_id << 16) | value_type)
            name = self._load_property_name() if tag.is_named else NameId()
            value_count = self._load_value_count(tag)
            state.begin_property(tag, name, value_count)

            length = self._try_get_property_value_length() if value_count else 0
            if length is not None and value_count:
                self._begin_value(length)
                if tag.id == PropertyId.ATTACH_METHOD:
                    self.attach_method = _known(AttachMethod, self._reader.peek_int32())
            elif length is not None:
                state.begin_value(self._reader.stream_offset, 0)
        except TnefTruncatedError:
            state.property_index = state.property_count
            state.value_count = 0
            return False

        if length is None:
            state.property_index = state.property_count
            state.value_count = 0
            self.logger.debug("unsupported property type in tag %s", tag)
            self._reader.set_compliance_error(ComplianceStatus.UNSUPPORTED_PROPERTY_TYPE)
            return False

        return self._check_raw_value_length()

    def read_next_row(self) -> bool:
        """Advance to the next row of a table attribute.

        :returns: ``True`` if a row was entered, ``False`` once the rows are
            exhausted or the stream is truncated.
        """
        state = self._state
        while self.read_next_property():
            pass

        if state.row_index >= state.row_count:
            return False
        self._seek_past_value()

        try:
            self._load_property_count()
        except TnefTruncatedError as exc:
            state.row_index = state.row_count
            self._reader.set_compliance_error(ComplianceStatus.STREAM_TRUNCATED, exc)
            return False

        state.row_index += 1
        return True

    # -- primitive value decoding ----------------------------------------

    def _read_bytes(self, count: int) -> bytes:
        data = self._reader.read_attribute_raw_value(count)
        if len(data) < count:
            msg = f"value truncated: expected {count} bytes, got {len(data)}"
            raise TnefTruncatedError(msg)
        return data

    def _read_byte_array(self) -> bytes:
        length = self._reader.read_int32()
        if length < 0:
            self._reader.set_compliance_error(ComplianceStatus.INVALID_PROPERTY_LENGTH)
            return b""
        data = self._read_bytes(length)
        if length % 4:
            # skip the padding
            self._reader.seek(self._reader.stream_offset + 4 - length % 4)
        return data

    def _read_unicode_string(self) -> str:
        data = self._read_byte_array()
        length = len(data) & ~1
        while length > 1 and data[length - 1] == 0 and data[length - 2] == 0:
            length -= 2
        if length < 2:
            return ""
        return data[:length].decode("utf-16-le", errors="replace")

    def _message_codec(self) -> str:
        return message_codec_name(self._reader.message_codepage)

    def _decode_ansi(self, data: bytes) -> str:
        data = data.rstrip(b"\0")
        if not data:
            return ""
        return data.decode(self._message_codec(), errors="replace")

    def _read_string(self) -> str:
        return self._decode_ansi(self._read_byte_array())

    def _read_attribute_bytes(self) -> bytes:
        return self._read_bytes(self._state.raw_value_length)

    def _read_attribute_string(self) -> str:
        # attribute strings are NUL-terminated
        return self._decode_ansi(self._read_attribute_bytes())

    def _invalid_date(self, exc: ValueError) -> datetime.datetime:
        self._reader.set_compliance_error(ComplianceStatus.INVALID_DATE, exc)
        return datetime.datetime.min

    def _read_app_time(self) -> datetime.datetime:
        value = self._reader.read_double()
        try:
            return ole_date_to_datetime(value)
        except ValueError as exc:
            return self._invalid_date(exc)

    def _read_sys_time(self) -> datetime.datetime:
        value = self._reader.read_int64()
        try:
            return filetime_to_datetime(value)
        except ValueError as exc:
            return self._invalid_date(exc)

    def _read_attribute_date(self) -> datetime.datetime:
        fields = [self._reader.read_int16() for _ in range(7)]
        # the seventh field is the day of the week
        try:
            return attribute_date(*fields[:6])
        except ValueError as exc:
            return self._invalid_date(exc)

    # -- typed accessors -------------------------------------------------

    def _check_value_pending(self) -> None:
        state = self._state
        if (
            state.value_index >= state.value_count
            or state.value_consumed
            or self._reader.stream_offset > state.raw_value_offset
        ):
            msg = "no unread value at the current cursor position"
            raise TnefStateError(msg)

    def _invalid_conversion(self, target: str) -> TnefStateError:
        if self._state.property_count > 0:
            stored = f"property type {self._value_tnef_type!r}"
        else:
            stored = f"attribute type {self._reader.attribute_type!r}"
        return TnefStateError(f"cannot read {stored} as {target}")

    def read_value(self) -> object:
        """Read the current value as its natural Python type.

        See :attr:`value_type` for the type that will be returned.  A
        property of an unknown type is flagged as a compliance error and
        read as ``None``.

        :raises TnefStateError: If no unread value is pending.
        :raises TnefTruncatedError: If the stream ends inside the value.
        """
        self._check_value_pending()
        reader = self._reader
        value: object = None

        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.NULL:
                value = None
            elif value_type == PropertyType.I2:
                # 2 bytes for the short followed by 2 bytes of padding
                value = to_int16(reader.read_int32())
            elif value_type == PropertyType.BOOLEAN:
                value = (reader.read_int32() & 0xFF) != 0
            elif value_type in _INT64_TYPES:
                value = reader.read_int64()
            elif value_type in _INT32_TYPES:
                value = reader.read_int32()
            elif value_type == PropertyType.DOUBLE:
                value = reader.read_double()
            elif value_type == PropertyType.R4:
                value = reader.read_single()
            elif value_type == PropertyType.APP_TIME:
                value = self._read_app_time()
            elif value_type == PropertyType.SYS_TIME:
                value = self._read_sys_time()
            elif value_type == PropertyType.UNICODE:
                value = self._read_unicode_string()
            elif value_type == PropertyType.STRING8:
                value = self._read_string()
            elif value_type in (PropertyType.BINARY, PropertyType.OBJECT):
                value = self._read_byte_array()
            elif value_type == PropertyType.CLASS_ID:
                value = uuid.UUID(bytes_le=self._read_bytes(16))
            else:
                reader.set_compliance_error(ComplianceStatus.UNSUPPORTED_PROPERTY_TYPE)
        else:
            attribute_type = reader.attribute_type
            if attribute_type in (AttributeType.TRIPLES, AttributeType.BYTE):
                value = self._read_attribute_bytes()
            elif attribute_type in (AttributeType.STRING, AttributeType.TEXT):
                value = self._read_attribute_string()
            elif attribute_type == AttributeType.DATE:
                value = self._read_attribute_date()
            elif attribute_type in _SHORT_ATTRIBUTES:
                value = reader.read_int16()
            elif attribute_type in _LONG_ATTRIBUTES:
                value = reader.read_int32()

        self._state.consume()
        return value

    def read_value_as_boolean(self) -> bool:
        """Read any integer-based value as a boolean."""
        self._check_value_pending()
        reader = self._reader
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.BOOLEAN:
                value = (reader.read_int32() & 0xFF) != 0
            elif value_type == PropertyType.I2:
                value = (reader.read_int32() & 0xFFFF) != 0
            elif value_type in _INT32_TYPES:
                value = reader.read_int32() != 0
            elif value_type in _INT64_TYPES:
                value = reader.read_int64() != 0
            else:
                raise self._invalid_conversion("bool")
        else:
            attribute_type = reader.attribute_type
            if attribute_type in _SHORT_ATTRIBUTES:
                value = reader.read_int16() != 0
            elif attribute_type in _LONG_ATTRIBUTES:
                value = reader.read_int32() != 0
            elif attribute_type == AttributeType.BYTE:
                value = reader.read_byte() != 0
            else:
                raise self._invalid_conversion("bool")

        self._state.consume()
        return value

    def read_value_as_bytes(self) -> bytes:
        """Read any string, binary, object or class-id value as bytes.

        For variable-length properties the length prefix and the padding
        are stripped.
        """
        self._check_value_pending()
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type in _VARIABLE_TYPES:
                value = self._read_byte_array()
            elif value_type == PropertyType.CLASS_ID:
                value = self._read_bytes(16)
            else:
                raise self._invalid_conversion("bytes")
        elif self._reader.attribute_type in _STRING_ATTRIBUTES | {AttributeType.TRIPLES}:
            value = self._read_attribute_bytes()
        else:
            raise self._invalid_conversion("bytes")

        self._state.consume()
        return value

    def read_value_as_datetime(self) -> datetime.datetime:
        """Read an AppTime, SysTime or date attribute value.

        AppTime and attribute dates are naive; SysTime values are UTC-aware.
        Dates outside the range :mod:`datetime` can represent are flagged as
        :attr:`ComplianceStatus.INVALID_DATE` and read as
        :attr:`datetime.datetime.min`.
        """
        self._check_value_pending()
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.APP_TIME:
                value = self._read_app_time()
            elif value_type == PropertyType.SYS_TIME:
                value = self._read_sys_time()
            else:
                raise self._invalid_conversion("datetime")
        elif self._reader.attribute_type == AttributeType.DATE:
            value = self._read_attribute_date()
        else:
            raise self._invalid_conversion("datetime")

        self._state.consume()
        return value

    def read_value_as_double(self) -> float:
        self._check_value_pending()
        reader = self._reader
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.BOOLEAN:
                value = float(reader.read_int32() & 0xFF)
            elif value_type == PropertyType.I2:
                value = float(reader.read_int32() & 0xFFFF)
            elif value_type in _INT32_TYPES:
                value = float(reader.read_int32())
            elif value_type in _INT64_TYPES:
                value = float(reader.read_int64())
            elif value_type == PropertyType.DOUBLE:
                value = reader.read_double()
            elif value_type == PropertyType.R4:
                value = reader.read_single()
            else:
                raise self._invalid_conversion("float")
        else:
            attribute_type = reader.attribute_type
            if attribute_type in _SHORT_ATTRIBUTES:
                value = float(reader.read_int16())
            elif attribute_type in _LONG_ATTRIBUTES:
                value = float(reader.read_int32())
            elif attribute_type == AttributeType.BYTE:
                value = reader.read_double()
            else:
                raise self._invalid_conversion("float")

        self._state.consume()
        return value

    def read_value_as_float(self) -> float:
        """Read any numeric value rounded to single precision."""
        self._check_value_pending()
        reader = self._reader
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.BOOLEAN:
                value = float(reader.read_int32() & 0xFF)
            elif value_type == PropertyType.I2:
                value = float(reader.read_int32() & 0xFFFF)
            elif value_type in _INT32_TYPES:
                value = to_single(reader.read_int32())
            elif value_type in _INT64_TYPES:
                value = to_single(reader.read_int64())
            elif value_type == PropertyType.DOUBLE:
                value = to_single(reader.read_double())
            elif value_type == PropertyType.R4:
                value = reader.read_single()
            else:
                raise self._invalid_conversion("single-precision float")
        else:
            attribute_type = reader.attribute_type
            if attribute_type in _SHORT_ATTRIBUTES:
                value = float(reader.read_int16())
            elif attribute_type in _LONG_ATTRIBUTES:
                value = to_single(reader.read_int32())
            elif attribute_type == AttributeType.BYTE:
                value = reader.read_single()
            else:
                raise self._invalid_conversion("single-precision float")

        self._state.consume()
        return value

    def read_value_as_guid(self) -> uuid.UUID:
        self._check_value_pending()
        if (
            self._state.property_count == 0
            or self._value_tnef_type != PropertyType.CLASS_ID
        ):
            raise self._invalid_conversion("UUID")
        value = uuid.UUID(bytes_le=self._read_bytes(16))
        self._state.consume()
        return value

    def read_value_as_int16(self) -> int:
        """Read any numeric value, wrapped or truncated to 16 bits."""
        self._check_value_pending()
        reader = self._reader
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.BOOLEAN:
                value = reader.read_int32() & 0xFF
            elif value_type == PropertyType.I2:
                value = to_int16(reader.read_int32())
            elif value_type in _INT32_TYPES:
                value = to_int16(reader.read_int32())
            elif value_type in _INT64_TYPES:
                value = to_int16(reader.read_int64())
            elif value_type == PropertyType.DOUBLE:
                value = truncate_float(reader.read_double(), 16)
            elif value_type == PropertyType.R4:
                value = truncate_float(reader.read_single(), 16)
            else:
                raise self._invalid_conversion("int16")
        else:
            attribute_type = reader.attribute_type
            if attribute_type in _SHORT_ATTRIBUTES or attribute_type == AttributeType.BYTE:
                value = reader.read_int16()
            elif attribute_type in _LONG_ATTRIBUTES:
                value = to_int16(reader.read_int32())
            else:
                raise self._invalid_conversion("int16")

        self._state.consume()
        return value

    def read_value_as_int32(self) -> int:
        """Read any numeric value, wrapped or truncated to 32 bits.

        I2 properties read as their unsigned 16-bit pattern, as they do for
        the 64-bit and floating point accessors.
        """
        self._check_value_pending()
        reader = self._reader
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.BOOLEAN:
                value = reader.read_int32() & 0xFF
            elif value_type == PropertyType.I2:
                value = reader.read_int32() & 0xFFFF
            elif value_type in _INT32_TYPES:
                value = reader.read_int32()
            elif value_type in _INT64_TYPES:
                value = to_int32(reader.read_int64())
            elif value_type == PropertyType.DOUBLE:
                value = truncate_float(reader.read_double(), 32)
            elif value_type == PropertyType.R4:
                value = truncate_float(reader.read_single(), 32)
            else:
                raise self._invalid_conversion("int32")
        else:
            attribute_type = reader.attribute_type
            if attribute_type in _SHORT_ATTRIBUTES:
                value = reader.read_int16()
            elif attribute_type in _LONG_ATTRIBUTES or attribute_type == AttributeType.BYTE:
                value = reader.read_int32()
            else:
                raise self._invalid_conversion("int32")

        self._state.consume()
        return value

    def read_value_as_int64(self) -> int:
        self._check_value_pending()
        reader = self._reader
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.BOOLEAN:
                value = reader.read_int32() & 0xFF
            elif value_type == PropertyType.I2:
                value = reader.read_int32() & 0xFFFF
            elif value_type in _INT32_TYPES:
                value = reader.read_int32()
            elif value_type in _INT64_TYPES:
                value = reader.read_int64()
            elif value_type == PropertyType.DOUBLE:
                value = truncate_float(reader.read_double(), 64)
            elif value_type == PropertyType.R4:
                value = truncate_float(reader.read_single(), 64)
            else:
                raise self._invalid_conversion("int64")
        else:
            attribute_type = reader.attribute_type
            if attribute_type in _SHORT_ATTRIBUTES:
                value = reader.read_int16()
            elif attribute_type in _LONG_ATTRIBUTES:
                value = reader.read_int32()
            elif attribute_type == AttributeType.BYTE:
                value = reader.read_int64()
            else:
                raise self._invalid_conversion("int64")

        self._state.consume()
        return value

    def read_value_as_string(self) -> str:
        """Read a string or binary value as text.

        Unicode properties decode as UTF-16-LE.  8-bit strings, binary
        properties and string attributes decode with the message codepage.
        Trailing NULs are dropped.
        """
        self._check_value_pending()
        if self._state.property_count > 0:
            value_type = self._value_tnef_type
            if value_type == PropertyType.UNICODE:
                value = self._read_unicode_string()
            elif value_type in (PropertyType.STRING8, PropertyType.BINARY):
                value = self._read_string()
            else:
                raise self._invalid_conversion("str")
        elif self._reader.attribute_type in _STRING_ATTRIBUTES:
            value = self._read_attribute_string()
        else:
            raise self._invalid_conversion("str")

        self._state.consume()
        return value

    def read_value_as_uri(self) -> urllib.parse.SplitResult | None:
        """Read a string value and split it as a URI.

        :returns: The split URI, absolute or relative, or ``None`` if the
            string is empty, contains whitespace or cannot be parsed.
        """
        value = self.read_value_as_string()
        if not value or any(char.isspace() for char in value):
            return None
        try:
            return urllib.parse.urlsplit(value)
        except ValueError:
            return None

    # -- raw access ------------------------------------------------------

    def _begin_payload(self) -> None:
        """Skip the length prefix of a variable-length value.

        The exposed payload ends at the smaller of the value window and the
        length the prefix declares.
        """
        state = self._state
        if state.property_count > 0 and self._value_tnef_type in _VARIABLE_TYPES:
            length = self._reader.read_int32()
            if 0 <= length and length + 4 < state.raw_value_length:
                state.payload_end = state.raw_value_offset + 4 + length

    def get_raw_value_read_stream(self) -> ValueStream:
        """Return a stream over the current value's payload and consume it.

        :raises TnefStateError: If no value is pending.
        """
        state = self._state
        if state.value_index >= state.value_count:
            msg = "no value is pending"
            raise TnefStateError(msg)
        if self._reader.stream_offset == state.raw_value_offset:
            self._begin_payload()
        state.consume()
        return ValueStream(self._reader, state.payload_end)

    def read_raw_value(self, size: int) -> bytes:
        """Read up to *size* bytes of the current value's payload.

        Repeated calls continue where the previous one stopped.  The value
        is not consumed; advance with :meth:`read_next_value` when done.

        :returns: The bytes read, empty once the payload is exhausted.
        """
        if size < 0:
            msg = "size must be non-negative"
            raise ValueError(msg)
        state = self._state
        if state.value_index >= state.value_count:
            msg = "no value is pending"
            raise TnefStateError(msg)
        if self._reader.stream_offset == state.raw_value_offset:
            self._begin_payload()
        count = min(state.payload_end - self._reader.stream_offset, size)
        if count <= 0:
            return b""
        return self._reader.read_attribute_raw_value(count)

    def read_text_value(self, size: int) -> str:
        """Decode up to *size* bytes of the current value's payload as text.

        The incremental decoder is kept between calls, so a character split
        across two reads is returned whole by the second one.

        :raises TnefStateError: If the value is not text, or if the value was
            partly read through another method.
        """
        if size < 0:
            msg = "size must be non-negative"
            raise ValueError(msg)
        state = self._state
        reader = self._reader
        if state.value_index >= state.value_count:
            msg = "no value is pending"
            raise TnefStateError(msg)

        if reader.stream_offset == state.raw_value_offset:
            if state.property_count > 0:
                value_type = self._value_tnef_type
                if value_type not in _VARIABLE_TYPES:
                    raise self._invalid_conversion("text")
                codec = (
                    "utf-16-le"
                    if value_type == PropertyType.UNICODE
                    else self._message_codec()
                )
            else:
                codec = self._message_codec()
            self._begin_payload()
            state.decoder = codecs.getincrementaldecoder(codec)(errors="replace")
        elif state.decoder is None:
            msg = "text reads must start at the beginning of the value"
            raise TnefStateError(msg)

        count = min(state.payload_end - reader.stream_offset, size)
        if count <= 0:
            return ""
        data = reader.read_attribute_raw_value(count)
        return state.decoder.decode(data, reader.stream_offset >= state.payload_end)

    # -- embedded messages -----------------------------------------------

    def get_embedded_message_reader(self) -> TnefReader:
        """Open the nested TNEF message stored in the current property.

        The payload starts with a 16-byte interface identifier which is
        skipped.  The nested reader inherits this reader's codepage and
        compliance mode, and the current value is consumed.

        :raises TnefStateError: If :attr:`is_embedded_message` is false or no
            value is pending.
        """
        if not self.is_embedded_message:
            msg = "the current property is not an embedded message"
            raise TnefStateError(msg)
        stream = self.get_raw_value_read_stream()
        stream.read(16)
        return type(self._reader)(
            stream,
            message_codepage=self._reader.message_codepage,
            compliance_mode=self._reader.compliance_mode,
        )
