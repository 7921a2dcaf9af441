"""TnefReader: the binary cursor over a TNEF attribute stream.

A TNEF stream is a 4-byte signature, a 2-byte legacy key and a sequence of
attributes.  Every attribute is a 1-byte level, a 4-byte tag, a 4-byte
length, the value bytes and a 2-byte checksum of the value bytes.  The
reader walks the attributes one at a time and hands the value region to its
:class:`~winmail.tnef.property_reader.PropertyReader`.
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterator
from typing import BinaryIO

from winmail._utils import _validate_codepage, codec_name_for_codepage
from winmail.tnef.enums import (
    AttributeLevel,
    AttributeTag,
    AttributeType,
    ComplianceMode,
    ComplianceStatus,
)
from winmail.tnef.exceptions import TnefComplianceError, TnefTruncatedError
from winmail.tnef.property_reader import PropertyReader
from winmail.tnef.tags import _known

_UINT16 = struct.Struct("<H")
_INT16 = struct.Struct("<h")
_INT32 = struct.Struct("<i")
_UINT32 = struct.Struct("<I")
_INT64 = struct.Struct("<q")
_SINGLE = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")

#: The little-endian magic number every TNEF stream starts with.
TNEF_SIGNATURE = 0x223E9F78

#: The only value of the ``TnefVersion`` attribute that has ever been written.
TNEF_VERSION = 0x00010000


class TnefReader:
    """Sequential reader over the attributes of a TNEF stream.

    The whole stream is held in memory; file objects are read to the end
    when the reader is constructed.  Malformed input is recorded in
    :attr:`compliance_status` and, in :attr:`ComplianceMode.STRICT` mode,
    raised as :class:`~winmail.tnef.exceptions.TnefComplianceError`.
    """

    def __init__(
        self,
        data: bytes | bytearray | memoryview | BinaryIO,
        message_codepage: int = 0,
        compliance_mode: ComplianceMode = ComplianceMode.LOOSE,
    ) -> None:
        """Initialize the reader and validate the stream header.

        :param data: The TNEF bytes, or a binary file object positioned at
            the TNEF signature.
        :param message_codepage: Windows codepage for 8-bit strings.  ``0``
            means "use the ``OemCodepage`` attribute, or 1252".
        :param compliance_mode: Whether compliance violations raise.
        :raises ValueError: If *message_codepage* is negative.
        :raises TypeError: If *data* is neither bytes-like nor readable.
        """
        _validate_codepage(message_codepage)
        if hasattr(data, "read"):
            data = data.read()
        if not isinstance(data, (bytes, bytearray, memoryview)):
            msg = f"Expected a bytes-like object or binary file, got: {type(data).__name__}"
            raise TypeError(msg)

        self.logger = logging.getLogger(__name__)
        self._data = bytes(data)
        self._position = 0
        self._eos = False
        self._caller_codepage = message_codepage != 0
        self.message_codepage = message_codepage
        self.compliance_mode = ComplianceMode(compliance_mode)
        self.compliance_status = ComplianceStatus.COMPLIANT
        self.tnef_key = 0

        self._attribute_level: AttributeLevel | int = 0
        self._attribute_tag: AttributeTag | int = AttributeTag.NULL
        self._attribute_length = 0
        self._attribute_offset = 0
        self._attribute_active = False

        self.property_reader = PropertyReader(self)
        self._read_header()

    def __iter__(self) -> Iterator[AttributeTag | int]:
        while self.read_next_attribute():
            yield self._attribute_tag

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(offset={self._position}, "
            f"attribute_tag={self._attribute_tag!r}, "
            f"compliance_status={self.compliance_status!r})"
        )

    # -- attribute state -------------------------------------------------

    @property
    def stream_offset(self) -> int:
        """The absolute offset of the next byte to be read."""
        return self._position

    @property
    def attribute_level(self) -> AttributeLevel | int:
        return self._attribute_level

    @property
    def attribute_tag(self) -> AttributeTag | int:
        return self._attribute_tag

    @property
    def attribute_type(self) -> AttributeType | int:
        return _known(AttributeType, (int(self._attribute_tag) >> 16) & 0xFFFF)

    @property
    def attribute_raw_value_length(self) -> int:
        return self._attribute_length

    @property
    def attribute_raw_value_stream_offset(self) -> int:
        return self._attribute_offset

    # -- compliance ------------------------------------------------------

    def set_compliance_error(
        self, status: ComplianceStatus, cause: BaseException | None = None
    ) -> None:
        """Record a compliance violation.

        :param status: The violation to add to :attr:`compliance_status`.
        :param cause: The exception that exposed the violation, if any.
        :raises TnefComplianceError: In strict mode.
        """
        self.compliance_status |= status
        self.logger.debug(
            "TNEF compliance error %s at offset %d", status.name, self._position
        )
        if self.compliance_mode == ComplianceMode.STRICT:
            raise TnefComplianceError(status, cause)

    # -- advancement -----------------------------------------------------

    def _read_header(self) -> None:
        try:
            signature = self.read_int32() & 0xFFFFFFFF
            if signature != TNEF_SIGNATURE:
                self.set_compliance_error(ComplianceStatus.INVALID_TNEF_SIGNATURE)
            self.tnef_key = _UINT16.unpack(self._take(2))[0]
        except TnefTruncatedError as exc:
            self._eos = True
            self.set_compliance_error(ComplianceStatus.STREAM_TRUNCATED, exc)

    def _finish_attribute(self) -> bool:
        """Skip to the end of the active attribute and verify its checksum."""
        end = self._attribute_offset + self._attribute_length
        self._attribute_active = False
        if end + 2 > len(self._data):
            self._eos = True
            self.set_compliance_error(ComplianceStatus.STREAM_TRUNCATED)
            return False

        expected = sum(self._data[self._attribute_offset : end]) & 0xFFFF
        self._position = end
        checksum = _UINT16.unpack(self._take(2))[0]
        if checksum != expected:
            self.set_compliance_error(ComplianceStatus.INVALID_ATTRIBUTE_CHECKSUM)
        return True

    def read_next_attribute(self) -> bool:
        """Advance to the next attribute.

        Any unread part of the current attribute is skipped.  After a
        successful call :attr:`property_reader` is positioned on the new
        attribute's value.

        :returns: ``True`` if an attribute was read, ``False`` at the end of
            the stream or when the attribute header is unusable.
        """
        if self._eos:
            return False
        if self._attribute_active and not self._finish_attribute():
            return False
        if self._position >= len(self._data):
            self._eos = True
            return False

        try:
            level = self.read_byte()
            tag = self.read_int32() & 0xFFFFFFFF
            length = self.read_int32()
        except TnefTruncatedError as exc:
            self._eos = True
            self.set_compliance_error(ComplianceStatus.STREAM_TRUNCATED, exc)
            return False

        self._attribute_level = _known(AttributeLevel, level)
        self._attribute_tag = _known(AttributeTag, tag)
        self._attribute_length = length
        self._attribute_offset = self._position

        if not isinstance(self._attribute_level, AttributeLevel):
            self._eos = True
            self.set_compliance_error(ComplianceStatus.INVALID_ATTRIBUTE_LEVEL)
            return False
        if length < 0:
            self._eos = True
            self.set_compliance_error(ComplianceStatus.INVALID_ATTRIBUTE_LENGTH)
            return False

        self._attribute_active = True
        if not isinstance(self._attribute_tag, AttributeTag):
            self.set_compliance_error(ComplianceStatus.INVALID_ATTRIBUTE)
        if self._attribute_offset + length > len(self._data):
            self.set_compliance_error(ComplianceStatus.STREAM_TRUNCATED)

        if self._attribute_tag == AttributeTag.TNEF_VERSION:
            self._check_tnef_version()
        elif self._attribute_tag == AttributeTag.OEM_CODEPAGE:
            self._load_oem_codepage()

        self.logger.debug(
            "attribute %r (level %r, %d bytes) at offset %d",
            self._attribute_tag,
            self._attribute_level,
            length,
            self._attribute_offset,
        )
        self.property_reader.load()
        return True

    def _check_tnef_version(self) -> None:
        try:
            version = self.peek_int32()
        except TnefTruncatedError as exc:
            self.set_compliance_error(ComplianceStatus.STREAM_TRUNCATED, exc)
            return
        if version != TNEF_VERSION:
            self.set_compliance_error(ComplianceStatus.INVALID_TNEF_VERSION)

    def _load_oem_codepage(self) -> None:
        try:
            codepage = self.peek_int32()
        except TnefTruncatedError as exc:
            self.set_compliance_error(ComplianceStatus.STREAM_TRUNCATED, exc)
            return
        if codepage <= 0 or codec_name_for_codepage(codepage) is None:
            self.set_compliance_error(ComplianceStatus.INVALID_MESSAGE_CODEPAGE)
            return
        if not self._caller_codepage:
            self.message_codepage = codepage

    # -- primitive reads -------------------------------------------------

    def _limit(self) -> int:
        """The offset reads may not cross: the attribute end, if one is active."""
        if self._attribute_active:
            return min(self._attribute_offset + self._attribute_length, len(self._data))
        return len(self._data)

    def _take(self, size: int) -> bytes:
        end = self._position + size
        limit = self._limit()
        if end > limit:
            msg = (
                f"TNEF stream truncated: needed {size} bytes at offset "
                f"{self._position}, {max(limit - self._position, 0)} available"
            )
            raise TnefTruncatedError(msg)
        chunk = self._data[self._position : end]
        self._position = end
        return chunk

    def read_byte(self) -> int:
        return self._take(1)[0]

    def read_int16(self) -> int:
        return _INT16.unpack(self._take(2))[0]

    def read_int32(self) -> int:
        return _INT32.unpack(self._take(4))[0]

    def peek_int32(self) -> int:
        """Read a 32-bit integer without moving the cursor."""
        value = self.read_int32()
        self._position -= 4
        return value

    def read_int64(self) -> int:
        return _INT64.unpack(self._take(8))[0]

    def read_single(self) -> float:
        return _SINGLE.unpack(self._take(4))[0]

    def read_double(self) -> float:
        return _DOUBLE.unpack(self._take(8))[0]

    def read_attribute_raw_value(self, size: int) -> bytes:
        """Read up to *size* bytes without crossing the end of the attribute.

        :returns: The bytes read; shorter than *size* (possibly empty) when
            the attribute value or the stream ends first.
        """
        count = min(size, self._limit() - self._position)
        if count <= 0:
            return b""
        chunk = self._data[self._position : self._position + count]
        self._position += count
        return chunk

    def seek(self, offset: int) -> bool:
        """Move the cursor to the absolute *offset*.

        :returns: ``False`` (leaving the cursor alone) if *offset* is
            outside the stream.
        """
        if not 0 <= offset <= len(self._data):
            return False
        self._position = offset
        return True
