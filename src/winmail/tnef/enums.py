"""Enumerations describing the TNEF wire format."""

import enum


class AttributeLevel(enum.IntEnum):
    """The level an attribute applies to."""

    MESSAGE = 0x01
    ATTACHMENT = 0x02


class AttributeType(enum.IntEnum):
    """The value type of a TNEF attribute (the high word of its tag)."""

    TRIPLES = 0x0000
    STRING = 0x0001
    TEXT = 0x0002
    DATE = 0x0003
    SHORT = 0x0004
    LONG = 0x0005
    BYTE = 0x0006
    WORD = 0x0007
    DWORD = 0x0008
    MAX = 0x0009


class AttributeTag(enum.IntEnum):
    """Attribute tags: ``(AttributeType << 16) | attribute id``."""

    NULL = 0x00000000
    OWNER = 0x00060000
    SENT_FOR = 0x00060001
    DELEGATE = 0x00060002
    DATE_START = 0x00030006
    DATE_END = 0x00030007
    AID_OWNER = 0x00050008
    REQUEST_RESPONSE = 0x00040009
    ORIGINAL_MESSAGE_CLASS = 0x00070006
    FROM = 0x00008000
    SUBJECT = 0x00018004
    DATE_SENT = 0x00038005
    DATE_RECEIVED = 0x00038006
    MESSAGE_STATUS = 0x00068007
    MESSAGE_CLASS = 0x00078008
    MESSAGE_ID = 0x00018009
    PARENT_ID = 0x0001800A
    CONVERSATION_ID = 0x0001800B
    BODY = 0x0002800C
    PRIORITY = 0x0004800D
    ATTACH_DATA = 0x0006800F
    ATTACH_TITLE = 0x00018010
    ATTACH_META_FILE = 0x00068011
    ATTACH_CREATE_DATE = 0x00038012
    ATTACH_MODIFY_DATE = 0x00038013
    DATE_MODIFIED = 0x00038020
    ATTACH_TRANSPORT_FILENAME = 0x00069001
    ATTACH_RENDER_DATA = 0x00069002
    MAPI_PROPERTIES = 0x00069003
    RECIPIENT_TABLE = 0x00069004
    ATTACHMENT = 0x00069005
    TNEF_VERSION = 0x00089006
    OEM_CODEPAGE = 0x00069007

    @property
    def attribute_type(self) -> AttributeType:
        return AttributeType((self.value >> 16) & 0xFFFF)


class PropertyType(enum.IntEnum):
    """MAPI property value types."""

    UNSPECIFIED = 0x0000
    NULL = 0x0001
    I2 = 0x0002
    LONG = 0x0003
    R4 = 0x0004
    DOUBLE = 0x0005
    CURRENCY = 0x0006
    APP_TIME = 0x0007
    ERROR = 0x000A
    BOOLEAN = 0x000B
    OBJECT = 0x000D
    I8 = 0x0014
    STRING8 = 0x001E
    UNICODE = 0x001F
    SYS_TIME = 0x0040
    CLASS_ID = 0x0048
    BINARY = 0x0102

    #: Flag OR-ed into the type code of multi-valued properties.
    MULTI_VALUED = 0x1000


class PropertyId(enum.IntEnum):
    """MAPI property identifiers that the reader or its callers interpret.

    Identifiers at or above 0x8000 are named properties and never appear here.
    """

    NULL = 0x0001
    MESSAGE_CLASS = 0x001A
    SUBJECT = 0x0037
    SENDER_NAME = 0x0C1A
    BODY = 0x1000
    RTF_COMPRESSED = 0x1009
    DISPLAY_NAME = 0x3001
    EMAIL_ADDRESS = 0x3003
    CREATION_TIME = 0x3007
    LAST_MODIFICATION_TIME = 0x3008
    ATTACH_DATA = 0x3701
    ATTACH_EXTENSION = 0x3703
    ATTACH_FILENAME = 0x3704
    ATTACH_METHOD = 0x3705
    ATTACH_LONG_FILENAME = 0x3707
    RENDERING_POSITION = 0x370B
    ATTACH_MIME_TAG = 0x370E
    ATTACH_CONTENT_ID = 0x3712
    INTERNET_CPID = 0x3FDE


class NameIdKind(enum.IntEnum):
    """How a named property is identified inside its property set."""

    ID = 0
    NAME = 1


class AttachMethod(enum.IntEnum):
    """Values of the ``PR_ATTACH_METHOD`` property."""

    NO_ATTACHMENT = 0
    BY_VALUE = 1
    BY_REFERENCE = 2
    BY_REFERENCE_RESOLVE = 3
    BY_REFERENCE_ONLY = 4
    EMBEDDED_MESSAGE = 5
    OLE = 6


class ComplianceMode(enum.IntEnum):
    """How strictly the reader treats malformed input."""

    LOOSE = 0
    STRICT = 1


class ComplianceStatus(enum.IntFlag):
    """Bit flags accumulated as a TNEF stream is found to be non-compliant."""

    COMPLIANT = 0
    ATTRIBUTE_OVERFLOW = 1 << 0
    INVALID_ATTRIBUTE = 1 << 1
    INVALID_ATTRIBUTE_CHECKSUM = 1 << 2
    INVALID_ATTRIBUTE_LENGTH = 1 << 3
    INVALID_ATTRIBUTE_LEVEL = 1 << 4
    INVALID_ATTRIBUTE_VALUE = 1 << 5
    INVALID_DATE = 1 << 6
    INVALID_MESSAGE_CLASS = 1 << 7
    INVALID_MESSAGE_CODEPAGE = 1 << 8
    INVALID_PROPERTY_LENGTH = 1 << 9
    INVALID_ROW_COUNT = 1 << 10
    INVALID_TNEF_SIGNATURE = 1 << 11
    INVALID_TNEF_VERSION = 1 << 12
    NESTING_TOO_DEEP = 1 << 13
    STREAM_TRUNCATED = 1 << 14
    UNSUPPORTED_PROPERTY_TYPE = 1 << 15
