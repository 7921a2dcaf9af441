"""Reading Transport Neutral Encapsulation Format (``winmail.dat``) streams."""

from winmail.tnef.enums import (
    AttachMethod,
    AttributeLevel,
    AttributeTag,
    AttributeType,
    ComplianceMode,
    ComplianceStatus,
    NameIdKind,
    PropertyId,
    PropertyType,
)
from winmail.tnef.exceptions import (
    TnefComplianceError,
    TnefError,
    TnefStateError,
    TnefTruncatedError,
)
from winmail.tnef.property_reader import CursorState, PropertyReader, ValueStream
from winmail.tnef.reader import TnefReader
from winmail.tnef.tags import NameId, PropertyTag

__all__ = [
    "AttachMethod",
    "AttributeLevel",
    "AttributeTag",
    "AttributeType",
    "ComplianceMode",
    "ComplianceStatus",
    "CursorState",
    "NameId",
    "NameIdKind",
    "PropertyId",
    "PropertyReader",
    "PropertyTag",
    "PropertyType",
    "TnefComplianceError",
    "TnefError",
    "TnefReader",
    "TnefStateError",
    "TnefTruncatedError",
    "ValueStream",
]
