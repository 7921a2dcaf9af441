"""Property identity: tags and named-property identifiers."""

from __future__ import annotations

import dataclasses
import enum
import uuid
from typing import ClassVar

from winmail.tnef.enums import NameIdKind, PropertyId, PropertyType


def _known(enum_cls: type[enum.IntEnum], value: int) -> int:
    """Return the enum member for *value*, or *value* itself if unknown."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclasses.dataclass(frozen=True, slots=True)
class PropertyTag:
    """A MAPI property tag: a property identifier plus a value type.

    Both fields are kept as integers so that tags with identifiers or type
    codes this package does not know about survive a round trip; use
    :attr:`value_tnef_type` to get the type without the multi-valued flag.
    """

    id: int
    type: int

    NULL: ClassVar[PropertyTag]

    @classmethod
    def from_int(cls, tag: int) -> PropertyTag:
        """Build a tag from its packed 32-bit form ``(id << 16) | type``."""
        return cls(
            _known(PropertyId, (tag >> 16) & 0xFFFF),
            _known(PropertyType, tag & 0xFFFF),
        )

    @property
    def value_tnef_type(self) -> PropertyType | int:
        return _known(PropertyType, self.type & ~PropertyType.MULTI_VALUED & 0xFFFF)

    @property
    def is_multi_valued(self) -> bool:
        return (self.type & PropertyType.MULTI_VALUED) != 0

    @property
    def is_named(self) -> bool:
        return self.id >= 0x8000

    def __int__(self) -> int:
        return ((self.id & 0xFFFF) << 16) | (self.type & 0xFFFF)

    def __str__(self) -> str:
        return f"0x{int(self):08X}"


PropertyTag.NULL = PropertyTag(PropertyId.NULL, PropertyType.NULL)


@dataclasses.dataclass(frozen=True, slots=True)
class NameId:
    """Identifies a named property by property-set GUID plus a name or number."""

    guid: uuid.UUID = uuid.UUID(int=0)
    kind: NameIdKind = NameIdKind.ID
    name: str | None = None
    id: int = 0

    @classmethod
    def from_name(cls, guid: uuid.UUID, name: str) -> NameId:
        return cls(guid=guid, kind=NameIdKind.NAME, name=name)

    @classmethod
    def from_id(cls, guid: uuid.UUID, id: int) -> NameId:  # noqa: A002
        return cls(guid=guid, kind=NameIdKind.ID, id=id)
