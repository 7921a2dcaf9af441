"""Numeric narrowing and date conversions used by the property reader.

TNEF stores integers in fixed-width little-endian fields and dates in three
different encodings (OLE automation doubles, FILETIME ticks and the seven
16-bit fields of attribute dates).  Python integers and floats are wider
than their on-disk counterparts, so the narrowing helpers here reproduce
the two's-complement wrap and truncation that the stored widths imply.
"""

from __future__ import annotations

import datetime
import math
import struct

_FLOAT32 = struct.Struct("<f")

_MILLIS_PER_DAY = 86_400_000
# Days from 0001-01-01 to the OLE epoch, and to 10000-01-01.
_DAYS_TO_1899 = 693_593
_DAYS_TO_10000 = 3_652_059
_MAX_MILLIS = _DAYS_TO_10000 * _MILLIS_PER_DAY

_OA_DATE_MIN = -657_435.0
_OA_DATE_MAX = 2_958_466.0

_FILETIME_EPOCH = datetime.datetime(1601, 1, 1, tzinfo=datetime.timezone.utc)


def wrap_int(value: int, bits: int) -> int:
    """Wrap *value* to a signed two's-complement integer of *bits* width."""
    mask = (1 << bits) - 1
    value &= mask
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def to_int16(value: int) -> int:
    return wrap_int(value, 16)


def to_int32(value: int) -> int:
    return wrap_int(value, 32)


def truncate_float(value: float, bits: int) -> int:
    """Truncate *value* toward zero into a signed integer of *bits* width.

    NaN, infinities and values outside the target range collapse to the
    smallest representable integer, which is what a hardware conversion
    produces.  16-bit results are taken from the low word of the 32-bit
    conversion.
    """
    width = 32 if bits < 32 else bits
    low = -(1 << (width - 1))
    if not math.isfinite(value):
        result = low
    else:
        result = int(value)
        if not low <= result < -low:
            result = low
    if bits < width:
        result = wrap_int(result, bits)
    return result


def to_single(value: float) -> float:
    """Round *value* to the nearest IEEE-754 single precision float."""
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def ole_date_to_datetime(value: float) -> datetime.datetime:
    """Convert an OLE automation date to a naive :class:`~datetime.datetime`.

    The integer part counts days from 1899-12-30 and the fraction is the
    time of day.  For negative values the fraction still runs forward, so
    ``-1.25`` is 1899-12-29 06:00.

    :param value: Days since the OLE epoch.
    :returns: The equivalent date, rounded to the millisecond.
    :raises ValueError: If *value* is NaN or outside the representable range.
    """
    if not _OA_DATE_MIN < value < _OA_DATE_MAX:
        msg = f"invalid OLE automation date: {value!r}"
        raise ValueError(msg)

    millis = int(value * _MILLIS_PER_DAY + (0.5 if value >= 0 else -0.5))
    if millis < 0:
        remainder = -(-millis % _MILLIS_PER_DAY)
        millis -= remainder * 2
    millis += _DAYS_TO_1899 * _MILLIS_PER_DAY

    if not 0 <= millis < _MAX_MILLIS:
        msg = f"invalid OLE automation date: {value!r}"
        raise ValueError(msg)

    return datetime.datetime.min + datetime.timedelta(milliseconds=millis)


def filetime_to_datetime(filetime: int) -> datetime.datetime:
    """Convert a FILETIME (100ns ticks since 1601-01-01 UTC) to an aware datetime.

    :raises ValueError: If *filetime* is negative or past year 9999.
    """
    if filetime < 0:
        msg = f"invalid FILETIME: {filetime}"
        raise ValueError(msg)
    try:
        return _FILETIME_EPOCH + datetime.timedelta(microseconds=filetime // 10)
    except OverflowError as exc:
        msg = f"invalid FILETIME: {filetime}"
        raise ValueError(msg) from exc


def attribute_date(
    year: int, month: int, day: int, hour: int, minute: int, second: int
) -> datetime.datetime:
    """Build the naive datetime stored in a TNEF date attribute."""
    return datetime.datetime(year, month, day, hour, minute, second)
