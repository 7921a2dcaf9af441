# tests/test_convert.py
from __future__ import annotations

import datetime
import math

import pytest

from winmail.tnef._convert import (
    attribute_date,
    filetime_to_datetime,
    ole_date_to_datetime,
    to_int16,
    to_int32,
    to_single,
    truncate_float,
    wrap_int,
)


@pytest.mark.parametrize(
    ("value", "bits", "expected"),
    [
        (0xFFFF, 16, -1),
        (0x7FFF, 16, 0x7FFF),
        (0x18000, 16, -0x8000),
        (2**31, 32, -(2**31)),
        (-1, 32, -1),
        (2**64 + 5, 64, 5),
    ],
)
def test_wrap_int(value: int, bits: int, expected: int):
    assert wrap_int(value, bits) == expected


def test_narrowing_helpers():
    assert to_int16(0x12345678) == 0x5678
    assert to_int16(-1) == -1
    assert to_int32(0x1_0000_0001) == 1


@pytest.mark.parametrize(
    ("value", "bits", "expected"),
    [
        (1.9, 32, 1),
        (-1.9, 32, -1),
        (math.nan, 32, -(2**31)),
        (math.inf, 64, -(2**63)),
        (float(2**31), 32, -(2**31)),
        (70000.0, 16, 70000 - 65536),
        (math.nan, 16, 0),
        (-3.5, 64, -3),
    ],
)
def test_truncate_float(value: float, bits: int, expected: int):
    assert truncate_float(value, bits) == expected


def test_to_single_rounds_to_float32():
    assert to_single(0.1) != 0.1
    assert to_single(0.1) == pytest.approx(0.1, rel=1e-7)
    assert to_single(1.5) == 1.5


def test_to_single_overflow_is_infinite():
    assert to_single(1e300) == math.inf
    assert to_single(-1e300) == -math.inf


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.0, datetime.datetime(1899, 12, 30)),
        (1.5, datetime.datetime(1899, 12, 31, 12, 0)),
        (-1.25, datetime.datetime(1899, 12, 29, 6, 0)),
        (45000.25, datetime.datetime(2023, 3, 15, 6, 0)),
    ],
)
def test_ole_date_to_datetime(value: float, expected: datetime.datetime):
    assert ole_date_to_datetime(value) == expected


@pytest.mark.parametrize("value", [math.nan, 3_000_000.0, -700_000.0])
def test_ole_date_out_of_range(value: float):
    with pytest.raises(ValueError, match="OLE automation date"):
        ole_date_to_datetime(value)


def test_filetime_epochs():
    utc = datetime.timezone.utc
    assert filetime_to_datetime(0) == datetime.datetime(1601, 1, 1, tzinfo=utc)
    assert filetime_to_datetime(116_444_736_000_000_000) == datetime.datetime(
        1970, 1, 1, tzinfo=utc
    )


@pytest.mark.parametrize("value", [-1, 2**63 - 1])
def test_filetime_out_of_range(value: int):
    with pytest.raises(ValueError, match="FILETIME"):
        filetime_to_datetime(value)


def test_attribute_date():
    assert attribute_date(2024, 2, 29, 23, 59, 58) == datetime.datetime(
        2024, 2, 29, 23, 59, 58
    )
    with pytest.raises(ValueError):
        attribute_date(2023, 2, 29, 0, 0, 0)
