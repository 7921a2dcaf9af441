# tests/conftest.py
"""Shared test fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add tests/ to sys.path so we can import the stream builder
sys.path.insert(0, str(Path(__file__).parent))

import tnefdata  # noqa: E402

from winmail.tnef import AttributeLevel, AttributeTag  # noqa: E402


@pytest.fixture
def simple_message() -> bytes:
    """A small well-formed message: version, codepage, subject and properties."""
    return tnefdata.tnef(
        tnefdata.version_attribute(),
        tnefdata.codepage_attribute(1252),
        tnefdata.attribute(
            AttributeLevel.MESSAGE, AttributeTag.SUBJECT, b"Quarterly report\0"
        ),
        tnefdata.attribute(
            AttributeLevel.MESSAGE,
            AttributeTag.MAPI_PROPERTIES,
            tnefdata.property_list(
                tnefdata.prop(tnefdata.UNICODE, 0x0037, tnefdata.unicode("Hello")),
                tnefdata.prop(tnefdata.LONG, 0x0E08, tnefdata.long(4096)),
            ),
        ),
    )


@pytest.fixture
def message_file(tmp_path: Path, simple_message: bytes) -> Path:
    path = tmp_path / "winmail.dat"
    path.write_bytes(simple_message)
    return path
