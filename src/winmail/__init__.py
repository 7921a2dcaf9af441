"""Decoder for TNEF (``winmail.dat``) streams, with a companion charset prober."""

from __future__ import annotations

from winmail._utils import DEFAULT_MAX_BYTES, _validate_max_bytes
from winmail.charset import UniversalDetector
from winmail.tnef import (
    ComplianceMode,
    ComplianceStatus,
    PropertyReader,
    PropertyTag,
    TnefComplianceError,
    TnefError,
    TnefReader,
)

__version__ = "1.0.0"
__all__ = [
    "ComplianceMode",
    "ComplianceStatus",
    "PropertyReader",
    "PropertyTag",
    "TnefComplianceError",
    "TnefError",
    "TnefReader",
    "UniversalDetector",
    "detect",
]


def detect(
    byte_str: bytes | bytearray,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> dict[str, str | float | None]:
    """Detect the encoding of the given byte string.

    :param byte_str: The bytes to examine.
    :param max_bytes: Only the first *max_bytes* bytes are fed to the probers.
    :returns: A ``dict`` with the keys ``encoding``, ``confidence`` and
        ``language``.
    """
    if not isinstance(byte_str, (bytes, bytearray)):
        msg = f"Expected object of type bytes or bytearray, got: {type(byte_str)}"
        raise TypeError(msg)
    _validate_max_bytes(max_bytes)
    detector = UniversalDetector(max_bytes=max_bytes)
    detector.feed(byte_str)
    return dict(detector.close())
