"""Internal shared utilities for winmail."""

from __future__ import annotations

import codecs

#: Codepage used for 8-bit strings when the message does not name one.
DEFAULT_CODEPAGE: int = 1252

#: Default maximum number of bytes the charset detector examines.
DEFAULT_MAX_BYTES: int = 200_000

#: Default minimum confidence for a prober result to be reported.
MINIMUM_THRESHOLD: float = 0.20

# Windows codepages whose Python codec is not simply "cp<number>".
_CODEPAGE_ALIASES: dict[int, str] = {
    1200: "utf-16-le",
    1201: "utf-16-be",
    10000: "mac-roman",
    10006: "mac-greek",
    10007: "mac-cyrillic",
    10029: "mac-latin2",
    10079: "mac-iceland",
    10081: "mac-turkish",
    12000: "utf-32-le",
    12001: "utf-32-be",
    20127: "ascii",
    20866: "koi8-r",
    20932: "euc-jp",
    21866: "koi8-u",
    28591: "iso-8859-1",
    28592: "iso-8859-2",
    28593: "iso-8859-3",
    28594: "iso-8859-4",
    28595: "iso-8859-5",
    28596: "iso-8859-6",
    28597: "iso-8859-7",
    28598: "iso-8859-8",
    28599: "iso-8859-9",
    28603: "iso-8859-13",
    28605: "iso-8859-15",
    50220: "iso-2022-jp",
    50221: "iso-2022-jp-ext",
    50222: "iso-2022-jp",
    50225: "iso-2022-kr",
    51932: "euc-jp",
    51936: "gb2312",
    51949: "euc-kr",
    52936: "hz",
    54936: "gb18030",
    65000: "utf-7",
    65001: "utf-8",
}


def codec_name_for_codepage(codepage: int) -> str | None:
    """Return the Python codec name for a Windows *codepage*, or ``None``.

    :param codepage: A Windows codepage number such as ``1252`` or ``65001``.
    :returns: The canonical codec name, or ``None`` if Python has no codec
        for the codepage.
    """
    name = _CODEPAGE_ALIASES.get(codepage, f"cp{codepage}")
    try:
        return codecs.lookup(name).name
    except LookupError:
        return None


def message_codec_name(codepage: int) -> str:
    """Resolve the codec for 8-bit message strings, falling back to 1252."""
    if codepage not in (0, DEFAULT_CODEPAGE):
        name = codec_name_for_codepage(codepage)
        if name is not None:
            return name
    return "cp1252"


def _validate_codepage(codepage: int) -> None:
    """Raise if *codepage* is not a non-negative integer."""
    if isinstance(codepage, bool) or not isinstance(codepage, int) or codepage < 0:
        msg = "message_codepage must be a non-negative integer"
        raise ValueError(msg)


def _validate_max_bytes(max_bytes: int) -> None:
    """Raise ValueError if *max_bytes* is not a positive integer."""
    if isinstance(max_bytes, bool) or not isinstance(max_bytes, int) or max_bytes < 1:
        msg = "max_bytes must be a positive integer"
        raise ValueError(msg)
