# tests/test_detector.py
from __future__ import annotations

import logging

import pytest

import winmail
from winmail.charset import EUCTWProber, InputState, ProbingState, UniversalDetector

# A frequent EUC-TW character (first entry of the frequency table).
_EUCTW_CHAR = b"\xc4\xa1"


def test_basic_lifecycle():
    detector = UniversalDetector()
    detector.feed(b"Hello world")
    result = detector.close()
    assert result == {"encoding": "ascii", "confidence": 1.0, "language": ""}
    assert detector.done is True


def test_reset():
    detector = UniversalDetector()
    detector.feed(b"Hello world")
    detector.close()
    detector.reset()
    assert detector.result["encoding"] is None
    assert detector.result["confidence"] == 0.0
    assert detector.done is False
    assert detector.input_state == InputState.PURE_ASCII


def test_default_probers():
    detector = UniversalDetector()
    assert len(detector.charset_probers) == 1
    assert isinstance(detector.charset_probers[0], EUCTWProber)


@pytest.mark.parametrize(
    ("data", "encoding"),
    [
        (b"\xef\xbb\xbfhello", "UTF-8-SIG"),
        (b"\xff\xfe\x00\x00h\x00\x00\x00", "UTF-32"),
        (b"\x00\x00\xfe\xff\x00\x00\x00h", "UTF-32"),
        (b"\xff\xfeh\x00", "UTF-16"),
        (b"\xfe\xff\x00h", "UTF-16"),
    ],
)
def test_bom_detection(data: bytes, encoding: str):
    result = winmail.detect(data)
    assert result["encoding"] == encoding
    assert result["confidence"] == 1.0


def test_euctw_text():
    result = winmail.detect(b"abc " + _EUCTW_CHAR * 10)
    assert result["encoding"] == "EUC-TW"
    assert result["language"] == "Taiwan"
    assert result["confidence"] == pytest.approx(0.99)


def test_long_euctw_text_finishes_early():
    detector = UniversalDetector()
    detector.feed(_EUCTW_CHAR * 1100)
    assert detector.done is True
    assert detector.result["encoding"] == "EUC-TW"
    assert detector.charset_probers[0].state == ProbingState.FOUND_IT


def test_chunked_feed():
    detector = UniversalDetector()
    for byte in _EUCTW_CHAR * 10:
        detector.feed(bytes([byte]))
    assert detector.close()["encoding"] == "EUC-TW"


def test_unknown_encoding(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="winmail.charset.universaldetector")
    result = winmail.detect(b"abc\x80def")
    assert result["encoding"] is None
    assert result["confidence"] == 0.0
    assert "no probers hit minimum threshold" in caplog.text


def test_empty_input():
    result = winmail.detect(b"")
    assert result["encoding"] is None


def test_max_bytes_limits_what_is_examined():
    detector = UniversalDetector(max_bytes=4)
    detector.feed(b"abcd\x80\x80")
    assert detector.input_state == InputState.PURE_ASCII
    assert detector.close()["encoding"] == "ascii"


def test_feed_after_done_is_ignored():
    detector = UniversalDetector()
    detector.feed(b"\xef\xbb\xbf")
    detector.feed(b"\x80")
    assert detector.close()["encoding"] == "UTF-8-SIG"


def test_detect_accepts_bytearray():
    assert winmail.detect(bytearray(b"hello"))["encoding"] == "ascii"


def test_detect_rejects_str():
    with pytest.raises(TypeError, match="bytes or bytearray"):
        winmail.detect("hello")


@pytest.mark.parametrize("max_bytes", [0, -1, True, 1.5])
def test_invalid_max_bytes(max_bytes: object):
    with pytest.raises(ValueError, match="max_bytes"):
        winmail.detect(b"hello", max_bytes=max_bytes)
    with pytest.raises(ValueError, match="max_bytes"):
        UniversalDetector(max_bytes=max_bytes)
