# tests/test_euctwprober.py
from __future__ import annotations

import logging

import pytest

from winmail.charset import (
    CharDistributionAnalysis,
    CodingStateMachine,
    EUCTWDistributionAnalysis,
    EUCTWProber,
    MachineState,
    MultiByteCharSetProber,
    ProbingState,
)
from winmail.charset.mbcssm import EUCTW_SM_MODEL

_FREQUENT = b"\xc4\xa1"  # frequency order 1
_RARE = b"\xc4\xaa"  # frequency order 7310


# -- state machine -----------------------------------------------------


def test_state_machine_metadata():
    sm = CodingStateMachine(EUCTW_SM_MODEL)
    assert sm.get_coding_state_machine() == "x-euc-tw"
    assert sm.language == "Taiwan"


def test_state_machine_ascii():
    sm = CodingStateMachine(EUCTW_SM_MODEL)
    assert sm.next_state(ord("a")) == MachineState.START
    assert sm.get_current_charlen() == 1


def test_state_machine_two_byte_character():
    sm = CodingStateMachine(EUCTW_SM_MODEL)
    assert sm.next_state(0xC4) not in (MachineState.START, MachineState.ERROR)
    assert sm.get_current_charlen() == 2
    assert sm.next_state(0xA1) == MachineState.START


@pytest.mark.parametrize("byte", [0x80, 0xA0, 0xFF])
def test_state_machine_rejects_lead_bytes(byte: int):
    sm = CodingStateMachine(EUCTW_SM_MODEL)
    assert sm.next_state(byte) == MachineState.ERROR


def test_state_machine_reset():
    sm = CodingStateMachine(EUCTW_SM_MODEL)
    sm.next_state(0xC4)
    sm.reset()
    assert sm.next_state(ord("a")) == MachineState.START


# -- distribution analysis ---------------------------------------------


def test_get_order():
    analysis = EUCTWDistributionAnalysis()
    assert analysis.get_order(b"\xc4\xa1") == 0
    assert analysis.get_order(b"\xc5\xa2") == 95
    assert analysis.get_order(b"\xa4\xa1") == -1


def test_confidence_needs_enough_frequent_characters():
    analysis = EUCTWDistributionAnalysis()
    assert analysis.get_confidence() == analysis.SURE_NO
    for _ in range(3):
        analysis.feed(_FREQUENT, 2)
    assert analysis.get_confidence() == analysis.SURE_NO
    analysis.feed(_FREQUENT, 2)
    assert analysis.get_confidence() == analysis.SURE_YES


def test_confidence_ratio():
    analysis = EUCTWDistributionAnalysis()
    for _ in range(4):
        analysis.feed(_FREQUENT, 2)
    for _ in range(8):
        analysis.feed(_RARE, 2)
    assert analysis.get_confidence() == pytest.approx(4 / (8 * 0.75))


def test_single_byte_characters_are_ignored():
    analysis = EUCTWDistributionAnalysis()
    for _ in range(10):
        analysis.feed(_FREQUENT, 1)
    assert analysis.get_confidence() == analysis.SURE_NO


def test_got_enough_data():
    analysis = EUCTWDistributionAnalysis()
    for _ in range(analysis.ENOUGH_DATA_THRESHOLD):
        analysis.feed(_FREQUENT, 2)
    assert not analysis.got_enough_data()
    analysis.feed(_FREQUENT, 2)
    assert analysis.got_enough_data()
    analysis.reset()
    assert not analysis.got_enough_data()


def test_base_analysis_knows_no_characters():
    analysis = CharDistributionAnalysis()
    analysis.feed(_FREQUENT, 2)
    assert analysis.get_confidence() == analysis.SURE_NO


# -- prober ------------------------------------------------------------


def test_prober_metadata():
    prober = EUCTWProber()
    assert prober.charset_name == "EUC-TW"
    assert prober.language == "Taiwan"
    assert prober.state == ProbingState.DETECTING
    assert prober.get_confidence() == 0.01


def test_prober_rejects_invalid_bytes(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="winmail.charset.charsetprober")
    prober = EUCTWProber()
    assert prober.feed(b"abc\x80" + _FREQUENT * 10) == ProbingState.NOT_ME
    assert "hit error at byte 3" in caplog.text
    # NOT_ME is sticky until reset
    assert prober.feed(_FREQUENT) == ProbingState.NOT_ME
    prober.reset()
    assert prober.state == ProbingState.DETECTING


def test_prober_scores_characters_split_across_chunks():
    prober = EUCTWProber()
    for byte in _FREQUENT * 4:
        assert prober.feed(bytes([byte])) == ProbingState.DETECTING
    assert prober.get_confidence() == pytest.approx(0.99)


def test_prober_empty_feed():
    prober = EUCTWProber()
    assert prober.feed(b"") == ProbingState.DETECTING


def test_prober_shortcut():
    prober = EUCTWProber()
    assert prober.feed(_FREQUENT * 1100) == ProbingState.FOUND_IT


def test_prober_without_analyzer():
    prober = MultiByteCharSetProber()
    with pytest.raises(RuntimeError, match="no state machine"):
        prober.feed(b"abc")
