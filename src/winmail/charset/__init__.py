"""Statistical charset probing for 8-bit message bodies."""

from .chardistribution import CharDistributionAnalysis, EUCTWDistributionAnalysis
from .charsetprober import CharSetProber
from .codingstatemachine import CodingStateMachine
from .enums import (
    CharacterCategory,
    InputState,
    MachineState,
    ProbingState,
    SequenceLikelihood,
)
from .euctwprober import EUCTWProber
from .mbcharsetprober import MultiByteCharSetProber
from .sbcharsetprober import SingleByteCharSetProber
from .sequencemodel import SequenceModel
from .universaldetector import ResultDict, UniversalDetector

__all__ = [
    "CharDistributionAnalysis",
    "CharSetProber",
    "CharacterCategory",
    "CodingStateMachine",
    "EUCTWDistributionAnalysis",
    "EUCTWProber",
    "InputState",
    "MachineState",
    "MultiByteCharSetProber",
    "ProbingState",
    "ResultDict",
    "SequenceLikelihood",
    "SequenceModel",
    "SingleByteCharSetProber",
    "UniversalDetector",
]
