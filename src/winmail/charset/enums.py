"""
All of the Enums that are used by the charset probers.
"""

from enum import IntEnum


class InputState(IntEnum):
    """
    This enum represents the different states a universal detector can be in.
    """

    PURE_ASCII = 0
    HIGH_BYTE = 2


class ProbingState(IntEnum):
    """
    This enum represents the different states a prober can be in.
    """

    DETECTING = 0
    FOUND_IT = 1
    NOT_ME = 2


class MachineState(IntEnum):
    """
    This enum represents the different states a state machine can be in.
    """

    START = 0
    ERROR = 1
    ITS_ME = 2


class SequenceLikelihood(IntEnum):
    """
    This enum represents the likelihood of a character following the previous one.
    """

    NEGATIVE = 0
    UNLIKELY = 1
    LIKELY = 2
    POSITIVE = 3

    @classmethod
    def get_num_categories(cls) -> int:
        """:returns: The number of likelihood categories in the enum."""
        return 4


class CharacterCategory(IntEnum):
    """
    This enum represents the different categories sequence models put
    characters into.

    Anything less than DIGIT is considered a letter.
    """

    UNDEFINED = 255
    CONTROL = 254
    SYMBOL = 253
    LINE_BREAK = 252
    DIGIT = 251
