"""Language models for single-byte charset probing."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True, slots=True)
class SequenceModel:
    """A single-byte charset model.

    :param char_to_order_map: 256 entries giving each byte's frequency order
        in the language, or a :class:`~winmail.charset.enums.CharacterCategory`
        value for bytes that are not letters.
    :param precedence_matrix: Flat ``SAMPLE_SIZE * SAMPLE_SIZE`` table of
        :class:`~winmail.charset.enums.SequenceLikelihood` values, indexed by
        ``previous_order * SAMPLE_SIZE + order``.
    :param typical_positive_ratio: Share of positive sequences in typical
        text; confidence is scaled by it.
    :param charset_name: The encoding name reported on a match.
    :param language: The language the model was trained on.
    :param keep_ascii_letters: Whether ASCII letters belong to the
        language's alphabet (Latin scripts) or are filtered out as noise.
    """

    char_to_order_map: bytes
    precedence_matrix: bytes
    typical_positive_ratio: float
    charset_name: str
    language: str = ""
    keep_ascii_letters: bool = False

    def __post_init__(self) -> None:
        if len(self.char_to_order_map) != 256:
            msg = "char_to_order_map must have 256 entries"
            raise ValueError(msg)
        if self.typical_positive_ratio <= 0:
            msg = "typical_positive_ratio must be positive"
            raise ValueError(msg)

    def get_order(self, byte: int) -> int:
        return self.char_to_order_map[byte]

    def get_precedence(self, pos: int) -> int:
        return self.precedence_matrix[pos]
