######################## BEGIN LICENSE BLOCK ########################
# The Original Code is Mozilla Universal charset detector code.
#
# The Initial Developer of the Original Code is
# Netscape Communications Corporation.
# Portions created by the Initial Developer are Copyright (C) 2001
# the Initial Developer. All Rights Reserved.
#
# Contributor(s):
#   Mark Pilgrim - port to Python
#   Shy Shalom - original C code
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or (at your option) any later version.
#
# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, see
# <https://www.gnu.org/licenses/>.
######################### END LICENSE BLOCK #########################
"""
Module containing the UniversalDetector class, which composes BOM sniffing,
pure-ASCII detection and a list of charset probers.
"""

import codecs
import logging
import re
from typing import List, Optional, Sequence, TypedDict, Union

from winmail._utils import DEFAULT_MAX_BYTES, MINIMUM_THRESHOLD, _validate_max_bytes

from .charsetprober import CharSetProber
from .enums import InputState, ProbingState
from .euctwprober import EUCTWProber


class ResultDict(TypedDict):
    encoding: Optional[str]
    confidence: float
    language: Optional[str]


class UniversalDetector:
    """
    Coordinates the charset probers over a stream of byte chunks.

    .. code::

            u = UniversalDetector()
            u.feed(some_bytes)
            u.close()
            detected = u.result
    """

    MINIMUM_THRESHOLD = MINIMUM_THRESHOLD
    HIGH_BYTE_DETECTOR = re.compile(b"[\x80-\xff]")

    def __init__(
        self,
        probers: Optional[Sequence[CharSetProber]] = None,
        max_bytes: int = DEFAULT_MAX_BYTES,
    ) -> None:
        """
        :param probers: The probers to run once a high byte is seen.
            Defaults to a single :class:`EUCTWProber`.
        :param max_bytes: Stop feeding the probers after this many bytes.
        """
        _validate_max_bytes(max_bytes)
        if probers is None:
            probers = [EUCTWProber()]
        self._charset_probers: List[CharSetProber] = list(probers)
        self.result: ResultDict = {
            "encoding": None,
            "confidence": 0.0,
            "language": None,
        }
        self.done = False
        self._got_data = False
        self._input_state = InputState.PURE_ASCII
        self._total_bytes_fed = 0
        self.max_bytes = max_bytes
        self.logger = logging.getLogger(__name__)
        self.reset()

    @property
    def input_state(self) -> int:
        return self._input_state

    @property
    def charset_probers(self) -> List[CharSetProber]:
        return self._charset_probers

    def reset(self) -> None:
        """
        Reset the detector and all of its probers back to their initial
        states, ready for another document.
        """
        self.result = {"encoding": None, "confidence": 0.0, "language": None}
        self.done = False
        self._got_data = False
        self._input_state = InputState.PURE_ASCII
        self._total_bytes_fed = 0
        for prober in self._charset_probers:
            prober.reset()

    def feed(self, byte_str: Union[bytes, bytearray, memoryview]) -> None:
        """
        Takes a chunk of a document and feeds it through the probers.

        Check :attr:`done` afterwards to see whether more data is needed.
        Call :meth:`close` when the document ends.
        """
        if self.done or not byte_str:
            return
        byte_str = bytes(byte_str)

        if not self._got_data:
            self._got_data = True
            bom_result = self._detect_bom(byte_str)
            if bom_result is not None:
                self.result = bom_result
                self.done = True
                return

        remaining = self.max_bytes - self._total_bytes_fed
        if remaining <= 0:
            return
        byte_str = byte_str[:remaining]
        self._total_bytes_fed += len(byte_str)

        if self._input_state == InputState.PURE_ASCII:
            if self.HIGH_BYTE_DETECTOR.search(byte_str):
                self._input_state = InputState.HIGH_BYTE

        if self._input_state != InputState.HIGH_BYTE:
            return

        for prober in self._charset_probers:
            if prober.state == ProbingState.NOT_ME:
                continue
            if prober.feed(byte_str) == ProbingState.FOUND_IT:
                self.result = {
                    "encoding": prober.charset_name,
                    "confidence": prober.get_confidence(),
                    "language": prober.language,
                }
                self.done = True
                break

    @staticmethod
    def _detect_bom(byte_str: bytes) -> Optional[ResultDict]:
        if byte_str.startswith(codecs.BOM_UTF8):
            return {"encoding": "UTF-8-SIG", "confidence": 1.0, "language": ""}
        if byte_str.startswith((codecs.BOM_UTF32_LE, codecs.BOM_UTF32_BE)):
            return {"encoding": "UTF-32", "confidence": 1.0, "language": ""}
        if byte_str.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
            return {"encoding": "UTF-16", "confidence": 1.0, "language": ""}
        return None

    def close(self) -> ResultDict:
        """
        Stop analyzing the current document and come up with a final
        prediction.

        :returns:  The ``result`` attribute, a ``dict`` with the keys
                   `encoding`, `confidence`, and `language`.
        """
        if self.done:
            return self.result
        self.done = True

        if not self._got_data:
            self.logger.debug("no data received!")
        elif self._input_state == InputState.PURE_ASCII:
            self.result = {"encoding": "ascii", "confidence": 1.0, "language": ""}
        else:
            max_prober_confidence = 0.0
            max_prober = None
            for prober in self._charset_probers:
                if prober.state == ProbingState.NOT_ME:
                    continue
                prober_confidence = prober.get_confidence()
                if prober_confidence > max_prober_confidence:
                    max_prober_confidence = prober_confidence
                    max_prober = prober
            if max_prober and max_prober_confidence > self.MINIMUM_THRESHOLD:
                self.result = {
                    "encoding": max_prober.charset_name,
                    "confidence": max_prober_confidence,
                    "language": max_prober.language,
                }

        if self.result["encoding"] is None:
            self.logger.debug("no probers hit minimum threshold")
            for prober in self._charset_probers:
                self.logger.debug(
                    "%s %s confidence = %s",
                    prober.charset_name,
                    prober.language,
                    prober.get_confidence(),
                )
        return self.result
