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

import logging
import re
from typing import Optional, Union

from .enums import ProbingState

INTERNATIONAL_WORDS_PATTERN = re.compile(
    # optional ASCII prefix + one or more high-byte chars + optional ASCII
    # suffix + optional single trailing marker
    b"[a-zA-Z]*[\x80-\xff]+[a-zA-Z]*[^a-zA-Z\x80-\xff]?"
)


class CharSetProber:
    """Base class for the streaming charset probers.

    A prober is fed byte chunks one at a time and keeps whatever it needs to
    carry across chunk boundaries.  :attr:`state` becomes
    :attr:`ProbingState.FOUND_IT` or :attr:`ProbingState.NOT_ME` once the
    prober is certain, and stays there until :meth:`reset`.
    """

    SHORTCUT_THRESHOLD = 0.95

    def __init__(self) -> None:
        self._state = ProbingState.DETECTING
        self.active = True
        self.logger = logging.getLogger(__name__)

    def reset(self) -> None:
        self._state = ProbingState.DETECTING

    @property
    def charset_name(self) -> Optional[str]:
        return None

    @property
    def language(self) -> Optional[str]:
        raise NotImplementedError

    def feed(self, byte_str: Union[bytes, bytearray, memoryview]) -> ProbingState:
        raise NotImplementedError

    @property
    def state(self) -> ProbingState:
        return self._state

    def get_confidence(self) -> float:
        return 0.0

    @staticmethod
    def filter_international_words(
        buf: Union[bytes, bytearray, memoryview],
    ) -> bytearray:
        """Keep only the words that contain at least one high-byte character.

        Bytes fall into three classes: ASCII letters, high bytes (>= 0x80)
        and markers (everything else).  Markers split the buffer into
        words.  A word survives if it holds a high byte; ASCII letters next
        to the high bytes are kept so the bigrams around them stay real.  A
        single trailing ASCII marker is turned into a space.

        Used by single-byte probers whose model does not keep ASCII letters.
        """
        filtered = bytearray()
        words = INTERNATIONAL_WORDS_PATTERN.findall(bytes(buf))

        for word in words:
            filtered.extend(word[:-1])

            # Markers are used the same way in every language, so they only
            # delimit words here.
            last_char = word[-1:]
            if not last_char.isalpha() and last_char < b"\x80":
                last_char = b" "
            filtered.extend(last_char)

        return filtered

    @staticmethod
    def remove_xml_tags(buf: Union[bytes, bytearray, memoryview]) -> bytearray:
        """
        Returns a copy of ``buf`` that retains only the bytes that are not
        between <> characters, with a space delimiting each kept stretch.
        """
        buf = bytes(buf)
        filtered = bytearray()
        in_tag = False
        prev = 0

        for curr, byte in enumerate(buf):
            if byte == 0x3E:  # ">"
                prev = curr + 1
                in_tag = False
            elif byte == 0x3C:  # "<"
                if curr > prev and not in_tag:
                    filtered.extend(buf[prev:curr])
                    filtered.extend(b" ")
                in_tag = True

        if not in_tag:
            filtered.extend(buf[prev:])

        return filtered
