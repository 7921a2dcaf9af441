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
from typing import Tuple, TypedDict

from .enums import MachineState


class CodingStateMachineDict(TypedDict, total=False):
    class_table: Tuple[int, ...]
    class_factor: int
    state_table: Tuple[int, ...]
    char_len_table: Tuple[int, ...]
    name: str
    language: str


class CodingStateMachine:
    """
    A state machine that verifies a byte sequence for one encoding, one byte
    at a time.  Three of its states matter to a prober:

    START: the machine is between characters, either at the beginning or
           right after a complete legal character.

    ITS_ME: the machine saw a byte sequence that only this encoding can
            contain.  The prober can answer yes at once.

    ERROR: the machine saw a byte sequence that is illegal in this
           encoding.  The prober can answer no at once.

    Each byte is first mapped to a class through ``class_table``; the next
    state is ``state_table[state * class_factor + byte_class]``.
    """

    def __init__(self, sm: CodingStateMachineDict) -> None:
        self._model = sm
        self._curr_byte_pos = 0
        self._curr_char_len = 0
        self._curr_state = MachineState.START
        self.active = True
        self.logger = logging.getLogger(__name__)
        self.reset()

    def reset(self) -> None:
        self._curr_state = MachineState.START

    def next_state(self, c: int) -> int:
        # the length of a character is known from its first byte
        byte_class = self._model["class_table"][c]
        if self._curr_state == MachineState.START:
            self._curr_byte_pos = 0
            self._curr_char_len = self._model["char_len_table"][byte_class]
        curr_state = self._curr_state * self._model["class_factor"] + byte_class
        self._curr_state = self._model["state_table"][curr_state]
        self._curr_byte_pos += 1
        return self._curr_state

    def get_current_charlen(self) -> int:
        return self._curr_char_len

    def get_coding_state_machine(self) -> str:
        return self._model["name"]

    @property
    def language(self) -> str:
        return self._model["language"]
