"""Mappings from the controlling encoder to a MIDI control-change target."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Protocol

from softtouch.events import Event, EventMessage, Node

INT8_MAX = 127
INT16_MAX = 32767

_log = logging.getLogger(__name__)


class _Poster(Protocol):
    def post(self, message: EventMessage) -> Event: ...


class TargetCc(IntEnum):
    """Some useful control-change numbers to aim a mapping at."""

    VOLUME = 7
    EXPRESSION = 11
    HOLD = 64
    SOSTENUTO = 66
    CC_102 = 102  # 102 to 119 are undefined by the standard


def clamp_int8(current: int, delta: int) -> int:
    """Add a step to a value, keeping the result within 0 and 127."""
    total = current + delta
    if total < 0:
        return 0
    return min(total, INT8_MAX)


def clamp_int16(current: int, delta: int) -> int:
    """Add a step to a value, keeping the result within 0 and 32767."""
    total = current + delta
    if total < 0:
        return 0
    return min(total, INT16_MAX)


def _to_int8(value: int) -> int:
    return ((int(value) + 128) % 256) - 128


class SysCtrlMapping:
    """One target controller: its channel, number and current value."""

    def __init__(
        self,
        index: int,
        target_chan: int,
        target_cc: int,
        value: int,
        midi: _Poster,
        ui: _Poster,
    ) -> None:
        self.index = index
        self.target_chan = target_chan
        self.target_cc = target_cc
        self.target_value = value
        self._midi = midi
        self._ui = ui

    def update(self, message: EventMessage) -> int | None:
        """Apply a message; only encoder moves from the user interface change the value.

        Returns the new target value, or None when the message was not acted on.
        """
        if message.src == Node.UI_MGR:
            return self.update_target_value(message.value)
        return None

    def update_target_value(self, delta: int) -> int:
        """Step the target value and tell the MIDI link and the display; returns the new value."""
        self.target_value = clamp_int8(self.target_value, _to_int8(delta))
        midi_value = (self.target_chan << 24) | (self.target_cc << 16) | self.target_value
        outcome = self._midi.post(
            EventMessage(Node.SYS_CTRL, Node.USB_MIDI, Event.USB_MIDI_CC_MSG_TO_HOST, midi_value)
        )
        if outcome != Event.MSG_RX:
            _log.warning("CtrlMapping failed to send to UsbMidi")
        ui_value = ((1 + self.index) << 24) | (ord(" ") << 16) | midi_value
        outcome = self._ui.post(
            EventMessage(Node.SYS_CTRL, Node.UI_MGR, Event.UI_DISPLAY_UPDATE, ui_value)
        )
        if outcome != Event.MSG_RX:
            _log.warning("CtrlMapping failed to send to Ui")
        return self.target_value