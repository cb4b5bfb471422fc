"""The system controller: owns the mappings and routes user actions to them."""

from __future__ import annotations

import logging

from softtouch.events import DEFAULT_QUEUE_CAPACITY, Event, EventMessage, EventQueue, Node
from softtouch.mapping import SysCtrlMapping, TargetCc, _Poster, _to_int8

NUM_MAPPINGS = 8
DEFAULT_TARGET_VALUE = 63

_log = logging.getLogger(__name__)


def default_mappings(midi: _Poster, ui: _Poster) -> list[SysCtrlMapping]:
    """Eight mappings on channel 0, aimed at the undefined controllers from 102 up."""
    return [
        SysCtrlMapping(index, 0, TargetCc.CC_102 + index, DEFAULT_TARGET_VALUE, midi, ui)
        for index in range(NUM_MAPPINGS)
    ]


class SystemController:
    """Receives messages from the interface and the host and applies them to the current mapping."""

    def __init__(self, midi: _Poster, ui: _Poster) -> None:
        self._ui = ui
        self.mappings = default_mappings(midi, ui)
        self.current_index = 0
        self.mapping = self.mappings[0]
        self._rx_events = EventQueue(DEFAULT_QUEUE_CAPACITY)

    def post(self, message: EventMessage) -> Event:
        return self._rx_events.post(message)

    def process(self) -> EventMessage | None:
        """Handle the oldest queued message; returns it, or None if the queue was empty."""
        if self._rx_events.empty():
            return None
        message = self._rx_events.pop()
        from_user = message.src in (Node.UI_MGR, Node.USB_MIDI)
        if message.event == Event.SYS_CTRL_LOAD_MAPPING and from_user:
            self.load_new_mapping(message.value)
        elif message.event == Event.SYS_CTRL_UPDATE_TARGET_CTRL_VAL and from_user:
            self.mapping.update(message)
        return message

    def load_new_mapping(self, delta: int) -> int:
        """Move to a neighbouring mapping, staying within the table; returns its index."""
        wanted = self.current_index + _to_int8(delta)
        self.current_index = max(0, min(wanted, NUM_MAPPINGS - 1))
        self.mapping = self.mappings[self.current_index]
        _log.info("new mapping: %u", self.current_index)
        value = ((self.current_index + 1) << 24) | self.mapping.target_value
        outcome = self._ui.post(
            EventMessage(Node.SYS_CTRL, Node.UI_MGR, Event.UI_DISPLAY_UPDATE, value)
        )
        if outcome != Event.MSG_RX:
            _log.warning("CtrlMapping failed to send to Ui")
        return self.current_index