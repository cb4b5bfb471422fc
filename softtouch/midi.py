"""Sends control-change messages queued by the system controller to the USB host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from softtouch.events import DEFAULT_QUEUE_CAPACITY, Event, EventMessage, EventQueue, Node

CONTROL_CHANGE_STATUS = 0xB0


@dataclass(frozen=True)
class ControlChange:
    """A MIDI control change: channel, controller number and value."""

    channel: int
    controller: int
    value: int

    def to_bytes(self) -> bytes:
        """The three bytes of the message on the wire."""
        return bytes((
            CONTROL_CHANGE_STATUS | (self.channel & 0x0F),
            self.controller & 0x7F,
            self.value & 0x7F,
        ))


def unpack_control_change(value: int) -> ControlChange:
    """Split a packed value: channel in the top byte, controller next, value in the bottom byte."""
    data = value & 0xFFFFFFFF
    return ControlChange(
        channel=(data >> 24) & 0xFF,
        controller=(data >> 16) & 0xFF,
        value=data & 0xFF,
    )


class UsbMidiTransceiver:
    """Queue of messages bound for the host, drained one per call to process."""

    def __init__(self, send: Callable[[ControlChange], object]) -> None:
        self._send = send
        self._to_host = EventQueue(DEFAULT_QUEUE_CAPACITY)

    def post(self, message: EventMessage) -> Event:
        return self._to_host.post(message)

    def process(self) -> ControlChange | None:
        """Handle the oldest queued message; returns the control change sent, if any."""
        if self._to_host.empty():
            return None
        message = self._to_host.pop()
        if message.event is Event.USB_MIDI_CC_MSG_TO_HOST and message.src is Node.SYS_CTRL:
            change = unpack_control_change(message.value)
            self._send(change)
            return change
        return None