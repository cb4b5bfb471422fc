"""The user interface: buttons, encoder, lights and display, with two operating modes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import IntEnum
from typing import Callable

from softtouch.drivers import Button, Encoder, Led
from softtouch.events import (
    DEFAULT_QUEUE_CAPACITY,
    ButtonId,
    DisplayId,
    EncoderId,
    Event,
    EventMessage,
    EventQueue,
    LightId,
    Node,
)
from softtouch.mapping import _Poster
from softtouch.slcd import Position, SoftTouchLcd

HEARTBEAT_OFF_AT = 0x10

_log = logging.getLogger(__name__)


class UiMode(IntEnum):
    CONTROLLING_TARGET = 0
    CONFIGURING_SOFT_TOUCH = 1


def unpack_display_bytes(value: int) -> tuple[int, int, int, int]:
    """Split a packed 32-bit value into its four bytes, most significant first."""
    return tuple((value & 0xFFFFFFFF).to_bytes(4, "big"))


class UiState:
    """Behaviour of the controls in one mode; by default holds and releases do nothing."""

    turn_event = Event.SYS_CTRL_UPDATE_TARGET_CTRL_VAL

    def __init__(self, ui: Ui) -> None:
        self.ui = ui

    def turn(self, encoder_id: EncoderId, delta: int) -> Event | None:
        """Send an encoder step to the system controller; returns the posting outcome."""
        if encoder_id != EncoderId.MAIN_ENCODER:
            return None
        outcome = self.ui.system_post(
            EventMessage(Node.UI_MGR, Node.SYS_CTRL, self.turn_event, delta)
        )
        if outcome != Event.MSG_RX:
            _log.warning("Failed to send to SysCtrl")
        return outcome

    def press_and_hold(self, button_id: ButtonId) -> None:
        """A button has been held down; ignored in this mode."""

    def release(self, button_id: ButtonId) -> None:
        """A button was pressed briefly; ignored in this mode."""

    def release_from_hold(self, button_id: ButtonId) -> None:
        """A held button was let go; ignored in this mode."""

    def light(self, light_id: LightId, on: bool) -> None:
        """Light requests are not handled by modes."""

    def write_to_display(self, display_id: DisplayId, data: Sequence[int]) -> None:
        """Show the first byte on the left pair of digits and the last on the right pair."""
        if display_id == DisplayId.KL46Z_SEGMENT_LCD:
            self.ui.display.write_uint8_hex(Position.LH, data[0])
            self.ui.display.write_uint8_hex(Position.RH, data[3])


class UiCtrlState(UiState):
    """Turning the encoder changes the target value; holding the left switch enters setup."""

    turn_event = Event.SYS_CTRL_UPDATE_TARGET_CTRL_VAL

    def press_and_hold(self, button_id: ButtonId) -> None:
        if button_id == ButtonId.BOARD_SW_LH:
            self.ui.change_mode(UiMode.CONFIGURING_SOFT_TOUCH)


class UiCfgState(UiState):
    """Turning the encoder picks a mapping; letting go of the left switch returns to control."""

    turn_event = Event.SYS_CTRL_LOAD_MAPPING

    def release_from_hold(self, button_id: ButtonId) -> None:
        if button_id == ButtonId.BOARD_SW_LH:
            self.ui.change_mode(UiMode.CONTROLLING_TARGET)

    def write_to_display(self, display_id: DisplayId, data: Sequence[int]) -> None:
        if display_id == DisplayId.KL46Z_SEGMENT_LCD:
            self.ui.display.clear_digit_pair(Position.RH)
        super().write_to_display(display_id, data)


class Ui:
    """Polls the controls, keeps the heartbeat light going and shows updates from the system."""

    def __init__(
        self,
        display: SoftTouchLcd | None = None,
        read_buttons: Callable[[ButtonId], int] | None = None,
        read_pulses: Callable[[], int] | None = None,
    ) -> None:
        self.display = display if display is not None else SoftTouchLcd()
        read_buttons = read_buttons if read_buttons is not None else (lambda _button: 1)
        read_pulses = read_pulses if read_pulses is not None else (lambda: 0)
        self.leds = {light: Led(light) for light in LightId}
        self.buttons = [
            Button(button, lambda button=button: read_buttons(button), self._mode)
            for button in ButtonId
        ]
        self.encoders = [Encoder(EncoderId.MAIN_ENCODER, read_pulses, self._mode)]
        self.cfg_mode = UiCfgState(self)
        self.ctrl_mode = UiCtrlState(self)
        self.current_mode: UiState = self.ctrl_mode
        self.system: _Poster | None = None
        self.slow_poll = 0
        self.heartbeat_counter = 0
        self._from_sysctrl = EventQueue(DEFAULT_QUEUE_CAPACITY)

    def _mode(self) -> UiState:
        return self.current_mode

    def connect(self, system: _Poster) -> None:
        """Attach the system controller that encoder moves are sent to."""
        self.system = system

    def system_post(self, message: EventMessage) -> Event:
        if self.system is None:
            raise RuntimeError("user interface is not connected to a system controller")
        return self.system.post(message)

    def init(self) -> None:
        self.light(LightId.BOARD_GREEN_LED, False)
        self.light(LightId.BOARD_RED_LED, False)

    def poll(self) -> None:
        """Sample the buttons and encoder; in setup mode most encoder readings are dropped."""
        for button in self.buttons:
            button.debounce()
        if self.current_mode is self.cfg_mode:
            self.slow_poll = (self.slow_poll + 1) & 0xFF
            if self.slow_poll & 0xF0:
                return
        for encoder in self.encoders:
            encoder.get_delta()

    def post(self, message: EventMessage) -> Event:
        return self._from_sysctrl.post(message)

    def process(self) -> None:
        self.heartbeat()
        self.process_events()

    def process_events(self) -> EventMessage | None:
        """Handle the oldest message from the system controller, if any, and return it."""
        if self._from_sysctrl.empty():
            return None
        message = self._from_sysctrl.pop()
        if message.event == Event.UI_DISPLAY_UPDATE and message.src == Node.SYS_CTRL:
            self.send_display_update(message.value)
        return message

    def light(self, light_id: LightId, on: bool) -> None:
        led = self.leds.get(light_id)
        if led is not None:
            led.light(on)

    def send_display_update(self, value: int) -> tuple[int, int, int, int]:
        """Show a packed display value through the current mode; returns its bytes."""
        data = unpack_display_bytes(value)
        _log.debug("SendDispUpdate: %u, %u", data[0], data[3])
        self.current_mode.write_to_display(DisplayId.KL46Z_SEGMENT_LCD, data)
        return data

    def change_mode(self, mode: UiMode) -> None:
        if mode == UiMode.CONTROLLING_TARGET:
            self.current_mode = self.ctrl_mode
        elif mode == UiMode.CONFIGURING_SOFT_TOUCH:
            self.current_mode = self.cfg_mode

    def heartbeat(self) -> None:
        """Flash the green light briefly once every 256 calls."""
        if self.heartbeat_counter == 0:
            self.light(LightId.BOARD_GREEN_LED, True)
        if self.heartbeat_counter == HEARTBEAT_OFF_AT:
            self.light(LightId.BOARD_GREEN_LED, False)
        self.heartbeat_counter = (self.heartbeat_counter + 1) & 0xFF