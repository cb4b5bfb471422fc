"""Debounced buttons, a quadrature encoder and active-low LEDs."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable

from softtouch.events import ButtonId, EncoderId, LightId

HOLD_TIMEOUT = 0xC0


class ButtonState(IntEnum):
    UNPRESSED = 0
    PRESSED = 1
    PRESSED_AND_HELD = 2
    RELEASED = 3
    RELEASED_FROM_HOLD = 4


class Button:
    """A switch sampled regularly; reports press-and-hold and release to the current mode."""

    def __init__(
        self,
        button_id: ButtonId,
        read_pin: Callable[[], int],
        get_mode: Callable[[], Any],
    ) -> None:
        self.button_id = button_id
        self._read_pin = read_pin
        self._get_mode = get_mode
        self.switch_state = 0xFF
        self.state = ButtonState.UNPRESSED
        self._hold_counter = 0

    def debounce(self) -> None:
        """Take one sample of the pin and advance the button's state."""
        self.switch_state = ((self.switch_state << 1) | (1 if self._read_pin() else 0)) & 0xFF
        if self.state is ButtonState.UNPRESSED:
            if self.pressed():
                self.update_state(ButtonState.PRESSED)
        elif self.state is ButtonState.PRESSED:
            if self.pressed():
                self._hold_counter += 1
                if self._hold_counter >= HOLD_TIMEOUT:
                    self._hold_counter = 0
                    self.update_state(ButtonState.PRESSED_AND_HELD)
            else:
                self._hold_counter = 0
                self.update_state(ButtonState.RELEASED)
                self.update_state(ButtonState.UNPRESSED)
        elif self.state is ButtonState.PRESSED_AND_HELD:
            if not self.pressed():
                self.update_state(ButtonState.RELEASED_FROM_HOLD)
                self.update_state(ButtonState.UNPRESSED)

    def update_state(self, new_state: ButtonState) -> None:
        """Enter a state, telling the current mode about holds and releases."""
        self.state = ButtonState(new_state)
        if self.state is ButtonState.PRESSED_AND_HELD:
            self._get_mode().press_and_hold(self.button_id)
        elif self.state is ButtonState.RELEASED:
            self._get_mode().release(self.button_id)
        elif self.state is ButtonState.RELEASED_FROM_HOLD:
            self._get_mode().release_from_hold(self.button_id)

    def pressed(self) -> bool:
        """Eight low samples in a row."""
        return self.switch_state == 0x00

    def released(self) -> bool:
        return self.switch_state == 0x7F


class Encoder:
    """A rotary encoder whose pulse count is turned into single steps for the current mode."""

    def __init__(
        self,
        encoder_id: EncoderId,
        read_pulses: Callable[[], int],
        get_mode: Callable[[], Any],
    ) -> None:
        self.encoder_id = encoder_id
        self._read_pulses = read_pulses
        self._get_mode = get_mode
        self.pulses = 0
        self.last_pulses = 0

    def get_delta(self) -> int:
        """Report a step of +1 or -1 if the count moved; returns the step, or 0."""
        self.pulses = self._read_pulses()
        if self.pulses == self.last_pulses:
            return 0
        delta = 1 if self.pulses > self.last_pulses else -1
        self.last_pulses = self.pulses
        self._get_mode().turn(self.encoder_id, delta)
        return delta


class Led:
    """An LED wired active low: the pin is driven low to light it."""

    def __init__(self, light_id: LightId) -> None:
        self.light_id = light_id
        self.level = 1

    def light(self, on: bool) -> None:
        self.level = 0 if on else 1

    def is_lit(self) -> bool:
        return self.level == 0