"""Model of the segment LCD controller and the application's wrapper around it."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

from softtouch.segments import (
    ALL_ON,
    BLANK_CHARACTER,
    CHAR_COUNT,
    CHAR_SIZE,
    FRONT_PLANES,
    LCD_RVTRIM,
    USED_PINS,
    WAVEFORMS_PER_CHAR,
    HardwareConfig,
    glyph,
    ordering_table,
)

WAVEFORM_REGISTERS = 64
AR_BLINK = 0x80
DEFAULT_BLINK_RATE = 3

# Table slots holding the decimal points after digits 0, 1 and 2, and the colon.
_DP_SLOTS = {0: 1, 1: 3, 2: 5}
_COLON_SLOT = 7


def nibble_to_hex_char(value: int) -> str:
    """Upper-case hex digit for a value from 0 to 15."""
    if 0 <= value <= 9:
        return chr(ord("0") + value)
    if 10 <= value <= 15:
        return chr(ord("A") + value - 10)
    raise ValueError(f"{value} is not a nibble")


class SegmentLcd:
    """A four-digit seven-segment panel driven through its waveform registers."""

    def __init__(self, hardware: HardwareConfig = HardwareConfig.REV_B) -> None:
        self.hardware = HardwareConfig(hardware)
        self._ordering = ordering_table(self.hardware)
        self._wf = bytearray(WAVEFORM_REGISTERS)
        self.char_position = 0
        self.pen = [0, 0]
        self.bpen = [0, 0]
        self.rvtrim = LCD_RVTRIM
        self.ar = 0
        self.reference_stop_enabled = True
        self.stopped_in_deep_sleep = False
        for index, pin in enumerate(self._ordering[:USED_PINS]):
            word, bit = divmod(pin, 32)
            self.pen[word] |= 1 << bit
            if index >= FRONT_PLANES:
                self.bpen[word] |= 1 << bit
                self._wf[pin] = 1 << (index - FRONT_PLANES)
        self.enabled = True

    def home(self) -> None:
        """Move the cursor to the first digit."""
        self.char_position = 0

    def write_msg(self, message: str) -> None:
        """Show a message from the first digit, padding the rest of the panel with blanks."""
        text = message.partition("\0")[0][:CHAR_COUNT]
        self.char_position = 0
        for char in text:
            self.put_char(char)
        for _ in range(CHAR_COUNT - len(text)):
            self.put_char(BLANK_CHARACTER)

    def write_bytes(self, data: Iterable[int | str]) -> None:
        """Write characters from the cursor onwards, at most one panel's worth."""
        for count, char in enumerate(data):
            if count >= CHAR_COUNT:
                break
            self.put_char(char)

    def put_char(self, char: int | str) -> None:
        """Write one character at the cursor and advance it, wrapping after the last digit."""
        if isinstance(char, int):
            char = chr(char & 0xFF)
        if self.char_position >= CHAR_COUNT:
            self.char_position = 0
        if char == ".":
            self.dp(self.char_position - 1, True)
            return
        for offset, value in enumerate(glyph(char)[:CHAR_SIZE]):
            pin = self._ordering[self.char_position * WAVEFORMS_PER_CHAR + offset]
            keep = self._wf[pin] & 0x01 if offset == 1 else 0
            self._wf[pin] = value | keep
        self.char_position += 1

    def contrast(self, level: int) -> None:
        """Add a contrast level (0 lightest to 15 darkest) to the trim setting."""
        self.rvtrim |= level & 0x0F

    def all_segments(self, on: bool) -> None:
        """Light every segment of every digit, or turn them all off."""
        value = ALL_ON if on else 0
        for pin in self._ordering[:CHAR_COUNT * WAVEFORMS_PER_CHAR]:
            self._wf[pin] = value

    def clear(self) -> None:
        self.all_segments(False)

    def dp(self, pos: int, on: bool) -> None:
        """Turn the decimal point after digit 0, 1 or 2 on or off; other positions are ignored."""
        slot = _DP_SLOTS.get(pos)
        if slot is not None:
            self._set_symbol(self._ordering[slot], on)

    def colon(self, on: bool) -> None:
        self._set_symbol(self._ordering[_COLON_SLOT], on)

    def blink(self, rate: int = DEFAULT_BLINK_RATE) -> None:
        """Start blinking at a rate from 0 to 7; any other rate stops it."""
        if rate > 7 or rate < 0:
            self.ar &= ~AR_BLINK
        else:
            self.ar |= AR_BLINK | rate

    @property
    def blinking(self) -> bool:
        return bool(self.ar & AR_BLINK)

    def deepsleep_enable(self, enable: bool) -> None:
        """Keep the panel running through deep sleep, or let it stop."""
        self.reference_stop_enabled = bool(enable)
        self.stopped_in_deep_sleep = not enable

    def waveform(self, pin: int) -> int:
        """Current contents of one waveform register."""
        return self._wf[pin]

    def digit_segments(self, position: int) -> tuple[int, int]:
        """The two waveform bytes of a digit."""
        if not 0 <= position < CHAR_COUNT:
            raise IndexError(f"digit {position} out of range")
        base = position * WAVEFORMS_PER_CHAR
        return (self._wf[self._ordering[base]], self._wf[self._ordering[base + 1]])

    def _set_symbol(self, pin: int, on: bool) -> None:
        if on:
            self._wf[pin] |= 0x01
        else:
            self._wf[pin] &= 0xFE


class Position(IntEnum):
    DIGIT_0 = 0
    DIGIT_1 = 1
    DIGIT_2 = 2
    DIGIT_3 = 3
    LH = 0
    RH = 2


class SoftTouchLcd(SegmentLcd):
    """The panel as the application uses it: two pairs of hex digits."""

    def clear_digit(self, pos: Position) -> None:
        self.char_position = int(pos)
        self.write_msg(" ")

    def clear_digit_pair(self, pos: Position) -> None:
        self.char_position = int(pos)
        self.write_msg("  ")

    def write_uint8_hex(self, pos: Position, value: int) -> None:
        """Show a byte as two hex digits starting at the given position."""
        self.char_position = int(pos)
        value &= 0xFF
        self.write_bytes(nibble_to_hex_char(value >> 4) + nibble_to_hex_char(value & 0xF))

    def write_nibble(self, pos: Position, value: int) -> None:
        """Show one hex digit followed by a blank; values above 15 are ignored."""
        self.char_position = int(pos)
        try:
            digit = nibble_to_hex_char(value)
        except ValueError:
            return
        self.write_bytes(digit + " ")