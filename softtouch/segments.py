"""Pin layout and character glyphs of the four-digit, seven-segment panel."""

from __future__ import annotations

from enum import IntEnum

# Panel geometry.
FRONT_PLANES = 8
BACK_PLANES = 4
USED_PINS = FRONT_PLANES + BACK_PLANES
DUTY = BACK_PLANES - 1
CHAR_COUNT = 4
CHAR_SIZE = 2
WAVEFORMS_PER_CHAR = 2
SPECIAL_SYMBOL_COUNT = 4

# Character table bounds.
ASCII_TABLE_START = "0"
ASCII_TABLE_END = "Z"
BLANK_CHARACTER = ">"

ALL_ON = 0xFF

# Bits of the first waveform byte of a digit.
SEG_D = 0x01
SEG_E = 0x02
SEG_G = 0x04
SEG_F = 0x08

# Bits of the second waveform byte of a digit.
SEG_DP = 0x01
SEG_C = 0x02
SEG_B = 0x04
SEG_A = 0x08

# Default controller configuration (reference voltage taken from VLL1).
LCD_RVEN = 1
LCD_RVTRIM = 8
LCD_CPSEL = 1
LCD_LOAD_ADJUST = 3
LCD_ALT_DIV = 0
LCD_SUPPLY = 1
LCD_CLOCK_SOURCE = 1
LCD_LCK = 1
LCD_BLINK_RATE = 3

# Pin kinds used by fault detection.
FP_TYPE = 0x00
BP_TYPE = 0x80

# Fault detection parameters.
FDPRS_32 = 5
FDPRS_64 = 6
FDSWW_128 = 5
FAULTD_FP_FDPRS = FDPRS_32
FAULTD_FP_FDSWW = FDSWW_128
FAULTD_BP_FDPRS = FDPRS_64
FAULTD_BP_FDSWW = FDSWW_128
FAULTD_FP_HI = 127
FAULTD_FP_LO = 110
FAULTD_BP_HI = 127
FAULTD_BP_LO = 110
FAULTD_TIME = 6


class HardwareConfig(IntEnum):
    """Board revisions, which differ in how the panel is wired."""

    REV_B = 0
    REV_A = 1

    @property
    def decimal_point_pins(self) -> tuple[int, int, int]:
        """Waveform registers holding the three decimal points."""
        return _DP_PINS[self]

    @property
    def colon_pin(self) -> int:
        """Waveform register holding the colon symbol."""
        return 11


_ORDERING = {
    HardwareConfig.REV_B: (37, 17, 7, 8, 53, 38, 10, 11, 40, 52, 19, 18),
    HardwareConfig.REV_A: (37, 17, 7, 8, 12, 26, 10, 11, 51, 52, 19, 16),
}

_DP_PINS = {
    HardwareConfig.REV_B: (17, 8, 38),
    HardwareConfig.REV_A: (17, 8, 26),
}

# Lit segments of each displayable character.
_SEGMENTS = {
    "0": "abcdef",
    "1": "bc",
    "2": "abdeg",
    "3": "abcdg",
    "4": "bcfg",
    "5": "acdfg",
    "6": "acdefg",
    "7": "abc",
    "8": "abcdefg",
    "9": "abcdfg",
    ":": "",
    ";": "",
    "<": "",
    "=": "dg",
    ">": "",
    "?": "a",
    "@": "abcdefg",
    "A": "abcefg",
    "B": "cdefg",
    "C": "adef",
    "D": "abcdeg",
    "E": "adefg",
    "F": "aefg",
    "G": "acdefg",
    "H": "bcefg",
    "I": "c",
    "J": "bcde",
    "K": "",
    "L": "def",
    "M": "bcef",
    "N": "ceg",
    "O": "cdeg",
    "P": "abcefg",
    "Q": "abcdfg",
    "R": "abefg",
    "S": "acdfg",
    "T": "defg",
    "U": "bcdef",
    "V": "",
    "W": "bcef",
    "X": "",
    "Y": "",
    "Z": "ad",
}

_FRONT_BITS = {"d": SEG_D, "e": SEG_E, "g": SEG_G, "f": SEG_F}
_BACK_BITS = {"c": SEG_C, "b": SEG_B, "a": SEG_A}


def _encode(segments: str) -> tuple[int, int]:
    front = sum(bit for name, bit in _FRONT_BITS.items() if name in segments)
    back = sum(bit for name, bit in _BACK_BITS.items() if name in segments)
    return front, back


_GLYPHS = {char: _encode(segments) for char, segments in _SEGMENTS.items()}


def ordering_table(config: HardwareConfig = HardwareConfig.REV_B) -> tuple[int, ...]:
    """Waveform registers in logical order: eight front planes, then four backplanes."""
    return _ORDERING[HardwareConfig(config)]


def glyph(char: str | int) -> tuple[int, int]:
    """The two waveform bytes that draw a character on one digit.

    Lower-case letters are shown as capitals; anything outside the table is blank.
    """
    if isinstance(char, int):
        char = chr(char & 0xFF)
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    if "a" <= char <= "z":
        char = chr(ord(char) - 32)
    if not ASCII_TABLE_START <= char <= ASCII_TABLE_END:
        char = BLANK_CHARACTER
    return _GLYPHS[char]