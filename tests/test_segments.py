import pytest

from softtouch.segments import (
    ASCII_TABLE_END,
    ASCII_TABLE_START,
    BACK_PLANES,
    BLANK_CHARACTER,
    FRONT_PLANES,
    SEG_A,
    SEG_B,
    SEG_C,
    SEG_D,
    SEG_DP,
    SEG_E,
    SEG_F,
    SEG_G,
    USED_PINS,
    HardwareConfig,
    glyph,
    ordering_table,
)


def test_rev_b_ordering_table():
    assert ordering_table(HardwareConfig.REV_B) == (37, 17, 7, 8, 53, 38, 10, 11, 40, 52, 19, 18)


def test_rev_a_ordering_table():
    assert ordering_table(HardwareConfig.REV_A) == (37, 17, 7, 8, 12, 26, 10, 11, 51, 52, 19, 16)


def test_default_ordering_is_rev_b():
    assert ordering_table() == ordering_table(HardwareConfig.REV_B)


@pytest.mark.parametrize("config", list(HardwareConfig))
def test_ordering_table_shape(config):
    table = ordering_table(config)
    assert len(table) == USED_PINS == FRONT_PLANES + BACK_PLANES
    assert len(set(table)) == len(table)
    assert all(0 <= pin < 64 for pin in table)


@pytest.mark.parametrize("config", list(HardwareConfig))
def test_decimal_points_live_on_second_waveform_of_digits(config):
    table = ordering_table(config)
    assert config.decimal_point_pins == (table[1], table[3], table[5])
    assert config.colon_pin == table[7]


def test_glyph_eight_lights_every_segment():
    assert glyph("8") == (SEG_D | SEG_E | SEG_G | SEG_F, SEG_C | SEG_B | SEG_A)


def test_glyph_one():
    assert glyph("1") == (0, SEG_B | SEG_C)


def test_lower_case_shown_as_upper_case():
    for upper in "ABCDEFGHIJKLMNOPQRSTUVWXYZ":
        assert glyph(upper.lower()) == glyph(upper)


@pytest.mark.parametrize("char", ["~", "!", " ", "[", "`", "\x7f", "é"])
def test_out_of_range_characters_are_blank(char):
    assert glyph(char) == glyph(BLANK_CHARACTER) == (0, 0)


def test_integer_codes_match_characters():
    for code in range(ord(ASCII_TABLE_START), ord(ASCII_TABLE_END) + 1):
        assert glyph(code) == glyph(chr(code))


@pytest.mark.parametrize("a, b", [("8", "@"), ("6", "G"), ("5", "S"), ("9", "Q"), ("A", "P"), ("M", "W")])
def test_shared_glyphs(a, b):
    assert glyph(a) == glyph(b)


def test_glyphs_never_touch_decimal_point():
    for code in range(ord(ASCII_TABLE_START), ord(ASCII_TABLE_END) + 1):
        front, back = glyph(chr(code))
        assert back & SEG_DP == 0
        assert front & ~(SEG_D | SEG_E | SEG_F | SEG_G) == 0
        assert back & ~(SEG_A | SEG_B | SEG_C) == 0


def test_digits_are_all_distinct():
    glyphs = [glyph(str(d)) for d in range(10)]
    assert len(set(glyphs)) == 10


@pytest.mark.parametrize("bad", ["", "AB"])
def test_glyph_needs_single_character(bad):
    with pytest.raises(ValueError):
        glyph(bad)