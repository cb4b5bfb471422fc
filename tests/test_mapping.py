import pytest

from softtouch.events import Event, EventMessage, Node
from softtouch.mapping import (
    INT8_MAX,
    INT16_MAX,
    SysCtrlMapping,
    TargetCc,
    clamp_int8,
    clamp_int16,
)
from softtouch.midi import ControlChange, unpack_control_change
from softtouch.ui import unpack_display_bytes


class Recorder:
    def __init__(self, result=Event.MSG_RX):
        self.messages = []
        self.result = result

    def post(self, message):
        self.messages.append(message)
        return self.result


def make_mapping(midi=None, ui=None, index=0, value=63):
    return SysCtrlMapping(index, 0, TargetCc.CC_102 + index, value,
                          midi or Recorder(), ui or Recorder())


@pytest.mark.parametrize("current,delta", [(0, -1), (10, -20), (5, -128)])
def test_clamp_int8_floor(current, delta):
    assert clamp_int8(current, delta) == 0


@pytest.mark.parametrize("current,delta", [(127, 1), (120, 20), (100, 127)])
def test_clamp_int8_ceiling(current, delta):
    assert clamp_int8(current, delta) == INT8_MAX


def test_clamp_int8_inside():
    assert clamp_int8(63, 1) == 63 + 1


def test_clamp_int16():
    assert clamp_int16(32000, 1000) == INT16_MAX
    assert clamp_int16(3, -4) == 0
    assert clamp_int16(300, 5) == 305


@pytest.mark.parametrize("target,number", [(TargetCc.VOLUME, 7), (TargetCc.CC_102, 102)])
def test_target_cc_reaches_midi_message(target, number):
    midi = Recorder()
    mapping = SysCtrlMapping(0, 0, target, 10, midi, Recorder())
    mapping.update_target_value(1)
    assert unpack_control_change(midi.messages[0].value) == ControlChange(0, number, 11)


def test_update_target_value_posts_to_midi_and_ui():
    midi, ui = Recorder(), Recorder()
    mapping = make_mapping(midi, ui)
    assert mapping.update_target_value(1) == 64
    assert mapping.target_value == 64
    (midi_msg,) = midi.messages
    assert midi_msg.src == Node.SYS_CTRL and midi_msg.dst == Node.USB_MIDI
    assert midi_msg.event == Event.USB_MIDI_CC_MSG_TO_HOST
    assert unpack_control_change(midi_msg.value) == ControlChange(0, 102, 64)
    (ui_msg,) = ui.messages
    assert ui_msg.event == Event.UI_DISPLAY_UPDATE
    top, _, _, low = unpack_display_bytes(ui_msg.value)
    assert top == 1
    assert low == 64


def test_ui_top_byte_follows_index():
    ui = Recorder()
    mapping = make_mapping(ui=ui, index=4)
    mapping.update_target_value(-1)
    assert unpack_display_bytes(ui.messages[0].value)[0] == 4 + 1
    assert unpack_display_bytes(ui.messages[0].value)[3] == 63 - 1


def test_update_from_ui_applies_delta():
    mapping = make_mapping()
    result = mapping.update(EventMessage(Node.UI_MGR, Node.SYS_CTRL,
                                         Event.SYS_CTRL_UPDATE_TARGET_CTRL_VAL, 1))
    assert result == mapping.target_value == 63 + 1


def test_update_wraps_delta_to_int8():
    mapping = make_mapping()
    mapping.update(EventMessage(Node.UI_MGR, Node.SYS_CTRL,
                                Event.SYS_CTRL_UPDATE_TARGET_CTRL_VAL, 255))
    assert mapping.target_value == 63 - 1


@pytest.mark.parametrize("src", [Node.USB_MIDI, Node.DEV_CLI, Node.NONE])
def test_update_from_other_nodes_is_ignored(src):
    midi = Recorder()
    mapping = make_mapping(midi=midi)
    assert mapping.update(EventMessage(src, Node.SYS_CTRL,
                                       Event.SYS_CTRL_UPDATE_TARGET_CTRL_VAL, 5)) is None
    assert mapping.target_value == 63
    assert midi.messages == []


def test_failed_posts_do_not_stop_update():
    mapping = make_mapping(Recorder(Event.MSG_RX_FAIL), Recorder(Event.MSG_RX_FAIL))
    assert mapping.update_target_value(100) == INT8_MAX