from softtouch.events import DEFAULT_QUEUE_CAPACITY, Event, EventMessage, Node
from softtouch.midi import ControlChange, UsbMidiTransceiver, unpack_control_change


def cc_message(value, src=Node.SYS_CTRL):
    return EventMessage(src, Node.USB_MIDI, Event.USB_MIDI_CC_MSG_TO_HOST, value)


def test_unpack_fields():
    assert unpack_control_change((1 << 24) | (102 << 16) | 63) == ControlChange(1, 102, 63)


def test_unpack_negative_wraps():
    assert unpack_control_change(-1) == ControlChange(255, 255, 255)


def test_unpack_ignores_third_byte():
    packed = (7 << 16) | (0x55 << 8) | 100
    assert unpack_control_change(packed) == ControlChange(0, 7, 100)


def test_wire_bytes():
    assert ControlChange(0, 7, 100).to_bytes() == bytes([0xB0, 7, 100])
    assert ControlChange(1, 102, 63).to_bytes()[0] == 0xB1


def test_process_sends_one_at_a_time():
    sent = []
    midi = UsbMidiTransceiver(sent.append)
    assert midi.post(cc_message((102 << 16) | 10)) is Event.MSG_RX
    assert midi.post(cc_message((103 << 16) | 20)) is Event.MSG_RX
    assert midi.process() == ControlChange(0, 102, 10)
    assert sent == [ControlChange(0, 102, 10)]
    midi.process()
    assert sent == [ControlChange(0, 102, 10), ControlChange(0, 103, 20)]
    assert midi.process() is None


def test_ignores_other_sources_and_events():
    sent = []
    midi = UsbMidiTransceiver(sent.append)
    midi.post(cc_message(5, src=Node.UI_MGR))
    midi.post(EventMessage(Node.SYS_CTRL, Node.USB_MIDI, Event.UI_DISPLAY_UPDATE, 5))
    assert midi.process() is None
    assert midi.process() is None
    assert sent == []


def test_queue_full_rejects():
    midi = UsbMidiTransceiver(lambda change: None)
    results = [midi.post(cc_message(i)) for i in range(DEFAULT_QUEUE_CAPACITY + 1)]
    assert results[:-1] == [Event.MSG_RX] * DEFAULT_QUEUE_CAPACITY
    assert results[-1] is Event.MSG_RX_FAIL