# softtouch

A soft-touch MIDI controller modelled in Python. A rotary encoder steps the
value of a MIDI control-change target between 0 and 127. Holding the left
switch enters a setup mode in which the encoder picks one of eight mappings;
letting go returns to control mode. A four-digit seven-segment LCD model shows
the current mapping number and its value in hexadecimal, and a small
line-oriented console answers a few commands.

## Parts

- `softtouch.events`: the `Node`, `Event` and id enums, `EventMessage`, and
  `EventQueue`, a bounded first-in first-out queue (eight messages by default)
  whose `post` returns `Event.MSG_RX` or `Event.MSG_RX_FAIL`.
- `softtouch.console`: `Console` with the commands `;` (comment), `help`,
  `ver` and `int`, plus the parsing helpers `command_end_line`,
  `command_match`, `find_param`, `receive_param_int8`, `int_to_hex_char` and
  `hex_char_to_int`. Failures raise `CommandError`.
- `softtouch.segments`: pin ordering for the two board revisions
  (`HardwareConfig`, `ordering_table`) and the two-byte `glyph` of each
  displayable character.
- `softtouch.slcd`: `SegmentLcd`, an in-memory model of the LCD controller's
  waveform registers, and `SoftTouchLcd`, which writes bytes as pairs of hex
  digits at a `Position`.
- `softtouch.drivers`: a debounced `Button` that reports holds and releases to
  the current mode, an `Encoder` that turns pulse counts into steps of +1 or -1,
  and an active-low `Led`.
- `softtouch.midi`: `UsbMidiTransceiver`, which turns queued messages into
  `ControlChange` values for a send callback; `ControlChange.to_bytes()` gives
  the three bytes of the message.
- `softtouch.mapping` and `softtouch.system`: `SysCtrlMapping` targets and the
  `SystemController`, which starts with eight mappings on channel 0 aimed at
  controllers 102 to 109, each at value 63.
- `softtouch.ui`: `Ui` with its `UiCtrlState` and `UiCfgState` modes.
- `softtouch.app`: `SoftTouch`, which wires everything together, and `main`.

## Install

```
pip install .
```

## Run

```
softtouch
```

This starts the controller with its console on standard input and output.
Each line read is echoed and handled; type `help` for the list of commands and
`ver` for the version string. Outgoing control changes are printed as
`MIDI` followed by their bytes in hex.

## Use from Python

```python
import sys

from softtouch.app import SoftTouch

sent = []
device = SoftTouch(write=sys.stdout.write, midi_send=sent.append)
device.console.receive("ver\r")
device.tick()   # fast tick; buttons and encoder are polled every eighth tick
device.step()   # one pass of the main loop: system, console, MIDI, interface
```

Each call to `step` handles at most one queued message per subsystem, while
the console runs every complete line it holds. Outgoing MIDI control changes
reach `midi_send` as `ControlChange` values; without a `midi_send` they are
collected in `device.sent_midi`.

## What it does not do

There is no real hardware here. The buttons and encoder are read through
callbacks given to `Ui` (by default they read as idle), the LCD exists only as
register contents in `SoftTouchLcd`, and MIDI goes to a callback rather than a
USB device. Messages coming from a MIDI host are not read or acted on.

## Tests

```
pip install .[test]
pytest
```