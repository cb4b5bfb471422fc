"""Wires the console, interface, system controller and MIDI link into one controller."""

from __future__ import annotations

import argparse
import sys
from typing import Callable

from softtouch.console import Console
from softtouch.midi import ControlChange, UsbMidiTransceiver
from softtouch.system import SystemController
from softtouch.ui import Ui

TICKS_PER_STEP = 8


class SoftTouch:
    """The whole controller: fast ticks poll the controls, steps run every subsystem once."""

    def __init__(
        self,
        write: Callable[[str], object] | None = None,
        midi_send: Callable[[ControlChange], object] | None = None,
    ) -> None:
        self.sent_midi: list[ControlChange] = []
        self.console = Console(write)
        self.ui = Ui()
        self.midi = UsbMidiTransceiver(midi_send if midi_send is not None else self.sent_midi.append)
        self.system = SystemController(self.midi, self.ui)
        self.ui.connect(self.system)
        self._tick_counter = 0
        self.console.init()
        self.ui.init()

    def tick(self) -> None:
        """One fast tick; the controls are polled on every eighth."""
        self._tick_counter = (self._tick_counter + 1) & 0xFF
        if self._tick_counter & 7 == 0:
            self.ui.poll()

    def step(self) -> None:
        """Let each subsystem handle its pending work once."""
        self.system.process()
        self.console.process()
        self.midi.process()
        self.ui.process()


def main(argv: list[str] | None = None) -> int:
    """Run the controller with the terminal as its console and MIDI shown as hex bytes."""
    parser = argparse.ArgumentParser(
        prog="softtouch",
        description="Run the Soft Touch controller with standard input as its console.",
    )
    parser.parse_args(argv)

    def send(change: ControlChange) -> None:
        sys.stdout.write(f"MIDI {change.to_bytes().hex(' ')}\r\n")

    app = SoftTouch(midi_send=send)
    for line in sys.stdin:
        app.console.receive(line)
        for _ in range(TICKS_PER_STEP):
            app.tick()
        app.step()
    sys.stdout.flush()
    return 0