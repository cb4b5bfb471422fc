"""Line-oriented developer console with a small table of commands."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from softtouch.events import VERSION_INFO

PROMPT = "> "
LF = "\r\n"
PARAM_SEP = " "
NULL_CHAR = "\0"
CR_CHAR = "\r"
NL_CHAR = "\n"

MAX_LENGTH = 256
MAX_COMMAND_LENGTH = 10
INT8_MAX_STR_LENGTH = 5

BANNER = "JD's Soft Touch running on bare-metal Mbed OS\n"

_NAME_TERMINATORS = frozenset((PARAM_SEP, CR_CHAR, NL_CHAR, NULL_CHAR))
_PARAM_TERMINATORS = frozenset((PARAM_SEP, CR_CHAR, NL_CHAR))
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class CommandResult(IntEnum):
    SUCCESS = 0x00
    PARAMETER_ERROR = 0x10
    PARAMETER_END = 0x11
    ERROR = 0xFF


class CommandError(ValueError):
    """A command or one of its parameters could not be handled."""

    def __init__(self, result: CommandResult, message: str = "") -> None:
        super().__init__(message or result.name)
        self.result = result


@dataclass(frozen=True)
class Command:
    """A console command; an ``execute`` of None means the line is accepted and ignored."""

    name: str
    execute: Optional[Callable[[str], None]]
    help: str


def command_end_line(buffer: str) -> int | None:
    """Index of the first carriage return or newline, or None if there is none."""
    for index, char in enumerate(buffer):
        if char in (CR_CHAR, NL_CHAR):
            return index
    return None


def command_match(name: str, buffer: str) -> bool:
    """Whether the first word of the buffer selects the named command.

    The word may be a prefix of the name; only the first ten characters count.
    """
    if not buffer or not name or buffer[0] != name[0]:
        return False
    for index, char in enumerate(buffer[1:MAX_COMMAND_LENGTH], start=1):
        if char in _NAME_TERMINATORS:
            break
        if index >= len(name) or char != name[index]:
            return False
    return True


def find_param(buffer: str, param_number: int) -> int:
    """Start index of the given space-separated parameter within the command area."""
    if param_number == 0:
        return 0
    seen = 0
    window = buffer[:MAX_COMMAND_LENGTH].ljust(MAX_COMMAND_LENGTH, NULL_CHAR)
    for index, char in enumerate(window):
        if char == PARAM_SEP:
            seen += 1
            if seen == param_number:
                start = index + 1
                if start == MAX_COMMAND_LENGTH:
                    break
                return start
    raise CommandError(CommandResult.PARAMETER_ERROR, f"parameter {param_number} not found")


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def receive_param_int8(buffer: str, param_number: int) -> int:
    """Read the given parameter as a signed 8-bit integer, wrapping out-of-range values."""
    start = find_param(buffer, param_number)
    field = buffer[start:start + INT8_MAX_STR_LENGTH].ljust(INT8_MAX_STR_LENGTH, NULL_CHAR)
    for length, char in enumerate(field):
        if char in _PARAM_TERMINATORS:
            value = _atoi(field[:length])
            return ((value + 128) % 256) - 128
    raise CommandError(CommandResult.PARAMETER_ERROR, "parameter too long")


def int_to_hex_char(value: int) -> str:
    """Upper-case hex digit for a value from 0 to 15."""
    if 0 <= value <= 9:
        return chr(ord("0") + value)
    if 10 <= value <= 15:
        return chr(ord("A") + value - 10)
    raise CommandError(CommandResult.PARAMETER_ERROR, f"{value} is not a nibble")


def hex_char_to_int(char: str) -> int:
    """Value of a hex digit in either case."""
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "A" <= char <= "F":
        return 10 + ord(char) - ord("A")
    if "a" <= char <= "f":
        return 10 + ord(char) - ord("a")
    raise CommandError(CommandResult.PARAMETER_END, f"{char!r} is not a hex digit")


class Console:
    """Collects typed characters, echoes them and runs commands line by line."""

    def __init__(self, write: Callable[[str], object] | None = None) -> None:
        self._write = write if write is not None else sys.stdout.write
        self._buffer = ""
        self._commands = (
            Command(";", None,
                    "Comment! You do need a space after the semicolon. "),
            Command("help", self._command_help, "Lists the commands available"),
            Command("ver", self._command_ver, "Get the version string"),
            Command("int", self._command_int, "How to get a signed int from params"),
        )

    def init(self) -> None:
        """Print the banner and the first prompt and empty the input buffer."""
        self._send_line(BANNER)
        self._write(PROMPT)
        self._buffer = ""

    def receive(self, data: str) -> int:
        """Take characters from the terminal, echoing them; returns how many fitted."""
        accepted = data[:MAX_LENGTH - len(self._buffer)]
        if accepted:
            self._buffer += accepted
            self._write(accepted)
        return len(accepted)

    def process(self) -> int:
        """Run every complete line in the buffer; returns the number handled."""
        handled = 0
        while (end := command_end_line(self._buffer)) is not None:
            self._handle_line(end)
            handled += 1
        return handled

    def commands(self) -> tuple[Command, ...]:
        return self._commands

    def _handle_line(self, end: int) -> None:
        buffer = self._buffer
        self._write(LF)
        command = next((c for c in self._commands if command_match(c.name, buffer)), None)
        if command is not None:
            if command.execute is not None:
                try:
                    command.execute(buffer)
                except CommandError:
                    self._write("Error: ")
                    self._send_line(buffer)
                    self._write("Help: ")
                    self._send_line(command.help)
        elif end != 0 and len(buffer) > 2:
            self._send_line("Command not found.")
        self._buffer = buffer[end + 1:]
        self._write(PROMPT)

    def _send_line(self, text: str) -> None:
        self._write(text)
        self._write(LF)

    def _command_help(self, buffer: str) -> None:
        for command in self._commands:
            self._write(command.name)
            self._write(" : ")
            self._send_line(command.help)

    def _command_ver(self, buffer: str) -> None:
        self._send_line(VERSION_INFO)

    def _command_int(self, buffer: str) -> None:
        value = receive_param_int8(buffer, 1)
        byte = value & 0xFF
        self._write("Parameter is ")
        self._write(" (0x")
        self._write(int_to_hex_char(byte >> 4) + int_to_hex_char(byte & 0xF))
        self._write(")")
        self._write(LF)