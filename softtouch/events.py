"""Node identifiers, event kinds and the bounded message queues between subsystems."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

VERSION = (0, 0, 1)
VERSION_INFO = "Soft Touch v0.0.1"

DEFAULT_QUEUE_CAPACITY = 8


class Node(IntEnum):
    """Subsystems that send and receive event messages."""

    NONE = 0
    DEV_CLI = 1
    UI_MGR = 2
    USB_MIDI = 3
    SYS_CTRL = 4


class Event(IntEnum):
    """Kinds of event carried by a message, plus the posting outcomes."""

    INVALID = 0
    MSG_RX = 1
    MSG_RX_FAIL = 2
    DEV_CLI_DISPLAY_TEST = 3
    SYS_CTRL_UPDATE_TARGET_CC = 4
    SYS_CTRL_UPDATE_TARGET_CTRL_VAL = 5
    SYS_CTRL_LOAD_MAPPING = 6
    USB_MIDI_CC_MSG_TO_HOST = 7
    UI_DISPLAY_UPDATE = 8


class EncoderId(IntEnum):
    MAIN_ENCODER = 0


class ButtonId(IntEnum):
    BOARD_SW_LH = 0
    BOARD_SW_RH = 1
    ENCODER_SW = 2


class LightId(IntEnum):
    BOARD_GREEN_LED = 0
    BOARD_RED_LED = 1


class DisplayId(IntEnum):
    KL46Z_SEGMENT_LCD = 0


@dataclass(frozen=True)
class EventMessage:
    """A message from one node to another carrying an event and a packed value."""

    src: Node
    dst: Node
    event: Event
    value: int = 0


class EventQueue:
    """A first-in first-out queue of messages that refuses new ones when full."""

    def __init__(self, capacity: int = DEFAULT_QUEUE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("queue capacity must be positive")
        self.capacity = capacity
        self._items: deque[EventMessage] = deque()

    def post(self, message: EventMessage) -> Event:
        """Queue a message; report MSG_RX on success and MSG_RX_FAIL when full."""
        if self.full():
            return Event.MSG_RX_FAIL
        self._items.append(message)
        return Event.MSG_RX

    def pop(self) -> EventMessage:
        """Remove and return the oldest message; IndexError when empty."""
        if not self._items:
            raise IndexError("pop from an empty event queue")
        return self._items.popleft()

    def full(self) -> bool:
        return len(self._items) >= self.capacity

    def empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)