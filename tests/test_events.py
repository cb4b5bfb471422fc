import pytest

from softtouch.events import (
    DEFAULT_QUEUE_CAPACITY,
    Event,
    EventMessage,
    EventQueue,
    Node,
)


def _message(value):
    return EventMessage(Node.UI_MGR, Node.SYS_CTRL, Event.SYS_CTRL_LOAD_MAPPING, value)


def test_post_accepts_until_full():
    queue = EventQueue()
    results = [queue.post(_message(i)) for i in range(DEFAULT_QUEUE_CAPACITY)]
    assert results == [Event.MSG_RX] * DEFAULT_QUEUE_CAPACITY
    assert queue.full()
    assert queue.post(_message(99)) == Event.MSG_RX_FAIL
    assert len(queue) == DEFAULT_QUEUE_CAPACITY


def test_default_capacity_matches_source():
    assert EventQueue().capacity == 8


def test_pop_is_first_in_first_out():
    queue = EventQueue(4)
    for value in (3, 1, 2):
        queue.post(_message(value))
    assert [queue.pop().value for _ in range(3)] == [3, 1, 2]
    assert queue.empty()


def test_pop_empty_raises():
    queue = EventQueue(2)
    with pytest.raises(IndexError):
        queue.pop()


def test_rejected_message_is_not_stored():
    queue = EventQueue(1)
    queue.post(_message(1))
    queue.post(_message(2))
    assert queue.pop().value == 1
    assert len(queue) == 0


def test_space_frees_after_pop():
    queue = EventQueue(1)
    queue.post(_message(1))
    queue.pop()
    assert queue.post(_message(2)) == Event.MSG_RX
    assert queue.pop() == _message(2)


def test_invalid_capacity():
    with pytest.raises(ValueError):
        EventQueue(0)


def test_message_defaults_and_equality():
    message = EventMessage(Node.SYS_CTRL, Node.UI_MGR, Event.UI_DISPLAY_UPDATE)
    assert message.value == 0
    assert message == EventMessage(Node.SYS_CTRL, Node.UI_MGR, Event.UI_DISPLAY_UPDATE, 0)