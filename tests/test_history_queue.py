from __future__ import annotations

import pytest

from rundo_engine.errors import InvalidConfiguration
from rundo_engine.history import (
    BoundedHistoryQueue,
    HistorySnapshot,
    TextDelta,
    compute_delta,
)


def make_deltas(count: int) -> list[TextDelta]:
    # Each delta appends one distinct character to a growing text.
    return [compute_delta("x" * index, "x" * index + str(index)) for index in range(count)]


def test_push_beyond_capacity_keeps_most_recent() -> None:
    queue = BoundedHistoryQueue(3)
    deltas = make_deltas(5)

    for delta in deltas:
        queue.push_front(delta)

    assert len(queue) == 3
    assert queue.is_full
    assert queue.to_list() == [deltas[4], deltas[3], deltas[2]]


def test_pop_and_peek_on_empty_return_none() -> None:
    queue = BoundedHistoryQueue(2)

    assert queue.pop_front() is None
    assert queue.peek_front() is None
    assert not queue


def test_pop_front_returns_most_recent_first() -> None:
    queue = BoundedHistoryQueue(4)
    first, second = make_deltas(2)
    queue.push_front(first)
    queue.push_front(second)

    assert queue.peek_front() == second
    assert queue.pop_front() == second
    assert queue.pop_front() == first
    assert queue.pop_front() is None


def test_set_capacity_discards_contents() -> None:
    queue = BoundedHistoryQueue(2)
    for delta in make_deltas(2):
        queue.push_front(delta)

    queue.set_capacity(5)

    assert queue.capacity == 5
    assert len(queue) == 0


@pytest.mark.parametrize("capacity", [0, -1, True, "3"])
def test_invalid_capacity_is_rejected(capacity: object) -> None:
    with pytest.raises(InvalidConfiguration):
        BoundedHistoryQueue(capacity)  # type: ignore[arg-type]

    queue = BoundedHistoryQueue(2)
    with pytest.raises(InvalidConfiguration):
        queue.set_capacity(capacity)  # type: ignore[arg-type]
    assert queue.capacity == 2


def test_extend_back_stops_at_capacity() -> None:
    queue = BoundedHistoryQueue(2)
    newest, older, oldest = make_deltas(3)

    queue.extend_back([newest, older, oldest])

    assert queue.to_list() == [newest, older]


def test_snapshot_round_trips_through_plain_data() -> None:
    undo = BoundedHistoryQueue(3)
    redo = BoundedHistoryQueue(3)
    a, b, c = make_deltas(3)
    undo.push_front(a)
    undo.push_front(b)
    redo.push_front(c)

    snapshot = HistorySnapshot.capture(undo, redo)
    data = snapshot.to_dict()

    assert data["version"] == 1
    assert data["capacity"] == 3
    assert [item["start"] for item in data["undo"]] == [1, 0]
    assert HistorySnapshot.from_dict(data) == snapshot


def test_snapshot_rejects_unknown_version() -> None:
    with pytest.raises(ValueError):
        HistorySnapshot.from_dict({"version": 99, "capacity": 1})
    with pytest.raises(InvalidConfiguration):
        HistorySnapshot.from_dict({"capacity": 0})
