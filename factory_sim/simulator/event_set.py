"""Future event set — an indexed binary min-heap of pending events.

Events are ordered by ``(time, event_id)``, so simultaneous events come out in
the order they were created. Unlike ``heapq`` the heap keeps an
``event_id → position`` index, which lets a pending event's time be shifted
in place and re-sifted:

- ``shift(event_id, delta)`` is O(log n).
- ``update_matching(predicate, delta)`` scans every pending event, O(n), then
  re-sifts each match, O(k log n). Fine for this workload (a handful of
  pending events), but it does not scale to large event sets.
"""

from typing import Callable, Iterator

from factory_sim.errors import EmptyQueueError
from factory_sim.simulator.events import Event


class FutureEventSet:
    """Min-priority collection of pending events keyed by time."""

    def __init__(self):
        self._heap: list[Event] = []
        self._position: dict[int, int] = {}

    # ── Queue operations ──────────────────────────────────────────────

    def insert(self, event: Event) -> None:
        """Add a pending event. Event ids must be unique within the set."""
        if event.event_id in self._position:
            raise ValueError(f"Event id {event.event_id} is already pending")
        self._heap.append(event)
        index = len(self._heap) - 1
        self._position[event.event_id] = index
        self._sift_up(index)

    def extract_min(self) -> tuple[Event, float]:
        """Remove and return the earliest event with its time."""
        if not self._heap:
            raise EmptyQueueError("Cannot extract from an empty future event set")
        earliest = self._heap[0]
        last = self._heap.pop()
        del self._position[earliest.event_id]
        if self._heap:
            self._heap[0] = last
            self._position[last.event_id] = 0
            self._sift_down(0)
        return earliest, earliest.time

    def peek(self) -> Event:
        """Return the earliest event without removing it."""
        if not self._heap:
            raise EmptyQueueError("Cannot peek into an empty future event set")
        return self._heap[0]

    def shift(self, event_id: int, delta: float) -> Event:
        """Move one pending event ``delta`` later (earlier if negative)."""
        try:
            index = self._position[event_id]
        except KeyError:
            raise KeyError(f"Event id {event_id} is not pending") from None
        event = self._heap[index]
        event.time += delta
        self._restore(index, delta)
        return event

    def update_matching(self, predicate: Callable[[Event], bool], delta: float) -> int:
        """Shift every pending event matching ``predicate`` by ``delta``.

        Returns the number of events moved.
        """
        matched = [event.event_id for event in self._heap if predicate(event)]
        for event_id in matched:
            self.shift(event_id, delta)
        return len(matched)

    # ── Introspection ─────────────────────────────────────────────────

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._position

    def __iter__(self) -> Iterator[Event]:
        """Pending events in heap (not time) order."""
        return iter(list(self._heap))

    def __repr__(self) -> str:
        head = self._heap[0] if self._heap else None
        return f"FutureEventSet(size={len(self._heap)}, next={head})"

    # ── Heap maintenance ──────────────────────────────────────────────

    def _restore(self, index: int, delta: float) -> None:
        if delta > 0:
            self._sift_down(index)
        elif delta < 0:
            self._sift_up(index)

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._position[heap[i].event_id] = i
        self._position[heap[j].event_id] = j

    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if heap[index].sort_key < heap[parent].sort_key:
                self._swap(index, parent)
                index = parent
            else:
                break

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            smallest = index
            for child in (2 * index + 1, 2 * index + 2):
                if child < size and heap[child].sort_key < heap[smallest].sort_key:
                    smallest = child
            if smallest == index:
                return
            self._swap(index, smallest)
            index = smallest
