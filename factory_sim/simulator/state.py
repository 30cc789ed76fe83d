"""System state — clock, counters, queues and machine status of one run."""

from collections import deque
from dataclasses import dataclass
from typing import Optional

from factory_sim.models.job import Job
from factory_sim.models.server import ServerStatus
from factory_sim.simulator.event_set import FutureEventSet
from factory_sim.simulator.events import Event, EventType


@dataclass(frozen=True)
class StateSnapshot:
    """Immutable view of the state recorded just before an event is handled."""
    time: float
    event_id: int
    event_type: EventType
    length_event_list: int
    length_queue: int
    in_service: int
    machine_status: ServerStatus

    def as_row(self) -> tuple:
        """State trace columns, in output order."""
        return (
            self.time,
            self.event_id,
            self.event_type.value,
            self.length_event_list,
            self.length_queue,
            self.in_service,
            self.machine_status.code,
        )


class SystemState:
    """Mutable state of a single simulation run.

    The ``in_service`` slot is a queue that holds at most one job; ``waiting``
    is the FIFO production line queue. A job lives in exactly one of them
    until it completes and is handed back to the caller.
    """

    def __init__(self):
        self.time: float = 0.0
        self.n_jobs: int = 0
        self.n_events: int = 0
        self.event_queue = FutureEventSet()
        self.waiting: deque[Job] = deque()
        self.in_service: deque[Job] = deque()
        self.server_status: ServerStatus = ServerStatus.WORKING
        self.n_completed: int = 0

    # ── Scheduling ────────────────────────────────────────────────────

    def next_event_id(self) -> int:
        """Monotonically increasing id, also the tie-break for equal times."""
        self.n_events += 1
        return self.n_events

    def schedule(self, event_type: EventType, time: float, job_id: Optional[int] = None) -> Event:
        """Create an event with a fresh id and add it to the future event set."""
        event = Event(
            time=time,
            event_id=self.next_event_id(),
            event_type=event_type,
            job_id=job_id,
        )
        self.event_queue.insert(event)
        return event

    # ── Queries ───────────────────────────────────────────────────────

    @property
    def machine_available(self) -> bool:
        """Working and not serving anyone."""
        return self.server_status == ServerStatus.WORKING and not self.in_service

    @property
    def current_job(self) -> Optional[Job]:
        return self.in_service[0] if self.in_service else None

    @property
    def jobs_in_system(self) -> int:
        return len(self.waiting) + len(self.in_service)

    def snapshot(self, event: Event) -> StateSnapshot:
        return StateSnapshot(
            time=self.time,
            event_id=event.event_id,
            event_type=event.event_type,
            length_event_list=len(self.event_queue),
            length_queue=len(self.waiting),
            in_service=len(self.in_service),
            machine_status=self.server_status,
        )

    def __repr__(self) -> str:
        return (
            f"SystemState(t={self.time:.2f}, jobs={self.n_jobs}, "
            f"waiting={len(self.waiting)}, in_service={len(self.in_service)}, "
            f"machine={self.server_status.value}, pending={len(self.event_queue)})"
        )
