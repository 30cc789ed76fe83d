"""Event types for the discrete event simulation."""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional


class EventType(str, Enum):
    """Types of events the transition engine processes."""
    ARRIVAL = "order_arrival"
    COMPLETION = "order_complete"
    BREAKDOWN = "machine_breakdown"
    RESUME = "machine_resume"


@dataclass(order=True)
class Event:
    """
    A single simulation event, ordered by time then event id.
    Fields with compare=False are excluded from ordering (only time + event_id matter).

    ``time`` stays mutable: a pending COMPLETION is pushed back when the
    machine breaks down mid-service. Only FutureEventSet may change it while
    the event is queued.
    """
    time: float
    event_id: int
    event_type: EventType = field(compare=False)
    job_id: Optional[int] = field(default=None, compare=False)

    @property
    def sort_key(self) -> tuple[float, int]:
        return (self.time, self.event_id)

    @property
    def label(self) -> str:
        return self.event_type.value

    def __repr__(self) -> str:
        parts = [f"Event(t={self.time:.2f}, id={self.event_id}, type={self.event_type.value}"]
        if self.job_id is not None:
            parts.append(f", job={self.job_id}")
        parts.append(")")
        return "".join(parts)


def is_completion(event: Event) -> bool:
    return event.event_type == EventType.COMPLETION


def completes_job(job_id: int):
    """Predicate matching the pending COMPLETION of one job."""
    def _matches(event: Event) -> bool:
        return event.event_type == EventType.COMPLETION and event.job_id == job_id
    return _matches
