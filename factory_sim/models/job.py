"""Job model — a lawnmower order travelling through the production line."""

import math
from enum import Enum
from pydantic import BaseModel, Field


UNKNOWN_TIME = math.inf


class JobStatus(str, Enum):
    """Lifecycle states: WAITING → IN_SERVICE → COMPLETED"""
    WAITING = "waiting"
    IN_SERVICE = "in_service"
    COMPLETED = "completed"


class Job(BaseModel):
    """A unit of work served by the blade-fitting machine."""

    id: int = Field(gt=0, description="Unique id, assigned in arrival order from 1")
    arrival_time: float = Field(ge=0, description="When the order entered the production line")
    start_service_time: float = Field(default=UNKNOWN_TIME, description="When blade fitting began")
    completion_time: float = Field(default=UNKNOWN_TIME, description="When blade fitting finished")
    interrupted: bool = Field(default=False, description="Whether a breakdown paused its service")
    interruption_duration: float = Field(
        default=UNKNOWN_TIME,
        description="Total repair time added to its completion; inf until first interruption",
    )
    status: JobStatus = Field(default=JobStatus.WAITING, description="Current lifecycle state")

    @property
    def is_completed(self) -> bool:
        return self.status == JobStatus.COMPLETED

    @property
    def waiting_time(self) -> float:
        """Time spent in the production line queue (inf until service starts)."""
        return self.start_service_time - self.arrival_time

    def start_service(self, now: float) -> None:
        """Move the job onto the machine."""
        self.start_service_time = now
        self.status = JobStatus.IN_SERVICE

    def interrupt(self, repair_duration: float) -> None:
        """Record a breakdown that delays this job by repair_duration."""
        if not self.interrupted:
            self.interrupted = True
            self.interruption_duration = 0.0
        self.interruption_duration += repair_duration

    def complete(self, now: float) -> None:
        self.completion_time = now
        self.status = JobStatus.COMPLETED

    def as_row(self) -> tuple:
        """The six recorded fields, in output column order."""
        return (
            self.id,
            self.arrival_time,
            self.start_service_time,
            self.completion_time,
            int(self.interrupted),
            self.interruption_duration,
        )

    def __repr__(self) -> str:
        return (
            f"Job(id={self.id}, arrival={self.arrival_time:.2f}, "
            f"status={self.status.value}, interrupted={self.interrupted})"
        )
