"""Trace sinks — where processed events and completed jobs are reported.

Sinks receive calls in exactly the order events are processed, so a trace can
be replayed or compared row by row.
"""

import csv
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from factory_sim.config import Parameters
from factory_sim.models.job import Job
from factory_sim.simulator.state import StateSnapshot

STATE_HEADER = (
    "time", "event_id", "event_type", "length_event_list",
    "length_queue", "in_service", "machine_status",
)
ENTITY_HEADER = (
    "id", "arrival_time", "start_service_time", "completion_time",
    "interrupted", "interruption_duration",
)


class TraceSink(ABC):
    """Receives the event trace and completed jobs of one run."""

    @abstractmethod
    def record_event(self, snapshot: StateSnapshot) -> None:
        ...

    @abstractmethod
    def record_job(self, job: Job) -> None:
        ...

    def close(self) -> None:
        pass


class TraceRecorder(TraceSink):
    """Keeps the whole trace in memory."""

    def __init__(self):
        self.events: list[StateSnapshot] = []
        self.jobs: list[Job] = []

    def record_event(self, snapshot: StateSnapshot) -> None:
        self.events.append(snapshot)

    def record_job(self, job: Job) -> None:
        self.jobs.append(job)

    def event_rows(self) -> list[tuple]:
        return [snapshot.as_row() for snapshot in self.events]

    def job_rows(self) -> list[tuple]:
        return [job.as_row() for job in self.jobs]


class CsvTraceWriter(TraceSink):
    """Writes ``state.csv`` and ``entities.csv`` style files.

    Both files open with ``#`` comment lines (creator, creation time and one
    line per parameter) followed by a header row.

    Usage:
        with CsvTraceWriter(entities_path, state_path, params) as writer:
            run_factory_simulation(params, sink=writer)
    """

    def __init__(
        self,
        entities_path: Path,
        state_path: Path,
        params: Optional[Parameters] = None,
        created_by: str = "factory_sim",
    ):
        self.entities_path = Path(entities_path)
        self.state_path = Path(state_path)
        self._entities_file: TextIO = open(self.entities_path, "w", newline="")
        self._state_file: TextIO = open(self.state_path, "w", newline="")

        for fid in (self._entities_file, self._state_file):
            self._write_metadata(fid, created_by)
            if params is not None:
                self._write_parameters(fid, params)

        self._entities = csv.writer(self._entities_file)
        self._state = csv.writer(self._state_file)
        self._entities.writerow(ENTITY_HEADER)
        self._state.writerow(STATE_HEADER)

    @staticmethod
    def _write_metadata(fid: TextIO, created_by: str) -> None:
        fid.write(f"# file created by code in {created_by}\n")
        fid.write(f"# file created on {datetime.now():%Y-%m-%d at %H:%M:%S}\n")

    @staticmethod
    def _write_parameters(fid: TextIO, params: Parameters) -> None:
        for name, value in params.model_dump().items():
            fid.write(f"# parameter {name} = {value}\n")

    def record_event(self, snapshot: StateSnapshot) -> None:
        self._state.writerow(snapshot.as_row())

    def record_job(self, job: Job) -> None:
        self._entities.writerow(job.as_row())

    def close(self) -> None:
        self._entities_file.close()
        self._state_file.close()

    def __enter__(self) -> "CsvTraceWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
