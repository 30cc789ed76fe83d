"""Transition engine — the four event handlers of the production line."""

import logging
from typing import Optional

from factory_sim.errors import DomainError
from factory_sim.models.job import Job
from factory_sim.models.server import ServerStatus
from factory_sim.simulator.events import Event, EventType, completes_job
from factory_sim.simulator.state import SystemState
from factory_sim.simulator.streams import StreamSet

logger = logging.getLogger(__name__)


class TransitionEngine:
    """Applies one event to the system state.

    Each handler mutates ``state``, schedules follow-up events using draws
    from ``streams``, and returns the job that left the system, if any.
    """

    def __init__(self, state: SystemState, streams: StreamSet):
        self.state = state
        self.streams = streams

    def update(self, event: Event) -> Optional[Job]:
        match event.event_type:
            case EventType.ARRIVAL:
                return self._handle_arrival(event)
            case EventType.COMPLETION:
                return self._handle_completion(event)
            case EventType.BREAKDOWN:
                return self._handle_breakdown(event)
            case EventType.RESUME:
                return self._handle_resume(event)
        raise DomainError(f"Invalid event type: {event.event_type!r}")

    # ── Event Handlers ────────────────────────────────────────────────

    def _handle_arrival(self, event: Event) -> None:
        """New order joins the production line; the next arrival is scheduled."""
        state = self.state
        state.n_jobs += 1
        state.waiting.append(Job(id=state.n_jobs, arrival_time=event.time))

        state.schedule(EventType.ARRIVAL, state.time + self.streams.next_interarrival_gap())

        if state.machine_available:
            self._start_next_job()
        return None

    def _handle_completion(self, event: Event) -> Job:
        """The machine finishes its job and immediately takes the next one."""
        state = self.state
        finished = state.in_service.popleft()

        if state.waiting:
            self._start_next_job()

        finished.complete(state.time)
        state.n_completed += 1
        return finished

    def _handle_breakdown(self, event: Event) -> None:
        """Machine stops; any job on it is delayed by the full repair time."""
        state = self.state
        state.server_status = ServerStatus.BROKEN_DOWN
        repair_duration = self.streams.next_repair_duration()
        state.schedule(EventType.RESUME, state.time + repair_duration)

        job = state.current_job
        if job is not None:
            job.interrupt(repair_duration)
            shifted = state.event_queue.update_matching(completes_job(job.id), repair_duration)
            logger.debug(
                "Breakdown at t=%.3f interrupts job %d (+%.3f, %d event(s) shifted)",
                state.time, job.id, repair_duration, shifted,
            )
        else:
            logger.debug("Breakdown at t=%.3f with idle machine (repair %.3f)", state.time, repair_duration)
        return None

    def _handle_resume(self, event: Event) -> None:
        """Machine repaired; the next breakdown is scheduled."""
        state = self.state
        state.server_status = ServerStatus.WORKING
        state.schedule(EventType.BREAKDOWN, state.time + self.streams.next_interbreakdown_gap())

        if not state.in_service and state.waiting:
            self._start_next_job()
        logger.debug("Machine resumes at t=%.3f", state.time)
        return None

    # ── Utilities ─────────────────────────────────────────────────────

    def _start_next_job(self) -> None:
        """Move the head of the production line onto the machine and schedule its completion."""
        state = self.state
        job = state.waiting.popleft()
        job.start_service(state.time)
        state.in_service.append(job)

        completion_time = state.time + self.streams.next_service_duration()
        state.schedule(EventType.COMPLETION, completion_time, job_id=job.id)
