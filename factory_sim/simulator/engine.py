"""Simulation driver — initialisation and the main event loop."""

import logging
from typing import Callable, Optional

from factory_sim.config import Parameters
from factory_sim.errors import ConfigurationError
from factory_sim.models.job import Job
from factory_sim.simulator.events import EventType
from factory_sim.simulator.state import StateSnapshot, SystemState
from factory_sim.simulator.streams import RandomStreamSet, StreamSet
from factory_sim.simulator.transitions import TransitionEngine

logger = logging.getLogger(__name__)

EventObserver = Callable[[StateSnapshot], None]
JobObserver = Callable[[Job], None]


def initialise(
    params: Parameters,
    initial_breakdown_time: Optional[float] = None,
) -> tuple[SystemState, RandomStreamSet]:
    """Fresh state and streams with the first arrival and first breakdown queued.

    The first arrival is at t=0; the first breakdown at
    ``params.initial_breakdown_time`` unless overridden here.
    """
    if initial_breakdown_time is None:
        initial_breakdown_time = params.initial_breakdown_time
    if initial_breakdown_time < 0:
        raise ConfigurationError(f"initial_breakdown_time must be non-negative, got {initial_breakdown_time}")

    streams = RandomStreamSet.from_parameters(params)
    state = SystemState()
    state.schedule(EventType.ARRIVAL, 0.0)
    state.schedule(EventType.BREAKDOWN, initial_breakdown_time)
    return state, streams


class SimulationDriver:
    """Event-driven loop over one SystemState."""

    def __init__(self, state: SystemState, streams: StreamSet):
        self.state = state
        self.streams = streams
        self.transitions = TransitionEngine(state, streams)

    def run(
        self,
        time_limit: float,
        on_event_observed: Optional[EventObserver] = None,
        on_job_completed: Optional[JobObserver] = None,
        max_steps: Optional[int] = None,
    ) -> int:
        """Process events until the horizon (or ``max_steps``) is reached.

        The time of the next pending event decides termination: events at or
        before ``time_limit`` are processed, later ones stay queued and are
        dropped with the state. Returns the number of events processed.
        """
        if not time_limit > 0:
            raise ConfigurationError(f"time_limit must be positive, got {time_limit}")
        if max_steps is not None and max_steps < 0:
            raise ConfigurationError(f"max_steps must be non-negative, got {max_steps}")

        state = self.state
        steps = 0
        logger.info("Running simulation to t=%s from t=%s", time_limit, state.time)

        while state.time < time_limit:
            if max_steps is not None and steps >= max_steps:
                break
            if state.event_queue.peek().time > time_limit:
                break

            event, time = state.event_queue.extract_min()
            state.time = time
            state.n_events += 1

            if on_event_observed is not None:
                on_event_observed(state.snapshot(event))

            completed = self.transitions.update(event)

            if completed is not None and on_job_completed is not None:
                on_job_completed(completed)
            steps += 1

        logger.info(
            "Simulation stopped at t=%.3f after %d events (%d jobs arrived, %d completed)",
            state.time, steps, state.n_jobs, state.n_completed,
        )
        return steps


def run(
    state: SystemState,
    streams: StreamSet,
    time_limit: float,
    on_event_observed: Optional[EventObserver] = None,
    on_job_completed: Optional[JobObserver] = None,
    max_steps: Optional[int] = None,
) -> int:
    """Run the main loop on an initialised state; see SimulationDriver.run."""
    driver = SimulationDriver(state, streams)
    return driver.run(
        time_limit,
        on_event_observed=on_event_observed,
        on_job_completed=on_job_completed,
        max_steps=max_steps,
    )
