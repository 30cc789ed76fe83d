"""factory_sim: discrete-event simulation of a single-machine production line with breakdowns."""

from factory_sim.config import Parameters, load_parameters
from factory_sim.errors import ConfigurationError, DomainError, EmptyQueueError, FactorySimError
from factory_sim.models import Job, JobStatus, ServerStatus
from factory_sim.simulator import (
    Event,
    EventType,
    FutureEventSet,
    RandomStreamSet,
    SimulationDriver,
    StateSnapshot,
    SystemState,
    TransitionEngine,
    initialise,
    run,
)

__version__ = "0.1.0"
__all__ = [
    "Parameters", "load_parameters",
    "FactorySimError", "ConfigurationError", "DomainError", "EmptyQueueError",
    "Job", "JobStatus", "ServerStatus",
    "Event", "EventType", "FutureEventSet", "RandomStreamSet",
    "SimulationDriver", "StateSnapshot", "SystemState", "TransitionEngine",
    "initialise", "run",
]
