from factory_sim.simulator.events import Event, EventType
from factory_sim.simulator.event_set import FutureEventSet
from factory_sim.simulator.streams import StreamSet, RandomStreamSet, ScriptedStreamSet
from factory_sim.simulator.state import SystemState, StateSnapshot
from factory_sim.simulator.transitions import TransitionEngine
from factory_sim.simulator.engine import SimulationDriver, initialise, run

__all__ = [
    "Event", "EventType", "FutureEventSet",
    "StreamSet", "RandomStreamSet", "ScriptedStreamSet",
    "SystemState", "StateSnapshot", "TransitionEngine",
    "SimulationDriver", "initialise", "run",
]
