"""Random streams — the four draws that drive arrivals, service and breakdowns."""

import math
import random
from abc import ABC, abstractmethod
from collections import deque
from typing import Iterable

from factory_sim.config import Parameters
from factory_sim.errors import ConfigurationError


class StreamSet(ABC):
    """Source of the four durations the transition engine asks for."""

    @abstractmethod
    def next_interarrival_gap(self) -> float:
        ...

    @abstractmethod
    def next_service_duration(self) -> float:
        ...

    @abstractmethod
    def next_interbreakdown_gap(self) -> float:
        ...

    @abstractmethod
    def next_repair_duration(self) -> float:
        ...


class RandomStreamSet(StreamSet):
    """One seeded generator shared by all draws.

    Draws consume the generator in call order, so the same seed and the same
    sequence of calls reproduce the same values. Service time is not random:
    it is always the configured construction mean.
    """

    def __init__(
        self,
        seed: int,
        mean_interarrival_time: float,
        mean_construction_time: float,
        mean_interbreakdown_time: float,
        mean_repair_time: float,
    ):
        means = {
            "mean_interarrival_time": mean_interarrival_time,
            "mean_construction_time": mean_construction_time,
            "mean_interbreakdown_time": mean_interbreakdown_time,
            "mean_repair_time": mean_repair_time,
        }
        for name, value in means.items():
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive and finite, got {value}")

        self.seed = seed
        self.rng = random.Random(seed)
        self.mean_interarrival_time = mean_interarrival_time
        self.mean_construction_time = mean_construction_time
        self.mean_interbreakdown_time = mean_interbreakdown_time
        self.mean_repair_time = mean_repair_time

    @classmethod
    def from_parameters(cls, params: Parameters) -> "RandomStreamSet":
        return cls(
            seed=params.seed,
            mean_interarrival_time=params.mean_interarrival_time,
            mean_construction_time=params.mean_construction_time,
            mean_interbreakdown_time=params.mean_interbreakdown_time,
            mean_repair_time=params.mean_repair_time,
        )

    def _exponential(self, mean: float) -> float:
        return self.rng.expovariate(1.0 / mean)

    def next_interarrival_gap(self) -> float:
        return self._exponential(self.mean_interarrival_time)

    def next_service_duration(self) -> float:
        return self.mean_construction_time

    def next_interbreakdown_gap(self) -> float:
        return self._exponential(self.mean_interbreakdown_time)

    def next_repair_duration(self) -> float:
        return self._exponential(self.mean_repair_time)

    def __repr__(self) -> str:
        return f"RandomStreamSet(seed={self.seed})"


class ScriptedStreamSet(StreamSet):
    """Replays fixed sequences of draws, for deterministic scenarios.

    Each stream is consumed front to back; once a stream is exhausted its
    ``default`` is returned if one was given, otherwise it raises.

    Usage:
        streams = ScriptedStreamSet(interarrival=[2.0, 50.0], service=[4.0],
                                    repair=[5.0], interbreakdown_default=1e9)
    """

    def __init__(
        self,
        interarrival: Iterable[float] = (),
        service: Iterable[float] = (),
        interbreakdown: Iterable[float] = (),
        repair: Iterable[float] = (),
        interarrival_default: float | None = None,
        service_default: float | None = None,
        interbreakdown_default: float | None = None,
        repair_default: float | None = None,
    ):
        self._streams: dict[str, deque[float]] = {
            "interarrival": deque(interarrival),
            "service": deque(service),
            "interbreakdown": deque(interbreakdown),
            "repair": deque(repair),
        }
        self._defaults: dict[str, float | None] = {
            "interarrival": interarrival_default,
            "service": service_default,
            "interbreakdown": interbreakdown_default,
            "repair": repair_default,
        }
        self.calls: list[str] = []

    def _draw(self, name: str) -> float:
        self.calls.append(name)
        stream = self._streams[name]
        if stream:
            return stream.popleft()
        default = self._defaults[name]
        if default is None:
            raise LookupError(f"Scripted {name} stream is exhausted")
        return default

    def next_interarrival_gap(self) -> float:
        return self._draw("interarrival")

    def next_service_duration(self) -> float:
        return self._draw("service")

    def next_interbreakdown_gap(self) -> float:
        return self._draw("interbreakdown")

    def next_repair_duration(self) -> float:
        return self._draw("repair")
