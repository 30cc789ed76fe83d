"""Simulation parameters — one validated set per replication."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from factory_sim.errors import ConfigurationError

DEFAULT_INITIAL_BREAKDOWN_TIME = 150.0


class Parameters(BaseModel):
    """Seed, horizon and the four distribution means of one simulation run."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    seed: int = Field(ge=0, description="Seed for the run's random streams")
    time_limit: float = Field(gt=0, description="Simulation horizon")
    mean_interarrival_time: float = Field(gt=0, description="Mean gap between order arrivals")
    mean_construction_time: float = Field(gt=0, description="Fixed blade-fitting (service) duration")
    mean_interbreakdown_time: float = Field(gt=0, description="Mean gap between machine repair and next breakdown")
    mean_repair_time: float = Field(gt=0, description="Mean machine repair duration")
    initial_breakdown_time: float = Field(
        default=DEFAULT_INITIAL_BREAKDOWN_TIME,
        ge=0,
        description="When the first breakdown is scheduled",
    )

    def with_overrides(self, **changes) -> "Parameters":
        """Copy with some fields replaced, re-validated."""
        return load_parameters(**{**self.model_dump(), **changes})

    def __repr__(self) -> str:
        return (
            f"Parameters(seed={self.seed}, T={self.time_limit}, "
            f"arrival={self.mean_interarrival_time}, "
            f"construction={self.mean_construction_time}, "
            f"breakdown={self.mean_interbreakdown_time}, "
            f"repair={self.mean_repair_time})"
        )


def load_parameters(**values) -> Parameters:
    """Build Parameters, surfacing validation failures as ConfigurationError."""
    try:
        return Parameters(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid simulation parameters: {exc}") from exc
