"""Parameter tables — CSV files with one set of distribution means per row."""

from pathlib import Path
from typing import Iterator

import pandas as pd

from factory_sim.config import Parameters, load_parameters
from factory_sim.errors import ConfigurationError

MEAN_COLUMNS = (
    "mean_interarrival_time",
    "mean_construction_time",
    "mean_interbreakdown_time",
    "mean_repair_time",
)


def read_parameter_table(path: Path) -> pd.DataFrame:
    """Load a parameter CSV; lines starting with ``#`` are comments.

    An optional ``initial_breakdown_time`` column is carried through.
    """
    try:
        table = pd.read_csv(path, comment="#", skipinitialspace=True)
    except (FileNotFoundError, pd.errors.EmptyDataError) as exc:
        raise ConfigurationError(f"Cannot read parameter table {path}: {exc}") from exc

    table.columns = [str(c).strip() for c in table.columns]
    missing = [c for c in MEAN_COLUMNS if c not in table.columns]
    if missing:
        raise ConfigurationError(f"Parameter table {path} is missing columns: {', '.join(missing)}")
    if table.empty:
        raise ConfigurationError(f"Parameter table {path} has no rows")
    return table


def iter_parameter_rows(table: pd.DataFrame) -> Iterator[dict[str, float]]:
    """Yield each row as a dict of the means (plus initial_breakdown_time if present)."""
    columns = list(MEAN_COLUMNS)
    if "initial_breakdown_time" in table.columns:
        columns.append("initial_breakdown_time")
    for record in table[columns].to_dict(orient="records"):
        yield {name: float(value) for name, value in record.items()}


def parameters_for(row: dict[str, float], seed: int, time_limit: float) -> Parameters:
    """Combine a table row with a seed and a horizon."""
    return load_parameters(seed=seed, time_limit=time_limit, **row)
