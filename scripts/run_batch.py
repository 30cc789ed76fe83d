"""Run the simulation for every seed, horizon and parameter row.

Usage:
    python scripts/run_batch.py data/factory_simulation/parameter_set.csv --seeds 100
    python scripts/run_batch.py params.csv --seeds 10 --time-limits 100 1000 --output data/factory_simulation
"""

import argparse
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rich.console import Console
from rich.table import Table

from factory_sim.errors import ConfigurationError
from factory_sim.harness import run_batch
from factory_sim.params_io import iter_parameter_rows, read_parameter_table

console = Console()


def print_timings(perf_times, time_limits: list[float]) -> None:
    """Mean and max wall-clock seconds per horizon."""
    table = Table(title="Run Times (seconds)", border_style="green")
    table.add_column("Horizon", style="bold", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("Max", justify="right")
    for j, time_limit in enumerate(time_limits):
        column = perf_times[:, j]
        table.add_row(f"{time_limit:g}", f"{column.mean():.4f}", f"{column.max():.4f}")
    console.print(table)


def main():
    parser = argparse.ArgumentParser(
        description="Repeat the production line simulation across seeds and parameter sets"
    )
    parser.add_argument("parameters", type=str, help="Parameter table CSV ('#' lines are comments)")
    parser.add_argument("--seeds", type=int, default=100, help="Seeds 1..N (default: 100)")
    parser.add_argument(
        "--time-limits", type=float, nargs="+",
        default=[100.0, 1_000.0, 10_000.0, 100_000.0],
        help="Horizons to run (default: 100 1000 10000 100000)",
    )
    parser.add_argument("--output", type=str, default=None, help="Write CSV traces under this directory")
    parser.add_argument("--no-rerun", action="store_true", help="Skip runs whose output files exist")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (default: WARNING)")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        table = read_parameter_table(args.parameters)
        perf_times = run_batch(
            iter_parameter_rows(table),
            seeds=range(1, args.seeds + 1),
            time_limits=args.time_limits,
            output_root=args.output,
            rerun=not args.no_rerun,
        )
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        sys.exit(2)

    console.print(f"[bold]{len(table)}[/bold] parameter set(s) x [bold]{args.seeds}[/bold] seed(s)\n")
    print_timings(perf_times, args.time_limits)


if __name__ == "__main__":
    main()
