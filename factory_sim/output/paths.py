"""Output file layout: ``<root>/seed<seed>/BDtime<mean_interbreakdown_time>/``."""

from pathlib import Path

ENTITIES_FILE = "entities.csv"
STATE_FILE = "state.csv"


def output_dir(root: Path, seed: int, mean_interbreakdown_time: float) -> Path:
    return Path(root) / f"seed{seed}" / f"BDtime{mean_interbreakdown_time}"


def output_paths(
    root: Path,
    seed: int,
    mean_interbreakdown_time: float,
    create: bool = True,
) -> tuple[Path, Path]:
    """Return ``(entities_path, state_path)`` for one run, creating the directory."""
    directory = output_dir(root, seed, mean_interbreakdown_time)
    if create:
        directory.mkdir(parents=True, exist_ok=True)
    return directory / ENTITIES_FILE, directory / STATE_FILE


def outputs_exist(entities_path: Path, state_path: Path) -> bool:
    return Path(entities_path).is_file() and Path(state_path).is_file()
