"""Run file I/O - YAML storage for runs"""

from pathlib import Path

from runedit.core.yaml_io import read_model, write_model
from runedit.models.run import Run


RUN_FILE_SUFFIX = ".run.yaml"


class RunFileError(Exception):
    """Raised when a run file can't be read"""

    pass


def run_file_name(stem: str) -> str:
    """File name for a run called ``stem``"""
    return f"{stem}{RUN_FILE_SUFFIX}"


def run_display_name(path: Path) -> str:
    """Run file name without the .run.yaml suffix"""
    name = path.name
    if name.endswith(RUN_FILE_SUFFIX):
        return name[: -len(RUN_FILE_SUFFIX)]
    return path.stem


def load_run(path: Path) -> Run:
    """Load a run from a YAML file

    Raises:
        RunFileError: If the file is missing, not YAML, or not a valid run
    """
    if not path.exists():
        raise RunFileError(f"Run file not found: {path}")
    return read_model(path, Run, RunFileError, "run file")


def save_run(path: Path, run: Run) -> Path:
    return write_model(path, run)
