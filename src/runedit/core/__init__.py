"""Core functionality for runedit"""

from runedit.core.config import load_config, load_config_or_none, save_config, create_config
from runedit.core.logging_setup import setup_logging
from runedit.core.run_file import load_run, save_run, RunFileError

__all__ = [
    "load_config",
    "load_config_or_none",
    "save_config",
    "create_config",
    "setup_logging",
    "load_run",
    "save_run",
    "RunFileError",
]
