"""Logging setup - the TUI owns the terminal, so logs go to a file"""

import logging
from pathlib import Path

from runedit.core.config import CONFIG_DIR


LOG_FILE = CONFIG_DIR / "runedit.log"


def setup_logging(level: str = "INFO", log_file: Path = LOG_FILE) -> Path:
    """Send log records of every runedit module to ``log_file``"""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return log_file
