"""Per-directory settings in .runedit/config.yaml"""

from pathlib import Path
from typing import Optional

from runedit.core.yaml_io import read_model, write_model
from runedit.models.config import EditorConfig
from runedit.models.run import TimingMethod


CONFIG_DIR = Path(".runedit")
CONFIG_FILE = CONFIG_DIR / "config.yaml"


class ConfigNotFoundError(Exception):
    pass


class ConfigInvalidError(Exception):
    pass


def load_config() -> EditorConfig:
    """Load the config from the current directory

    Raises:
        ConfigNotFoundError: If there is no config file
        ConfigInvalidError: If the file isn't a valid config
    """
    if not CONFIG_FILE.exists():
        raise ConfigNotFoundError(
            f"Config file not found at {CONFIG_FILE}\n"
            f"Run 'runedit init' to create one."
        )
    return read_model(CONFIG_FILE, EditorConfig, ConfigInvalidError, "config file")


def load_config_or_none() -> Optional[EditorConfig]:
    """Config if one exists and is valid; commands that work without one use this"""
    try:
        return load_config()
    except (ConfigNotFoundError, ConfigInvalidError):
        return None


def save_config(config: EditorConfig) -> Path:
    return write_model(CONFIG_FILE, config)


def create_config(
    folder: str,
    log_level: str = "INFO",
    default_timing_method: TimingMethod = TimingMethod.REAL_TIME,
) -> EditorConfig:
    """Validate and save a new config

    Raises:
        ConfigInvalidError: If a setting is rejected, e.g. a relative folder
    """
    try:
        config = EditorConfig(
            folder=folder,
            log_level=log_level,
            default_timing_method=default_timing_method,
        )
    except ValueError as e:
        raise ConfigInvalidError(f"Invalid config: {e}")
    save_config(config)
    return config
