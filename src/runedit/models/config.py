"""Config model for runedit"""

from pathlib import Path
from pydantic import BaseModel, field_validator

from runedit.models.run import TimingMethod


RUN_FILE_PATTERN = "*.run.yaml"


class EditorConfig(BaseModel):
    """Configuration for runedit - stored in .runedit/config.yaml"""

    folder: str
    log_level: str = "INFO"
    default_timing_method: TimingMethod = TimingMethod.REAL_TIME

    @field_validator("folder")
    @classmethod
    def validate_folder(cls, v: str) -> str:
        """Ensure folder is an absolute path"""
        path = Path(v)
        if not path.is_absolute():
            raise ValueError(f"folder must be an absolute path, got: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def folder_path(self) -> Path:
        """Get folder as Path object"""
        return Path(self.folder)

    def get_run_files(self) -> list[Path]:
        """Get all run files in the configured folder (non-recursive)"""
        folder = self.folder_path
        if not folder.exists():
            return []
        return sorted(folder.glob(RUN_FILE_PATTERN))
