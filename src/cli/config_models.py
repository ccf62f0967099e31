"""Pydantic configuration models for howdy."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class PathsConfig(BaseModel):
    """File paths configuration."""

    journal_file: Path = Path("~/.howdy/howdy.journal")
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.journal_file = self.journal_file.expanduser()
        if self.log_file is not None:
            self.log_file = self.log_file.expanduser()
        return self


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class MoodConfig(BaseModel):
    """Mood report defaults."""

    default_tags: list[str] = Field(default_factory=list)


class PlotConfig(BaseModel):
    """Chart rendering options."""

    title: str = "30-days moving cumulative mood"
    date_format: str = "%d/%m/%Y"
    width: float = 10.0
    height: float = 5.0
    dpi: int = 100

    @field_validator("width", "height")
    @classmethod
    def validate_size(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Plot size must be positive, got {v}")
        return v

    @field_validator("dpi")
    @classmethod
    def validate_dpi(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"dpi must be positive, got {v}")
        return v


class ExportConfig(BaseModel):
    """Spreadsheet export options."""

    sheet_name: str = "Daily Scores"

    @field_validator("sheet_name")
    @classmethod
    def validate_sheet_name(cls, v: str) -> str:
        # Excel limits sheet titles to 31 chars
        if not v or len(v) > 31:
            raise ValueError(f"sheet_name must be 1-31 characters, got {v!r}")
        return v


class HowdyConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    mood: MoodConfig = Field(default_factory=MoodConfig)
    plot: PlotConfig = Field(default_factory=PlotConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "HowdyConfig":
        """Create config from dict."""
        if "paths" in data:
            for key in ["journal_file", "log_file"]:
                if isinstance(data["paths"].get(key), str):
                    data["paths"][key] = Path(data["paths"][key])

        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
