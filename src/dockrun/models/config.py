"""Configuration models."""

from typing import Dict
from pydantic import BaseModel, Field, validator

from dockrun.models.run import RunSpec


class Settings(BaseModel):
    """Global settings."""
    log_level: str = Field(default="WARNING")
    docker_binary: str = Field(default="docker")

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class DockrunConfig(BaseModel):
    """Main configuration model."""
    settings: Settings = Field(default_factory=Settings)
    runs: Dict[str, RunSpec] = Field(default_factory=dict)

    class Config:
        """Pydantic config."""
        extra = "ignore"
