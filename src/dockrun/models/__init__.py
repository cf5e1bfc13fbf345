"""Pydantic models for configuration and validation."""

from dockrun.models.config import DockrunConfig, Settings
from dockrun.models.run import RunSpec

__all__ = [
    "DockrunConfig",
    "Settings",
    "RunSpec",
]
