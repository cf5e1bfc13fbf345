"""Run specification model."""

import os
from pathlib import PurePath
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, validator


def _scalar_to_str(value: Any) -> Any:
    """Render YAML numbers and booleans as the text they were written as.

    Null is rejected rather than becoming the string ``None``. Anything else
    is left for field validation to accept or reject.
    """
    if value is None:
        raise ValueError("null is not a valid value")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class RunSpec(BaseModel):
    """Declarative description of one ``docker run`` invocation."""
    image: str = Field(..., description="Image to run")
    help: Optional[str] = Field(None, description="Human readable description")

    # Accepted for compatibility, never rendered to flags
    interactive: Optional[bool] = None
    tty: Optional[bool] = None

    command: Optional[List[str]] = None
    entrypoint: Optional[str] = None
    envs: Optional[Dict[str, str]] = None
    # Kept as text so the path is interpolated exactly as written
    env_file: Optional[str] = None
    network: Optional[str] = None
    ports: Optional[List[str]] = None
    volumes: Optional[List[str]] = None
    user: Optional[str] = None
    extra_flags: Optional[List[str]] = None

    @validator("envs", pre=True)
    def stringify_env_values(cls, v):
        """Allow YAML scalars such as ``PORT: 8080`` as env values."""
        if isinstance(v, dict):
            return {str(key): _scalar_to_str(value) for key, value in v.items()}
        return v

    @validator("command", "ports", "volumes", "extra_flags", pre=True)
    def stringify_items(cls, v):
        """Allow bare numbers in list fields."""
        if isinstance(v, list):
            return [_scalar_to_str(item) for item in v]
        return v

    @validator("env_file", pre=True)
    def path_to_str(cls, v):
        """Accept ``Path`` objects without normalizing string input."""
        if isinstance(v, PurePath):
            return os.fspath(v)
        return v

    class Config:
        """Pydantic config."""
        extra = "forbid"
