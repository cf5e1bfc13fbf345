"""Exception types raised by dockrun."""

from typing import Optional


class DockrunError(Exception):
    """Base class for all dockrun errors."""


class InterpolationError(DockrunError):
    """A string could not be expanded."""


class UnterminatedSubstitution(InterpolationError):
    """A substitution marker was opened but never closed."""

    def __init__(self, raw: str, position: int):
        self.raw = raw
        self.position = position
        super().__init__(
            f"Unterminated substitution at position {position} in {raw!r}"
        )


class SubstitutionExecutionError(InterpolationError):
    """A command substitution could not be run or produced undecodable output."""

    def __init__(self, command: str, cause: Optional[BaseException] = None):
        self.command = command
        self.cause = cause
        super().__init__(f"Command substitution failed for {command!r}: {cause}")


class BuildError(DockrunError):
    """Interpolating a run spec field failed while assembling flags."""

    def __init__(self, field: str, cause: InterpolationError):
        self.field = field
        self.cause = cause
        super().__init__(f"Invalid value for {field}: {cause}")


class LaunchError(DockrunError):
    """The container tool could not be spawned."""

    def __init__(self, tool: str, cause: Optional[BaseException] = None):
        self.tool = tool
        self.cause = cause
        super().__init__(f"Failed to launch {tool}: {cause}")


class ToolNotFound(DockrunError):
    """The container runtime binary is not on PATH."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} executable not found in PATH")


class ConfigError(DockrunError):
    """Configuration could not be loaded or a run name is unknown."""
