"""
dockrun - declarative docker run invocations.

Describes container runs in YAML and expands environment variables and
command substitutions in their fields before handing them to docker.
"""

__version__ = "0.1.0"

# Re-export key components for easier access
from dockrun.builder import build_and_run, render_args
from dockrun.models.run import RunSpec
from dockrun.utils.interpolate import ShellInterpolator, shell_interpolate

__all__ = [
    "RunSpec",
    "ShellInterpolator",
    "build_and_run",
    "render_args",
    "shell_interpolate",
]
