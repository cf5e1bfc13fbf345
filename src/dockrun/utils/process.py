"""Process helpers: tool discovery, shell runner and launcher."""

import logging
import platform
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from dockrun.errors import LaunchError, SubstitutionExecutionError, ToolNotFound


logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result from running a command."""
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""


def get_cli_path(name: str = "docker") -> Path:
    """Resolve the container tool executable on PATH."""
    found = shutil.which(name)
    if found is None:
        raise ToolNotFound(name)
    logger.debug(f"Resolved {name} to {found}")
    return Path(found)


def shell_argv(command: str) -> List[str]:
    """Build the host interpreter argv for a command line."""
    if platform.system() == "Windows":
        return ["cmd", "/C", command]
    return ["sh", "-c", command]


def run_shell(command: str) -> str:
    """Run a command line through the host shell and return its stdout.

    The exit status is not inspected; only a failure to start the shell
    (including arguments it cannot accept, such as embedded NUL bytes) or
    output that is not valid UTF-8 is an error.
    """
    argv = shell_argv(command)
    logger.debug(f"Running shell command: {command}")

    try:
        completed = subprocess.run(argv, capture_output=True, check=False)
    except (OSError, ValueError) as e:
        raise SubstitutionExecutionError(command, e) from e

    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SubstitutionExecutionError(command, e) from e


def launch(tool: Union[str, Path], args: List[str]) -> CommandResult:
    """Run a tool with arguments synchronously, capturing its output."""
    cmd = [str(tool), *args]
    logger.debug(f"Running command: {' '.join(cmd)}")

    try:
        completed = subprocess.run(cmd, capture_output=True, check=False)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to launch {tool}: {e}")
        raise LaunchError(str(tool), e) from e

    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or b"",
        stderr=completed.stderr or b"",
    )
