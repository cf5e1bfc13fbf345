"""Shell-style interpolation of environment variables and command output.

Recognised markers inside an otherwise literal string:

    $NAME     environment variable
    ${NAME}   environment variable
    `cmd`     stdout of ``cmd`` run through the host shell
    $(cmd)    same as backticks

Unset variables expand to an empty string. Command substitutions are run
every time they are encountered; nothing is cached.
"""

import logging
import os
import string
from typing import Callable, List, Mapping, Optional

from dockrun.errors import (
    InterpolationError,
    SubstitutionExecutionError,
    UnterminatedSubstitution,
)
from dockrun.utils.process import run_shell


logger = logging.getLogger(__name__)

CommandRunner = Callable[[str], str]

NAME_START = frozenset(string.ascii_letters + "_")
NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
LINE_TERMINATORS = "\r\n"


class ShellInterpolator:
    """Expands substitution markers using an injectable command runner."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.runner = runner or run_shell
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        """Variables used for lookups, read from the process at call time by default."""
        return os.environ if self._environ is None else self._environ

    def expand(self, raw: str) -> str:
        """Return ``raw`` with every substitution marker resolved."""
        if "$" not in raw and "`" not in raw:
            return raw

        out: List[str] = []
        i = 0
        length = len(raw)

        while i < length:
            ch = raw[i]

            if ch == "`":
                end = raw.find("`", i + 1)
                if end == -1:
                    raise UnterminatedSubstitution(raw, i)
                out.append(self._substitute(raw[i + 1:end]))
                i = end + 1

            elif ch == "$" and raw.startswith("(", i + 1):
                end = raw.find(")", i + 2)
                if end == -1:
                    raise UnterminatedSubstitution(raw, i)
                out.append(self._substitute(raw[i + 2:end]))
                i = end + 1

            elif ch == "$" and raw.startswith("{", i + 1):
                end = raw.find("}", i + 2)
                if end == -1:
                    raise UnterminatedSubstitution(raw, i)
                out.append(self._lookup(raw[i + 2:end]))
                i = end + 1

            elif ch == "$" and i + 1 < length and raw[i + 1] in NAME_START:
                end = i + 2
                while end < length and raw[end] in NAME_CHARS:
                    end += 1
                out.append(self._lookup(raw[i + 1:end]))
                i = end

            else:
                out.append(ch)
                i += 1

        return "".join(out)

    def _lookup(self, name: str) -> str:
        return self.environ.get(name, "")

    def _substitute(self, command: str) -> str:
        logger.debug(f"Substituting output of: {command}")
        try:
            output = self.runner(command)
        except InterpolationError:
            raise
        except Exception as e:
            raise SubstitutionExecutionError(command, e) from e

        if not isinstance(output, str):
            raise SubstitutionExecutionError(
                command, TypeError(f"runner returned {type(output).__name__}")
            )
        return output.rstrip(LINE_TERMINATORS)


def shell_interpolate(
    raw: str,
    runner: Optional[CommandRunner] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Expand ``raw`` with a one-off :class:`ShellInterpolator`."""
    return ShellInterpolator(runner=runner, environ=environ).expand(raw)
