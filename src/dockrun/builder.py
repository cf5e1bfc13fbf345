"""Translate a RunSpec into ``docker run`` arguments and execute them."""

import logging
import shlex
import sys
from pathlib import Path
from typing import Any, BinaryIO, Callable, List, Optional, Tuple, Union

from dockrun.errors import BuildError, InterpolationError
from dockrun.models.run import RunSpec
from dockrun.utils.interpolate import ShellInterpolator
from dockrun.utils.process import CommandResult, launch


logger = logging.getLogger(__name__)

Expand = Callable[[str], str]
Renderer = Callable[[Any, Expand], List[str]]
Launcher = Callable[[Union[str, Path], List[str]], CommandResult]

PREFIX = ["run", "--rm"]


def _flag(flag: str) -> Renderer:
    """Render a single value as ``flag <value>``."""
    return lambda value, expand: [flag, expand(str(value))]


def _repeated(flag: str) -> Renderer:
    """Render each list entry as ``flag <entry>``."""
    def render(values, expand):
        args = []
        for value in values:
            args.extend([flag, expand(value)])
        return args
    return render


def _envs(envs, expand) -> List[str]:
    # Key and value are joined before expansion, so markers in keys expand too
    args = []
    for key, value in envs.items():
        args.extend(["-e", expand(f"{key}={value}")])
    return args


def _network(network, expand) -> List[str]:
    return [expand(f"--network={network}")]


def _each(values, expand) -> List[str]:
    return [expand(value) for value in values]


def _image(image, expand) -> List[str]:
    return [expand(image)]


# Order is the literal order docker receives the arguments in
FLAG_RULES: List[Tuple[str, Renderer]] = [
    ("entrypoint", _flag("--entrypoint")),
    ("envs", _envs),
    ("env_file", _flag("--env-file")),
    ("network", _network),
    ("ports", _repeated("-p")),
    ("volumes", _repeated("-v")),
    ("user", _flag("-u")),
    ("extra_flags", _each),
    ("image", _image),
    ("command", _each),
]


def render_args(
    spec: RunSpec, interpolator: Optional[ShellInterpolator] = None
) -> List[str]:
    """Build the full argument list for ``docker`` from a run spec.

    Raises:
        BuildError: if any field fails to interpolate. Nothing is run.
    """
    interpolator = interpolator or ShellInterpolator()
    args = list(PREFIX)

    for field, render in FLAG_RULES:
        value = getattr(spec, field)
        if value is None:
            continue
        try:
            args.extend(render(value, interpolator.expand))
        except InterpolationError as e:
            logger.error(f"Failed to interpolate {field}: {e}")
            raise BuildError(field, e) from e

    return args


def render_command(
    spec: RunSpec,
    docker_cmd: Union[str, Path],
    interpolator: Optional[ShellInterpolator] = None,
) -> str:
    """Return the interpolated command line as a shell-quoted string."""
    return shlex.join([str(docker_cmd), *render_args(spec, interpolator)])


def build_and_run(
    spec: RunSpec,
    docker_cmd: Union[str, Path],
    launcher: Optional[Launcher] = None,
    interpolator: Optional[ShellInterpolator] = None,
    stdout: Optional[BinaryIO] = None,
    stderr: Optional[BinaryIO] = None,
) -> CommandResult:
    """Render ``spec``, run docker and copy its output to the given streams.

    A non-zero exit status is returned in the result, not raised.

    Raises:
        BuildError: a field failed to interpolate; docker was not started.
        LaunchError: docker could not be spawned.
    """
    args = render_args(spec, interpolator)
    launcher = launcher or launch

    logger.info(f"Running {docker_cmd} {' '.join(args)}")
    result = launcher(docker_cmd, args)
    logger.debug(f"{docker_cmd} exited with status {result.returncode}")

    out = stdout if stdout is not None else sys.stdout.buffer
    err = stderr if stderr is not None else sys.stderr.buffer
    out.write(result.stdout)
    out.flush()
    err.write(result.stderr)
    err.flush()

    return result
