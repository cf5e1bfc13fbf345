"""Tests for shell interpolation."""

import sys

import pytest
from unittest.mock import MagicMock

from dockrun.errors import (
    InterpolationError,
    SubstitutionExecutionError,
    UnterminatedSubstitution,
)
from dockrun.utils.interpolate import ShellInterpolator, shell_interpolate


@pytest.fixture
def runner():
    """Fake command runner that echoes a fixed value."""
    return MagicMock(return_value="ok\n")


@pytest.fixture
def interpolator(runner):
    """Interpolator with a fake runner and a fixed environment."""
    return ShellInterpolator(
        runner=runner,
        environ={"FOO": "bar", "HOME": "/home/alice", "_X1": "x"},
    )


class TestVariables:
    """Test environment variable expansion."""

    @pytest.mark.parametrize("raw", [
        "",
        "alpine:3.19",
        "plain text with spaces",
        "braces {FOO} and (parens)",
    ])
    def test_literal_strings_unchanged(self, interpolator, runner, raw):
        """Strings without markers come back untouched and run nothing."""
        assert interpolator.expand(raw) == raw
        runner.assert_not_called()

    def test_bare_and_braced(self, interpolator):
        """Test $NAME and ${NAME} resolve the same value."""
        assert interpolator.expand("$FOO") == "bar"
        assert interpolator.expand("${FOO}") == "bar"

    def test_unset_expands_to_empty(self, interpolator):
        """Test unset variables become empty strings."""
        assert interpolator.expand("$MISSING") == ""
        assert interpolator.expand("${MISSING}") == ""
        assert interpolator.expand("a-${MISSING}-b") == "a--b"

    def test_bare_name_is_maximal(self, interpolator):
        """Test a bare name consumes every following name character."""
        assert interpolator.expand("$FOO_suffix") == ""
        assert interpolator.expand("$FOO-suffix") == "bar-suffix"
        assert interpolator.expand("${FOO}_suffix") == "bar_suffix"
        assert interpolator.expand("$_X1/tmp") == "x/tmp"

    def test_dollar_without_name_is_literal(self, interpolator):
        """Test a dollar not starting a marker is copied verbatim."""
        assert interpolator.expand("cost: 5$") == "cost: 5$"
        assert interpolator.expand("$1 and $ and $-") == "$1 and $ and $-"

    def test_path_with_variable(self, interpolator):
        """Test variables inside volume-like strings."""
        assert interpolator.expand("$HOME/.cargo:/root/.cargo") == (
            "/home/alice/.cargo:/root/.cargo"
        )

    def test_reads_process_environment_by_default(self, monkeypatch):
        """Test the default environment is the live process environment."""
        monkeypatch.setenv("DOCKRUN_TEST_VAR", "live")
        assert shell_interpolate("${DOCKRUN_TEST_VAR}") == "live"

        monkeypatch.delenv("DOCKRUN_TEST_VAR")
        assert shell_interpolate("$DOCKRUN_TEST_VAR") == ""


class TestCommandSubstitution:
    """Test backtick and $( ) substitution."""

    def test_backticks(self, interpolator, runner):
        """Test backtick output is spliced with the newline trimmed."""
        assert interpolator.expand("prefix-`printf ok`-suffix") == "prefix-ok-suffix"
        runner.assert_called_once_with("printf ok")

    def test_dollar_paren(self, interpolator, runner):
        """Test $( ) form."""
        assert interpolator.expand("id=$(id -u)") == "id=ok"
        runner.assert_called_once_with("id -u")

    def test_command_text_is_literal(self, interpolator, runner):
        """Test markers inside a command are passed to the shell untouched."""
        interpolator.expand("`echo $FOO`")
        runner.assert_called_once_with("echo $FOO")

    def test_trims_only_line_terminators(self, interpolator, runner):
        """Test trailing newlines are removed but other whitespace stays."""
        runner.return_value = "  value \r\n\n"
        assert interpolator.expand("[`cmd`]") == "[  value ]"

    def test_no_caching(self, interpolator, runner):
        """Test repeated substitutions run the command every time."""
        runner.side_effect = ["1\n", "2\n"]
        assert interpolator.expand("`date`/`date`") == "1/2"
        assert runner.call_count == 2

    def test_mixed_markers(self, interpolator):
        """Test variables and commands in one string."""
        assert interpolator.expand("$FOO:${HOME}:`x`:$(y)") == "bar:/home/alice:ok:ok"

    def test_runner_error_is_wrapped(self, interpolator, runner):
        """Test arbitrary runner failures become SubstitutionExecutionError."""
        runner.side_effect = OSError("no shell")

        with pytest.raises(SubstitutionExecutionError) as exc_info:
            interpolator.expand("`whoami`")

        assert exc_info.value.command == "whoami"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_typed_runner_error_passes_through(self, interpolator, runner):
        """Test runner errors that are already typed are not re-wrapped."""
        error = SubstitutionExecutionError("whoami", UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"))
        runner.side_effect = error

        with pytest.raises(SubstitutionExecutionError) as exc_info:
            interpolator.expand("$(whoami)")

        assert exc_info.value is error

    @pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell")
    def test_real_shell(self):
        """Test the default runner against /bin/sh."""
        assert shell_interpolate("prefix-`printf ok`-suffix") == "prefix-ok-suffix"
        assert shell_interpolate("$(echo hello)") == "hello"


class TestUnterminated:
    """Test unterminated markers."""

    @pytest.mark.parametrize("raw, position", [
        ("${FOO", 0),
        ("`echo hi", 0),
        ("x $(echo hi", 2),
        ("ok `a` then `b", 12),
    ])
    def test_unterminated(self, interpolator, raw, position):
        """Test an opened but unclosed marker fails."""
        with pytest.raises(UnterminatedSubstitution) as exc_info:
            interpolator.expand(raw)

        assert exc_info.value.position == position
        assert isinstance(exc_info.value, InterpolationError)

    def test_fails_before_running_later_commands(self, interpolator, runner):
        """Test a scan error after a command still aborts the expansion."""
        with pytest.raises(UnterminatedSubstitution):
            interpolator.expand("`ok` ${BROKEN")

        runner.assert_called_once_with("ok")
