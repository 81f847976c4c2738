# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for child process execution. These run real (tiny) processes through
the current Python interpreter so they work wherever the tests do.
"""

import sys
from pathlib import Path

import pytest

from erlbox.build.exceptions import CommandFailedError
from erlbox.build.process import COMMAND_NOT_FOUND, run_command


class TestRunCommand:
    def test_success_returns_result(self, tmp_path: Path) -> None:
        result = run_command([sys.executable, "-c", "pass"], cwd=tmp_path)
        assert result.exit_code == 0
        assert result.executed is True
        assert result.elapsed_seconds >= 0

    def test_runs_in_given_directory(self, tmp_path: Path) -> None:
        script = "import pathlib; pathlib.Path('marker').write_text('x')"
        run_command([sys.executable, "-c", script], cwd=tmp_path)
        assert (tmp_path / "marker").is_file()

    def test_nonzero_exit_raises_with_status(self, tmp_path: Path) -> None:
        with pytest.raises(CommandFailedError) as excinfo:
            run_command([sys.executable, "-c", "raise SystemExit(4)"], cwd=tmp_path)
        assert excinfo.value.returncode == 4
        assert excinfo.value.argv[0] == sys.executable

    def test_missing_executable(self, tmp_path: Path) -> None:
        with pytest.raises(CommandFailedError) as excinfo:
            run_command([str(tmp_path / "does-not-exist")], cwd=tmp_path)
        assert excinfo.value.returncode == COMMAND_NOT_FOUND

    def test_arguments_are_not_shell_split(self, tmp_path: Path) -> None:
        script = "import sys, pathlib; pathlib.Path('args').write_text(repr(sys.argv[1:]))"
        run_command([sys.executable, "-c", script, "a b", "$HOME"], cwd=tmp_path)
        assert (tmp_path / "args").read_text() == repr(["a b", "$HOME"])

    def test_dry_run_does_not_execute(self, tmp_path: Path) -> None:
        result = run_command([str(tmp_path / "does-not-exist")], cwd=tmp_path, dry_run=True)
        assert result.executed is False
        assert result.exit_code == 0
