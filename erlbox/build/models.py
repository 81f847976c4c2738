# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Data types passed between build tasks.

All frozen. A task that needs to change something (test preparation adding
debug info) returns a new BuildContext instead of editing the one it got.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from erlbox.config.schema import ErlboxConfig


@dataclass(frozen=True)
class BuildContext:
    """Everything a task needs to know about the project it is building."""

    project_root: Path
    config: ErlboxConfig = field(default_factory=ErlboxConfig)
    dry_run: bool = False

    def with_debug_info(self) -> "BuildContext":
        """Return a context whose compiler flags carry one more debug-info flag."""
        erlc = self.config.erlc.with_debug_info()
        return replace(self, config=self.config.model_copy(update={"erlc": erlc}))


@dataclass(frozen=True)
class RunOptions:
    """
    Per-run knobs for the eunit runner.

    Usually read from the environment (`suites`, `cover`, `verbose`) and then
    overridden by whatever the user passed on the command line.
    """

    suites: tuple[str, ...] = ()
    cover: bool = False
    verbose: bool = False
    test_dir: Optional[str] = None


@dataclass(frozen=True)
class CommandResult:
    """What came back from running one child process."""

    argv: tuple[str, ...]
    exit_code: int
    elapsed_seconds: float
    executed: bool = True
