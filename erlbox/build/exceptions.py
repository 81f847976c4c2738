# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exceptions raised while running build tasks.

There is really only one runtime failure: a child process (erlc or the eunit
runner) exited non-zero. Nothing catches it below the CLI, so the first
failure ends the run.
"""

from typing import Sequence


class BuildError(Exception):
    """Base for all build errors."""


class CommandFailedError(BuildError):
    """A child process could not be started or exited non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int, reason: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        message = f"Command exited with status {returncode}: {argv[0] if argv else '<empty>'}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class TaskError(BuildError):
    """The task graph was asked for an unknown task or contains a cycle."""
