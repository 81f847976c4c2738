# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Child process execution for erlc and the eunit runner.

Commands are argument lists handed straight to subprocess.run: no shell, no
string splitting, no quoting to get wrong. Output is not captured. The
child writes to our console, because its own diagnostics are the only
useful thing to show when it fails.

There is no timeout. A hung compiler hangs the build until someone kills it.
"""

import subprocess
import time
from pathlib import Path
from typing import Sequence

from erlbox.build.exceptions import CommandFailedError
from erlbox.build.models import CommandResult
from erlbox.logging.logger import get_logger

logger = get_logger(__name__)

# What a shell reports when the executable can't be found.
COMMAND_NOT_FOUND = 127


def run_command(argv: Sequence[str], cwd: Path, dry_run: bool = False) -> CommandResult:
    """
    Run `argv` in `cwd` and wait for it.

    Returns the result on exit status 0. Anything else raises, so callers
    never have to look at exit codes themselves.

    Raises:
        CommandFailedError: The executable is missing or exited non-zero.
    """
    command = tuple(str(arg) for arg in argv)

    if dry_run:
        logger.info("Dry run, not executing", extra={"argv": list(command), "cwd": str(cwd)})
        return CommandResult(argv=command, exit_code=0, elapsed_seconds=0.0, executed=False)

    start = time.monotonic()
    try:
        completed = subprocess.run(command, cwd=str(cwd), check=False)
    except FileNotFoundError as err:
        logger.error(
            "Executable not found",
            extra={"executable": command[0], "cwd": str(cwd)},
        )
        raise CommandFailedError(command, COMMAND_NOT_FOUND, str(err)) from err

    elapsed = time.monotonic() - start
    logger.debug(
        "Command finished",
        extra={
            "argv": list(command),
            "exit_code": completed.returncode,
            "elapsed_seconds": round(elapsed, 3),
        },
    )

    if completed.returncode != 0:
        raise CommandFailedError(command, completed.returncode)

    return CommandResult(argv=command, exit_code=completed.returncode, elapsed_seconds=elapsed)
