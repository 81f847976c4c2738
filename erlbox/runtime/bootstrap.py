# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for erlbox.

One-time setup before any task runs:
  1. Validate the environment (Python version)
  2. Apply the configured log level, attach the log file if any
  3. Warn if the compiler isn't on PATH
  4. Ensure the project ebin directory exists

A missing compiler is only a warning here. The build fails properly, with
the usual exit code, the first time something actually needs compiling.
"""

from pathlib import Path

from erlbox.build.models import BuildContext
from erlbox.logging.logger import get_logger, set_log_level
from erlbox.runtime.environment import check_minimum_python, find_executable, get_system_info
from erlbox.utils.paths import ensure_directory


def bootstrap(ctx: BuildContext, log_level: str) -> None:
    """
    Put the process into a known state for running `ctx`'s tasks.

    Args:
        ctx: The build context about to be run.
        log_level: Effective log level (CLI flag, else config).
    """
    check_minimum_python()
    set_log_level(log_level)

    global_config = ctx.config.global_config
    log_file = None
    if global_config.log_file is not None:
        log_file = ctx.project_root / Path(global_config.log_file)

    logger = get_logger("erlbox.runtime", log_level=log_level, log_file=log_file)

    system_info = get_system_info()
    logger.debug(
        "erlbox bootstrap complete",
        extra={
            "project_root": str(ctx.project_root),
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "hostname": system_info.hostname,
            "dry_run": ctx.dry_run,
        },
    )

    erlc = ctx.config.erlc.executable
    if find_executable(erlc) is None:
        logger.warning(
            "Erlang compiler not found on PATH",
            extra={"executable": erlc},
        )

    if not ctx.dry_run and ctx.config.project.enabled:
        ensure_directory(ctx.project_root / ctx.config.project.ebin_dir)
