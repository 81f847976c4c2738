# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handling for the erlbox CLI.

Every subcommand names a task in the graph. The handler loads config,
bootstraps, builds the graph for this run and runs the task. Errors are
caught here, once, and turned into exit codes.

No print() calls. Everything goes through the structured logger.
"""

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Optional

from erlbox.build.eunit import parse_suites, read_run_options
from erlbox.build.exceptions import CommandFailedError, TaskError
from erlbox.build.models import BuildContext, RunOptions
from erlbox.build.tasks import default_graph
from erlbox.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, USER_ERROR
from erlbox.config.exceptions import ConfigError
from erlbox.config.loader import find_config, load_config
from erlbox.config.schema import ErlboxConfig
from erlbox.logging.logger import get_logger
from erlbox.runtime.bootstrap import bootstrap
from erlbox.utils.paths import resolve_project_root


def _load_context(
    args: argparse.Namespace,
    logger: logging.Logger,
) -> tuple[int, Optional[BuildContext]]:
    """
    Find and load the config, then build the context for this run.

    Returns (exit_code, context). If exit_code is not SUCCESS the context is
    None and the caller should return the code straight away.
    """
    cwd = Path.cwd()
    config_path = Path(args.config) if args.config is not None else find_config(cwd)

    config = ErlboxConfig()
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": args.command, "error": str(err)},
            )
            return CONFIG_ERROR, None
    else:
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": args.command},
        )

    ctx = BuildContext(
        project_root=resolve_project_root(config_path, cwd),
        config=config,
        dry_run=args.dry_run,
    )
    return SUCCESS, ctx


def _run_options(args: argparse.Namespace) -> RunOptions:
    """Environment first, command line flags on top."""
    options = read_run_options()
    overrides: dict[str, object] = {}
    if getattr(args, "suites", None) is not None:
        overrides["suites"] = parse_suites(args.suites)
    if getattr(args, "cover", False):
        overrides["cover"] = True
    if args.verbose:
        overrides["verbose"] = True
    if getattr(args, "dir", None) is not None:
        overrides["test_dir"] = args.dir
    return dataclasses.replace(options, **overrides)


def handle_task(args: argparse.Namespace) -> int:
    """Run the task named by the subcommand, dependencies first."""
    task_name = args.command
    logger = get_logger("erlbox.cli", log_level=args.log_level or "INFO")

    exit_code, ctx = _load_context(args, logger)
    if exit_code != SUCCESS or ctx is None:
        return exit_code

    log_level = args.log_level or ctx.config.global_config.log_level
    try:
        bootstrap(ctx, log_level)
    except RuntimeError as err:
        logger.error("Environment check failed", extra={"error": str(err)})
        return RUNTIME_ERROR

    graph = default_graph(_run_options(args))

    try:
        logger.debug("Command started", extra={"command": task_name, "dry_run": ctx.dry_run})
        graph.run(task_name, ctx)
    except TaskError as err:
        logger.error("Task graph error", extra={"command": task_name, "error": str(err)})
        return USER_ERROR
    except CommandFailedError as err:
        logger.error(
            "Command failed",
            extra={
                "command": task_name,
                "argv": err.argv,
                "exit_code": err.returncode,
            },
        )
        return RUNTIME_ERROR
    except OSError as err:
        logger.error(
            "Runtime error",
            extra={"command": task_name, "error": str(err)},
            exc_info=True,
        )
        return RUNTIME_ERROR

    logger.debug("Command completed", extra={"command": task_name})
    return SUCCESS
