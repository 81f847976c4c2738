# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Eunit tasks: compile the test modules, prepare a debug build, run the runner.

The three steps chain as eunit:compile -> eunit:prepare -> eunit:test, with
the project compile in front of all of them (see erlbox.build.tasks).

The runner is an external script. By default it sits next to this module
under the same name without the .py suffix, and is called as:

    <runner> -b ./ebin [-cover] [-s <suite>]... <test_dir>

Suites come from the `suites` environment variable (space separated), and
coverage from `cover`. The CLI can override both.
"""

import os
from pathlib import Path
from typing import Iterable, Mapping, Optional

from erlbox.build.compiler import compile_stale
from erlbox.build.models import BuildContext, CommandResult, RunOptions
from erlbox.build.process import run_command
from erlbox.build.rules import discover_sources, map_outputs
from erlbox.logging.logger import get_logger

logger = get_logger(__name__)

DEFAULT_RUNNER_SCRIPT = Path(__file__).with_suffix("")

EBIN_FLAG = "-b"
COVER_FLAG = "-cover"
SUITE_FLAG = "-s"

SUITES_ENV = "suites"
COVER_ENV = "cover"
VERBOSE_ENV = "verbose"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def eunit_sources(ctx: BuildContext) -> list[Path]:
    eunit = ctx.config.eunit
    return discover_sources(ctx.project_root, eunit.test_dir, eunit.test_pattern)


def eunit_outputs(ctx: BuildContext) -> list[Path]:
    return map_outputs(eunit_sources(ctx))


def compile_tests(ctx: BuildContext) -> BuildContext:
    """Compile every stale test module next to its source."""
    sources = eunit_sources(ctx)
    rebuilt = compile_stale(ctx, sources, map_outputs(sources))
    logger.debug(
        "Test compile finished",
        extra={"sources": len(sources), "rebuilt": len(rebuilt)},
    )
    return ctx


def prepare_tests(ctx: BuildContext) -> BuildContext:
    """
    Switch on debug info for anything compiled from here on.

    Each call appends exactly one flag to the context it is given. Runs always
    start from the loaded config, so flags never pile up between runs.
    """
    logger.info("Debugging is enabled for test builds.")
    return ctx.with_debug_info()


def _is_truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def parse_suites(value: Optional[str]) -> tuple[str, ...]:
    """Split a space separated suite filter. None or blank means all suites."""
    if not value:
        return ()
    return tuple(token.strip() for token in value.split() if token.strip())


def suite_arguments(suites: Iterable[str]) -> list[str]:
    """['a', 'b'] -> ['-s', 'a', '-s', 'b']"""
    argv: list[str] = []
    for suite in suites:
        argv.extend([SUITE_FLAG, suite])
    return argv


def read_run_options(environ: Optional[Mapping[str, str]] = None) -> RunOptions:
    """Build RunOptions from the `suites`, `cover` and `verbose` environment variables."""
    env = os.environ if environ is None else environ
    return RunOptions(
        suites=parse_suites(env.get(SUITES_ENV)),
        cover=_is_truthy(env.get(COVER_ENV)),
        verbose=_is_truthy(env.get(VERBOSE_ENV)),
    )


def resolve_runner_script(ctx: BuildContext) -> str:
    configured = ctx.config.eunit.runner_script
    if configured is None:
        return str(DEFAULT_RUNNER_SCRIPT)
    return configured


def build_runner_command(
    runner: str,
    ebin_dir: str,
    test_dir: str,
    suites: Iterable[str] = (),
    cover: bool = False,
) -> list[str]:
    argv = [runner, EBIN_FLAG, ebin_dir]
    if cover:
        argv.append(COVER_FLAG)
    argv.extend(suite_arguments(suites))
    argv.append(test_dir)
    return argv


def format_command(argv: Iterable[str]) -> str:
    """Join argv for display with runs of whitespace squeezed to one space."""
    return " ".join(" ".join(argv).split())


def run_eunit(ctx: BuildContext, test_dir: str, options: RunOptions) -> CommandResult:
    """
    Invoke the runner over `test_dir` and wait for it.

    Raises:
        CommandFailedError: The runner is missing or reported failures.
    """
    suffix = " with coverage" if options.cover else ""
    logger.info(f"running tests in {test_dir}{suffix}...", extra={"test_dir": test_dir})

    argv = build_runner_command(
        resolve_runner_script(ctx),
        ctx.config.eunit.ebin_dir,
        test_dir,
        suites=options.suites,
        cover=options.cover,
    )

    if options.verbose:
        logger.info(format_command(argv))

    return run_command(argv, cwd=ctx.project_root, dry_run=ctx.dry_run)


def run_tests(ctx: BuildContext, options: RunOptions) -> BuildContext:
    test_dir = options.test_dir or ctx.config.eunit.test_dir
    run_eunit(ctx, test_dir, options)
    return ctx
