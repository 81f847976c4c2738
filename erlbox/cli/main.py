# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for erlbox.

Each subcommand is a build task. Running a task runs everything it depends
on first, so `erlbox eunit:test` compiles the project, compiles the tests,
prepares the debug build and then runs the eunit runner.

The global options (--config, --log-level, --dry-run, --verbose) are
inherited by every subcommand through argparse's parent parser mechanism.

Usage:
    erlbox <task> [options]
    erlbox eunit:compile
    erlbox eunit:test --suites "login logout" --cover
    suites=login erlbox eunit
"""

import argparse
import sys

from erlbox.cli.commands import handle_task
from erlbox.cli.exit_codes import USER_ERROR


def _build_global_parser(suppress_defaults: bool = False) -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    add_help=False so the help text doesn't collide between the parent and
    the subcommand parsers.

    The options are accepted before or after the task name. The root parser
    carries the real defaults; the copy attached to each subcommand uses
    SUPPRESS, so a subcommand only writes options that were actually given
    after it and never resets ones given before it.
    """

    def default(value: object) -> object:
        return argparse.SUPPRESS if suppress_defaults else value

    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=default(None),
        help="Path to YAML configuration file (default: nearest erlbox.yaml).",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=default(None),
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config file).",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=default(False),
        dest="dry_run",
        help="Log the commands that would run without running them.",
    )
    parent.add_argument(
        "--verbose",
        action="store_true",
        default=default(False),
        help="Echo the runner command line before executing it.",
    )
    return parent


def _add_runner_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--suites",
        type=str,
        default=None,
        help="Space separated suite names to run (overrides $suites).",
    )
    parser.add_argument(
        "--cover",
        action="store_true",
        default=False,
        help="Collect code coverage (same as cover=1).",
    )
    parser.add_argument(
        "--dir",
        type=str,
        default=None,
        help="Directory to run tests in (default: the configured test_dir).",
    )


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """Register one subcommand per task, all dispatching to handle_task."""
    commands = [
        ("build:compile", "Compile project sources.", False),
        ("eunit:compile", "Compile eunit test sources.", False),
        ("eunit:prepare", "Eunit test preparation.", False),
        ("eunit:test", "Run eunit tests.", True),
        ("eunit", "Run eunit tests (alias for eunit:test).", True),
    ]

    for name, help_text, runs_tests in commands:
        parser = subparsers.add_parser(name, parents=[parent], help=help_text)
        if runs_tests:
            _add_runner_options(parser)
        parser.set_defaults(func=handle_task)


def main() -> None:
    """
    Main CLI entrypoint, referenced by pyproject.toml's [project.scripts].

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    root_parser = argparse.ArgumentParser(
        prog="erlbox",
        description="erlbox: compile Erlang tests and run them with eunit.",
        parents=[_build_global_parser()],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, _build_global_parser(suppress_defaults=True))

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
