# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for erlbox tests.

Fixtures here are available to every test file automatically. Nothing here
needs Erlang installed: child processes are either faked through
`fake_run` or replaced by tiny shell scripts.
"""

import logging
import os
import subprocess
import textwrap
from pathlib import Path

import pytest

from erlbox.build.models import BuildContext


def write_module(path: Path, mtime: float | None = None) -> Path:
    """Write a trivial Erlang module, optionally pinning its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"-module({path.stem}).\n", encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture()
def erlang_project(tmp_path: Path) -> Path:
    """
    A project with the conventional layout:

        src/app.erl
        test/foo_tests.erl
        test/bar_tests.erl
        test/helper.erl      (not a test module)
    """
    write_module(tmp_path / "src" / "app.erl", mtime=1_000_000)
    write_module(tmp_path / "test" / "foo_tests.erl", mtime=1_000_000)
    write_module(tmp_path / "test" / "bar_tests.erl", mtime=1_000_000)
    write_module(tmp_path / "test" / "helper.erl", mtime=1_000_000)
    return tmp_path


@pytest.fixture()
def build_ctx(erlang_project: Path) -> BuildContext:
    return BuildContext(project_root=erlang_project)


class FakeRun:
    """Stands in for subprocess.run and remembers every call."""

    def __init__(self) -> None:
        self.calls: list[dict[str, object]] = []
        self.returncodes: dict[str, int] = {}

    def fail(self, executable: str, returncode: int = 1) -> None:
        self.returncodes[executable] = returncode

    def __call__(self, args, cwd=None, check=False, **kwargs):  # type: ignore[no-untyped-def]
        argv = list(args)
        self.calls.append({"argv": argv, "cwd": cwd})
        return subprocess.CompletedProcess(argv, self.returncodes.get(argv[0], 0))

    @property
    def argvs(self) -> list[list[str]]:
        return [call["argv"] for call in self.calls]  # type: ignore[misc]


@pytest.fixture()
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr("erlbox.build.process.subprocess.run", fake)
    return fake


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure suites/cover/verbose from the developer's shell don't leak in."""
    for name in ("suites", "cover", "verbose"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """A small but complete erlbox.yaml."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          log_level: "DEBUG"
        erlc:
          flags: ["+warn_unused_vars"]
          code_paths: ["ebin"]
          include_dirs: ["include"]
        eunit:
          test_dir: "test"
    """)
    config_file = tmp_path / "erlbox.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (unknown key)."""
    config_content = textwrap.dedent("""\
        erlc:
          flags: ["+debug_info"]
          optimise: true
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


@pytest.fixture()
def write_erl():  # type: ignore[no-untyped-def]
    """The write_module helper, for tests that shape their own project."""
    return write_module


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def log_records():  # type: ignore[no-untyped-def]
    """
    Collect records from a named erlbox logger.

    erlbox loggers don't propagate, so caplog never sees them; this attaches a
    handler directly and removes it afterwards.
    """
    attached: list[tuple[logging.Logger, _ListHandler]] = []

    def collect(name: str) -> list[logging.LogRecord]:
        logger = logging.getLogger(name)
        handler = _ListHandler()
        logger.addHandler(handler)
        attached.append((logger, handler))
        return handler.records

    yield collect

    for logger, handler in attached:
        logger.removeHandler(handler)
