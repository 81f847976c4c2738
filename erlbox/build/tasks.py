# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Task graph for the build.

Tasks are plain functions from BuildContext to BuildContext, wired together
by name in an explicit dependency mapping. Running a target walks only the
target's own dependencies, in topological order, each exactly once, and
feeds each task the context returned by the one before.

The graph is built fresh for every run by `default_graph`; there is no
module-level registry to add to.
"""

from dataclasses import dataclass
from graphlib import CycleError, TopologicalSorter
from typing import Callable, Optional

from erlbox.build.eunit import compile_tests, prepare_tests, read_run_options, run_tests
from erlbox.build.exceptions import TaskError
from erlbox.build.models import BuildContext, RunOptions
from erlbox.build.project import compile_project
from erlbox.logging.logger import get_logger

logger = get_logger(__name__)

TaskAction = Callable[[BuildContext], Optional[BuildContext]]


@dataclass(frozen=True)
class Task:
    name: str
    action: Optional[TaskAction]
    dependencies: tuple[str, ...] = ()
    description: str = ""


class TaskGraph:
    """Named tasks plus the edges between them."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def add_task(
        self,
        name: str,
        action: Optional[TaskAction] = None,
        dependencies: Optional[list[str]] = None,
        description: str = "",
    ) -> None:
        """Add a task. A task without an action only exists to pull in its dependencies."""
        self._tasks[name] = Task(name, action, tuple(dependencies or ()), description)

    @property
    def tasks(self) -> dict[str, Task]:
        return dict(self._tasks)

    def _closure(self, target: str) -> dict[str, set[str]]:
        """The sub-graph reachable from `target`, as {task: dependencies}."""
        graph: dict[str, set[str]] = {}
        pending = [target]
        while pending:
            name = pending.pop()
            if name in graph:
                continue
            task = self._tasks.get(name)
            if task is None:
                raise TaskError(f"Don't know how to build task '{name}'")
            graph[name] = set(task.dependencies)
            pending.extend(task.dependencies)
        return graph

    def get_order(self, target: str) -> list[str]:
        """Return `target` and its dependencies in the order they must run."""
        sorter = TopologicalSorter(self._closure(target))
        try:
            return list(sorter.static_order())
        except CycleError as err:
            raise TaskError(f"Circular dependency detected: {' -> '.join(err.args[1])}") from err

    def run(self, target: str, ctx: BuildContext) -> BuildContext:
        """Run `target` after everything it depends on. Stops at the first failure."""
        for name in self.get_order(target):
            task = self._tasks[name]
            if task.action is None:
                continue
            logger.debug("Running task", extra={"task": name})
            result = task.action(ctx)
            if result is not None:
                ctx = result
        return ctx


def default_graph(options: Optional[RunOptions] = None) -> TaskGraph:
    """
    The standard erlbox tasks:

        build:compile <- eunit:compile <- eunit:prepare <- eunit:test <- eunit
    """
    run_options = options if options is not None else read_run_options()

    graph = TaskGraph()
    graph.add_task(
        "build:compile",
        compile_project,
        description="Compile project sources",
    )
    graph.add_task(
        "eunit:compile",
        compile_tests,
        ["build:compile"],
        description="Compile eunit test sources",
    )
    graph.add_task(
        "eunit:prepare",
        prepare_tests,
        ["eunit:compile"],
        description="Eunit test preparation",
    )
    graph.add_task(
        "eunit:test",
        lambda ctx: run_tests(ctx, run_options),
        ["eunit:prepare"],
        description="Run eunit tests",
    )
    graph.add_task("eunit", None, ["eunit:test"], description="Run eunit tests")
    return graph
