# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Project compile step (`build:compile`): src/*.erl into ebin/."""

from pathlib import Path

from erlbox.build.compiler import compile_stale
from erlbox.build.models import BuildContext
from erlbox.build.rules import discover_sources, map_outputs
from erlbox.logging.logger import get_logger

logger = get_logger(__name__)


def project_sources(ctx: BuildContext) -> list[Path]:
    project = ctx.config.project
    return discover_sources(ctx.project_root, project.source_dir, project.source_pattern)


def compile_project(ctx: BuildContext) -> BuildContext:
    """Bring every project .beam up to date. Disabled projects are left alone."""
    if not ctx.config.project.enabled:
        logger.debug("Project compile disabled")
        return ctx

    sources = project_sources(ctx)
    outputs = map_outputs(sources, Path(ctx.config.project.ebin_dir))
    rebuilt = compile_stale(ctx, sources, outputs)
    logger.debug(
        "Project compile finished",
        extra={"sources": len(sources), "rebuilt": len(rebuilt)},
    )
    return ctx
