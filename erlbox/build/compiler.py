# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The erlc side of the build: turn one stale .erl into one .beam.

Compilation is one file per erlc call, strictly one after another. The first
failure raises out of compile_stale and nothing after it is attempted.
Outputs that were already written stay where they are.
"""

from pathlib import Path
from typing import Sequence

from erlbox.build.models import BuildContext, CommandResult
from erlbox.build.process import run_command
from erlbox.build.rules import is_stale
from erlbox.config.schema import ErlcConfig
from erlbox.logging.logger import get_logger
from erlbox.utils.paths import ensure_directory

logger = get_logger(__name__)


def build_erlc_command(erlc: ErlcConfig, source: Path, output_dir: Path) -> list[str]:
    """
    Assemble the erlc argument list.

    Order matters to erlc only in that the source comes last:
        erlc <flags> -pa <path>... -I <dir>... -o <output_dir> <source>
    """
    argv = [erlc.executable, *erlc.flags]
    for code_path in erlc.code_paths:
        argv.extend(["-pa", code_path])
    for include_dir in erlc.include_dirs:
        argv.extend(["-I", include_dir])
    argv.extend(["-o", str(output_dir), str(source)])
    return argv


def compile_file(ctx: BuildContext, source: Path, output: Path) -> CommandResult:
    """Compile `source` into the directory that `output` lives in."""
    logger.info(f"compiling {source}...", extra={"source": str(source)})

    output_dir = output.parent
    if not ctx.dry_run:
        ensure_directory(ctx.project_root / output_dir)

    argv = build_erlc_command(ctx.config.erlc, source, output_dir)
    return run_command(argv, cwd=ctx.project_root, dry_run=ctx.dry_run)


def compile_stale(
    ctx: BuildContext,
    sources: Sequence[Path],
    outputs: Sequence[Path],
) -> list[Path]:
    """
    Compile every source whose output is stale. Returns the outputs rebuilt.

    `sources` and `outputs` are parallel lists, as produced by rules.map_outputs.
    """
    if len(sources) != len(outputs):
        raise ValueError(
            f"Got {len(sources)} sources but {len(outputs)} outputs; they must pair up"
        )

    rebuilt = []
    for source, output in zip(sources, outputs):
        if not is_stale(output, source, ctx.project_root):
            logger.debug("Up to date", extra={"output": str(output)})
            continue
        compile_file(ctx, source, output)
        rebuilt.append(output)

    return rebuilt
