# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
File rules: which .erl files exist, which .beam files they turn into, and
which of those are out of date.

An output is stale when it does not exist or when its source was modified
after it. Equal timestamps count as up to date. Nothing else is consulted:
no header dependencies, no content hashes.
"""

from pathlib import Path
from typing import Iterable, Optional

from erlbox.utils.paths import to_relative

OUTPUT_SUFFIX = ".beam"


def discover_sources(project_root: Path, directory: str, pattern: str) -> list[Path]:
    """
    Glob `pattern` inside `directory` and return matches relative to the root.

    Results are sorted so the compile order is the same on every machine. A
    missing directory just means there is nothing to build.
    """
    search_dir = project_root / directory
    if not search_dir.is_dir():
        return []
    matches = (p for p in search_dir.glob(pattern) if p.is_file())
    return sorted(to_relative(p, project_root) for p in matches)


def output_for(source: Path, output_dir: Optional[Path] = None) -> Path:
    """Map foo/bar.erl to foo/bar.beam, or to <output_dir>/bar.beam when given."""
    output = source.with_suffix(OUTPUT_SUFFIX)
    if output_dir is not None:
        return output_dir / output.name
    return output


def map_outputs(sources: Iterable[Path], output_dir: Optional[Path] = None) -> list[Path]:
    """One output per source, in the same order."""
    return [output_for(source, output_dir) for source in sources]


def is_stale(output: Path, source: Path, project_root: Path) -> bool:
    """True when `output` is missing or older than `source`."""
    output_path = project_root / output
    if not output_path.exists():
        return True
    source_path = project_root / source
    return source_path.stat().st_mtime > output_path.stat().st_mtime
