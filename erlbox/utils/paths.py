# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for erlbox.

Every path erlbox hands to erlc or the runner is relative to the project
root, and every child process runs with the project root as its working
directory. That keeps command lines short and matches what a developer
would type by hand.
"""

from pathlib import Path
from typing import Optional


def resolve_project_root(config_path: Optional[Path], cwd: Path) -> Path:
    """
    Pick the project root.

    When a config file is in play, the directory that holds it is the root.
    Otherwise the current working directory is.
    """
    if config_path is not None:
        return config_path.resolve().parent
    return cwd.resolve()


def ensure_directory(path: Path) -> Path:
    """Create a directory (and parents) if it doesn't exist. Returns the path for chaining."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def to_relative(path: Path, root: Path) -> Path:
    """
    Express `path` relative to `root` when it lives under it.

    Paths outside the root are returned unchanged, resolved.
    """
    resolved = path.resolve()
    try:
        return resolved.relative_to(root.resolve())
    except ValueError:
        return resolved
