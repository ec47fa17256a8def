"""Filesystem helpers: deterministic recursive listing and repo-relative paths."""
from __future__ import annotations

import logging
import os
from collections.abc import Callable

logger = logging.getLogger(__name__)


def list_files_recursive(
    directory: str,
    should_include: Callable[[str], bool] | None = None,
) -> list[str]:
    """Return absolute paths of files under directory, depth-first and sorted.

    A missing directory yields an empty list.
    """
    out: list[str] = []
    if not os.path.isdir(directory):
        logger.debug("Scan root %s does not exist", directory)
        return out
    for root, dirs, files in os.walk(directory):
        # os.walk visits dirs in the order left in the list
        dirs.sort()
        for fname in sorted(files):
            full = os.path.join(root, fname)
            if should_include is None or should_include(full):
                out.append(full)
    return out


def to_repo_path(abs_path: str, project_root: str) -> str:
    """Path relative to project_root with forward slashes."""
    rel = os.path.relpath(abs_path, project_root)
    return rel.replace(os.sep, "/")


def read_text_file(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return f.read()


def split_lines(contents: str) -> list[str]:
    return contents.replace("\r\n", "\n").split("\n")
