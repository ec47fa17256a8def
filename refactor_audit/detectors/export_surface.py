"""Export-surface inventory for the hand-maintained command aggregator.

Not a pass/fail check. It records how many ``export`` lines the aggregator
carries and which command modules next to it are not exported at all.
"""
from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable

from refactor_audit.config import AuditConfig
from refactor_audit.files import split_lines
from refactor_audit.models import ExportSurface

MAX_EXPORT_LINES = 200


def scan_export_surface(
    path: str,
    contents: str,
    config: AuditConfig,
    scanned_paths: Iterable[str] = (),
) -> ExportSurface | None:
    """Return the inventory record if path is the configured aggregator, else None."""
    if not path.endswith(config.paths.export_aggregator):
        return None

    export_lines = [
        line for line in split_lines(contents)
        if line.strip().startswith("export ")
    ]
    return ExportSurface(
        path=path,
        export_line_count=len(export_lines),
        export_lines=tuple(export_lines[:MAX_EXPORT_LINES]),
        untracked_files=tuple(_untracked(path, export_lines, scanned_paths)),
    )


def _untracked(aggregator: str, export_lines: list[str], scanned_paths: Iterable[str]) -> list[str]:
    base = posixpath.dirname(aggregator)
    prefix = f"{base}/" if base else ""
    exports = "\n".join(export_lines)
    untracked: list[str] = []
    for p in scanned_paths:
        if p == aggregator or not p.startswith(prefix):
            continue
        module = posixpath.splitext(p[len(prefix):])[0]
        if not _is_exported(module, exports):
            untracked.append(p)
    return untracked


def _is_exported(module: str, exports: str) -> bool:
    candidates = [module]
    if module.endswith("/index"):
        candidates.append(module[: -len("/index")])
    for candidate in candidates:
        pattern = r"""['"]\./%s(?:\.[cm]?[jt]s)?['"]""" % re.escape(candidate)
        if re.search(pattern, exports):
            return True
    return False
