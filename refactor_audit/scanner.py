"""Orchestrator: lists files, runs detectors, builds pools."""
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from refactor_audit.config import AuditConfig
from refactor_audit.detectors import DETECTORS, scan_export_surface
from refactor_audit.files import list_files_recursive, read_text_file, to_repo_path
from refactor_audit.models import AuditResult, ExportSurface, Issue, ScanScope
from refactor_audit.pools import build_pools, count_per_file

logger = logging.getLogger(__name__)

DEFAULT_SCAN_ROOT = os.path.join(".cursor", "commands")


def scan(
    project_root: str,
    scan_root: str = DEFAULT_SCAN_ROOT,
    config: AuditConfig | None = None,
    generated_at: str | None = None,
) -> AuditResult:
    """Scan scan_root (relative to project_root) and return an AuditResult.

    A missing scan root is an empty result, not an error.
    """
    config = config or AuditConfig()
    abs_root = os.path.abspath(project_root)
    abs_scan_root = os.path.join(abs_root, scan_root)

    def _include(abs_path: str) -> bool:
        if not config.scope.includes(abs_path):
            return False
        return not config.scope.is_ignored(to_repo_path(abs_path, abs_root))

    abs_files = list_files_recursive(abs_scan_root, _include)

    sources: list[tuple[str, str]] = []  # (repo_path, contents)
    for abs_path in abs_files:
        repo_path = to_repo_path(abs_path, abs_root)
        try:
            sources.append((repo_path, read_text_file(abs_path)))
        except OSError as e:
            logger.warning("Skipping unreadable file %s: %s", repo_path, e)

    scanned_paths = [p for p, _ in sources]
    issues: list[Issue] = []
    export_surface: ExportSurface | None = None
    for repo_path, contents in sources:
        issues.extend(_run_detectors(repo_path, contents, config))
        record = scan_export_surface(repo_path, contents, config, scanned_paths)
        if record is not None:
            export_surface = record

    logger.debug("Scanned %d files, %d issues", len(sources), len(issues))

    return AuditResult(
        generated_at=generated_at or _timestamp(),
        scope=ScanScope(
            root=to_repo_path(abs_scan_root, abs_root),
            include=tuple(f"**/*{ext}" for ext in config.scope.include_extensions),
            exclude=config.scope.ignore_contains,
        ),
        files_scanned=len(sources),
        issues=issues,
        pools=build_pools(issues, config),
        per_file=count_per_file(issues),
        export_surface=export_surface,
    )


def _run_detectors(repo_path: str, contents: str, config: AuditConfig) -> list[Issue]:
    found: list[Issue] = []
    for detector in DETECTORS:
        try:
            found.extend(detector(repo_path, contents, config))
        except Exception:
            logger.warning(
                "Detector %s failed on %s", getattr(detector, "__module__", detector),
                repo_path, exc_info=True,
            )
    return found


def _timestamp() -> str:
    """ISO-8601 UTC with millisecond precision; honours SOURCE_DATE_EPOCH."""
    epoch = os.environ.get("SOURCE_DATE_EPOCH")
    if epoch and epoch.isdigit():
        now = datetime.fromtimestamp(int(epoch), tz=timezone.utc)
    else:
        now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
