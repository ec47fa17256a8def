"""Text detectors. Each is a pure ``detect(path, contents, config) -> list[Issue]``."""
from __future__ import annotations

from collections.abc import Callable

from refactor_audit.config import AuditConfig
from refactor_audit.models import Issue
from refactor_audit.detectors import paths, plan_execute
from refactor_audit.detectors.export_surface import scan_export_surface

Detector = Callable[[str, str, AuditConfig], list[Issue]]

# Run in this order for every scanned file.
DETECTORS: tuple[Detector, ...] = (
    plan_execute.detect,
    paths.detect,
)

__all__ = ["DETECTORS", "Detector", "scan_export_surface"]
