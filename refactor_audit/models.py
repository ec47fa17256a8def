from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IssueKind(str, Enum):
    PLAN_EXECUTE_MISMATCH = "plan_execute_mismatch"
    PATH_DUALITY = "path_duality"
    HARDCODED_WORKFLOW_PATH = "hardcoded_workflow_path"


class Priority(str, Enum):
    P0 = "P0"
    P1 = "P1"
    P2 = "P2"


# Legend for the Markdown report. Detectors that add a kind add a line here.
KIND_DESCRIPTIONS: dict[str, str] = {
    IssueKind.PLAN_EXECUTE_MISMATCH.value: "claims plan-only/Ask-mode but contains side effects",
    IssueKind.PATH_DUALITY.value: "same file references both workflow-doc roots",
    IssueKind.HARDCODED_WORKFLOW_PATH.value: "raw workflow-doc paths used outside the resolver",
}


@dataclass(frozen=True)
class Issue:
    """One detected occurrence, always attributed to a file.

    line is 1-based and None for file-level issues.
    """
    kind: str
    path: str
    message: str
    line: int | None = None
    evidence: str | None = None

    def to_dict(self) -> dict:
        out: dict = {"kind": self.kind, "path": self.path}
        if self.line is not None:
            out["line"] = self.line
        out["message"] = self.message
        if self.evidence is not None:
            out["evidence"] = self.evidence
        return out


@dataclass(frozen=True)
class Pool:
    """Issues sharing one normalized signature."""
    id: str
    group_key: str
    issue_count: int
    file_count: int
    total_score: int | float
    priority: Priority
    sample: tuple[Issue, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "groupKey": self.group_key,
            "issueCount": self.issue_count,
            "fileCount": self.file_count,
            "totalScore": self.total_score,
            "priority": self.priority.value,
            "sample": [i.to_dict() for i in self.sample],
        }


@dataclass(frozen=True)
class FileCount:
    path: str
    issue_count: int

    def to_dict(self) -> dict:
        return {"path": self.path, "issueCount": self.issue_count}


@dataclass(frozen=True)
class ExportSurface:
    """Inventory of a hand-maintained export list. Not an issue, never scored."""
    path: str
    export_line_count: int
    export_lines: tuple[str, ...] = ()
    untracked_files: tuple[str, ...] = ()
    kind: str = "command_export_surface"
    message: str = "Command export surface inventory (manual exports are drift-prone at scale)"

    @property
    def evidence(self) -> str:
        return f"exportLines={self.export_line_count}"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "path": self.path,
            "message": self.message,
            "evidence": self.evidence,
            "exportLineCount": self.export_line_count,
            "exportLines": list(self.export_lines),
            "untrackedFiles": list(self.untracked_files),
        }


@dataclass(frozen=True)
class ScanScope:
    root: str
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "include": list(self.include),
            "exclude": list(self.exclude),
        }


@dataclass
class AuditResult:
    generated_at: str
    scope: ScanScope
    files_scanned: int = 0
    issues: list[Issue] = field(default_factory=list)
    pools: list[Pool] = field(default_factory=list)
    per_file: list[FileCount] = field(default_factory=list)
    export_surface: ExportSurface | None = None

    def to_dict(self) -> dict:
        return {
            "generatedAt": self.generated_at,
            "scope": self.scope.to_dict(),
            "filesScanned": self.files_scanned,
            "issues": [i.to_dict() for i in self.issues],
            "pools": [p.to_dict() for p in self.pools],
            "perFile": [f.to_dict() for f in self.per_file],
            "exportSurface": self.export_surface.to_dict() if self.export_surface else None,
        }
