"""Plan/execute mismatch: a command that claims to only plan but has side effects."""
from __future__ import annotations

import re

from refactor_audit.config import AuditConfig
from refactor_audit.files import split_lines
from refactor_audit.models import Issue, IssueKind

PLAN_ONLY_CLAIM = re.compile(
    r"Ask Mode Only"
    r"|outputs a plan, not an implementation"
    r"|planning and should be used in Ask Mode",
    re.IGNORECASE,
)

SIDE_EFFECT_MARKERS = [
    re.compile(r"\brunCommand\s*\("),
    re.compile(r"\bcreateBranch\s*\("),
    re.compile(r"\bgit\s+checkout\b", re.IGNORECASE),
    re.compile(r"\bgit\s+pull\b", re.IGNORECASE),
    re.compile(r"\bwrite(Project)?File\s*\("),
    re.compile(r"\bmkdir\b"),
    re.compile(r"\bspawnSync\b"),
    re.compile(r"\bexecSync\b"),
]

MESSAGE = "Ask-mode/plan-only claim but side-effect call detected"


def detect(path: str, contents: str, config: AuditConfig) -> list[Issue]:
    """One issue per side-effect line, only in files that claim to be plan-only."""
    if not PLAN_ONLY_CLAIM.search(contents):
        return []

    issues: list[Issue] = []
    for i, line in enumerate(split_lines(contents), start=1):
        if not any(marker.search(line) for marker in SIDE_EFFECT_MARKERS):
            continue
        issues.append(Issue(
            kind=IssueKind.PLAN_EXECUTE_MISMATCH.value,
            path=path,
            line=i,
            message=MESSAGE,
            evidence=line.strip(),
        ))
    return issues
