"""Hard-coded workflow-doc paths and files that mix both doc roots.

The nested root ``.cursor/project-manager/features/`` contains the bare root
``project-manager/features/`` as a substring, so the bare form only counts
when it is not directly preceded by ``.cursor/``.
"""
from __future__ import annotations

import re

from refactor_audit.config import AuditConfig
from refactor_audit.files import split_lines
from refactor_audit.models import Issue, IssueKind

NESTED_ROOT = ".cursor/project-manager/features/"
BARE_ROOT_RE = re.compile(r"(?<!\.cursor/)project-manager/features/")


def detect(path: str, contents: str, config: AuditConfig) -> list[Issue]:
    if config.paths.is_hardcoding_allowed(path):
        return []

    issues: list[Issue] = []
    if BARE_ROOT_RE.search(contents) and NESTED_ROOT in contents:
        issues.append(Issue(
            kind=IssueKind.PATH_DUALITY.value,
            path=path,
            message="File references both workflow-doc roots (project-manager/ and .cursor/project-manager/)",
            evidence="Contains both `project-manager/features/` and `.cursor/project-manager/features/`",
        ))

    for i, line in enumerate(split_lines(contents), start=1):
        if BARE_ROOT_RE.search(line):
            issues.append(_line_issue(path, i, line, "repo root"))
        if NESTED_ROOT in line:
            issues.append(_line_issue(path, i, line, ".cursor root"))
    return issues


def _line_issue(path: str, line_no: int, line: str, root: str) -> Issue:
    return Issue(
        kind=IssueKind.HARDCODED_WORKFLOW_PATH.value,
        path=path,
        line=line_no,
        message=f"Hard-coded workflow path detected ({root})",
        evidence=line.strip(),
    )
