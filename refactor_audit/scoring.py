"""Per-issue scores and score-to-priority tiers."""
from __future__ import annotations

from refactor_audit.config import AuditConfig
from refactor_audit.models import Issue, Priority


def score_issue(issue: Issue, config: AuditConfig) -> int | float:
    w = config.weights
    return (
        w.base(issue.kind)
        + w.file_weight * (1 if issue.path else 0)
        + w.line_weight * (1 if issue.line is not None else 0)
        + w.text_weight * (1 if issue.evidence else 0)
    )


def assign_priority(total_score: int | float, config: AuditConfig) -> Priority:
    """Highest tier whose threshold is <= total_score."""
    p = config.priorities
    if total_score >= p.p0_min_score:
        return Priority.P0
    if total_score >= p.p1_min_score:
        return Priority.P1
    return Priority.P2
