"""Tests for issue scoring, priority tiers and pool building."""
import pytest

from refactor_audit.config import AuditConfig, Priorities, Weights
from refactor_audit.models import Issue, Priority
from refactor_audit.pools import build_pools, count_per_file
from refactor_audit.scoring import assign_priority, score_issue


# ── Helpers ─────────────────────────────────────────────────────────


def make_issue(
    path: str = "a.ts",
    kind: str = "plan_execute_mismatch",
    message: str = "Ask-mode/plan-only claim but side-effect call detected",
    line: int | None = 3,
    evidence: str | None = "execSync('x')",
) -> Issue:
    return Issue(kind=kind, path=path, message=message, line=line, evidence=evidence)


def weighted_config() -> AuditConfig:
    return AuditConfig(weights=Weights(
        base_by_kind={"path_duality": 7},
        file_weight=1,
        line_weight=2,
        text_weight=3,
        blast_radius_per_file=4,
    ))


# ── Scoring ─────────────────────────────────────────────────────────


def test_default_score_is_base_only():
    assert score_issue(make_issue(), AuditConfig()) == 10


def test_score_uses_evidence_weights():
    config = weighted_config()
    assert score_issue(make_issue(), config) == 10 + 1 + 2 + 3
    assert score_issue(make_issue(kind="path_duality", line=None, evidence=None), config) == 7 + 1


def test_empty_evidence_counts_as_absent():
    assert score_issue(make_issue(evidence=""), weighted_config()) == 10 + 1 + 2


@pytest.mark.parametrize("score,expected", [
    (17, Priority.P1),
    (18, Priority.P0),
    (10, Priority.P1),
    (9.5, Priority.P2),
    (0, Priority.P2),
])
def test_priority_boundaries(score, expected):
    """A score equal to a threshold gets that threshold's tier."""
    assert assign_priority(score, AuditConfig()) == expected


def test_priority_uses_configured_thresholds():
    config = AuditConfig(priorities=Priorities(p0_min_score=100, p1_min_score=50))
    assert assign_priority(99, config) == Priority.P1
    assert assign_priority(49, config) == Priority.P2


# ── Pools ───────────────────────────────────────────────────────────


def test_single_issue_default_pool():
    """One base-10 issue on one file scores 10 + blast radius (2)."""
    pools = build_pools([make_issue()], AuditConfig())

    assert len(pools) == 1
    pool = pools[0]
    assert pool.total_score == 12
    assert pool.issue_count == 1
    assert pool.file_count == 1
    assert pool.priority == Priority.P1


def test_pool_id_and_group_key():
    pool = build_pools([make_issue()], AuditConfig())[0]
    assert pool.group_key == "plan_execute_mismatch::Ask-mode/plan-only claim but side-effect call detected"
    assert pool.id == "plan_execute_mismatch-plan-execute-mismatch-ask-mode-plan-only-claim-but-side-effect-call-detected"


def test_pools_partition_issues():
    issues = [
        make_issue(path="a.ts"),
        make_issue(path="b.ts", line=9),
        make_issue(kind="path_duality", message="both roots", line=None),
        make_issue(kind="hardcoded_workflow_path", message="Hard-coded (repo root)"),
        make_issue(kind="hardcoded_workflow_path", message="Hard-coded (.cursor root)"),
    ]
    pools = build_pools(issues, AuditConfig())

    assert sum(p.issue_count for p in pools) == len(issues)
    assert len({p.group_key for p in pools}) == len(pools) == 4


def test_file_count_and_blast_radius():
    issues = [make_issue(path="a.ts"), make_issue(path="a.ts", line=4), make_issue(path="b.ts")]
    pool = build_pools(issues, AuditConfig())[0]

    assert pool.issue_count == 3
    assert pool.file_count == 2
    assert pool.total_score == 3 * 10 + 2 * 2
    assert pool.priority == Priority.P0


def test_adding_issue_never_decreases_score():
    config = weighted_config()
    base = build_pools([make_issue()], config)[0].total_score
    same_file = build_pools([make_issue(), make_issue(line=8)], config)[0].total_score
    new_file = build_pools([make_issue(), make_issue(path="b.ts")], config)[0].total_score

    assert same_file >= base
    assert new_file - base >= config.weights.blast_radius_per_file


def test_sample_is_first_five_in_discovery_order():
    issues = [make_issue(path=f"f{i}.ts") for i in range(8)]
    pool = build_pools(issues, AuditConfig())[0]

    assert pool.issue_count == 8
    assert [i.path for i in pool.sample] == [f"f{i}.ts" for i in range(5)]


def test_ordering_score_desc_then_id_asc():
    issues = [
        make_issue(kind="zeta", message="one"),
        make_issue(kind="alpha", message="one"),
        make_issue(kind="mid", message="two", path="a.ts"),
        make_issue(kind="mid", message="two", path="b.ts"),
    ]
    pools = build_pools(issues, AuditConfig())

    assert [p.id for p in pools] == ["mid-mid-two", "alpha-alpha-one", "zeta-zeta-one"]
    scores = [p.total_score for p in pools]
    assert scores == sorted(scores, reverse=True)


def test_build_pools_is_deterministic():
    issues = [make_issue(path=f"{c}.ts", kind=k) for c in "cab" for k in ("x", "y")]
    first = [p.to_dict() for p in build_pools(issues, AuditConfig())]
    second = [p.to_dict() for p in build_pools(list(issues), AuditConfig())]
    assert first == second


def test_no_issues_no_pools():
    assert build_pools([], AuditConfig()) == []


# ── Per-file counts ─────────────────────────────────────────────────


def test_per_file_sorted_by_count_then_path():
    issues = [
        make_issue(path="b.ts"),
        make_issue(path="c.ts"), make_issue(path="c.ts"),
        make_issue(path="a.ts"),
    ]
    rows = count_per_file(issues)
    assert [(r.path, r.issue_count) for r in rows] == [("c.ts", 2), ("a.ts", 1), ("b.ts", 1)]
