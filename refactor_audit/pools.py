"""Group issues into pools, score them and order the result."""
from __future__ import annotations

import logging

from refactor_audit.config import AuditConfig
from refactor_audit.models import FileCount, Issue, Pool
from refactor_audit.scoring import assign_priority, score_issue
from refactor_audit.signature import slugify, stable_pool_key

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 5


def build_pools(issues: list[Issue], config: AuditConfig) -> list[Pool]:
    """Partition issues by signature.

    Sorted by total score descending, then id, then group key. Member order
    (and so the sample) follows discovery order.
    """
    grouped: dict[str, list[Issue]] = {}
    for issue in issues:
        grouped.setdefault(stable_pool_key(issue), []).append(issue)

    pools: list[Pool] = []
    for key, members in grouped.items():
        file_count = len({i.path for i in members})
        total = (
            sum(score_issue(i, config) for i in members)
            + file_count * config.weights.blast_radius_per_file
        )
        pools.append(Pool(
            id=f"{members[0].kind}-{slugify(key)}",
            group_key=key,
            issue_count=len(members),
            file_count=file_count,
            total_score=total,
            priority=assign_priority(total, config),
            sample=tuple(members[:SAMPLE_SIZE]),
        ))

    # distinct keys can slugify to the same id
    pools.sort(key=lambda p: (-p.total_score, p.id, p.group_key))
    logger.debug("Built %d pools from %d issues", len(pools), len(issues))
    return pools


def count_per_file(issues: list[Issue]) -> list[FileCount]:
    counts: dict[str, int] = {}
    for issue in issues:
        counts[issue.path] = counts.get(issue.path, 0) + 1
    rows = [FileCount(path=p, issue_count=n) for p, n in counts.items()]
    rows.sort(key=lambda r: (-r.issue_count, r.path))
    return rows
