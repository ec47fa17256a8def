"""Markdown report, rendered from the JSON report dict alone."""
from __future__ import annotations

from refactor_audit.models import KIND_DESCRIPTIONS

MAX_POOLS = 25
MAX_FILES = 60
MAX_ISSUES_PER_KIND = 120
MAX_UNTRACKED = 60
MAX_EVIDENCE_CHARS = 220


def render_markdown(data: dict) -> str:
    issues = data.get("issues") or []
    pools = data.get("pools") or []
    per_file = data.get("perFile") or []
    scope = data.get("scope") or {}

    lines: list[str] = [
        "# Workflow Refactor Audit (Generated)",
        "",
        "This file is generated by `refactor-audit scan`.",
        "",
        "## Summary",
        "",
        f"- Generated at: **{data.get('generatedAt', '')}**",
        f"- Scope: `{scope.get('root', '')}`",
        f"- Files scanned: **{data.get('filesScanned', 0)}**",
        f"- Issues: **{len(issues)}**",
        f"- Pools: **{len(pools)}**",
        "",
    ]

    lines += ["## Top pools (by score)", ""]
    lines += ["| Priority | Pool | score | issues | files |", "| --- | --- | ---: | ---: | ---: |"]
    for p in pools[:MAX_POOLS]:
        lines.append(
            f"| {p.get('priority')} | `{p.get('id')}` | {p.get('totalScore')} "
            f"| {p.get('issueCount')} | {p.get('fileCount')} |"
        )
    lines += _omitted(len(pools), MAX_POOLS, "pools")
    lines.append("")

    lines += ["## Per-file issue counts", ""]
    lines += ["| File | issues |", "| --- | ---: |"]
    for f in per_file[:MAX_FILES]:
        lines.append(f"| `{f.get('path')}` | {f.get('issueCount')} |")
    lines += _omitted(len(per_file), MAX_FILES, "files")
    lines.append("")

    surface = data.get("exportSurface")
    if surface:
        lines += _render_export_surface(surface)

    lines += _render_issues(issues)
    return "\n".join(lines)


def _render_export_surface(surface: dict) -> list[str]:
    lines = ["## Export surface", ""]
    lines.append(f"- `{surface.get('path')}`: {surface.get('evidence')}")
    untracked = surface.get("untrackedFiles") or []
    if untracked:
        lines.append(f"- Not exported ({len(untracked)}):")
        for p in untracked[:MAX_UNTRACKED]:
            lines.append(f"  - `{p}`")
        if len(untracked) > MAX_UNTRACKED:
            lines.append(f"  - (omitted {len(untracked) - MAX_UNTRACKED} more)")
    lines.append("")
    return lines


def _render_issues(issues: list[dict]) -> list[str]:
    lines = ["## Issues (detailed)", ""]
    by_kind: dict[str, list[dict]] = {}
    for issue in issues:
        by_kind.setdefault(str(issue.get("kind")), []).append(issue)

    lines.append("Legend:")
    for kind in sorted(set(KIND_DESCRIPTIONS) | set(by_kind)):
        desc = KIND_DESCRIPTIONS.get(kind)
        if desc:
            lines.append(f"- **{kind}**: {desc}")
    lines.append("")

    if not by_kind:
        lines += ["No issues found.", ""]
        return lines

    for kind in sorted(by_kind):
        group = by_kind[kind]
        lines += [f"### {kind}", ""]
        for issue in group[:MAX_ISSUES_PER_KIND]:
            loc = f":{issue['line']}" if issue.get("line") else ""
            lines.append(f"- `{issue.get('path')}{loc}`: {issue.get('message')}")
            evidence = issue.get("evidence")
            if evidence:
                lines.append(f"  - evidence: `{evidence[:MAX_EVIDENCE_CHARS]}`")
        if len(group) > MAX_ISSUES_PER_KIND:
            lines.append(f"- (omitted {len(group) - MAX_ISSUES_PER_KIND} more)")
        lines.append("")
    return lines


def _omitted(total: int, shown: int, noun: str) -> list[str]:
    if total <= shown:
        return []
    return ["", f"(omitted {total - shown} more {noun})"]
