"""Rich terminal output: the condensed summary of a JSON report."""
from __future__ import annotations

from rich.console import Console
from rich.table import Table

MAX_POOLS = 10
MAX_FILES = 15

PRIORITY_STYLES = {
    "P0": "bold red",
    "P1": "yellow",
    "P2": "dim",
}


def make_console(**kwargs) -> Console:
    return Console(highlight=False, soft_wrap=True, **kwargs)


def render_summary(data: dict, console: Console | None = None) -> None:
    """Print the header counts, top pools and top files of a report."""
    console = console or make_console()
    pools = data.get("pools") if isinstance(data.get("pools"), list) else []
    per_file = data.get("perFile") if isinstance(data.get("perFile"), list) else []
    issues = data.get("issues") if isinstance(data.get("issues"), list) else []

    console.print("[bold]Workflow Refactor Audit Summary[/bold]")
    console.print(f"Generated: {data.get('generatedAt', '<unknown>')}")
    console.print(f"Issues: {len(issues)}, Pools: {len(pools)}")
    console.print()

    if pools:
        table = Table(title="Top pools", title_justify="left", show_edge=False)
        table.add_column("Priority")
        table.add_column("Score", justify="right")
        table.add_column("Issues", justify="right")
        table.add_column("Files", justify="right")
        table.add_column("Pool", overflow="fold")
        for p in pools[:MAX_POOLS]:
            priority = str(p.get("priority", ""))
            style = PRIORITY_STYLES.get(priority, "")
            table.add_row(
                f"[{style}]{priority}[/{style}]" if style else priority,
                str(p.get("totalScore", "")),
                str(p.get("issueCount", "")),
                str(p.get("fileCount", "")),
                str(p.get("id", "")),
            )
        console.print(table)
        console.print()

    if per_file:
        console.print("[bold]Top files:[/bold]")
        for f in per_file[:MAX_FILES]:
            console.print(f"- {f.get('issueCount')} :: {f.get('path')}", markup=False)


def render_written(json_path: str, md_path: str, issue_count: int, pool_count: int,
                   console: Console | None = None) -> None:
    console = console or make_console()
    console.print("Wrote:")
    console.print(f"- {json_path}", markup=False)
    console.print(f"- {md_path}", markup=False)
    console.print(f"Issues: {issue_count}, Pools: {pool_count}")
