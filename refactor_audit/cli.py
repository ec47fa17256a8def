"""Click CLI entry point for refactor-audit."""
from __future__ import annotations

import logging
import os
import sys

import click

from refactor_audit import __version__
from refactor_audit.config import ConfigError, default_config_path, load_config
from refactor_audit.output.report import (
    OUT_RELDIR, ReportError, load_report, report_paths, write_markdown, write_reports,
)
from refactor_audit.output.terminal import render_summary, render_written
from refactor_audit.scanner import DEFAULT_SCAN_ROOT, scan


@click.group()
@click.version_option(version=__version__, prog_name="refactor-audit")
@click.option("--verbose", is_flag=True, help="Debug logging to stderr")
def cli(verbose: bool) -> None:
    """Workflow refactor audit for .cursor/commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )


@cli.command("scan")
@click.option("--project-root", default=".", type=click.Path(file_okay=False),
              help="Project root; reported paths are relative to it")
@click.option("--scan-root", default=DEFAULT_SCAN_ROOT,
              help="Directory to scan, relative to the project root")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="Config JSON (default: .cursor/.audit/workflow-refactor-audit-config.json)")
@click.option("--out-dir", default=None, type=click.Path(file_okay=False),
              help="Where to write the reports (default: .cursor/.audit)")
def scan_cmd(project_root: str, scan_root: str, config_path: str | None,
             out_dir: str | None) -> None:
    """Scan the command tree and write the JSON and Markdown reports.

    Findings never fail the run; only unreadable config does.
    """
    abs_root = os.path.abspath(project_root)
    try:
        config = load_config(config_path or default_config_path(abs_root))
    except ConfigError as e:
        click.echo(f"refactor-audit: {e}", err=True)
        sys.exit(1)

    result = scan(abs_root, scan_root=scan_root, config=config)
    json_path, md_path = write_reports(result, out_dir or os.path.join(abs_root, OUT_RELDIR))
    render_written(
        _display_path(json_path, abs_root), _display_path(md_path, abs_root),
        len(result.issues), len(result.pools),
    )


@cli.command("summary")
@click.option("--project-root", default=".", type=click.Path(file_okay=False))
@click.option("--report", "report_path", default=None, type=click.Path(dir_okay=False),
              help="JSON report to read (default: .cursor/.audit/workflow-refactor-audit.json)")
def summary_cmd(project_root: str, report_path: str | None) -> None:
    """Print top pools and hotspots from the last JSON report."""
    data = _load_or_exit(project_root, report_path)
    render_summary(data)


@cli.command("render")
@click.option("--project-root", default=".", type=click.Path(file_okay=False))
@click.option("--report", "report_path", default=None, type=click.Path(dir_okay=False))
@click.option("--output", "md_path", default=None, type=click.Path(dir_okay=False),
              help="Markdown path (default: next to the JSON report)")
def render_cmd(project_root: str, report_path: str | None, md_path: str | None) -> None:
    """Regenerate the Markdown report from the JSON report alone."""
    abs_root = os.path.abspath(project_root)
    json_path = report_path or report_paths(os.path.join(abs_root, OUT_RELDIR))[0]
    data = _load_or_exit(project_root, json_path)
    md_path = md_path or os.path.splitext(json_path)[0] + ".md"
    write_markdown(data, md_path)
    click.echo(f"Wrote: {_display_path(md_path, abs_root)}")


def _load_or_exit(project_root: str, report_path: str | None) -> dict:
    abs_root = os.path.abspath(project_root)
    json_path = report_path or report_paths(os.path.join(abs_root, OUT_RELDIR))[0]
    try:
        return load_report(json_path)
    except FileNotFoundError:
        click.echo(
            f"Missing: {_display_path(json_path, abs_root)} (run `refactor-audit scan` first)",
            err=True,
        )
        sys.exit(1)
    except (OSError, ReportError) as e:
        click.echo(f"refactor-audit: {e}", err=True)
        sys.exit(1)


def _display_path(path: str, project_root: str) -> str:
    rel = os.path.relpath(os.path.abspath(path), project_root)
    if rel.startswith(".."):
        return path
    return rel.replace(os.sep, "/")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
