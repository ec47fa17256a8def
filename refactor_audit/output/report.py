"""Structured JSON report: write after a scan, load for summary/render."""
from __future__ import annotations

import json
import logging
import os

from refactor_audit.models import AuditResult
from refactor_audit.output.markdown import render_markdown

logger = logging.getLogger(__name__)

OUT_RELDIR = os.path.join(".cursor", ".audit")
JSON_NAME = "workflow-refactor-audit.json"
MD_NAME = "workflow-refactor-audit.md"


class ReportError(ValueError):
    pass


def report_paths(out_dir: str) -> tuple[str, str]:
    return os.path.join(out_dir, JSON_NAME), os.path.join(out_dir, MD_NAME)


def dump_report(data: dict) -> str:
    return json.dumps(data, indent=2)


def write_reports(result: AuditResult, out_dir: str) -> tuple[str, str]:
    """Write the JSON report and the Markdown rendered from it."""
    os.makedirs(out_dir, exist_ok=True)
    json_path, md_path = report_paths(out_dir)
    data = result.to_dict()
    with open(json_path, "w", encoding="utf-8") as f:
        f.write(dump_report(data))
    write_markdown(data, md_path)
    logger.debug("Wrote %s and %s", json_path, md_path)
    return json_path, md_path


def write_markdown(data: dict, md_path: str) -> None:
    with open(md_path, "w", encoding="utf-8") as f:
        f.write(render_markdown(data))


def load_report(json_path: str) -> dict:
    """Load a previously written report.

    Raises FileNotFoundError if it does not exist and ReportError if it is
    not a JSON object.
    """
    try:
        with open(json_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ReportError(f"failed to parse {json_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ReportError(f"failed to decode {json_path}: {e}") from e
    if not isinstance(data, dict):
        raise ReportError(f"{json_path} is not a JSON object")
    return data
