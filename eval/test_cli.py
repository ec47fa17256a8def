"""CLI tests: scan, summary and render through click's test runner."""
import json
import os

from click.testing import CliRunner

from refactor_audit.cli import cli


def make_project(tmp_path):
    cmd = tmp_path / ".cursor" / "commands" / "plan.ts"
    cmd.parent.mkdir(parents=True)
    cmd.write_text(
        "// Ask Mode Only\n"
        "runCommand('git pull')\n"
        "read('project-manager/features/auth/plan.md')\n",
        encoding="utf-8",
    )
    return tmp_path


def audit_dir(root) -> str:
    return os.path.join(str(root), ".cursor", ".audit")


def test_scan_writes_reports(tmp_path):
    root = make_project(tmp_path)
    result = CliRunner().invoke(cli, ["scan", "--project-root", str(root)])

    assert result.exit_code == 0, result.output
    assert "Issues: 2, Pools: 2" in result.output
    with open(os.path.join(audit_dir(root), "workflow-refactor-audit.json"), encoding="utf-8") as f:
        data = json.load(f)
    assert data["filesScanned"] == 1
    assert len(data["issues"]) == 2
    assert os.path.exists(os.path.join(audit_dir(root), "workflow-refactor-audit.md"))


def test_scan_of_empty_project_succeeds(tmp_path):
    result = CliRunner().invoke(cli, ["scan", "--project-root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Issues: 0, Pools: 0" in result.output
    with open(os.path.join(audit_dir(tmp_path), "workflow-refactor-audit.md"), encoding="utf-8") as f:
        md = f.read()
    assert "- Files scanned: **0**" in md


def test_scan_uses_config_file(tmp_path):
    root = make_project(tmp_path)
    os.makedirs(audit_dir(root))
    with open(os.path.join(audit_dir(root), "workflow-refactor-audit-config.json"), "w", encoding="utf-8") as f:
        json.dump({"scope": {"ignoreContains": ["plan.ts"]}}, f)

    result = CliRunner().invoke(cli, ["scan", "--project-root", str(root)])
    assert result.exit_code == 0, result.output
    assert "Issues: 0, Pools: 0" in result.output


def test_scan_with_bad_config_fails(tmp_path):
    root = make_project(tmp_path)
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")

    result = CliRunner().invoke(cli, ["scan", "--project-root", str(root), "--config", str(bad)])
    assert result.exit_code == 1
    assert "invalid JSON" in result.output


def test_summary_after_scan(tmp_path):
    root = make_project(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["scan", "--project-root", str(root)])
    result = runner.invoke(cli, ["summary", "--project-root", str(root)])

    assert result.exit_code == 0, result.output
    assert "Workflow Refactor Audit Summary" in result.output
    assert "Issues: 2, Pools: 2" in result.output
    assert "2 :: .cursor/commands/plan.ts" in result.output


def test_summary_without_report_fails(tmp_path):
    result = CliRunner().invoke(cli, ["summary", "--project-root", str(tmp_path)])

    assert result.exit_code == 1
    assert "run `refactor-audit scan` first" in result.output


def test_summary_with_malformed_report_fails(tmp_path):
    os.makedirs(audit_dir(tmp_path))
    with open(os.path.join(audit_dir(tmp_path), "workflow-refactor-audit.json"), "w", encoding="utf-8") as f:
        f.write("not json")

    result = CliRunner().invoke(cli, ["summary", "--project-root", str(tmp_path)])
    assert result.exit_code == 1
    assert "failed to parse" in result.output


def test_render_regenerates_markdown(tmp_path):
    root = make_project(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["scan", "--project-root", str(root)])
    md_path = os.path.join(audit_dir(root), "workflow-refactor-audit.md")
    with open(md_path, encoding="utf-8") as f:
        original = f.read()
    os.remove(md_path)

    result = runner.invoke(cli, ["render", "--project-root", str(root)])
    assert result.exit_code == 0, result.output
    with open(md_path, encoding="utf-8") as f:
        assert f.read() == original
