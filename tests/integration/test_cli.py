from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from shortlisting.cli import app

NO_KEY_ENV = {"SHORTLIST_API_KEY": ""}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def write_jsonl(path: Path, records: list[dict]) -> None:
    path.write_text("\n".join(json.dumps(record, ensure_ascii=False) for record in records) + "\n", encoding="utf-8")


@pytest.fixture
def project_path(tmp_path: Path) -> Path:
    path = tmp_path / "project.json"
    write_json(
        path,
        {
            "id": "P-7",
            "title": "Mobile app prototype",
            "description": "Prototype a booking app",
            "skills_required": ["Flutter", "Figma"],
            "duration_months": 2,
        },
    )
    return path


@pytest.fixture
def applications_path(tmp_path: Path) -> Path:
    path = tmp_path / "applications.jsonl"
    write_jsonl(
        path,
        [
            {"project_id": "P-7", "candidate": {"id": f"S-{idx}", "name": f"Student {idx}", "skills": ["Flutter"]}}
            for idx in range(4)
        ],
    )
    return path


def test_cli_shortlist_writes_output_and_audit(
    tmp_path: Path, runner: CliRunner, project_path: Path, applications_path: Path
) -> None:
    output_path = tmp_path / "out" / "shortlist.json"
    audit_path = tmp_path / "audit.jsonl"

    result = runner.invoke(
        app,
        [
            "shortlist",
            "--project",
            str(project_path),
            "--applications",
            str(applications_path),
            "--project-id",
            "P-7",
            "--output",
            str(output_path),
            "--max-candidates",
            "3",
            "--audit-log",
            str(audit_path),
        ],
        env=NO_KEY_ENV,
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["total_candidates"] == 4
    assert payload["evaluated_candidates"] == 4
    assert len(payload["shortlisted_candidates"]) == 3
    assert [e["source"] for e in payload["evaluations"]] == ["fallback"] * 3
    audit_lines = audit_path.read_text(encoding="utf-8").splitlines()
    assert len(audit_lines) == 3
    assert "shortlisted 3" in result.output


def test_cli_shortlist_unknown_project_exits_with_error(
    tmp_path: Path, runner: CliRunner, project_path: Path, applications_path: Path
) -> None:
    output_path = tmp_path / "shortlist.json"

    result = runner.invoke(
        app,
        [
            "shortlist",
            "--project",
            str(project_path),
            "--applications",
            str(applications_path),
            "--project-id",
            "P-404",
            "--output",
            str(output_path),
        ],
        env=NO_KEY_ENV,
    )

    assert result.exit_code == 1
    assert not output_path.exists()


def test_cli_shortlist_reads_yaml_config(
    tmp_path: Path, runner: CliRunner, project_path: Path, applications_path: Path
) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("batch:\n  batch_size: 4\nfallback:\n  salt: demo\n", encoding="utf-8")
    output_path = tmp_path / "shortlist.json"

    result = runner.invoke(
        app,
        [
            "shortlist",
            "--project",
            str(project_path),
            "--applications",
            str(applications_path),
            "--project-id",
            "P-7",
            "--output",
            str(output_path),
            "--config",
            str(config_path),
        ],
        env=NO_KEY_ENV,
    )

    assert result.exit_code == 0, result.output
    assert len(json.loads(output_path.read_text(encoding="utf-8"))["evaluations"]) == 4


def test_cli_match_ranks_profiles(tmp_path: Path, runner: CliRunner) -> None:
    candidates_path = tmp_path / "talent.jsonl"
    write_jsonl(
        candidates_path,
        [
            {"id": "T-1", "name": "Huda", "location": "Dubai", "skills": ["Python", "React"]},
            {"id": "T-2", "name": "Karim", "location": "Cairo", "skills": ["Java"]},
            {"id": "T-3", "name": "Sara", "skills": ["Python"]},
        ],
    )
    output_path = tmp_path / "matches.json"

    result = runner.invoke(
        app,
        [
            "match",
            "--candidates",
            str(candidates_path),
            "--query",
            "python developer in dubai",
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["query"] == "python developer in dubai"
    assert [r["candidate"]["id"] for r in payload["results"]] == ["T-1", "T-3"]
    assert payload["results"][0]["match_score"] == 35
    assert payload["insights"][0] == "Found 2 candidates matching your search"


def test_cli_match_rejects_short_query(tmp_path: Path, runner: CliRunner) -> None:
    candidates_path = tmp_path / "talent.jsonl"
    write_jsonl(candidates_path, [{"id": "T-1"}])

    result = runner.invoke(app, ["match", "--candidates", str(candidates_path), "--query", "a"])

    assert result.exit_code != 0


def test_cli_match_reports_unknown_keyword_weight(tmp_path: Path, runner: CliRunner) -> None:
    candidates_path = tmp_path / "talent.jsonl"
    write_jsonl(candidates_path, [{"id": "T-1", "skills": ["Python"]}])
    config_path = tmp_path / "config.yaml"
    config_path.write_text("keyword:\n  weights:\n    universty: 40\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["match", "--candidates", str(candidates_path), "--query", "python", "--config", str(config_path)],
    )

    assert result.exit_code == 2
    assert not isinstance(result.exception, TypeError)
