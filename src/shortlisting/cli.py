"""Typer CLI entrypoint for shortlisting and keyword matching."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .core import summarize_matches
from .logging import configure_logging
from .pipeline import (
    AuditLogger,
    CandidateLoadError,
    JsonlApplicationStore,
    JsonProjectStore,
    OutputWriter,
    ShortlistingError,
    load_talent_profiles,
)
from .schemas.config import load_config

app = typer.Typer(help="Candidate evaluation and shortlisting CLI.")


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid config file: {exc}", param_hint="config") from exc


@app.command()
def shortlist(
    project: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Project JSON path."),
    applications: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, help="Applications JSONL path."
    ),
    project_id: str = typer.Option(..., help="Project identifier to shortlist."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    max_candidates: int = typer.Option(10, min=1, help="Shortlist size."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Evaluate every application for a project and write the shortlist."""
    settings = _load_settings(config)
    configure_logging(log_level)

    container = create_container(settings=settings)
    service = container.service(
        project_store=JsonProjectStore(project),
        application_store=JsonlApplicationStore(applications),
    )

    try:
        response = asyncio.run(service.generate_shortlist(project_id, max_candidates))
    except (ShortlistingError, CandidateLoadError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    OutputWriter().write(output, response.model_dump(mode="json"))
    if audit_log:
        AuditLogger(audit_log).record_shortlist(project_id, response)

    typer.echo(
        f"Evaluated {response.evaluated_candidates} candidates, "
        f"shortlisted {len(response.shortlisted_candidates)}. Results saved to {output}."
    )


@app.command()
def match(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Talent profiles JSONL path."),
    query: str = typer.Option(..., help="Free-text search query."),
    limit: int = typer.Option(20, min=1, help="Maximum number of results."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, resolve_path=True, help="Output JSON path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Rank talent profiles against a keyword query without calling the reasoning service."""
    if len(query.strip()) < 2:
        raise typer.BadParameter("Query must be at least 2 characters", param_hint="query")
    settings = _load_settings(config)
    configure_logging(log_level)

    try:
        profiles = load_talent_profiles(candidates)
    except CandidateLoadError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    matcher = create_container(settings=settings).keyword_matcher()
    results = matcher.match(query, matcher.prefilter(query, profiles), limit)
    insights = summarize_matches(results)

    if output:
        OutputWriter().write(
            output,
            {
                "query": query.strip(),
                "results": [result.model_dump(mode="json") for result in results],
                "insights": insights,
            },
        )
    for result in results:
        typer.echo(f"{result.match_score:3d}  {result.candidate.name or result.candidate.id}  {'; '.join(result.match_reasons)}")
    for line in insights:
        typer.echo(line)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
