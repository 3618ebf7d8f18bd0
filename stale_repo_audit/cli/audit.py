"""CLI command for auditing a repository list for stale repositories."""

import logging
from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..audit.classifier import StaleClassifier
from ..audit.dedup import issue_title, load_flagged
from ..audit.extractor import extract_links, load_document
from ..audit.models import AuditResult
from ..audit.reporter import render_issue_body, report
from ..config import AuditConfig
from ..github_client.client import GitHubClient
from ..utils.date_parser import parse_date_input
from .options import (
    AS_OF_OPTION,
    DOCUMENT_ARGUMENT,
    DRY_RUN_OPTION,
    LIMIT_OPTION,
    TOKEN_OPTION,
    TRACKING_REPO_OPTION,
    VERBOSE_OPTION,
    YEARS_OPTION,
)

console = Console()


def _print_summary(result: AuditResult, config: AuditConfig) -> None:
    results_table = Table(title="Audit Results")
    results_table.add_column("Metric", style="cyan")
    results_table.add_column("Value", justify="right", style="green")

    results_table.add_row("Repositories checked", str(result.checked))
    results_table.add_row("Already reported today", str(result.skipped_existing))
    results_table.add_row("Non-repository links", str(result.skipped_non_repo))
    results_table.add_row("Failed checks (ignored)", str(result.errors))
    results_table.add_row("Stale repositories", str(len(result.entries)))
    limit = "no limit" if config.unlimited else str(config.run_limit)
    results_table.add_row(
        "Run limit", f"{limit} (reached)" if result.limit_reached else limit
    )

    console.print(results_table)


def audit(
    document: Path = DOCUMENT_ARGUMENT,
    limit: int | None = LIMIT_OPTION,
    years: int | None = YEARS_OPTION,
    tracking_repo: str | None = TRACKING_REPO_OPTION,
    as_of: str | None = AS_OF_OPTION,
    token: str | None = TOKEN_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Flag stale repositories in a rendered list and file a tracking issue.

    Every list item's leading GitHub repository link is checked for
    redirects, missing or archived repositories, and for the absence of
    commits within the staleness window. Links already listed in today's
    open tracking issue are skipped.

    Examples:
        stale-repo-audit audit build/index.html --dry-run
        stale-repo-audit audit build/index.html --limit -1 --years 2
        stale-repo-audit audit index.html --tracking-repo myorg/awesome-list
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    console.print(f"📄 Reading {document}")
    try:
        html = load_document(document)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"❌ Error: could not read {document}: {e}")
        raise typer.Exit(1)

    try:
        config = AuditConfig.from_env(
            run_limit=limit, stale_years=years, tracking_repository=tracking_repo
        )
        now = parse_date_input(as_of) if as_of else datetime.now(timezone.utc)
        run_date = now.date()

        with GitHubClient(
            token=token, api_url=config.api_url, timeout=config.timeout
        ) as client:
            console.print(
                f"🔎 Loading reported repositories from {config.tracking_repository}"
            )
            flagged = load_flagged(client, config, run_date)

            console.print("🔍 Checking repositories...")
            classifier = StaleClassifier(client, config, flagged, now=now)
            result = classifier.run(extract_links(html))
            _print_summary(result, config)

            if dry_run and result.entries:
                console.print(f"📝 {issue_title(run_date, config.title_prefix)}")
                console.print(
                    render_issue_body(result.entries, config.messages), markup=False
                )

            issue = report(client, result.entries, config, run_date, dry_run=dry_run)

    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"❌ Unexpected error: {e}")
        console.print("Please check your GitHub token and network connection.")
        raise typer.Exit(1)

    if not result.entries:
        console.print("✅ No stale repositories found")
    elif issue is not None:
        console.print(f"✨ Created issue #{issue.number}: {issue.url}")
    else:
        console.print("🧪 Dry run: no issue created")
