"""Standardized CLI option definitions."""

import typer

DOCUMENT_ARGUMENT = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="Rendered HTML document containing the repository list",
)

LIMIT_OPTION = typer.Option(
    None,
    "--limit",
    "-l",
    help="Maximum number of newly flagged repositories (-1 for no limit)",
)

YEARS_OPTION = typer.Option(
    None, "--years", "-y", help="Years without commits before a repository is stale"
)

TRACKING_REPO_OPTION = typer.Option(
    None,
    "--tracking-repo",
    "-r",
    help="Repository that receives the tracking issue (owner/name)",
)

AS_OF_OPTION = typer.Option(
    None, "--as-of", help="Run as if today were this date (e.g., 2024-01-31)"
)

TOKEN_OPTION = typer.Option(
    None, "--token", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="Print the issue instead of creating it"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
