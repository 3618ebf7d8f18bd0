"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .audit import audit

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="stale-repo-audit",
    help="Find stale GitHub repositories in a curated list and report them",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="audit", context_settings={"help_option_names": ["-h", "--help"]})(
    audit
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from stale_repo_audit import __version__

    console.print(f"Stale Repo Audit v{__version__}")


if __name__ == "__main__":
    app()
