"""CLI commands for lctrack.

Commands:
- build: Populate the problems table from a problem bank
- next (n): Show the next unattempted problem
- attempt: Log an attempt for a problem
- resolve-id: Print the LeetCode ID for a problem URL

The resolver is also exposed on its own as the get-lc-id script.
"""

import logging
import sqlite3
import sys
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

import structlog
import typer
from rich.console import Console

from lctrack.config.app_config import AppConfig, DatabaseConfig, load_app_config
from lctrack.core.attempts import AttemptRating
from lctrack.core.id_resolver import resolve_question_id
from lctrack.core.problem_bank import ProblemBankError, populate_problem_bank
from lctrack.db.database import init_db
from lctrack.db.problems_repository import fetch_next_unattempted_problem
from lctrack.db.progress_repository import ProgressNotFoundError, record_attempt

app = typer.Typer(
    name="lctrack",
    help="Track your LeetCode progress.",
    no_args_is_help=True,
)

resolve_app = typer.Typer(
    name="get-lc-id",
    help="Print the LeetCode problem ID for a problem URL.",
    add_completion=False,
)

console = Console()


def _stderr_logger_factory(*args):
    # Looked up per call so redirected streams are honoured
    return structlog.PrintLogger(sys.stderr)


def _configure_logging(verbose: bool = False) -> None:
    """Send structlog output to stderr so stdout stays pipe-friendly."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def _print_question_id(url: str | None, prog: str, endpoint: str) -> None:
    """Resolve and print a question ID; empty output if it can't be resolved."""
    if not url:
        console.print(f"Usage: {prog} <leetcode_url>")
        raise typer.Exit(code=1)

    question_id = resolve_question_id(url, endpoint=endpoint)
    if question_id:
        typer.echo(question_id)


def _open_db(ctx: typer.Context) -> AppConfig:
    config: AppConfig = ctx.obj
    init_db(config.database.path)
    return config


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    return datetime.strptime(value, "%Y-%m-%d").date()


@app.callback()
def main(
    ctx: typer.Context,
    db: Path | None = typer.Option(None, "--db", help="SQLite database file"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Track your LeetCode progress."""
    _configure_logging(verbose)
    app_config = load_app_config(config)
    if db is not None:
        app_config = replace(app_config, database=DatabaseConfig(path=db))
    ctx.obj = app_config


@app.command()
def build(
    ctx: typer.Context,
    bank: str = typer.Argument(..., help="Problem bank JSON file name"),
    bank_dir: Path | None = typer.Option(
        None, "--bank-dir", help="Directory holding bank files"
    ),
) -> None:
    """Populate the database from a problem bank file."""
    config = _open_db(ctx)
    endpoint = config.resolver.graphql_url

    console.print(f"Loading problem bank '{bank}'...")
    try:
        result = populate_problem_bank(
            bank,
            bank_dir=bank_dir or config.bank.dir,
            resolver=lambda url: resolve_question_id(url, endpoint=endpoint),
        )
    except ProblemBankError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"[green]✓ Loaded {result.loaded} problems[/green] "
        f"({result.inserted} new, {result.already_present} already present)"
    )
    if result.skipped:
        console.print(f"[yellow]⚠ Skipped {len(result.skipped)} with unresolved IDs:[/yellow]")
        for name in result.skipped:
            console.print(f"  - {name}")


@app.command(name="next")
def next_problem(ctx: typer.Context) -> None:
    """Show the next unattempted problem to practice."""
    _open_db(ctx)

    problem = fetch_next_unattempted_problem()
    if problem is None:
        console.print("[green]🎉 Congratulations! You have attempted all problems![/green]")
        return

    console.print(f"Next up is: #{problem.order} - {problem.name}")
    console.print(f"  [dim]LeetCode ID:[/dim] {problem.id}")
    if problem.difficulty:
        console.print(f"  [dim]Difficulty:[/dim]  {problem.difficulty.value}")
    if problem.week is not None:
        console.print(f"  [dim]Week:[/dim]        {problem.week}")


app.command(name="n", hidden=True)(next_problem)


@app.command()
def attempt(
    ctx: typer.Context,
    problem_id: int = typer.Argument(..., metavar="ID", help="LeetCode problem ID"),
    rating: int = typer.Argument(
        ...,
        help="Rating 1-5 (1=ShortFail, 2=LongFail, 3=Messy, 4=Hard, 5=Easy)",
    ),
    attempt_date: str | None = typer.Argument(
        None, metavar="DATE", help="Attempt date YYYY-MM-DD (default: today)"
    ),
) -> None:
    """Log an attempt for a specific problem."""
    try:
        attempt_rating = AttemptRating.from_score(rating)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    try:
        when = _parse_date(attempt_date)
    except ValueError:
        console.print(f"[red]✗ Invalid date '{attempt_date}'. Use YYYY-MM-DD.[/red]")
        raise typer.Exit(code=1)

    _open_db(ctx)

    try:
        record = record_attempt(problem_id, attempt_rating, when)
    except sqlite3.IntegrityError as e:
        console.print(f"[red]✗ Could not log attempt for problem {problem_id}: {e}[/red]")
        raise typer.Exit(code=1)
    except ProgressNotFoundError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"[green]✓ Logged attempt #{record.number_of_attempts} for problem "
        f"{problem_id} with rating: {attempt_rating.value}[/green]"
    )
    if record.next_attempt_date:
        console.print(f"  [dim]Next review:[/dim] {record.next_attempt_date.isoformat()}")


@app.command(name="resolve-id")
def resolve_id(
    ctx: typer.Context,
    url: str | None = typer.Argument(None, help="LeetCode problem URL"),
) -> None:
    """Print the LeetCode problem ID for a problem URL."""
    config: AppConfig = ctx.obj
    _print_question_id(url, "lctrack resolve-id", config.resolver.graphql_url)


@resolve_app.command()
def get_lc_id(
    url: str | None = typer.Argument(None, help="LeetCode problem URL"),
) -> None:
    """Print the LeetCode problem ID for a problem URL."""
    _configure_logging()
    _print_question_id(url, "get-lc-id", load_app_config().resolver.graphql_url)


if __name__ == "__main__":
    app()
