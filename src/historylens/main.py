"""
HistoryLens CLI - relevance search over exported browsing history.

Main entry point for the command-line interface.
"""

import json
import sys
import time
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

app = typer.Typer(
    name="historylens",
    help="Search, summarize and format browsing history for LLM prompts",
    add_completion=False,
)

console = Console(soft_wrap=True)


def setup_logging(verbose: bool = False, quiet: bool = False):
    """Configure logging with loguru."""
    from historylens.config import get_settings

    settings = get_settings()
    logger.remove()  # Remove default handler

    if verbose:
        log_level = "DEBUG"
    elif quiet:
        log_level = "WARNING"
    else:
        log_level = settings.log_level.upper()

    # Console logging with colors
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=log_level,
        colorize=True,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="1 day",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}",
        )


def now_ms() -> float:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time() * 1000.0


def load_history(file_path: str):
    """
    Read a JSON array of history items and validate it into records.

    Raises:
        typer.Exit: If the file is missing or is not valid JSON
        InvalidHistoryInputError: If the entries do not match the schema
    """
    from historylens.models.schema import parse_history_records

    history_path = Path(file_path)
    if not history_path.exists():
        console.print(f"[red]Error:[/red] File not found: {escape(file_path)}")
        raise typer.Exit(1)

    with open(history_path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            console.print(f"[red]Error:[/red] {escape(file_path)} is not valid JSON: {escape(str(e))}")
            raise typer.Exit(1)

    records = parse_history_records(payload)
    logger.debug(f"Loaded {len(records):,} history records from {file_path}")
    return records


def fail(message: str, error: Exception, verbose: bool):
    console.print(f"\n[red]{message}:[/red] {escape(str(error))}")
    if verbose:
        import traceback
        console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
    raise typer.Exit(1)


@app.command()
def search(
    file_path: str = typer.Argument(..., help="JSON file with history items"),
    query: str = typer.Argument(..., help="Free-text query"),
    max_results: Optional[int] = typer.Option(None, "--max-results", "-n", help="Maximum number of results"),
    now: Optional[float] = typer.Option(None, "--now", help="Reference time in ms (default: current time)"),
    start: Optional[float] = typer.Option(None, "--start", help="Only visits at or after this time (ms)"),
    end: Optional[float] = typer.Option(None, "--end", help="Only visits at or before this time (ms)"),
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Rank history records against a query.

    Process: Load → Validate → Cap → Filter → Score → Rank → Truncate
    """
    setup_logging(verbose, quiet=json_output)

    try:
        from historylens.config import get_settings
        from historylens.core.search import get_searcher
        from historylens.models.schema import HistoryQuery
        from rich.table import Table

        records = load_history(file_path)
        current_time = now if now is not None else now_ms()
        history_query = HistoryQuery(
            text=query,
            start_time=start,
            end_time=end,
            max_results=max_results if max_results is not None else get_settings().default_max_results,
        )

        results = get_searcher().search(history_query, records, current_time)

        if json_output:
            console.print_json(data=[r.model_dump() for r in results])
            return

        if not results:
            console.print("[yellow]No matching history found[/yellow]")
            return

        table = Table(title=f"Results for '{escape(query)}'", show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Title", style="bold")
        table.add_column("URL", style="cyan")
        table.add_column("Visits", justify="right")

        for i, record in enumerate(results, 1):
            table.add_row(str(i), escape(record.title) or "[dim](untitled)[/dim]", escape(record.url), str(record.visit_count))

        console.print(table)
        console.print(f"\n[dim]{len(results)} of {len(records):,} records[/dim]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Error during search", e, verbose)


@app.command()
def domains(
    file_path: str = typer.Argument(..., help="JSON file with history items"),
    top: Optional[int] = typer.Option(None, "--top", "-t", help="Number of domains to show"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Show the most visited domains.
    """
    setup_logging(verbose)

    try:
        from historylens.core.domains import analyze_domain_patterns
        from rich.table import Table

        records = load_history(file_path)
        stats = analyze_domain_patterns(records, top_n=top)

        if not stats:
            console.print("[yellow]No valid history records[/yellow]")
            return

        table = Table(title="Top Domains", show_header=True)
        table.add_column("Domain", style="cyan")
        table.add_column("Entries", justify="right")
        table.add_column("Visits", justify="right", style="bold")

        for stat in stats:
            table.add_row(stat.domain, f"{stat.entry_count:,}", f"{stat.total_visits:,}")

        console.print(table)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Error during domain analysis", e, verbose)


@app.command("format")
def format_history(
    file_path: str = typer.Argument(..., help="JSON file with history items"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Rank against this query first"),
    max_chars: Optional[int] = typer.Option(None, "--max-chars", "-c", help="Character budget"),
    max_results: Optional[int] = typer.Option(None, "--max-results", "-n", help="Maximum number of entries"),
    now: Optional[float] = typer.Option(None, "--now", help="Reference time in ms (default: current time)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Render history as an LLM context block.
    """
    setup_logging(verbose, quiet=True)

    try:
        from historylens.config import get_settings
        from historylens.core.formatting import format_history_for_llm
        from historylens.core.search import find_relevant_history

        records = load_history(file_path)
        current_time = now if now is not None else now_ms()

        if query is not None:
            limit = max_results if max_results is not None else get_settings().default_max_results
            records = find_relevant_history(records, query, limit, current_time)

        text = format_history_for_llm(records, max_chars, current_time)
        console.print(text, end="", markup=False, highlight=False, emoji=False, soft_wrap=True)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Error during formatting", e, verbose)


@app.command()
def limits():
    """
    Display the active bounding policy.
    """
    from historylens.config import get_settings
    from rich.table import Table

    settings = get_settings()

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="bold")

    table.add_row("Max query length", f"{settings.max_query_length:,}")
    table.add_row("Max entries", f"{settings.max_entries:,}")
    table.add_row("Max scoring entries", f"{settings.max_scoring_entries:,}")
    table.add_row("Max field length", f"{settings.max_field_length:,}")
    table.add_row("Top domains", f"{settings.top_domains}")
    table.add_row("Default max results", f"{settings.default_max_results}")
    table.add_row("Default max chars", f"{settings.default_max_chars:,}")

    console.print(table)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
