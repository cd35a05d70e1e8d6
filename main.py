#!/usr/bin/env python3
"""
Command line entry point for the football crawler and predictor.
"""

import argparse
import logging
import os
import sys
from typing import Callable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from analysis.prediction_engine import MatchPrediction
from configurations import AppConfig, DatabaseConfig, get_config
from database.services.database_service import FootballDatabaseService
from exceptions import (
    FetchFailed,
    InsufficientHistory,
    NoSuitableTable,
    PersistenceFailed,
    SchemaInitializationError,
    TimeoutWaitingForContent,
)
from logger import configure_logging
from pipelines import BatchReport, FootballCommands, MatchPreview

logger = logging.getLogger(__name__)

# ***> Errors shown to the user as a message with exit code 1 <***
COMMAND_ERRORS = (
    FetchFailed,
    TimeoutWaitingForContent,
    NoSuitableTable,
    PersistenceFailed,
    InsufficientHistory,
    LookupError,
    ValueError,
)

CommandsFactory = Callable[[AppConfig], FootballCommands]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Football statistics crawler and match predictor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s init-db
  %(prog)s sync https://fbref.com/en/comps/9/schedule/Premier-League-Scores-and-Fixtures
  %(prog)s crawl https://fbref.com/en/comps/9/Premier-League-Stats
  %(prog)s backfill 42
  %(prog)s matches --limit 20
  %(prog)s predict 42
        """,
    )
    parser.add_argument(
        "--environment",
        default=os.getenv("ENVIRONMENT", "development"),
        choices=["development", "testing", "production"],
        help="Configuration environment",
    )
    parser.add_argument("--database-url", help="Override the database URL")
    parser.add_argument(
        "--browser",
        action="store_true",
        help="Load match reports through the polling browser",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--no-log-file", action="store_true", help="Log to the console only"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create tables and migrate legacy data")

    sync = subparsers.add_parser("sync", help="Store upcoming fixtures of a league")
    sync.add_argument("league_url", help="League schedule page URL")

    crawl = subparsers.add_parser(
        "crawl", help="Crawl every team of a league and store their matches"
    )
    crawl.add_argument("league_url", help="League stats page URL")

    backfill = subparsers.add_parser(
        "backfill", help="Backfill recent history of both teams of a stored match"
    )
    backfill.add_argument("event_id", type=int, help="Stored match id")

    matches = subparsers.add_parser("matches", help="List stored matches")
    matches.add_argument("--limit", type=int, help="Show at most this many rows")

    predict = subparsers.add_parser("predict", help="Predict a stored match")
    predict.add_argument("event_id", type=int, help="Stored match id")

    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    config = get_config(args.environment)
    if args.database_url:
        config.database = DatabaseConfig.from_url(args.database_url)
    if args.browser:
        config.crawler.report_mode = "browser"
    if args.debug:
        config.log_level = "DEBUG"
    if args.no_log_file:
        config.log_dir = None
    return config


# ***> Rendering <***


def render_matches(matches: List[MatchPreview]) -> Table:
    table = Table(
        title="Stored matches",
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Time")
    table.add_column("Home", style="green")
    table.add_column("Score", justify="center")
    table.add_column("Away", style="green")
    table.add_column("xG", justify="center")
    table.add_column("Status")
    table.add_column("Venue")

    for match in matches:
        xg = (
            f"{match.xg_home:.2f} - {match.xg_away:.2f}"
            if match.xg_home is not None and match.xg_away is not None
            else ""
        )
        table.add_row(
            str(match.id),
            match.date,
            match.time or "",
            match.home_team,
            match.score,
            match.away_team,
            xg,
            match.status,
            match.venue or "",
        )
    return table


def render_prediction(match: MatchPreview, prediction: MatchPrediction) -> Table:
    table = Table(
        title=f"{match.home_team} vs {match.away_team} ({match.date})",
        box=box.ROUNDED,
        header_style="bold magenta",
    )
    table.add_column("Market", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="green")

    table.add_row("Expected goals (home)", f"{prediction.xg_home:.2f}")
    table.add_row("Expected goals (away)", f"{prediction.xg_away:.2f}")
    table.add_row("Home win", f"{prediction.home_win:.1%}")
    table.add_row("Draw", f"{prediction.draw:.1%}")
    table.add_row("Away win", f"{prediction.away_win:.1%}")
    table.add_row("Over 2.5 goals", f"{prediction.over_2_5:.1%}")
    table.add_row("Both teams score", f"{prediction.btts:.1%}")
    return table


def print_report(console: Console, label: str, report: BatchReport) -> None:
    console.print(f"[bold]{label}:[/bold] {report.summary()}")
    for url in report.failed_urls:
        console.print(f"  [red]failed[/red] {url}")


# ***> Dispatch <***


def run_command(
    args: argparse.Namespace,
    config: AppConfig,
    console: Console,
    commands_factory: Optional[CommandsFactory] = None,
) -> int:
    """
    Execute one parsed command.

    Returns:
        Process exit code
    """
    if args.command == "init-db":
        database = FootballDatabaseService(config.database)
        try:
            database.init_schema()
        finally:
            database.cleanup()
        console.print(
            f"[green]Database ready[/green] ({config.database.database_type})"
        )
        return 0

    commands_factory = commands_factory or FootballCommands.from_config
    with commands_factory(config) as commands:
        if args.command == "sync":
            saved = commands.sync_upcoming_fixtures(args.league_url)
            console.print(f"[green]Saved {saved} fixtures[/green]")

        elif args.command == "crawl":
            print_report(console, "League crawl", commands.crawl_league(args.league_url))

        elif args.command == "backfill":
            print_report(
                console, "History backfill", commands.backfill_history(args.event_id)
            )

        elif args.command == "matches":
            matches = commands.get_stored_matches()
            if args.limit:
                matches = matches[: args.limit]
            if not matches:
                console.print("[yellow]No stored matches[/yellow]")
            else:
                console.print(render_matches(matches))

        elif args.command == "predict":
            analysis = commands.get_match_analysis(args.event_id)
            if analysis.prediction is None:
                console.print(f"[red]Error:[/red] {analysis.prediction_error}")
                return 1
            console.print(render_prediction(analysis.match, analysis.prediction))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    try:
        config = load_config(args)
        configure_logging(
            config.log_level, config.log_dir, rotation=config.log_rotation
        )
        return run_command(args, config, console)

    except SchemaInitializationError as e:
        console.print(f"[bold red]Database initialization failed:[/bold red] {e}")
        logger.critical("Schema initialization failed: %s", e, exc_info=True)
        return 1
    except COMMAND_ERRORS as e:
        console.print(f"[red]Error ({type(e).__name__}):[/red] {e}")
        logger.error("Command %s failed: %s", args.command, e)
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
