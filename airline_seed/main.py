"""
Airline Seed CLI

Populates the airline schema with synthetic airports, planes, passengers and
flights. Runs once to completion, printing progress to the console. Targets
come from the environment (or a .env file) and can be overridden per run.

Usage:
    airline-seed seed [--airports 20] [--planes 20] [--passengers 20000] [--flights 2500]
    airline-seed stats
"""

import asyncio
import logging
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .database.config import DatabaseConfig
from .database.repository import SeedRepository
from .errors import SeedingError
from .models.report import ENTITIES, SeedReport, SeedTargets
from .services.seeder import Seeder
from .utils.config import SeedConfig, apply_overrides, load_config

# Initialize typer app and rich console
app = typer.Typer(help="Seed the airline database with synthetic data")
console = Console()

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(**overrides) -> SeedConfig:
    try:
        return apply_overrides(load_config(), **overrides)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=2)


async def run_seed(config: SeedConfig, create_tables: bool, out: Console) -> SeedReport:
    """Connect, optionally create tables, run the pipeline and close."""
    db_config = DatabaseConfig(database_url=config.database_url, echo=config.echo_sql)
    try:
        await db_config.initialize()
        if create_tables:
            await db_config.create_tables()

        repository = SeedRepository(db_config)
        seeder = Seeder.from_config(repository, config, console=out)
        targets = SeedTargets(
            airports=config.airport_count,
            planes=config.plane_count,
            passengers=config.passenger_count,
            flights=config.flight_count,
        )
        return await seeder.run(targets)
    finally:
        await db_config.close()


async def fetch_counts(config: SeedConfig) -> dict:
    db_config = DatabaseConfig(database_url=config.database_url, echo=config.echo_sql)
    try:
        await db_config.initialize()
        return await SeedRepository(db_config).table_counts()
    finally:
        await db_config.close()


def print_report(report: SeedReport) -> None:
    table = Table(title="Seeding Summary", box=box.ROUNDED)
    table.add_column("Entity", style="cyan")
    table.add_column("Before", justify="right")
    table.add_column("Created", justify="right", style="green")
    table.add_column("Total", justify="right", style="bold")

    created = report.created
    for entity in ENTITIES:
        table.add_row(
            entity,
            f"{report.before[entity]:,}",
            f"{created[entity]:,}",
            f"{report.after[entity]:,}",
        )

    console.print(table)
    console.print(f"[dim]Elapsed: {report.elapsed_seconds:.2f}s[/dim]")


@app.command()
def seed(
    airports: Optional[int] = typer.Option(None, "--airports", help="Target airport count"),
    planes: Optional[int] = typer.Option(None, "--planes", help="Target plane count"),
    passengers: Optional[int] = typer.Option(None, "--passengers", help="Target passenger count"),
    flights: Optional[int] = typer.Option(None, "--flights", help="Target flight count"),
    seed_value: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible fake data"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Async SQLAlchemy URL"),
    create_tables: bool = typer.Option(
        True, "--create-tables/--no-create-tables", help="Create missing tables before seeding"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Fill airports, planes, passengers and flights up to their targets."""
    config = _load(
        airport_count=airports,
        plane_count=planes,
        passenger_count=passengers,
        flight_count=flights,
        seed_value=seed_value,
        database_url=database_url,
        log_level="DEBUG" if verbose else None,
    )
    configure_logging(config.log_level)

    console.print(Panel.fit(
        f"[bold cyan]Airline Seed[/bold cyan] v{__version__}\n"
        f"Targets: {config.airport_count:,} airports, {config.plane_count:,} planes, "
        f"{config.passenger_count:,} passengers, {config.flight_count:,} flights",
        box=box.DOUBLE,
    ))
    console.print("Start seeding (large targets can take several minutes)...")

    try:
        report = asyncio.run(run_seed(config, create_tables, console))
    except (SQLAlchemyError, SeedingError) as e:
        logger.error(f"Seeding aborted: {e}")
        console.print(f"[red]✗ Seeding failed:[/red] {e}")
        raise typer.Exit(code=1)

    console.print("[green]✓[/green] Seeding finished.")
    print_report(report)


@app.command()
def stats(
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Async SQLAlchemy URL"),
):
    """Show current row counts per table."""
    config = _load(database_url=database_url)
    configure_logging(config.log_level)

    try:
        counts = asyncio.run(fetch_counts(config))
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Could not read counts:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title="Table Counts", box=box.ROUNDED)
    table.add_column("Table", style="cyan")
    table.add_column("Rows", justify="right", style="bold")
    for name, count in counts.items():
        table.add_row(name, f"{count:,}")
    console.print(table)


if __name__ == "__main__":
    app()
