"""Database management CLI commands."""

import typer
from rich.panel import Panel
from rich.table import Table

from src.catalog.core.errors import CatalogError
from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.runtime.context import get_config
from src.catalog.runtime.seed import seed_catalog

from .utils import console

db_app = typer.Typer(help="🗄️  Database commands")


@db_app.command("init")
def init(
    drop: bool = typer.Option(False, help="Drop every table before creating it again"),
) -> None:
    """
    🏗️  Create the catalog tables.

    Safe to run repeatedly; existing tables are left as they are unless --drop is given.
    """
    console.print(
        Panel.fit(
            f"[bold cyan]Initializing database[/bold cyan]\n{get_config().database.url}",
            border_style="cyan",
        )
    )
    manager = DbManageService(DbSessionService().engine)
    if drop:
        manager.drop_all()
        console.print("[yellow]Dropped existing tables[/yellow]")
    manager.create_all()
    console.print("[green]✅ Tables created[/green]")


@db_app.command("seed")
def seed() -> None:
    """
    🌱 Insert demo categories, products, variants and a voucher.
    """
    database_service = DbSessionService()
    DbManageService(database_service.engine).create_all()

    try:
        result = seed_catalog(database_service)
    except CatalogError as e:
        console.print(f"[red]❌ Seeding failed: {e.message} ({e.kind.value})[/red]")
        raise typer.Exit(1) from None

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Entity", style="cyan")
    table.add_column("Created", style="green", justify="right")
    table.add_row("Categories", str(result.categories))
    table.add_row("Products", str(result.products))
    table.add_row("Variants", str(result.variants))
    table.add_row("Vouchers", str(result.vouchers))
    console.print(table)
