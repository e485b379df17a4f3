"""Server CLI command."""

import typer
import uvicorn
from rich.panel import Panel

from src.catalog.runtime.context import get_config

from .utils import console


def serve(
    host: str | None = typer.Option(None, help="Host to bind; defaults to app.host"),
    port: int | None = typer.Option(None, help="Port to bind; defaults to app.port"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """
    🚀 Run the catalog API with uvicorn.
    """
    config = get_config().app
    host = host or config.host
    port = port or config.port

    console.print(
        Panel.fit(
            f"[bold green]Starting catalog API[/bold green] on http://{host}:{port}",
            border_style="green",
        )
    )
    uvicorn.run("src.catalog.api.http.app:app", host=host, port=port, reload=reload)
