"""Main CLI application module."""

from pathlib import Path

import typer

from src.catalog.runtime.config.config_template import load_templated_yaml
from src.catalog.runtime.context import set_config

from .db_commands import db_app
from .serve_commands import serve

app = typer.Typer(
    help="🛒 Product catalog CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def configure(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Load this YAML file instead of the default config.yaml",
    ),
) -> None:
    """Select the configuration used by every command."""
    if config is not None:
        set_config(load_templated_yaml(config))


app.add_typer(db_app, name="db")
app.command("serve")(serve)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
