"""yeticore CLI entry point."""

import logging
from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.table import Table

from yeticore.api.cli.commands import plan, run
from yeticore.config.settings import EngineSettings

app = typer.Typer(
    name="yeticore",
    help="yeticore - agent task planning and execution engine",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(plan.app, name="plan", help="Plan a request without executing it")
app.add_typer(run.app, name="run", help="Plan and execute a request")


def configure_logging(debug: bool, log_level: str = "WARNING") -> int:
    """Configure structlog; ``--debug`` wins over the configured level."""
    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
    return level


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """yeticore CLI."""
    settings = EngineSettings.load_from_file(config) if config else EngineSettings()
    configure_logging(debug, settings.log_level)
    ctx.obj = {"settings": settings, "debug": debug}


@app.command()
def capabilities(ctx: typer.Context):
    """List declared capabilities and which action types have a handler."""
    from yeticore.application.factory import EngineFactory

    engine = EngineFactory(ctx.obj["settings"]).create_engine()

    table = Table(title="Capabilities")
    table.add_column("Capability", style="cyan")
    table.add_column("Handler", style="white")
    for capability in engine.capabilities.capabilities():
        has_handler = capability in {t.value for t in engine.dispatch_table.types()}
        table.add_row(capability, "yes" if has_handler else "-")
    console.print(table)


@app.command()
def version():
    """Show yeticore version."""
    from yeticore import __version__

    console.print(f"[bold blue]yeticore[/bold blue] version [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
