"""Run command - Plan and execute a request."""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from yeticore.application.factory import EngineFactory
from yeticore.core.domain.errors import YetiCoreError
from yeticore.core.domain.models import ActionStatus

app = typer.Typer(help="Execute requests")
console = Console()

_STATUS_STYLE = {
    ActionStatus.COMPLETED: "green",
    ActionStatus.FAILED: "red",
    ActionStatus.RUNNING: "yellow",
    ActionStatus.PENDING: "dim",
}


@app.command("request")
def run_request(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Free-text request"),
    user_id: Optional[str] = typer.Option(None, "--user-id", help="Owner of the engine instance"),
):
    """Plan a request and execute its actions.

    Examples:
        yeticore run request "fill the signup form and deploy my code"

        yeticore --debug run request "search for video marketing tips"
    """
    engine = EngineFactory(ctx.obj["settings"]).create_engine(user_id=user_id)
    task = engine.plan_task(text)

    if task.is_conversational:
        console.print("[yellow]No automation planned; respond conversationally.[/yellow]")
        raise typer.Exit(0)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        spinner = progress.add_task("[>] Executing task...", total=None)

        def progress_callback(update):
            progress.update(spinner, description=f"[>] {update.message}")

        try:
            outcome = asyncio.run(
                engine.execute_task(task.id, progress_callback=progress_callback)
            )
        except YetiCoreError as e:
            console.print(f"[red]Execution failed: {e}[/red]")
            raise typer.Exit(1)

    table = Table(title=f"Task {task.id}")
    table.add_column("Action", style="cyan")
    table.add_column("Status")
    table.add_column("Error", style="red")
    for action in task.actions:
        style = _STATUS_STYLE[action.status]
        table.add_row(
            action.type.value,
            f"[{style}]{action.status.value}[/{style}]",
            action.error or "",
        )
    console.print(table)
    console.print(f"\n[bold]Summary:[/bold] {outcome.summary}")

    if not outcome.success:
        raise typer.Exit(1)
