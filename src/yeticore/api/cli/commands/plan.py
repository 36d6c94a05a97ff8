"""Plan command - Classify a request into a Task without executing it."""

import json

import typer
from rich.console import Console
from rich.table import Table

from yeticore.application.factory import EngineFactory

app = typer.Typer(help="Plan requests")
console = Console()


@app.command("request")
def plan_request(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Free-text request"),
    as_json: bool = typer.Option(False, "--json", help="Print the planned task as JSON"),
):
    """Show the subtasks, actions and priority planned for a request.

    Examples:
        yeticore plan request "search for the latest AI news"
    """
    engine = EngineFactory(ctx.obj["settings"]).create_engine()
    task = engine.plan_task(text)

    if as_json:
        typer.echo(json.dumps(task.to_dict(), indent=2, ensure_ascii=False))
        return

    console.print(f"[bold]Task:[/bold] {task.id}")
    console.print(f"[bold]Priority:[/bold] {task.priority.value}")
    console.print(f"[bold]Estimated duration:[/bold] {task.estimated_duration}s")
    if task.required_permissions:
        console.print(f"[bold]Permissions:[/bold] {', '.join(task.required_permissions)}")

    table = Table(title="Subtasks")
    table.add_column("#", style="dim")
    table.add_column("Subtask", style="cyan")
    for index, subtask in enumerate(task.subtasks, start=1):
        table.add_row(str(index), subtask)
    console.print(table)

    if task.is_conversational:
        console.print("[yellow]No automation planned; respond conversationally.[/yellow]")
        return

    actions = Table(title="Actions")
    actions.add_column("Type", style="cyan")
    actions.add_column("Parameters", style="white")
    for action in task.actions:
        actions.add_row(action.type.value, json.dumps(action.parameters, ensure_ascii=False))
    console.print(actions)
