"""CLI interface for todolist."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from todolist import __version__
from todolist.config import CONFIG_FILE, TodoConfig
from todolist.errors import StorageError
from todolist.logging_setup import setup_logging
from todolist.models import PRIORITIES, Task
from todolist.store import TaskStore

console = Console()

DATE_FORMAT = "%Y-%m-%d"
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MENU_TEXT = """
[bold]--- To-Do List Menu ---[/bold]
1. Add Task
2. View Pending Tasks
3. View Completed Tasks
4. Update Task
5. Delete Task
6. Mark Task as Complete
7. Exit"""


class DueDateType(click.ParamType):
    """A calendar date written as YYYY-MM-DD."""

    name = "date"

    def convert(
        self,
        value: object,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> date:
        if isinstance(value, date):
            return value
        text = str(value).strip()
        try:
            if not DATE_RE.match(text):
                raise ValueError(text)
            return datetime.strptime(text, DATE_FORMAT).date()
        except ValueError:
            self.fail(f"Invalid date {value!r}. Use YYYY-MM-DD.", param, ctx)


DUE_DATE = DueDateType()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="todo")
@click.option(
    "--file",
    "-f",
    "data_file",
    envvar="TODO_FILE",
    type=click.Path(dir_okay=False),
    help="Task file to use (default: .todo/tasks.json)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Config file to use (default: .todo/config.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, data_file: str | None, config_path: str | None, verbose: bool) -> None:
    """todo - a small task tracker.

    Run without a command for the interactive menu.

    \b
    Examples:
      todo                               # Interactive menu
      todo add "Buy milk" --due 2024-03-15 -p High
      todo list                          # Pending tasks, earliest due first
      todo done "buy milk"               # Titles match case-insensitively
    """
    ctx.ensure_object(dict)

    try:
        config = TodoConfig.load(Path(config_path) if config_path else None)
    except ValidationError as e:
        console.print(f"[red]Invalid config:[/red] {escape(str(e))}")
        ctx.exit(1)

    setup_logging("DEBUG" if verbose else config.log_level, config.log_file)

    ctx.obj["config"] = config
    ctx.obj["config_path"] = Path(config_path) if config_path else CONFIG_FILE
    ctx.obj["store"] = TaskStore.open(config.resolve_data_file(data_file))

    # If no subcommand, run the menu
    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


@main.command()
@click.pass_context
def menu(ctx: click.Context) -> None:
    """Interactive numbered menu."""
    store: TaskStore = ctx.obj["store"]

    actions: dict[str, Callable[[TaskStore], None]] = {
        "1": _menu_add,
        "2": lambda s: _print_tasks(s.list_tasks(completed=False), "Pending Tasks"),
        "3": lambda s: _print_tasks(s.list_tasks(completed=True), "Completed Tasks"),
        "4": _menu_update,
        "5": _menu_delete,
        "6": _menu_complete,
    }

    while True:
        console.print(MENU_TEXT)
        choice = click.prompt("Choose an option", default="", show_default=False).strip()

        if choice == "7":
            console.print("Goodbye!")
            return

        action = actions.get(choice)
        if action is None:
            console.print("[yellow]Invalid option. Try again.[/yellow]")
            continue

        try:
            action(store)
        except StorageError as e:
            _report_save_error(e)


def _prompt_task_fields(prefix: str = "") -> tuple[str, str, str, date]:
    """Prompt for title, description, priority and due date in that order."""
    title = click.prompt(f"Enter {prefix}title")
    description = click.prompt(f"Enter {prefix}description", default="", show_default=False)
    priority = click.prompt(
        f"Enter {prefix}priority ({', '.join(PRIORITIES)})",
        default="",
        show_default=False,
    )
    due_date = click.prompt(f"Enter {prefix}due date (YYYY-MM-DD)", type=DUE_DATE)
    return title, description, priority, due_date


def _menu_add(store: TaskStore) -> None:
    title, description, priority, due_date = _prompt_task_fields()
    store.add(title, description, priority, due_date)
    console.print(f"[green]Task added:[/green] {escape(title)}")


def _menu_update(store: TaskStore) -> None:
    old_title = click.prompt("Enter task title to update")
    if store.find(old_title) is None:
        console.print("[red]Task not found.[/red]")
        return

    new_title, description, priority, due_date = _prompt_task_fields("new ")
    store.update(old_title, new_title, description, priority, due_date)
    console.print(f"[green]Task updated:[/green] {escape(new_title)}")


def _menu_delete(store: TaskStore) -> None:
    title = click.prompt("Enter task title to delete")
    removed = store.delete(title)
    console.print(f"[green]Deleted {removed} task(s).[/green]")


def _menu_complete(store: TaskStore) -> None:
    title = click.prompt("Enter task title to mark as complete")
    if store.mark_complete(title):
        console.print(f"[green]Task completed:[/green] {escape(title)}")
    else:
        console.print("[red]Task not found.[/red]")


def _print_tasks(tasks: list[Task], title: str) -> None:
    """Render tasks as a table."""
    if not tasks:
        console.print(f"[dim]No tasks ({title.lower()}).[/dim]")
        return

    table = Table(title=title, show_header=True)
    table.add_column("Title", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Priority", style="white")
    table.add_column("Due Date", style="white")
    table.add_column("Completed", style="white")

    for task in tasks:
        table.add_row(
            escape(task.title),
            escape(task.description),
            escape(task.priority),
            task.dueDate.isoformat(),
            "[green]Yes[/green]" if task.isComplete else "[dim]No[/dim]",
        )

    console.print(table)


def _report_save_error(error: StorageError) -> None:
    console.print(f"[red]Error saving tasks:[/red] {escape(error.reason)}")


@main.command()
@click.argument("title")
@click.option("--due", "due_date", type=DUE_DATE, required=True, help="Due date (YYYY-MM-DD)")
@click.option("--description", "-d", default="", help="Task description")
@click.option("--priority", "-p", default="Medium", help="Priority (High, Medium, Low)")
@click.pass_context
def add(ctx: click.Context, title: str, due_date: date, description: str, priority: str) -> None:
    """Add a new task."""
    store: TaskStore = ctx.obj["store"]

    try:
        store.add(title, description, priority, due_date)
    except StorageError as e:
        _report_save_error(e)
        ctx.exit(1)

    console.print(f"[green]Task added:[/green] {escape(title)}")


@main.command("list")
@click.option("--completed", "-c", is_flag=True, help="Show completed tasks instead of pending")
@click.option("--plain", is_flag=True, help="One line per task, no table")
@click.pass_context
def list_command(ctx: click.Context, completed: bool, plain: bool) -> None:
    """List pending (or completed) tasks, earliest due date first."""
    store: TaskStore = ctx.obj["store"]
    tasks = store.list_tasks(completed=completed)

    if plain:
        for task in tasks:
            click.echo(str(task))
        return

    title = "Completed Tasks" if completed else "Pending Tasks"
    _print_tasks(tasks, title)


@main.command()
@click.argument("title")
@click.option("--title", "-t", "new_title", help="New title")
@click.option("--description", "-d", help="New description")
@click.option("--priority", "-p", help="New priority")
@click.option("--due", "due_date", type=DUE_DATE, help="New due date (YYYY-MM-DD)")
@click.pass_context
def update(
    ctx: click.Context,
    title: str,
    new_title: str | None,
    description: str | None,
    priority: str | None,
    due_date: date | None,
) -> None:
    """Update the first task whose title matches.

    Fields that are not given keep their current value.

    Example:

        todo update "buy milk" --title "Buy oat milk" --due 2024-01-02
    """
    store: TaskStore = ctx.obj["store"]

    task = store.find(title)
    if task is None:
        console.print(f"[red]Task not found:[/red] {escape(title)}")
        ctx.exit(1)

    try:
        store.update(
            title,
            new_title if new_title is not None else task.title,
            description if description is not None else task.description,
            priority if priority is not None else task.priority,
            due_date if due_date is not None else task.dueDate,
        )
    except StorageError as e:
        _report_save_error(e)
        ctx.exit(1)

    console.print(f"[green]Task updated:[/green] {escape(task.title)}")


@main.command()
@click.argument("title")
@click.pass_context
def delete(ctx: click.Context, title: str) -> None:
    """Delete every task whose title matches."""
    store: TaskStore = ctx.obj["store"]

    try:
        removed = store.delete(title)
    except StorageError as e:
        _report_save_error(e)
        ctx.exit(1)

    console.print(f"[green]Deleted {removed} task(s).[/green]")


@main.command()
@click.argument("title")
@click.pass_context
def done(ctx: click.Context, title: str) -> None:
    """Mark a task as complete."""
    store: TaskStore = ctx.obj["store"]

    try:
        found = store.mark_complete(title)
    except StorageError as e:
        _report_save_error(e)
        ctx.exit(1)

    if found:
        console.print(f"[green]Task completed:[/green] {escape(title)}")
    else:
        console.print(f"[red]Task not found:[/red] {escape(title)}")
        ctx.exit(1)


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Write the current settings to the config file.

    Starts from defaults (or the loaded config) so the file can be edited
    by hand afterwards.
    """
    config: TodoConfig = ctx.obj["config"]
    path: Path = ctx.obj["config_path"]

    if path.exists() and not force:
        console.print(
            f"[yellow]Config already exists:[/yellow] {escape(str(path))} "
            "Use --force to overwrite."
        )
        return

    config.save(path)
    console.print(f"[green]Config saved:[/green] {escape(str(path))}")
