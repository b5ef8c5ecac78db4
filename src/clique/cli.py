"""Command-line interface for clique.

Thin glue over the library: every command locates a status document inside
the workspace, runs one parser or updater on its text and reports the result.

Example:
    $ clique workflow show --json
    $ clique workflow set prd complete
    $ clique sprint set 1-2-login-form in-progress --root ~/my-project
    $ clique path check docs/prd.md

Exit codes:
    0: Success
    1: Error (malformed document, unknown id, path outside workspace)
    2: Configuration error
"""

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from clique.core.config import CONFIG_FILENAME, CliqueConfig, load_config
from clique.core.exceptions import CliqueError, ConfigError
from clique.files import (
    find_sprint_status_files,
    find_workflow_status_file,
    read_document,
    write_document,
)
from clique.sprint import parse_sprint_status, update_story_status
from clique.workflow import parse_workflow_status, update_workflow_status
from clique.workspace import is_inside_workspace

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2

app = typer.Typer(
    name="clique",
    help="Read and update workflow and sprint status documents",
    no_args_is_help=True,
)
workflow_app = typer.Typer(
    name="workflow",
    help="Workflow status commands",
    no_args_is_help=True,
)
sprint_app = typer.Typer(
    name="sprint",
    help="Sprint status commands",
    no_args_is_help=True,
)
path_app = typer.Typer(
    name="path",
    help="Workspace path checks",
    no_args_is_help=True,
)
app.add_typer(workflow_app)
app.add_typer(sprint_app)
app.add_typer(path_app)

console = Console()

ROOT_OPTION = typer.Option(
    Path("."),
    "--root",
    "-r",
    help="Workspace root directory (default: current directory)",
)
FILE_OPTION = typer.Option(
    None,
    "--file",
    "-f",
    help="Status document path (default: discovered under the workspace root)",
)
JSON_OPTION = typer.Option(False, "--json", help="Print the parsed document as JSON")


def _error(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")


def _success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Read and update workflow and sprint status documents."""
    _setup_logging(verbose)


def _load_workspace_config(root: Path) -> CliqueConfig:
    try:
        return load_config(root / CONFIG_FILENAME)
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None


def _workflow_file(root: Path, file: Path | None, config: CliqueConfig) -> Path:
    if file is not None:
        return file
    found = find_workflow_status_file(root, config)
    if found is None:
        _error(f"No workflow status file found under {root}")
        raise typer.Exit(code=EXIT_ERROR)
    return found


def _sprint_file(root: Path, file: Path | None, config: CliqueConfig) -> Path:
    if file is not None:
        return file
    found = find_sprint_status_files(root, config)
    if not found:
        _error(f"No {config.sprint_status_filename} found under {root}")
        raise typer.Exit(code=EXIT_ERROR)
    if len(found) > 1:
        logger.info("Found %d sprint status files, using %s", len(found), found[0])
    return found[0]


def _print_json(data: dict[str, Any]) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


@workflow_app.command(name="show")
def workflow_show(
    root: Path = ROOT_OPTION,
    file: Path | None = FILE_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Show the items of the workflow status document."""
    root = root.resolve()
    config = _load_workspace_config(root)
    path = _workflow_file(root, file, config)
    try:
        data = parse_workflow_status(read_document(path, root, config))
    except CliqueError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None

    if as_json:
        _print_json(data.to_dict())
        return

    table = Table(title=data.project or str(path))
    table.add_column("Phase", justify="right")
    table.add_column("Workflow")
    table.add_column("Agent")
    table.add_column("Status")
    for item in data.items:
        table.add_row(
            escape(str(item.phase)),
            escape(item.id),
            escape(item.agent or ""),
            escape(item.status),
        )
    console.print(table)


@workflow_app.command(name="set")
def workflow_set(
    item_id: str = typer.Argument(..., help="Workflow id, e.g. prd"),
    status: str = typer.Argument(..., help="New status value"),
    root: Path = ROOT_OPTION,
    file: Path | None = FILE_OPTION,
) -> None:
    """Set one workflow item's status, leaving the rest of the file untouched."""
    root = root.resolve()
    config = _load_workspace_config(root)
    path = _workflow_file(root, file, config)
    try:
        updated = update_workflow_status(read_document(path, root, config), item_id, status)
        write_document(path, updated, root, config)
    except CliqueError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None
    _success(f"{item_id} → {status}")


@sprint_app.command(name="show")
def sprint_show(
    root: Path = ROOT_OPTION,
    file: Path | None = FILE_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Show the epics and stories of a sprint status document."""
    root = root.resolve()
    config = _load_workspace_config(root)
    path = _sprint_file(root, file, config)
    try:
        data = parse_sprint_status(read_document(path, root, config))
    except CliqueError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None

    if as_json:
        _print_json(data.to_dict())
        return

    table = Table(title=data.project)
    table.add_column("Entry")
    table.add_column("Status")
    for epic in data.epics:
        table.add_row(f"[bold]{escape(epic.name)}[/bold]", escape(epic.status))
        for story in epic.stories:
            table.add_row(f"  {escape(story.id)}", escape(story.status))
    console.print(table)


@sprint_app.command(name="set")
def sprint_set(
    story_id: str = typer.Argument(..., help="Story or epic key, e.g. 1-2-login-form"),
    status: str = typer.Argument(..., help="New status value"),
    root: Path = ROOT_OPTION,
    file: Path | None = FILE_OPTION,
) -> None:
    """Set one story's status, leaving the rest of the file untouched."""
    root = root.resolve()
    config = _load_workspace_config(root)
    path = _sprint_file(root, file, config)
    try:
        updated = update_story_status(read_document(path, root, config), story_id, status)
        write_document(path, updated, root, config)
    except CliqueError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None
    _success(f"{story_id} → {status}")


@path_app.command(name="check")
def path_check(
    path: str = typer.Argument(..., help="Path to check"),
    root: str | None = typer.Option(
        None, "--root", "-r", help="Workspace root (default: current directory)"
    ),
) -> None:
    """Check whether a path lies inside the workspace root.

    Relative paths are taken relative to the root. The check is purely
    textual; nothing is read from disk.
    """
    workspace_root = root if root is not None else str(Path.cwd())
    candidate = path
    if not Path(path).is_absolute() and not is_inside_workspace(path, workspace_root):
        candidate = str(Path(workspace_root) / path)

    if is_inside_workspace(candidate, workspace_root):
        _success(f"{path} is inside {workspace_root}")
        raise typer.Exit(code=EXIT_SUCCESS)
    _error(f"{path} is outside {workspace_root}")
    raise typer.Exit(code=EXIT_ERROR)
