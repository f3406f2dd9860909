"""CLI interface for runedit using Typer"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from runedit import __version__
from runedit.core.config import (
    load_config,
    load_config_or_none,
    create_config,
    CONFIG_FILE,
    ConfigNotFoundError,
    ConfigInvalidError,
)
from runedit.core.logging_setup import setup_logging
from runedit.core.run_file import RUN_FILE_SUFFIX, RunFileError, load_run, save_run
from runedit.models.run import Run, TimingMethod, default_run
from runedit.session import EditingSession

app = typer.Typer(
    name="runedit",
    help="runedit - TUI editor for speedrun splits",
    invoke_without_command=True,
)
console = Console()

logger = logging.getLogger(__name__)


def version_callback(value: bool):
    if value:
        console.print(f"runedit version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", callback=version_callback, help="Show version"
    ),
):
    """runedit - edit speedrun splits

    Run without arguments to launch the file picker TUI.
    """
    if ctx.invoked_subcommand is not None:
        return

    _run_file_picker()


def _load_config_or_exit():
    try:
        return load_config()
    except (ConfigNotFoundError, ConfigInvalidError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _load_run_or_exit(path: Path) -> Run:
    try:
        return load_run(path)
    except RunFileError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _run_file_picker():
    """Load config and launch file picker TUI"""
    from textual.app import App
    from runedit.tui.screens.file_picker import FilePickerScreen

    config = _load_config_or_exit()
    setup_logging(config.log_level)

    if not config.folder_path.exists():
        console.print(f"[red]Error:[/red] Folder does not exist: {config.folder}")
        console.print(f"Update the folder path in {CONFIG_FILE}")
        raise typer.Exit(1)

    if not config.get_run_files():
        console.print(f"[yellow]No {RUN_FILE_SUFFIX} files found in:[/yellow] {config.folder}")
        console.print("Create one with [bold]runedit new[/bold].")
        raise typer.Exit(1)

    class FilePickerApp(App):
        CSS = """
        Screen {
            background: $surface;
        }
        #header {
            padding: 1 2;
        }
        #help {
            padding: 0 2;
            color: $text-muted;
        }
        #file-list {
            margin: 1 2;
            height: 1fr;
        }
        """

        def on_mount(self):
            self.push_screen(FilePickerScreen(config))

    selected_file = FilePickerApp().run()

    if selected_file:
        _run_editor_app(Path(selected_file), config.default_timing_method)
    else:
        console.print("[dim]No file selected[/dim]")


def _run_editor_app(source_file: Path, timing_method: TimingMethod):
    """Launch the run editor TUI for one file"""
    from runedit.tui.app import RunEditorApp

    run = _load_run_or_exit(source_file)
    logger.info("Editing %s", source_file)

    result = RunEditorApp(source_file, run, timing_method).run()

    if result:
        console.print(f"[green]{result}[/green]")


@app.command()
def init(
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level written to the config"),
    game_time: bool = typer.Option(False, "--game-time", help="Edit game time by default"),
):
    """Create .runedit/config.yaml configuration file"""
    if CONFIG_FILE.exists():
        if not typer.confirm("Config file already exists. Overwrite?"):
            raise typer.Exit(0)

    console.print("[bold]runedit Configuration Setup[/bold]\n")

    folder = typer.prompt(
        "Enter absolute path to folder containing run files",
        default=str(Path.cwd()),
    )

    folder_path = Path(folder)
    if not folder_path.is_absolute():
        console.print("[red]Error:[/red] Path must be absolute")
        raise typer.Exit(1)

    if not folder_path.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {folder}")
        raise typer.Exit(1)

    method = TimingMethod.GAME_TIME if game_time else TimingMethod.REAL_TIME
    try:
        config = create_config(folder, log_level, method)
    except ConfigInvalidError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"\n[green]Created:[/green] {CONFIG_FILE}")
    console.print(f"[dim]Folder:[/dim] {config.folder}")
    console.print(f"[dim]Log level:[/dim] {config.log_level}  [dim]Timing:[/dim] {config.default_timing_method.value}")

    files = config.get_run_files()
    console.print(f"[dim]Found {len(files)} {RUN_FILE_SUFFIX} file(s)[/dim]")

    console.print("\nRun [bold]runedit[/bold] to start editing.")


@app.command()
def new(
    path: Path = typer.Argument(..., help="Run file to create"),
    game: str = typer.Option("Game", "--game", "-g", help="Game name"),
    category: str = typer.Option("Category", "--category", "-c", help="Category name"),
    segment: Optional[List[str]] = typer.Option(
        None, "--segment", "-s", help="Segment name (repeat for each segment)"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Create a new run file"""
    if not path.name.endswith(RUN_FILE_SUFFIX):
        path = path.with_name(path.name + RUN_FILE_SUFFIX)

    if path.exists() and not force:
        console.print(f"[red]Error:[/red] File already exists: {path}")
        raise typer.Exit(1)

    run = default_run(game, category, segment or None)
    save_run(path, run)
    console.print(f"[green]Created:[/green] {path}")
    console.print(f"[dim]{len(run.segments)} segment(s)[/dim]")


@app.command()
def show(
    path: Path = typer.Argument(..., help="Run file to show"),
    game_time: bool = typer.Option(False, "--game-time", help="Show game time instead of real time"),
):
    """Print the segments of a run file"""
    run = _load_run_or_exit(path)
    method = TimingMethod.GAME_TIME if game_time else TimingMethod.REAL_TIME

    session = EditingSession.open(run, method)
    snapshot = session.snapshot
    session.close(save=False)

    table = Table(title=f"{snapshot.game} - {snapshot.category}")
    table.add_column("#", style="dim")
    table.add_column("Segment", style="cyan")
    table.add_column("Split Time", justify="right")
    table.add_column("Segment Time", justify="right")
    table.add_column("Best Segment", justify="right", style="green")
    for name in snapshot.comparison_names:
        table.add_column(name, justify="right")

    for row in snapshot.segments:
        table.add_row(
            str(row.index + 1),
            row.name,
            row.split_time,
            row.segment_time,
            row.best_segment_time,
            *row.comparison_times,
        )

    console.print(table)
    console.print(
        f"[dim]Attempts:[/dim] {snapshot.attempts}  "
        f"[dim]Offset:[/dim] {snapshot.offset}  "
        f"[dim]Timing:[/dim] {snapshot.timing_method.value}"
    )


@app.command()
def edit(
    path: Path = typer.Argument(..., help="Run file to edit"),
    game_time: bool = typer.Option(False, "--game-time", help="Edit game time instead of real time"),
):
    """Open a run file in the editor TUI"""
    config = load_config_or_none()
    setup_logging(config.log_level if config else "INFO")

    if game_time:
        method = TimingMethod.GAME_TIME
    elif config:
        method = config.default_timing_method
    else:
        method = TimingMethod.REAL_TIME

    _run_editor_app(path, method)


def main():
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    main()
