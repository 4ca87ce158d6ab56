"""
Command line interface for the node merger.
Load config, discover projects, pick one, merge it.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from ..application.merge_project import MergeProjectUseCase, WalkError
from ..domain.entities import MergerConfiguration
from ..infrastructure.config_loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    JsonConfigLoader,
)
from ..infrastructure.project_discovery import DiscoveryError, ProjectDiscoveryEngine
from ..infrastructure.project_selector import (
    ProjectSelector,
    SelectionError,
    selector_from_environment,
)


# Global console for rich output
console = Console()


def _fail(context: str, error: Exception) -> None:
    """Print the error with its context and stop."""
    console.print(f"[red]{context}:[/red] {_display(error)}", highlight=False)
    sys.exit(1)


def _display(text) -> str:
    """Markup-safe printable form of text that may carry undecodable path bytes."""
    return escape(str(text).encode("utf-8", "backslashreplace").decode("utf-8"))


def _warn(message: str) -> None:
    console.print(f"[yellow]{escape(message)}[/yellow]", highlight=False)


def _load_configuration(config_path: Path) -> MergerConfiguration:
    loader = JsonConfigLoader(config_path)
    console.print(f"Config file: {escape(str(loader.config_path))}", highlight=False)
    try:
        return loader.load_configuration()
    except ConfigError as e:
        _fail("Error loading config", e)


def _select_project(candidates, selector: ProjectSelector) -> str:
    try:
        return selector.select([str(candidate) for candidate in candidates])
    except SelectionError as e:
        _fail("Error selecting project", e)


def run(config_path: Path, selector: Optional[ProjectSelector] = None) -> None:
    """Run the whole pipeline."""
    config = _load_configuration(config_path)

    console.print(f"Output folder: {escape(config.output_folder)}", highlight=False)
    console.print(f"Root folder: {escape(config.root_folder)}", highlight=False)

    use_case = MergeProjectUseCase(config, warn=_warn)

    try:
        use_case.prepare_output_directory()
    except WalkError as e:
        _fail("Error cleaning output directory", e)

    try:
        projects = ProjectDiscoveryEngine().discover_projects(config.root_path)
    except DiscoveryError as e:
        _fail("Error scanning projects", e)

    if not projects:
        console.print("[yellow]No Node.js projects found.[/yellow]")
        return

    if selector is None:
        try:
            selector = selector_from_environment()
        except SelectionError as e:
            _fail("Error selecting project", e)

    selected_project = _select_project(projects, selector)
    console.print(f"Selected project: {_display(selected_project)}", highlight=False)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True
        ) as progress:
            progress.add_task("Merging project files...", total=None)
            result = use_case.execute(Path(selected_project), clean_output=False)
    except WalkError as e:
        _fail("Error processing project", e)

    console.print("[green]✓[/green] Merging complete.")
    console.print(result.get_summary(), highlight=False)
    if not result.success:
        console.print("[yellow]Warning:[/yellow] No files matched the filters")


@click.command()
@click.option('--config', '-c', 'config_path',
              type=click.Path(path_type=Path),
              default=DEFAULT_CONFIG_PATH,
              show_default=True,
              help='Path to the configuration file')
def cli(config_path: Path):
    """
    Node Merger - concatenate a Node.js project's sources.

    Picks a project under the configured root folder and merges the files
    of its subdirectories into size-capped numbered text files.
    """
    run(config_path)


# Entry point for the CLI
def main():
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == '__main__':
    main()
