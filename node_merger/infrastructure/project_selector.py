"""
Project selection infrastructure.
Hands the discovered projects to an interactive chooser and returns the pick.
"""

import os
import shutil
import subprocess
import threading
from typing import Optional, Protocol, Sequence

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..domain.errors import MergerError

SELECTOR_ENV_VAR = "NODE_MERGER_SELECTOR"
FZF_EXECUTABLE = "fzf"


class SelectionError(MergerError):
    """Raised when no project could be selected."""
    pass


class ProjectSelector(Protocol):
    """Given a non-empty ordered list of candidates, return one of them."""

    def select(self, candidates: Sequence[str]) -> str:
        ...


class FzfSelector:
    """Delegates the choice to an external fzf process."""

    def __init__(self, executable: str = FZF_EXECUTABLE):
        self.executable = executable

    def select(self, candidates: Sequence[str]) -> str:
        """Feed candidates to fzf's stdin and read back its single-line answer."""
        command = shutil.which(self.executable)
        if command is None:
            raise SelectionError(f"'{self.executable}' was not found on PATH")

        try:
            process = subprocess.Popen(
                [command],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
            )
        except OSError as e:
            raise SelectionError(f"Could not start '{self.executable}': {e}") from e

        # Writing happens on its own thread so a full stdin pipe
        # cannot block the read of fzf's output.
        writer = threading.Thread(
            target=self._feed_candidates,
            args=(process.stdin, candidates),
            daemon=True,
        )
        writer.start()

        output = process.stdout.read()
        process.stdout.close()
        return_code = process.wait()
        writer.join()

        if return_code != 0:
            raise SelectionError(
                f"'{self.executable}' exited with status {return_code}"
            )

        selected = os.fsdecode(output).strip()
        if not selected:
            raise SelectionError("No project selected")
        return selected

    @staticmethod
    def _feed_candidates(stdin, candidates: Sequence[str]) -> None:
        try:
            for candidate in candidates:
                stdin.write(os.fsencode(candidate) + b"\n")
        except BrokenPipeError:
            # fzf exited before reading everything; its exit status decides
            pass
        finally:
            try:
                stdin.close()
            except BrokenPipeError:
                pass


class MenuSelector:
    """Numbered menu fallback for hosts without fzf."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def select(self, candidates: Sequence[str]) -> str:
        """Show a numbered table and prompt for an index."""
        if not candidates:
            raise SelectionError("No candidates to choose from")

        table = Table(title="Projects", show_header=True, header_style="bold magenta")
        table.add_column("#", style="yellow", no_wrap=True)
        table.add_column("Path", style="cyan")

        for index, candidate in enumerate(candidates, start=1):
            table.add_row(str(index), escape(candidate))

        self.console.print(table)

        try:
            choice = click.prompt(
                "Select a project",
                type=click.IntRange(1, len(candidates)),
                default=1,
            )
        except click.Abort as e:
            raise SelectionError("Selection aborted") from e

        return candidates[choice - 1]


class FirstCandidateSelector:
    """Non-interactive selector that always picks the first candidate."""

    def select(self, candidates: Sequence[str]) -> str:
        if not candidates:
            raise SelectionError("No candidates to choose from")
        return candidates[0]


SELECTORS = {
    "fzf": FzfSelector,
    "menu": MenuSelector,
    "first": FirstCandidateSelector,
}


def selector_from_environment(environ=None) -> ProjectSelector:
    """Build the selector named by NODE_MERGER_SELECTOR (fzf by default)."""
    environ = os.environ if environ is None else environ
    name = environ.get(SELECTOR_ENV_VAR, "").strip().lower() or "fzf"

    selector_class = SELECTORS.get(name)
    if selector_class is None:
        available = ", ".join(SELECTORS)
        raise SelectionError(
            f"Unknown selector '{name}' in {SELECTOR_ENV_VAR}. "
            f"Available selectors: {available}"
        )

    return selector_class()
