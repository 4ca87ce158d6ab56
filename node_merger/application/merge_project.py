"""
Application use case for merging a selected project into output files.
Walks the project depth-first, filters files and rotates output files.
"""

import os
import time
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console

from ..domain.entities import FileEntry, MergerConfiguration, MergeResult
from ..domain.errors import MergerError
from ..infrastructure.output_writer import RotatingOutputWriter, clean_output_directory

# Global console for rich output
console = Console()


class WalkError(MergerError):
    """Raised when reading or writing fails during the merge."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


def is_blacklisted(path: Path, blacklisted_folders: List[str]) -> bool:
    """Substring match of any fragment against the full path."""
    path_str = str(path)
    return any(fragment in path_str for fragment in blacklisted_folders)


def is_in_root(project_root: Path, file_path: Path) -> bool:
    """Whether the file sits directly in the project's top-level directory."""
    try:
        relative = file_path.relative_to(project_root)
    except ValueError:
        return False
    return len(relative.parts) == 1


def has_ignored_suffix(path: Path, ignored_file_types: List[str]) -> bool:
    """Plain string suffix test, so '.js' also matches 'foo.test.js'."""
    path_str = str(path)
    return any(path_str.endswith(suffix) for suffix in ignored_file_types)


def _default_warn(message: str) -> None:
    console.print(message, markup=False, highlight=False)


class MergeProjectUseCase:
    """Merges one project's source files into size-capped output files."""

    def __init__(
        self,
        config: MergerConfiguration,
        warn: Optional[Callable[[str], None]] = None,
    ):
        """Initialize with the resolved configuration and a warning sink."""
        self.config = config
        self.warn = warn or _default_warn

    def prepare_output_directory(self) -> None:
        """Wipe and recreate the output folder."""
        try:
            clean_output_directory(self.config.output_path)
        except OSError as e:
            raise WalkError(
                f"Cannot clean output directory {self.config.output_path}: {e}",
                self.config.output_path,
            ) from e

    def execute(self, project_root: Path, clean_output: bool = True) -> MergeResult:
        """Walk the project and write every eligible file."""
        start_time = time.time()
        project_root = Path(project_root)

        if clean_output:
            self.prepare_output_directory()

        result = MergeResult(project_path=project_root)
        writer = RotatingOutputWriter(
            self.config.output_path, self.config.max_file_size_bytes
        )

        with writer:
            self._walk(project_root, project_root, writer, result)

        result.output_files = list(writer.written_files)
        result.execution_time_seconds = time.time() - start_time
        return result

    def _walk(
        self,
        directory: Path,
        project_root: Path,
        writer: RotatingOutputWriter,
        result: MergeResult,
    ) -> None:
        """Depth-first traversal in name order."""
        if is_blacklisted(directory, self.config.blacklisted_folders):
            result.skipped_blacklisted_dirs += 1
            return

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise WalkError(f"Cannot list {directory}: {e}", directory) from e

        for entry in entries:
            path = directory / entry.name

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise WalkError(f"Cannot stat {path}: {e}", path) from e

            if is_dir:
                self._walk(path, project_root, writer, result)
            else:
                self._merge_file(path, project_root, writer, result)

    def _merge_file(
        self,
        path: Path,
        project_root: Path,
        writer: RotatingOutputWriter,
        result: MergeResult,
    ) -> None:
        """Filter, read and append a single file."""
        if is_in_root(project_root, path):
            result.skipped_root_files += 1
            return

        if has_ignored_suffix(path, self.config.ignored_file_types):
            result.skipped_ignored_files += 1
            return

        try:
            content = path.read_bytes()
        except OSError as e:
            raise WalkError(f"Cannot read {path}: {e}", path) from e

        entry = FileEntry(
            relative_path=str(path.relative_to(project_root)),
            content=content,
        )

        if entry.starts_with_comment:
            display_path = entry.relative_path.encode("utf-8", "backslashreplace").decode("utf-8")
            self.warn(f"Warning: The file {display_path} starts with a comment.")
            result.comment_warnings.append(entry.relative_path)

        try:
            writer.write(entry)
        except OSError as e:
            raise WalkError(f"Cannot write {entry.relative_path}: {e}", path) from e

        result.total_files += 1
        result.total_bytes += entry.size_bytes
