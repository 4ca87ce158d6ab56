"""
Output infrastructure.
Prepares the output folder and writes entries into numbered, size-capped files.
"""

import shutil
from pathlib import Path
from typing import BinaryIO, List, Optional

from ..domain.entities import FileEntry

OUTPUT_SUFFIX = ".txt"


def clean_output_directory(output_dir: Path) -> None:
    """Remove the output folder with its contents and recreate it empty."""
    output_dir = Path(output_dir)
    if output_dir.is_dir() and not output_dir.is_symlink():
        shutil.rmtree(output_dir)
    elif output_dir.exists() or output_dir.is_symlink():
        output_dir.unlink()
    output_dir.mkdir(parents=True, exist_ok=True)


def output_file_name(index: int) -> str:
    return f"{index}{OUTPUT_SUFFIX}"


class RotatingOutputWriter:
    """Appends entries to 1.txt, 2.txt, ... rotating before the cap is exceeded.

    The size of an entry is its content length. An entry is never split: one
    that is larger than the cap on its own lands whole in a fresh file.
    """

    def __init__(self, output_dir: Path, max_bytes: int):
        self.output_dir = Path(output_dir)
        self.max_bytes = max_bytes
        self.next_index = 1
        self.current_size = 0
        self.written_files: List[Path] = []
        self._handle: Optional[BinaryIO] = None

    def __enter__(self) -> "RotatingOutputWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def current_path(self) -> Optional[Path]:
        if self._handle is None:
            return None
        return self.written_files[-1]

    def needs_rotation(self, entry: FileEntry) -> bool:
        """Whether the entry has to go into a new output file."""
        if self._handle is None:
            return True
        return self.current_size + entry.size_bytes > self.max_bytes

    def write(self, entry: FileEntry) -> Path:
        """Append the entry, opening the next file first when needed."""
        if self.needs_rotation(entry):
            self._rotate()

        self._handle.write(entry.render())
        self._handle.flush()
        self.current_size += entry.size_bytes
        return self.current_path

    def _rotate(self) -> None:
        self.close()

        path = self.output_dir / output_file_name(self.next_index)
        self._handle = open(path, "wb")
        self.written_files.append(path)
        self.next_index += 1
        self.current_size = 0

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
