"""
Domain entities for the node merger.
Configuration schema, file entries and merge results.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Size unit used by max_file_size_mb
MB = 1024 * 1024

COMMENT_MARKERS = ("//", "/*", "#")


class MergerConfiguration(BaseModel):
    """Settings read from the configuration file."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    root_folder: str = Field(default="", description="Folder scanned for projects")
    output_folder: str = Field(default="", description="Folder receiving 1.txt, 2.txt, ...")
    max_file_size_mb: int = Field(default=0, strict=True, description="Size cap per output file")
    blacklisted_folders: List[str] = Field(default_factory=list)
    ignored_file_types: List[str] = Field(default_factory=list)

    @field_validator("root_folder", "output_folder", mode="before")
    @classmethod
    def _null_path(cls, value):
        return "" if value is None else value

    @field_validator("max_file_size_mb", mode="before")
    @classmethod
    def _null_size(cls, value):
        return 0 if value is None else value

    @field_validator("blacklisted_folders", "ignored_file_types", mode="before")
    @classmethod
    def _null_list(cls, value):
        return [] if value is None else value

    @property
    def max_file_size_bytes(self) -> int:
        """Size cap in bytes."""
        return self.max_file_size_mb * MB

    @property
    def root_path(self) -> Path:
        return Path(self.root_folder)

    @property
    def output_path(self) -> Path:
        return Path(self.output_folder)


@dataclass(frozen=True)
class FileEntry:
    """A single source file ready to be appended to an output file."""

    relative_path: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        """Content length; the header line is not counted against the cap."""
        return len(self.content)

    @property
    def starts_with_comment(self) -> bool:
        """Whether the content already opens with a comment marker."""
        stripped = self.content.decode("utf-8", errors="ignore").strip()
        return any(stripped.startswith(marker) for marker in COMMENT_MARKERS)

    def render(self) -> bytes:
        """Header comment, raw content and blank-line separator."""
        # raw filesystem bytes, so undecodable names survive unchanged
        header = b"// " + os.fsencode(self.relative_path) + b"\n"
        return header + self.content + b"\n\n"


class MergeResult(BaseModel):
    """Result of merging one project."""

    project_path: Path
    output_files: List[Path] = Field(default_factory=list)
    total_files: int = 0
    total_bytes: int = 0
    comment_warnings: List[str] = Field(default_factory=list)
    skipped_root_files: int = 0
    skipped_ignored_files: int = 0
    skipped_blacklisted_dirs: int = 0
    execution_time_seconds: float = 0.0

    @property
    def total_size_mb(self) -> float:
        return self.total_bytes / MB

    @property
    def success(self) -> bool:
        """Whether anything was written."""
        return self.total_files > 0 and bool(self.output_files)

    def get_summary(self) -> str:
        """Get a human-readable summary of the results."""
        return (
            f"Merged {self.total_files} files "
            f"({self.total_size_mb:.2f} MB) into {len(self.output_files)} output files "
            f"in {self.execution_time_seconds:.2f}s"
        )
