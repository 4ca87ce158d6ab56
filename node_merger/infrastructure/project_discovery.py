"""
Project discovery infrastructure.
Finds the Node.js projects sitting directly under the root folder.
"""

import os
from pathlib import Path
from typing import List

from ..domain.errors import MergerError

MANIFEST_NAME = "package.json"


class DiscoveryError(MergerError):
    """Raised when the root folder cannot be listed."""
    pass


class ProjectDiscoveryEngine:
    """Discovers project directories by probing for a manifest file."""

    def __init__(self, manifest_name: str = MANIFEST_NAME):
        self.manifest_name = manifest_name

    def discover_projects(self, root_folder: Path) -> List[Path]:
        """Return immediate child directories holding the manifest, in name order."""
        root_folder = Path(root_folder)

        try:
            with os.scandir(root_folder) as entries:
                children = sorted(
                    (entry for entry in entries if entry.is_dir(follow_symlinks=False)),
                    key=lambda entry: entry.name,
                )
        except OSError as e:
            raise DiscoveryError(f"Cannot list {root_folder}: {e}") from e

        return [
            root_folder / child.name
            for child in children
            if self._has_manifest(root_folder / child.name)
        ]

    def _has_manifest(self, directory: Path) -> bool:
        """Check for the manifest directly inside the directory."""
        return (directory / self.manifest_name).exists()
