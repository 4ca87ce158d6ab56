"""
Node Merger

Concatenates the sources of a selected Node.js project into
size-capped numbered text files.
"""

__version__ = "1.0.0"
__description__ = (
    "Merge a Node.js project's source files into size-capped text files"
)

# Public API exports
from .application.merge_project import MergeProjectUseCase, WalkError
from .domain.entities import FileEntry, MergerConfiguration, MergeResult
from .domain.errors import MergerError
from .infrastructure.config_loader import (
    ConfigError,
    JsonConfigLoader,
    load_merger_configuration,
)
from .infrastructure.project_discovery import DiscoveryError, ProjectDiscoveryEngine
from .infrastructure.project_selector import (
    FirstCandidateSelector,
    FzfSelector,
    MenuSelector,
    ProjectSelector,
    SelectionError,
    selector_from_environment,
)

__all__ = [
    "MergeProjectUseCase",
    "MergerConfiguration",
    "MergeResult",
    "FileEntry",
    "load_merger_configuration",
    "JsonConfigLoader",
    "ProjectDiscoveryEngine",
    "ProjectSelector",
    "FzfSelector",
    "MenuSelector",
    "FirstCandidateSelector",
    "selector_from_environment",
    "MergerError",
    "ConfigError",
    "DiscoveryError",
    "SelectionError",
    "WalkError",
]
