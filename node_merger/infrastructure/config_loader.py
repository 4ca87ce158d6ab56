"""
Configuration loading infrastructure.
Reads the JSON (or YAML) descriptor and resolves its folders against the
config file's own directory.
"""

import json
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..domain.entities import MergerConfiguration
from ..domain.errors import MergerError

DEFAULT_CONFIG_PATH = Path("config.json")
YAML_SUFFIXES = (".yml", ".yaml")


class ConfigError(MergerError):
    """Raised when there's an error loading or parsing configuration."""
    pass


def expand_path(path: str) -> str:
    """Replace a leading ~ with the invoking user's home directory."""
    if not path.startswith("~"):
        return path
    # "~/src" and "~src" both land under the home directory
    rest = path[1:].lstrip("/\\")
    return os.path.join(str(Path.home()), rest)


def resolve_relative_path(base_path: Path, path: str) -> Path:
    """Resolve path against base_path unless it is already absolute."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return base_path / candidate


class JsonConfigLoader:
    """Loads merger configuration from a JSON file."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize with optional custom config path."""
        self.config_path = Path(
            os.path.abspath(config_path or DEFAULT_CONFIG_PATH)
        )

    @property
    def config_dir(self) -> Path:
        return self.config_path.parent

    def load_configuration(self) -> MergerConfiguration:
        """Load, parse and resolve the configuration."""
        raw_config = self._read_raw_config()

        if not isinstance(raw_config, dict):
            raise ConfigError(
                f"Configuration must be an object, got {type(raw_config).__name__}"
            )

        try:
            config = MergerConfiguration.model_validate(raw_config)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        return self._resolve_paths(config)

    def _read_raw_config(self):
        """Read the file and decode it according to its suffix."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as file:
                if self.config_path.suffix.lower() in YAML_SUFFIXES:
                    return yaml.safe_load(file)
                return json.load(file)

        except FileNotFoundError as e:
            raise ConfigError(
                f"Configuration file not found: {self.config_path}"
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON syntax: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Error reading configuration: {e}") from e

    def _resolve_paths(self, config: MergerConfiguration) -> MergerConfiguration:
        """Return a copy with both folders made absolute."""
        root_folder = resolve_relative_path(
            self.config_dir, expand_path(config.root_folder)
        )
        output_folder = resolve_relative_path(
            self.config_dir, expand_path(config.output_folder)
        )

        return config.model_copy(
            update={
                "root_folder": os.path.normpath(root_folder),
                "output_folder": os.path.normpath(output_folder),
            }
        )


def load_merger_configuration(config_path: Optional[Path] = None) -> MergerConfiguration:
    """Convenience function to load the configuration."""
    loader = JsonConfigLoader(config_path)
    return loader.load_configuration()
