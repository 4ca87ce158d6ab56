"""Shared helpers and fixtures for the node merger tests."""

import json
from pathlib import Path

import pytest

from node_merger.domain.entities import MergerConfiguration


def write_file(path: Path, content: bytes = b"") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def write_config(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def read_outputs(output_dir: Path) -> dict:
    """Map output file name -> bytes."""
    return {p.name: p.read_bytes() for p in sorted(Path(output_dir).iterdir())}


@pytest.fixture
def make_config(tmp_path):
    """Build a resolved configuration pointing at tmp_path."""

    def _make(**overrides):
        values = {
            "root_folder": str(tmp_path / "root"),
            "output_folder": str(tmp_path / "out"),
            "max_file_size_mb": 1,
            "blacklisted_folders": ["node_modules"],
            "ignored_file_types": [".png"],
        }
        values.update(overrides)
        return MergerConfiguration(**values)

    return _make
