"""Pytest configuration and fixtures for ImportGraph CLI tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

from importgraph_cli.models import SourceFile


@pytest.fixture(autouse=True)
def _no_network(monkeypatch):
    """Fail fast instead of reaching PyPI from tests.

    Tests that exercise registry lookups patch ``urlopen`` themselves.
    """

    def _refuse(*args, **kwargs):
        raise AssertionError("network access attempted during tests")

    monkeypatch.setattr("urllib.request.urlopen", _refuse)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_project_path() -> Path:
    """Get path to sample test project."""
    return Path(__file__).parent / "fixtures" / "sample_project"


@pytest.fixture
def temp_config(temp_dir: Path, monkeypatch) -> Path:
    """Point config reads and writes at a temporary config.toml."""
    config_file = temp_dir / "config.toml"

    # Patch both config AND config_manager (config_manager imports at module load)
    monkeypatch.setattr("importgraph_cli.config.CONFIG_FILE", config_file)
    monkeypatch.setattr("importgraph_cli.config_manager.CONFIG_FILE", config_file)

    return config_file


@pytest.fixture
def sample_sources() -> List[SourceFile]:
    """Two small in-memory files sharing one third-party import."""
    return [
        SourceFile("pkg/a.py", "import os\nfrom requests import Session\n"),
        SourceFile("pkg/b.py", "import requests.adapters as ra\nimport json, numpy as np\n"),
    ]


@pytest.fixture
def tricky_python_code() -> str:
    """Source mixing real imports with import-looking strings and comments."""
    return '''"""Module docstring.

import ghost_in_docstring
"""
import os, sys as system, re
from collections.abc import Mapping
from . import sibling
from ..parent.pkg import thing
# import ghost_in_comment
message = "import ghost_in_string"
other = 'from ghost_single import x'
escaped = "say \\"import ghost_escaped\\" please"
import numpy.linalg as la  # trailing comment
from __future__ import annotations

def lazy():
    import yaml
    return yaml
'''
