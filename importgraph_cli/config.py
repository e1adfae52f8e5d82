"""Configuration for ImportGraph scanning, registry lookups, and local state."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("IMPORTGRAPH_HOME", str(Path.home() / ".importgraph"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

SUPPORTED_EXTENSIONS = {".py", ".pyw"}
SKIP_DIRS = {
    "__pycache__", ".git", "node_modules", "venv", ".venv", "env", ".env",
    ".tox", ".pytest_cache", "dist", "build",
}
SEARCH_LIMIT = 8

# Load overrides from TOML file (if available)
try:
    from .config_manager import load_pypi_config, load_scan_config
    _scan_config = load_scan_config()
    _pypi_config = load_pypi_config()
except ImportError:
    _scan_config = {}
    _pypi_config = {}

# Scan settings: [scan] section of ~/.importgraph/config.toml (set via `ig config set`)
MAX_WORKERS = int(_scan_config.get("max_workers", 1))

# Registry settings: [pypi] section
PYPI_API_BASE = _pypi_config.get("api_base", "https://pypi.org/pypi")
PYPI_TIMEOUT = float(_pypi_config.get("timeout", 10))
PYPI_BATCH_SIZE = int(_pypi_config.get("batch_size", 5))
