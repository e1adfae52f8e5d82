"""PyPI version lookups for third-party packages."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, Optional

from . import __version__, config

logger = logging.getLogger(__name__)


def get_latest_version(package: str, timeout: Optional[float] = None) -> Optional[str]:
    """Return the latest released version of *package*, or None if unresolved."""
    url = f"{config.PYPI_API_BASE}/{urllib.parse.quote(package)}/json"
    req = urllib.request.Request(
        url,
        headers={"Accept": "application/json", "User-Agent": f"ImportGraph-CLI/{__version__}"},
        method="GET",
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout or config.PYPI_TIMEOUT) as resp:
            data = json.loads(resp.read().decode("utf-8"))
    except urllib.error.HTTPError as exc:
        logger.warning("Failed to fetch version for %s: HTTP %s", package, exc.code)
        return None
    except Exception as exc:
        logger.warning("Error fetching version for %s: %s", package, exc)
        return None
    if not isinstance(data, dict) or not isinstance(data.get("info"), dict):
        logger.warning("Unexpected PyPI response for %s", package)
        return None
    return data["info"].get("version") or None


def get_package_versions(
    packages: Iterable[str],
    batch_size: Optional[int] = None,
) -> Dict[str, Optional[str]]:
    """Look up versions in batches of *batch_size* concurrent requests."""
    names = list(packages)
    size = max(1, batch_size or config.PYPI_BATCH_SIZE)
    versions: Dict[str, Optional[str]] = {}
    with ThreadPoolExecutor(max_workers=size) as executor:
        for start in range(0, len(names), size):
            batch = names[start:start + size]
            for name, version in zip(batch, executor.map(get_latest_version, batch)):
                versions[name] = version
    return versions
