"""requirements.txt generation from third-party module names."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Optional


def generate_requirements(
    packages: Iterable[str],
    versions: Optional[Mapping[str, Optional[str]]] = None,
) -> str:
    """One ``name==version`` line per package (bare ``name`` if unresolved), sorted."""
    versions = versions or {}
    lines = []
    for name in sorted(packages):
        version = versions.get(name)
        lines.append(f"{name}=={version}" if version else name)
    return "\n".join(lines)


def write_requirements(
    output_file: Path,
    packages: Iterable[str],
    versions: Optional[Mapping[str, Optional[str]]] = None,
) -> str:
    content = generate_requirements(packages, versions)
    output_file.write_text(content + "\n" if content else "", encoding="utf-8")
    return content
