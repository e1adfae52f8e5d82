"""Regex-based Python import extraction.

Two declaration grammars are matched against sanitized source, each anchored at
column 0 of a line:

- ``import a, b.c as d``: every comma-separated target, alias stripped;
- ``from a.b import x``: the dotted module before ``import``; relative
  modules (leading ``.``) are ignored.

Only root modules are kept (``b.c`` -> ``b``) and a root must look like a plain
identifier, so partially-malformed lines never yield garbage names.

Also provides the file-discovery helpers the CLI uses to turn a directory into
:class:`~importgraph_cli.models.SourceFile` records.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from .config import SKIP_DIRS, SUPPORTED_EXTENSIONS
from .models import ImportReference, SourceFile
from .sanitizer import strip_strings_and_comments

logger = logging.getLogger(__name__)

_PLAIN_IMPORT = re.compile(r"^import[ \t]+(.+)$", re.MULTILINE)
_FROM_IMPORT = re.compile(r"^from[ \t]+([\w.]+)[ \t]+import", re.MULTILINE)
_ALIAS = re.compile(r"\s+as\s+")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def root_module(name: str) -> str:
    """Return the leading dot-free segment of *name* (``os.path`` -> ``os``)."""
    return name.split(".", 1)[0]


def is_identifier(name: str) -> bool:
    return _IDENTIFIER.fullmatch(name) is not None


def extract_references(sanitized: str) -> List[ImportReference]:
    """Return every accepted import target in source order.

    Repeated imports of the same module are all reported; callers that want a
    set should use :func:`extract_imports`.
    """
    found: List[Tuple[int, int, ImportReference]] = []

    for match in _PLAIN_IMPORT.finditer(sanitized):
        for position, target in enumerate(match.group(1).split(",")):
            full_name = _ALIAS.split(target.strip(), maxsplit=1)[0].strip()
            root = root_module(full_name)
            if full_name and is_identifier(root):
                found.append((match.start(), position, ImportReference(root, full_name)))

    for match in _FROM_IMPORT.finditer(sanitized):
        module_path = match.group(1)
        if module_path.startswith("."):
            continue
        root = root_module(module_path)
        if is_identifier(root):
            found.append((match.start(), 0, ImportReference(root, module_path)))

    found.sort(key=lambda item: (item[0], item[1]))
    return [ref for _, _, ref in found]


def extract_imports(sanitized: str) -> Set[str]:
    """Return the set of root modules declared in already-sanitized source."""
    return {ref.root for ref in extract_references(sanitized)}


def parse_source(text: str) -> List[str]:
    """Sanitize raw source and return its root imports, sorted ascending."""
    return sorted(extract_imports(strip_strings_and_comments(text)))


# ---------------------------------------------------------------------------
# File discovery
# ---------------------------------------------------------------------------

def _skip_dir(name: str) -> bool:
    return name in SKIP_DIRS or name.startswith(".")


def discover_files(
    root: Path,
    extensions: Optional[Iterable[str]] = None,
) -> List[Path]:
    """Walk *root* for Python files, pruning vendored, cache and hidden directories."""
    suffixes = set(extensions or SUPPORTED_EXTENSIONS)
    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not _skip_dir(d))
        for filename in filenames:
            if Path(filename).suffix in suffixes:
                found.append(Path(dirpath) / filename)
    return sorted(found)


def relative_name(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def read_source(path: Path, root: Path) -> SourceFile:
    """Read one file as UTF-8; decoding and I/O errors propagate to the caller."""
    return SourceFile(name=relative_name(path, root), content=path.read_text(encoding="utf-8"))



def load_sources(paths: Iterable[Path], root: Path) -> List[SourceFile]:
    """Read every path under *root*; unreadable or non-UTF-8 files are skipped."""
    sources: List[SourceFile] = []
    for path in paths:
        try:
            sources.append(read_source(path, root))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", relative_name(path, root), exc)
    return sources
