"""Run import extraction over a batch of files and merge the results.

Every scan yields a fresh :class:`~importgraph_cli.models.ScanResult`:

- ``files``: file name -> sorted, unique root imports, in input order;
- ``all_imports``: the sorted union across files;
- ``stdlib_imports`` / ``third_party_imports``: that union, partitioned.

A file that cannot be read, decoded or extracted is logged and skipped; nothing
about one bad file aborts the batch.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .models import ImportKind, ImportReference, ScanResult, SourceFile
from .parser import discover_files, extract_references, read_source, relative_name
from .sanitizer import strip_strings_and_comments
from .stdlib import STDLIB_MODULES, classify, split_imports

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]
ClassifiedCallback = Callable[[str, ImportKind], None]
CancelCheck = Callable[[], bool]

# A loader returns the file's text, or raises if it cannot be read
_Entry = Tuple[str, Callable[[], Union[str, bytes]]]
_Outcome = Union[Tuple[ImportReference, ...], BaseException, None]


def _decode(content: Union[str, bytes]) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8")
    return content


class ImportAggregator:
    """Sanitize and extract every file in a batch, then merge deterministically.

    ``on_progress(index, total, name)`` fires as file *index* (1-based) of
    *total* is processed; ``on_classified(module, kind)`` fires once per
    distinct module.  ``should_cancel()`` is polled before each file.  With
    ``max_workers > 1`` files are extracted on a thread pool, ``max_workers``
    at a time, and results are still merged in input order.  A cancelled scan
    keeps only the files before the first one that saw the cancellation.
    """

    def __init__(
        self,
        on_progress: Optional[ProgressCallback] = None,
        on_classified: Optional[ClassifiedCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
        max_workers: int = 1,
        catalogue=STDLIB_MODULES,
    ) -> None:
        self.on_progress = on_progress
        self.on_classified = on_classified
        self.should_cancel = should_cancel or (lambda: False)
        self.max_workers = max(1, max_workers)
        self.catalogue = catalogue

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def scan(self, files: Iterable[SourceFile]) -> ScanResult:
        """Scan in-memory files."""
        entries: List[_Entry] = [(f.name, (lambda f=f: f.content)) for f in files]
        return self._run(entries)

    def scan_directory(self, root: Path) -> ScanResult:
        """Discover Python files under *root* and scan them, reading lazily."""
        root = Path(root)
        entries: List[_Entry] = [
            (relative_name(path, root), (lambda path=path: read_source(path, root).content))
            for path in discover_files(root)
        ]
        logger.info("%d Python files detected under %s", len(entries), root)
        return self._run(entries)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _extract(self, loader: Callable[[], Union[str, bytes]]) -> _Outcome:
        if self.should_cancel():
            return None
        try:
            text = _decode(loader())
            return tuple(extract_references(strip_strings_and_comments(text)))
        except Exception as exc:
            return exc

    def _outcomes(self, entries: List[_Entry]) -> Iterable[_Outcome]:
        if self.max_workers == 1 or len(entries) < 2:
            for _, loader in entries:
                outcome = self._extract(loader)
                yield outcome
                if outcome is None:
                    return
            return
        loaders = [loader for _, loader in entries]
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for start in range(0, len(loaders), self.max_workers):
                for outcome in executor.map(self._extract, loaders[start:start + self.max_workers]):
                    yield outcome
                    if outcome is None:
                        return

    def _run(self, entries: List[_Entry]) -> ScanResult:
        result = ScanResult()
        total = len(entries)
        files: Dict[str, List[str]] = {}

        for index, ((name, _), outcome) in enumerate(zip(entries, self._outcomes(entries)), start=1):
            if outcome is None:
                result.cancelled = True
                break
            self._report_progress(index, total, name)
            if isinstance(outcome, BaseException):
                logger.warning("Skipping %s: %s", name, outcome)
                result.skipped.append(name)
                continue
            result.references[name] = outcome
            files[name] = sorted({ref.root for ref in outcome})

        if result.cancelled:
            logger.warning("Scan cancelled after %d of %d files", len(files) + len(result.skipped), total)

        result.files = files
        result.all_imports = sorted({name for imports in files.values() for name in imports})
        for module in result.all_imports:
            kind = classify(module, self.catalogue)
            logger.debug("%s classified as %s", module, kind)
            if self.on_classified is not None:
                self.on_classified(module, kind)
        result.stdlib_imports, result.third_party_imports = split_imports(result.all_imports, self.catalogue)

        logger.info(
            "%d files analyzed: %d third-party packages, %d stdlib modules",
            len(files), len(result.third_party_imports), len(result.stdlib_imports),
        )
        return result

    def _report_progress(self, index: int, total: int, name: str) -> None:
        logger.debug("Analyzing %s (%d/%d)", name, index, total)
        if self.on_progress is not None:
            self.on_progress(index, total, name)


def parse_multiple_files(files: Iterable[SourceFile]) -> ScanResult:
    """Convenience wrapper: scan *files* with default settings."""
    return ImportAggregator().scan(files)
