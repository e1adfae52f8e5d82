"""Tests for import extraction and file discovery."""

from pathlib import Path

import pytest

from importgraph_cli.parser import (
    discover_files,
    extract_imports,
    extract_references,
    is_identifier,
    load_sources,
    parse_source,
    root_module,
)
from importgraph_cli.sanitizer import strip_strings_and_comments


def _extract(text: str):
    return extract_imports(strip_strings_and_comments(text))


def test_multi_target_import_with_alias():
    """`import os, sys as s, re` yields exactly {os, sys, re}."""
    assert _extract("import os, sys as s, re") == {"os", "sys", "re"}


def test_from_import_reduces_to_root():
    assert _extract("from foo.bar import baz") == {"foo"}


@pytest.mark.parametrize(
    "line",
    ["from .rel import baz", "from . import x", "from ..pkg import x", "from ...a.b import c"],
)
def test_relative_imports_are_ignored(line: str):
    assert _extract(line) == set()


@pytest.mark.parametrize("line", ['"# import ghost"', 'x = "import ghost"', "# import ghost"])
def test_imports_in_strings_and_comments_are_ignored(line: str):
    assert _extract(line) == set()


def test_docstring_and_comment_scenario():
    """Only the real import survives docstring and comment noise."""
    assert _extract("'''import fake'''\n#import fake2\nimport real") == {"real"}


def test_dotted_plain_import_reduces_to_root():
    assert _extract("import xml.etree.ElementTree as ET") == {"xml"}


def test_trailing_comma_target_is_discarded():
    assert _extract("import os,") == {"os"}


def test_malformed_targets_are_dropped():
    """Non-identifier targets never produce partial names."""
    assert _extract("import 3d, (x), os") == {"os"}
    assert _extract("import os; import sys") == set()


def test_keyword_must_start_the_line():
    """Indented imports (inside blocks) are not matched."""
    assert _extract("def f():\n    import yaml\n\nif True:\n    from json import loads\n") == set()


def test_keyword_is_case_sensitive():
    assert _extract("Import os\nFROM sys IMPORT argv") == set()


def test_tricky_source(tricky_python_code: str):
    """Strings, comments, relative and indented imports are all excluded."""
    assert _extract(tricky_python_code) == {"os", "sys", "re", "collections", "numpy", "__future__"}


def test_never_returns_dotted_names(tricky_python_code: str):
    for name in _extract(tricky_python_code + "\nimport a.b.c\nfrom d.e import f\n"):
        assert "." not in name


def test_parse_source_sorts_and_dedupes():
    assert parse_source("import sys\nimport os\nfrom os import path\n") == ["os", "sys"]


def test_extract_references_keeps_order_and_repeats():
    """Occurrences come back in source order with their dotted names."""
    refs = extract_references("import x\nimport os.path, re\nfrom x.y import z\n")

    assert [(r.root, r.full_name) for r in refs] == [
        ("x", "x"),
        ("os", "os.path"),
        ("re", "re"),
        ("x", "x.y"),
    ]


def test_root_module_and_identifier_helpers():
    assert root_module("os.path") == "os"
    assert root_module("os") == "os"
    assert root_module("") == ""
    assert is_identifier("_private9")
    assert not is_identifier("9lives")
    assert not is_identifier("")


def test_discover_files_skips_vendored_and_hidden_dirs(temp_dir: Path):
    """Virtualenvs, caches and hidden directories are not scanned."""
    (temp_dir / ".venv" / "lib").mkdir(parents=True)
    (temp_dir / ".venv" / "lib" / "site.py").write_text("import ghost")
    (temp_dir / "__pycache__").mkdir()
    (temp_dir / "__pycache__" / "cached.py").write_text("import ghost")
    (temp_dir / "node_modules").mkdir()
    (temp_dir / "node_modules" / "x.py").write_text("import ghost")
    (temp_dir / "pkg").mkdir()
    (temp_dir / "pkg" / "mod.py").write_text("import os")
    (temp_dir / "script.pyw").write_text("import tkinter")
    (temp_dir / "notes.txt").write_text("import nothing")

    found = [p.relative_to(temp_dir).as_posix() for p in discover_files(temp_dir)]

    assert found == ["pkg/mod.py", "script.pyw"]


def test_discover_sample_project(sample_project_path: Path):
    found = [p.relative_to(sample_project_path).as_posix() for p in discover_files(sample_project_path)]
    assert found == ["app.py", "client.py", "report/__init__.py", "report/render.py"]


def test_load_sources_skips_unreadable_files(temp_dir: Path):
    (temp_dir / "ok.py").write_text("import os", encoding="utf-8")
    (temp_dir / "latin.py").write_bytes(b"# caf\xe9\nimport sys\n")
    paths = [temp_dir / "latin.py", temp_dir / "missing.py", temp_dir / "ok.py"]

    sources = load_sources(paths, temp_dir)

    assert [(s.name, s.content) for s in sources] == [("ok.py", "import os")]
