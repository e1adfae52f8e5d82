"""Tests for DOT / JSON / HTML graph export."""

import json
from pathlib import Path
from typing import List

import pytest

from importgraph_cli.aggregator import parse_multiple_files
from importgraph_cli.graph import DependencyGraph
from importgraph_cli.graph_export import export_dot, export_html, export_json
from importgraph_cli.models import SourceFile


@pytest.fixture
def graph(sample_sources: List[SourceFile]) -> DependencyGraph:
    return DependencyGraph.from_scan(parse_multiple_files(sample_sources))


def test_export_dot(graph: DependencyGraph, temp_dir: Path):
    output = temp_dir / "g.dot"
    export_dot(graph, output)
    text = output.read_text(encoding="utf-8")

    assert text.startswith("digraph ImportGraph {")
    assert '"file:pkg/a.py" -> "import:os";' in text
    assert text.count("->") == len(graph.edges)


def test_export_json_round_trips_model(graph: DependencyGraph, temp_dir: Path):
    output = temp_dir / "g.json"
    export_json(graph, output)
    assert json.loads(output.read_text(encoding="utf-8")) == graph.to_dict()


def test_export_focus_on_node_id(graph: DependencyGraph, temp_dir: Path):
    output = temp_dir / "focus.json"
    export_json(graph, output, focus="import:os")
    payload = json.loads(output.read_text(encoding="utf-8"))

    assert {n["id"] for n in payload["nodes"]} == {"import:os", "file:pkg/a.py"}
    assert payload["links"] == [{"source": "file:pkg/a.py", "target": "import:os"}]


def test_export_focus_by_name(graph: DependencyGraph, temp_dir: Path):
    output = temp_dir / "focus.json"
    export_json(graph, output, focus="numpy")
    payload = json.loads(output.read_text(encoding="utf-8"))

    assert {n["id"] for n in payload["nodes"]} == {"import:numpy", "file:pkg/b.py"}


def test_unmatched_focus_exports_everything(graph: DependencyGraph, temp_dir: Path):
    output = temp_dir / "all.json"
    export_json(graph, output, focus="no-such-node")
    assert len(json.loads(output.read_text(encoding="utf-8"))["nodes"]) == len(graph.nodes)


def test_export_html(graph: DependencyGraph, temp_dir: Path):
    output = temp_dir / "g.html"
    export_html(graph, output)
    text = output.read_text(encoding="utf-8")

    assert "<!doctype html>" in text
    assert "vis-network" in text
    assert "import:requests" in text
    assert "https://pypi.org/project/requests/" in text
