"""Graph export helpers for DOT, JSON and simple standalone HTML outputs."""

from __future__ import annotations

import html
import json
from pathlib import Path
from typing import Dict, List

from .graph import DependencyGraph

NODE_COLORS = {
    "file": "#2D7DFF",
    "thirdParty": "#7C3AED",
    "stdlib": "#7F8AB8",
}


def export_dot(graph: DependencyGraph, output_file: Path, focus: str = "") -> None:
    selected = _focused_subgraph(graph, focus)

    lines = ["digraph ImportGraph {"]
    lines.append("  rankdir=LR;")

    for node in selected["nodes"]:
        color = NODE_COLORS.get(node["type"], NODE_COLORS["thirdParty"])
        shape = "box" if node["type"] == "file" else "ellipse"
        lines.append(
            f'  "{_esc(node["id"])}" [label="{_esc(node["name"])}", shape={shape}, color="{color}"];'
        )

    for edge in selected["links"]:
        lines.append(f'  "{_esc(edge["source"])}" -> "{_esc(edge["target"])}";')

    lines.append("}")
    output_file.write_text("\n".join(lines), encoding="utf-8")


def export_json(graph: DependencyGraph, output_file: Path, focus: str = "") -> None:
    output_file.write_text(json.dumps(_focused_subgraph(graph, focus), indent=2), encoding="utf-8")


def export_html(graph: DependencyGraph, output_file: Path, focus: str = "") -> None:
    """Export graph to an interactive HTML page using vis-network."""
    selected = _focused_subgraph(graph, focus)
    payload = {
        "nodes": [
            {
                "id": node["id"],
                "label": node["name"],
                "title": html.escape(node["fullName"]),
                "value": node["val"],
                "color": NODE_COLORS.get(node["type"], NODE_COLORS["thirdParty"]),
                "url": node.get("docUrl", ""),
            }
            for node in selected["nodes"]
        ],
        "edges": [{"from": e["source"], "to": e["target"]} for e in selected["links"]],
    }
    output_file.write_text(_html_document(payload), encoding="utf-8")


def _html_document(payload: dict) -> str:
    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>ImportGraph</title>
  <script src="https://unpkg.com/vis-network/standalone/umd/vis-network.min.js"></script>
  <style>
    body {{ font-family: ui-monospace, SFMono-Regular, Menlo, monospace; margin: 0; background: #0b1020; color: #ddd; }}
    #graph {{ width: 100vw; height: 100vh; }}
    #legend {{ position: fixed; top: 12px; left: 12px; font-size: 12px; }}
    .dot {{ display: inline-block; width: 10px; height: 10px; border-radius: 50%; margin: 0 4px 0 12px; }}
  </style>
</head>
<body>
  <div id="legend">
    <span class="dot" style="background:{NODE_COLORS['file']}"></span>file
    <span class="dot" style="background:{NODE_COLORS['thirdParty']}"></span>third-party
    <span class="dot" style="background:{NODE_COLORS['stdlib']}"></span>stdlib
  </div>
  <div id="graph"></div>
  <script>
    const graph = {json.dumps(payload)};
    const network = new vis.Network(
      document.getElementById('graph'),
      {{ nodes: new vis.DataSet(graph.nodes), edges: new vis.DataSet(graph.edges) }},
      {{ nodes: {{ shape: 'dot', font: {{ color: '#ddd' }} }}, edges: {{ arrows: 'to', color: '#445' }} }}
    );
    network.on('doubleClick', params => {{
      const node = graph.nodes.find(n => n.id === params.nodes[0]);
      if (node && node.url) window.open(node.url, '_blank');
    }});
  </script>
</body>
</html>
"""


def _focused_subgraph(graph: DependencyGraph, focus: str) -> Dict[str, List[dict]]:
    """Whole graph, or the neighbourhood of nodes matching *focus*.

    *focus* is an exact node id or a search query; an unmatched focus exports
    everything.
    """
    full = graph.to_dict()
    if not focus:
        return full

    focus_ids = {focus} if focus in graph else {n.id for n in graph.search(focus, limit=len(graph))}
    if not focus_ids:
        return full

    node_ids = set()
    edge_keys = set()
    for node_id in focus_ids:
        node_ids |= graph.neighbors(node_id)
        edge_keys |= graph.incident_edges(node_id)

    return {
        "nodes": [n for n in full["nodes"] if n["id"] in node_ids],
        "links": [e for e in full["links"] if f"{e['source']}->{e['target']}" in edge_keys],
    }


def _esc(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
