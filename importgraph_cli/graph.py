"""File-to-module dependency graph with adjacency, highlight and search queries.

Nodes:
    ``file:<path>`` for every scanned file and ``import:<root>`` for every
    distinct root module.  Ids depend only on category and name, so rebuilding
    from the same scan gives the same graph.

Edges:
    One ``file -> module`` edge per import occurrence.  Nodes are unique,
    edges are not: a file that imports ``x`` twice gets two edges.

Adjacency queries scan the edge list (O(E)) unless the graph is built with
``index=True``, which keeps an adjacency list keyed by node id.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from .config import SEARCH_LIMIT
from .models import FILE, STDLIB, THIRD_PARTY, GraphEdge, GraphNode, ImportReference, ScanResult
from .parser import root_module
from .selection import Selection
from .stdlib import classify

logger = logging.getLogger(__name__)

FILE_PREFIX = "file:"
IMPORT_PREFIX = "import:"

NODE_WEIGHTS = {FILE: 10, THIRD_PARTY: 8, STDLIB: 6}


def file_node_id(name: str) -> str:
    return f"{FILE_PREFIX}{name}"


def import_node_id(name: str) -> str:
    return f"{IMPORT_PREFIX}{root_module(name)}"


def stdlib_doc_url(name: str) -> str:
    root = root_module(name.strip())
    return f"https://docs.python.org/3/library/{root}.html" if root else ""


def pypi_url(name: str) -> str:
    root = root_module(name.strip())
    return f"https://pypi.org/project/{root}/" if root else ""


class DependencyGraph:
    """Immutable node/edge model built from one scan."""

    def __init__(
        self,
        nodes: Sequence[GraphNode],
        edges: Sequence[GraphEdge],
        index: bool = False,
    ) -> None:
        self.nodes: List[GraphNode] = list(nodes)
        self.edges: List[GraphEdge] = list(edges)
        self._by_id: Dict[str, GraphNode] = {n.id: n for n in self.nodes}
        self._adjacency: Optional[Dict[str, List[GraphEdge]]] = None
        if index:
            self._adjacency = defaultdict(list)
            for edge in self.edges:
                self._adjacency[edge.source].append(edge)
                if edge.target != edge.source:
                    self._adjacency[edge.target].append(edge)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_scan(cls, result: ScanResult, index: bool = False) -> "DependencyGraph":
        return build_graph(
            result.files,
            references=result.references,
            stdlib_imports=result.stdlib_imports,
            index=index,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._by_id

    def get(self, node_id: str) -> Optional[GraphNode]:
        return self._by_id.get(node_id)

    def _touching(self, node_id: str) -> Iterable[GraphEdge]:
        if self._adjacency is not None:
            return self._adjacency.get(node_id, [])
        return (e for e in self.edges if e.source == node_id or e.target == node_id)

    def neighbors(self, node_id: str) -> Set[str]:
        """The node itself plus every node sharing an edge with it."""
        found = {node_id}
        for edge in self._touching(node_id):
            found.add(edge.target if edge.source == node_id else edge.source)
        return found

    def incident_edges(self, node_id: str) -> Set[str]:
        """Keys (``source->target``) of every edge touching the node."""
        return {edge.key for edge in self._touching(node_id)}

    def highlight(self, selection: Selection) -> Tuple[Set[str], Set[str]]:
        """Node ids and edge keys to emphasise for the selection's active node."""
        active = selection.active
        if active is None:
            return set(), set()
        return self.neighbors(active), self.incident_edges(active)

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> List[GraphNode]:
        """Case-insensitive substring match on name or full name, in graph order.

        A blank query or a *limit* below 1 matches nothing.
        """
        if not query.strip() or limit < 1:
            return []
        needle = query.lower()
        matches: List[GraphNode] = []
        for node in self.nodes:
            if needle in node.name.lower() or needle in node.full_name.lower():
                matches.append(node)
                if len(matches) >= limit:
                    break
        return matches

    def to_dict(self) -> Dict[str, list]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [e.to_dict() for e in self.edges],
        }


def _file_node(name: str) -> GraphNode:
    return GraphNode(
        id=file_node_id(name),
        name=name.split("/")[-1],
        full_name=name,
        kind=FILE,
        weight=NODE_WEIGHTS[FILE],
    )


def _import_node(ref: ImportReference, is_stdlib: bool) -> GraphNode:
    kind = STDLIB if is_stdlib else THIRD_PARTY
    return GraphNode(
        id=import_node_id(ref.root),
        name=ref.root,
        full_name=ref.full_name,
        kind=kind,
        weight=NODE_WEIGHTS[kind],
        doc_url=stdlib_doc_url(ref.root) if is_stdlib else pypi_url(ref.root),
    )


def build_graph(
    files: Mapping[str, Sequence[str]],
    references: Optional[Mapping[str, Sequence[ImportReference]]] = None,
    stdlib_imports: Optional[Iterable[str]] = None,
    index: bool = False,
) -> DependencyGraph:
    """Build the graph for a file import table.

    *references* supplies per-file import occurrences (keeping dotted names and
    repeats); files without one fall back to their table entry.  Module kinds
    come from *stdlib_imports* when given, otherwise from the classifier.
    """
    references = references or {}
    stdlib_set = set(stdlib_imports) if stdlib_imports is not None else None

    def is_stdlib(root: str) -> bool:
        if stdlib_set is not None:
            return root in stdlib_set
        return classify(root) == STDLIB

    nodes: List[GraphNode] = []
    edges: List[GraphEdge] = []
    seen: Set[str] = set()

    for name in files:
        node = _file_node(name)
        if node.id not in seen:
            nodes.append(node)
            seen.add(node.id)

    for name, imports in files.items():
        file_id = file_node_id(name)
        refs = references.get(name)
        if refs is None:
            refs = [ImportReference(root_module(imp.strip()), imp.strip()) for imp in imports]
        for ref in refs:
            if not ref.root:
                continue
            node_id = import_node_id(ref.root)
            if node_id not in seen:
                nodes.append(_import_node(ref, is_stdlib(ref.root)))
                seen.add(node_id)
            edges.append(GraphEdge(file_id, node_id))

    logger.debug("Built graph: %d nodes, %d edges", len(nodes), len(edges))
    return DependencyGraph(nodes, edges, index=index)
