"""Core data models shared by the scanner, aggregator, and graph layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Tuple

ImportKind = Literal["stdlib", "thirdParty"]
NodeKind = Literal["file", "stdlib", "thirdParty"]

STDLIB: ImportKind = "stdlib"
THIRD_PARTY: ImportKind = "thirdParty"
FILE: NodeKind = "file"


@dataclass(frozen=True)
class SourceFile:
    """A named piece of already-decoded source text."""
    name: str
    content: str


@dataclass(frozen=True)
class ImportReference:
    """One matched import target: its root module and the dotted name as written."""
    root: str
    full_name: str


@dataclass
class GraphNode:
    id: str
    name: str
    full_name: str
    kind: NodeKind
    weight: int
    doc_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "fullName": self.full_name,
            "type": self.kind,
            "val": self.weight,
        }
        if self.doc_url:
            payload["docUrl"] = self.doc_url
        return payload


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str

    @property
    def key(self) -> str:
        return f"{self.source}->{self.target}"

    def to_dict(self) -> Dict[str, str]:
        return {"source": self.source, "target": self.target}


@dataclass
class ScanResult:
    """Everything one scan produces; a new scan replaces it wholesale."""
    files: Dict[str, List[str]] = field(default_factory=dict)
    all_imports: List[str] = field(default_factory=list)
    stdlib_imports: List[str] = field(default_factory=list)
    third_party_imports: List[str] = field(default_factory=list)
    references: Dict[str, Tuple[ImportReference, ...]] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_imports(self) -> int:
        return len(self.all_imports)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": {name: list(imports) for name, imports in self.files.items()},
            "allImports": list(self.all_imports),
            "stdlibImports": list(self.stdlib_imports),
            "thirdPartyImports": list(self.third_party_imports),
            "totalFiles": self.total_files,
            "totalImports": self.total_imports,
        }
