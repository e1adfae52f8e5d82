"""Hover / lock selection state for interactive graph views.

The graph model never stores selection; viewers keep a :class:`Selection` value
and pass it to :meth:`DependencyGraph.highlight`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Selection:
    hovered: Optional[str] = None
    locked: Optional[str] = None

    @property
    def active(self) -> Optional[str]:
        """Locked node if any, else the hovered node."""
        return self.locked if self.locked is not None else self.hovered

    def hover(self, node_id: Optional[str]) -> "Selection":
        # Hover is tracked while locked; ``active`` keeps preferring the lock.
        return replace(self, hovered=node_id)

    def click(self, node_id: str) -> "Selection":
        if self.locked == node_id:
            return replace(self, locked=None)
        return replace(self, locked=node_id)

    def click_background(self) -> "Selection":
        return replace(self, locked=None)

    def select_search_result(self, node_id: str) -> "Selection":
        return replace(self, locked=node_id)
