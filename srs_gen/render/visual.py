"""The rendered visual tree.

A small, explicit stand-in for a browser DOM: every node carries its tag,
inline style and children.  The tree is passed by reference to the color
sanitizer and the rasterizer; nothing looks it up through global state.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class VisualNode:
    """One element in the rendered visual tree."""

    tag: str
    node_id: Optional[str] = None
    classes: list[str] = field(default_factory=list)
    style: dict[str, str] = field(default_factory=dict)
    text: str = ""
    children: list["VisualNode"] = field(default_factory=list)
    attrs: dict[str, str] = field(default_factory=dict)

    def append(self, child: "VisualNode") -> "VisualNode":
        """Append *child* and return it, so trees can be built fluently."""
        self.children.append(child)
        return child

    def walk(self) -> Iterator["VisualNode"]:
        """Yield this node and every descendant, depth-first, in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, node_id: str) -> Optional["VisualNode"]:
        """Return the first node whose id is *node_id*, or ``None``."""
        for node in self.walk():
            if node.node_id == node_id:
                return node
        return None

    def copy(self) -> "VisualNode":
        """Return a deep copy of the subtree rooted here."""
        return copy.deepcopy(self)
