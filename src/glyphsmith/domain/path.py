"""Vector path representation.

A path is an ordered sequence of nodes. Node order encodes the winding
direction; the order of paths inside a glyph encodes z-order.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any

from glyphsmith.domain.node import Node, Point


def new_path_id() -> str:
    """Generate a fresh unique path id."""
    return uuid.uuid4().hex


@dataclass
class Path:
    """An ordered sequence of nodes forming one contour.

    Attributes:
        nodes: Nodes in drawing order
        closed: Whether the last node connects back to the first
        is_hole: Advisory flag; holes are rendered with the even-odd rule
            across overlapping contours, not by a distinct geometric type
        fill: Cosmetic fill color
        id: Unique identifier used by selections
    """

    nodes: list[Node] = field(default_factory=list)
    closed: bool = False
    is_hole: bool = False
    fill: str = "black"
    id: str = field(default_factory=new_path_id)

    def __len__(self) -> int:
        return len(self.nodes)

    def anchors(self) -> list[Point]:
        """Return the anchor of every node in order."""
        return [node.anchor for node in self.nodes]

    def is_degenerate(self) -> bool:
        """Check if the path has too few nodes to describe a contour."""
        return len(self.nodes) < 2

    def translate(self, dx: float, dy: float) -> None:
        """Move every node and handle by (dx, dy) in place."""
        for node in self.nodes:
            node.translate(dx, dy)

    def clone(self, keep_id: bool = True) -> "Path":
        """Return a deep copy.

        Args:
            keep_id: Keep the same id (snapshots) or assign a new one (duplicates)
        """
        return Path(
            nodes=[node.clone() for node in self.nodes],
            closed=self.closed,
            is_hole=self.is_hole,
            fill=self.fill,
            id=self.id if keep_id else new_path_id(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "nodes": [node.to_dict() for node in self.nodes],
            "isClosed": self.closed,
            "isHole": self.is_hole,
            "fill": self.fill,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        """Deserialize from dictionary."""
        return cls(
            nodes=[Node.from_dict(n) for n in data.get("nodes", [])],
            closed=bool(data.get("isClosed", False)),
            is_hole=bool(data.get("isHole", False)),
            fill=data.get("fill", "black"),
            id=data.get("id") or new_path_id(),
        )


def clone_paths(paths: list[Path]) -> list[Path]:
    """Deep-copy a path list, keeping ids."""
    return [path.clone() for path in paths]
