"""Core geometric types for glyph outlines.

This module defines the fundamental point and node types used by the editor:
- Point: An immutable 2D coordinate
- NodeKind: Enum for the handle-coupling mode of a node
- Node: An on-curve anchor with absolute bezier handles
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Handle-coupling mode of a node.

    - CUSP: handles move independently
    - SMOOTH: handles stay collinear through the anchor (lengths independent)
    - SYMMETRIC: handles stay collinear and equidistant from the anchor
    """

    CUSP = "cusp"
    SMOOTH = "smooth"
    SYMMETRIC = "symmetric"


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D editor space.

    Attributes:
        x: X coordinate (grows to the right)
        y: Y coordinate (grows downwards)
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def offset(self, dx: float, dy: float) -> "Point":
        """Return a copy moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass
class Node:
    """An anchor point with incoming and outgoing bezier handles.

    Handles are stored in absolute editor coordinates. A handle lying on the
    anchor means the adjoining segment is straight on that side.

    For SMOOTH and SYMMETRIC nodes, handle_in, the anchor and handle_out are
    collinear (SYMMETRIC also equidistant). Code that moves one handle of such
    a node must re-derive the other one, see core.geometry.set_handle.

    Attributes:
        x: Anchor X coordinate
        y: Anchor Y coordinate
        handle_in: Control point shaping the segment entering this node
        handle_out: Control point shaping the segment leaving this node
        kind: Handle-coupling mode
    """

    x: float
    y: float
    handle_in: Point
    handle_out: Point
    kind: NodeKind = NodeKind.CUSP

    @classmethod
    def flat(cls, x: float, y: float, kind: NodeKind = NodeKind.CUSP) -> "Node":
        """Create a node whose handles both sit on the anchor."""
        anchor = Point(x, y)
        return cls(x=x, y=y, handle_in=anchor, handle_out=anchor, kind=kind)

    @property
    def anchor(self) -> Point:
        """Return the on-curve point."""
        return Point(self.x, self.y)

    def is_flat(self) -> bool:
        """Check if both handles coincide with the anchor."""
        return self.in_is_flat() and self.out_is_flat()

    def in_is_flat(self) -> bool:
        """Check if the incoming handle coincides with the anchor."""
        return self.handle_in.x == self.x and self.handle_in.y == self.y

    def out_is_flat(self) -> bool:
        """Check if the outgoing handle coincides with the anchor."""
        return self.handle_out.x == self.x and self.handle_out.y == self.y

    def translate(self, dx: float, dy: float) -> None:
        """Move the anchor and both handles by (dx, dy) in place."""
        self.x += dx
        self.y += dy
        self.handle_in = self.handle_in.offset(dx, dy)
        self.handle_out = self.handle_out.offset(dx, dy)

    def clone(self) -> "Node":
        """Return an independent copy."""
        return Node(
            x=self.x,
            y=self.y,
            handle_in=self.handle_in,
            handle_out=self.handle_out,
            kind=self.kind,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x, y, handleIn, handleOut and type fields
        """
        return {
            "x": self.x,
            "y": self.y,
            "handleIn": self.handle_in.to_dict(),
            "handleOut": self.handle_out.to_dict(),
            "type": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """Deserialize from dictionary.

        Missing handles default to the anchor.
        """
        x = float(data["x"])
        y = float(data["y"])
        anchor = {"x": x, "y": y}
        return cls(
            x=x,
            y=y,
            handle_in=Point.from_dict(data.get("handleIn") or anchor),
            handle_out=Point.from_dict(data.get("handleOut") or anchor),
            kind=NodeKind(data.get("type", NodeKind.CUSP.value)),
        )
