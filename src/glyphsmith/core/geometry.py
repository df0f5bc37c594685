"""Geometric helpers for the editor.

This module provides the small amount of math the tools need:
- Handle re-derivation for smooth and symmetric nodes
- Point-in-ring and distance-to-ring tests for hit testing
- Bounding boxes over paths
"""

import math
from enum import Enum

from glyphsmith.core.sampler import Ring
from glyphsmith.domain import Node, NodeKind, Path, Point


class HandleSide(str, Enum):
    """Which handle of a node."""

    IN = "in"
    OUT = "out"


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def mirror_point(anchor: Point, point: Point) -> Point:
    """Reflect a point through an anchor."""
    return Point(2.0 * anchor.x - point.x, 2.0 * anchor.y - point.y)


def set_handle(node: Node, side: HandleSide, position: Point) -> None:
    """Move one handle of a node and re-derive the opposite one.

    - SYMMETRIC: the opposite handle is the mirror image (same length).
    - SMOOTH: the opposite handle points the opposite way and keeps its own
      length.
    - CUSP: the opposite handle is left untouched.

    Args:
        node: Node to modify in place
        side: Handle being dragged
        position: New absolute position of that handle
    """
    anchor = node.anchor
    if side is HandleSide.OUT:
        node.handle_out = position
        opposite = node.handle_in
    else:
        node.handle_in = position
        opposite = node.handle_out

    if node.kind is NodeKind.CUSP:
        return

    if node.kind is NodeKind.SYMMETRIC:
        derived = mirror_point(anchor, position)
    else:
        dragged_len = distance(anchor, position)
        if dragged_len == 0.0:
            return
        keep_len = distance(anchor, opposite)
        ux = (anchor.x - position.x) / dragged_len
        uy = (anchor.y - position.y) / dragged_len
        derived = Point(anchor.x + ux * keep_len, anchor.y + uy * keep_len)

    if side is HandleSide.OUT:
        node.handle_in = derived
    else:
        node.handle_out = derived


def ring_contains(ring: Ring, x: float, y: float) -> bool:
    """Ray-casting point-in-polygon test for a single ring."""
    n = len(ring)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside


def even_odd_contains(rings: list[Ring], x: float, y: float) -> bool:
    """Point coverage of several rings under the even-odd fill rule."""
    hits = sum(1 for ring in rings if ring_contains(ring, x, y))
    return hits % 2 == 1


def distance_to_segment(
    px: float, py: float, ax: float, ay: float, bx: float, by: float
) -> float:
    """Shortest distance from a point to a line segment."""
    dx = bx - ax
    dy = by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return math.hypot(px - ax, py - ay)
    t = max(0.0, min(1.0, ((px - ax) * dx + (py - ay) * dy) / length_sq))
    return math.hypot(px - (ax + t * dx), py - (ay + t * dy))


def distance_to_ring(ring: Ring, x: float, y: float) -> float:
    """Shortest distance from a point to a polyline."""
    if not ring:
        return math.inf
    if len(ring) == 1:
        return math.hypot(x - ring[0][0], y - ring[0][1])
    return min(
        distance_to_segment(x, y, *ring[i], *ring[i + 1]) for i in range(len(ring) - 1)
    )


def paths_bounds(paths: list[Path]) -> tuple[float, float, float, float] | None:
    """Bounding box of all anchors and handles.

    Returns:
        (min_x, min_y, max_x, max_y), or None when there are no nodes
    """
    xs: list[float] = []
    ys: list[float] = []
    for path in paths:
        for node in path.nodes:
            for p in (node.anchor, node.handle_in, node.handle_out):
                xs.append(p.x)
                ys.append(p.y)
    if not xs:
        return None
    return (min(xs), min(ys), max(xs), max(ys))


def rect_contains(
    rect: tuple[float, float, float, float], x: float, y: float
) -> bool:
    """Check a point against a (x1, y1, x2, y2) rectangle in any corner order."""
    x1, y1, x2, y2 = rect
    return min(x1, x2) <= x <= max(x1, x2) and min(y1, y2) <= y <= max(y1, y2)


def ring_nesting_depth(ring: Ring, others: list[Ring]) -> int:
    """Count how many other rings contain this ring.

    Containment is decided by the ring's first point. An odd depth means the
    ring is a hole under the even-odd rule.
    """
    if not ring:
        return 0
    x, y = ring[0]
    return sum(1 for other in others if other is not ring and ring_contains(other, x, y))
