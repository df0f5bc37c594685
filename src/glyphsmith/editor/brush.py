"""Brush stroke outlining.

A brush stroke is a sampled centerline. Its outline is a ribbon: each sample
is pushed sideways by half the brush width along the normal of its local
tangent, giving a left and a right rail that join into one closed contour.
"""

import math

from glyphsmith.domain import Node, NodeKind, Point


def ribbon_rails(centerline: list[Point], width: float) -> tuple[list[Point], list[Point]]:
    """Offset a centerline to both sides.

    The tangent at each sample runs from its previous to its next neighbor,
    clamped at the ends of the stroke. Samples whose tangent has zero length
    are skipped.

    Args:
        centerline: Sampled pointer positions
        width: Full brush width

    Returns:
        (left rail, right rail), both in stroke direction
    """
    if len(centerline) < 2:
        return [], []

    half = width / 2.0
    last = len(centerline) - 1
    left: list[Point] = []
    right: list[Point] = []
    for i, curr in enumerate(centerline):
        prev = centerline[max(0, i - 1)]
        nxt = centerline[min(last, i + 1)]
        dx = nxt.x - prev.x
        dy = nxt.y - prev.y
        length = math.hypot(dx, dy)
        if length == 0.0:
            continue
        nx = -dy / length
        ny = dx / length
        left.append(Point(curr.x + nx * half, curr.y + ny * half))
        right.append(Point(curr.x - nx * half, curr.y - ny * half))
    return left, right


def ribbon_outline(centerline: list[Point], width: float) -> list[Point]:
    """Closed contour of a brush stroke: left rail then reversed right rail."""
    left, right = ribbon_rails(centerline, width)
    return left + right[::-1]


def smooth_rail(points: list[Point], tension: float) -> list[Node]:
    """Build smooth nodes whose handles follow their neighbors.

    Each handle is offset from its anchor by `tension` times the vector from
    the previous to the next point; missing neighbors at the rail ends fall
    back to the point itself.
    """
    nodes: list[Node] = []
    for i, p in enumerate(points):
        prev = points[i - 1] if i > 0 else p
        nxt = points[i + 1] if i < len(points) - 1 else p
        cx = (nxt.x - prev.x) * tension
        cy = (nxt.y - prev.y) * tension
        nodes.append(
            Node(
                x=p.x,
                y=p.y,
                handle_in=Point(p.x - cx, p.y - cy),
                handle_out=Point(p.x + cx, p.y + cy),
                kind=NodeKind.SMOOTH,
            )
        )
    return nodes
