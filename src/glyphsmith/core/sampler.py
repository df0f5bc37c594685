"""Bezier path to polyline sampling.

Turns a path into a closed ring of points so that polygon clippers, hit
tests and bounding boxes can work on it. Pure functions only.
"""

from collections.abc import Iterable

from glyphsmith.domain import Node, Path, Point

Ring = list[tuple[float, float]]

DEFAULT_SAMPLES = 30


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> tuple[float, float]:
    """Evaluate a cubic bezier at parameter t.

    Args:
        p0: Start anchor
        p1: First control point
        p2: Second control point
        p3: End anchor
        t: Curve parameter in [0, 1]

    Returns:
        (x, y) point on the curve
    """
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3.0 * mt * mt * t
    c = 3.0 * mt * t * t
    d = t * t * t
    return (
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def is_straight_segment(start: Node, end: Node) -> bool:
    """Check if the segment start -> end has no curvature.

    A segment is straight when the outgoing handle of its start node and the
    incoming handle of its end node both sit on their anchors.
    """
    return start.out_is_flat() and end.in_is_flat()


def sample_path(path: Path, samples: int = DEFAULT_SAMPLES) -> Ring:
    """Approximate a path's contour with a closed ring of points.

    Every node pair is visited, including the wrap-around pair from the last
    node back to the first, so the result always describes a closed contour.
    Straight segments contribute only their start anchor; curved segments
    contribute `samples` points at uniform parameter steps, excluding the end
    anchor which the next segment emits. The ring is closed by repeating its
    first point.

    Args:
        path: Path to sample
        samples: Parameter steps per curved segment

    Returns:
        Ring of (x, y) points, or an empty list for paths with fewer than
        two nodes
    """
    nodes = path.nodes
    if len(nodes) < 2:
        return []

    ring = _sample_segments(zip(nodes, nodes[1:] + nodes[:1]), samples)
    ring.append(ring[0])
    return ring


def sample_polyline(path: Path, samples: int = DEFAULT_SAMPLES) -> Ring:
    """Approximate a path as drawn.

    Closed paths give the same ring as sample_path. Open paths stop at their
    last anchor, without the segment back to the first node.
    """
    if path.closed:
        return sample_path(path, samples)
    nodes = path.nodes
    if len(nodes) < 2:
        return []

    line = _sample_segments(zip(nodes, nodes[1:]), samples)
    last = nodes[-1]
    line.append((last.x, last.y))
    return line


def _sample_segments(pairs: Iterable[tuple[Node, Node]], samples: int) -> Ring:
    points: Ring = []
    for curr, nxt in pairs:
        if is_straight_segment(curr, nxt):
            points.append((curr.x, curr.y))
            continue
        for step in range(samples):
            points.append(
                cubic_point(curr.anchor, curr.handle_out, nxt.handle_in, nxt.anchor, step / samples)
            )
    return points


def sample_paths(paths: list[Path], samples: int = DEFAULT_SAMPLES) -> list[Ring]:
    """Sample several paths, skipping degenerate ones."""
    rings = [sample_path(path, samples) for path in paths]
    return [ring for ring in rings if ring]
