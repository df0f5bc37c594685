"""Boolean composition of paths.

Union ("weld") and hole ("punch") operate on polygon approximations of the
selected paths: every path is sampled into a ring, the rings go through a
polygon clipper and the resulting rings are rebuilt as straight-edged paths.
Curvature is not preserved because the clipper only knows polygons.

Key pieces:
- PolygonClipper: capability interface for any 2D polygon clipper
- ShapelyClipper: default clipper backed by shapely
- rings_to_paths: rebuild clipper output as cusp-node paths
- BooleanEngine: applies union/hole to a path list and a selection
"""

from dataclasses import dataclass, field
from typing import Protocol

import structlog
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.validation import make_valid

from glyphsmith.core.geometry import ring_nesting_depth
from glyphsmith.core.sampler import DEFAULT_SAMPLES, Ring, sample_path
from glyphsmith.domain import Node, Path

logger = structlog.get_logger(__name__)


class PolygonClipper(Protocol):
    """Polygon boolean operations over ring lists.

    A ring list describes one region under the even-odd rule. Both
    operations return a (possibly empty) ring list and never fail on
    self-intersecting input.
    """

    def union(self, subject: list[Ring], clip: list[Ring]) -> list[Ring]: ...

    def difference(self, subject: list[Ring], clip: list[Ring]) -> list[Ring]: ...


def _polygons(geometry: BaseGeometry) -> list[Polygon]:
    """Extract the polygonal parts of any shapely geometry."""
    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry]
    if isinstance(geometry, (MultiPolygon, GeometryCollection)):
        polygons: list[Polygon] = []
        for part in geometry.geoms:
            polygons.extend(_polygons(part))
        return polygons
    return []


class ShapelyClipper:
    """PolygonClipper implementation using shapely.

    Input rings are repaired with make_valid, so bow-ties and other
    self-intersecting outlines are accepted. Output polygons are oriented
    (exterior first, then its holes) to keep results deterministic.
    """

    def to_geometry(self, rings: list[Ring]) -> BaseGeometry:
        """Combine rings into one region with the even-odd rule."""
        region: BaseGeometry = Polygon()
        for ring in rings:
            if len(ring) < 4:
                continue
            for polygon in _polygons(make_valid(Polygon(ring))):
                region = region.symmetric_difference(polygon)
        return region

    def to_rings(self, geometry: BaseGeometry) -> list[Ring]:
        """Flatten a region back into rings (exteriors followed by holes)."""
        rings: list[Ring] = []
        for polygon in _polygons(geometry):
            polygon = orient(polygon, sign=1.0)
            rings.append(_lowest_first(polygon.exterior.coords))
            for interior in polygon.interiors:
                rings.append(_lowest_first(interior.coords))
        return rings

    def union(self, subject: list[Ring], clip: list[Ring]) -> list[Ring]:
        merged = self.to_geometry(subject).union(self.to_geometry(clip))
        return self.to_rings(merged)

    def difference(self, subject: list[Ring], clip: list[Ring]) -> list[Ring]:
        remaining = self.to_geometry(subject).difference(self.to_geometry(clip))
        return self.to_rings(remaining)


def _lowest_first(coords) -> Ring:
    """Rotate a closed ring to start at its lowest (y, x) point."""
    points = [(x, y) for x, y in coords][:-1]
    if not points:
        return []
    start = min(range(len(points)), key=lambda i: (points[i][1], points[i][0]))
    points = points[start:] + points[:start]
    points.append(points[0])
    return points


def rings_to_paths(rings: list[Ring]) -> list[Path]:
    """Rebuild rings as closed paths made of cusp nodes.

    The trailing point that closes each ring is dropped. Rings with fewer
    than three points are discarded. Rings nested inside an odd number of
    other rings are flagged as holes.

    Args:
        rings: Closed rings, as produced by sample_path or a clipper

    Returns:
        One closed path per usable ring, in ring order
    """
    paths: list[Path] = []
    for ring in rings:
        points = ring[:-1] if len(ring) > 1 and ring[0] == ring[-1] else ring
        if len(points) < 3:
            continue
        depth = ring_nesting_depth(ring, rings)
        paths.append(
            Path(
                nodes=[Node.flat(x, y) for x, y in points],
                closed=True,
                is_hole=depth % 2 == 1,
            )
        )
    return paths


def union_paths(
    paths: list[Path], clipper: PolygonClipper, samples: int = DEFAULT_SAMPLES
) -> list[Path]:
    """Merge paths into their polygon union.

    Solid paths are folded left to right through the clipper's union.
    Paths flagged as holes are then cut out of the merged region, so welding
    a set that is already merged (outline plus hole) reproduces it.

    Args:
        paths: Paths to merge
        clipper: Polygon clipper to use
        samples: Bezier samples per segment

    Returns:
        Paths describing the merged region
    """
    solids = [p for p in paths if not p.is_hole]
    holes = [p for p in paths if p.is_hole]
    if not solids:
        solids, holes = holes, []

    region: list[Ring] = []
    for path in solids:
        ring = sample_path(path, samples)
        if ring:
            region = clipper.union(region, [ring])

    for path in holes:
        ring = sample_path(path, samples)
        if ring:
            region = clipper.difference(region, [ring])

    return rings_to_paths(region)


def subtract_path(
    target: Path, cutter: Path, clipper: PolygonClipper, samples: int = DEFAULT_SAMPLES
) -> list[Path]:
    """Cut one path out of another.

    Returns:
        Zero, one or several paths left of the target
    """
    target_ring = sample_path(target, samples)
    if not target_ring:
        return []
    cutter_ring = sample_path(cutter, samples)
    remaining = clipper.difference([target_ring], [cutter_ring] if cutter_ring else [])
    return rings_to_paths(remaining)


@dataclass
class BooleanResult:
    """Outcome of a boolean operation on a path list.

    Attributes:
        paths: The full new path list
        created_ids: Ids of the paths produced by the operation
    """

    paths: list[Path]
    created_ids: list[str] = field(default_factory=list)


class BooleanEngine:
    """Applies union and hole operations to the selected paths of a list.

    Example:
        engine = BooleanEngine()
        result = engine.union(paths, selected_ids)
        if result is not None:
            paths = result.paths
    """

    def __init__(
        self, clipper: PolygonClipper | None = None, samples: int = DEFAULT_SAMPLES
    ) -> None:
        self.clipper: PolygonClipper = clipper or ShapelyClipper()
        self.samples = samples

    def _selected_indices(self, paths: list[Path], selected_ids: list[str]) -> list[int]:
        wanted = set(selected_ids)
        return [i for i, path in enumerate(paths) if path.id in wanted]

    def union(self, paths: list[Path], selected_ids: list[str]) -> BooleanResult | None:
        """Replace the selected paths with their union.

        The merged paths are appended at the top of the z-order.

        Returns:
            The new path list, or None when fewer than two paths are selected
        """
        indices = self._selected_indices(paths, selected_ids)
        if len(indices) < 2:
            return None

        targets = [paths[i] for i in indices]
        merged = union_paths(targets, self.clipper, self.samples)
        chosen = set(indices)
        keep = [p for i, p in enumerate(paths) if i not in chosen]

        logger.debug("Union applied", inputs=len(targets), outputs=len(merged))
        return BooleanResult(paths=keep + merged, created_ids=[p.id for p in merged])

    def hole(self, paths: list[Path], selected_ids: list[str]) -> BooleanResult | None:
        """Punch the topmost selected path out of every other selected path.

        The topmost path (last in list order) among the selection is the
        cutter and is removed. Every other selected path is replaced in place
        by what remains of it; a target that vanishes completely is removed.

        Returns:
            The new path list, or None when fewer than two paths are selected
        """
        indices = self._selected_indices(paths, selected_ids)
        if len(indices) < 2:
            return None

        cutter_index = indices[-1]
        cutter = paths[cutter_index]
        targets = set(indices[:-1])

        result: list[Path] = []
        created: list[str] = []
        for i, path in enumerate(paths):
            if i == cutter_index:
                continue
            if i not in targets:
                result.append(path)
                continue
            pieces = subtract_path(path, cutter, self.clipper, self.samples)
            result.extend(pieces)
            created.extend(p.id for p in pieces)

        logger.debug("Hole applied", targets=len(targets), pieces=len(created))
        return BooleanResult(paths=result, created_ids=created)


def flag_holes(paths: list[Path], samples: int = DEFAULT_SAMPLES) -> list[Path]:
    """Set is_hole on closed paths nested inside an odd number of others.

    Open paths are never holes and are not considered as containers.

    Returns:
        The same list, updated in place
    """
    closed = [p for p in paths if p.closed]
    rings = [sample_path(p, samples) for p in closed]
    for path, ring in zip(closed, rings):
        path.is_hole = ring_nesting_depth(ring, rings) % 2 == 1
    return paths
