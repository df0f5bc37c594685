"""Core geometry algorithms for glyphsmith.

This module contains the algorithms the editor and the compiler share:

- Curve sampling (bezier path -> closed polyline ring)
- Handle coupling rules for smooth and symmetric nodes
- Hit-test helpers (point in ring, distance to outline)
- Boolean composition (union / hole) through a polygon clipper

All functions are pure except the in-place node helpers, which mutate only
the node they are given.
"""

from glyphsmith.core.boolean import (
    BooleanEngine,
    BooleanResult,
    PolygonClipper,
    ShapelyClipper,
    flag_holes,
    rings_to_paths,
    subtract_path,
    union_paths,
)
from glyphsmith.core.geometry import (
    HandleSide,
    distance,
    distance_to_ring,
    even_odd_contains,
    mirror_point,
    paths_bounds,
    rect_contains,
    ring_contains,
    set_handle,
)
from glyphsmith.core.sampler import Ring, cubic_point, sample_path, sample_paths, sample_polyline

__all__ = [
    # Boolean engine
    "BooleanEngine",
    "BooleanResult",
    "PolygonClipper",
    "ShapelyClipper",
    "flag_holes",
    "rings_to_paths",
    "subtract_path",
    "union_paths",
    # Geometry
    "HandleSide",
    "distance",
    "distance_to_ring",
    "even_odd_contains",
    "mirror_point",
    "paths_bounds",
    "rect_contains",
    "ring_contains",
    "set_handle",
    # Sampling
    "Ring",
    "cubic_point",
    "sample_path",
    "sample_paths",
    "sample_polyline",
]
