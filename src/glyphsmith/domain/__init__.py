"""Domain models for glyphsmith.

This module contains the core domain models representing drawn glyphs:
nodes, paths, glyphs and the transient editor selection. All models are
plain dataclasses without editing behavior and serialize to dictionaries
in the layout used by the glyph persistence boundary.

Key classes:
- Point: An immutable 2D coordinate
- Node: An anchor with absolute bezier handles
- Path: An ordered node sequence forming one contour
- Glyph: The drawing of a single character
- Selection: Selected paths and nodes
"""

from glyphsmith.domain.glyph import Glyph, GlyphMap
from glyphsmith.domain.node import Node, NodeKind, Point
from glyphsmith.domain.path import Path, clone_paths, new_path_id
from glyphsmith.domain.selection import NodeRef, Selection

__all__: list[str] = [
    # Enums
    "NodeKind",
    # Core types
    "Point",
    "Node",
    "Path",
    "Glyph",
    "GlyphMap",
    "NodeRef",
    "Selection",
    # Helpers
    "clone_paths",
    "new_path_id",
]
