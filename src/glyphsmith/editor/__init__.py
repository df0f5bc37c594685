"""Interactive glyph editing for glyphsmith.

This module contains the editing model a canvas host drives: pointer
events, tools, undo history, the per-glyph edit session and the workspace
that switches between characters.

Key classes:
- EditSession: Editing state and event dispatch for one glyph
- GlyphWorkspace: Glyph map plus the focused character's session
- History: Snapshot undo/redo
- SelectTool, PenTool, BrushTool, ShapeTool: Editing tools
"""

from glyphsmith.editor.brush import ribbon_outline, ribbon_rails, smooth_rail
from glyphsmith.editor.events import (
    Hit,
    HitKind,
    MouseButton,
    PointerEvent,
    ViewTransform,
)
from glyphsmith.editor.history import History
from glyphsmith.editor.session import EditSession
from glyphsmith.editor.tools import (
    BrushTool,
    PenTool,
    SelectTool,
    ShapeKind,
    ShapeTool,
    Tool,
    ToolName,
    make_shape,
)
from glyphsmith.editor.workspace import GlyphWorkspace

__all__ = [
    # Session
    "EditSession",
    "GlyphWorkspace",
    "History",
    # Events
    "Hit",
    "HitKind",
    "MouseButton",
    "PointerEvent",
    "ViewTransform",
    # Tools
    "BrushTool",
    "PenTool",
    "SelectTool",
    "ShapeKind",
    "ShapeTool",
    "Tool",
    "ToolName",
    "make_shape",
    # Brush geometry
    "ribbon_outline",
    "ribbon_rails",
    "smooth_rail",
]
