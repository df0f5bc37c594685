"""Interactive edit session for one glyph.

The session owns the working path list of the glyph being edited together
with its selection, undo history and view transform. A host canvas feeds it
pointer and keyboard actions; pointer events go to the active tool.

Example:
    session = EditSession()
    session.set_tool(ToolName.PEN)
    for x, y in [(100, 100), (300, 100), (300, 300), (100, 100)]:
        session.pointer_down(PointerEvent(x, y))
        session.pointer_up()
"""

import structlog

from glyphsmith.config import GlyphsmithSettings, get_default_settings
from glyphsmith.core.boolean import BooleanEngine, BooleanResult
from glyphsmith.core.geometry import distance, distance_to_ring, ring_contains
from glyphsmith.core.sampler import sample_polyline
from glyphsmith.domain import Node, NodeRef, Path, Point, Selection, clone_paths
from glyphsmith.editor.events import (
    CANVAS_HIT,
    Hit,
    HitKind,
    MouseButton,
    PointerEvent,
    ViewTransform,
)
from glyphsmith.editor.history import History
from glyphsmith.editor.tools import (
    BrushTool,
    PenTool,
    SelectTool,
    ShapeKind,
    ShapeTool,
    Tool,
    ToolName,
)

logger = structlog.get_logger(__name__)


class EditSession:
    """Editing state and event dispatch for a single glyph.

    Attributes:
        paths: Working path list; list order is z-order (last on top)
        selection: Selected paths and nodes
        history: Snapshot history, one entry per completed gesture
        view: Screen/world transform
        active_path_id: Path being drawn by the pen or brush, if any
        brush_width: Current brush width
    """

    def __init__(
        self,
        paths: list[Path] | None = None,
        settings: GlyphsmithSettings | None = None,
        engine: BooleanEngine | None = None,
    ) -> None:
        self.settings = settings or get_default_settings()
        self.paths: list[Path] = clone_paths(paths or [])
        self.selection = Selection()
        self.history = History(self.paths, limit=self.settings.editor.history_limit)
        self.view = ViewTransform()
        self.engine = engine or BooleanEngine(samples=self.settings.editor.samples_per_segment)
        self.active_path_id: str | None = None
        self.brush_width = self.settings.editor.brush_width

        self._tools: dict[ToolName, Tool] = {
            ToolName.SELECT: SelectTool(self),
            ToolName.PEN: PenTool(self),
            ToolName.BRUSH: BrushTool(self),
            ToolName.SHAPE: ShapeTool(self),
        }
        self._tool: Tool = self._tools[ToolName.SELECT]
        self._pan_origin: tuple[float, float] | None = None
        self._pressed = False

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def tool(self) -> Tool:
        return self._tool

    @property
    def tool_name(self) -> ToolName:
        return self._tool.name

    @property
    def hit_radius(self) -> float:
        """Hit tolerance in world units at the current zoom."""
        return self.settings.editor.hit_tolerance / self.view.k

    @property
    def is_panning(self) -> bool:
        return self._pan_origin is not None

    def path_index(self, path_id: str) -> int:
        for i, path in enumerate(self.paths):
            if path.id == path_id:
                return i
        return -1

    def find_path(self, path_id: str | None) -> Path | None:
        if path_id is None:
            return None
        index = self.path_index(path_id)
        return self.paths[index] if index >= 0 else None

    def node(self, ref: NodeRef) -> Node | None:
        path = self.find_path(ref.path_id)
        if path is None or not 0 <= ref.index < len(path.nodes):
            return None
        return path.nodes[ref.index]

    def active_path(self) -> Path | None:
        return self.find_path(self.active_path_id)

    def topmost_selected_id(self) -> str | None:
        """Id of the selected path highest in z-order (the hole cutter)."""
        top: str | None = None
        for path in self.paths:
            if self.selection.has_path(path.id):
                top = path.id
        return top

    def hit_test(self, x: float, y: float, include_handles: bool = True) -> Hit:
        """Find what lies under a world position.

        Priority: handles of selected nodes, then nodes, then path bodies,
        each searched from the top of the z-order down.
        """
        radius = self.hit_radius
        pos = Point(x, y)

        if include_handles:
            for ref in reversed(self.selection.nodes):
                node = self.node(ref)
                if node is None:
                    continue
                if not node.out_is_flat() and distance(node.handle_out, pos) <= radius:
                    return Hit(HitKind.HANDLE_OUT, ref.path_id, ref.index)
                if not node.in_is_flat() and distance(node.handle_in, pos) <= radius:
                    return Hit(HitKind.HANDLE_IN, ref.path_id, ref.index)

        for path in reversed(self.paths):
            for i, node in enumerate(path.nodes):
                if distance(node.anchor, pos) <= radius:
                    return Hit(HitKind.NODE, path.id, i)

        samples = self.settings.editor.samples_per_segment
        for path in reversed(self.paths):
            ring = sample_polyline(path, samples)
            if not ring:
                continue
            if path.closed and ring_contains(ring, x, y):
                return Hit(HitKind.PATH, path.id)
            if distance_to_ring(ring, x, y) <= radius:
                return Hit(HitKind.PATH, path.id)

        return CANVAS_HIT

    # ------------------------------------------------------------------
    # Tools and pointer events
    # ------------------------------------------------------------------

    def set_tool(self, name: ToolName) -> None:
        """Switch tools, finishing whatever the previous tool had pending."""
        if self._tool.name is name:
            return
        if self._tool.deactivate():
            self.commit_gesture()
        self._tool = self._tools[name]
        logger.debug("Tool changed", tool=name.value)

    def pointer_down(self, event: PointerEvent) -> None:
        self._pressed = True
        if event.button is MouseButton.MIDDLE or event.pan_modifier:
            self._pan_origin = (event.x, event.y)
            return
        self._tool.pointer_down(self.view.to_world(event.x, event.y), event)

    def pointer_move(self, event: PointerEvent) -> None:
        if self._pan_origin is not None:
            ox, oy = self._pan_origin
            self.view.pan(event.x - ox, event.y - oy)
            self._pan_origin = (event.x, event.y)
            return
        if not self._pressed:
            return
        self._tool.pointer_move(self.view.to_world(event.x, event.y), event)

    def pointer_up(self, event: PointerEvent | None = None) -> None:
        """Finish the current gesture.

        Hosts should deliver this for pointer releases anywhere, not only over
        the canvas, so that a drag cannot stay stuck.
        """
        self._pressed = False
        if self._pan_origin is not None:
            self._pan_origin = None
            return
        pos = self.view.to_world(event.x, event.y) if event is not None else None
        if self._tool.pointer_up(pos):
            self.commit_gesture()
        if self._tool.one_shot:
            self._tool = self._tools[ToolName.SELECT]

    def pointer_leave(self) -> None:
        """Pointer left the canvas: end any in-progress gesture."""
        if self._pressed or self._pan_origin is not None:
            self.pointer_up()

    def double_click(self, event: PointerEvent) -> None:
        if self._tool.double_click(self.view.to_world(event.x, event.y)):
            self.commit_gesture()

    def zoom(self, factor: float, x: float, y: float) -> None:
        """Zoom about a screen point."""
        self.view.zoom_at(factor, x, y)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def commit_gesture(self) -> None:
        """Record the current paths as one history step."""
        self.history.push(self.paths)

    def add_shape(self, kind: ShapeKind) -> Path:
        """Insert a preset shape at the canvas center and return to Select."""
        self.set_tool(ToolName.SHAPE)
        shape_tool = self._tools[ToolName.SHAPE]
        assert isinstance(shape_tool, ShapeTool)
        shape_tool.kind = kind
        path = shape_tool.insert()
        self.commit_gesture()
        self._tool = self._tools[ToolName.SELECT]
        return path

    def undo_last_point(self) -> bool:
        """Remove the last node of the path being drawn with the pen."""
        pen = self._tools[ToolName.PEN]
        assert isinstance(pen, PenTool)
        if self._tool is not pen:
            return False
        return pen.undo_last_point()

    def escape(self) -> None:
        """End any pen session and clear the selection."""
        if self._tool.deactivate():
            self.commit_gesture()
        self.active_path_id = None
        self.selection.clear()

    def delete(self) -> bool:
        """Delete selected nodes, or selected paths when no node is selected.

        Paths left with fewer than two nodes are dropped.

        Returns:
            True if anything was removed
        """
        selection = self.selection
        if selection.nodes:
            kept: list[Path] = []
            for path in self.paths:
                doomed = set(selection.nodes_in(path.id))
                if doomed:
                    path.nodes = [n for i, n in enumerate(path.nodes) if i not in doomed]
                    if path.is_degenerate():
                        continue
                kept.append(path)
            self.paths = kept
        elif selection.path_ids and self.active_path_id is None:
            doomed_ids = set(selection.path_ids)
            self.paths = [p for p in self.paths if p.id not in doomed_ids]
        else:
            return False

        self._cancel_gesture()
        if self.find_path(self.active_path_id) is None:
            self.active_path_id = None
        selection.clear()
        self.commit_gesture()
        return True

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._restore(snapshot)
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self._restore(snapshot)
        return True

    def _restore(self, snapshot: list[Path]) -> None:
        self._cancel_gesture()
        self.paths = snapshot
        self.active_path_id = None
        self.selection.clear()

    def _cancel_gesture(self) -> None:
        """Drop the active tool's pending gesture when the path list is replaced."""
        self._tool.cancel()
        self._pressed = False

    def bring_to_front(self) -> bool:
        return self._move_first_selected(to_front=True)

    def send_to_back(self) -> bool:
        return self._move_first_selected(to_front=False)

    def _move_first_selected(self, to_front: bool) -> bool:
        if not self.selection.path_ids:
            return False
        index = self.path_index(self.selection.path_ids[0])
        if index < 0:
            return False
        path = self.paths.pop(index)
        if to_front:
            self.paths.append(path)
        else:
            self.paths.insert(0, path)
        self.commit_gesture()
        return True

    def union_selected(self) -> bool:
        """Weld the selected paths into their union."""
        return self._apply_boolean(self.engine.union(self.paths, self.selection.path_ids))

    def hole_selected(self) -> bool:
        """Punch the topmost selected path out of the other selected paths."""
        return self._apply_boolean(self.engine.hole(self.paths, self.selection.path_ids))

    def _apply_boolean(self, result: BooleanResult | None) -> bool:
        if result is None:
            return False
        self._cancel_gesture()
        self.paths = result.paths
        self.active_path_id = None
        self.selection.set_paths(result.created_ids)
        self.commit_gesture()
        return True

    def add_paths(self, paths: list[Path]) -> None:
        """Append externally built paths (e.g. an imported outline) as one step."""
        if not paths:
            return
        self.paths.extend(clone_paths(paths))
        self.commit_gesture()
