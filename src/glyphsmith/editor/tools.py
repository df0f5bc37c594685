"""Editing tools.

Each tool is a small state machine driven by the edit session: the session
maps screen events to world coordinates and forwards them to the active
tool's pointer_down / pointer_move / pointer_up handlers. A handler returning
True from pointer_up tells the session that the gesture changed geometry and
a history snapshot is due.

Tools:
- SelectTool: rubber-band selection, dragging paths, nodes and handles
- PenTool: click/drag bezier path construction
- BrushTool: freehand ribbon strokes
- ShapeTool: preset square and circle insertion
"""

from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from glyphsmith.core.geometry import HandleSide, distance, rect_contains, set_handle
from glyphsmith.domain import Node, NodeKind, NodeRef, Path, Point
from glyphsmith.editor.brush import ribbon_outline, ribbon_rails, smooth_rail
from glyphsmith.editor.events import HitKind, PointerEvent

if TYPE_CHECKING:
    from glyphsmith.editor.session import EditSession

# Handle offset of a cubic quarter circle, relative to its radius
CIRCLE_KAPPA = 0.5522847498


class ToolName(str, Enum):
    """Available tools."""

    SELECT = "select"
    PEN = "pen"
    BRUSH = "brush"
    SHAPE = "shape"


class ShapeKind(str, Enum):
    """Preset shapes."""

    SQUARE = "square"
    CIRCLE = "circle"


def make_shape(kind: ShapeKind, center: tuple[float, float], size: float) -> Path:
    """Build a closed preset shape.

    Args:
        kind: Square or circle
        center: Shape center in editor space
        size: Square edge length or circle diameter

    Returns:
        New closed path; the square has four cusp nodes, the circle four
        symmetric nodes (top, right, bottom, left)
    """
    cx, cy = center
    half = size / 2.0

    if kind is ShapeKind.SQUARE:
        corners = [
            (cx - half, cy - half),
            (cx + half, cy - half),
            (cx + half, cy + half),
            (cx - half, cy + half),
        ]
        return Path(nodes=[Node.flat(x, y) for x, y in corners], closed=True)

    k = half * CIRCLE_KAPPA
    nodes = [
        Node(cx, cy - half, Point(cx - k, cy - half), Point(cx + k, cy - half), NodeKind.SYMMETRIC),
        Node(cx + half, cy, Point(cx + half, cy - k), Point(cx + half, cy + k), NodeKind.SYMMETRIC),
        Node(cx, cy + half, Point(cx + k, cy + half), Point(cx - k, cy + half), NodeKind.SYMMETRIC),
        Node(cx - half, cy, Point(cx - half, cy + k), Point(cx - half, cy - k), NodeKind.SYMMETRIC),
    ]
    return Path(nodes=nodes, closed=True)


class Tool:
    """Base class for tools.

    Subclasses override the handlers they need. All positions are world
    coordinates.
    """

    name: ClassVar[ToolName]
    one_shot: ClassVar[bool] = False

    def __init__(self, session: "EditSession") -> None:
        self.session = session

    @property
    def busy(self) -> bool:
        """Whether a gesture is in progress."""
        return False

    def pointer_down(self, pos: Point, event: PointerEvent) -> None:
        pass

    def pointer_move(self, pos: Point, event: PointerEvent) -> None:
        pass

    def pointer_up(self, pos: Point | None) -> bool:
        return False

    def double_click(self, pos: Point) -> bool:
        return False

    def deactivate(self) -> bool:
        """Leave the tool, finishing any pending state.

        Returns:
            True if finishing changed geometry
        """
        return False

    def cancel(self) -> None:
        """Abandon any gesture in progress without touching the paths."""


class DragMode(Enum):
    """What a select-tool drag is doing."""

    NONE = "none"
    BOX = "box"
    PATH = "path"
    NODE = "node"
    HANDLE = "handle"


class SelectTool(Tool):
    """Selection and direct manipulation.

    - Drag on empty canvas: rubber-band node selection (shift adds)
    - Drag a path body: move all selected paths
    - Drag a node: move all selected nodes (shift-click toggles a node)
    - Drag a handle: reshape, keeping smooth/symmetric coupling
    """

    name = ToolName.SELECT

    def __init__(self, session: "EditSession") -> None:
        super().__init__(session)
        self.mode = DragMode.NONE
        self.box: tuple[float, float, float, float] | None = None
        self._last: Point | None = None
        self._handle: tuple[NodeRef, HandleSide] | None = None
        self._additive = False
        self._moved = False

    @property
    def busy(self) -> bool:
        return self.mode is not DragMode.NONE

    def pointer_down(self, pos: Point, event: PointerEvent) -> None:
        selection = self.session.selection
        hit = self.session.hit_test(pos.x, pos.y)
        self._last = pos
        self._moved = False
        self._additive = event.shift

        ref = hit.node_ref
        side = hit.handle_side
        if side is not None and ref is not None:
            selection.nodes = [ref]
            selection.add_path(ref.path_id)
            self._handle = (ref, side)
            self.mode = DragMode.HANDLE
        elif hit.kind is HitKind.NODE and ref is not None:
            if event.shift:
                if selection.has_node(ref):
                    selection.remove_node(ref)
                else:
                    selection.add_node(ref)
            elif not selection.has_node(ref):
                selection.set_paths([ref.path_id])
                selection.add_node(ref)
            self.mode = DragMode.NODE
        elif hit.kind is HitKind.PATH and hit.path_id is not None:
            if event.shift:
                selection.add_path(hit.path_id)
            elif not selection.has_path(hit.path_id):
                selection.set_paths([hit.path_id])
            self.mode = DragMode.PATH
        else:
            if not event.shift:
                selection.clear()
            self.box = (pos.x, pos.y, pos.x, pos.y)
            self.mode = DragMode.BOX

    def pointer_move(self, pos: Point, event: PointerEvent) -> None:
        if self.mode is DragMode.NONE or self._last is None:
            return

        if self.mode is DragMode.BOX and self.box is not None:
            self.box = (self.box[0], self.box[1], pos.x, pos.y)
            return

        dx = pos.x - self._last.x
        dy = pos.y - self._last.y
        self._last = pos
        if dx == 0.0 and dy == 0.0:
            return

        session = self.session
        if self.mode is DragMode.PATH:
            for path in session.paths:
                if session.selection.has_path(path.id):
                    path.translate(dx, dy)
                    self._moved = True
        elif self.mode is DragMode.NODE:
            for ref in session.selection.nodes:
                node = session.node(ref)
                if node is not None:
                    node.translate(dx, dy)
                    self._moved = True
        elif self.mode is DragMode.HANDLE and self._handle is not None:
            ref, side = self._handle
            node = session.node(ref)
            if node is not None:
                set_handle(node, side, pos)
                self._moved = True

    def pointer_up(self, pos: Point | None) -> bool:
        if self.mode is DragMode.BOX and self.box is not None:
            self._select_box(self.box)

        changed = self._moved
        self.mode = DragMode.NONE
        self.box = None
        self._last = None
        self._handle = None
        self._moved = False
        return changed

    def cancel(self) -> None:
        self.mode = DragMode.NONE
        self.box = None
        self._last = None
        self._handle = None
        self._moved = False

    def _select_box(self, box: tuple[float, float, float, float]) -> None:
        selection = self.session.selection
        if not self._additive:
            selection.clear()
        for path in self.session.paths:
            for i, node in enumerate(path.nodes):
                if rect_contains(box, node.x, node.y):
                    selection.add_node(NodeRef(path.id, i))


class PenTool(Tool):
    """Bezier pen.

    Clicking places corner nodes; dragging right after a click pulls out the
    new node's handles and makes it smooth. Clicking the first node closes
    the path and ends the pen session.
    """

    name = ToolName.PEN

    def __init__(self, session: "EditSession") -> None:
        super().__init__(session)
        self._placing: NodeRef | None = None
        self._changed = False

    @property
    def busy(self) -> bool:
        return self._placing is not None

    def _node_at(self, path: Path, pos: Point) -> int | None:
        radius = self.session.hit_radius
        for i, node in enumerate(path.nodes):
            if distance(node.anchor, pos) <= radius:
                return i
        return None

    def _select_node(self, path: Path, index: int) -> None:
        selection = self.session.selection
        selection.set_paths([path.id])
        selection.add_node(NodeRef(path.id, index))

    def pointer_down(self, pos: Point, event: PointerEvent) -> None:
        session = self.session
        path = session.active_path()
        self._changed = False

        if path is not None:
            index = self._node_at(path, pos)
            if index is not None:
                if index == 0 and len(path.nodes) >= 2:
                    path.closed = True
                    self._end_session()
                    self._changed = True
                return
            path.nodes.append(Node.flat(pos.x, pos.y))
        else:
            path = Path(nodes=[Node.flat(pos.x, pos.y)])
            session.paths.append(path)
            session.active_path_id = path.id

        index = len(path.nodes) - 1
        self._select_node(path, index)
        self._placing = NodeRef(path.id, index)
        self._changed = True

    def pointer_move(self, pos: Point, event: PointerEvent) -> None:
        if self._placing is None:
            return
        node = self.session.node(self._placing)
        if node is None:
            return
        dx = pos.x - node.x
        dy = pos.y - node.y
        if dx == 0.0 and dy == 0.0:
            return
        node.handle_out = pos
        node.handle_in = Point(node.x - dx, node.y - dy)
        node.kind = NodeKind.SMOOTH

    def pointer_up(self, pos: Point | None) -> bool:
        changed = self._changed
        self._placing = None
        self._changed = False
        return changed

    def double_click(self, pos: Point) -> bool:
        """Flatten the outgoing handle of the most recent node."""
        path = self.session.active_path()
        if path is None or not path.nodes:
            return False
        node = path.nodes[-1]
        if distance(node.anchor, pos) > self.session.hit_radius:
            return False
        if node.out_is_flat():
            return False
        node.handle_out = node.anchor
        return True

    def undo_last_point(self) -> bool:
        """Remove the most recent node of the path being drawn.

        With a single node left the whole path is cancelled. This does not
        touch the global history.

        Returns:
            True if anything was removed
        """
        session = self.session
        path = session.active_path()
        if path is None:
            return False

        self._placing = None
        if len(path.nodes) > 1:
            path.nodes.pop()
            self._select_node(path, len(path.nodes) - 1)
        else:
            session.paths.remove(path)
            session.active_path_id = None
            session.selection.clear()
        return True

    def cancel(self) -> None:
        self._placing = None
        self._changed = False

    def _end_session(self) -> None:
        self.session.active_path_id = None
        self.session.selection.nodes = []

    def deactivate(self) -> bool:
        path = self.session.active_path()
        self._placing = None
        self._end_session()
        if path is not None and path.is_degenerate():
            self.session.paths.remove(path)
            self.session.selection.clear()
            return True
        return False


class BrushTool(Tool):
    """Freehand brush producing a closed ribbon outline."""

    name = ToolName.BRUSH

    def __init__(self, session: "EditSession") -> None:
        super().__init__(session)
        self._centerline: list[Point] = []
        self._path: Path | None = None

    @property
    def busy(self) -> bool:
        return self._path is not None

    def pointer_down(self, pos: Point, event: PointerEvent) -> None:
        path = Path(closed=True)
        self._centerline = [pos]
        self._path = path
        self.session.paths.append(path)
        self.session.active_path_id = path.id

    def pointer_move(self, pos: Point, event: PointerEvent) -> None:
        if self._path is None or pos == self._centerline[-1]:
            return
        self._centerline.append(pos)
        outline = ribbon_outline(self._centerline, self.session.brush_width)
        if outline:
            self._path.nodes = [Node.flat(p.x, p.y) for p in outline]

    def pointer_up(self, pos: Point | None) -> bool:
        path = self._path
        if path is None:
            return False

        left, right = ribbon_rails(self._centerline, self.session.brush_width)
        self._path = None
        self._centerline = []
        self.session.active_path_id = None

        if len(left) + len(right) < 3:
            if path in self.session.paths:
                self.session.paths.remove(path)
            return False

        tension = self.session.settings.editor.brush_tension
        path.nodes = smooth_rail(left, tension) + smooth_rail(right[::-1], tension)
        self.session.selection.set_paths([path.id])
        return True

    def deactivate(self) -> bool:
        return self.pointer_up(None)

    def cancel(self) -> None:
        self._path = None
        self._centerline = []


class ShapeTool(Tool):
    """Inserts a preset shape at the canvas center, then hands back to Select."""

    name = ToolName.SHAPE
    one_shot = True

    def __init__(self, session: "EditSession") -> None:
        super().__init__(session)
        self.kind = ShapeKind.SQUARE
        self._inserted = False

    def insert(self) -> Path:
        session = self.session
        path = make_shape(self.kind, session.settings.canvas.center, session.settings.editor.shape_size)
        session.paths.append(path)
        session.selection.set_paths([path.id])
        return path

    def pointer_down(self, pos: Point, event: PointerEvent) -> None:
        self.insert()
        self._inserted = True

    def pointer_up(self, pos: Point | None) -> bool:
        inserted = self._inserted
        self._inserted = False
        return inserted

    def cancel(self) -> None:
        self._inserted = False
