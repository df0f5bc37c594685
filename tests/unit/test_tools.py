"""Unit tests for the editing tools, driven through an edit session."""

import pytest

from glyphsmith.domain import NodeKind, NodeRef, Point
from glyphsmith.editor import EditSession, PointerEvent, ShapeKind, ToolName, make_shape
from glyphsmith.editor.brush import ribbon_outline, ribbon_rails, smooth_rail
from glyphsmith.editor.tools import CIRCLE_KAPPA


def click(session: EditSession, x: float, y: float, shift: bool = False) -> None:
    """Press and release at one position."""
    session.pointer_down(PointerEvent(x, y, shift=shift))
    session.pointer_up(PointerEvent(x, y, shift=shift))


def drag(session: EditSession, points: list[tuple[float, float]]) -> None:
    """Press at the first point, move through the rest and release."""
    x, y = points[0]
    session.pointer_down(PointerEvent(x, y))
    for x, y in points[1:]:
        session.pointer_move(PointerEvent(x, y))
    session.pointer_up(PointerEvent(x, y))


@pytest.fixture
def session() -> EditSession:
    """Empty edit session."""
    return EditSession()


class TestPenTool:
    """Tests for the pen tool."""

    def test_triangle_closes_on_first_node(self, session) -> None:
        """Test clicking three corners then the first node closes a triangle."""
        session.set_tool(ToolName.PEN)
        for x, y in [(100, 100), (300, 100), (300, 300), (100, 100)]:
            click(session, x, y)

        assert len(session.paths) == 1
        path = session.paths[0]
        assert path.closed
        assert [(n.x, n.y) for n in path.nodes] == [(100, 100), (300, 100), (300, 300)]
        assert all(n.kind is NodeKind.CUSP and n.is_flat() for n in path.nodes)
        assert session.active_path_id is None

    def test_each_click_is_one_history_step(self, session) -> None:
        """Test every placed node and the closing click record a snapshot."""
        session.set_tool(ToolName.PEN)
        for x, y in [(100, 100), (300, 100), (300, 300), (100, 100)]:
            click(session, x, y)
        assert len(session.history) == 5

    def test_drag_pulls_smooth_handles(self, session) -> None:
        """Test dragging after a click makes a smooth node with mirrored handles."""
        session.set_tool(ToolName.PEN)
        drag(session, [(100, 100), (150, 120)])

        node = session.paths[0].nodes[0]
        assert node.kind is NodeKind.SMOOTH
        assert node.handle_out == Point(150, 120)
        assert node.handle_in == Point(50, 80)

    def test_double_click_flattens_out_handle(self, session) -> None:
        """Test double-clicking the last node removes its outgoing handle."""
        session.set_tool(ToolName.PEN)
        click(session, 100, 100)
        drag(session, [(300, 100), (350, 100)])
        # second click of the double click lands on the existing node
        click(session, 300, 100)
        session.double_click(PointerEvent(300, 100))

        path = session.paths[0]
        assert len(path.nodes) == 2
        last = path.nodes[-1]
        assert last.out_is_flat()
        assert last.handle_in == Point(250, 100)

    def test_undo_last_point(self, session) -> None:
        """Test removing pen points one by one cancels the path."""
        session.set_tool(ToolName.PEN)
        click(session, 100, 100)
        click(session, 200, 100)

        assert session.undo_last_point()
        assert len(session.paths[0].nodes) == 1
        assert session.undo_last_point()
        assert session.paths == []
        assert not session.undo_last_point()

    def test_leaving_pen_drops_single_node_path(self, session) -> None:
        """Test switching tools removes a path with a single node."""
        session.set_tool(ToolName.PEN)
        click(session, 100, 100)
        session.set_tool(ToolName.SELECT)
        assert session.paths == []
        assert session.active_path_id is None

    def test_leaving_pen_keeps_open_path(self, session) -> None:
        """Test switching tools keeps an open path with two nodes."""
        session.set_tool(ToolName.PEN)
        click(session, 100, 100)
        click(session, 200, 100)
        session.set_tool(ToolName.SELECT)

        assert len(session.paths) == 1
        assert not session.paths[0].closed

    def test_next_click_starts_new_path(self, session) -> None:
        """Test clicking after closing a path starts another one."""
        session.set_tool(ToolName.PEN)
        for x, y in [(100, 100), (300, 100), (300, 300), (100, 100), (600, 600)]:
            click(session, x, y)
        assert len(session.paths) == 2
        assert session.active_path_id == session.paths[1].id


class TestBrushTool:
    """Tests for the brush tool."""

    def test_stroke_becomes_closed_smooth_ribbon(self, session) -> None:
        """Test a horizontal stroke yields a closed ribbon of smooth nodes."""
        session.set_tool(ToolName.BRUSH)
        drag(session, [(100, 500), (200, 500), (300, 500)])

        assert len(session.paths) == 1
        path = session.paths[0]
        assert path.closed
        assert len(path.nodes) == 6
        assert all(n.kind is NodeKind.SMOOTH for n in path.nodes)
        ys = sorted({n.y for n in path.nodes})
        assert ys == [470, 530]
        assert session.selection.path_ids == [path.id]
        assert len(session.history) == 2

    def test_click_without_movement_is_discarded(self, session) -> None:
        """Test a brush click with no movement leaves no path."""
        session.set_tool(ToolName.BRUSH)
        click(session, 100, 100)
        assert session.paths == []
        assert len(session.history) == 1

    def test_brush_width_is_used(self, session) -> None:
        """Test the current brush width sets the ribbon thickness."""
        session.brush_width = 20
        session.set_tool(ToolName.BRUSH)
        drag(session, [(100, 500), (200, 500)])
        ys = sorted({n.y for n in session.paths[0].nodes})
        assert ys == [490, 510]


class TestBrushGeometry:
    """Tests for ribbon helpers."""

    def test_rails_offset_along_normal(self) -> None:
        """Test rails sit half the width to each side."""
        left, right = ribbon_rails([Point(0, 0), Point(10, 0)], 4)
        assert left == [Point(0, 2), Point(10, 2)]
        assert right == [Point(0, -2), Point(10, -2)]

    def test_outline_joins_rails(self) -> None:
        """Test the outline runs down the left rail and back up the right."""
        outline = ribbon_outline([Point(0, 0), Point(10, 0)], 4)
        assert outline == [Point(0, 2), Point(10, 2), Point(10, -2), Point(0, -2)]

    def test_zero_length_tangent_skipped(self) -> None:
        """Test repeated samples are skipped."""
        left, _ = ribbon_rails([Point(0, 0), Point(0, 0)], 4)
        assert left == []

    def test_smooth_rail_handles(self) -> None:
        """Test handles follow the neighbor chord scaled by the tension."""
        nodes = smooth_rail([Point(0, 0), Point(10, 0), Point(20, 0)], 0.2)
        assert nodes[1].handle_out == Point(14, 0)
        assert nodes[1].handle_in == Point(6, 0)
        assert nodes[0].handle_out == Point(2, 0)


class TestShapeTool:
    """Tests for preset shapes."""

    def test_square_shape(self) -> None:
        """Test the square preset has four cusp corners."""
        path = make_shape(ShapeKind.SQUARE, (500, 500), 200)
        assert path.closed
        assert [(n.x, n.y) for n in path.nodes] == [
            (400, 400),
            (600, 400),
            (600, 600),
            (400, 600),
        ]
        assert all(n.is_flat() for n in path.nodes)

    def test_circle_shape(self) -> None:
        """Test the circle preset uses four symmetric nodes with kappa handles."""
        path = make_shape(ShapeKind.CIRCLE, (500, 500), 200)
        top = path.nodes[0]

        assert len(path.nodes) == 4
        assert all(n.kind is NodeKind.SYMMETRIC for n in path.nodes)
        assert (top.x, top.y) == (500, 400)
        assert top.handle_out.x - top.x == pytest.approx(100 * CIRCLE_KAPPA)
        assert top.handle_in.x - top.x == pytest.approx(-100 * CIRCLE_KAPPA)

    def test_add_shape_returns_to_select(self, session) -> None:
        """Test inserting a shape selects it and hands back to the select tool."""
        path = session.add_shape(ShapeKind.CIRCLE)

        assert session.paths == [path]
        assert session.selection.path_ids == [path.id]
        assert session.tool_name is ToolName.SELECT
        assert len(session.history) == 2

    def test_shape_tool_click_is_one_shot(self, session) -> None:
        """Test the shape tool inserts on click then reverts to select."""
        session.set_tool(ToolName.SHAPE)
        click(session, 10, 10)
        assert len(session.paths) == 1
        assert session.tool_name is ToolName.SELECT


class TestSelectTool:
    """Tests for the select tool."""

    def test_drag_path_moves_it(self, session) -> None:
        """Test dragging a path body translates it."""
        path = session.add_shape(ShapeKind.SQUARE)
        drag(session, [(500, 500), (510, 505), (520, 510)])

        assert (path.nodes[0].x, path.nodes[0].y) == (420, 410)
        assert len(session.history) == 3

    def test_click_without_move_records_nothing(self, session) -> None:
        """Test clicking a path only selects it."""
        session.add_shape(ShapeKind.SQUARE)
        session.selection.clear()
        click(session, 500, 500)

        assert session.selection.path_ids == [session.paths[0].id]
        assert len(session.history) == 2

    def test_click_canvas_clears_selection(self, session) -> None:
        """Test clicking empty canvas clears the selection."""
        session.add_shape(ShapeKind.SQUARE)
        click(session, 50, 50)
        assert session.selection.is_empty()

    def test_drag_node(self, session) -> None:
        """Test dragging a node moves only that node."""
        path = session.add_shape(ShapeKind.SQUARE)
        drag(session, [(400, 400), (380, 390)])

        assert (path.nodes[0].x, path.nodes[0].y) == (380, 390)
        assert (path.nodes[1].x, path.nodes[1].y) == (600, 400)

    def test_shift_click_toggles_nodes(self, session) -> None:
        """Test shift-clicking nodes adds and removes them."""
        path = session.add_shape(ShapeKind.SQUARE)
        click(session, 400, 400)
        click(session, 600, 400, shift=True)
        assert session.selection.nodes == [NodeRef(path.id, 0), NodeRef(path.id, 1)]

        click(session, 400, 400, shift=True)
        assert session.selection.nodes == [NodeRef(path.id, 1)]

    def test_rubber_band_selects_nodes(self, session) -> None:
        """Test a box drag on empty canvas selects the nodes inside it."""
        path = session.add_shape(ShapeKind.SQUARE)
        drag(session, [(350, 350), (650, 450)])

        assert session.selection.nodes == [NodeRef(path.id, 0), NodeRef(path.id, 1)]
        assert len(session.history) == 2

    def test_handle_drag_keeps_symmetry(self, session) -> None:
        """Test dragging a circle node's handle mirrors the other handle."""
        path = session.add_shape(ShapeKind.CIRCLE)
        top = path.nodes[0]
        click(session, top.x, top.y)
        out = top.handle_out
        drag(session, [(out.x, out.y), (out.x + 10, out.y + 20)])

        assert top.handle_out == Point(out.x + 10, out.y + 20)
        assert top.handle_in.x - top.x == pytest.approx(-(top.handle_out.x - top.x))
        assert top.handle_in.y - top.y == pytest.approx(-(top.handle_out.y - top.y))
