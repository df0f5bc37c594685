"""Unit tests for the edit session: hit testing, commands and history."""

import pytest

from glyphsmith.domain import Node, NodeRef, Path, Point
from glyphsmith.editor import (
    EditSession,
    HitKind,
    MouseButton,
    PointerEvent,
    ShapeKind,
    ToolName,
)


def snapshot(session: EditSession) -> list[dict]:
    """Serializable view of the session's geometry."""
    return [p.to_dict() for p in session.paths]


@pytest.fixture
def session() -> EditSession:
    """Empty edit session."""
    return EditSession()


class TestHitTest:
    """Tests for EditSession.hit_test."""

    def test_canvas(self, session) -> None:
        """Test empty space hits the canvas."""
        assert session.hit_test(10, 10).kind is HitKind.CANVAS

    def test_node_beats_path_body(self, session, make_square) -> None:
        """Test a node under the pointer wins over the path body."""
        square = make_square(100, 100, 100)
        session.paths.append(square)

        hit = session.hit_test(102, 101)
        assert hit.kind is HitKind.NODE
        assert hit.node_ref == NodeRef(square.id, 0)

    def test_closed_path_interior(self, session, make_square) -> None:
        """Test the interior of a closed path hits the path."""
        square = make_square(100, 100, 100)
        session.paths.append(square)
        hit = session.hit_test(150, 150)
        assert hit.kind is HitKind.PATH
        assert hit.path_id == square.id

    def test_open_path_near_outline(self, session) -> None:
        """Test open paths are hit near their outline only."""
        path = Path(nodes=[Node.flat(0, 0), Node.flat(100, 0), Node.flat(100, 100)])
        session.paths.append(path)
        assert session.hit_test(50, 3).kind is HitKind.PATH

    def test_open_path_gap_not_hit(self, session) -> None:
        """Test the gap between an open path's ends is not part of it."""
        path = Path(nodes=[Node.flat(0, 0), Node.flat(100, 0), Node.flat(100, 100)])
        session.paths.append(path)
        assert session.hit_test(50, 50).kind is HitKind.CANVAS
        assert session.hit_test(100, 50).kind is HitKind.PATH

    def test_topmost_path_wins(self, session, make_square) -> None:
        """Test overlapping paths resolve to the last one in z-order."""
        below = make_square(100, 100, 100)
        above = make_square(120, 120, 100)
        session.paths.extend([below, above])
        assert session.hit_test(150, 150).path_id == above.id

    def test_handles_of_selected_nodes(self, session) -> None:
        """Test handles are hit only when their node is selected."""
        node = Node(100, 100, handle_in=Point(100, 100), handle_out=Point(150, 100))
        path = Path(nodes=[node, Node.flat(300, 300)])
        session.paths.append(path)

        assert session.hit_test(150, 100).kind is not HitKind.HANDLE_OUT
        session.selection.add_node(NodeRef(path.id, 0))
        hit = session.hit_test(150, 100)
        assert hit.kind is HitKind.HANDLE_OUT
        assert hit.index == 0

    def test_radius_shrinks_with_zoom(self, session, make_square) -> None:
        """Test the hit radius is constant in screen pixels."""
        session.paths.append(make_square(100, 100, 100))
        assert session.hit_test(106, 100).kind is HitKind.NODE

        session.zoom(2.0, 0, 0)
        assert session.hit_radius == pytest.approx(4.0)
        assert session.hit_test(106, 100).kind is HitKind.PATH
        assert session.hit_test(106, 94).kind is HitKind.CANVAS


class TestViewport:
    """Tests for pan and zoom."""

    def test_middle_button_pans(self, session) -> None:
        """Test a middle-button drag pans the view."""
        session.pointer_down(PointerEvent(0, 0, button=MouseButton.MIDDLE))
        session.pointer_move(PointerEvent(50, 20, button=MouseButton.MIDDLE))
        session.pointer_up(PointerEvent(50, 20, button=MouseButton.MIDDLE))

        assert (session.view.x, session.view.y) == (50, 20)
        assert session.view.to_world(50, 20) == Point(0, 0)
        assert session.paths == []

    def test_pan_modifier_with_pen(self, session) -> None:
        """Test the pan modifier pans instead of placing a node."""
        session.set_tool(ToolName.PEN)
        session.pointer_down(PointerEvent(0, 0, pan_modifier=True))
        session.pointer_move(PointerEvent(30, 0, pan_modifier=True))
        session.pointer_up(PointerEvent(30, 0))

        assert session.paths == []
        assert session.view.x == 30

    def test_pen_works_in_world_space(self, session) -> None:
        """Test pointer positions are mapped through the view."""
        session.zoom(2.0, 0, 0)
        session.set_tool(ToolName.PEN)
        session.pointer_down(PointerEvent(200, 100))
        session.pointer_up(PointerEvent(200, 100))

        node = session.paths[0].nodes[0]
        assert (node.x, node.y) == (100, 50)

    def test_zoom_is_clamped(self, session) -> None:
        """Test zoom stays within its limits."""
        session.zoom(1000.0, 0, 0)
        assert session.view.k == 10.0
        session.zoom(0.00001, 0, 0)
        assert session.view.k == 0.1


class TestGestureLifecycle:
    """Tests for gesture completion."""

    def test_pointer_leave_ends_drag(self, session) -> None:
        """Test leaving the canvas mid-drag finishes the gesture."""
        path = session.add_shape(ShapeKind.SQUARE)
        session.pointer_down(PointerEvent(500, 500))
        session.pointer_move(PointerEvent(530, 500))
        session.pointer_leave()

        assert not session.tool.busy
        assert path.nodes[0].x == 430
        assert len(session.history) == 3

        # later moves without a press do nothing
        session.pointer_move(PointerEvent(600, 500))
        assert path.nodes[0].x == 430

    def test_undo_redo_n_steps(self, session) -> None:
        """Test undoing and redoing every gesture reproduces the final state."""
        session.add_shape(ShapeKind.SQUARE)
        session.pointer_down(PointerEvent(500, 500))
        session.pointer_move(PointerEvent(540, 520))
        session.pointer_up(PointerEvent(540, 520))
        session.add_shape(ShapeKind.CIRCLE)
        final = snapshot(session)

        for _ in range(3):
            assert session.undo()
        assert session.paths == []
        assert not session.undo()

        for _ in range(3):
            assert session.redo()
        assert snapshot(session) == final
        assert not session.redo()

    def test_undo_clears_selection_and_pen(self, session) -> None:
        """Test undo ends the pen session and clears the selection."""
        session.set_tool(ToolName.PEN)
        session.pointer_down(PointerEvent(100, 100))
        session.pointer_up(PointerEvent(100, 100))
        session.pointer_down(PointerEvent(200, 100))
        session.pointer_up(PointerEvent(200, 100))

        session.undo()

        assert session.active_path_id is None
        assert session.selection.is_empty()
        assert len(session.paths[0].nodes) == 1

    def test_new_gesture_after_undo_drops_redo(self, session) -> None:
        """Test editing after undo discards the redo branch."""
        session.add_shape(ShapeKind.SQUARE)
        session.undo()
        session.add_shape(ShapeKind.CIRCLE)
        assert not session.redo()

    def test_undo_during_brush_press(self, session) -> None:
        """Test undo while the brush is held drops the stroke cleanly."""
        session.add_shape(ShapeKind.SQUARE)
        session.set_tool(ToolName.BRUSH)
        session.pointer_down(PointerEvent(100, 100))

        assert session.undo()
        session.pointer_up(PointerEvent(100, 100))

        assert session.paths == []
        assert not session.tool.busy

    def test_undo_during_brush_stroke(self, session) -> None:
        """Test a stroke interrupted by undo is not committed on release."""
        session.add_shape(ShapeKind.SQUARE)
        session.set_tool(ToolName.BRUSH)
        session.pointer_down(PointerEvent(100, 100))
        session.pointer_move(PointerEvent(200, 120))
        session.pointer_move(PointerEvent(300, 100))

        assert session.undo()
        session.pointer_move(PointerEvent(400, 100))
        session.pointer_up(PointerEvent(400, 100))

        assert session.paths == []
        assert session.redo()
        assert len(session.paths) == 1
        assert not session.redo()

    def test_boolean_during_drag_cancels_it(self, session, make_square) -> None:
        """Test a union mid-drag ends the drag without moving the result."""
        a = make_square(400, 400, 100)
        b = make_square(450, 400, 100)
        session.paths.extend([a, b])
        session.pointer_down(PointerEvent(420, 450))
        session.selection.set_paths([a.id, b.id])

        assert session.union_selected()
        assert not session.tool.busy
        merged = snapshot(session)
        session.pointer_move(PointerEvent(480, 450))
        session.pointer_up(PointerEvent(480, 450))

        assert snapshot(session) == merged
        assert len(session.history) == 2


class TestCommands:
    """Tests for session commands."""

    def test_delete_selected_nodes(self, session, make_square) -> None:
        """Test deleting a selected node shortens its path."""
        square = make_square(100, 100, 100)
        session.paths.append(square)
        session.selection.add_node(NodeRef(square.id, 1))

        assert session.delete()
        assert len(square.nodes) == 3
        assert session.selection.is_empty()

    def test_delete_drops_degenerate_paths(self, session) -> None:
        """Test a path left with fewer than two nodes is removed."""
        path = Path(nodes=[Node.flat(0, 0), Node.flat(100, 0)])
        session.paths.append(path)
        session.selection.add_node(NodeRef(path.id, 0))

        assert session.delete()
        assert session.paths == []

    def test_delete_selected_paths(self, session, make_square) -> None:
        """Test deleting with only paths selected removes the paths."""
        keep = make_square(0, 0, 10)
        gone = make_square(100, 100, 10)
        session.paths.extend([keep, gone])
        session.selection.set_paths([gone.id])

        assert session.delete()
        assert session.paths == [keep]
        assert len(session.history) == 2

    def test_delete_nothing(self, session) -> None:
        """Test delete with an empty selection is a no-op."""
        assert not session.delete()
        assert len(session.history) == 1

    def test_bring_to_front_and_send_to_back(self, session, make_square) -> None:
        """Test z-order moves of the first selected path."""
        a = make_square(0, 0, 10)
        b = make_square(20, 0, 10)
        c = make_square(40, 0, 10)
        session.paths.extend([a, b, c])

        session.selection.set_paths([a.id])
        assert session.bring_to_front()
        assert [p.id for p in session.paths] == [b.id, c.id, a.id]

        session.selection.set_paths([c.id])
        assert session.send_to_back()
        assert [p.id for p in session.paths] == [c.id, b.id, a.id]

    def test_z_order_needs_selection(self, session) -> None:
        """Test z-order commands without a selection do nothing."""
        assert not session.bring_to_front()
        assert not session.send_to_back()

    def test_union_selected(self, session, make_square) -> None:
        """Test union replaces the selection with the merged path."""
        a = make_square(0, 0, 100)
        b = make_square(50, 0, 100)
        session.paths.extend([a, b])
        session.selection.set_paths([a.id, b.id])

        assert session.union_selected()
        assert len(session.paths) == 1
        assert session.selection.path_ids == [session.paths[0].id]
        assert len(session.history) == 2

    def test_hole_selected(self, session, outer_square, inner_square) -> None:
        """Test hole punches the topmost selected path."""
        session.paths.extend([outer_square, inner_square])
        session.selection.set_paths([inner_square.id, outer_square.id])

        assert session.hole_selected()
        assert sorted(p.is_hole for p in session.paths) == [False, True]

    def test_boolean_needs_two_paths(self, session, make_square) -> None:
        """Test booleans with one selected path are ignored."""
        a = make_square(0, 0, 100)
        session.paths.append(a)
        session.selection.set_paths([a.id])
        assert not session.union_selected()
        assert not session.hole_selected()
        assert len(session.history) == 1

    def test_escape_ends_pen_and_clears(self, session) -> None:
        """Test escape finishes the pen path and clears the selection."""
        session.set_tool(ToolName.PEN)
        for x in (100, 200):
            session.pointer_down(PointerEvent(x, 100))
            session.pointer_up(PointerEvent(x, 100))

        session.escape()

        assert session.active_path_id is None
        assert session.selection.is_empty()
        assert len(session.paths) == 1

    def test_add_paths_is_one_step(self, session, make_square) -> None:
        """Test appending external paths records one history step."""
        session.add_paths([make_square(0, 0, 10), make_square(20, 0, 10)])
        assert len(session.paths) == 2
        assert len(session.history) == 2
        session.undo()
        assert session.paths == []
