"""Unit tests for snapshot undo/redo history."""

from glyphsmith.editor.history import History


class TestHistory:
    """Tests for History class."""

    def test_initial_state(self) -> None:
        """Test a new history holds one snapshot and cannot move."""
        history = History([])
        assert len(history) == 1
        assert history.cursor == 0
        assert not history.can_undo()
        assert not history.can_redo()
        assert history.undo() is None
        assert history.redo() is None

    def test_undo_redo(self, make_square) -> None:
        """Test stepping back and forth returns the recorded states."""
        history = History([])
        square = make_square(0, 0, 10)
        history.push([square])

        assert history.undo() == []
        restored = history.redo()
        assert restored is not None
        assert [p.id for p in restored] == [square.id]

    def test_snapshots_are_copies(self, make_square) -> None:
        """Test later edits do not leak into recorded snapshots."""
        history = History([])
        square = make_square(0, 0, 10)
        history.push([square])
        square.translate(100, 0)

        history.push([square])
        previous = history.undo()

        assert previous is not None
        assert previous[0].nodes[0].x == 0
        assert previous[0] is not square

    def test_push_discards_redo(self, make_square) -> None:
        """Test a new snapshot after undo drops the redo branch."""
        history = History([])
        history.push([make_square(0, 0, 10)])
        history.push([make_square(0, 0, 20)])
        history.undo()

        history.push([])

        assert not history.can_redo()
        assert len(history) == 3

    def test_limit_drops_oldest(self, make_square) -> None:
        """Test the snapshot limit keeps only the newest states."""
        history = History([], limit=3)
        for size in (10, 20, 30, 40):
            history.push([make_square(0, 0, size)])

        assert len(history) == 3
        assert history.cursor == 2
        history.undo()
        oldest = history.undo()
        assert oldest is not None
        assert oldest[0].nodes[1].x == 20
        assert history.undo() is None

    def test_reset(self, make_square) -> None:
        """Test reset starts over from the given paths."""
        history = History([])
        history.push([make_square(0, 0, 10)])
        history.reset([])
        assert len(history) == 1
        assert not history.can_undo()
