"""Linear undo/redo history of path-list snapshots."""

from glyphsmith.domain import Path, clone_paths


class History:
    """A stack of full path-list snapshots with a cursor.

    Every snapshot is a deep copy, so memory grows with depth times glyph
    complexity; `limit` caps the number of snapshots kept (oldest first out).

    Example:
        history = History([])
        history.push(paths)
        previous = history.undo()
    """

    def __init__(self, initial: list[Path] | None = None, limit: int | None = None) -> None:
        self._limit = limit
        self._snapshots: list[list[Path]] = [clone_paths(initial or [])]
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._snapshots)

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def push(self, paths: list[Path]) -> None:
        """Record a snapshot, discarding any redo states after the cursor."""
        del self._snapshots[self._cursor + 1 :]
        self._snapshots.append(clone_paths(paths))
        if self._limit is not None and len(self._snapshots) > self._limit:
            del self._snapshots[: len(self._snapshots) - self._limit]
        self._cursor = len(self._snapshots) - 1

    def undo(self) -> list[Path] | None:
        """Step back and return a copy of that snapshot, or None at the start."""
        if not self.can_undo():
            return None
        self._cursor -= 1
        return clone_paths(self._snapshots[self._cursor])

    def redo(self) -> list[Path] | None:
        """Step forward and return a copy of that snapshot, or None at the end."""
        if not self.can_redo():
            return None
        self._cursor += 1
        return clone_paths(self._snapshots[self._cursor])

    def reset(self, paths: list[Path]) -> None:
        """Drop all snapshots and start over from `paths`."""
        self._snapshots = [clone_paths(paths)]
        self._cursor = 0
