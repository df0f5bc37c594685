"""Pen-level outline exchange with fontTools.

This module sits between fontTools glyph objects and editor paths:

- OutlineRecordingPen records any fontTools glyph (quadratic TrueType or
  cubic CFF, components decomposed) as a flat list of OutlineCommand.
- draw_paths replays editor paths into any fontTools pen, optionally
  through a coordinate transform. The compiler and the preview renderer
  share it so both see identical segments.
- read_font_outlines parses font bytes and records the outlines of the
  requested characters.
"""

import io
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog
from fontTools.pens.basePen import BasePen
from fontTools.ttLib import TTFont, TTLibError

from glyphsmith.core.sampler import is_straight_segment
from glyphsmith.domain import Path, Point
from glyphsmith.exceptions import FontImportError

logger = structlog.get_logger(__name__)

Transform = Callable[[Point], tuple[float, float]]


class OutlineOp(str, Enum):
    """Outline command opcodes."""

    MOVE = "M"
    LINE = "L"
    QUAD = "Q"
    CUBIC = "C"
    CLOSE = "Z"
    END = "E"  # open contour end


@dataclass(frozen=True, slots=True)
class OutlineCommand:
    """One outline drawing command in font units (y up).

    Attributes:
        op: Command opcode
        points: Control points followed by the end point
    """

    op: OutlineOp
    points: tuple[tuple[float, float], ...] = ()

    @property
    def end(self) -> tuple[float, float] | None:
        return self.points[-1] if self.points else None


class OutlineRecordingPen(BasePen):
    """Record a glyph outline as OutlineCommand values.

    Quadratic segments are kept as Q commands (not converted by the base
    pen) so callers control the cubic elevation. Components are decomposed
    through the glyph set passed to the constructor.

    Example:
        pen = OutlineRecordingPen(font.getGlyphSet())
        font.getGlyphSet()["a"].draw(pen)
        pen.commands
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self.commands: list[OutlineCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(OutlineCommand(OutlineOp.MOVE, (pt,)))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(OutlineCommand(OutlineOp.LINE, (pt,)))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.commands.append(OutlineCommand(OutlineOp.CUBIC, (pt1, pt2, pt3)))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.commands.append(OutlineCommand(OutlineOp.QUAD, (pt1, pt2)))

    def _closePath(self) -> None:
        self.commands.append(OutlineCommand(OutlineOp.CLOSE))

    def _endPath(self) -> None:
        self.commands.append(OutlineCommand(OutlineOp.END))


def _identity(point: Point) -> tuple[float, float]:
    return (point.x, point.y)


def draw_paths(
    paths: Iterable[Path],
    pen: Any,
    transform: Transform | None = None,
) -> int:
    """Replay editor paths into a fontTools pen.

    A segment is a line when the start node's outgoing handle and the end
    node's incoming handle both sit on their anchors, otherwise a cubic
    through those handles. Closed paths get their closing segment (drawn as
    a curve when it is curved) followed by closePath; open paths end with
    endPath. Paths with fewer than two nodes are skipped.

    Args:
        paths: Paths to draw
        pen: Any fontTools segment pen
        transform: Maps an editor point to pen coordinates (identity if None)

    Returns:
        Number of contours drawn
    """
    tf = transform or _identity
    drawn = 0

    for path in paths:
        nodes = path.nodes
        if len(nodes) < 2:
            continue

        pen.moveTo(tf(nodes[0].anchor))
        segments = list(zip(nodes, nodes[1:]))
        if path.closed:
            segments.append((nodes[-1], nodes[0]))

        for index, (start, end) in enumerate(segments):
            closing = path.closed and index == len(segments) - 1
            if is_straight_segment(start, end):
                if not closing:
                    pen.lineTo(tf(end.anchor))
            else:
                pen.curveTo(tf(start.handle_out), tf(end.handle_in), tf(end.anchor))

        if path.closed:
            pen.closePath()
        else:
            pen.endPath()
        drawn += 1

    return drawn


@dataclass
class FontOutlines:
    """Outlines recorded from a font file.

    Attributes:
        units_per_em: Design units per em of the source font
        family_name: Family name from the name table (empty if absent)
        commands: Outline commands per character
        missing: Requested characters without a mapped glyph
    """

    units_per_em: int
    family_name: str = ""
    commands: dict[str, list[OutlineCommand]] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)


def read_font_outlines(data: bytes, chars: Iterable[str], source: str = "<bytes>") -> FontOutlines:
    """Parse a font container and record the outlines of characters.

    Args:
        data: Raw TTF/OTF bytes
        chars: Characters to extract
        source: Name used in error messages

    Returns:
        FontOutlines; characters without a mapped glyph are listed in
        ``missing`` and characters whose outline cannot be drawn are left out

    Raises:
        FontImportError: If the bytes are not a readable font
    """
    try:
        font = TTFont(io.BytesIO(data), lazy=False)
        cmap = font.getBestCmap() or {}
        units_per_em = font["head"].unitsPerEm  # type: ignore[attr-defined]
        glyph_set = font.getGlyphSet()
    except (TTLibError, KeyError, ValueError, EOFError, AssertionError) as e:
        raise FontImportError(source, str(e) or type(e).__name__) from e

    family = ""
    if "name" in font:
        family = font["name"].getDebugName(1) or ""  # type: ignore[attr-defined]

    outlines = FontOutlines(units_per_em=units_per_em, family_name=family)

    for char in chars:
        glyph_name = cmap.get(ord(char))
        if glyph_name is None or glyph_name not in glyph_set:
            outlines.missing.append(char)
            continue

        pen = OutlineRecordingPen(glyph_set)
        try:
            glyph_set[glyph_name].draw(pen)
        except Exception as e:
            logger.warning("Outline not readable", char=char, glyph=glyph_name, error=str(e))
            continue

        outlines.commands[char] = pen.commands

    font.close()
    return outlines
