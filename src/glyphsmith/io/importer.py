"""Import outlines from font files and SVG path strings.

Font outlines arrive as OutlineCommand lists in font units (y up). They are
converted to editor paths: quadratic segments are elevated to cubic, the
outline is scaled to the canvas, flipped about the baseline and centered
horizontally on the canvas midline. Contours nested inside an odd number of
other contours are flagged as holes.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog
from fontTools.svgLib.path import parse_path

from glyphsmith.config import CanvasConfig, GlyphsmithSettings, get_default_settings
from glyphsmith.core.boolean import flag_holes
from glyphsmith.core.geometry import paths_bounds
from glyphsmith.domain import Glyph, GlyphMap, Node, Path, Point
from glyphsmith.exceptions import GlyphNotFoundError, PathDataError
from glyphsmith.io.outline import OutlineCommand, OutlineOp, OutlineRecordingPen, read_font_outlines
from glyphsmith.io.preview import render_preview
from glyphsmith.utils.logging import BatchLogger, BatchStats

logger = structlog.get_logger(__name__)

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS_AND_SYMBOLS = "0123456789?!@#$&%+-/*="
ACCENTED = "ÁÀÂÃÄÉÈÊËÍÌÎÏÓÒÔÕÖÚÙÛÜÇÑáàâãäéèêëíìîïóòôõöúùûüçñ"

DEFAULT_CHARSET = LOWERCASE + UPPERCASE + DIGITS_AND_SYMBOLS + ACCENTED


def _elevate_quadratic(
    start: tuple[float, float], control: tuple[float, float], end: tuple[float, float]
) -> tuple[Point, Point]:
    """Cubic control points equivalent to a quadratic segment."""
    sx, sy = start
    qx, qy = control
    ex, ey = end
    cp1 = Point(sx + 2.0 / 3.0 * (qx - sx), sy + 2.0 / 3.0 * (qy - sy))
    cp2 = Point(ex + 2.0 / 3.0 * (qx - ex), ey + 2.0 / 3.0 * (qy - ey))
    return cp1, cp2


def commands_to_contours(commands: Iterable[OutlineCommand]) -> list[Path]:
    """Build paths from outline commands without changing coordinates.

    Every segment endpoint becomes a cusp node. A cubic sets the previous
    node's outgoing handle and the new node's incoming handle. On close, a
    final node that repeats the first anchor is merged into the first node.

    Returns:
        One path per contour with at least two nodes
    """
    paths: list[Path] = []
    nodes: list[Node] = []

    def finish(closed: bool) -> None:
        nonlocal nodes
        if closed and len(nodes) > 1:
            first, last = nodes[0], nodes[-1]
            if first.x == last.x and first.y == last.y:
                first.handle_in = last.handle_in
                nodes.pop()
        if len(nodes) >= 2:
            paths.append(Path(nodes=nodes, closed=closed))
        nodes = []

    for command in commands:
        op = command.op
        if op is OutlineOp.MOVE:
            if nodes:
                finish(closed=False)
            x, y = command.points[0]
            nodes.append(Node.flat(x, y))
        elif not nodes:
            # Segment without a current point
            continue
        elif op is OutlineOp.LINE:
            x, y = command.points[0]
            nodes.append(Node.flat(x, y))
        elif op in (OutlineOp.QUAD, OutlineOp.CUBIC):
            prev = nodes[-1]
            if op is OutlineOp.QUAD:
                control, end = command.points
                cp1, cp2 = _elevate_quadratic((prev.x, prev.y), control, end)
            else:
                c1, c2, end = command.points
                cp1, cp2 = Point(*c1), Point(*c2)
            prev.handle_out = cp1
            ex, ey = end
            nodes.append(Node(ex, ey, handle_in=cp2, handle_out=Point(ex, ey)))
        elif op is OutlineOp.CLOSE:
            finish(closed=True)
        elif op is OutlineOp.END:
            finish(closed=False)

    if nodes:
        finish(closed=False)
    return paths


def _transform_node(node: Node, scale: float, baseline_y: float) -> None:
    def tf(p: Point) -> Point:
        return Point(p.x * scale, baseline_y - p.y * scale)

    anchor = tf(node.anchor)
    node.x, node.y = anchor.x, anchor.y
    node.handle_in = tf(node.handle_in)
    node.handle_out = tf(node.handle_out)


def commands_to_paths(
    commands: Iterable[OutlineCommand],
    units_per_em: int,
    canvas: CanvasConfig | None = None,
    samples: int = 30,
) -> list[Path]:
    """Convert font-space outline commands to editor paths.

    Args:
        commands: Recorded outline in font units
        units_per_em: Units per em of the source font
        canvas: Target canvas geometry
        samples: Bezier samples per segment used for hole detection

    Returns:
        Closed (or open) paths in editor space, centered on the canvas midline
    """
    canvas = canvas or CanvasConfig()
    scale = canvas.size / units_per_em

    paths = commands_to_contours(commands)
    for path in paths:
        for node in path.nodes:
            _transform_node(node, scale, canvas.baseline_y)

    bounds = paths_bounds(paths)
    if bounds is not None:
        min_x, _, max_x, _ = bounds
        shift = canvas.size / 2.0 - (min_x + max_x) / 2.0
        for path in paths:
            path.translate(shift, 0.0)

    return flag_holes(paths, samples)


def paths_from_svg(d: str, samples: int = 30) -> list[Path]:
    """Parse an SVG path description into editor paths.

    Coordinates are taken as editor space: no flip, no centering.

    Raises:
        PathDataError: If the description cannot be parsed
    """
    pen = OutlineRecordingPen()
    try:
        parse_path(d, pen)
    except (ValueError, IndexError, AssertionError) as e:
        raise PathDataError(d, str(e) or type(e).__name__) from e
    return flag_holes(commands_to_contours(pen.commands), samples)


@dataclass
class ImportResult:
    """Outcome of a font import.

    Attributes:
        glyphs: Imported glyph map
        family_name: Family name of the source font
        stats: Per-glyph batch outcome
    """

    glyphs: GlyphMap = field(default_factory=dict)
    family_name: str = ""
    stats: BatchStats = field(default_factory=BatchStats)


def import_font(
    data: bytes,
    chars: Iterable[str] = DEFAULT_CHARSET,
    settings: GlyphsmithSettings | None = None,
    source: str = "<bytes>",
) -> ImportResult:
    """Import every requested character from a font file.

    Characters missing from the font, or whose outline yields no path, are
    skipped; the rest of the batch continues.

    Raises:
        FontImportError: If the bytes are not a readable font
    """
    settings = settings or get_default_settings()
    chars = list(chars)
    outlines = read_font_outlines(data, chars, source=source)
    batch = BatchLogger(logger, "import")
    result = ImportResult(family_name=outlines.family_name)

    for char in chars:
        commands = outlines.commands.get(char)
        if commands is None:
            batch.log_glyph_skipped(char, "no outline in font")
            continue
        try:
            paths = commands_to_paths(
                commands,
                outlines.units_per_em,
                settings.canvas,
                settings.editor.samples_per_segment,
            )
        except (ValueError, ZeroDivisionError) as e:
            batch.log_glyph_error(char, e)
            continue
        if not paths:
            batch.log_glyph_skipped(char, "empty outline")
            continue
        result.glyphs[char] = Glyph(
            char=char,
            paths=paths,
            preview=render_preview(paths, settings.canvas),
        )
        batch.log_glyph_done(char, len(paths))

    result.stats = batch.stats
    logger.info(
        "Font imported",
        source=source,
        family=result.family_name,
        imported=result.stats.processed_count,
        skipped=result.stats.skipped_count,
    )
    return result


def import_glyph(
    data: bytes,
    char: str,
    settings: GlyphsmithSettings | None = None,
    source: str = "<bytes>",
) -> list[Path]:
    """Import the outline of a single character.

    Raises:
        FontImportError: If the bytes are not a readable font
        GlyphNotFoundError: If the font has no usable outline for the character
    """
    settings = settings or get_default_settings()
    outlines = read_font_outlines(data, [char], source=source)
    commands = outlines.commands.get(char)
    if commands is None:
        raise GlyphNotFoundError(char)
    paths = commands_to_paths(
        commands,
        outlines.units_per_em,
        settings.canvas,
        settings.editor.samples_per_segment,
    )
    if not paths:
        raise GlyphNotFoundError(char)
    return paths
