"""SVG thumbnails of glyph paths."""

from fontTools.pens.svgPathPen import SVGPathPen

from glyphsmith.config import CanvasConfig
from glyphsmith.domain import Path
from glyphsmith.io.outline import draw_paths


def _ntos(value: float) -> str:
    return f"{value:g}"


def path_data(paths: list[Path]) -> str:
    """SVG path description of paths in editor coordinates."""
    pen = SVGPathPen(None, ntos=_ntos)
    draw_paths(paths, pen)
    return pen.getCommands()


def render_preview(paths: list[Path], canvas: CanvasConfig | None = None) -> str:
    """Render paths as a standalone SVG document.

    All paths go into one ``<path>`` element filled with the even-odd rule,
    so overlapping contours render the same way they compile.

    Returns:
        SVG markup, or an empty string when there is nothing to draw
    """
    d = path_data(paths)
    if not d:
        return ""
    size = (canvas or CanvasConfig()).size
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {size:g} {size:g}">'
        f'<path d="{d}" fill="black" fill-rule="evenodd"/>'
        "</svg>"
    )
