"""Font compiler.

Builds an installable CFF-flavoured OpenType font from a glyph map with
fontTools FontBuilder. Editor coordinates (y down, baseline at
``canvas.baseline_y``) are mapped to font units (y up, baseline at 0).
"""

import io
import math
import re

import structlog
from fontTools.agl import UV2AGL
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.t2CharStringPen import T2CharStringPen

from glyphsmith.config import GlyphsmithSettings, get_default_settings
from glyphsmith.domain import Glyph, GlyphMap, Path, Point
from glyphsmith.exceptions import FontCompileError
from glyphsmith.io.outline import Transform, draw_paths
from glyphsmith.utils.logging import BatchLogger, BatchStats

logger = structlog.get_logger(__name__)

NOTDEF = ".notdef"

# .notdef box in font units
NOTDEF_BOX = (200, 0, 600, 700)

_PS_INVALID = re.compile(r"[^A-Za-z0-9_.-]")


def glyph_name_for(char: str) -> str:
    """PostScript glyph name for a character (AGL name or uniXXXX)."""
    codepoint = ord(char)
    name = UV2AGL.get(codepoint)
    if name:
        return name
    if codepoint > 0xFFFF:
        return f"u{codepoint:05X}"
    return f"uni{codepoint:04X}"


def postscript_name(font_name: str, style_name: str) -> str:
    """Build a PostScript name ("Family-Style", no spaces or specials)."""
    family = _PS_INVALID.sub("", font_name.replace(" ", ""))
    style = _PS_INVALID.sub("", style_name.replace(" ", ""))
    return f"{family}-{style}"[:63]


def advance_width(
    x_max: float | None,
    letter_spacing: float = 0.0,
    min_advance: float = 200,
    margin: float = 50,
) -> int:
    """Auto advance width from the rightmost outline point.

    Args:
        x_max: Rightmost outline x in font units (None for an empty outline)
        letter_spacing: Extra spacing added to every glyph
        min_advance: Lower bound
        margin: Right side margin

    Returns:
        max(min_advance, x_max + letter_spacing + margin), rounded
    """
    if x_max is None:
        return round(max(min_advance, letter_spacing + margin))
    return round(max(min_advance, x_max + letter_spacing + margin))


def _drawable(glyph: Glyph) -> list[Path]:
    return [p for p in glyph.paths if not p.is_degenerate()]


class FontCompiler:
    """Compile glyph maps into OpenType font bytes.

    Example:
        compiler = FontCompiler()
        data = compiler.compile(glyphs, "My Font", letter_spacing=20)
        Path("MyFont.otf").write_bytes(data)
    """

    def __init__(self, settings: GlyphsmithSettings | None = None) -> None:
        self.settings = settings or get_default_settings()
        self._stats = BatchStats()

    @property
    def stats(self) -> BatchStats:
        """Outcome of the last compile."""
        return self._stats

    def to_font_units(self) -> Transform:
        """Transform from editor coordinates to font units."""
        scale = self.settings.font_scale
        baseline = self.settings.canvas.baseline_y

        def transform(point: Point) -> tuple[float, float]:
            return (point.x * scale, (baseline - point.y) * scale)

        return transform

    def _notdef(self) -> tuple[object, int, int]:
        metrics = self.settings.metrics
        width = metrics.notdef_advance
        x0, y0, x1, y1 = NOTDEF_BOX
        pen = T2CharStringPen(width, None)
        pen.moveTo((x0, y0))
        pen.lineTo((x1, y0))
        pen.lineTo((x1, y1))
        pen.lineTo((x0, y1))
        pen.closePath()
        return pen.getCharString(), width, x0

    def _validate(self, font_name: str) -> None:
        metrics = self.settings.metrics
        if not font_name or not font_name.strip():
            raise FontCompileError(font_name, "font name is empty")
        if not postscript_name(font_name, metrics.style_name).split("-")[0]:
            raise FontCompileError(font_name, "font name has no usable characters")
        if metrics.ascender <= metrics.descender:
            raise FontCompileError(font_name, "ascender must be above descender")

    def compile(self, glyphs: GlyphMap, font_name: str, letter_spacing: float = 0.0) -> bytes:
        """Compile a glyph map into an OpenType (CFF) font.

        Glyphs without drawable paths are left out; a .notdef box is always
        included. The input map is not modified.

        Args:
            glyphs: Glyphs keyed by character
            font_name: Family name written to the name table
            letter_spacing: Extra advance added to auto-sized glyphs

        Returns:
            Font file bytes

        Raises:
            FontCompileError: If the name or metrics are invalid or the font
                cannot be assembled
        """
        self._validate(font_name)
        metrics = self.settings.metrics
        transform = self.to_font_units()
        batch = BatchLogger(logger, "compile")

        notdef, notdef_width, notdef_lsb = self._notdef()
        glyph_order = [NOTDEF]
        char_strings = {NOTDEF: notdef}
        hmetrics = {NOTDEF: (notdef_width, notdef_lsb)}
        cmap: dict[int, str] = {}

        for char in sorted(glyphs):
            glyph = glyphs[char]
            paths = _drawable(glyph)
            if not paths:
                batch.log_glyph_skipped(char, "no paths")
                continue

            name = glyph_name_for(char)
            bounds_pen = BoundsPen(None)
            draw_paths(paths, bounds_pen, transform)
            bounds = bounds_pen.bounds
            x_min = bounds[0] if bounds else 0.0
            x_max = bounds[2] if bounds else None

            if glyph.advance_width:
                width = round(glyph.advance_width)
            else:
                width = advance_width(
                    x_max, letter_spacing, metrics.min_advance, metrics.advance_margin
                )

            pen = T2CharStringPen(width, None)
            draw_paths(paths, pen, transform)

            glyph_order.append(name)
            char_strings[name] = pen.getCharString()
            hmetrics[name] = (width, math.floor(x_min))
            cmap[glyph.codepoint] = name
            batch.log_glyph_done(char, len(paths))

        self._stats = batch.stats

        try:
            data = self._build(font_name, glyph_order, cmap, char_strings, hmetrics)
        except Exception as e:
            logger.error("Font assembly failed", font_name=font_name, error=str(e))
            raise FontCompileError(font_name, str(e)) from e

        logger.info(
            "Font compiled",
            font_name=font_name,
            glyphs=len(glyph_order),
            skipped=self._stats.skipped_count,
            size=len(data),
        )
        return data

    def _build(
        self,
        font_name: str,
        glyph_order: list[str],
        cmap: dict[int, str],
        char_strings: dict[str, object],
        hmetrics: dict[str, tuple[int, int]],
    ) -> bytes:
        metrics = self.settings.metrics
        style = metrics.style_name
        ps_name = postscript_name(font_name, style)

        fb = FontBuilder(metrics.units_per_em, isTTF=False)
        fb.setupGlyphOrder(glyph_order)
        fb.setupCharacterMap(cmap)
        fb.setupCFF(
            psName=ps_name,
            fontInfo={"FullName": f"{font_name} {style}"},
            charStringsDict=char_strings,
            privateDict={},
        )
        fb.setupMaxp()
        fb.setupHorizontalMetrics(hmetrics)
        fb.setupHorizontalHeader(ascent=metrics.ascender, descent=metrics.descender)
        fb.setupNameTable(
            {
                "familyName": font_name,
                "styleName": style,
                "uniqueFontIdentifier": f"{ps_name};1.000",
                "fullName": f"{font_name} {style}",
                "psName": ps_name,
                "version": "Version 1.000",
            }
        )
        fb.setupOS2(
            sTypoAscender=metrics.ascender,
            sTypoDescender=metrics.descender,
            sTypoLineGap=0,
            usWinAscent=metrics.ascender,
            usWinDescent=abs(metrics.descender),
        )
        fb.setupPost()

        buffer = io.BytesIO()
        fb.save(buffer)
        return buffer.getvalue()
