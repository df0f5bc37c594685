"""Font and glyph I/O layer for glyphsmith.

This module handles everything that crosses the editor boundary using
fonttools: importing outlines from font files and SVG path strings,
compiling glyph maps to OpenType, persisting glyph maps and rendering
thumbnails.

Key responsibilities:
- Record outlines from TTF/OTF fonts (quadratic and cubic)
- Convert outlines to editor paths (scale, flip, center, hole flags)
- Compile glyph maps to CFF OpenType bytes
- Read and write glyph maps as JSON
- Render SVG previews

Key classes:
- FontCompiler: Compile glyph maps to font bytes
- OutlineRecordingPen: Record fontTools glyphs as outline commands
"""

from glyphsmith.io.compiler import FontCompiler, advance_width, glyph_name_for
from glyphsmith.io.importer import (
    DEFAULT_CHARSET,
    ImportResult,
    commands_to_contours,
    commands_to_paths,
    import_font,
    import_glyph,
    paths_from_svg,
)
from glyphsmith.io.outline import (
    FontOutlines,
    OutlineCommand,
    OutlineOp,
    OutlineRecordingPen,
    draw_paths,
    read_font_outlines,
)
from glyphsmith.io.preview import path_data, render_preview
from glyphsmith.io.store import dump_glyphs, load_glyph_map, load_glyphs, save_glyph_map

__all__ = [
    # Compiler
    "FontCompiler",
    "advance_width",
    "glyph_name_for",
    # Import
    "DEFAULT_CHARSET",
    "ImportResult",
    "commands_to_contours",
    "commands_to_paths",
    "import_font",
    "import_glyph",
    "paths_from_svg",
    # Outlines
    "FontOutlines",
    "OutlineCommand",
    "OutlineOp",
    "OutlineRecordingPen",
    "draw_paths",
    "read_font_outlines",
    # Preview and persistence
    "path_data",
    "render_preview",
    "dump_glyphs",
    "load_glyph_map",
    "load_glyphs",
    "save_glyph_map",
]
