"""Glyph workspace: the glyph map plus the session of the focused character."""

import structlog

from glyphsmith.config import GlyphsmithSettings, get_default_settings
from glyphsmith.domain import Glyph, GlyphMap, clone_paths
from glyphsmith.editor.session import EditSession
from glyphsmith.io.compiler import FontCompiler
from glyphsmith.io.importer import DEFAULT_CHARSET, ImportResult, import_font, import_glyph
from glyphsmith.io.preview import render_preview

logger = structlog.get_logger(__name__)


class GlyphWorkspace:
    """Owns the glyph map and edits one character at a time.

    Switching characters commits the current session into the map before
    the next character's paths are loaded, so no edit is lost on a fast
    switch.

    Example:
        workspace = GlyphWorkspace()
        workspace.switch_glyph("a")
        workspace.session.add_shape(ShapeKind.CIRCLE)
        data = workspace.compile("My Font")
    """

    def __init__(
        self,
        glyphs: GlyphMap | None = None,
        settings: GlyphsmithSettings | None = None,
        active_char: str = "A",
    ) -> None:
        self.settings = settings or get_default_settings()
        self.glyphs: GlyphMap = dict(glyphs or {})
        self.active_char = active_char
        self.session = self._open(active_char)

    def _open(self, char: str) -> EditSession:
        glyph = self.glyphs.get(char)
        paths = clone_paths(glyph.paths) if glyph else []
        return EditSession(paths, settings=self.settings)

    @property
    def active_glyph(self) -> Glyph | None:
        return self.glyphs.get(self.active_char)

    def commit(self) -> Glyph | None:
        """Write the session's paths into the map.

        An explicit advance width on the stored glyph is kept. A character
        that never had a glyph and has no paths is not added.

        Returns:
            The stored glyph, or None if nothing was stored
        """
        existing = self.glyphs.get(self.active_char)
        paths = clone_paths(self.session.paths)
        if existing is None and not paths:
            return None

        glyph = Glyph(
            char=self.active_char,
            paths=paths,
            advance_width=existing.advance_width if existing else None,
            preview=render_preview(paths, self.settings.canvas),
        )
        self.glyphs[self.active_char] = glyph
        logger.debug("Glyph committed", char=self.active_char, paths=len(paths))
        return glyph

    def switch_glyph(self, char: str) -> EditSession:
        """Commit the current character and open another one.

        The new session starts with a fresh history and an empty selection.

        Raises:
            ValueError: If char is not a single character
        """
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        self.commit()
        self.active_char = char
        self.session = self._open(char)
        return self.session

    def set_advance_width(self, width: float | None) -> None:
        """Set an explicit advance width for the active character (None = auto)."""
        glyph = self.commit()
        if glyph is None:
            glyph = Glyph(char=self.active_char)
            self.glyphs[self.active_char] = glyph
        glyph.advance_width = width if width else None

    def import_font(self, data: bytes, chars: str = DEFAULT_CHARSET, source: str = "<bytes>") -> ImportResult:
        """Replace the glyph map with characters imported from a font.

        Raises:
            FontImportError: If the bytes are not a readable font
        """
        result = import_font(data, chars, self.settings, source=source)
        self.glyphs = dict(result.glyphs)
        self.session = self._open(self.active_char)
        return result

    def import_char(self, data: bytes, char: str | None = None, source: str = "<bytes>") -> int:
        """Append one character's outline from a font to the active session.

        Args:
            data: Font bytes
            char: Character to take from the font (defaults to the active one)

        Returns:
            Number of paths added

        Raises:
            FontImportError: If the bytes are not a readable font
            GlyphNotFoundError: If the font has no outline for the character
        """
        paths = import_glyph(data, char or self.active_char, self.settings, source=source)
        self.session.add_paths(paths)
        return len(paths)

    def compile(self, font_name: str, letter_spacing: float = 0.0) -> bytes:
        """Commit the active character and compile the whole map.

        Raises:
            FontCompileError: If the font cannot be built
        """
        self.commit()
        return FontCompiler(self.settings).compile(self.glyphs, font_name, letter_spacing)
