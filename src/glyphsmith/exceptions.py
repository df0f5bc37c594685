"""Exception hierarchy for Glyphsmith."""


class GlyphsmithError(Exception):
    """Base exception for all Glyphsmith errors."""

    pass


class FontError(GlyphsmithError):
    """Errors related to reading or building font files."""

    pass


class FontImportError(FontError):
    """Error parsing a font file supplied for import."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to import font '{source}': {reason}")


class FontCompileError(FontError):
    """Error assembling the compiled font binary."""

    def __init__(self, font_name: str, reason: str) -> None:
        self.font_name = font_name
        self.reason = reason
        super().__init__(f"Failed to compile font '{font_name}': {reason}")


class GlyphError(GlyphsmithError):
    """Errors related to a single glyph."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested character has no usable outline in the source font."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"No outline for character '{char}' in font")


class PathDataError(GlyphsmithError):
    """Malformed path description string."""

    def __init__(self, data: str, reason: str) -> None:
        self.data = data
        self.reason = reason
        super().__init__(f"Invalid path data '{data[:40]}': {reason}")
