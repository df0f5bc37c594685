"""Glyph representation.

This module defines the glyph domain model: the drawn paths of one
character together with its metrics and a derived preview.
"""

from dataclasses import dataclass, field
from typing import Any

from glyphsmith.domain.path import Path


@dataclass
class Glyph:
    """The drawing of a single character.

    Attributes:
        char: Single-character key
        paths: Paths forming the outline, in z-order
        advance_width: Explicit advance width in font units; None means the
            compiler derives it from the outline
        preview: Derived SVG thumbnail of the paths
    """

    char: str
    paths: list[Path] = field(default_factory=list)
    advance_width: float | None = None
    preview: str = ""

    def is_empty(self) -> bool:
        """Check if glyph has no paths."""
        return len(self.paths) == 0

    @property
    def codepoint(self) -> int:
        """Unicode code point of the character."""
        return ord(self.char)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary (persistence layout)."""
        return {
            "paths": [p.to_dict() for p in self.paths],
            "advanceWidth": self.advance_width,
            "previewThumbnail": self.preview,
        }

    @classmethod
    def from_dict(cls, char: str, data: dict[str, Any]) -> "Glyph":
        """Deserialize from dictionary.

        A stored advance width of 0 or None means "auto".
        """
        advance = data.get("advanceWidth")
        return cls(
            char=char,
            paths=[Path.from_dict(p) for p in data.get("paths", [])],
            advance_width=float(advance) if advance else None,
            preview=data.get("previewThumbnail", ""),
        )


GlyphMap = dict[str, Glyph]
