"""Glyph map persistence.

The whole map is stored as one JSON object keyed by character:

    {"a": {"paths": [...], "advanceWidth": 640, "previewThumbnail": "<svg ..."}}

It is always read and written wholesale.
"""

import json
from pathlib import Path
from typing import Any

import structlog

from glyphsmith.domain import Glyph, GlyphMap

logger = structlog.get_logger(__name__)


def dump_glyphs(glyphs: GlyphMap) -> dict[str, Any]:
    """Serialize a glyph map to plain data."""
    return {char: glyph.to_dict() for char, glyph in glyphs.items()}


def load_glyphs(data: dict[str, Any]) -> GlyphMap:
    """Deserialize a glyph map from plain data.

    Raises:
        ValueError: If a key is not a single character
    """
    glyphs: GlyphMap = {}
    for char, entry in data.items():
        if len(char) != 1:
            raise ValueError(f"Glyph key must be a single character, got {char!r}")
        glyphs[char] = Glyph.from_dict(char, entry)
    return glyphs


def save_glyph_map(glyphs: GlyphMap, path: Path) -> None:
    """Write a glyph map to a JSON file."""
    path.write_text(json.dumps(dump_glyphs(glyphs), ensure_ascii=False), encoding="utf-8")
    logger.info("Glyph map saved", path=str(path), glyphs=len(glyphs))


def load_glyph_map(path: Path) -> GlyphMap:
    """Read a glyph map from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid glyph map
    """
    if not path.exists():
        raise FileNotFoundError(f"Glyph map not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Glyph map must be a JSON object: {path}")
    glyphs = load_glyphs(data)
    logger.debug("Glyph map loaded", path=str(path), glyphs=len(glyphs))
    return glyphs
