"""Configuration settings for Glyphsmith."""

from pathlib import Path

from pydantic import BaseModel, Field


class CanvasConfig(BaseModel):
    """Editor canvas geometry.

    Editor space has its origin in the top-left corner of a square canvas
    with y growing downwards. The baseline sits at a fixed height.
    """

    size: float = Field(
        default=1000.0,
        gt=0,
        description="Width and height of the square editing canvas",
    )
    baseline_y: float = Field(
        default=800.0,
        description="Vertical position of the baseline in editor space",
    )

    @property
    def center(self) -> tuple[float, float]:
        """Return the canvas center point."""
        half = self.size / 2.0
        return (half, half)


class FontMetricsConfig(BaseModel):
    """Metrics written into compiled fonts."""

    units_per_em: int = Field(
        default=1000,
        ge=16,
        le=16384,
        description="Font design units per em",
    )
    ascender: int = Field(default=800, description="Typographic ascender")
    descender: int = Field(default=-200, le=0, description="Typographic descender")
    min_advance: int = Field(
        default=200,
        ge=0,
        description="Lower bound for auto-computed advance widths",
    )
    advance_margin: int = Field(
        default=50,
        ge=0,
        description="Right side margin added after the rightmost outline point",
    )
    notdef_advance: int = Field(
        default=800,
        ge=0,
        description="Advance width of the reserved .notdef glyph",
    )
    style_name: str = Field(default="Regular", description="Font style name")


class EditorConfig(BaseModel):
    """Configuration for the interactive edit session."""

    samples_per_segment: int = Field(
        default=30,
        ge=2,
        le=500,
        description="Bezier samples per segment when building polygon rings",
    )
    brush_width: float = Field(
        default=60.0,
        gt=0,
        description="Brush ribbon width in editor units",
    )
    brush_tension: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Neighbor tension used to smooth committed brush strokes",
    )
    shape_size: float = Field(
        default=200.0,
        gt=0,
        description="Edge length / diameter of preset shapes",
    )
    hit_tolerance: float = Field(
        default=8.0,
        gt=0,
        description="Pointer hit radius in screen pixels",
    )
    history_limit: int | None = Field(
        default=200,
        ge=1,
        description="Maximum undo snapshots kept per glyph (None = unbounded)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphsmithSettings(BaseModel):
    """Main application settings."""

    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    metrics: FontMetricsConfig = Field(default_factory=FontMetricsConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def font_scale(self) -> float:
        """Scale factor from editor units to font units."""
        return self.metrics.units_per_em / self.canvas.size


def get_default_settings() -> GlyphsmithSettings:
    """Get default application settings."""
    return GlyphsmithSettings()
