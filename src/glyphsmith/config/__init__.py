"""Configuration management for glyphsmith.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- CanvasConfig: Editor canvas size and baseline
- FontMetricsConfig: Metrics of compiled fonts
- EditorConfig: Tool and history settings
- LoggingConfig: Logging settings
- GlyphsmithSettings: Main application settings
"""

from glyphsmith.config.settings import (
    CanvasConfig,
    EditorConfig,
    FontMetricsConfig,
    GlyphsmithSettings,
    LoggingConfig,
    get_default_settings,
)

__all__ = [
    "CanvasConfig",
    "EditorConfig",
    "FontMetricsConfig",
    "GlyphsmithSettings",
    "LoggingConfig",
    "get_default_settings",
]
