"""Command-line interface for glyphsmith.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Compile stored glyph maps to OpenType fonts
- Import font outlines into glyph maps
- Quiet output mode and file logging
"""

from glyphsmith.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
