"""Utility functions for glyphsmith.

This module provides utility functions including:

- Logging setup and configuration
- Batch outcome tracking for imports and compiles
"""

from glyphsmith.utils.logging import (
    BatchLogger,
    BatchStats,
    configure_logging,
)

__all__ = [
    "BatchLogger",
    "BatchStats",
    "configure_logging",
]
