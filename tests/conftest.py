"""Shared fixtures for glyphsmith tests."""

import pytest

from glyphsmith.config import GlyphsmithSettings
from glyphsmith.domain import Node, Path


def square(x: float, y: float, size: float, *, hole: bool = False) -> Path:
    """Closed clockwise-on-screen square of cusp nodes with top-left corner (x, y)."""
    corners = [(x, y), (x + size, y), (x + size, y + size), (x, y + size)]
    return Path(nodes=[Node.flat(cx, cy) for cx, cy in corners], closed=True, is_hole=hole)


@pytest.fixture
def settings() -> GlyphsmithSettings:
    """Default settings."""
    return GlyphsmithSettings()


@pytest.fixture
def outer_square() -> Path:
    """300x300 square spanning (100, 100)-(400, 400)."""
    return square(100, 100, 300)


@pytest.fixture
def inner_square() -> Path:
    """100x100 square centered inside outer_square."""
    return square(200, 200, 100)


@pytest.fixture
def make_square():
    """Factory for closed square paths."""
    return square
