"""Glyphsmith - Draw letterforms and compile them into fonts.

Glyphsmith is the editing core of a hand-drawn font tool. Glyphs are drawn
with pen, brush and shape tools on a bezier canvas, combined with boolean
operations (weld and punch) and compiled into an OpenType font file.

Example:
    $ glyphsmith compile my-glyphs.json --name MyHand

This will create MyHand.otf from the glyphs stored in my-glyphs.json.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
