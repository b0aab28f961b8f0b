"""
Responsive Picture Generator

Builds resized/re-encoded image variants at several widths and formats and
emits the matching <picture> markup with an optional low-quality placeholder.
"""

__version__ = "1.0.0"
