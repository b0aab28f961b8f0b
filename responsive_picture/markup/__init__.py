"""
Composable builders that serialize to <picture>, <source> and <img> markup.
"""

from responsive_picture.markup.img import Img
from responsive_picture.markup.picture import Picture
from responsive_picture.markup.source import Source
from responsive_picture.markup.tag import AttributeTag, Renderable

__all__ = [
    "AttributeTag",
    "Img",
    "Picture",
    "Renderable",
    "Source",
]
