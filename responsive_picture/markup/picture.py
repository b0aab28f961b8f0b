"""
<picture> composer.
"""

from typing import List

from responsive_picture.markup.img import Img
from responsive_picture.markup.source import Source


class Picture:
    """Sources in append order followed by the fallback image."""

    def __init__(self, img: Img):
        self.img = img
        self.sources: List[Source] = []

    def add_sources(self, *sources: Source) -> "Picture":
        self.sources.extend(sources)
        return self

    def render(self) -> str:
        sources = "".join(source.render() for source in self.sources)
        return f"<picture>{sources}{self.img.render()}</picture>"

    def __str__(self) -> str:
        return self.render()
