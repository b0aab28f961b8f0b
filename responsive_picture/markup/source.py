"""
<source> element builder.
"""

from typing import List

from responsive_picture.markup.tag import AttributeTag


class Source:
    """A <source> for one MIME type, carrying its srcset candidates."""

    def __init__(self, mime_type: str):
        self._mime_type = mime_type
        self._srcset: List[str] = []
        self._tag = AttributeTag("source").set_attribute("type", mime_type)

    @property
    def mime_type(self) -> str:
        return self._mime_type

    @property
    def srcset(self) -> List[str]:
        return list(self._srcset)

    def add_srcsets(self, *entries: str) -> "Source":
        """Append preformatted ``"path 640w"`` descriptors in the given order."""
        self._srcset.extend(entries)
        return self

    def set_max_width(self, width: str) -> "Source":
        self._tag.set_attribute("sizes", f"(max-width: {width}px) 100vw, {width}px")
        return self

    def render(self) -> str:
        self._tag.set_attribute("srcset", ", ".join(self._srcset))
        return self._tag.build()

    def __str__(self) -> str:
        return self.render()
