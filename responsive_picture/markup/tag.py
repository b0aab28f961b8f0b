"""
Attribute accumulator shared by the markup builders.
"""

from typing import Dict, Protocol, runtime_checkable


@runtime_checkable
class Renderable(Protocol):
    """Anything that serializes itself to an HTML fragment."""

    def render(self) -> str:
        ...


class AttributeTag:
    """
    Opening HTML tag with ordered attributes.

    Attribute values are written verbatim; callers must pass already-safe
    strings. Re-setting a key keeps its original position.
    """

    def __init__(self, tag_name: str):
        self._tag_name = tag_name
        self._attributes: Dict[str, str] = {}

    @property
    def tag_name(self) -> str:
        return self._tag_name

    @property
    def attributes(self) -> Dict[str, str]:
        return dict(self._attributes)

    def set_attribute(self, key: str, value: str) -> "AttributeTag":
        self._attributes[key] = str(value)
        return self

    def build(self) -> str:
        """
        Serialize to an opening tag such as ``<img src="a.jpg" alt="A">``.

        No self-closing slash is emitted.
        """
        parts = [f"<{self._tag_name}"]
        parts.extend(f'{key}="{value}"' for key, value in self._attributes.items())
        return " ".join(parts) + ">"

    def __str__(self) -> str:
        return self.build()
