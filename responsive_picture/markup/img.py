"""
<img> element builder with loading/decoding hints and an inline style map.
"""

from pathlib import Path
from typing import Dict, Optional, Union

from responsive_picture.errors import PlaceholderGenerationError
from responsive_picture.io.image_loader import ImageEngine
from responsive_picture.markup.tag import AttributeTag
from responsive_picture.models import DEFAULT_LQIP_WIDTH, ImgDecoding, ImgLoading


class Img:
    """Fallback <img> of a <picture>."""

    def __init__(self, src: Union[str, Path], alt: str):
        self._src = str(src)
        self._alt = alt
        self._style: Dict[str, str] = {}
        self._tag = AttributeTag("img")
        self._tag.set_attribute("loading", ImgLoading.EAGER.value)
        self._tag.set_attribute("decoding", ImgDecoding.SYNC.value)
        self._tag.set_attribute("src", self._src)
        self._tag.set_attribute("alt", alt)

    @classmethod
    def from_image_path(
        cls,
        image_path: Union[str, Path],
        output_dir: Union[str, Path],
        alt: str
    ) -> "Img":
        """Point at the copy of ``image_path`` that lives in ``output_dir``."""
        src = Path(output_dir) / Path(image_path).name
        return cls(src, alt)

    @property
    def src(self) -> str:
        return self._src

    @property
    def alt(self) -> str:
        return self._alt

    @property
    def style(self) -> Dict[str, str]:
        return dict(self._style)

    def set_loading(self, loading: ImgLoading) -> "Img":
        self._tag.set_attribute("loading", ImgLoading(loading).value)
        return self

    def set_decoding(self, decoding: ImgDecoding) -> "Img":
        self._tag.set_attribute("decoding", ImgDecoding(decoding).value)
        return self

    def set_style(self, key: str, value: str) -> "Img":
        self._style[key] = value
        return self

    async def generate_placeholder(
        self,
        width: int = DEFAULT_LQIP_WIDTH,
        engine: Optional[ImageEngine] = None
    ) -> None:
        """
        Embed a tiny blurred JPEG of ``src`` as the CSS background.

        Args:
            width: Placeholder width in pixels.
            engine: Image engine; a default ImageEngine is used when omitted.

        Raises:
            PlaceholderGenerationError: If the placeholder cannot be encoded.
        """
        if engine is None:
            engine = ImageEngine()

        try:
            encoded = await engine.aplaceholder_base64(self._src, width)
        except PlaceholderGenerationError:
            raise
        except Exception as e:
            raise PlaceholderGenerationError(self._src, e) from e

        if not encoded:
            raise PlaceholderGenerationError(self._src)

        self.set_style("background", f"url(data:image/jpeg;base64,{encoded})")
        self.set_style("background-size", "cover")
        self.set_style("background-repeat", "no-repeat")

    def render(self) -> str:
        style = " ".join(f"{key}: {value};" for key, value in self._style.items())
        self._tag.set_attribute("style", style)
        return self._tag.build()

    def __str__(self) -> str:
        return self.render()
