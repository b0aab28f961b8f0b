"""
Pillow-backed image engine and output artifact management.
"""

import asyncio
import base64
import shutil
from io import BytesIO
from pathlib import Path
from typing import Dict, Union

from PIL import Image

from responsive_picture.errors import (
    ArtifactWriteError,
    FileCopyError,
    HtmlWriteError,
    InvalidOutputPath,
)
from responsive_picture.models import DEFAULT_LQIP_WIDTH


# Output extension -> Pillow format name.
PILLOW_FORMATS: Dict[str, str] = {
    "avif": "AVIF",
    "webp": "WEBP",
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "gif": "GIF",
    "tiff": "TIFF",
}

# Formats without alpha support.
OPAQUE_FORMATS = {"JPEG"}

# Formats whose encoders only take RGB or RGBA input.
COLOR_ONLY_FORMATS = {"AVIF"}


class ImageEngine:
    """Resizes and re-encodes images with Pillow."""

    def __init__(self, quality: int = 80):
        """
        Initialize the engine.

        Args:
            quality: Encoder quality for lossy formats.
        """
        self.quality = quality

    def load_image(self, image_path: Union[str, Path]) -> Image.Image:
        """
        Load an image from disk.

        Args:
            image_path: Path to the image file.

        Returns:
            PIL Image object.
        """
        image_path = Path(image_path)
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        with Image.open(image_path) as image:
            image.load()
            return image.copy()

    def pillow_format(self, fmt: str) -> str:
        try:
            return PILLOW_FORMATS[fmt.lower()]
        except KeyError:
            raise ValueError(f"Unsupported format: {fmt}") from None

    def resize(self, image: Image.Image, width: int) -> Image.Image:
        """
        Resize to ``width`` pixels wide, keeping the aspect ratio.

        Args:
            image: Input PIL Image.
            width: Target width in pixels.

        Returns:
            Resized PIL Image.
        """
        if width <= 0:
            raise ValueError(f"Invalid width: {width}")
        height = max(1, round(image.height * width / image.width))
        return image.resize((width, height), Image.Resampling.LANCZOS)

    def _prepare_mode(self, image: Image.Image, pillow_format: str) -> Image.Image:
        if pillow_format in OPAQUE_FORMATS:
            return image if image.mode in ("RGB", "L") else image.convert("RGB")
        if pillow_format in COLOR_ONLY_FORMATS and image.mode in ("L", "LA"):
            return image.convert("RGBA" if image.mode == "LA" else "RGB")
        if image.mode not in ("RGB", "RGBA", "L", "LA"):
            return image.convert("RGBA")
        return image

    def encode(self, image: Image.Image, fmt: str) -> bytes:
        """
        Encode an image in memory.

        Args:
            image: PIL Image to encode.
            fmt: Output extension (avif, webp, png, jpg, ...).

        Returns:
            Encoded bytes.
        """
        pillow_format = self.pillow_format(fmt)
        image = self._prepare_mode(image, pillow_format)
        buffer = BytesIO()
        if pillow_format in ("JPEG", "WEBP", "AVIF"):
            image.save(buffer, format=pillow_format, quality=self.quality)
        else:
            image.save(buffer, format=pillow_format)
        return buffer.getvalue()

    def resize_to_file(
        self,
        image_path: Union[str, Path],
        width: int,
        fmt: str,
        output_path: Union[str, Path]
    ) -> Path:
        """
        Resize ``image_path`` and write it to ``output_path`` as ``fmt``.

        The file is only written once encoding succeeded.

        Returns:
            Path to the written file.
        """
        output_path = Path(output_path)
        data = self.encode(self.resize(self.load_image(image_path), width), fmt)
        output_path.write_bytes(data)
        return output_path

    def placeholder_bytes(
        self,
        image_path: Union[str, Path],
        width: int = DEFAULT_LQIP_WIDTH
    ) -> bytes:
        """Tiny JPEG rendition used as a low-quality placeholder."""
        return self.encode(self.resize(self.load_image(image_path), width), "jpg")

    def image_to_base64(self, data: bytes) -> str:
        return base64.b64encode(data).decode("utf-8")

    async def aresize_to_file(
        self,
        image_path: Union[str, Path],
        width: int,
        fmt: str,
        output_path: Union[str, Path]
    ) -> Path:
        return await asyncio.to_thread(self.resize_to_file, image_path, width, fmt, output_path)

    async def aplaceholder_base64(
        self,
        image_path: Union[str, Path],
        width: int = DEFAULT_LQIP_WIDTH
    ) -> str:
        data = await asyncio.to_thread(self.placeholder_bytes, image_path, width)
        return self.image_to_base64(data)


class ArtifactManager:
    """Manages the files written into the output directory."""

    def __init__(self, output_dir: Union[str, Path]):
        """
        Initialize artifact manager.

        Args:
            output_dir: Directory receiving variants, the fallback copy and the HTML.
        """
        self.output_dir = Path(output_dir)

    def ensure_output_dir(self) -> Path:
        """
        Create the output directory if needed.

        Raises:
            InvalidOutputPath: If the path exists and is not a directory.
            ArtifactWriteError: If the directory cannot be created.
        """
        if self.output_dir.exists() and not self.output_dir.is_dir():
            raise InvalidOutputPath(self.output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactWriteError(self.output_dir, e) from e
        return self.output_dir

    def fallback_path(self, image_path: Union[str, Path]) -> Path:
        return self.output_dir / Path(image_path).name

    def copy_original(self, image_path: Union[str, Path]) -> Path:
        """
        Copy the untouched original under its own basename.

        Raises:
            FileCopyError: If the copy fails.
        """
        source = Path(image_path)
        destination = self.fallback_path(source)
        try:
            if source.resolve() != destination.resolve():
                shutil.copyfile(source, destination)
        except OSError as e:
            raise FileCopyError(source, destination, e) from e
        return destination

    async def acopy_original(self, image_path: Union[str, Path]) -> Path:
        return await asyncio.to_thread(self.copy_original, image_path)

    def html_path(self, base_name: str) -> Path:
        return self.output_dir / f"{base_name}.html"

    def save_html(self, base_name: str, html_content: str) -> Path:
        """
        Save generated HTML to disk.

        Args:
            base_name: Image name without extension.
            html_content: HTML content to save.

        Returns:
            Path to saved HTML file.

        Raises:
            HtmlWriteError: If the file cannot be written.
        """
        html_path = self.html_path(base_name)
        try:
            html_path.write_text(html_content, encoding="utf-8")
        except OSError as e:
            raise HtmlWriteError(html_path, e) from e
        return html_path

    async def asave_html(self, base_name: str, html_content: str) -> Path:
        return await asyncio.to_thread(self.save_html, base_name, html_content)
