"""
Data models and schemas for the responsive picture pipeline.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator


DEFAULT_SIZES = "240,380,640,860,1280,1920"
DEFAULT_FORMATS = "avif,webp,png,jpg"
DEFAULT_LQIP_WIDTH = 20


class ImageFormat(str, Enum):
    """Output formats with a known priority."""
    AVIF = "avif"
    WEBP = "webp"
    PNG = "png"
    JPG = "jpg"


# Higher is preferred; anything not listed ranks 0.
FORMAT_PRIORITY: Dict[str, int] = {
    ImageFormat.AVIF.value: 4,
    ImageFormat.WEBP.value: 3,
    ImageFormat.PNG.value: 2,
    ImageFormat.JPG.value: 1,
}


def sort_formats(formats: List[str]) -> List[str]:
    """
    Order formats by descending priority (avif > webp > png > jpg > unranked).

    The sort is stable, so unranked formats keep their relative order.
    """
    return sorted(formats, key=lambda fmt: FORMAT_PRIORITY.get(fmt, 0), reverse=True)


def split_csv(value: str) -> List[str]:
    """Split a comma-separated option value, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


class ImgLoading(str, Enum):
    """Values of the <img loading> attribute."""
    EAGER = "eager"
    LAZY = "lazy"


class ImgDecoding(str, Enum):
    """Values of the <img decoding> attribute."""
    SYNC = "sync"
    ASYNC = "async"
    AUTO = "auto"


class VariantRequest(BaseModel):
    """One cell of the size x format matrix."""
    image_path: Path
    output_dir: Path
    size: int
    format: str

    @property
    def base_name(self) -> str:
        return self.image_path.stem

    @property
    def output_path(self) -> Path:
        return self.output_dir / f"{self.base_name}-{self.size}.{self.format}"

    @property
    def mime_type(self) -> str:
        return f"image/{self.format}"

    @property
    def srcset(self) -> str:
        return f"{self.output_path} {self.size}w"

    def describe(self) -> str:
        """Short human-readable label used in errors and logs."""
        return f"{self.output_path} ({self.format}, {self.size}w)"


class VariantOutput(BaseModel):
    """Result of a successful variant generation."""
    srcset: str
    mime_type: str


class GenerationOptions(BaseModel):
    """Everything needed to generate one <picture> document."""
    image_path: Path
    alt: str
    output_dir: Path
    sizes: List[str] = Field(default_factory=lambda: split_csv(DEFAULT_SIZES))
    formats: List[str] = Field(default_factory=lambda: sort_formats(split_csv(DEFAULT_FORMATS)))
    lazy: bool = True
    async_decoding: bool = True
    lqip: bool = True
    lqip_width: int = DEFAULT_LQIP_WIDTH

    @field_validator("sizes")
    @classmethod
    def _validate_sizes(cls, sizes: List[str]) -> List[str]:
        if not sizes:
            raise ValueError("at least one size is required")
        for size in sizes:
            if not str(size).strip().isdigit() or int(size) <= 0:
                raise ValueError(f"invalid size: {size!r}")
        return [str(size).strip() for size in sizes]

    @field_validator("formats")
    @classmethod
    def _validate_formats(cls, formats: List[str]) -> List[str]:
        if not formats:
            raise ValueError("at least one format is required")
        return sort_formats([fmt.strip().lower() for fmt in formats])

    @field_validator("lqip_width")
    @classmethod
    def _validate_lqip_width(cls, width: int) -> int:
        if width <= 0:
            raise ValueError(f"invalid placeholder width: {width}")
        return width

    @property
    def base_name(self) -> str:
        return self.image_path.stem

    @property
    def max_width(self) -> str:
        """Width used for the sizes hint: the last requested size as given."""
        return self.sizes[-1]

    @classmethod
    def from_env(cls, **overrides: Any) -> "GenerationOptions":
        """
        Build options, taking unset defaults from the environment.

        Args:
            **overrides: Explicit field values; these win over the environment.

        Returns:
            GenerationOptions object.
        """
        values: Dict[str, Any] = {
            "sizes": split_csv(os.getenv("RESPONSIVE_PICTURE_SIZES", DEFAULT_SIZES)),
            "formats": split_csv(os.getenv("RESPONSIVE_PICTURE_FORMATS", DEFAULT_FORMATS)),
            "lqip_width": int(os.getenv("RESPONSIVE_PICTURE_LQIP_WIDTH", str(DEFAULT_LQIP_WIDTH))),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
