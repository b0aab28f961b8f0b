"""
Error types raised by the responsive picture pipeline.
"""

from pathlib import Path
from typing import List, Optional, Union

from responsive_picture.models import VariantRequest


class ResponsivePictureError(Exception):
    """Base class for every error the pipeline reports to the user."""


class InvalidOutputPath(ResponsivePictureError):
    """The output path exists but is not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"path '{self.path}' already exists and is not a directory")


class ImageProcessingError(ResponsivePictureError):
    """The image engine failed to produce one variant."""

    def __init__(self, request: VariantRequest, cause: BaseException):
        self.request = request
        self.cause = cause
        super().__init__(f"could not generate {request.describe()}: {cause}")

    @property
    def image_path(self) -> Path:
        return self.request.image_path

    @property
    def format(self) -> str:
        return self.request.format

    @property
    def size(self) -> int:
        return self.request.size


class VariantGenerationError(ResponsivePictureError):
    """One or more variants failed after every task settled."""

    def __init__(self, failures: List[ImageProcessingError]):
        if not failures:
            raise ValueError("VariantGenerationError needs at least one failure")
        self.failures = failures
        message = str(failures[0])
        if len(failures) > 1:
            message += f" (and {len(failures) - 1} more failed variant(s))"
        super().__init__(message)

    @property
    def first(self) -> ImageProcessingError:
        return self.failures[0]


class FileCopyError(ResponsivePictureError):
    """Copying the original image into the output directory failed."""

    def __init__(self, source: Path, destination: Path, cause: BaseException):
        self.source = source
        self.destination = destination
        self.cause = cause
        super().__init__(f"could not copy {source} to {destination}: {cause}")


class PlaceholderGenerationError(ResponsivePictureError):
    """The low-quality placeholder could not be encoded."""

    def __init__(self, image_path: Union[str, Path], cause: Optional[BaseException] = None):
        self.image_path = Path(image_path)
        self.cause = cause
        message = f"could not generate placeholder for {self.image_path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ArtifactWriteError(ResponsivePictureError):
    """An output file or directory could not be written."""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"could not write {self.path}: {cause}")


class HtmlWriteError(ArtifactWriteError):
    """The <picture> HTML document could not be written."""
