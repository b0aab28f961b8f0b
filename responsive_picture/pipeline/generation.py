"""
Variant generation pipeline: size x format matrix -> <picture> HTML document.
"""

import asyncio
import time
from pathlib import Path
from typing import Dict, List, Optional

from responsive_picture.errors import ImageProcessingError, VariantGenerationError
from responsive_picture.io.image_loader import ArtifactManager, ImageEngine
from responsive_picture.markup import Img, Picture, Source
from responsive_picture.models import (
    GenerationOptions,
    ImgDecoding,
    ImgLoading,
    VariantOutput,
    VariantRequest,
)
from responsive_picture.utils.generation_logger import GenerationLogger, get_logger


class VariantGenerator:
    """Generates image variants and the <picture> markup that references them."""

    def __init__(
        self,
        engine: Optional[ImageEngine] = None,
        logger: Optional[GenerationLogger] = None
    ):
        """
        Initialize the generator.

        Args:
            engine: Image engine used for resizing and placeholders.
            logger: Generation logger (defaults to the shared instance).
        """
        self.engine = engine or ImageEngine()
        self.logger = logger or get_logger()

    def build_requests(self, options: GenerationOptions) -> List[VariantRequest]:
        """
        Expand options into the format-major size x format matrix.

        Formats are already in priority order on ``options``.
        """
        return [
            VariantRequest(
                image_path=options.image_path,
                output_dir=options.output_dir,
                size=int(size),
                format=fmt,
            )
            for fmt in options.formats
            for size in options.sizes
        ]

    async def generate_variant(self, request: VariantRequest, run_id: str = "") -> VariantOutput:
        """
        Produce one variant.

        Raises:
            ImageProcessingError: If the engine fails for this cell.
        """
        start_time = time.time()
        try:
            await self.engine.aresize_to_file(
                request.image_path, request.size, request.format, request.output_path
            )
        except Exception as e:
            self.logger.log_variant(
                run_id, request.output_dir, request.output_path, request.format,
                request.size, (time.time() - start_time) * 1000, error=e
            )
            raise ImageProcessingError(request, e) from e

        self.logger.log_variant(
            run_id, request.output_dir, request.output_path, request.format,
            request.size, (time.time() - start_time) * 1000
        )
        return VariantOutput(
            srcset=request.srcset,
            mime_type=request.mime_type,
        )

    async def generate_all(self, requests: List[VariantRequest], run_id: str = "") -> List[VariantOutput]:
        """
        Run every request concurrently and wait until all of them settle.

        Results come back in submission order regardless of completion order.

        Raises:
            VariantGenerationError: If at least one request failed; carries all failures.
        """
        results = await asyncio.gather(
            *(self.generate_variant(request, run_id) for request in requests),
            return_exceptions=True,
        )

        failures: List[ImageProcessingError] = []
        outputs: List[VariantOutput] = []
        for request, result in zip(requests, results):
            if isinstance(result, ImageProcessingError):
                failures.append(result)
            elif isinstance(result, BaseException):
                failures.append(ImageProcessingError(request, result))
            else:
                outputs.append(result)

        if failures:
            raise VariantGenerationError(failures)
        return outputs

    @staticmethod
    def group_by_type(outputs: List[VariantOutput]) -> Dict[str, List[str]]:
        """Group srcset descriptors by MIME type, keeping first-seen type order."""
        grouped: Dict[str, List[str]] = {}
        for output in outputs:
            grouped.setdefault(output.mime_type, []).append(output.srcset)
        return grouped

    @staticmethod
    def build_sources(grouped: Dict[str, List[str]], max_width: str) -> List[Source]:
        """One <source> per MIME type, all sharing the same sizes hint."""
        return [
            Source(mime_type).add_srcsets(*srcsets).set_max_width(max_width)
            for mime_type, srcsets in grouped.items()
        ]

    async def build_img(self, options: GenerationOptions, run_id: str = "") -> Img:
        """Fallback <img> pointing at the copied original."""
        img = Img.from_image_path(options.image_path, options.output_dir, options.alt)
        if options.lazy:
            img.set_loading(ImgLoading.LAZY)
        if options.async_decoding:
            img.set_decoding(ImgDecoding.ASYNC)
        if options.lqip:
            await img.generate_placeholder(options.lqip_width, engine=self.engine)
            self.logger.log_placeholder(
                run_id, options.output_dir, img.src, options.lqip_width, img.style
            )
        return img

    async def generate(self, options: GenerationOptions) -> Path:
        """
        Generate all variants, the fallback copy and the HTML document.

        Args:
            options: Generation options.

        Returns:
            Path to the written HTML file.

        Raises:
            InvalidOutputPath: Output path exists and is not a directory.
            VariantGenerationError: Any variant failed.
            FileCopyError: The original could not be copied.
            PlaceholderGenerationError: The placeholder could not be encoded.
            HtmlWriteError: The HTML document could not be written.
        """
        start_time = time.time()
        artifacts = ArtifactManager(options.output_dir)
        artifacts.ensure_output_dir()

        run_id = self.logger.log_run_start(
            options.image_path, options.output_dir, options.sizes, options.formats
        )

        requests = self.build_requests(options)
        try:
            outputs = await self.generate_all(requests, run_id)
            sources = self.build_sources(self.group_by_type(outputs), options.max_width)

            await artifacts.acopy_original(options.image_path)
            img = await self.build_img(options, run_id)

            html = Picture(img).add_sources(*sources).render()
            html_path = await artifacts.asave_html(options.base_name, html)
        except Exception:
            self.logger.log_run_finished(
                run_id, options.output_dir, None, 0, (time.time() - start_time) * 1000
            )
            raise

        self.logger.log_run_finished(
            run_id, options.output_dir, html_path, len(outputs),
            (time.time() - start_time) * 1000, html=html
        )
        return html_path

    def run(self, options: GenerationOptions) -> Path:
        """Synchronous wrapper around :meth:`generate`."""
        return asyncio.run(self.generate(options))
