#!/usr/bin/env python3
"""
Command-line interface for the responsive picture generator.
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from responsive_picture import __version__
from responsive_picture.errors import ResponsivePictureError, VariantGenerationError
from responsive_picture.models import GenerationOptions, split_csv
from responsive_picture.pipeline.generation import VariantGenerator

# Load environment variables
load_dotenv()


def str_to_bool(value: str) -> bool:
    """Parse a boolean option value such as ``true`` or ``no``."""
    normalized = str(value).strip().lower()
    if normalized in ("true", "yes", "1", "on"):
        return True
    if normalized in ("false", "no", "0", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate responsive <picture> markup and image variants",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--image", required=True, help="Path to the source image")
    parser.add_argument("--alt", required=True, help="Alternative text of the image")
    parser.add_argument("--output", required=True, help="Path to the output directory for generated images")
    parser.add_argument("--sizes", type=split_csv, help="Comma-separated list of sizes (default: 240,380,640,860,1280,1920)")
    parser.add_argument("--formats", type=split_csv, help="Comma-separated list of formats (default: avif,webp,png,jpg)")
    parser.add_argument(
        "--lazy", type=str_to_bool, nargs="?", const=True, default=True,
        help="Instruct the browser to only start fetching the image as it gets closer to the view"
    )
    parser.add_argument(
        "--async", dest="async_decoding", type=str_to_bool, nargs="?", const=True, default=True,
        help="Instruct the browser to decode the image off the main thread"
    )
    parser.add_argument(
        "--LQIP", dest="lqip", type=str_to_bool, nargs="?", const=True, default=True,
        help="Generate the Low Quality Image Placeholder"
    )
    parser.add_argument("--lqip-width", type=int, help="Placeholder width in pixels (default: 20)")
    return parser


def cmd_generate(args) -> int:
    """Generate variants and the <picture> HTML file."""
    print("🚀 Generating responsive images...")

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"❌ Error: Image not found: {image_path}")
        return 1

    try:
        options = GenerationOptions.from_env(
            image_path=image_path,
            alt=args.alt,
            output_dir=Path(args.output),
            sizes=args.sizes,
            formats=args.formats,
            lazy=args.lazy,
            async_decoding=args.async_decoding,
            lqip=args.lqip,
            lqip_width=args.lqip_width,
        )
    except (ValidationError, ValueError) as e:
        print(f"❌ Error: invalid options: {e}")
        return 1

    print(f"🖼️  Image: {options.image_path}")
    print(f"📁 Output: {options.output_dir}")
    print(f"📐 Sizes: {', '.join(options.sizes)}")
    print(f"🎞️  Formats: {', '.join(options.formats)}")

    generator = VariantGenerator()
    try:
        html_path = generator.run(options)
    except VariantGenerationError as e:
        print(f"❌ Error: {e}")
        for failure in e.failures[1:]:
            print(f"   ↳ {failure}")
        return 1
    except ResponsivePictureError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ HTML generated successfully!")
    print(f"📄 HTML: {html_path}")
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return cmd_generate(args)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
