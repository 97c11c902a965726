"""Command line entry point: convert a PPTX file to Markdown."""

import argparse
import logging
import sys
from pathlib import Path

from pptxmd.errors import PptxMdError
from pptxmd.model.config import ImageHandlingMode, ParserConfig
from pptxmd.parser.pptx_reader import PptxContainer

logger = logging.getLogger("pptxmd.cli")


def build_config(args: argparse.Namespace) -> ParserConfig:
    builder = (
        ParserConfig.builder()
        .extract_images(not args.no_images)
        .compress_images(not args.no_compress)
        .quality(args.quality)
        .image_handling_mode(ImageHandlingMode(args.image_mode))
        .include_slide_comment(not args.no_slide_comment)
    )
    if args.image_dir:
        builder = builder.image_output_path(args.image_dir)
    return builder.build()


def convert(args: argparse.Namespace) -> int:
    """Run the conversion. Returns the process exit code."""
    config = build_config(args)

    chunks: list[str] = []
    failures = 0
    with PptxContainer(args.input, config) as container:
        if args.parallel:
            slides = container.parse_all_multi_threaded(max_workers=args.workers)
            chunks = [slide.convert_to_md() for slide in slides]
        else:
            for result in container.iter_slides():
                if not result.ok:
                    failures += 1
                    logger.error(f"Skipping {result.rel_path}: {result.error}")
                    continue
                chunks.append(result.slide.convert_to_md())

    markdown = "\n".join(chunks)
    if args.output:
        Path(args.output).write_text(markdown, encoding="utf-8")
        logger.info(f"Wrote {len(chunks)} slides to {args.output}")
    else:
        sys.stdout.write(markdown)

    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Convert PowerPoint (.pptx) files to Markdown")
    parser.add_argument("input", help="Path to the .pptx file")
    parser.add_argument("-o", "--output", help="Markdown output file (default: stdout)")
    parser.add_argument(
        "--image-mode",
        choices=[mode.value for mode in ImageHandlingMode],
        default=ImageHandlingMode.IN_MARKDOWN.value,
        help="How images are emitted",
    )
    parser.add_argument("--image-dir", help="Directory for images in 'save' mode")
    parser.add_argument("--quality", type=int, default=80, help="JPEG quality (0-100)")
    parser.add_argument("--no-images", action="store_true", help="Do not extract images")
    parser.add_argument("--no-compress", action="store_true", help="Keep original image bytes")
    parser.add_argument("--no-slide-comment", action="store_true", help="Omit <!-- Slide N --> headers")
    parser.add_argument("--parallel", action="store_true", help="Parse slides in a thread pool")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        return convert(args)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        parser.error(str(e))
    except (PptxMdError, OSError) as e:
        logger.error(f"Conversion failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
