"""Render picture elements.

Images are either embedded as base64 data URIs, written to disk and
linked, or left to the caller (see ``Slide.load_images_manually``).
Any problem with a single image (no bytes, unreadable bitmap, write
failure) drops that image's markup and is logged; it never fails the
slide.
"""

import base64
import io
import logging
from pathlib import Path, PurePosixPath
from typing import Mapping

from PIL import Image

from pptxmd.model.config import ImageHandlingMode, ParserConfig
from pptxmd.model.schema import ImageReference

logger = logging.getLogger(__name__)


DEFAULT_EXTENSION = "png"
WINDOWS_EXTENDED_PREFIX = "\\\\?\\"


class ImageTranscoder:
    """Re-encodes bitmaps as JPEG at a given quality."""

    def __init__(self, quality: int) -> None:
        self.quality = quality

    def transcode(self, data: bytes) -> bytes | None:
        """Return JPEG bytes, or None if the image cannot be decoded."""
        try:
            with Image.open(io.BytesIO(data)) as img:
                img = self._flatten(img)
                buffer = io.BytesIO()
                img.save(buffer, format="JPEG", quality=self.quality)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.warning(f"Could not compress image: {e}")
            return None
        return buffer.getvalue()

    @staticmethod
    def _flatten(img: Image.Image) -> Image.Image:
        """Convert to a JPEG-compatible mode.

        Transparent images are composited on a white background.
        """
        if img.mode in ("RGB", "L"):
            return img
        if img.mode == "P" and "transparency" in img.info:
            img = img.convert("RGBA")
        if img.mode in ("RGBA", "LA"):
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.split()[3])
            return background
        return img.convert("RGB")


class ImageRenderer:
    """Renders images of one slide according to the configured mode."""

    def __init__(self, config: ParserConfig) -> None:
        self.config = config
        self.transcoder = ImageTranscoder(config.quality)
        self._image_count = 0

    @staticmethod
    def extension_of(target: str) -> str:
        suffix = PurePosixPath(target).suffix.lstrip(".").lower()
        return suffix or DEFAULT_EXTENSION

    def output_extension(self, reference: ImageReference) -> str:
        """Compressed images are always JPEG."""
        if self.config.compress_images:
            return "jpg"
        return self.extension_of(reference.target)

    def resolve_bytes(self, reference: ImageReference, image_data: Mapping[str, bytes]) -> bytes | None:
        """Raw (or compressed) bytes of an image, None if unavailable."""
        data = image_data.get(reference.id)
        if data is None:
            logger.debug(f"No image data for {reference.id}")
            return None
        if self.config.compress_images:
            return self.transcoder.transcode(data)
        return data

    def encode(self, reference: ImageReference, image_data: Mapping[str, bytes]) -> str | None:
        data = self.resolve_bytes(reference, image_data)
        if data is None:
            return None
        return base64.b64encode(data).decode("ascii")

    def render(
        self,
        reference: ImageReference,
        image_data: Mapping[str, bytes],
        slide_number: int,
    ) -> str:
        """Markdown for one image, or an empty string."""
        if not reference.target:
            logger.debug(f"Image {reference.id} has no resolved target")
            return ""

        mode = self.config.image_handling_mode
        if mode == ImageHandlingMode.MANUALLY:
            return ""
        if mode == ImageHandlingMode.SAVE:
            return self._render_saved(reference, image_data, slide_number)
        return self._render_inline(reference, image_data)

    def _render_inline(self, reference: ImageReference, image_data: Mapping[str, bytes]) -> str:
        encoded = self.encode(reference, image_data)
        if encoded is None:
            return ""
        name = PurePosixPath(reference.target).stem
        ext = self.output_extension(reference)
        return f"![{name}](data:image/{ext};base64,{encoded})\n"

    def _render_saved(
        self,
        reference: ImageReference,
        image_data: Mapping[str, bytes],
        slide_number: int,
    ) -> str:
        data = self.resolve_bytes(reference, image_data)
        if data is None:
            return ""

        self._image_count += 1
        ext = self.output_extension(reference)
        file_name = f"slide{slide_number}_image{self._image_count}_{reference.id}.{ext}"

        output_dir = Path(self.config.image_output_path)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            file_path = output_dir / file_name
            file_path.write_bytes(data)
            url = self.file_url(file_path)
        except OSError as e:
            logger.warning(f"Could not save image {file_name}: {e}")
            return ""

        return f'<a href="{url}">{file_name}</a>\n'

    @staticmethod
    def file_url(path: Path) -> str:
        """``file://`` URL of the canonical absolute path."""
        resolved = str(path.resolve())
        if resolved.startswith(WINDOWS_EXTENDED_PREFIX):
            resolved = resolved[len(WINDOWS_EXTENDED_PREFIX):]
        resolved = resolved.replace("\\", "/")
        return f"file:///{resolved.lstrip('/')}"
