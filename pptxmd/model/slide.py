"""Slide aggregate: parsed elements, relationships and image bytes."""

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Mapping, Optional

from pptxmd.model.config import ImageHandlingMode, ParserConfig
from pptxmd.model.schema import ImageElement, ImageReference, ManualImage, SlideElement
from pptxmd.renderer import ImageRenderer, MarkdownRenderer


SLIDE_NUMBER_PATTERN = re.compile(r"slide(\d+)\.xml$")


@dataclass
class Slide:
    """One parsed slide.

    Attributes:
        rel_path: Archive path of the slide part, e.g. ``ppt/slides/slide3.xml``.
        slide_number: 1-based number taken from ``rel_path`` (0 if absent).
        elements: Parsed slide elements in shape-tree order.
        images: Image relationships of the slide (authoritative id -> target).
        image_data: Raw image bytes keyed by relationship id.
        config: Configuration used when rendering.
    """

    rel_path: str
    slide_number: int
    elements: list[SlideElement] = field(default_factory=list)
    images: list[ImageReference] = field(default_factory=list)
    image_data: Mapping[str, bytes] = field(default_factory=dict)
    config: ParserConfig = field(default_factory=ParserConfig)

    @staticmethod
    def extract_slide_number(path: str) -> int:
        """Parse the slide number from an archive path.

        ``ppt/slides/slide5.xml`` gives 5. Anything without a numeric
        suffix gives 0.
        """
        match = SLIDE_NUMBER_PATTERN.search(path)
        if match is None:
            return 0
        return int(match.group(1))

    def link_images(self) -> None:
        """Fill in image targets from the slide's relationships."""
        from pptxmd.parser.image_linker import link_images

        link_images(self.elements, self.images)

    def convert_to_md(self) -> str:
        """Render the slide as Markdown."""
        return MarkdownRenderer(self.config).render(self)

    def image_elements(self) -> list[ImageElement]:
        """Image elements in reading order."""
        ordered = sorted(self.elements, key=lambda e: e.position.sort_key)
        return [e for e in ordered if isinstance(e, ImageElement)]

    def load_images_manually(self) -> Optional[list[ManualImage]]:
        """Base64 payloads for callers handling images themselves.

        Returns:
            One ManualImage per image with available bytes, or None when
            image extraction is off or the mode is not MANUALLY.
        """
        if not self.config.extract_images:
            return None
        if self.config.image_handling_mode != ImageHandlingMode.MANUALLY:
            return None

        renderer = ImageRenderer(self.config)
        result: list[ManualImage] = []
        for element in self.image_elements():
            encoded = renderer.encode(element.reference, self.image_data)
            if encoded is None:
                continue
            result.append(ManualImage(base64_content=encoded, img_ref=element.reference))
        return result

    def get_image_extension(self, target: str) -> str:
        """File extension of an image target, lower-cased and without dot."""
        return ImageRenderer.extension_of(target)

    def get_image_filename(self, target: str) -> str:
        """File name of an image target without its extension."""
        return PurePosixPath(target).stem
