"""Render a parsed slide to Markdown."""

from typing import TYPE_CHECKING

from pptxmd.model.config import ParserConfig
from pptxmd.model.schema import (
    ImageElement,
    ListElement,
    TableElement,
    TextElement,
)
from pptxmd.renderer.image_renderer import ImageRenderer
from pptxmd.renderer.table_renderer import TableRenderer
from pptxmd.renderer.text_renderer import TextRenderer

if TYPE_CHECKING:
    from pptxmd.model.slide import Slide


class MarkdownRenderer:
    """Renders slides to Markdown.

    Elements are put in reading order first: sorted by their top offset,
    then their left offset. The sort is stable, so shapes at the same
    position keep their shape-tree order. Rendering never raises; an
    image that cannot be produced is simply left out.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.text_renderer = TextRenderer()
        self.table_renderer = TableRenderer()

    def render(self, slide: "Slide") -> str:
        """Render one slide.

        Args:
            slide: The parsed and linked slide.

        Returns:
            Markdown text, optionally headed by a slide-number comment.
        """
        # Image file names are numbered per slide.
        image_renderer = ImageRenderer(self.config)
        parts: list[str] = []

        if self.config.include_slide_comment:
            parts.append(f"<!-- Slide {slide.slide_number} -->\n\n")

        for element in sorted(slide.elements, key=lambda e: e.position.sort_key):
            if isinstance(element, TextElement):
                parts.append(self.text_renderer.render_text(element))
            elif isinstance(element, TableElement):
                parts.append(self.table_renderer.render(element))
            elif isinstance(element, ListElement):
                parts.append(self.text_renderer.render_list(element))
            elif isinstance(element, ImageElement):
                if self.config.extract_images:
                    parts.append(
                        image_renderer.render(element.reference, slide.image_data, slide.slide_number)
                    )

        return "".join(parts)
