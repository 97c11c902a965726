"""Markdown renderer module - turns parsed slides into Markdown.

Renders slide elements in reading order:
- Text with bold/italic emphasis and <u> underline
- Tables as GitHub-flavored Markdown
- Nested ordered/unordered lists with per-level numbering
- Images inline as base64, saved to disk, or handed to the caller
"""

from pptxmd.renderer.image_renderer import ImageRenderer, ImageTranscoder
from pptxmd.renderer.markdown_writer import MarkdownRenderer
from pptxmd.renderer.table_renderer import TableRenderer
from pptxmd.renderer.text_renderer import TextRenderer

__all__ = [
    "ImageRenderer",
    "ImageTranscoder",
    "MarkdownRenderer",
    "TableRenderer",
    "TextRenderer",
]
