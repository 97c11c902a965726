"""pptxmd - convert PowerPoint presentations to Markdown."""

from pptxmd.errors import PptxMdError
from pptxmd.model import ImageHandlingMode, ParserConfig, Slide
from pptxmd.parser import PptxContainer, convert_file, parse_slide_xml

__version__ = "0.4.0"

__all__ = [
    "ImageHandlingMode",
    "ParserConfig",
    "PptxContainer",
    "PptxMdError",
    "Slide",
    "convert_file",
    "parse_slide_xml",
]
