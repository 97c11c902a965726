"""Data model for parsed slides."""

from pptxmd.model.config import ImageHandlingMode, ParserConfig, ParserConfigBuilder
from pptxmd.model.schema import (
    Formatting,
    ImageElement,
    ImageReference,
    ListElement,
    ListItem,
    ManualImage,
    Position,
    Run,
    SlideElement,
    TableCell,
    TableElement,
    TableRow,
    TextElement,
    UnknownElement,
)
from pptxmd.model.slide import Slide

__all__ = [
    "Formatting",
    "ImageElement",
    "ImageHandlingMode",
    "ImageReference",
    "ListElement",
    "ListItem",
    "ManualImage",
    "ParserConfig",
    "ParserConfigBuilder",
    "Position",
    "Run",
    "Slide",
    "SlideElement",
    "TableCell",
    "TableElement",
    "TableRow",
    "TextElement",
    "UnknownElement",
]
