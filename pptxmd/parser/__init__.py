"""PPTX Parser module - extracts slide content from PowerPoint files.

This module reads the slide parts of a PPTX archive directly and maps
the shape tree to semantic content:
- Text shapes with run formatting (bold, italic, underline, language)
- Lists with indent levels and numbering
- Tables from graphic frames
- Pictures linked to their media through slide relationships
- Group shapes flattened into their children
"""

from pptxmd.parser.image_linker import link_images
from pptxmd.parser.pptx_reader import PptxContainer, SlideResult, convert_file
from pptxmd.parser.rels_parser import parse_slide_rels
from pptxmd.parser.shape_tree import ShapeTreeParser, parse_slide_xml
from pptxmd.parser.table_parser import TableParser
from pptxmd.parser.text_parser import parse_list_properties, parse_paragraph
from pptxmd.parser.transform_parser import TransformParser

__all__ = [
    "PptxContainer",
    "ShapeTreeParser",
    "SlideResult",
    "TableParser",
    "TransformParser",
    "convert_file",
    "link_images",
    "parse_list_properties",
    "parse_paragraph",
    "parse_slide_rels",
    "parse_slide_xml",
]
