"""Walk a slide's shape tree and classify shapes into slide elements."""

import logging
from typing import Callable

from lxml import etree
from pptx.oxml.ns import qn

from pptxmd.errors import ImageNotFoundError, MalformedSlideError
from pptxmd.model.schema import (
    ImageElement,
    ImageReference,
    SlideElement,
    UnknownElement,
)
from pptxmd.parser.rels_parser import parse_xml_part
from pptxmd.parser.table_parser import TableParser
from pptxmd.parser.text_parser import is_list_body, parse_list_body, parse_text_body
from pptxmd.parser.transform_parser import TransformParser

logger = logging.getLogger(__name__)


P_NAMESPACE = "http://schemas.openxmlformats.org/presentationml/2006/main"
TABLE_URI = "http://schemas.openxmlformats.org/drawingml/2006/table"

# Group shapes nest by document structure only; this bounds hostile input.
MAX_GROUP_DEPTH = 64


class ShapeTreeParser:
    """Extracts slide elements from a ``<p:spTree>``."""

    def __init__(self) -> None:
        self.table_parser = TableParser()
        self.transform_parser = TransformParser()
        self._handlers: dict[str, Callable[[etree._Element, int], list[SlideElement]]] = {
            qn("p:sp"): self._extract_sp,
            qn("p:graphicFrame"): self._extract_graphic_frame,
            qn("p:pic"): self._extract_pic,
            qn("p:grpSp"): self._extract_group,
        }

    def parse(self, xml_data: bytes) -> list[SlideElement]:
        """Parse a slide part into slide elements.

        Args:
            xml_data: Raw bytes of ``ppt/slides/slideN.xml``.

        Returns:
            Elements in shape-tree order, group contents flattened.

        Raises:
            Utf8DecodeError: If the part is not UTF-8.
            XmlParseError: If the part is not well-formed XML.
            MalformedSlideError: If ``cSld``/``spTree``/``txBody`` is missing.
            ImageNotFoundError: If a picture has no embedded image id.
        """
        root = parse_xml_part(xml_data)

        c_sld = next(root.iter(qn("p:cSld")), None)
        if c_sld is None:
            raise MalformedSlideError("No <p:cSld> element found")

        sp_tree = c_sld.find(qn("p:spTree"))
        if sp_tree is None:
            raise MalformedSlideError("No <p:spTree> element found")

        return self.extract_elements(sp_tree)

    def extract_elements(self, parent: etree._Element, depth: int = 0) -> list[SlideElement]:
        """Extract elements from every child shape of a container.

        Args:
            parent: ``<p:spTree>`` or ``<p:grpSp>`` element.
            depth: Current group nesting depth.
        """
        if depth > MAX_GROUP_DEPTH:
            raise MalformedSlideError(f"Group shapes nested deeper than {MAX_GROUP_DEPTH}")

        result: list[SlideElement] = []
        for child in parent:
            if not isinstance(child.tag, str):
                continue  # comments, processing instructions
            result.extend(self._extract_shape(child, depth))
        return result

    def _extract_shape(self, node: etree._Element, depth: int) -> list[SlideElement]:
        """Dispatch a shape by tag. Non-presentation tags are ignored."""
        handler = self._handlers.get(node.tag)
        if handler is not None:
            return handler(node, depth)

        if etree.QName(node).namespace == P_NAMESPACE:
            return [UnknownElement()]
        return []

    def _extract_sp(self, node: etree._Element, depth: int) -> list[SlideElement]:
        """Text shape: a list if any paragraph carries list properties."""
        tx_body = node.find(qn("p:txBody"))
        if tx_body is None:
            raise MalformedSlideError("Shape without <p:txBody>")

        if is_list_body(tx_body):
            element = parse_list_body(tx_body)
        else:
            element = parse_text_body(tx_body)
        element.position = self.transform_parser.extract_position(node)
        return [element]

    def _extract_graphic_frame(self, node: etree._Element, depth: int) -> list[SlideElement]:
        """Tables only; charts, diagrams and OLE objects produce nothing."""
        for graphic_data in node.iter(qn("a:graphicData")):
            if graphic_data.get("uri") != TABLE_URI:
                continue
            tbl = graphic_data.find(qn("a:tbl"))
            if tbl is None:
                continue
            table = self.table_parser.parse_table(tbl)
            table.position = self.transform_parser.extract_position(node)
            return [table]

        logger.debug("Skipping graphic frame without a table")
        return []

    def _extract_pic(self, node: etree._Element, depth: int) -> list[SlideElement]:
        blip = next(node.iter(qn("a:blip")), None)
        if blip is None:
            raise ImageNotFoundError("Picture without <a:blip>")

        embed = blip.get(qn("r:embed")) or blip.get("r:embed")
        if not embed:
            raise ImageNotFoundError("Picture without r:embed attribute")

        return [
            ImageElement(
                position=self.transform_parser.extract_position(node),
                reference=ImageReference(id=embed),
            )
        ]

    def _extract_group(self, node: etree._Element, depth: int) -> list[SlideElement]:
        """Groups are transparent: their children are returned in place."""
        return self.extract_elements(node, depth + 1)


def parse_slide_xml(xml_data: bytes) -> list[SlideElement]:
    """Parse slide XML into slide elements. See ShapeTreeParser.parse."""
    return ShapeTreeParser().parse(xml_data)
