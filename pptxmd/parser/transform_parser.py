"""Extract shape positions from PowerPoint shape XML.

Reads the offset of the shape's ``<a:xfrm>`` (or ``<p:xfrm>`` for graphic
frames). Only the offset is kept; it is used to put shapes in reading
order.
"""

from lxml import etree
from pptx.oxml.ns import qn

from pptxmd.model.schema import Position


XFRM_TAGS = (qn("a:xfrm"), qn("p:xfrm"))


class TransformParser:
    """Extracts positions from PPTX shape XML."""

    def extract_position(self, element: etree._Element) -> Position:
        """Extract the top-left offset of a shape.

        Args:
            element: The shape's XML element (``p:sp``, ``p:pic``, ...).

        Returns:
            Position of the shape, or the origin if the shape has no
            transform or its offset is not a pair of integers.

        XML structure example:
            <a:xfrm rot="5400000" flipH="1">
                <a:off x="914400" y="914400"/>
                <a:ext cx="2743200" cy="914400"/>
            </a:xfrm>
        """
        xfrm = self._find_xfrm_element(element)
        if xfrm is None:
            return Position()

        off = xfrm.find(qn("a:off"))
        if off is None:
            return Position()

        try:
            return Position(x=int(off.get("x", "0")), y=int(off.get("y", "0")))
        except (TypeError, ValueError):
            return Position()

    def _find_xfrm_element(self, element: etree._Element) -> etree._Element | None:
        """Find the first transform element in a shape's XML.

        The xfrm element can be in different locations depending on the shape type:
        - <p:sp><p:spPr><a:xfrm> for normal shapes
        - <p:pic><p:spPr><a:xfrm> for pictures
        - <p:graphicFrame><p:xfrm> for tables and charts
        - <p:grpSp><p:grpSpPr><a:xfrm> for groups
        """
        return next(element.iter(*XFRM_TAGS), None)
