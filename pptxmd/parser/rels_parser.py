"""Parse slide relationship parts (``ppt/slides/_rels/slideN.xml.rels``).

XML structure example:
    <Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
        <Relationship Id="rId2"
            Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"
            Target="../media/image1.png"/>
    </Relationships>
"""

from lxml import etree
from pptx.opc.constants import RELATIONSHIP_TYPE as RT

from pptxmd.errors import Utf8DecodeError, XmlParseError
from pptxmd.model.schema import ImageReference


IMAGE_RELATIONSHIP_TYPE = RT.IMAGE


def parse_xml_part(xml_data: bytes) -> etree._Element:
    """Decode and parse an XML part of the package.

    Raises:
        Utf8DecodeError: If the bytes are not valid UTF-8.
        XmlParseError: If the document is not well-formed.
    """
    try:
        xml_data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8DecodeError(str(e)) from e

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        return etree.fromstring(xml_data, parser)
    except etree.XMLSyntaxError as e:
        raise XmlParseError(str(e)) from e


def parse_slide_rels(xml_data: bytes) -> list[ImageReference]:
    """Extract image relationships of a slide.

    Relationships of other types (layouts, notes, hyperlinks) are skipped,
    as are entries missing ``Id`` or ``Target``.

    Returns:
        Image references in document order, each with its target set.
    """
    root = parse_xml_part(xml_data)

    images: list[ImageReference] = []
    for rel in root:
        if not isinstance(rel.tag, str) or etree.QName(rel).localname != "Relationship":
            continue
        if rel.get("Type") != IMAGE_RELATIONSHIP_TYPE:
            continue
        rel_id = rel.get("Id")
        target = rel.get("Target")
        if rel_id is None or target is None:
            continue
        images.append(ImageReference(id=rel_id, target=target))

    return images
