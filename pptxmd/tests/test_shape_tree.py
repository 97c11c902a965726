"""Tests for the shape-tree walker.

Tests ShapeTreeParser, which maps <p:spTree> children to slide elements:
<p:sp> to text or list, <p:graphicFrame> to table, <p:pic> to image,
<p:grpSp> flattened, anything else in the presentation namespace to
an unknown marker.
"""

import pytest

from pptxmd.errors import (
    ImageNotFoundError,
    MalformedSlideError,
    Utf8DecodeError,
    XmlParseError,
)
from pptxmd.model.schema import (
    ImageElement,
    ListElement,
    Position,
    TableElement,
    TextElement,
    UnknownElement,
)
from pptxmd.parser.shape_tree import MAX_GROUP_DEPTH, ShapeTreeParser, parse_slide_xml
from slide_builders import (
    NS_DECL,
    chart_frame,
    group,
    list_ppr,
    paragraph,
    picture,
    run,
    slide_xml,
    table_frame,
    text_shape,
)


class TestStructure:
    """Tests for required slide structure and decoding errors."""

    def test_missing_csld(self, parser: ShapeTreeParser) -> None:
        xml = f"<p:sld {NS_DECL}><p:clrMapOvr/></p:sld>".encode()
        with pytest.raises(MalformedSlideError):
            parser.parse(xml)

    def test_missing_sp_tree(self, parser: ShapeTreeParser) -> None:
        xml = f"<p:sld {NS_DECL}><p:cSld><p:bg/></p:cSld></p:sld>".encode()
        with pytest.raises(MalformedSlideError):
            parser.parse(xml)

    def test_invalid_utf8(self, parser: ShapeTreeParser) -> None:
        with pytest.raises(Utf8DecodeError):
            parser.parse(b"<p:sld>\xff\xfe</p:sld>")

    def test_malformed_xml(self, parser: ShapeTreeParser) -> None:
        with pytest.raises(XmlParseError):
            parser.parse(b"<p:sld><unclosed>")

    def test_shape_without_text_body(self, parser: ShapeTreeParser) -> None:
        with pytest.raises(MalformedSlideError):
            parser.parse(slide_xml(text_shape(with_body=False)))

    def test_empty_tree(self, parser: ShapeTreeParser) -> None:
        assert parser.parse(slide_xml()) == []

    def test_module_function(self) -> None:
        elements = parse_slide_xml(slide_xml(text_shape(paragraph(run("hi")))))
        assert len(elements) == 1


class TestShapeClassification:
    """Tests for shape dispatch."""

    def test_text_shape(self, parser: ShapeTreeParser) -> None:
        elements = parser.parse(slide_xml(text_shape(paragraph(run("Hello", b="1")))))
        assert len(elements) == 1
        element = elements[0]
        assert isinstance(element, TextElement)
        assert element.runs[0].text == "Hello\n"
        assert element.runs[0].formatting.bold is True

    def test_list_shape_is_shape_wide(self, parser: ShapeTreeParser) -> None:
        shape = text_shape(
            paragraph(run("intro")),
            paragraph(run("item"), ppr=list_ppr(bullet="char")),
        )
        (element,) = parser.parse(slide_xml(shape))
        assert isinstance(element, ListElement)
        assert len(element.items) == 2
        assert element.items[0].is_ordered is False
        assert element.items[1].is_ordered is True

    def test_table_frame(self, parser: ShapeTreeParser) -> None:
        (element,) = parser.parse(slide_xml(table_frame([["A", "B"], ["", "2"]], x=10, y=20)))
        assert isinstance(element, TableElement)
        assert len(element.rows) == 2
        assert [c.extract() for c in element.rows[0].cells] == ["A", "B"]
        assert element.rows[1].cells[0].runs == []
        assert element.position == Position(x=10, y=20)

    def test_table_cell_paragraphs_have_no_newline(self, parser: ShapeTreeParser) -> None:
        frame = table_frame([["X"]]).replace(
            "<a:p><a:r><a:t>X</a:t></a:r></a:p>",
            "<a:p><a:r><a:t>X</a:t></a:r></a:p><a:p><a:r><a:t>Y</a:t></a:r></a:p>",
        )
        (element,) = parser.parse(slide_xml(frame))
        assert element.rows[0].cells[0].extract() == "XY"

    def test_non_table_frame_contributes_nothing(self, parser: ShapeTreeParser) -> None:
        assert parser.parse(slide_xml(chart_frame())) == []

    def test_picture(self, parser: ShapeTreeParser) -> None:
        (element,) = parser.parse(slide_xml(picture("rId7", x=5, y=6)))
        assert isinstance(element, ImageElement)
        assert element.reference.id == "rId7"
        assert element.reference.target == ""
        assert element.position == Position(x=5, y=6)

    def test_picture_without_blip(self, parser: ShapeTreeParser) -> None:
        with pytest.raises(ImageNotFoundError):
            parser.parse(slide_xml(picture(with_blip=False)))

    def test_picture_without_embed(self, parser: ShapeTreeParser) -> None:
        with pytest.raises(ImageNotFoundError):
            parser.parse(slide_xml(picture(rel_id=None)))

    def test_unknown_presentation_shape(self, parser: ShapeTreeParser) -> None:
        elements = parser.parse(slide_xml("<p:cxnSp/>", "<p:contentPart/>"))
        assert len(elements) == 2
        assert all(isinstance(e, UnknownElement) for e in elements)

    def test_foreign_namespace_ignored(self, parser: ShapeTreeParser) -> None:
        foreign = '<mc:AlternateContent xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006"/>'
        assert parser.parse(slide_xml(foreign)) == []

    def test_document_order(self, parser: ShapeTreeParser) -> None:
        elements = parser.parse(
            slide_xml(
                picture("rId2"),
                text_shape(paragraph(run("t"))),
                table_frame([["c"]]),
            )
        )
        assert [e.kind for e in elements] == ["image", "text", "table"]


class TestGroups:
    """Tests for group flattening."""

    def test_group_is_flattened(self, parser: ShapeTreeParser) -> None:
        elements = parser.parse(
            slide_xml(
                text_shape(paragraph(run("before"))),
                group(
                    text_shape(paragraph(run("inner"))),
                    group(picture("rId3")),
                ),
                text_shape(paragraph(run("after"))),
            )
        )
        assert [e.kind for e in elements] == ["text", "text", "image", "text"]
        assert elements[1].runs[0].text == "inner\n"
        assert elements[2].reference.id == "rId3"

    def test_group_property_nodes_are_unknown(self, parser: ShapeTreeParser) -> None:
        shape = group(
            "<p:nvGrpSpPr/>",
            "<p:grpSpPr/>",
            text_shape(paragraph(run("x"))),
        )
        elements = parser.parse(slide_xml(shape))
        assert [e.kind for e in elements] == ["unknown", "unknown", "text"]

    def test_depth_guard(self, parser: ShapeTreeParser) -> None:
        shape = text_shape(paragraph(run("deep")))
        for _ in range(MAX_GROUP_DEPTH + 2):
            shape = group(shape)
        with pytest.raises(MalformedSlideError):
            parser.parse(slide_xml(shape))


class TestPositions:
    """Tests for offset extraction."""

    def test_offset(self, parser: ShapeTreeParser) -> None:
        (element,) = parser.parse(slide_xml(text_shape(paragraph(run("x")), x=100, y=200)))
        assert element.position == Position(x=100, y=200)

    def test_negative_offset(self, parser: ShapeTreeParser) -> None:
        (element,) = parser.parse(slide_xml(text_shape(paragraph(run("x")), x=-5, y=-7)))
        assert element.position == Position(x=-5, y=-7)

    def test_non_integer_offset_defaults_to_origin(self, parser: ShapeTreeParser) -> None:
        (element,) = parser.parse(slide_xml(text_shape(paragraph(run("x")), x="abc", y=10)))
        assert element.position == Position()

    def test_missing_transform_defaults_to_origin(self, parser: ShapeTreeParser) -> None:
        shape = f"<p:sp><p:spPr/><p:txBody>{paragraph(run('x'))}</p:txBody></p:sp>"
        (element,) = parser.parse(slide_xml(shape))
        assert element.position == Position(x=0, y=0)
