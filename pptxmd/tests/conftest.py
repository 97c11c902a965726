"""Pytest configuration and fixtures."""

import io
from pathlib import Path

import pytest
from pptx import Presentation
from pptx.util import Emu, Inches

from pptxmd.parser.shape_tree import ShapeTreeParser
from slide_builders import (
    IMAGE_REL,
    LAYOUT_REL,
    build_pptx,
    list_ppr,
    paragraph,
    picture,
    png_bytes,
    rels_xml,
    run,
    slide_xml,
    table_frame,
    text_shape,
)


@pytest.fixture
def parser() -> ShapeTreeParser:
    """Create a ShapeTreeParser instance."""
    return ShapeTreeParser()


@pytest.fixture
def rich_slide_xml() -> bytes:
    """Slide with a title, a 2x2 table, a two-item list and a picture.

    Shapes are stored bottom-up so rendering has to reorder them.
    """
    return slide_xml(
        picture("rId2", x=0, y=3000000),
        text_shape(
            paragraph(run("one"), ppr=list_ppr(lvl=0)),
            paragraph(run("two"), ppr=list_ppr(lvl=0)),
            x=0,
            y=2000000,
        ),
        table_frame([["A", "B"], ["1", "2"]], x=0, y=1000000),
        text_shape(paragraph(run("Hello", b="1", i="1")), x=0, y=0),
    )


@pytest.fixture
def sample_pptx_bytes(rich_slide_xml: bytes) -> bytes:
    """Archive with slides 1, 3 and 10; slide 3 is the rich slide."""
    return build_pptx(
        {
            "ppt/slides/slide1.xml": slide_xml(text_shape(paragraph(run("First")))),
            "ppt/slides/slide10.xml": slide_xml(text_shape(paragraph(run("Tenth")))),
            "ppt/slides/slide3.xml": rich_slide_xml,
            "ppt/slides/_rels/slide3.xml.rels": rels_xml(
                ("rId1", LAYOUT_REL, "../slideLayouts/slideLayout1.xml"),
                ("rId2", IMAGE_REL, "../media/image1.png"),
            ),
            "ppt/media/image1.png": png_bytes(),
        }
    )


@pytest.fixture
def sample_pptx_path(tmp_path: Path, sample_pptx_bytes: bytes) -> Path:
    path = tmp_path / "sample.pptx"
    path.write_bytes(sample_pptx_bytes)
    return path


@pytest.fixture
def python_pptx_deck() -> bytes:
    """A real deck written by python-pptx: text box, table, picture, group."""
    prs = Presentation()
    slide = prs.slides.add_slide(prs.slide_layouts[6])  # Blank layout

    textbox = slide.shapes.add_textbox(Inches(1), Inches(0.5), Inches(4), Inches(1))
    textbox.text_frame.text = "Quarterly review"
    font = textbox.text_frame.paragraphs[0].runs[0].font
    font.bold = True

    table = slide.shapes.add_table(2, 2, Inches(1), Inches(2), Inches(4), Inches(1)).table
    table.cell(0, 0).text = "Region"
    table.cell(0, 1).text = "Revenue"
    table.cell(1, 0).text = "EMEA"
    table.cell(1, 1).text = "42"

    slide.shapes.add_picture(io.BytesIO(png_bytes()), Inches(1), Inches(4))

    grouped = slide.shapes.add_group_shape()
    inner = grouped.shapes.add_textbox(Emu(0), Inches(6), Inches(2), Inches(1))
    inner.text_frame.text = "Grouped note"

    buffer = io.BytesIO()
    prs.save(buffer)
    return buffer.getvalue()
