"""Builders for slide XML snippets and minimal PPTX archives used in tests."""

import io
import struct
import zipfile
from xml.sax.saxutils import escape

from lxml import etree
from PIL import Image


NS_A = "http://schemas.openxmlformats.org/drawingml/2006/main"
NS_P = "http://schemas.openxmlformats.org/presentationml/2006/main"
NS_R = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

NS_DECL = f'xmlns:a="{NS_A}" xmlns:r="{NS_R}" xmlns:p="{NS_P}"'

IMAGE_REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"
LAYOUT_REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideLayout"
TABLE_URI = "http://schemas.openxmlformats.org/drawingml/2006/table"
CHART_URI = "http://schemas.openxmlformats.org/drawingml/2006/chart"


def slide_xml(*shapes: str) -> bytes:
    """Wrap shapes in <p:sld><p:cSld><p:spTree>."""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f"<p:sld {NS_DECL}><p:cSld><p:spTree>"
        + "".join(shapes)
        + "</p:spTree></p:cSld></p:sld>"
    ).encode("utf-8")


def xfrm(x: int | str, y: int | str, tag: str = "a:xfrm") -> str:
    return f'<{tag}><a:off x="{x}" y="{y}"/><a:ext cx="914400" cy="914400"/></{tag}>'


def run(
    text: str | None,
    b: str | None = None,
    i: str | None = None,
    u: str | None = None,
    lang: str | None = None,
) -> str:
    attrs = "".join(
        f' {name}="{value}"'
        for name, value in (("lang", lang), ("b", b), ("i", i), ("u", u))
        if value is not None
    )
    r_pr = f"<a:rPr{attrs}/>" if attrs else ""
    t = f"<a:t>{escape(text)}</a:t>" if text is not None else ""
    return f"<a:r>{r_pr}{t}</a:r>"


def paragraph(*runs: str, ppr: str = "") -> str:
    return f"<a:p>{ppr}{''.join(runs)}</a:p>"


def list_ppr(lvl: int | str | None = None, bullet: str | None = None) -> str:
    """<a:pPr> with an optional lvl and "auto"/"char"/"none" bullet child."""
    lvl_attr = f' lvl="{lvl}"' if lvl is not None else ""
    child = {
        "auto": '<a:buAutoNum type="arabicPeriod"/>',
        "char": '<a:buChar char="&#8226;"/>',
        "none": "<a:buNone/>",
        None: "",
    }[bullet]
    return f"<a:pPr{lvl_attr}>{child}</a:pPr>"


def text_shape(*paragraphs: str, x: int | str = 0, y: int | str = 0, with_body: bool = True) -> str:
    body = f"<p:txBody><a:bodyPr/><a:lstStyle/>{''.join(paragraphs)}</p:txBody>" if with_body else ""
    return (
        '<p:sp><p:nvSpPr><p:cNvPr id="2" name="TextBox"/><p:cNvSpPr txBox="1"/><p:nvPr/></p:nvSpPr>'
        f"<p:spPr>{xfrm(x, y)}</p:spPr>{body}</p:sp>"
    )


def table_frame(rows: list[list[str]], x: int = 0, y: int = 0, uri: str = TABLE_URI) -> str:
    body = ""
    for row in rows:
        cells = "".join(
            f"<a:tc><a:txBody><a:bodyPr/>{paragraph(run(text)) if text else '<a:p/>'}</a:txBody><a:tcPr/></a:tc>"
            for text in row
        )
        body += f'<a:tr h="370840">{cells}</a:tr>'
    return (
        '<p:graphicFrame><p:nvGraphicFramePr><p:cNvPr id="4" name="Table"/>'
        "<p:cNvGraphicFramePr/><p:nvPr/></p:nvGraphicFramePr>"
        f"{xfrm(x, y, tag='p:xfrm')}"
        f'<a:graphic><a:graphicData uri="{uri}"><a:tbl><a:tblGrid/>{body}</a:tbl></a:graphicData></a:graphic>'
        "</p:graphicFrame>"
    )


def chart_frame(x: int = 0, y: int = 0) -> str:
    return (
        '<p:graphicFrame><p:nvGraphicFramePr><p:cNvPr id="5" name="Chart"/>'
        "<p:cNvGraphicFramePr/><p:nvPr/></p:nvGraphicFramePr>"
        f"{xfrm(x, y, tag='p:xfrm')}"
        f'<a:graphic><a:graphicData uri="{CHART_URI}"/></a:graphic>'
        "</p:graphicFrame>"
    )


def picture(rel_id: str | None = "rId2", x: int = 0, y: int = 0, with_blip: bool = True) -> str:
    embed = f' r:embed="{rel_id}"' if rel_id is not None else ""
    blip = f"<a:blip{embed}/>" if with_blip else ""
    return (
        '<p:pic><p:nvPicPr><p:cNvPr id="3" name="Picture"/><p:cNvPicPr/><p:nvPr/></p:nvPicPr>'
        f"<p:blipFill>{blip}<a:stretch><a:fillRect/></a:stretch></p:blipFill>"
        f"<p:spPr>{xfrm(x, y)}</p:spPr></p:pic>"
    )


def group(*shapes: str) -> str:
    """Group shape without its nvGrpSpPr/grpSpPr property children."""
    return f"<p:grpSp>{''.join(shapes)}</p:grpSp>"


def rels_xml(*relationships: tuple[str, str, str]) -> bytes:
    """Relationship part from (id, type, target) tuples."""
    body = "".join(
        f'<Relationship Id="{rel_id}" Type="{rel_type}" Target="{target}"/>'
        for rel_id, rel_type, target in relationships
    )
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        f"{body}</Relationships>"
    ).encode("utf-8")


def png_bytes(color: tuple = (200, 30, 30), size: int = 8, mode: str = "RGB") -> bytes:
    """Create a solid color test image."""
    img = Image.new(mode, (size, size), color)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def build_pptx(entries: dict[str, bytes]) -> bytes:
    """Zip the given part names into an in-memory archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", b'<?xml version="1.0"?><Types/>')
        for name, data in entries.items():
            zf.writestr(name, data)
    return buffer.getvalue()


def fragment(xml: str) -> etree._Element:
    """Parse a namespaced snippet such as ``<a:p>...</a:p>``."""
    root = etree.fromstring(f"<root {NS_DECL}>{xml}</root>")
    return root[0]


def corrupt_entry(archive: bytes, name: str) -> bytes:
    """Flip every byte of one entry's compressed payload, headers intact."""
    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        info = zf.getinfo(name)
    data = bytearray(archive)
    offset = info.header_offset
    name_len, extra_len = struct.unpack("<HH", data[offset + 26:offset + 30])
    start = offset + 30 + name_len + extra_len
    for i in range(start, start + info.compress_size):
        data[i] ^= 0xFF
    return bytes(data)
