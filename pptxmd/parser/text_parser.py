"""Parse DrawingML text bodies into runs and list items.

XML structure example:
    <p:txBody>
        <a:p>
            <a:pPr lvl="1"><a:buAutoNum type="arabicPeriod"/></a:pPr>
            <a:r>
                <a:rPr lang="en-US" b="1" i="0" u="sng"/>
                <a:t>Hello</a:t>
            </a:r>
        </a:p>
    </p:txBody>
"""

from lxml import etree
from pptx.oxml.ns import qn

from pptxmd.model.schema import Formatting, ListElement, ListItem, Run, TextElement


BULLET_TAGS = (qn("a:buAutoNum"), qn("a:buChar"))


def _is_true(value: str | None) -> bool:
    """OOXML booleans are "1" or "true"."""
    if value is None:
        return False
    return value == "1" or value.lower() == "true"


def parse_run(r_node: etree._Element) -> Run:
    """Parse a single ``<a:r>`` into text and formatting."""
    formatting = Formatting()

    r_pr = r_node.find(qn("a:rPr"))
    if r_pr is not None:
        underline = r_pr.get("u")
        formatting = Formatting(
            bold=_is_true(r_pr.get("b")),
            italic=_is_true(r_pr.get("i")),
            underlined=underline is not None and underline != "none",
            lang=r_pr.get("lang", ""),
        )

    t_node = r_node.find(qn("a:t"))
    text = ""
    if t_node is not None and t_node.text:
        text = t_node.text

    return Run(text=text, formatting=formatting)


def parse_paragraph(p_node: etree._Element, add_trailing_newline: bool) -> list[Run]:
    """Parse the runs of a paragraph.

    Args:
        p_node: The ``<a:p>`` element.
        add_trailing_newline: Append a newline to the last run so that
            paragraph breaks survive once runs are flattened. Table cells
            pass False.

    Returns:
        Runs in document order.
    """
    runs = [parse_run(r_node) for r_node in p_node.findall(qn("a:r"))]
    if add_trailing_newline and runs:
        runs[-1].text += "\n"
    return runs


def parse_list_properties(p_node: etree._Element) -> tuple[int, bool]:
    """Read indent level and numbering of a list paragraph.

    Both ``<a:buAutoNum>`` and ``<a:buChar>`` mark the item as ordered,
    so character bullets are numbered too.

    Returns:
        Tuple of (level, is_ordered). Defaults to (0, False).
    """
    level = 0
    is_ordered = False

    p_pr = p_node.find(qn("a:pPr"))
    if p_pr is not None:
        lvl = p_pr.get("lvl")
        if lvl is not None:
            try:
                level = int(lvl)
            except ValueError:
                level = 0
            if level < 0:
                level = 0

        is_ordered = p_pr.find(qn("a:buAutoNum")) is not None
        if not is_ordered:
            is_ordered = p_pr.find(qn("a:buChar")) is not None

    return level, is_ordered


def is_list_body(tx_body: etree._Element) -> bool:
    """True when any paragraph of the body looks like a list item.

    The check is shape-wide: one list-like paragraph makes the whole
    shape a list.
    """
    for p_pr in tx_body.iter(qn("a:pPr")):
        if p_pr.get("lvl") is not None:
            return True
        if any(child.tag in BULLET_TAGS for child in p_pr):
            return True
    return False


def parse_text_body(tx_body: etree._Element) -> TextElement:
    """Flatten all paragraphs of a text body into one run sequence."""
    runs: list[Run] = []
    for p_node in tx_body.findall(qn("a:p")):
        runs.extend(parse_paragraph(p_node, add_trailing_newline=True))
    return TextElement(runs=runs)


def parse_list_body(tx_body: etree._Element) -> ListElement:
    """One list item per paragraph."""
    items: list[ListItem] = []
    for p_node in tx_body.findall(qn("a:p")):
        level, is_ordered = parse_list_properties(p_node)
        runs = parse_paragraph(p_node, add_trailing_newline=True)
        items.append(ListItem(level=level, is_ordered=is_ordered, runs=runs))
    return ListElement(items=items)
