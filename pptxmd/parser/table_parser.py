"""Parse DrawingML tables.

XML structure example:
    <a:graphicData uri="http://schemas.openxmlformats.org/drawingml/2006/table">
        <a:tbl>
            <a:tr h="370840">
                <a:tc>
                    <a:txBody><a:p><a:r><a:t>Cell</a:t></a:r></a:p></a:txBody>
                </a:tc>
            </a:tr>
        </a:tbl>
    </a:graphicData>

Merged cells, widths and styles are ignored.
"""

from lxml import etree
from pptx.oxml.ns import qn

from pptxmd.model.schema import Run, TableCell, TableElement, TableRow
from pptxmd.parser.text_parser import parse_paragraph


class TableParser:
    """Builds a TableElement from an ``<a:tbl>`` element."""

    def parse_table(self, tbl_node: etree._Element) -> TableElement:
        rows = [self._parse_row(tr) for tr in tbl_node.findall(qn("a:tr"))]
        return TableElement(rows=rows)

    def _parse_row(self, tr_node: etree._Element) -> TableRow:
        cells = [self._parse_cell(tc) for tc in tr_node.findall(qn("a:tc"))]
        return TableRow(cells=cells)

    def _parse_cell(self, tc_node: etree._Element) -> TableCell:
        """Concatenate the runs of every paragraph in the cell.

        Empty cells (no text body or no runs) are valid and have no runs.
        """
        runs: list[Run] = []
        tx_body = tc_node.find(qn("a:txBody"))
        if tx_body is not None:
            for p_node in tx_body.findall(qn("a:p")):
                runs.extend(parse_paragraph(p_node, add_trailing_newline=False))
        return TableCell(runs=runs)
