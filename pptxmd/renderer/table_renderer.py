"""Render tables as GitHub-flavored Markdown."""

from pptxmd.model.schema import TableCell, TableElement, TableRow


class TableRenderer:
    """The first row is the header; every other row is data.

    Cell text is the raw text of the cell's runs. Run formatting is not
    applied inside tables. Pipes in cell text are escaped so every row
    keeps its column count.
    """

    def render(self, element: TableElement) -> str:
        if not element.rows:
            return ""

        header, *body = element.rows
        lines = [self._render_row(header)]
        lines.append("|" + "|".join(" --- " for _ in header.cells) + "|")
        lines.extend(self._render_row(row) for row in body)
        return "\n".join(lines) + "\n\n"

    def _render_row(self, row: TableRow) -> str:
        return "|" + "|".join(f" {self._cell_text(cell)} " for cell in row.cells) + "|"

    @staticmethod
    def _cell_text(cell: TableCell) -> str:
        return cell.extract().replace("|", "\\|")
