"""Pydantic v2 models for parsed slide content.

A slide is parsed into a flat list of slide elements. Each element is one
variant of a discriminated union keyed on ``kind``. Every variant except
``UnknownElement`` carries the shape's top-left offset in EMUs, which is
the only layout information kept: elements are rendered top-to-bottom,
then left-to-right.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Geometry
# ============================================================================


class Position(BaseModel):
    """Top-left offset of a shape in EMUs."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(default=0, description="Left offset in EMUs")
    y: int = Field(default=0, description="Top offset in EMUs")

    @property
    def sort_key(self) -> tuple[int, int]:
        """Reading-order key: row first, then column."""
        return (self.y, self.x)


ORIGIN = Position()


# ============================================================================
# Text
# ============================================================================


class Formatting(BaseModel):
    """Character formatting of a run."""

    model_config = ConfigDict(frozen=True)

    bold: bool = False
    italic: bool = False
    underlined: bool = False
    lang: str = ""


class Run(BaseModel):
    """A span of text sharing one formatting."""

    text: str = ""
    formatting: Formatting = Field(default_factory=Formatting)

    def extract(self) -> str:
        """Raw text without markup."""
        return self.text

    def render_as_md(self) -> str:
        """Render the run with Markdown emphasis.

        A trailing newline is moved outside of the markup so emphasis
        markers never straddle a line break. Markdown has no underline,
        so underlined text falls back to an HTML ``<u>`` tag.
        """
        result = self.extract()
        has_new_line = result.endswith("\n")
        if has_new_line:
            result = result.replace("\n", "")

        fmt = self.formatting
        if fmt.bold and fmt.italic:
            result = f"***{result}***"
        else:
            if fmt.bold:
                result = f"**{result}**"
            if fmt.italic:
                result = f"_{result}_"

        if fmt.underlined:
            result = f"<u>{result}</u>"

        if has_new_line:
            return f"{result}\n"
        return result


# ============================================================================
# Slide elements
# ============================================================================


class TextElement(BaseModel):
    """Plain text shape: all runs of all paragraphs, in order."""

    kind: Literal["text"] = "text"
    position: Position = Field(default_factory=Position)
    runs: list[Run] = Field(default_factory=list)


class ListItem(BaseModel):
    """One paragraph of a list shape."""

    level: int = Field(default=0, ge=0, description="Indent depth, 0-based")
    is_ordered: bool = False
    runs: list[Run] = Field(default_factory=list)


class ListElement(BaseModel):
    """Shape whose paragraphs carry bullet or indent-level properties."""

    kind: Literal["list"] = "list"
    position: Position = Field(default_factory=Position)
    items: list[ListItem] = Field(default_factory=list)


class TableCell(BaseModel):
    """Table cell. Paragraph breaks are not kept inside cells."""

    runs: list[Run] = Field(default_factory=list)

    def extract(self) -> str:
        return "".join(run.extract() for run in self.runs)


class TableRow(BaseModel):
    cells: list[TableCell] = Field(default_factory=list)


class TableElement(BaseModel):
    """A table from a graphic frame."""

    kind: Literal["table"] = "table"
    position: Position = Field(default_factory=Position)
    rows: list[TableRow] = Field(default_factory=list)


class ImageReference(BaseModel):
    """Relationship id of a picture and its archive-relative target.

    ``target`` is empty until the image linker fills it in from the
    slide's relationships.
    """

    id: str
    target: str = ""


class ImageElement(BaseModel):
    """A picture shape."""

    kind: Literal["image"] = "image"
    position: Position = Field(default_factory=Position)
    reference: ImageReference


class UnknownElement(BaseModel):
    """Placeholder for a shape that has no Markdown rendering."""

    kind: Literal["unknown"] = "unknown"

    @property
    def position(self) -> Position:
        return ORIGIN


SlideElement = Annotated[
    Union[TextElement, TableElement, ImageElement, ListElement, UnknownElement],
    Field(discriminator="kind"),
]


class ManualImage(BaseModel):
    """Base64 payload of an image handed back to the caller."""

    base64_content: str
    img_ref: ImageReference
