"""Exceptions raised while reading and converting PPTX presentations.

Structural problems (a slide that cannot be decoded or is missing its
shape tree) are fatal for that slide. Problems with a single image never
raise: the renderer drops the image and logs a warning instead.
"""


class PptxMdError(Exception):
    """Base class for all conversion errors."""


class ArchiveError(PptxMdError):
    """The PPTX zip container could not be opened or read."""


class XmlParseError(PptxMdError):
    """A slide or relationship part is not well-formed XML."""


class Utf8DecodeError(PptxMdError):
    """A slide or relationship part is not valid UTF-8."""


class SlideNotFoundError(PptxMdError):
    """A slide was requested by number or path but is not in the archive."""


class MalformedSlideError(PptxMdError):
    """A required element (cSld, spTree, txBody) is missing."""


class ImageNotFoundError(PptxMdError):
    """A picture shape has no blip or no embedded relationship id."""


class RelationshipNotFoundError(PptxMdError):
    """A relationship id has no matching entry in the slide's .rels part."""


class ConversionFailedError(PptxMdError):
    """Markdown assembly could not complete."""
