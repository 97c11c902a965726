"""
schemas.py - Pydantic request/response models for the API.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field


class ConvertMode(str, Enum):
    """Image handling modes available over HTTP.

    Saving to disk is not offered: files would land on the server.
    """

    IN_MARKDOWN = "in_markdown"
    MANUALLY = "manually"


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class SlideSummary(BaseModel):
    """Markdown and element statistics for one slide."""
    slide_number: int
    markdown: str
    element_counts: Dict[str, int] = Field(
        default_factory=dict, description="Number of elements per kind"
    )


class ImagePayload(BaseModel):
    """Image returned separately in manual mode."""
    slide_number: int
    id: str
    target: str
    base64_content: str


class ConvertResponse(BaseModel):
    """Result of converting a presentation."""
    markdown: str = Field(..., description="All slides joined into one document")
    slide_count: int
    slides: List[SlideSummary] = Field(default_factory=list)
    images: List[ImagePayload] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "markdown": "<!-- Slide 1 -->\n\n***Hello***\n\n",
                "slide_count": 1,
                "slides": [
                    {
                        "slide_number": 1,
                        "markdown": "<!-- Slide 1 -->\n\n***Hello***\n\n",
                        "element_counts": {"text": 1},
                    }
                ],
                "images": [],
            }
        }
