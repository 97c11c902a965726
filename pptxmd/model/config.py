"""Parser configuration.

Use ``ParserConfig.builder()`` to set only the options you care about;
everything else falls back to the defaults below.

| Option                 | Default       |
|------------------------|---------------|
| extract_images         | True          |
| compress_images        | True          |
| quality                | 80            |
| image_handling_mode    | IN_MARKDOWN   |
| image_output_path      | None          |
| include_slide_comment  | True          |
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ImageHandlingMode(str, Enum):
    """How images end up in the Markdown output."""

    IN_MARKDOWN = "in_markdown"  # base64 data URI inline
    MANUALLY = "manually"  # caller pulls payloads via load_images_manually()
    SAVE = "save"  # written to image_output_path and linked


class ParserConfig(BaseModel):
    """Immutable per-slide configuration snapshot."""

    model_config = ConfigDict(frozen=True)

    extract_images: bool = True
    compress_images: bool = True
    quality: int = Field(default=80, ge=0, le=100, description="JPEG quality")
    image_handling_mode: ImageHandlingMode = ImageHandlingMode.IN_MARKDOWN
    image_output_path: Optional[Path] = None
    include_slide_comment: bool = True

    @model_validator(mode="after")
    def _check_output_path(self) -> "ParserConfig":
        if self.image_handling_mode == ImageHandlingMode.SAVE and self.image_output_path is None:
            raise ValueError("image_output_path is required when image_handling_mode is 'save'")
        return self

    @classmethod
    def builder(cls) -> "ParserConfigBuilder":
        return ParserConfigBuilder()


class ParserConfigBuilder:
    """Collects options and builds a ParserConfig, applying defaults."""

    def __init__(self) -> None:
        self._options: dict[str, object] = {}

    def extract_images(self, value: bool) -> "ParserConfigBuilder":
        self._options["extract_images"] = value
        return self

    def compress_images(self, value: bool) -> "ParserConfigBuilder":
        self._options["compress_images"] = value
        return self

    def quality(self, value: int) -> "ParserConfigBuilder":
        self._options["quality"] = value
        return self

    def image_handling_mode(self, value: ImageHandlingMode) -> "ParserConfigBuilder":
        self._options["image_handling_mode"] = value
        return self

    def image_output_path(self, value: Union[str, Path]) -> "ParserConfigBuilder":
        self._options["image_output_path"] = Path(value)
        return self

    def include_slide_comment(self, value: bool) -> "ParserConfigBuilder":
        self._options["include_slide_comment"] = value
        return self

    def build(self) -> ParserConfig:
        """Build the config.

        Raises:
            pydantic.ValidationError: If quality is out of range or Save
                mode is selected without an output path.
        """
        return ParserConfig(**self._options)
