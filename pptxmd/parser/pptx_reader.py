"""High-level PPTX reading: open the archive and build slides."""

import logging
import re
import zipfile
import zlib
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, Iterator, Mapping, Optional, Union

from pptxmd.errors import ArchiveError, ConversionFailedError, PptxMdError, SlideNotFoundError
from pptxmd.model.config import ParserConfig
from pptxmd.model.schema import ImageReference
from pptxmd.model.slide import Slide
from pptxmd.parser.rels_parser import parse_slide_rels
from pptxmd.parser.shape_tree import ShapeTreeParser

logger = logging.getLogger(__name__)


SLIDE_PATH_PATTERN = re.compile(r"^ppt/slides/slide(\d+)\.xml$")


@dataclass
class SlideResult:
    """Outcome of loading one slide in streaming mode."""

    rel_path: str
    slide: Optional[Slide] = None
    error: Optional[PptxMdError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class _StagedSlide:
    """Everything read from the archive for one slide, before parsing."""

    rel_path: str
    slide_xml: bytes
    images: list[ImageReference] = field(default_factory=list)
    image_data: Mapping[str, bytes] = field(default_factory=dict)


class PptxContainer:
    """Reads slides out of a PPTX archive.

    The archive handle is owned by the container and only read from the
    calling thread. Slides can be consumed one at a time with
    ``iter_slides()``, all at once with ``parse_all()``, or parsed in a
    thread pool with ``parse_all_multi_threaded()``.
    """

    def __init__(
        self,
        source: Union[str, Path, BinaryIO],
        config: ParserConfig | None = None,
    ) -> None:
        """Open a PPTX file.

        Args:
            source: Path to the PPTX file or a binary file-like object.
            config: Parser configuration; defaults apply when omitted.

        Raises:
            ArchiveError: If the source is not a readable zip archive.
        """
        self.config = config or ParserConfig()
        try:
            self._archive = zipfile.ZipFile(source, "r")
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ArchiveError(f"Cannot open PPTX archive: {e}") from e

        self._names = set(self._archive.namelist())
        self.slide_paths = self._discover_slide_paths()
        self.slide_count = len(self.slide_paths)
        self.shape_tree_parser = ShapeTreeParser()
        logger.info(f"Opened presentation with {self.slide_count} slides")

    @classmethod
    def open(
        cls,
        source: Union[str, Path, BinaryIO],
        config: ParserConfig | None = None,
    ) -> "PptxContainer":
        return cls(source, config)

    def close(self) -> None:
        self._archive.close()

    def __enter__(self) -> "PptxContainer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _discover_slide_paths(self) -> list[str]:
        """Slide part names ordered by slide number (slide10 after slide9)."""
        numbered: list[tuple[int, str]] = []
        for name in self._archive.namelist():
            match = SLIDE_PATH_PATTERN.match(name)
            if match:
                numbered.append((int(match.group(1)), name))
        return [name for _, name in sorted(numbered)]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def read_slide(self, slide_number: int) -> Slide:
        """Load a single slide by its 1-based number.

        Raises:
            SlideNotFoundError: If the presentation has no such slide.
        """
        path = f"ppt/slides/slide{slide_number}.xml"
        if path not in self.slide_paths:
            raise SlideNotFoundError(
                f"Slide {slide_number} not found. File has {self.slide_count} slides."
            )
        return self.load_slide(path)

    def load_slide(self, slide_path: str) -> Slide:
        """Read and parse one slide part."""
        return self._build_slide(self._stage_slide(slide_path), self.shape_tree_parser)

    def iter_slides(self) -> Iterator[SlideResult]:
        """Yield slides one at a time.

        Only one slide's XML and images are held at a time. A slide that
        fails to parse is yielded with its error set; iteration continues
        with the next slide.
        """
        for slide_path in list(self.slide_paths):
            try:
                slide = self.load_slide(slide_path)
            except PptxMdError as e:
                logger.warning(f"Failed to parse {slide_path}: {e}")
                yield SlideResult(rel_path=slide_path, error=e)
                continue
            yield SlideResult(rel_path=slide_path, slide=slide)

    def parse_all(self) -> list[Slide]:
        """Parse every slide sequentially.

        Raises:
            PptxMdError: The first slide failure.
        """
        return [self.load_slide(path) for path in self.slide_paths]

    def parse_all_multi_threaded(self, max_workers: int | None = None) -> list[Slide]:
        """Parse every slide in a thread pool.

        All archive reads happen up front on the calling thread, since the
        zip handle is not shared between readers. Parsing and linking then
        run one task per slide against read-only image tables.

        Raises:
            PptxMdError: The first slide failure, in slide order.
        """
        staged = [self._stage_slide(path) for path in self.slide_paths]
        if not staged:
            return []

        logger.info(f"Parsing {len(staged)} slides in parallel")
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            # Each worker gets its own parser; results keep slide order.
            futures = [
                executor.submit(self._build_slide, item, ShapeTreeParser())
                for item in staged
            ]
            slides = [future.result() for future in futures]

        return sorted(slides, key=lambda s: s.slide_number)

    def convert_to_md(self) -> str:
        """Convert the whole presentation to one Markdown document.

        Raises:
            ConversionFailedError: If the presentation has no slides.
            PptxMdError: If any slide fails to parse.
        """
        if not self.slide_paths:
            raise ConversionFailedError("Presentation contains no slides")
        return "\n".join(slide.convert_to_md() for slide in self.parse_all())

    # ------------------------------------------------------------------
    # Archive access
    # ------------------------------------------------------------------

    def _read_file_from_archive(self, path: str) -> bytes:
        """Read one archive entry.

        Raises:
            SlideNotFoundError: If a slide part is missing.
            ArchiveError: If any other part is missing, or the entry is
                corrupt, truncated, encrypted or uses an unsupported
                compression method.
        """
        try:
            return self._archive.read(path)
        except KeyError as e:
            if SLIDE_PATH_PATTERN.match(path):
                raise SlideNotFoundError(f"{path} not found in archive") from e
            raise ArchiveError(f"{path} not found in archive") from e
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError, OSError) as e:
            raise ArchiveError(f"Cannot read {path}: {e}") from e

    def _stage_slide(self, slide_path: str) -> _StagedSlide:
        """Read slide XML, relationships and referenced image bytes."""
        slide_xml = self._read_file_from_archive(slide_path)

        images: list[ImageReference] = []
        rels_path = self.get_slide_rels_path(slide_path)
        if rels_path in self._names:
            images = parse_slide_rels(self._read_file_from_archive(rels_path))

        image_data: dict[str, bytes] = {}
        if self.config.extract_images:
            for image in images:
                image_path = self.get_full_image_path(slide_path, image.target)
                try:
                    image_data[image.id] = self._read_file_from_archive(image_path)
                except PptxMdError:
                    logger.warning(f"Image {image_path} referenced by {slide_path} is missing")

        return _StagedSlide(
            rel_path=slide_path,
            slide_xml=slide_xml,
            images=images,
            image_data=MappingProxyType(image_data),
        )

    def _build_slide(self, staged: _StagedSlide, parser: ShapeTreeParser) -> Slide:
        """Parse staged bytes into a linked Slide. Touches no shared state."""
        logger.debug(f"Parsing {staged.rel_path}")
        elements = parser.parse(staged.slide_xml)
        slide = Slide(
            rel_path=staged.rel_path,
            slide_number=Slide.extract_slide_number(staged.rel_path),
            elements=elements,
            images=[image.model_copy() for image in staged.images],
            image_data=staged.image_data,
            config=self.config,
        )
        slide.link_images()
        return slide

    @staticmethod
    def get_slide_rels_path(slide_path: str) -> str:
        """``ppt/slides/slide1.xml`` -> ``ppt/slides/_rels/slide1.xml.rels``."""
        directory, _, name = slide_path.rpartition("/")
        if directory:
            return f"{directory}/_rels/{name}.rels"
        return f"_rels/{name}.rels"

    @staticmethod
    def get_full_image_path(slide_path: str, target: str) -> str:
        """Resolve a relationship target against the slide's location.

        ``../media/image1.png`` resolves to ``ppt/media/image1.png``; other
        targets are relative to the slide's own directory.
        """
        if target.startswith("../"):
            while target.startswith("../"):
                target = target[3:]
            return f"ppt/{target}"
        slide_dir = slide_path.rpartition("/")[0]
        return f"{slide_dir}/{target}"


def convert_file(
    source: Union[str, Path, BinaryIO],
    config: ParserConfig | None = None,
) -> str:
    """Convert a PPTX file to Markdown in one call."""
    with PptxContainer(source, config) as container:
        return container.convert_to_md()
