"""Conversion routes."""

import io
import logging
from collections import Counter

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from starlette.concurrency import run_in_threadpool

from pptxmd.api.config import Settings, get_settings
from pptxmd.api.schemas import ConvertMode, ConvertResponse, ImagePayload, SlideSummary
from pptxmd.errors import PptxMdError
from pptxmd.model.config import ImageHandlingMode, ParserConfig
from pptxmd.model.slide import Slide
from pptxmd.parser.pptx_reader import PptxContainer

logger = logging.getLogger(__name__)

router = APIRouter()


def _summarize(slide: Slide, markdown: str) -> SlideSummary:
    counts = Counter(element.kind for element in slide.elements)
    return SlideSummary(
        slide_number=slide.slide_number,
        markdown=markdown,
        element_counts=dict(counts),
    )


def _convert(content: bytes, config: ParserConfig, max_workers: int) -> ConvertResponse:
    """Parse and render a presentation. Blocking; runs in the threadpool."""
    with PptxContainer(io.BytesIO(content), config) as container:
        slides = container.parse_all_multi_threaded(max_workers=max_workers)

    summaries: list[SlideSummary] = []
    images: list[ImagePayload] = []
    for slide in slides:
        markdown = slide.convert_to_md()
        summaries.append(_summarize(slide, markdown))
        for manual in slide.load_images_manually() or []:
            images.append(
                ImagePayload(
                    slide_number=slide.slide_number,
                    id=manual.img_ref.id,
                    target=manual.img_ref.target,
                    base64_content=manual.base64_content,
                )
            )

    return ConvertResponse(
        markdown="\n".join(summary.markdown for summary in summaries),
        slide_count=len(slides),
        slides=summaries,
        images=images,
    )


@router.post("/convert", response_model=ConvertResponse)
async def convert_presentation(
    file: UploadFile = File(...),
    mode: ConvertMode = ConvertMode.IN_MARKDOWN,
    extract_images: bool = True,
    compress_images: bool = True,
    quality: int | None = Query(None, ge=0, le=100),
    include_slide_comment: bool = True,
    settings: Settings = Depends(get_settings),
):
    """Convert an uploaded PPTX file to Markdown."""
    if not file.filename or not file.filename.lower().endswith(".pptx"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File must be a .pptx file",
        )

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {settings.max_upload_mb} MB",
        )

    config = ParserConfig(
        extract_images=extract_images,
        compress_images=compress_images,
        quality=quality if quality is not None else settings.image_quality,
        image_handling_mode=ImageHandlingMode(mode.value),
        include_slide_comment=include_slide_comment,
    )

    try:
        return await run_in_threadpool(_convert, content, config, settings.max_workers)
    except PptxMdError as e:
        logger.warning(f"Conversion of {file.filename} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Could not convert presentation: {e}",
        )

