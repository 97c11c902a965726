"""Link picture elements to their relationship targets."""

import logging
from typing import Iterable, Mapping

from pptxmd.errors import RelationshipNotFoundError
from pptxmd.model.schema import ImageElement, ImageReference, SlideElement

logger = logging.getLogger(__name__)


def resolve_target(targets: Mapping[str, str], rel_id: str) -> str:
    """Look up the target of a relationship id.

    Raises:
        RelationshipNotFoundError: If the id has no image relationship.
    """
    try:
        return targets[rel_id]
    except KeyError as e:
        raise RelationshipNotFoundError(f"No image relationship for {rel_id}") from e


def link_images(elements: Iterable[SlideElement], images: Iterable[ImageReference]) -> None:
    """Fill in the target of every unresolved image element, in place.

    Images whose id has no relationship keep an empty target and are
    later skipped by the renderer. Already resolved targets are left
    alone, so linking twice is the same as linking once.
    """
    targets = {image.id: image.target for image in images}

    for element in elements:
        if not isinstance(element, ImageElement):
            continue
        reference = element.reference
        if reference.target:
            continue
        try:
            reference.target = resolve_target(targets, reference.id)
        except RelationshipNotFoundError as e:
            logger.warning(str(e))
