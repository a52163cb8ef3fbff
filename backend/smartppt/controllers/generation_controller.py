import logging

from smartppt.core import ai_generators
from smartppt.core.exceptions import GenerationError, client_message
from smartppt.core.model_invoker import ModelInvoker
from smartppt.schemas.generation import (
    DeckImagesRequest,
    DeckImagesResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    RegenerateSlideResponse,
    SlideEditRequest,
    SlideImageRequest,
    SlideImageResponse,
)

logger = logging.getLogger(__name__)


async def generate_content(invoker: ModelInvoker, payload: GenerateContentRequest) -> GenerateContentResponse:
    """Generate a full deck; any failure propagates to the ``{"error"}`` handlers."""
    content = await ai_generators.generate_deck_content(invoker, payload)
    return GenerateContentResponse(content=content)


async def regenerate_slide(invoker: ModelInvoker, payload: SlideEditRequest) -> RegenerateSlideResponse:
    slide = await ai_generators.regenerate_slide(invoker, payload)
    return RegenerateSlideResponse(slide=slide)


async def generate_slide_image(invoker: ModelInvoker, payload: SlideImageRequest) -> SlideImageResponse:
    """Generate one slide image.

    Failures are reported in the body (``success=False``) rather than raised,
    so the caller can keep assembling the deck without this image.
    """
    try:
        image_url = await ai_generators.generate_slide_image(
            invoker,
            payload.slide_title,
            payload.slide_bullets,
            payload.presentation_topic,
        )
    except GenerationError as exc:
        logger.error("Error generating slide image: %s", exc.message)
        return SlideImageResponse(success=False, error=client_message(exc))
    return SlideImageResponse(success=True, image_url=image_url)


async def generate_deck_images(
    invoker: ModelInvoker,
    payload: DeckImagesRequest,
    concurrency: int,
) -> DeckImagesResponse:
    deck, results = await ai_generators.generate_deck_images(
        invoker,
        payload.deck,
        presentation_topic=payload.presentation_topic,
        concurrency=concurrency,
    )
    return DeckImagesResponse(deck=deck, results=results)
