"""
Generation pipelines for Smart PPT.

Pipelines
---------
- **generate_deck_content**  – prompt → text model → JSON extraction → ``DeckContent``
- **regenerate_slide**       – prompt → text model → JSON extraction → ``Slide``
- **generate_slide_image**   – image prompt → image model → image URL
- **generate_deck_images**   – ``generate_slide_image`` over every slide of a deck

Content failures are fatal for the call.  Image failures are fatal for the
single-slide call but are swallowed per slide by ``generate_deck_images``,
which always returns the whole deck.
"""

import asyncio
import logging
from typing import Any

from smartppt.core.exceptions import GenerationError, ImageGenerationError, UpstreamError
from smartppt.core.extraction import extract_json
from smartppt.core.model_invoker import ModelInvoker
from smartppt.core.prompts import build_deck_prompt, build_image_prompt, build_slide_edit_prompt
from smartppt.core.validation import validate_deck, validate_slide
from smartppt.schemas.deck_content import DeckContent, Slide
from smartppt.schemas.generation import (
    GenerateContentRequest,
    SlideEditRequest,
    SlideImageOutcome,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1.  Slide content
# ---------------------------------------------------------------------------

async def generate_deck_content(invoker: ModelInvoker, request: GenerateContentRequest) -> DeckContent:
    """Generate the title and slides for a new deck."""
    system, user = build_deck_prompt(request)
    raw = await invoker.complete(system, user)
    content = validate_deck(extract_json(raw))
    logger.info("Generated deck %r with %d slides", content.title, len(content.slides))
    return content


async def regenerate_slide(invoker: ModelInvoker, request: SlideEditRequest) -> Slide:
    """Rewrite a single slide according to the user's edit prompt."""
    logger.info("Regenerating slide with prompt: %s", request.edit_prompt)
    system, user = build_slide_edit_prompt(request)
    raw = await invoker.complete(system, user)
    slide = validate_slide(extract_json(raw))
    logger.info("Successfully regenerated slide: %s", slide.title)
    return slide


# ---------------------------------------------------------------------------
# 2.  Slide images
# ---------------------------------------------------------------------------

def extract_image_url(data: dict[str, Any]) -> str | None:
    """Return ``choices[0].message.images[0].image_url.url`` if present."""
    try:
        url = data["choices"][0]["message"]["images"][0]["image_url"]["url"]
    except (KeyError, IndexError, TypeError):
        return None
    return url or None


async def generate_slide_image(
    invoker: ModelInvoker,
    slide_title: str,
    slide_bullets: list[str] | None = None,
    presentation_topic: str | None = None,
) -> str:
    """Return an image URL (usually a base64 ``data:`` URL) illustrating one slide."""
    if not slide_title:
        raise ImageGenerationError("Slide title is required")

    prompt = build_image_prompt(slide_title, slide_bullets, presentation_topic)
    logger.debug("Generating image with prompt: %s", prompt)
    try:
        data = await invoker.complete_image(prompt)
    except UpstreamError as exc:
        raise ImageGenerationError(f"Image generation failed: {exc.status_code}") from exc

    image_url = extract_image_url(data)
    if not image_url:
        logger.error("No image in response for slide %r", slide_title)
        raise ImageGenerationError("No image generated")
    return image_url


async def _image_outcome(
    invoker: ModelInvoker,
    deck: DeckContent,
    index: int,
    presentation_topic: str | None,
) -> SlideImageOutcome:
    slide = deck.slides[index]
    try:
        slide.image_url = await generate_slide_image(
            invoker, slide.title, slide.bullets, presentation_topic or deck.title
        )
    except GenerationError as exc:
        logger.warning("Continuing without image for slide %d (%s): %s", index + 1, slide.title, exc.message)
        return SlideImageOutcome(index=index, success=False, error=exc.message)
    return SlideImageOutcome(index=index, success=True)


async def generate_deck_images(
    invoker: ModelInvoker,
    deck: DeckContent,
    presentation_topic: str | None = None,
    concurrency: int = 1,
) -> tuple[DeckContent, list[SlideImageOutcome]]:
    """Attach an image to every slide that the image model can illustrate.

    Slides are processed in deck order, one at a time unless *concurrency*
    is raised.  A slide whose image fails keeps ``image_url`` unset; the
    deck itself never fails.  Returns a copy of *deck* and one outcome per
    slide, in slide order.
    """
    updated = deck.model_copy(deep=True)
    indices = range(len(updated.slides))

    if concurrency <= 1:
        outcomes = [await _image_outcome(invoker, updated, i, presentation_topic) for i in indices]
    else:
        semaphore = asyncio.Semaphore(concurrency)

        async def bounded(i: int) -> SlideImageOutcome:
            async with semaphore:
                return await _image_outcome(invoker, updated, i, presentation_topic)

        outcomes = list(await asyncio.gather(*(bounded(i) for i in indices)))

    generated = sum(1 for outcome in outcomes if outcome.success)
    logger.info("Generated %d/%d slide images for %r", generated, len(outcomes), updated.title)
    return updated, outcomes
