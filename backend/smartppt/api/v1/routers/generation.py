"""Generation router: thin HTTP layer, delegates all logic to generation_controller."""

from fastapi import APIRouter, Depends, Response, status

from smartppt.api.deps import get_model_invoker, get_settings
from smartppt.controllers import generation_controller
from smartppt.core.config import Settings
from smartppt.core.model_invoker import ModelInvoker
from smartppt.schemas.generation import (
    DeckImagesRequest,
    DeckImagesResponse,
    ErrorResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    RegenerateSlideResponse,
    SlideEditRequest,
    SlideImageRequest,
    SlideImageResponse,
)

router = APIRouter(tags=["generation"], responses={500: {"model": ErrorResponse}})


@router.post(
    "/generate-ppt-content",
    response_model=GenerateContentResponse,
    response_model_exclude_none=True,
)
async def generate_ppt_content(
    payload: GenerateContentRequest,
    invoker: ModelInvoker = Depends(get_model_invoker),
):
    """Generate a deck title and slides for a topic or a sample structure."""
    return await generation_controller.generate_content(invoker, payload)


@router.post(
    "/regenerate-slide",
    response_model=RegenerateSlideResponse,
    response_model_exclude_none=True,
)
async def regenerate_slide(
    payload: SlideEditRequest,
    invoker: ModelInvoker = Depends(get_model_invoker),
):
    """Rewrite one slide according to the user's edit prompt."""
    return await generation_controller.regenerate_slide(invoker, payload)


@router.post(
    "/generate-slide-image",
    response_model=SlideImageResponse,
    response_model_exclude_none=True,
)
async def generate_slide_image(
    payload: SlideImageRequest,
    response: Response,
    invoker: ModelInvoker = Depends(get_model_invoker),
):
    """Generate an illustration for one slide; failures come back as ``success: false``."""
    result = await generation_controller.generate_slide_image(invoker, payload)
    if not result.success:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return result


@router.post(
    "/generate-deck-images",
    response_model=DeckImagesResponse,
    response_model_exclude_none=True,
)
async def generate_deck_images(
    payload: DeckImagesRequest,
    invoker: ModelInvoker = Depends(get_model_invoker),
    app_settings: Settings = Depends(get_settings),
):
    """Illustrate every slide of a deck in order; slides whose image fails keep no image."""
    return await generation_controller.generate_deck_images(
        invoker, payload, app_settings.IMAGE_CONCURRENCY
    )
