"""Export router: sample-deck analysis and PPTX / PDF rendering."""

from fastapi import APIRouter, File, Query, Response, UploadFile

from smartppt.controllers import export_controller
from smartppt.core.deck_renderer import RenderFormat
from smartppt.schemas.deck_content import DeckContent
from smartppt.schemas.generation import ErrorResponse, SampleStats

router = APIRouter(tags=["export"], responses={400: {"model": ErrorResponse}})


@router.post("/analyze-sample", response_model=SampleStats, response_model_exclude_none=True)
async def analyze_sample(file: UploadFile = File(...)):
    """Extract slide count and bullet statistics from an uploaded ``.pptx``."""
    return await export_controller.analyze_upload(file)


@router.post("/render", response_class=Response)
async def render_deck(
    deck: DeckContent,
    fmt: RenderFormat = Query("pptx", alias="format", description="Output file format"),
):
    """Render a deck to a downloadable PPTX or PDF file."""
    return await export_controller.render(deck, fmt)
