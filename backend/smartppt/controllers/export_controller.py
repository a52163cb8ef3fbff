from fastapi import Response, UploadFile
from fastapi.concurrency import run_in_threadpool

from smartppt.core.deck_renderer import RenderFormat, render_deck
from smartppt.core.exceptions import SampleAnalysisError
from smartppt.core.sample_analysis import analyze_sample
from smartppt.schemas.deck_content import DeckContent
from smartppt.schemas.generation import SampleStats


async def analyze_upload(upload: UploadFile) -> SampleStats:
    """Read an uploaded ``.pptx`` and return its structure statistics."""
    if not (upload.filename or "").lower().endswith(".pptx"):
        raise SampleAnalysisError("Please upload a .pptx file")
    data = await upload.read()
    return await run_in_threadpool(analyze_sample, data)


async def render(deck: DeckContent, fmt: RenderFormat) -> Response:
    """Render *deck* and return it as a file download."""
    data, media_type, filename = await run_in_threadpool(render_deck, deck, fmt)
    return Response(
        content=data,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
