"""Structure statistics of an uploaded sample deck, used for "match this sample" prompts."""

import io
import logging
import zipfile

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE, PP_PLACEHOLDER
from pptx.exc import PackageNotFoundError

from smartppt.core.exceptions import SampleAnalysisError
from smartppt.schemas.generation import SampleStats

logger = logging.getLogger(__name__)

# Placeholders that never hold bullet content.
_NON_BODY_PLACEHOLDERS = {
    PP_PLACEHOLDER.TITLE,
    PP_PLACEHOLDER.CENTER_TITLE,
    PP_PLACEHOLDER.SUBTITLE,
    PP_PLACEHOLDER.DATE,
    PP_PLACEHOLDER.FOOTER,
    PP_PLACEHOLDER.SLIDE_NUMBER,
}

_CLOSING_WORDS = ("conclusion", "summary", "thank", "question", "wrap", "takeaway")


def _is_body_text(shape) -> bool:
    if not shape.has_text_frame:
        return False
    if shape.is_placeholder and shape.placeholder_format.type in _NON_BODY_PLACEHOLDERS:
        return False
    return True


def _slide_bullets(slide) -> list[str]:
    bullets: list[str] = []
    for shape in slide.shapes:
        if not _is_body_text(shape):
            continue
        for paragraph in shape.text_frame.paragraphs:
            text = "".join(run.text for run in paragraph.runs).strip()
            if text:
                bullets.append(text)
    return bullets


def _slide_title(slide) -> str:
    title = slide.shapes.title
    return title.text_frame.text.strip() if title is not None and title.has_text_frame else ""


def _has_picture(slide) -> bool:
    return any(shape.shape_type == MSO_SHAPE_TYPE.PICTURE for shape in slide.shapes)


def _structure(bullet_counts: list[int], last_title: str) -> str:
    parts = []
    if bullet_counts[0] == 0:
        parts.append("title")
    parts.append("content")
    if any(word in last_title.lower() for word in _CLOSING_WORDS):
        parts.append("conclusion")
    return "-".join(parts)


def analyze_sample(data: bytes) -> SampleStats:
    """Compute slide count, average bullets per slide and average bullet length.

    Averages are taken over slides that carry at least one bullet, so a
    title slide does not drag the bullets-per-slide figure down.  Both
    averages are rounded to whole numbers.
    """
    try:
        prs = Presentation(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        logger.warning("Unreadable sample deck: %s", exc)
        raise SampleAnalysisError("Failed to analyze sample file") from exc

    slides = list(prs.slides)
    if not slides:
        raise SampleAnalysisError("Sample presentation has no slides")

    per_slide = [_slide_bullets(slide) for slide in slides]
    bullet_counts = [len(bullets) for bullets in per_slide]
    all_bullets = [bullet for bullets in per_slide for bullet in bullets]
    content_slides = sum(1 for count in bullet_counts if count)

    avg_bullets = round(len(all_bullets) / content_slides) if content_slides else 0
    avg_length = (
        round(sum(len(bullet.split()) for bullet in all_bullets) / len(all_bullets))
        if all_bullets
        else 0
    )

    stats = SampleStats(
        slide_count=len(slides),
        average_bullets_per_slide=avg_bullets,
        average_bullet_length=avg_length,
        has_images=any(_has_picture(slide) for slide in slides),
        structure=_structure(bullet_counts, _slide_title(slides[-1])),
    )
    logger.info(
        "Analyzed sample: %d slides, %s bullets/slide, %s words/bullet",
        stats.slide_count,
        stats.average_bullets_per_slide,
        stats.average_bullet_length,
    )
    return stats
