"""
Deterministic PPTX / PDF renderer for deck content.

Takes a ``DeckContent`` instance and produces a downloadable file:
- a title slide (deck title + "Generated with Smart PPT")
- one title-and-content slide per ``Slide``, bullets in the body
- the slide image on the right when ``image_url`` is a base64 ``data:`` URL

Remote image URLs are not fetched; those slides render text-only.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from typing import Literal
from xml.sax.saxutils import escape

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.util import Inches, Pt
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image,
    ListFlowable,
    ListItem,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
)

from smartppt.schemas.deck_content import DeckContent

logger = logging.getLogger(__name__)

RenderFormat = Literal["pptx", "pdf"]

MEDIA_TYPES: dict[str, str] = {
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "pdf": "application/pdf",
}

AUTHOR = "Smart PPT Generator"
SUBTITLE = "Generated with Smart PPT"

_TITLE_COLOR = "1E3A5F"
_SUBTITLE_COLOR = "666666"
_BODY_COLOR = "333333"

_DATA_URL_RE = re.compile(r"^data:image/[\w.+-]+;base64,(?P<payload>.+)$", re.DOTALL)


def download_filename(title: str, extension: str) -> str:
    """``"Intro to AI!"`` → ``"Intro_to_AI_.pptx"``."""
    return f"{re.sub(r'[^a-z0-9]', '_', title, flags=re.IGNORECASE)}.{extension}"


def decode_data_url(url: str | None) -> bytes | None:
    """Return the image bytes of a base64 ``data:image/...`` URL, else ``None``."""
    if not url:
        return None
    match = _DATA_URL_RE.match(url.strip())
    if not match:
        return None
    try:
        return base64.b64decode(match.group("payload"), validate=False)
    except (binascii.Error, ValueError) as exc:
        logger.warning("Ignoring undecodable slide image: %s", exc)
        return None


# ---------------------------------------------------------------------------
# PPTX
# ---------------------------------------------------------------------------

def _style_paragraph(paragraph, size: int, color: str, bold: bool = False) -> None:
    paragraph.font.size = Pt(size)
    paragraph.font.bold = bold
    paragraph.font.color.rgb = RGBColor.from_string(color)


def render_pptx(deck: DeckContent) -> bytes:
    prs = Presentation()
    prs.core_properties.title = deck.title
    prs.core_properties.author = AUTHOR

    title_layout = prs.slide_layouts[0]  # Title Slide
    content_layout = prs.slide_layouts[1]  # Title and Content

    cover = prs.slides.add_slide(title_layout)
    cover.shapes.title.text = deck.title
    _style_paragraph(cover.shapes.title.text_frame.paragraphs[0], 44, _TITLE_COLOR, bold=True)
    subtitle = cover.placeholders[1]
    subtitle.text = SUBTITLE
    _style_paragraph(subtitle.text_frame.paragraphs[0], 18, _SUBTITLE_COLOR)

    for slide in deck.slides:
        page = prs.slides.add_slide(content_layout)
        page.shapes.title.text = slide.title
        _style_paragraph(page.shapes.title.text_frame.paragraphs[0], 32, _TITLE_COLOR, bold=True)

        body = page.placeholders[1]
        image_bytes = decode_data_url(slide.image_url)
        if image_bytes:
            body.width = Inches(5.0)
            page.shapes.add_picture(io.BytesIO(image_bytes), Inches(5.6), Inches(1.9), width=Inches(4.0))

        text_frame = body.text_frame
        text_frame.clear()
        text_frame.word_wrap = True
        for i, bullet in enumerate(slide.bullets):
            paragraph = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
            paragraph.text = bullet
            paragraph.level = 0
            _style_paragraph(paragraph, 18, _BODY_COLOR)

    buffer = io.BytesIO()
    prs.save(buffer)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------

def _pdf_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="DeckTitle", parent=styles["Title"], fontSize=40, leading=48,
        textColor=colors.HexColor(f"#{_TITLE_COLOR}"), alignment=TA_CENTER,
    ))
    styles.add(ParagraphStyle(
        name="DeckSubtitle", parent=styles["Normal"], fontSize=18, leading=22,
        textColor=colors.HexColor(f"#{_SUBTITLE_COLOR}"), alignment=TA_CENTER,
    ))
    styles.add(ParagraphStyle(
        name="SlideTitle", parent=styles["Heading1"], fontSize=28, leading=34,
        textColor=colors.HexColor(f"#{_TITLE_COLOR}"), spaceAfter=18,
    ))
    styles.add(ParagraphStyle(
        name="SlideBullet", parent=styles["Normal"], fontSize=16, leading=22,
        textColor=colors.HexColor(f"#{_BODY_COLOR}"),
    ))
    return styles


def render_pdf(deck: DeckContent) -> bytes:
    buffer = io.BytesIO()
    pagesize = landscape(A4)
    doc = SimpleDocTemplate(
        buffer,
        pagesize=pagesize,
        rightMargin=54,
        leftMargin=54,
        topMargin=54,
        bottomMargin=54,
        title=deck.title,
        author=AUTHOR,
    )
    styles = _pdf_styles()

    story = [
        Spacer(1, pagesize[1] * 0.3),
        Paragraph(escape(deck.title), styles["DeckTitle"]),
        Spacer(1, 18),
        Paragraph(SUBTITLE, styles["DeckSubtitle"]),
    ]

    for slide in deck.slides:
        story.append(PageBreak())
        story.append(Paragraph(escape(slide.title), styles["SlideTitle"]))
        items = [ListItem(Paragraph(escape(bullet), styles["SlideBullet"])) for bullet in slide.bullets]
        if items:
            story.append(ListFlowable(items, bulletType="bullet", start="•"))
        image_bytes = decode_data_url(slide.image_url)
        if image_bytes:
            story.append(Spacer(1, 12))
            story.append(Image(io.BytesIO(image_bytes), width=5 * inch, height=2.8 * inch, kind="proportional"))

    doc.build(story)
    return buffer.getvalue()


def render_deck(deck: DeckContent, fmt: RenderFormat) -> tuple[bytes, str, str]:
    """Return ``(file_bytes, media_type, filename)`` for *deck* in *fmt*."""
    data = render_pptx(deck) if fmt == "pptx" else render_pdf(deck)
    logger.info("Rendered %r as %s (%d bytes)", deck.title, fmt, len(data))
    return data, MEDIA_TYPES[fmt], download_filename(deck.title, fmt)
