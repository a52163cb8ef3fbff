from enum import Enum
from typing import Literal

from pydantic import Field

from smartppt.schemas.deck_content import DeckContent, Slide, WireModel


class AudienceType(str, Enum):
    student = "student"
    teacher = "teacher"
    professional = "professional"
    general = "general"


class SampleStats(WireModel):
    # Interpolated into the prompt as-is, never sanity-checked.
    slide_count: int | float
    average_bullets_per_slide: int | float
    average_bullet_length: int | float
    has_images: bool = False
    structure: str | None = None


class GenerateContentRequest(WireModel):
    topic: str = Field(min_length=1)
    slide_count: int = Field(5, ge=3, le=15)
    # Free string: unknown audiences fall back to "general" in the prompt builder.
    audience_type: str = AudienceType.general.value
    mode: Literal["topic", "sample"] = "topic"
    sample_analysis: SampleStats | None = None


class GenerateContentResponse(WireModel):
    content: DeckContent


class SlideEditRequest(WireModel):
    current_slide: Slide
    edit_prompt: str
    presentation_topic: str = ""
    audience_type: str = AudienceType.general.value


class RegenerateSlideResponse(WireModel):
    slide: Slide


class SlideImageRequest(WireModel):
    slide_title: str = ""
    slide_bullets: list[str] = []
    presentation_topic: str | None = None


class SlideImageResponse(WireModel):
    success: bool
    image_url: str | None = None
    error: str | None = None


class DeckImagesRequest(WireModel):
    deck: DeckContent
    presentation_topic: str | None = None


class SlideImageOutcome(WireModel):
    index: int
    success: bool
    error: str | None = None


class DeckImagesResponse(WireModel):
    deck: DeckContent
    results: list[SlideImageOutcome]


class ErrorResponse(WireModel):
    error: str
