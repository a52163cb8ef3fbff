"""
Prompt builders for the Smart PPT generation calls.

Builders
--------
- **build_deck_prompt**        – system + user instruction for a whole deck
- **build_slide_edit_prompt**  – system + user instruction to rewrite one slide
- **build_image_prompt**       – single user prompt for a slide illustration

Every builder is pure string construction.  The "ONLY valid JSON" demand in
the user instructions is a request to the model, not a guarantee, which is
why ``smartppt.core.extraction`` exists downstream.
"""

from smartppt.schemas.generation import (
    AudienceType,
    GenerateContentRequest,
    SampleStats,
    SlideEditRequest,
)


AUDIENCE_INSTRUCTIONS: dict[str, str] = {
    AudienceType.student.value: (
        "Use simple language, focus on key concepts and definitions that would appear in exams."
    ),
    AudienceType.teacher.value: (
        "Include comprehensive details, teaching points, and discussion topics."
    ),
    AudienceType.professional.value: (
        "Use industry terminology, focus on practical applications and insights."
    ),
    AudienceType.general.value: (
        "Keep content accessible and engaging for a broad audience."
    ),
}


def audience_instruction(audience_type: str | None) -> str:
    """Return the instruction line for *audience_type*, defaulting to ``general``."""
    return AUDIENCE_INSTRUCTIONS.get(
        audience_type or "", AUDIENCE_INSTRUCTIONS[AudienceType.general.value]
    )


# ---------------------------------------------------------------------------
# 1.  Whole deck
# ---------------------------------------------------------------------------

_DECK_SYSTEM_PROMPT = """\
You are an expert presentation creator. Generate a structured PowerPoint presentation.

Rules:
- Each slide should have a clear title and 3-5 bullet points
- Keep bullet points concise (under 15 words each)
- Focus on key information that's easy to remember
- Structure: Title slide info, then content slides, ending with a conclusion
- {audience}"""

_SAMPLE_STRUCTURE = """

Match this structure from the sample:
- {slide_count} slides
- {bullets} bullets per slide
- Bullet length around {bullet_length} words"""

_DECK_USER_PROMPT = """\
Create a {slide_count}-slide presentation about: "{topic}"

Return ONLY valid JSON in this exact format:
{{
  "title": "Presentation Title",
  "slides": [
    {{"title": "Slide Title", "bullets": ["Point 1", "Point 2", "Point 3"]}}
  ]
}}"""


def _sample_guidance(stats: SampleStats) -> str:
    return _SAMPLE_STRUCTURE.format(
        slide_count=stats.slide_count,
        bullets=stats.average_bullets_per_slide,
        bullet_length=stats.average_bullet_length,
    )


def build_deck_prompt(request: GenerateContentRequest) -> tuple[str, str]:
    """Render ``(system_instruction, user_instruction)`` for a new deck.

    Structure-matching guidance is appended only in ``sample`` mode and only
    when sample statistics were supplied.
    """
    system = _DECK_SYSTEM_PROMPT.format(audience=audience_instruction(request.audience_type))
    if request.mode == "sample" and request.sample_analysis is not None:
        system += _sample_guidance(request.sample_analysis)

    user = _DECK_USER_PROMPT.format(slide_count=request.slide_count, topic=request.topic)
    return system, user


# ---------------------------------------------------------------------------
# 2.  Single slide edit
# ---------------------------------------------------------------------------

_EDIT_SYSTEM_PROMPT = """\
You are an expert presentation creator. You need to regenerate a single slide based on user feedback.

Rules:
- Keep the slide title relevant to the content
- Generate 3-5 bullet points
- Keep bullet points concise (under 15 words each)
- {audience}
- Apply the user's requested changes while keeping the content relevant to the overall topic"""

_EDIT_USER_PROMPT = """\
The presentation is about: "{topic}"

Current slide content:
Title: {title}
Bullets:
{bullets}

User's requested changes: "{edit_prompt}"

Return ONLY valid JSON in this exact format:
{{
  "title": "New Slide Title",
  "bullets": ["Point 1", "Point 2", "Point 3", "Point 4"]
}}"""


def build_slide_edit_prompt(request: SlideEditRequest) -> tuple[str, str]:
    """Render ``(system_instruction, user_instruction)`` for rewriting one slide."""
    system = _EDIT_SYSTEM_PROMPT.format(audience=audience_instruction(request.audience_type))
    numbered = "\n".join(
        f"{i}. {bullet}" for i, bullet in enumerate(request.current_slide.bullets, start=1)
    )
    user = _EDIT_USER_PROMPT.format(
        topic=request.presentation_topic,
        title=request.current_slide.title,
        bullets=numbered,
        edit_prompt=request.edit_prompt,
    )
    return system, user


# ---------------------------------------------------------------------------
# 3.  Slide illustration
# ---------------------------------------------------------------------------

def build_image_prompt(
    slide_title: str,
    slide_bullets: list[str] | None = None,
    presentation_topic: str | None = None,
) -> str:
    """Describe an illustration for one slide; only the first two bullets are used."""
    key_points = ", ".join((slide_bullets or [])[:2]) or slide_title
    return (
        f'Educational illustration for a presentation slide about "{slide_title}". '
        f"Topic: {presentation_topic or slide_title}. "
        f"Key points: {key_points}. "
        "Style: clean, professional, minimalist, suitable for educational PowerPoint presentation. "
        "No text in image. High quality, 16:9 aspect ratio."
    )
