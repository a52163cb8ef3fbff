"""
Pydantic models for structured slide-deck content.

The content model returns free text; once a JSON object has been extracted
from it (``smartppt.core.extraction``) it is validated into a ``DeckContent``
or a single ``Slide`` here. The same models travel back to the client and
into the PPTX / PDF renderer in ``smartppt.core.deck_renderer``.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Accept camelCase from the browser client, snake_case from Python."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class Slide(WireModel):
    title: str
    bullets: list[str]
    image_url: str | None = None


class DeckContent(WireModel):
    title: str
    slides: list[Slide]
