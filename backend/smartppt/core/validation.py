"""Structural checks on objects recovered from model output."""

from typing import Any, TypeVar

import pydantic

from smartppt.core.exceptions import ShapeValidationError
from smartppt.schemas.deck_content import DeckContent, Slide

T = TypeVar("T", bound=pydantic.BaseModel)


def _issues(exc: pydantic.ValidationError) -> list[str]:
    issues: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        issues.append(f"{location}: {error['msg']}")
    return issues


def validate_shape(model_cls: type[T], data: dict[str, Any]) -> T:
    """Validate *data* into *model_cls* or raise ``ShapeValidationError``."""
    try:
        return model_cls.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ShapeValidationError(_issues(exc)) from exc


def validate_deck(data: dict[str, Any]) -> DeckContent:
    return validate_shape(DeckContent, data)


def validate_slide(data: dict[str, Any]) -> Slide:
    return validate_shape(Slide, data)
