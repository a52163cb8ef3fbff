"""
Shared FastAPI dependencies: single source of truth for DI.

All routers should import get_settings and get_model_invoker from HERE.
Tests swap either one through ``app.dependency_overrides``.
"""

from fastapi import Depends

from smartppt.core.config import Settings, settings
from smartppt.core.model_invoker import ModelInvoker

__all__ = ["get_settings", "get_model_invoker"]


def get_settings() -> Settings:
    """Return the process-wide settings loaded at startup."""
    return settings


def get_model_invoker(app_settings: Settings = Depends(get_settings)) -> ModelInvoker:
    """Build the model invoker; raises ``ConfigurationError`` without a credential."""
    return ModelInvoker(app_settings)
