"""API v1: aggregates all routers under a single prefix."""

from fastapi import APIRouter

from smartppt.api.v1.routers import export, generation

router = APIRouter()
router.include_router(generation.router)
router.include_router(export.router)
