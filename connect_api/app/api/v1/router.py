"""
Top‑level router for version 1 of the API.

This router aggregates the endpoint routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import actions, health

router = APIRouter()

router.include_router(actions.router, prefix="/actions", tags=["actions"])
router.include_router(health.router, prefix="/health", tags=["health"])
