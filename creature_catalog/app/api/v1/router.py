"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import creatures, seed

router = APIRouter()

router.include_router(creatures.router, prefix="/creatures", tags=["creatures"])
router.include_router(seed.router, prefix="/seed", tags=["seed"])
