"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import info, resources, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(resources.router, prefix="/resources", tags=["resources"])
router.include_router(info.router, prefix="/info", tags=["info"])
