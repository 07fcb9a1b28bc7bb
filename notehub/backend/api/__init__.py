"""
API Router.

Aggregates all endpoint routers mounted under /api.
"""

from fastapi import APIRouter

from notehub.backend.api.endpoints import admin, auth, notes, users

router = APIRouter()

# Auth endpoints
router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Notes endpoints
router.include_router(notes.router, prefix="/notes", tags=["notes"])

# User endpoints
router.include_router(users.router, prefix="/users", tags=["users"])

# Moderation endpoints
router.include_router(admin.router, prefix="/admin", tags=["admin"])
