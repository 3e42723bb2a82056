"""
Router aggregating all route modules.
"""

from fastapi import APIRouter

from notesapp.api.routes import health, notes, pages, users

router = APIRouter()

# Include all route modules
router.include_router(pages.router, tags=["Pages"])
router.include_router(notes.router, prefix="/notes", tags=["Notes"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(health.router, prefix="/health", tags=["Health"])
