"""FastAPI API endpoints under /api.

Endpoint groups: health, folders (tree navigation, path resolution, cascade
delete, playlists), questions (CRUD, unfiled bucket), import (preview, commit,
upload, example documents). Records go out in their persisted camelCase shape.
"""

from fastapi import APIRouter

from .folders import router as folders_router
from .imports import router as imports_router
from .questions import router as questions_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(folders_router)
router.include_router(questions_router)
router.include_router(imports_router)
