"""
Health check endpoints
"""

import shutil

from fastapi import APIRouter, Depends

from mediadrop.api.deps import get_settings, get_storage
from mediadrop.core.config import Settings
from mediadrop.services.storage import ObjectStorage

router = APIRouter()

@router.get("/")
async def health_check():
    return {"status": "healthy"}

@router.get("/detailed")
async def detailed_health(
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    storage_ok = storage.is_configured
    ffmpeg_ok = shutil.which(settings.ffmpeg_path) is not None
    return {
        "status": "healthy" if storage_ok and ffmpeg_ok else "degraded",
        "storage": "configured" if storage_ok else "unconfigured",
        "transcoder": "available" if ffmpeg_ok else "missing",
    }
