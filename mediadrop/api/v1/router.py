from fastapi import APIRouter

from mediadrop.api.v1.endpoints import files, health, upload

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])

# Single upload entry point used by the drop zone
api_router.include_router(upload.router, tags=["upload"])

# Stored object management (list, delete, share links)
api_router.include_router(files.router, prefix="/files", tags=["files"])
