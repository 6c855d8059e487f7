"""
Stored file endpoints used by the file list
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from mediadrop.api.deps import get_settings, get_storage
from mediadrop.api.errors import error_response
from mediadrop.core.config import Settings
from mediadrop.services.storage import ObjectStorage

router = APIRouter()

MAX_SIGNED_URL_TTL = 7 * 24 * 3600  # SigV4 upper bound


@router.get("")
async def list_files(storage: ObjectStorage = Depends(get_storage)):
    """List stored objects, newest first"""
    try:
        objects = await run_in_threadpool(storage.list_objects)
    except Exception as e:
        return error_response(e, "List")

    return {
        "files": [
            {
                "key": obj.key,
                "name": obj.name,
                "lastModified": obj.last_modified.isoformat(),
                "size": obj.size,
            }
            for obj in objects
        ],
        "total": len(objects),
    }


@router.get("/{key:path}/url")
async def get_file_url(
    key: str,
    expires_in: Optional[int] = Query(None, ge=1, le=MAX_SIGNED_URL_TTL),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Time-limited download link, plus the CDN link when one is configured"""
    ttl = expires_in or settings.signed_url_ttl_seconds
    try:
        url = await run_in_threadpool(storage.signed_url, key, ttl)
    except Exception as e:
        return error_response(e, "Signed URL")

    return {"url": url, "expiresIn": ttl, "publicUrl": storage.public_url(key)}


@router.delete("/{key:path}")
async def delete_file(key: str, storage: ObjectStorage = Depends(get_storage)):
    try:
        await run_in_threadpool(storage.delete, key)
    except Exception as e:
        return error_response(e, "Delete")

    return {"success": True}
