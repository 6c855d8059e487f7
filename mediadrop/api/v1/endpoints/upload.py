"""
Upload endpoint: one file in, one stored object key out
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import UploadFile as StarletteUploadFile

from mediadrop.api.deps import get_pipeline, get_settings
from mediadrop.api.errors import error_response
from mediadrop.core.config import Settings
from mediadrop.core.errors import MissingInputError, UploadTooLargeError
from mediadrop.services.upload_pipeline import UploadPipeline, UploadRequest

logger = logging.getLogger(__name__)

router = APIRouter()


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    file_name: str = Field(alias="fileName")


def parse_process_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    # browsers send an empty file input as a plain string part
    file: Union[UploadFile, str, None] = File(None),
    process: Optional[str] = Form("false"),
    pipeline: UploadPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
):
    """
    Upload a file, optionally transcoding video to the web profile

    Returns:
        success flag and the stored object key as fileName
    """
    try:
        if not isinstance(file, StarletteUploadFile) or not file.filename:
            raise MissingInputError("no file field in form")

        if file.size is not None and file.size > settings.max_upload_bytes:
            raise UploadTooLargeError(f"{file.size} bytes")

        content = await file.read()

        if len(content) > settings.max_upload_bytes:
            raise UploadTooLargeError(f"{len(content)} bytes")

        request = UploadRequest(
            file_bytes=content,
            file_name=file.filename,
            mime_type=file.content_type or "application/octet-stream",
            should_process=parse_process_flag(process),
        )
        key = await pipeline.process(request)
    except Exception as e:
        return error_response(e, "Upload")

    logger.info("Upload of %s stored as %s", file.filename, key)
    return UploadResponse(file_name=key)
