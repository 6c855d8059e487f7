import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import aiofiles
from starlette.concurrency import run_in_threadpool

from mediadrop.core.errors import MissingInputError, ProcessingFailedError
from mediadrop.services.storage.interfaces import ObjectStorage
from mediadrop.services.transcoder import Transcoder

logger = logging.getLogger(__name__)


def transcoded_name(name: str, extension: str) -> str:
    """clip.mov -> clip.mp4"""
    stem = PurePosixPath(name.replace("\\", "/")).stem
    return f"{stem or 'upload'}{extension}"


@dataclass(frozen=True)
class UploadRequest:
    file_bytes: bytes
    file_name: str
    mime_type: str
    should_process: bool = False

    @property
    def is_video(self) -> bool:
        return self.mime_type.lower().startswith("video/")

    @property
    def should_transcode(self) -> bool:
        return self.should_process and self.is_video


class UploadPipeline:
    """Orchestrates transcode + store for one uploaded file"""

    def __init__(self,
                 storage: ObjectStorage,
                 transcoder: Transcoder,
                 tmp_root: str = tempfile.gettempdir()):
        self.storage = storage
        self.transcoder = transcoder
        self.tmp_root = tmp_root

    async def process(self, request: UploadRequest) -> str:
        """Main workflow execution; returns the stored object key"""
        if not request.file_bytes:
            raise MissingInputError("empty file")
        if not request.file_name:
            raise MissingInputError("missing file name")

        data = request.file_bytes
        name = request.file_name
        content_type = request.mime_type or "application/octet-stream"

        if request.should_transcode:
            data = await self._transcode(request)
            name = transcoded_name(name, self.transcoder.output_extension)
            content_type = self.transcoder.output_content_type

        # boto3 blocks, keep it off the event loop
        return await run_in_threadpool(self.storage.store, data, name, content_type)

    async def _transcode(self, request: UploadRequest) -> bytes:
        work_dir = Path(tempfile.mkdtemp(prefix="mediadrop_", dir=self.tmp_root))
        try:
            suffix = PurePosixPath(request.file_name).suffix
            input_path = work_dir / f"input{suffix}"
            output_path = work_dir / f"output{self.transcoder.output_extension}"

            async with aiofiles.open(input_path, "wb") as f:
                await f.write(request.file_bytes)

            await self.transcoder.transcode(str(input_path), str(output_path))

            try:
                async with aiofiles.open(output_path, "rb") as f:
                    return await f.read()
            except FileNotFoundError as e:
                raise ProcessingFailedError("transcoder produced no output") from e
        finally:
            self._cleanup(work_dir)

    @staticmethod
    def _cleanup(work_dir: Path) -> None:
        try:
            shutil.rmtree(work_dir)
        except OSError as cleanup_error:
            logger.warning("Could not clean up temp directory %s: %s", work_dir, cleanup_error)
