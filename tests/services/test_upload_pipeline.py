"""
Tests for the upload pipeline: passthrough, transcoding and temp cleanup
"""

import logging
from unittest.mock import patch

import pytest

from mediadrop.core.errors import (
    MissingInputError,
    ProcessingFailedError,
    StorageOperationError,
    StorageUnconfiguredError,
)
from mediadrop.services.storage import S3Storage, StorageConfig
from mediadrop.services.transcoder import Transcoder
from mediadrop.services.upload_pipeline import UploadPipeline, UploadRequest, transcoded_name

VIDEO_BYTES = b"\x00\x00\x00\x14ftypqt  fake quicktime payload"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake png payload"


def clip_request(should_process: bool = True) -> UploadRequest:
    return UploadRequest(
        file_bytes=VIDEO_BYTES,
        file_name="clip.mov",
        mime_type="video/quicktime",
        should_process=should_process,
    )


class TestUploadRequest:

    def test_only_video_is_transcoded(self):
        assert clip_request(True).should_transcode
        assert not clip_request(False).should_transcode
        photo = UploadRequest(PNG_BYTES, "photo.png", "image/png", should_process=True)
        assert not photo.should_transcode

    def test_request_is_immutable(self):
        request = clip_request()
        with pytest.raises(AttributeError):
            request.file_name = "other.mov"

    def test_transcoded_name(self):
        assert transcoded_name("clip.mov", ".mp4") == "clip.mp4"
        assert transcoded_name("dir/holiday.MOV", ".mp4") == "holiday.mp4"
        assert transcoded_name("noext", ".mp4") == "noext.mp4"


class TestUploadPipeline:

    @pytest.fixture
    def pipeline(self, storage, transcoder, temp_dir):
        return UploadPipeline(storage, transcoder, tmp_root=str(temp_dir))

    @pytest.mark.asyncio
    async def test_non_video_passes_through_even_when_processing_requested(self, pipeline, storage, transcoder):
        request = UploadRequest(PNG_BYTES, "photo.png", "image/png", should_process=True)

        key = await pipeline.process(request)

        assert len(storage.stored) == 1
        stored_key, data, name, content_type = storage.stored[0]
        assert stored_key == key
        assert data == PNG_BYTES
        assert name == "photo.png"
        assert content_type == "image/png"
        assert transcoder.calls == []

    @pytest.mark.asyncio
    async def test_video_without_processing_is_stored_unchanged(self, pipeline, storage, transcoder):
        await pipeline.process(clip_request(should_process=False))

        _, data, name, content_type = storage.stored[0]
        assert data == VIDEO_BYTES
        assert name == "clip.mov"
        assert content_type == "video/quicktime"
        assert transcoder.calls == []

    @pytest.mark.asyncio
    async def test_video_with_processing_stores_transcoder_output(self, pipeline, storage, transcoded_prefix):
        key = await pipeline.process(clip_request())

        _, data, name, content_type = storage.stored[0]
        assert data == transcoded_prefix + VIDEO_BYTES
        assert data != VIDEO_BYTES
        assert name == "clip.mp4"
        assert content_type == "video/mp4"
        assert key != "clip.mov"
        assert key.endswith("-clip.mp4")

    @pytest.mark.asyncio
    async def test_transcoder_failure_never_reaches_storage(self, storage, failing_transcoder, temp_dir):
        pipeline = UploadPipeline(storage, failing_transcoder, tmp_root=str(temp_dir))

        with pytest.raises(ProcessingFailedError):
            await pipeline.process(clip_request())

        assert storage.stored == []
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_missing_output_is_a_processing_failure(self, storage, temp_dir):
        class NoOutputTranscoder(Transcoder):
            async def transcode(self, input_path, output_path):
                return None

        pipeline = UploadPipeline(storage, NoOutputTranscoder(), tmp_root=str(temp_dir))

        with pytest.raises(ProcessingFailedError):
            await pipeline.process(clip_request())
        assert storage.stored == []

    @pytest.mark.asyncio
    async def test_temp_data_removed_after_success(self, pipeline, transcoder, temp_dir):
        await pipeline.process(clip_request())

        input_path, output_path = transcoder.calls[0]
        assert input_path.startswith(str(temp_dir))
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_temp_data_removed_after_storage_failure(self, broken_storage, transcoder, temp_dir):
        pipeline = UploadPipeline(broken_storage, transcoder, tmp_root=str(temp_dir))

        with pytest.raises(StorageOperationError):
            await pipeline.process(clip_request())

        assert len(transcoder.calls) == 1
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_repeated_uploads_get_distinct_keys(self, pipeline, storage, transcoder, temp_dir):
        first = await pipeline.process(clip_request())
        first_work_dir = transcoder.calls[0][0].rsplit("/", 1)[0]
        assert list(temp_dir.iterdir()) == []

        second = await pipeline.process(clip_request())
        second_work_dir = transcoder.calls[1][0].rsplit("/", 1)[0]

        assert first != second
        assert first_work_dir != second_work_dir
        assert len(storage.stored) == 2

    @pytest.mark.asyncio
    async def test_cleanup_failure_does_not_mask_original_error(self, storage, failing_transcoder, temp_dir, caplog):
        pipeline = UploadPipeline(storage, failing_transcoder, tmp_root=str(temp_dir))

        with patch("mediadrop.services.upload_pipeline.shutil.rmtree", side_effect=OSError("busy")), \
                caplog.at_level(logging.WARNING, logger="mediadrop.services.upload_pipeline"):
            with pytest.raises(ProcessingFailedError):
                await pipeline.process(clip_request())

        assert "Could not clean up temp directory" in caplog.text

    @pytest.mark.asyncio
    async def test_empty_file_is_missing_input(self, pipeline, storage):
        with pytest.raises(MissingInputError):
            await pipeline.process(UploadRequest(b"", "photo.png", "image/png"))
        assert storage.stored == []

    @pytest.mark.asyncio
    async def test_empty_name_is_missing_input(self, pipeline):
        with pytest.raises(MissingInputError):
            await pipeline.process(UploadRequest(PNG_BYTES, "", "image/png"))

    @pytest.mark.asyncio
    async def test_unconfigured_storage_fails_fast(self, transcoder, temp_dir):
        storage = S3Storage(StorageConfig(region="", access_key="", secret_key="", bucket=""))
        pipeline = UploadPipeline(storage, transcoder, tmp_root=str(temp_dir))

        with pytest.raises(StorageUnconfiguredError):
            await pipeline.process(UploadRequest(PNG_BYTES, "photo.png", "image/png"))
