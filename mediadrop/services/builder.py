from typing import Optional

from mediadrop.core.config import Settings
from mediadrop.services.storage.interfaces import ObjectStorage
from mediadrop.services.storage.s3_storage import S3Storage, StorageConfig
from mediadrop.services.transcoder import FFmpegTranscoder
from mediadrop.services.upload_pipeline import UploadPipeline


class UploadPipelineBuilder:
    """Constructs the pipeline and its collaborators from settings"""
    @staticmethod
    def storage_config(settings: Settings) -> StorageConfig:
        return StorageConfig(
            region=settings.aws_region,
            access_key=settings.aws_access_key_id,
            secret_key=settings.aws_secret_access_key,
            bucket=settings.aws_bucket_name,
            endpoint_url=settings.aws_endpoint_url,
            cdn_domain=settings.cdn_domain,
            key_prefix=settings.object_key_prefix,
        )

    @staticmethod
    def build_storage(settings: Settings) -> S3Storage:
        return S3Storage(UploadPipelineBuilder.storage_config(settings))

    @staticmethod
    def build(settings: Settings, storage: Optional[ObjectStorage] = None) -> UploadPipeline:
        if storage is None:
            storage = UploadPipelineBuilder.build_storage(settings)
        transcoder = FFmpegTranscoder(ffmpeg_path=settings.ffmpeg_path)
        return UploadPipeline(storage, transcoder, tmp_root=settings.tmp_dir)
