"""
Request dependencies

Storage and pipeline are built once from the startup settings and shared by
every request; tests swap them through app.dependency_overrides.
"""

from functools import lru_cache

from mediadrop.core.config import Settings, settings
from mediadrop.services.builder import UploadPipelineBuilder
from mediadrop.services.storage import ObjectStorage
from mediadrop.services.upload_pipeline import UploadPipeline


def get_settings() -> Settings:
    return settings


@lru_cache
def get_storage() -> ObjectStorage:
    return UploadPipelineBuilder.build_storage(settings)


@lru_cache
def get_pipeline() -> UploadPipeline:
    return UploadPipelineBuilder.build(settings, storage=get_storage())
