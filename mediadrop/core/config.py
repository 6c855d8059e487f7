"""
Core configuration settings
"""

import tempfile
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=Path(__file__).parents[2] / ".env",
        extra="ignore",
    )

    # Basic settings
    app_name: str = "mediadrop"
    debug: bool = False
    log_level: str = "INFO"

    # Storage (all four required, otherwise storage stays unconfigured)
    aws_region: str = ""
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_bucket_name: str = ""
    aws_endpoint_url: Optional[str] = None  # R2, MinIO
    cdn_domain: Optional[str] = None
    object_key_prefix: str = ""
    signed_url_ttl_seconds: int = 3600

    # Processing
    ffmpeg_path: str = "ffmpeg"
    tmp_dir: str = tempfile.gettempdir()
    max_upload_bytes: int = 200 * 1024 * 1024


settings = Settings()
