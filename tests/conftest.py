"""
Pytest configuration for mediadrop tests
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import pytest

from mediadrop.core.errors import ProcessingFailedError, StorageOperationError
from mediadrop.services.storage import ObjectStorage, StoredObject, make_object_key
from mediadrop.services.transcoder import Transcoder

TRANSCODED_PREFIX = b"transcoded:"
LISTED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


class RecordingStorage(ObjectStorage):
    """In-memory storage that remembers every store call"""

    def __init__(self, fail_with: Optional[Exception] = None, cdn_domain: Optional[str] = None):
        self.fail_with = fail_with
        self.cdn_domain = cdn_domain
        self.stored = []  # (key, data, name, content_type)
        self.deleted = []

    def store(self, data: bytes, name: str, content_type: str) -> str:
        if self.fail_with:
            raise self.fail_with
        key = make_object_key(name)
        self.stored.append((key, data, name, content_type))
        return key

    def delete(self, key: str) -> None:
        if self.fail_with:
            raise self.fail_with
        self.deleted.append(key)

    def list_objects(self) -> List[StoredObject]:
        if self.fail_with:
            raise self.fail_with
        return [StoredObject(key=key, name=name, last_modified=LISTED_AT, size=len(data))
                for key, data, name, _ in self.stored]

    def signed_url(self, key: str, ttl_seconds: int = 3600) -> str:
        if self.fail_with:
            raise self.fail_with
        return f"https://signed.example/{key}?expires={ttl_seconds}"

    def public_url(self, key: str) -> Optional[str]:
        return f"https://{self.cdn_domain}/{key}" if self.cdn_domain else None


class PrefixingTranscoder(Transcoder):
    """Writes TRANSCODED_PREFIX + input bytes to the output path"""

    def __init__(self):
        self.calls = []

    async def transcode(self, input_path: str, output_path: str) -> None:
        self.calls.append((input_path, output_path))
        data = Path(input_path).read_bytes()
        Path(output_path).write_bytes(TRANSCODED_PREFIX + data)


class FailingTranscoder(Transcoder):
    """Always reports a failed run"""

    def __init__(self):
        self.calls = []

    async def transcode(self, input_path: str, output_path: str) -> None:
        self.calls.append((input_path, output_path))
        raise ProcessingFailedError("ffmpeg exited with 1")


@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs"""
    with tempfile.TemporaryDirectory() as tmpdirname:
        yield Path(tmpdirname)

@pytest.fixture
def storage():
    return RecordingStorage()

@pytest.fixture
def broken_storage():
    return RecordingStorage(fail_with=StorageOperationError("put_object failed"))

@pytest.fixture
def transcoder():
    return PrefixingTranscoder()

@pytest.fixture
def failing_transcoder():
    return FailingTranscoder()

@pytest.fixture
def transcoded_prefix():
    return TRANSCODED_PREFIX
