from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class StoredObject:
    """One entry of a bucket listing"""
    key: str
    name: str
    last_modified: datetime
    size: int


class ObjectStorage(ABC):
    """Abstract object storage interface"""
    @abstractmethod
    def store(self, data: bytes, name: str, content_type: str) -> str:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def list_objects(self) -> List[StoredObject]:
        pass

    @abstractmethod
    def signed_url(self, key: str, ttl_seconds: int = 3600) -> str:
        pass

    def public_url(self, key: str) -> Optional[str]:
        return None

    @property
    def is_configured(self) -> bool:
        return True
