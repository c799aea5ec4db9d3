# student_records/services/storage/base.py
from abc import ABC, abstractmethod
from typing import List


class StorageError(Exception):
    """Raised by blob backends when the remote call fails"""


class BlobStorage(ABC):
    """Blob store holding uploaded documents under path keys"""

    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Write a new blob; must fail if the path is already taken"""

    @abstractmethod
    def remove(self, paths: List[str]) -> None:
        """Remove blobs in one batch"""

    @abstractmethod
    def create_signed_url(self, path: str, expires_in: int) -> str:
        """Return a link granting read access to the blob for expires_in seconds"""
