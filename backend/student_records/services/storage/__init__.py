# student_records/services/storage/__init__.py
from functools import lru_cache

from ...config import settings
from .base import BlobStorage, StorageError
from .local import LocalBlobStorage
from .s3 import S3BlobStorage

__all__ = ["BlobStorage", "StorageError", "LocalBlobStorage", "S3BlobStorage", "get_storage"]


@lru_cache()
def get_storage() -> BlobStorage:
    """Dependency returning the configured blob backend (one per process)"""
    if settings.STORAGE_BACKEND == "s3":
        return S3BlobStorage(
            bucket=settings.STORAGE_BUCKET,
            endpoint_url=settings.S3_ENDPOINT_URL,
            region_name=settings.S3_REGION,
            aws_access_key_id=settings.S3_ACCESS_KEY_ID,
            aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
        )
    return LocalBlobStorage(
        root=settings.DOCUMENTS_DIR / settings.STORAGE_BUCKET,
        secret_key=settings.SECRET_KEY
    )
