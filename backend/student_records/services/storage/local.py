# student_records/services/storage/local.py
from datetime import datetime, timezone
from pathlib import Path
from typing import List
from urllib.parse import quote
import logging

from itsdangerous import BadSignature, URLSafeTimedSerializer

from .base import BlobStorage, StorageError

logger = logging.getLogger(__name__)


class LocalBlobStorage(BlobStorage):
    """
    Development backend: blobs live under a local directory and
    signed URLs point at the app's own /storage route
    """

    def __init__(self, root: Path, secret_key: str, url_prefix: str = "/storage"):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")
        self.serializer = URLSafeTimedSerializer(secret_key, salt="student-records-storage")

    def resolve(self, path: str) -> Path:
        """Map a storage key to a file under root, rejecting keys that escape it"""
        root = self.root.resolve()
        target = (root / path).resolve()
        if target == root or root not in target.parents:
            raise StorageError(f"Invalid storage path: {path}")
        return target

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            # "x" mode: never overwrite an existing blob
            with target.open("xb") as f:
                f.write(data)
        except FileExistsError as e:
            raise StorageError(f"Blob already exists: {path}") from e
        except OSError as e:
            raise StorageError(f"Error writing blob {path}: {e}") from e

    def remove(self, paths: List[str]) -> None:
        failed = []
        for path in paths:
            try:
                self.resolve(path).unlink(missing_ok=True)
            except (OSError, StorageError) as e:
                logger.error(f"Error removing blob {path}: {e}")
                failed.append(path)
        if failed:
            raise StorageError(f"Could not remove {len(failed)} blob(s)")

    def create_signed_url(self, path: str, expires_in: int) -> str:
        if not self.resolve(path).is_file():
            raise StorageError(f"Blob not found: {path}")
        token = self.serializer.dumps({"path": path, "expires_in": expires_in})
        return f"{self.url_prefix}/{quote(path)}?token={token}"

    def open_signed(self, path: str, token: str) -> Path:
        """
        Validate a token issued by create_signed_url for this path
        Returns: the blob's file path
        Raises: PermissionError for bad/expired tokens, FileNotFoundError for missing blobs
        """
        try:
            payload, issued_at = self.serializer.loads(token, return_timestamp=True)
        except BadSignature as e:
            raise PermissionError("Invalid token") from e

        if payload.get("path") != path:
            raise PermissionError("Token does not match path")

        age = datetime.now(timezone.utc) - issued_at
        if age.total_seconds() > int(payload.get("expires_in", 0)):
            raise PermissionError("Token expired")

        try:
            target = self.resolve(path)
        except StorageError as e:
            raise FileNotFoundError(path) from e
        if not target.is_file():
            raise FileNotFoundError(path)
        return target
