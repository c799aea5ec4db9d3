# student_records/services/storage/s3.py
from typing import List, Optional
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import BlobStorage, StorageError

logger = logging.getLogger(__name__)


class S3BlobStorage(BlobStorage):
    """Blob backend for any S3-compatible bucket (Supabase Storage, MinIO, AWS)"""

    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str] = None,
        region_name: str = "us-east-1",
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        client=None
    ):
        self.bucket = bucket
        self.client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region_name,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
        )

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        try:
            # conditional write: S3 answers 412 PreconditionFailed when the key exists
            self.client.put_object(
                Bucket=self.bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
                IfNoneMatch="*"
            )
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("412", "PreconditionFailed"):
                raise StorageError(f"Blob already exists: {path}") from e
            raise StorageError(f"Error uploading blob {path}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Error uploading blob {path}: {e}") from e

    def remove(self, paths: List[str]) -> None:
        if not paths:
            return
        try:
            response = self.client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": p} for p in paths], "Quiet": True}
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Error removing blobs: {e}") from e

        errors = response.get("Errors") or []
        if errors:
            for err in errors:
                logger.error(f"Error removing blob {err.get('Key')}: {err.get('Message')}")
            raise StorageError(f"Could not remove {len(errors)} blob(s)")

    def create_signed_url(self, path: str, expires_in: int) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": path},
                ExpiresIn=expires_in
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Error signing URL for {path}: {e}") from e
