# student_records/services/file_services.py
from datetime import datetime, timezone
from pathlib import PurePath
from typing import List, Optional
import logging
import random

from sqlalchemy.exc import SQLAlchemyError

from .. import errors
from ..database.models.student_file import StudentFile
from ..database.repositories import StudentFileRepository, StudentRepository
from .storage import BlobStorage, StorageError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def generate_stored_filename(original_name: str, now: Optional[datetime] = None) -> str:
    """Collision-resistant stored name: <epoch millis>-<random suffix><original extension>"""
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    suffix = random.randint(0, 10 ** 9)
    ext = PurePath(original_name or "").suffix
    return f"{millis}-{suffix}{ext}"


def build_storage_path(student_id: int, filename: str) -> str:
    """Blobs are namespaced per student"""
    return f"documents/{student_id}/{filename}"


class FileService:
    """Upload, listing, download links and deletion of a student's documents"""

    def __init__(
        self,
        students: StudentRepository,
        files: StudentFileRepository,
        storage: BlobStorage,
        signed_url_expires: int = 3600
    ):
        self.students = students
        self.files = files
        self.storage = storage
        self.signed_url_expires = signed_url_expires

    def list_files(self, student_id: int) -> List[StudentFile]:
        try:
            return self.files.list_for_student(student_id)
        except SQLAlchemyError:
            logger.exception(f"Error fetching files for student {student_id}")
            raise errors.ServiceError(errors.LIST_FILES_FAILED)

    def upload_file(
        self,
        student_id: int,
        original_name: str,
        data: bytes,
        mime_type: Optional[str] = None
    ) -> StudentFile:
        """
        Store a document for a student
        The blob is written first, then the record is inserted.
        A blob written before a failed insert is not removed.
        """
        if not original_name or not data:
            raise errors.ValidationError(errors.NO_FILE_SENT)

        try:
            student = self.students.get(student_id)
        except SQLAlchemyError:
            logger.exception(f"Error looking up student {student_id} for upload")
            raise errors.ServiceError(errors.UPLOAD_FAILED)
        if not student:
            raise errors.NotFoundError(errors.STUDENT_NOT_FOUND)

        mime_type = mime_type or DEFAULT_MIME_TYPE
        filename = generate_stored_filename(original_name)
        storage_path = build_storage_path(student_id, filename)

        # 1. Upload to blob storage
        try:
            self.storage.upload(storage_path, data, mime_type)
        except StorageError as e:
            logger.error(f"Error uploading file for student {student_id}: {e}")
            raise errors.ServiceError(errors.UPLOAD_FAILED)

        # 2. Save metadata to database
        try:
            record = self.files.create(
                student_id=student_id,
                filename=filename,
                original_name=original_name,
                mime_type=mime_type,
                storage_path=storage_path
            )
        except SQLAlchemyError:
            logger.exception(f"Error saving file record, blob left at {storage_path}")
            raise errors.ServiceError(errors.UPLOAD_FAILED)

        logger.info(f"File {record.id} uploaded for student {student_id} ({len(data)} bytes)")
        return record

    def get_download_url(self, file_id: int) -> str:
        try:
            record = self.files.get(file_id)
        except SQLAlchemyError:
            logger.exception(f"Error looking up file {file_id}")
            raise errors.NotFoundError(errors.FILE_NOT_FOUND)
        if not record:
            raise errors.NotFoundError(errors.FILE_NOT_FOUND)

        try:
            return self.storage.create_signed_url(record.storage_path, self.signed_url_expires)
        except StorageError as e:
            logger.error(f"Error getting file URL for {file_id}: {e}")
            raise errors.NotFoundError(errors.FILE_NOT_FOUND)

    def delete_file(self, file_id: int) -> None:
        try:
            record = self.files.get(file_id)
        except SQLAlchemyError:
            logger.exception(f"Error looking up file {file_id}")
            raise errors.ServiceError(errors.DELETE_FILE_FAILED)
        if not record:
            raise errors.NotFoundError(errors.FILE_NOT_FOUND)

        try:
            self.storage.remove([record.storage_path])
        except StorageError as e:
            logger.error(f"Error deleting file {file_id} from storage: {e}")
            raise errors.ServiceError(errors.DELETE_FILE_FAILED)

        try:
            self.files.delete(file_id)
        except SQLAlchemyError:
            logger.exception(f"Error deleting file record {file_id}")
            raise errors.ServiceError(errors.DELETE_FILE_FAILED)

        logger.info(f"File {file_id} deleted")
