# student_records/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from .config import settings
from .database.repositories import StudentFileRepository, StudentRepository
from .database.session import get_db
from .services.file_services import FileService
from .services.storage import BlobStorage, get_storage
from .services.student_service import StudentService


def get_student_service(
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_storage)
) -> StudentService:
    return StudentService(StudentRepository(db), StudentFileRepository(db), storage)


def get_file_service(
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_storage)
) -> FileService:
    return FileService(
        StudentRepository(db),
        StudentFileRepository(db),
        storage,
        signed_url_expires=settings.SIGNED_URL_EXPIRES_SECONDS
    )
