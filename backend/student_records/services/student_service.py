# student_records/services/student_service.py
from datetime import date
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .. import errors
from ..database.models.student import Student
from ..database.repositories import StudentFileRepository, StudentRepository
from .storage import BlobStorage, StorageError

logger = logging.getLogger(__name__)


def clean_student_fields(student_code: Optional[str], full_name: Optional[str], birth_date: Optional[date]):
    """
    Strip and check the required student fields
    Returns: (student_code, full_name, birth_date)
    Raises: ValidationError if any field is missing or blank
    """
    student_code = (student_code or "").strip()
    full_name = (full_name or "").strip()
    if not student_code or not full_name or birth_date is None:
        raise errors.ValidationError(errors.MISSING_FIELDS)
    return student_code, full_name, birth_date


class StudentService:
    """Student CRUD and the delete cascade over file rows and blobs"""

    def __init__(self, students: StudentRepository, files: StudentFileRepository, storage: BlobStorage):
        self.students = students
        self.files = files
        self.storage = storage

    def list_students(self) -> List[Student]:
        try:
            return self.students.list_ordered()
        except SQLAlchemyError:
            logger.exception("Error fetching students")
            raise errors.ServiceError(errors.LIST_STUDENTS_FAILED)

    def create_student(self, student_code, full_name, birth_date) -> Student:
        student_code, full_name, birth_date = clean_student_fields(student_code, full_name, birth_date)
        try:
            student = self.students.create(student_code, full_name, birth_date)
        except IntegrityError:
            logger.info(f"Duplicate student code rejected: {student_code}")
            raise errors.ConflictError(errors.DUPLICATE_CODE)
        except SQLAlchemyError:
            logger.exception("Error adding student")
            raise errors.ServiceError(errors.CREATE_STUDENT_FAILED)

        logger.info(f"Student {student.id} created ({student.student_code})")
        return student

    def update_student(self, student_id: int, student_code, full_name, birth_date) -> Student:
        student_code, full_name, birth_date = clean_student_fields(student_code, full_name, birth_date)
        try:
            student = self.students.get(student_id)
            if not student:
                raise errors.NotFoundError(errors.STUDENT_NOT_FOUND)
            return self.students.update(student, student_code, full_name, birth_date)
        except IntegrityError:
            logger.info(f"Duplicate student code rejected on update of {student_id}: {student_code}")
            raise errors.ConflictError(errors.DUPLICATE_CODE)
        except SQLAlchemyError:
            logger.exception(f"Error updating student {student_id}")
            raise errors.ServiceError(errors.UPDATE_STUDENT_FAILED)

    def delete_student(self, student_id: int) -> None:
        """
        Delete a student together with everything it owns:
        1. fetch the storage paths of the student's files
        2. remove those blobs (best effort, failures are only logged)
        3. delete the file rows
        4. delete the student row
        File rows go before the student so no ON DELETE CASCADE is required in the database.
        """
        try:
            paths = self.files.storage_paths_for_student(student_id)

            if paths:
                try:
                    self.storage.remove(paths)
                except StorageError as e:
                    logger.error(f"Error deleting files from storage for student {student_id}: {e}")

            self.files.delete_for_student(student_id)
            deleted = self.students.delete(student_id)
        except SQLAlchemyError:
            logger.exception(f"Error deleting student {student_id}")
            raise errors.ServiceError(errors.DELETE_STUDENT_FAILED)

        if deleted:
            logger.info(f"Student {student_id} deleted with {len(paths)} file(s)")
