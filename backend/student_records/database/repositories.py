# student_records/database/repositories.py
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session
from .models.student import Student
from .models.student_file import StudentFile


class StudentRepository:
    """Table access for the students table"""

    def __init__(self, db: Session):
        self.db = db

    def list_ordered(self) -> List[Student]:
        return self.db.query(Student).order_by(Student.full_name.asc()).all()

    def get(self, student_id: int) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id).first()

    def create(self, student_code: str, full_name: str, birth_date: date) -> Student:
        """Insert a student; raises IntegrityError when the code is taken"""
        student = Student(
            student_code=student_code,
            full_name=full_name,
            birth_date=birth_date
        )
        self.db.add(student)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(student)
        return student

    def update(self, student: Student, student_code: str, full_name: str, birth_date: date) -> Student:
        student.student_code = student_code
        student.full_name = full_name
        student.birth_date = birth_date
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(student)
        return student

    def delete(self, student_id: int) -> int:
        """Delete by id; returns the number of rows removed"""
        count = self.db.query(Student).filter(Student.id == student_id).delete()
        self.db.commit()
        return count


class StudentFileRepository:
    """Table access for the student_files table"""

    def __init__(self, db: Session):
        self.db = db

    def list_for_student(self, student_id: int) -> List[StudentFile]:
        return self.db.query(StudentFile).filter(
            StudentFile.student_id == student_id
        ).order_by(StudentFile.upload_date.desc(), StudentFile.id.desc()).all()

    def storage_paths_for_student(self, student_id: int) -> List[str]:
        rows = self.db.query(StudentFile.storage_path).filter(
            StudentFile.student_id == student_id
        ).all()
        return [row.storage_path for row in rows]

    def get(self, file_id: int) -> Optional[StudentFile]:
        return self.db.query(StudentFile).filter(StudentFile.id == file_id).first()

    def create(
        self,
        student_id: int,
        filename: str,
        original_name: str,
        mime_type: str,
        storage_path: str
    ) -> StudentFile:
        record = StudentFile(
            student_id=student_id,
            filename=filename,
            original_name=original_name,
            mime_type=mime_type,
            storage_path=storage_path
        )
        self.db.add(record)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(record)
        return record

    def delete(self, file_id: int) -> int:
        count = self.db.query(StudentFile).filter(StudentFile.id == file_id).delete()
        self.db.commit()
        return count

    def delete_for_student(self, student_id: int) -> int:
        count = self.db.query(StudentFile).filter(StudentFile.student_id == student_id).delete()
        self.db.commit()
        return count
