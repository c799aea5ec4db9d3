from .student import Student
from .student_file import StudentFile

__all__ = ["Student", "StudentFile"]
