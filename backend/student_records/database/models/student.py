# student_records/database/models/student.py
from sqlalchemy import Column, Integer, String, Date
from sqlalchemy.orm import relationship
from ..base import Base

class Student(Base):
    __tablename__ = "students"
    
    id = Column(Integer, primary_key=True, index=True)
    student_code = Column(String, unique=True, nullable=False, index=True)
    full_name = Column(String, nullable=False)
    birth_date = Column(Date, nullable=False)
    
    # Relationships (file rows are removed explicitly before the student, see StudentService.delete)
    files = relationship("StudentFile", back_populates="student", passive_deletes=True)
