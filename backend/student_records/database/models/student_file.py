# student_records/database/models/student_file.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class StudentFile(Base):
    __tablename__ = "student_files"
    
    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    filename = Column(String, nullable=False)  # generated stored name
    original_name = Column(String, nullable=False)  # name as uploaded
    mime_type = Column(String, nullable=False)
    storage_path = Column(String, nullable=False)  # key into blob storage
    upload_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    
    # Relationships
    student = relationship("Student", back_populates="files")
