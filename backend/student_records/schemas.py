# student_records/schemas.py
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, field_validator


class StudentIn(BaseModel):
    """Body of POST /api/students and PUT /api/students/{id}; presence is checked by the service"""
    student_code: Optional[str] = None
    full_name: Optional[str] = None
    birth_date: Optional[date] = None

    @field_validator("student_code", "full_name", mode="before")
    @classmethod
    def coerce_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("birth_date", mode="before")
    @classmethod
    def blank_date_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class StudentOut(BaseModel):
    id: int
    student_code: str
    full_name: str
    birth_date: date

    class Config:
        from_attributes = True


class StudentFileOut(BaseModel):
    id: int
    student_id: int
    filename: str
    original_name: str
    mime_type: str
    storage_path: str
    upload_date: datetime

    class Config:
        from_attributes = True


class DownloadUrl(BaseModel):
    url: str
