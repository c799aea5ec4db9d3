# student_records/routers/students.py
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from starlette.concurrency import run_in_threadpool

from .. import errors
from ..config import settings
from ..dependencies import get_file_service, get_student_service
from ..schemas import StudentFileOut, StudentIn, StudentOut
from ..services.file_services import FileService
from ..services.student_service import StudentService

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", response_model=List[StudentOut])
def list_students(service: StudentService = Depends(get_student_service)):
    """All students ordered by full name"""
    return service.list_students()


@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(body: StudentIn, service: StudentService = Depends(get_student_service)):
    return service.create_student(body.student_code, body.full_name, body.birth_date)


@router.put("/{student_id}", response_model=StudentOut)
def update_student(
    student_id: int,
    body: StudentIn,
    service: StudentService = Depends(get_student_service)
):
    return service.update_student(student_id, body.student_code, body.full_name, body.birth_date)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: int, service: StudentService = Depends(get_student_service)):
    """Deletes the student, its file records and (best effort) its blobs"""
    service.delete_student(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{student_id}/files", response_model=List[StudentFileOut])
def list_student_files(student_id: int, service: FileService = Depends(get_file_service)):
    """Files of a student, most recent first"""
    return service.list_files(student_id)


@router.post("/{student_id}/files", response_model=StudentFileOut, status_code=status.HTTP_201_CREATED)
async def upload_student_file(
    student_id: int,
    file: Optional[UploadFile] = File(None),
    service: FileService = Depends(get_file_service)
):
    data = await read_upload(file)
    # database and blob calls are blocking; keep them off the event loop
    return await run_in_threadpool(service.upload_file, student_id, file.filename, data, file.content_type)


async def read_upload(file: Optional[UploadFile]) -> bytes:
    """Read a multipart upload, enforcing presence and MAX_FILE_SIZE"""
    if file is None or not file.filename:
        raise errors.ValidationError(errors.NO_FILE_SENT)

    data = await file.read(settings.MAX_FILE_SIZE + 1)
    if len(data) > settings.MAX_FILE_SIZE:
        raise errors.ValidationError(errors.FILE_TOO_LARGE)
    return data
