# student_records/routers/files.py
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import FileResponse

from ..dependencies import get_file_service
from ..schemas import DownloadUrl
from ..services.file_services import FileService
from ..services.storage import BlobStorage, LocalBlobStorage, get_storage

router = APIRouter(prefix="/api/files", tags=["files"])
storage_router = APIRouter(tags=["storage"])


@router.get("/{file_id}", response_model=DownloadUrl)
def get_file_url(file_id: int, service: FileService = Depends(get_file_service)):
    """Short-lived signed link to the stored document"""
    return DownloadUrl(url=service.get_download_url(file_id))


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(file_id: int, service: FileService = Depends(get_file_service)):
    service.delete_file(file_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@storage_router.get("/storage/{path:path}")
def download_blob(path: str, token: str = Query(...), storage: BlobStorage = Depends(get_storage)):
    """Serves blobs of the local backend behind the links it signs"""
    if not isinstance(storage, LocalBlobStorage):
        raise HTTPException(status_code=404, detail="Not found")

    try:
        target = storage.open_signed(path, token)
    except PermissionError:
        raise HTTPException(status_code=403, detail="Link inválido ou expirado")
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Arquivo não encontrado")

    return FileResponse(target)
