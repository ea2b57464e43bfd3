"""
Routes/endpoints for the Files API

HTTP   URI                                  Action
----   ---                                  ------
POST   /api/files/upload                    Upload a file (multipart field "file")
GET    /api/files/all                       List files, most recent first
GET    /api/files/[id]                      Retrieve metadata for a file
GET    /api/files/download/[storage_key]    Download the stored bytes
DELETE /api/files/[id]                      Delete a file and its metadata
"""

import mimetypes

from fastapi import APIRouter, File, Request, UploadFile, status
from fastapi.responses import FileResponse, PlainTextResponse

from api.files.models import (
    DELETE_SUCCESS_MESSAGE,
    FileRecord,
    FileRecordPublic,
    FileUploadResponse,
)
from core.deps import StorageServiceDep
from core.models import ErrorResponse

router = APIRouter(prefix="/files", tags=["File Endpoints"])


def _download_url(request: Request, storage_key: str) -> str:
    return str(request.url_for("download_file", storage_key=storage_key))


def _to_public(request: Request, record: FileRecord) -> FileRecordPublic:
    return FileRecordPublic(
        id=record.id,
        file_name=record.file_name,
        file_type=record.file_type,
        file_size=record.file_size,
        upload_date=record.upload_date,
        file_url=_download_url(request, record.storage_key),
    )


@router.post(
    "/upload",
    response_model=FileUploadResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["File Endpoints"],
)
def upload_file(
    request: Request,
    storage: StorageServiceDep,
    file: UploadFile = File(..., description="File to upload (PDF, MP4, JPG, JPEG or PNG)"),
) -> FileUploadResponse:
    """
    Upload a file.

    The file is stored under a generated name; the response carries its
    metadata and download URL.
    """
    # Reject oversized uploads before buffering them
    if file.size is not None:
        storage.check_size(file.size)
    content = file.file.read()
    record = storage.store(content, file.filename, file.content_type)
    public = _to_public(request, record)
    return FileUploadResponse(**public.model_dump())


@router.get(
    "/all",
    response_model=list[FileRecordPublic],
    tags=["File Endpoints"],
)
def get_all_files(request: Request, storage: StorageServiceDep) -> list[FileRecordPublic]:
    """
    Retrieve all files, most recently uploaded first.
    """
    return [_to_public(request, record) for record in storage.list_all()]


@router.get(
    "/download/{storage_key}",
    responses={404: {"model": ErrorResponse}},
    tags=["File Endpoints"],
)
def download_file(storage_key: str, storage: StorageServiceDep) -> FileResponse:
    """
    Download a stored file as an attachment.
    """
    file_path = storage.load_by_storage_key(storage_key)
    content_type, _ = mimetypes.guess_type(file_path.name)
    return FileResponse(
        file_path,
        media_type=content_type or "application/octet-stream",
        filename=file_path.name,
    )


@router.get(
    "/{file_id}",
    response_model=FileRecordPublic,
    responses={404: {"model": ErrorResponse}},
    tags=["File Endpoints"],
)
def get_file(file_id: int, request: Request, storage: StorageServiceDep) -> FileRecordPublic:
    """
    Retrieve metadata for a specific file.
    """
    return _to_public(request, storage.get_by_id(file_id))


@router.delete(
    "/{file_id}",
    response_class=PlainTextResponse,
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["File Endpoints"],
)
def delete_file(file_id: int, storage: StorageServiceDep) -> str:
    """
    Delete a file and its metadata record.
    """
    storage.delete_by_id(file_id)
    return DELETE_SUCCESS_MESSAGE
