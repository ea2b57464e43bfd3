"""
Define functions/aliases for dependency injection
"""
from collections.abc import Generator
from typing import Annotated, TypeAlias
from sqlmodel import Session
from fastapi import Depends, Request

from api.files.services import FileStorageService
from core.db import get_engine


# Define db dependency
def get_db() -> Generator[Session, None, None]:
    with Session(get_engine()) as session:
        yield session


def get_storage_service(request: Request) -> FileStorageService:
    """Return the storage service built during application startup"""
    service = getattr(request.app.state, "storage_service", None)
    if service is None:
        raise RuntimeError("File storage service is not available.")
    return service


SessionDep: TypeAlias = Annotated[Session, Depends(get_db)]
StorageServiceDep: TypeAlias = Annotated[FileStorageService, Depends(get_storage_service)]
