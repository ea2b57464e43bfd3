"""
Models for the Files API
"""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field
from pydantic import ConfigDict


UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully"
DELETE_SUCCESS_MESSAGE = "File deleted successfully"


class FileRecord(SQLModel, table=True):
    """
    Metadata record for an uploaded file.

    The bytes live on disk at <upload dir>/<storage_key>; file_name is the
    client supplied name and is only used for display.
    """
    __tablename__ = "filerecord"

    id: int | None = Field(default=None, primary_key=True)
    file_name: str = Field(max_length=255, nullable=False)
    file_type: str = Field(max_length=100, nullable=False)
    file_size: int = Field(nullable=False)
    upload_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        nullable=False,
    )
    storage_key: str = Field(max_length=100, unique=True, nullable=False)


class FileRecordPublic(SQLModel):
    """
    Public file representation.

    Serialized with camelCase keys; file_url is the absolute download URL.
    """
    id: int
    file_name: str = Field(alias="fileName")
    file_type: str = Field(alias="fileType")
    file_size: int = Field(alias="fileSize")
    upload_date: datetime = Field(alias="uploadDate")
    file_url: str = Field(alias="fileUrl")

    model_config = ConfigDict(populate_by_name=True)


class FileUploadResponse(FileRecordPublic):
    """Response model for file upload"""
    message: str = UPLOAD_SUCCESS_MESSAGE
