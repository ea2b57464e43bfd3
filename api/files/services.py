"""
Services for the Files API

FileStorageService keeps the uploaded bytes on local disk and their metadata
in the database. Files are written first and the record inserted second; on
delete the file goes first and the record second.
"""

import logging
import posixpath
import uuid
from pathlib import Path

from api.files.exceptions import NotFoundError, StorageError, ValidationError
from api.files.models import FileRecord
from api.files.repository import FileRecordRepository
from core.config import DEFAULT_MAX_FILE_SIZE, DEFAULT_ALLOWED_EXTENSIONS

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
MIB = 1024 * 1024


def get_file_extension(file_name: str | None) -> str:
    """Text after the last '.', lower-cased; empty when there is none"""
    if not file_name or "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[1].lower()


def _format_size(size: int) -> str:
    if size % MIB == 0:
        return f"{size // MIB}MB"
    return f"{size} bytes"


def clean_path(file_name: str) -> str:
    """
    Normalize a client supplied file name.

    Backslashes are treated as separators and redundant segments are
    collapsed. Leading '..' segments survive normalization, which is what
    lets the caller detect traversal attempts.
    """
    normalized = file_name.replace("\\", "/")
    if not normalized:
        return normalized
    return posixpath.normpath(normalized)


class FileStorageService:
    """
    Stores uploaded files under generated names and tracks them in the
    metadata repository.

    Built once at startup with the repository and upload directory, then
    shared across requests.
    """

    def __init__(
        self,
        repository: FileRecordRepository,
        storage_location: str | Path,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        allowed_extensions=None,
    ):
        self.repository = repository
        self.max_file_size = max_file_size
        if allowed_extensions is None:
            allowed_extensions = DEFAULT_ALLOWED_EXTENSIONS.split(",")
        self.allowed_extensions = frozenset(ext.lower() for ext in allowed_extensions)
        self.storage_location = Path(storage_location).resolve()

        try:
            self.storage_location.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                "Could not create the directory where the uploaded files will be stored."
            ) from exc

    def store(self, data: bytes, original_name: str | None, content_type: str | None) -> FileRecord:
        """
        Validate an upload, write it to disk and record its metadata.

        Raises:
            ValidationError: empty payload, payload over max_file_size, or an
                extension outside allowed_extensions
            StorageError: the name contains a path traversal sequence or the
                write to disk failed
        """
        file_name = clean_path(original_name or "")
        self._validate(data, file_name)

        extension = get_file_extension(file_name)
        storage_key = f"{uuid.uuid4()}.{extension}"
        target = self.storage_location / storage_key

        try:
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(
                f"Could not store file {file_name}. Please try again!"
            ) from exc

        record = FileRecord(
            file_name=file_name,
            file_type=content_type or DEFAULT_CONTENT_TYPE,
            file_size=len(data),
            storage_key=storage_key,
        )
        try:
            self.repository.insert(record)
        except Exception:
            self._rollback_upload(target)
            raise

        logger.info(
            "Stored file %s as %s (%d bytes)", file_name, storage_key, record.file_size
        )
        return record

    def load_by_storage_key(self, storage_key: str) -> Path:
        """
        Resolve a storage key to the stored file.

        Keys that resolve outside the upload directory are reported as
        missing.
        """
        file_path = (self.storage_location / storage_key).resolve()
        try:
            file_path.relative_to(self.storage_location)
        except ValueError as exc:
            logger.warning("Rejected storage key outside upload directory: %s", storage_key)
            raise NotFoundError(f"File not found {storage_key}") from exc

        if not file_path.is_file():
            raise NotFoundError(f"File not found {storage_key}")
        return file_path

    def list_all(self) -> list[FileRecord]:
        return self.repository.find_all_ordered_by_upload_date_desc()

    def get_by_id(self, record_id: int) -> FileRecord:
        record = self.repository.find_by_id(record_id)
        if record is None:
            raise NotFoundError(f"File not found with id {record_id}")
        return record

    def delete_by_id(self, record_id: int) -> None:
        """
        Delete the stored file, then its record.

        A file that is already gone is not an error. If the file cannot be
        removed the record is kept and StorageError is raised.
        """
        record = self.get_by_id(record_id)
        file_path = self.storage_location / record.storage_key

        try:
            file_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error(
                "Could not delete %s for file record %s: %s", file_path, record_id, exc
            )
            raise StorageError(f"Could not delete file {record.file_name}") from exc

        self.repository.delete(record)
        logger.info("Deleted file record %s (%s)", record_id, record.storage_key)

    def check_size(self, size: int) -> None:
        """Raise ValidationError when size is over max_file_size"""
        if size > self.max_file_size:
            raise ValidationError(
                f"File size exceeds maximum limit of {_format_size(self.max_file_size)}"
            )

    def _validate(self, data: bytes, file_name: str) -> None:
        if not data:
            raise ValidationError("Failed to store empty file")

        self.check_size(len(data))

        if ".." in file_name.split("/"):
            raise StorageError(
                f"Sorry! Filename contains invalid path sequence {file_name}"
            )

        if get_file_extension(file_name) not in self.allowed_extensions:
            allowed = ", ".join(ext.upper() for ext in sorted(self.allowed_extensions))
            raise ValidationError(
                f"Invalid file type. Only {allowed} files are allowed"
            )

    def _rollback_upload(self, file_path: Path) -> None:
        """
        Remove a file whose metadata insert failed.

        Best effort: a failure here leaves an orphaned file, which is logged
        and not raised so the insert error reaches the caller.
        """
        try:
            file_path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Failed to remove orphaned upload %s", file_path)
