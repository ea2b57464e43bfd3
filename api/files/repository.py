"""
Data access for file metadata records.

Each method runs in its own session and commits before returning, so every
operation is atomic on its own. The storage service never needs a
transaction spanning more than one call.
"""

from datetime import datetime, timezone
from sqlalchemy.engine import Engine
from sqlmodel import Session, select, col

from api.files.models import FileRecord


class FileRecordRepository:
    """
    Acts as the data access layer for the FileRecord model.
    All direct database interactions for file records go through this class.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def insert(self, record: FileRecord) -> int:
        """
        Persist a new record and return its assigned id.

        upload_date is always set here; any value on the incoming record is
        overwritten.
        """
        record.upload_date = datetime.now(timezone.utc)
        with Session(self.engine, expire_on_commit=False) as session:
            session.add(record)
            session.commit()
            session.refresh(record)
        return record.id

    def find_by_id(self, record_id: int) -> FileRecord | None:
        """
        Finds a single record by its primary key.

        Returns:
            The FileRecord instance or None if not found.
        """
        with Session(self.engine, expire_on_commit=False) as session:
            return session.get(FileRecord, record_id)

    def find_all_ordered_by_upload_date_desc(self) -> list[FileRecord]:
        """Most recent upload first. Ties fall back to the newest id."""
        with Session(self.engine, expire_on_commit=False) as session:
            return list(
                session.exec(
                    select(FileRecord).order_by(
                        col(FileRecord.upload_date).desc(),
                        col(FileRecord.id).desc(),
                    )
                ).all()
            )

    def delete_by_id(self, record_id: int) -> None:
        with Session(self.engine) as session:
            record = session.get(FileRecord, record_id)
            if record is None:
                return
            session.delete(record)
            session.commit()

    def delete(self, record: FileRecord) -> None:
        """
        Deletes a FileRecord from the database.
        """
        self.delete_by_id(record.id)
